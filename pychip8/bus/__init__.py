"""Bus-related helpers for the CHIP-8 interpreter."""

from .memory import (
    MAX_PROGRAM_SIZE,
    MEMORY_SIZE,
    PROGRAM_START,
    Memory,
    MemoryAccessError,
    ProgramTooLargeError,
)

__all__ = [
    "Memory",
    "MemoryAccessError",
    "ProgramTooLargeError",
    "MEMORY_SIZE",
    "PROGRAM_START",
    "MAX_PROGRAM_SIZE",
]
