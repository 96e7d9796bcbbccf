"""CPU package for the CHIP-8 interpreter."""

from .core import Chip8CPU, CPUError, CPUState, IllegalOpcodeError, StackUnderflowError
from .quirks import PRESETS, Quirks
from .timers import Timers
from . import opcodes

__all__ = [
    "Chip8CPU",
    "CPUState",
    "CPUError",
    "IllegalOpcodeError",
    "StackUnderflowError",
    "Quirks",
    "PRESETS",
    "Timers",
    "opcodes",
]
