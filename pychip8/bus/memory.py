"""Memory model for the CHIP-8 interpreter.

The CHIP-8 sees a flat 4 KiB address space. The low 512 bytes historically
held the interpreter itself; here they only carry the built-in font, and
programs are copied in at ``PROGRAM_START``.
"""

from __future__ import annotations

from typing import Iterable

MEMORY_SIZE = 0x1000
PROGRAM_START = 0x200
MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START


def _mask12(value: int) -> int:
    """Clamp ``value`` to the 12-bit address space of the CHIP-8."""

    return value & 0x0FFF


class MemoryAccessError(Exception):
    """Raised when memory is used incorrectly."""


class ProgramTooLargeError(MemoryAccessError):
    """Raised when a program does not fit between ``PROGRAM_START`` and the end of memory."""


class Memory:
    """Byte-addressable 4 KiB RAM."""

    def __init__(self, size: int = MEMORY_SIZE) -> None:
        if size != MEMORY_SIZE:
            raise MemoryAccessError(f"CHIP-8 memory must be {MEMORY_SIZE:#06x} bytes, got {size:#06x}")
        self._data = bytearray(size)

    def __len__(self) -> int:
        return len(self._data)

    def load8(self, address: int) -> int:
        return self._data[_mask12(address)]

    def store8(self, address: int, value: int) -> None:
        self._data[_mask12(address)] = value & 0xFF

    def load16(self, address: int) -> int:
        high = self.load8(address)
        low = self.load8(address + 1)
        return (high << 8) | low

    def load_block(self, address: int, length: int) -> bytes:
        """Read ``length`` bytes starting at ``address``, wrapping at the top of memory."""

        return bytes(self.load8(address + offset) for offset in range(length))

    def store_block(self, address: int, values: Iterable[int]) -> None:
        for offset, value in enumerate(values):
            self.store8(address + offset, value)

    def load_program(self, data: bytes) -> None:
        """Copy raw program bytes to ``PROGRAM_START``.

        Nothing is written when the program is larger than the space left
        above ``PROGRAM_START``.
        """

        if len(data) > MAX_PROGRAM_SIZE:
            raise ProgramTooLargeError(
                f"program is {len(data)} bytes; at most {MAX_PROGRAM_SIZE} bytes fit at {PROGRAM_START:#05x}"
            )
        self._data[PROGRAM_START : PROGRAM_START + len(data)] = data

    def clear(self) -> None:
        self._data[:] = bytes(len(self._data))

    def snapshot(self) -> bytes:
        return bytes(self._data)
