"""Built-in 4x5 hexadecimal font."""

from __future__ import annotations

from typing import Sequence

from pychip8.bus import Memory

FONT_START = 0x050
FONT_WIDTH = 4
FONT_HEIGHT = 5
GLYPH_BYTES = FONT_HEIGHT

# One row per byte, only the high nibble is drawn.
FONT_GLYPHS: Sequence[bytes] = (
    bytes((0xF0, 0x90, 0x90, 0x90, 0xF0)),  # 0
    bytes((0x20, 0x60, 0x20, 0x20, 0x70)),  # 1
    bytes((0xF0, 0x10, 0xF0, 0x80, 0xF0)),  # 2
    bytes((0xF0, 0x10, 0xF0, 0x10, 0xF0)),  # 3
    bytes((0x90, 0x90, 0xF0, 0x10, 0x10)),  # 4
    bytes((0xF0, 0x80, 0xF0, 0x10, 0xF0)),  # 5
    bytes((0xF0, 0x80, 0xF0, 0x90, 0xF0)),  # 6
    bytes((0xF0, 0x10, 0x20, 0x40, 0x40)),  # 7
    bytes((0xF0, 0x90, 0xF0, 0x90, 0xF0)),  # 8
    bytes((0xF0, 0x90, 0xF0, 0x10, 0xF0)),  # 9
    bytes((0xF0, 0x90, 0xF0, 0x90, 0x90)),  # A
    bytes((0xE0, 0x90, 0xE0, 0x90, 0xE0)),  # B
    bytes((0xF0, 0x80, 0x80, 0x80, 0xF0)),  # C
    bytes((0xE0, 0x90, 0x90, 0x90, 0xE0)),  # D
    bytes((0xF0, 0x80, 0xF0, 0x80, 0xF0)),  # E
    bytes((0xF0, 0x80, 0xF0, 0x80, 0x80)),  # F
)

FONT_DATA = b"".join(FONT_GLYPHS)


def glyph_address(digit: int) -> int:
    """Return the memory address of the glyph for hexadecimal ``digit``."""

    return FONT_START + (digit & 0x0F) * GLYPH_BYTES


def store_font(memory: Memory) -> None:
    memory.store_block(FONT_START, FONT_DATA)
