"""Monochrome 64x32 framebuffer."""

from __future__ import annotations

from typing import Iterable, Sequence

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32


class Framebuffer:
    """Grid of on/off pixels mutated by the sprite instructions.

    Pixels are stored row-major in a ``bytearray`` holding 0 or 1 per cell.
    The host should treat the buffer as read-only and use :meth:`snapshot`
    or :meth:`rows` for presentation.
    """

    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("framebuffer dimensions must be positive")
        self.width = width
        self.height = height
        self._pixels = bytearray(width * height)
        self._revision = 0

    def clear(self) -> None:
        self._pixels[:] = bytes(len(self._pixels))
        self._revision += 1

    def pixel(self, x: int, y: int) -> bool:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} framebuffer")
        return bool(self._pixels[y * self.width + x])

    def draw_sprite(self, x: int, y: int, rows: Iterable[int]) -> bool:
        """XOR an 8-pixel-wide sprite onto the screen.

        The origin wraps around the screen once; pixels that then fall past
        the right or bottom edge are clipped rather than wrapped. Returns
        ``True`` when any set pixel was turned off.
        """

        origin_x = x % self.width
        origin_y = y % self.height
        collision = False
        for row_offset, row in enumerate(rows):
            py = origin_y + row_offset
            if py >= self.height:
                break
            base = py * self.width
            for bit in range(8):
                if not (row >> (7 - bit)) & 1:
                    continue
                px = origin_x + bit
                if px >= self.width:
                    break
                index = base + px
                if self._pixels[index]:
                    collision = True
                self._pixels[index] ^= 1
        self._revision += 1
        return collision

    def rows(self) -> Sequence[tuple[bool, ...]]:
        width = self.width
        return [
            tuple(bool(value) for value in self._pixels[row * width : (row + 1) * width])
            for row in range(self.height)
        ]

    def snapshot(self) -> tuple[tuple[bool, ...], ...]:
        return tuple(self.rows())

    def lit_count(self) -> int:
        return sum(self._pixels)

    def is_blank(self) -> bool:
        return not any(self._pixels)

    def to_text(self, on: str = "#", off: str = ".") -> str:
        """Render the screen as text, one line per row."""

        return "\n".join("".join(on if cell else off for cell in row) for row in self.rows())

    @property
    def revision(self) -> int:
        return self._revision
