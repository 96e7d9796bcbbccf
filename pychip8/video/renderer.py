"""Convert framebuffer snapshots into scaled RGB images."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .palette import MONOCHROME, RGBColor, validate_palette


@dataclass
class RenderResult:
    """Packed RGB24 image produced by :class:`Renderer`."""

    width: int
    height: int
    pixels: bytes

    def get_pixel(self, x: int, y: int) -> RGBColor:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        offset = (y * self.width + x) * 3
        return (self.pixels[offset], self.pixels[offset + 1], self.pixels[offset + 2])

    def to_surface(self):
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to build a surface") from exc
        return pygame.image.frombuffer(self.pixels, (self.width, self.height), "RGB")


class Renderer:
    """Scale a boolean pixel grid into an RGB image."""

    def __init__(self, palette: Sequence[RGBColor] = MONOCHROME) -> None:
        self._background, self._foreground = validate_palette(palette)

    def render(self, rows: Sequence[Sequence[bool]], *, scale: int = 1) -> RenderResult:
        if scale <= 0:
            raise ValueError("scale must be positive")
        height = len(rows)
        width = len(rows[0]) if height else 0
        off = bytes(self._background) * scale
        on = bytes(self._foreground) * scale

        buffer = bytearray()
        for row in rows:
            line = b"".join(on if cell else off for cell in row)
            buffer.extend(line * scale)

        return RenderResult(width=width * scale, height=height * scale, pixels=bytes(buffer))
