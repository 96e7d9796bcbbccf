"""Video helpers for the CHIP-8 interpreter."""

from __future__ import annotations

from .font import FONT_GLYPHS, FONT_HEIGHT, FONT_START, FONT_WIDTH, GLYPH_BYTES, glyph_address, store_font
from .framebuffer import SCREEN_HEIGHT, SCREEN_WIDTH, Framebuffer
from .palette import MONOCHROME, PALETTES, PHOSPHOR, validate_palette
from .renderer import RenderResult, Renderer

__all__ = [
    "Framebuffer",
    "Renderer",
    "RenderResult",
    "MONOCHROME",
    "PHOSPHOR",
    "PALETTES",
    "validate_palette",
    "FONT_GLYPHS",
    "FONT_START",
    "FONT_WIDTH",
    "FONT_HEIGHT",
    "GLYPH_BYTES",
    "glyph_address",
    "store_font",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
]
