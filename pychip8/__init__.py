"""Python CHIP-8 interpreter.

The package hosts the CPU, memory, video, audio, input and UI layers used by
``run.py``. The interpreter core (``bus``, ``cpu``, ``video.framebuffer``,
``io.keypad``) has no dependency on pygame; only ``audio`` and ``ui`` touch it.
"""

from __future__ import annotations

from . import audio, bus, cpu, io, loader, system, ui, utils, video

__all__: list[str] = [
    "cpu",
    "bus",
    "video",
    "audio",
    "io",
    "system",
    "loader",
    "ui",
    "utils",
]
