"""Raw CHIP-8 ROM loader."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from pychip8.bus import MAX_PROGRAM_SIZE, ProgramTooLargeError
from pychip8.system import Machine


class RomFormatError(RuntimeError):
    """Raised when a ROM image cannot be loaded."""


@dataclass
class RomImage:
    """Metadata for a ROM copied into memory."""

    name: str
    size: int


def load_rom(stream: BinaryIO, machine: Machine, *, name: str = "") -> RomImage:
    """Read a raw ROM from ``stream`` and copy it into ``machine``."""

    # One byte past the limit is enough to detect an oversize image.
    data = stream.read(MAX_PROGRAM_SIZE + 1)
    if not data:
        raise RomFormatError(f"ROM {name or '<stream>'} is empty")
    try:
        machine.load_program(data)
    except ProgramTooLargeError as exc:
        raise RomFormatError(f"ROM {name or '<stream>'} does not fit in memory: {exc}") from exc
    return RomImage(name=name, size=len(data))


def load_rom_from_path(path: Path, machine: Machine) -> RomImage:
    """Load a ROM image from the filesystem."""

    with path.open("rb") as handle:
        return load_rom(handle, machine, name=path.name)
