"""Tests for the raw ROM loader."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from pychip8.bus import MAX_PROGRAM_SIZE, PROGRAM_START
from pychip8.loader import RomFormatError, load_rom, load_rom_from_path
from pychip8.system import create_machine


def test_load_rom_from_stream() -> None:
    machine = create_machine()

    image = load_rom(io.BytesIO(b"\x00\xE0\x12\x00"), machine, name="clear")

    assert image.size == 4
    assert image.name == "clear"
    assert machine.memory.load_block(PROGRAM_START, 4) == b"\x00\xE0\x12\x00"


def test_load_rom_from_path(tmp_path: Path) -> None:
    rom = tmp_path / "jump.ch8"
    rom.write_bytes(b"\x12\x00")
    machine = create_machine()

    image = load_rom_from_path(rom, machine)

    assert image.name == "jump.ch8"
    assert machine.memory.load16(PROGRAM_START) == 0x1200


def test_empty_rom_is_rejected() -> None:
    with pytest.raises(RomFormatError):
        load_rom(io.BytesIO(b""), create_machine())


def test_oversized_rom_is_rejected() -> None:
    machine = create_machine()
    before = machine.memory.snapshot()

    with pytest.raises(RomFormatError):
        load_rom(io.BytesIO(b"\x01" * (MAX_PROGRAM_SIZE + 10)), machine)

    assert machine.memory.snapshot() == before


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_rom_from_path(tmp_path / "missing.ch8", create_machine())
