"""Tests for the CHIP-8 memory model."""

from __future__ import annotations

import pytest

from pychip8.bus import MAX_PROGRAM_SIZE, PROGRAM_START, Memory, MemoryAccessError, ProgramTooLargeError


def test_addresses_are_masked_to_twelve_bits() -> None:
    memory = Memory()
    memory.store8(0x1234, 0x1AB)

    assert memory.load8(0x234) == 0xAB
    assert memory.load8(0xF234) == 0xAB


def test_load16_is_big_endian() -> None:
    memory = Memory()
    memory.store_block(0x300, b"\x12\x34")

    assert memory.load16(0x300) == 0x1234


def test_load_program_copies_at_program_start() -> None:
    memory = Memory()
    memory.load_program(b"\xA2\x2A\x60\x0C")

    assert memory.load_block(PROGRAM_START, 4) == b"\xA2\x2A\x60\x0C"
    assert memory.load8(PROGRAM_START - 1) == 0


def test_program_filling_memory_exactly_is_accepted() -> None:
    memory = Memory()
    data = bytes(range(256)) * (MAX_PROGRAM_SIZE // 256)

    memory.load_program(data)

    assert len(data) == MAX_PROGRAM_SIZE
    assert memory.load8(0xFFF) == data[-1]


def test_oversized_program_is_rejected_without_writing() -> None:
    memory = Memory()
    memory.store8(PROGRAM_START, 0x55)
    before = memory.snapshot()

    with pytest.raises(ProgramTooLargeError):
        memory.load_program(b"\x01" * (MAX_PROGRAM_SIZE + 1))

    assert memory.snapshot() == before


def test_wrong_size_is_rejected() -> None:
    with pytest.raises(MemoryAccessError):
        Memory(0x2000)


def test_clear_zeroes_memory() -> None:
    memory = Memory()
    memory.load_program(b"\xFF" * 16)
    memory.clear()

    assert not any(memory.snapshot())
