"""Tests for the opcode decode table."""

from __future__ import annotations

import pytest

from pychip8.cpu import Chip8CPU
from pychip8.cpu.opcodes import DEFAULT_INSTRUCTIONS, OPCODE_TABLE, Instruction, build_instruction_table, lookup


@pytest.mark.parametrize(
    ("opcode", "handler"),
    [
        (0x00E0, "op_cls"),
        (0x00EE, "op_ret"),
        (0x1ABC, "op_jp"),
        (0x8AB6, "op_shr"),
        (0x8ABE, "op_shl"),
        (0xD123, "op_drw"),
        (0xE5A1, "op_sknp"),
        (0xF30A, "op_wait_key"),
        (0xFF65, "op_load_registers"),
    ],
)
def test_lookup_finds_handler(opcode: int, handler: str) -> None:
    instruction = lookup(OPCODE_TABLE, opcode)

    assert instruction is not None
    assert instruction.handler == handler


def test_every_handler_exists_on_cpu() -> None:
    for instruction in DEFAULT_INSTRUCTIONS:
        assert callable(getattr(Chip8CPU, instruction.handler, None)), instruction.handler


def test_duplicate_registration_rejected() -> None:
    duplicate = Instruction(0xF000, 0x1000, "JP", "op_jp")

    with pytest.raises(ValueError, match="already registered"):
        build_instruction_table([duplicate, duplicate])


@pytest.mark.parametrize(
    ("mask", "pattern"),
    [
        (0xF000, 0x1001),
        (0x0FFF, 0x0001),
        (0x1FFFF, 0x1000),
    ],
)
def test_invalid_instruction_metadata(mask: int, pattern: int) -> None:
    with pytest.raises(ValueError):
        Instruction(mask, pattern, "BAD", "op_bad")
