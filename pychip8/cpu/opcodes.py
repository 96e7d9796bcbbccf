"""Opcode metadata for the CHIP-8 instruction set."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Iterable, List, Sequence


@dataclass(frozen=True)
class Instruction:
    """Metadata describing one CHIP-8 instruction form.

    An opcode matches when ``opcode & mask == pattern``. ``handler`` names the
    ``Chip8CPU`` method that executes it.
    """

    mask: int
    pattern: int
    mnemonic: str
    handler: str

    def __post_init__(self) -> None:
        if not 0 <= self.mask <= 0xFFFF or not 0 <= self.pattern <= 0xFFFF:
            raise ValueError(f"mask/pattern out of range: {self.mask:#x}/{self.pattern:#x}")
        if self.pattern & ~self.mask:
            raise ValueError(f"pattern {self.pattern:#06x} has bits outside mask {self.mask:#06x}")
        if self.mask & 0xF000 != 0xF000:
            raise ValueError("mask must cover the instruction family nibble")

    @property
    def family(self) -> int:
        return self.pattern >> 12

    def matches(self, opcode: int) -> bool:
        return opcode & self.mask == self.pattern


class OpcodeTable:
    """Mutable builder for the family-indexed instruction table."""

    _FAMILY_COUNT: Final[int] = 0x10

    def __init__(self) -> None:
        self._families: List[List[Instruction]] = [[] for _ in range(self._FAMILY_COUNT)]

    def register(self, instruction: Instruction) -> None:
        bucket = self._families[instruction.family]
        for existing in bucket:
            if existing.mask == instruction.mask and existing.pattern == instruction.pattern:
                raise ValueError(
                    f"pattern {instruction.pattern:#06x} already registered as {existing.mnemonic}")
        bucket.append(instruction)

    def register_all(self, instructions: Iterable[Instruction]) -> None:
        for instruction in instructions:
            self.register(instruction)

    def freeze(self) -> Sequence[Sequence[Instruction]]:
        return tuple(tuple(bucket) for bucket in self._families)


def build_instruction_table(instructions: Iterable[Instruction]) -> Sequence[Sequence[Instruction]]:
    """Group instructions by their top nibble for decoding."""

    table = OpcodeTable()
    table.register_all(instructions)
    return table.freeze()


def lookup(table: Sequence[Sequence[Instruction]], opcode: int) -> Instruction | None:
    for instruction in table[(opcode >> 12) & 0xF]:
        if instruction.matches(opcode):
            return instruction
    return None


DEFAULT_INSTRUCTIONS: Sequence[Instruction] = (
    Instruction(0xFFFF, 0x00E0, "CLS", "op_cls"),
    Instruction(0xFFFF, 0x00EE, "RET", "op_ret"),
    Instruction(0xF000, 0x1000, "JP", "op_jp"),
    Instruction(0xF000, 0x2000, "CALL", "op_call"),
    Instruction(0xF000, 0x3000, "SE", "op_se_immediate"),
    Instruction(0xF000, 0x4000, "SNE", "op_sne_immediate"),
    Instruction(0xF00F, 0x5000, "SE", "op_se_register"),
    Instruction(0xF000, 0x6000, "LD", "op_ld_immediate"),
    Instruction(0xF000, 0x7000, "ADD", "op_add_immediate"),
    # ALU
    Instruction(0xF00F, 0x8000, "LD", "op_ld_register"),
    Instruction(0xF00F, 0x8001, "OR", "op_or"),
    Instruction(0xF00F, 0x8002, "AND", "op_and"),
    Instruction(0xF00F, 0x8003, "XOR", "op_xor"),
    Instruction(0xF00F, 0x8004, "ADD", "op_add_register"),
    Instruction(0xF00F, 0x8005, "SUB", "op_sub"),
    Instruction(0xF00F, 0x8006, "SHR", "op_shr"),
    Instruction(0xF00F, 0x8007, "SUBN", "op_subn"),
    Instruction(0xF00F, 0x800E, "SHL", "op_shl"),
    Instruction(0xF00F, 0x9000, "SNE", "op_sne_register"),
    Instruction(0xF000, 0xA000, "LD", "op_ld_index"),
    Instruction(0xF000, 0xB000, "JP", "op_jp_offset"),
    Instruction(0xF000, 0xC000, "RND", "op_rnd"),
    Instruction(0xF000, 0xD000, "DRW", "op_drw"),
    # Keypad
    Instruction(0xF0FF, 0xE09E, "SKP", "op_skp"),
    Instruction(0xF0FF, 0xE0A1, "SKNP", "op_sknp"),
    # Timers, index and register block transfers
    Instruction(0xF0FF, 0xF007, "LD", "op_ld_from_delay"),
    Instruction(0xF0FF, 0xF00A, "LD", "op_wait_key"),
    Instruction(0xF0FF, 0xF015, "LD", "op_ld_delay"),
    Instruction(0xF0FF, 0xF018, "LD", "op_ld_sound"),
    Instruction(0xF0FF, 0xF01E, "ADD", "op_add_index"),
    Instruction(0xF0FF, 0xF029, "LD", "op_ld_glyph"),
    Instruction(0xF0FF, 0xF033, "LD", "op_bcd"),
    Instruction(0xF0FF, 0xF055, "LD", "op_store_registers"),
    Instruction(0xF0FF, 0xF065, "LD", "op_load_registers"),
)


OPCODE_TABLE: Sequence[Sequence[Instruction]] = build_instruction_table(DEFAULT_INSTRUCTIONS)
