"""CHIP-8 fetch/decode/execute engine."""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from typing import Callable, List, Sequence

from pychip8.bus import PROGRAM_START, Memory
from pychip8.io import Keypad
from pychip8.utils import TraceRecorder, debug_enabled, debug_log
from pychip8.video import Framebuffer, glyph_address

from .opcodes import OPCODE_TABLE, Instruction, lookup
from .quirks import Quirks
from .timers import Timers


class CPUError(Exception):
    """Base error for CPU-related failures."""


class IllegalOpcodeError(CPUError):
    """Raised when the CPU fetches an opcode it cannot decode."""

    def __init__(self, opcode: int, address: int) -> None:
        super().__init__(f"illegal opcode {opcode:#06x} at {address:#05x}")
        self.opcode = opcode
        self.address = address


class StackUnderflowError(CPUError):
    """Raised when ``00EE`` executes with an empty call stack."""

    def __init__(self, address: int) -> None:
        super().__init__(f"return with empty stack at {address:#05x}")
        self.address = address


FLAG = 0xF
DISPLAY_INTERVAL = 1.0 / 60.0
# Host frame pacing sleeps in whole milliseconds, so a frame can end slightly
# short of DISPLAY_INTERVAL.
DISPLAY_TOLERANCE = 0.001


@dataclass
class CPUState:
    """Snapshot of the CHIP-8 register file."""

    v: bytearray = field(default_factory=lambda: bytearray(16))
    i: int = 0x0000
    pc: int = PROGRAM_START
    stack: List[int] = field(default_factory=list)

    def clone(self) -> "CPUState":
        return CPUState(bytearray(self.v), self.i, self.pc, list(self.stack))


@dataclass
class Chip8CPU:
    """Interpreter core: one call to :meth:`cycle` runs one instruction."""

    memory: Memory
    framebuffer: Framebuffer
    keypad: Keypad
    timers: Timers = field(default_factory=Timers)
    quirks: Quirks = field(default_factory=Quirks)
    rng: random.Random = field(default_factory=random.Random)
    clock: Callable[[], float] = time.perf_counter
    instruction_table: Sequence[Sequence[Instruction]] = field(default=OPCODE_TABLE)
    trace: TraceRecorder | None = None

    state: CPUState = field(default_factory=CPUState)
    cycle_count: int = 0
    last_draw_time: float | None = None
    _retried: bool = field(default=False, init=False, repr=False)

    def reset(self) -> None:
        """Clear registers, stack and the display-wait clock."""

        self.state = CPUState()
        self.cycle_count = 0
        self.last_draw_time = None
        self._retried = False

    def cycle(self) -> Instruction:
        """Fetch, decode and execute a single instruction.

        Raises :class:`IllegalOpcodeError` or :class:`StackUnderflowError` on
        fatal conditions. Instructions that have to wait (display-wait and
        ``Fx0A``) rewind the program counter so the next call retries them.
        """

        pc_before = self.state.pc
        opcode = self.memory.load16(pc_before)
        self.state.pc = (pc_before + 2) & 0xFFFF
        if debug_enabled("cpu"):
            debug_log("cpu", "pc=%04x opcode=%04x", pc_before, opcode)

        instruction = self._decode(opcode, pc_before)
        handler = getattr(self, instruction.handler, None)
        if handler is None:
            raise CPUError(f"handler '{instruction.handler}' not implemented")

        self._retried = False
        handler(opcode)
        self.cycle_count += 1

        if self.trace is not None:
            note = "retry" if self._retried else ""
            self.trace.record_step(
                self.state,
                opcode,
                delay_timer=self.timers.delay,
                sound_timer=self.timers.sound,
                mnemonic=instruction.mnemonic,
                note=note,
            )
        return instruction

    # ------------------------------------------------------------------
    # Flow control

    def op_cls(self, _: int) -> None:
        self.framebuffer.clear()

    def op_ret(self, _: int) -> None:
        if not self.state.stack:
            raise StackUnderflowError((self.state.pc - 2) & 0xFFFF)
        self.state.pc = self.state.stack.pop()

    def op_jp(self, opcode: int) -> None:
        self.state.pc = opcode & 0x0FFF

    def op_call(self, opcode: int) -> None:
        self.state.stack.append(self.state.pc)
        self.state.pc = opcode & 0x0FFF

    def op_jp_offset(self, opcode: int) -> None:
        nnn = opcode & 0x0FFF
        if self.quirks.bnnn:
            offset = self.state.v[0]
        else:
            offset = self.state.v[_x(opcode)]
        self.state.pc = (nnn + offset) & 0xFFFF

    def op_se_immediate(self, opcode: int) -> None:
        if self.state.v[_x(opcode)] == opcode & 0xFF:
            self._skip()

    def op_sne_immediate(self, opcode: int) -> None:
        if self.state.v[_x(opcode)] != opcode & 0xFF:
            self._skip()

    def op_se_register(self, opcode: int) -> None:
        if self.state.v[_x(opcode)] == self.state.v[_y(opcode)]:
            self._skip()

    def op_sne_register(self, opcode: int) -> None:
        if self.state.v[_x(opcode)] != self.state.v[_y(opcode)]:
            self._skip()

    # ------------------------------------------------------------------
    # Register loads and arithmetic

    def op_ld_immediate(self, opcode: int) -> None:
        self.state.v[_x(opcode)] = opcode & 0xFF

    def op_add_immediate(self, opcode: int) -> None:
        x = _x(opcode)
        self.state.v[x] = (self.state.v[x] + (opcode & 0xFF)) & 0xFF

    def op_ld_register(self, opcode: int) -> None:
        self.state.v[_x(opcode)] = self.state.v[_y(opcode)]

    def op_or(self, opcode: int) -> None:
        v = self.state.v
        v[_x(opcode)] |= v[_y(opcode)]
        self._logic_flag_reset()

    def op_and(self, opcode: int) -> None:
        v = self.state.v
        v[_x(opcode)] &= v[_y(opcode)]
        self._logic_flag_reset()

    def op_xor(self, opcode: int) -> None:
        v = self.state.v
        v[_x(opcode)] ^= v[_y(opcode)]
        self._logic_flag_reset()

    def op_add_register(self, opcode: int) -> None:
        v = self.state.v
        x = _x(opcode)
        total = v[x] + v[_y(opcode)]
        v[x] = total & 0xFF
        v[FLAG] = 1 if total > 0xFF else 0

    def op_sub(self, opcode: int) -> None:
        v = self.state.v
        x = _x(opcode)
        minuend, subtrahend = v[x], v[_y(opcode)]
        v[x] = (minuend - subtrahend) & 0xFF
        v[FLAG] = 1 if minuend >= subtrahend else 0

    def op_subn(self, opcode: int) -> None:
        v = self.state.v
        x = _x(opcode)
        minuend, subtrahend = v[_y(opcode)], v[x]
        v[x] = (minuend - subtrahend) & 0xFF
        v[FLAG] = 1 if minuend >= subtrahend else 0

    def op_shr(self, opcode: int) -> None:
        v = self.state.v
        source = self._shift_source(opcode)
        v[_x(opcode)] = source >> 1
        v[FLAG] = source & 0x01

    def op_shl(self, opcode: int) -> None:
        v = self.state.v
        source = self._shift_source(opcode)
        v[_x(opcode)] = (source << 1) & 0xFF
        v[FLAG] = (source >> 7) & 0x01

    def op_rnd(self, opcode: int) -> None:
        self.state.v[_x(opcode)] = self.rng.randint(0, 0xFF) & opcode & 0xFF

    # ------------------------------------------------------------------
    # Index register and memory

    def op_ld_index(self, opcode: int) -> None:
        self.state.i = opcode & 0x0FFF

    def op_add_index(self, opcode: int) -> None:
        self.state.i = (self.state.i + self.state.v[_x(opcode)]) & 0xFFFF

    def op_ld_glyph(self, opcode: int) -> None:
        self.state.i = glyph_address(self.state.v[_x(opcode)])

    def op_bcd(self, opcode: int) -> None:
        value = self.state.v[_x(opcode)]
        self.memory.store_block(self.state.i, (value // 100, (value // 10) % 10, value % 10))

    def op_store_registers(self, opcode: int) -> None:
        x = _x(opcode)
        self.memory.store_block(self.state.i, self.state.v[: x + 1])
        self._advance_index(x)

    def op_load_registers(self, opcode: int) -> None:
        x = _x(opcode)
        self.state.v[: x + 1] = self.memory.load_block(self.state.i, x + 1)
        self._advance_index(x)

    # ------------------------------------------------------------------
    # Display

    def op_drw(self, opcode: int) -> None:
        now = self.clock()
        if (
            self.quirks.display_wait
            and self.last_draw_time is not None
            and now - self.last_draw_time < DISPLAY_INTERVAL - DISPLAY_TOLERANCE
        ):
            self._retry()
            return

        v = self.state.v
        rows = self.memory.load_block(self.state.i, opcode & 0x000F)
        collision = self.framebuffer.draw_sprite(v[_x(opcode)], v[_y(opcode)], rows)
        v[FLAG] = 1 if collision else 0
        self.last_draw_time = now

    # ------------------------------------------------------------------
    # Keypad and timers

    def op_skp(self, opcode: int) -> None:
        if self.keypad.is_pressed(self.state.v[_x(opcode)]):
            self._skip()

    def op_sknp(self, opcode: int) -> None:
        if not self.keypad.is_pressed(self.state.v[_x(opcode)]):
            self._skip()

    def op_wait_key(self, opcode: int) -> None:
        key = self.keypad.begin_wait()
        if key is None:
            self._retry()
            return
        self.state.v[_x(opcode)] = key

    def op_ld_from_delay(self, opcode: int) -> None:
        self.state.v[_x(opcode)] = self.timers.delay

    def op_ld_delay(self, opcode: int) -> None:
        self.timers.delay = self.state.v[_x(opcode)]

    def op_ld_sound(self, opcode: int) -> None:
        self.timers.sound = self.state.v[_x(opcode)]

    # ------------------------------------------------------------------
    # Helpers

    def _decode(self, opcode: int, address: int) -> Instruction:
        instruction = lookup(self.instruction_table, opcode)
        if instruction is None:
            raise IllegalOpcodeError(opcode, address)
        return instruction

    def _skip(self) -> None:
        self.state.pc = (self.state.pc + 2) & 0xFFFF

    def _retry(self) -> None:
        self.state.pc = (self.state.pc - 2) & 0xFFFF
        self._retried = True

    def _logic_flag_reset(self) -> None:
        if self.quirks.vf_reset:
            self.state.v[FLAG] = 0

    def _shift_source(self, opcode: int) -> int:
        if self.quirks.shift_use_vy:
            return self.state.v[_y(opcode)]
        return self.state.v[_x(opcode)]

    def _advance_index(self, x: int) -> None:
        if self.quirks.store_load_increments_i:
            self.state.i = (self.state.i + x + 1) & 0xFFFF


def _x(opcode: int) -> int:
    return (opcode >> 8) & 0x0F


def _y(opcode: int) -> int:
    return (opcode >> 4) & 0x0F
