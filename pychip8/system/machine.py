"""CHIP-8 machine assembly and host-facing API."""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from pychip8.bus import Memory
from pychip8.cpu import Chip8CPU, Quirks, Timers
from pychip8.cpu.opcodes import Instruction
from pychip8.io import Keypad
from pychip8.utils import TraceRecorder
from pychip8.video import Framebuffer, store_font


@dataclass
class MachineConfig:
    """Runtime configuration for the CHIP-8 machine."""

    quirks: Quirks = field(default_factory=Quirks)
    seed: Optional[int] = None
    clock: Callable[[], float] = time.perf_counter
    trace: TraceRecorder | None = None


@dataclass
class Machine:
    """Aggregates the core components and exposes the host operations."""

    memory: Memory
    cpu: Chip8CPU
    framebuffer: Framebuffer
    keypad: Keypad
    timers: Timers

    def load_program(self, data: bytes) -> None:
        """Copy a raw ROM image to 0x200 without touching any other state."""

        self.memory.load_program(bytes(data))

    def cycle(self) -> Instruction:
        return self.cpu.cycle()

    def run_cycles(self, count: int) -> int:
        """Run ``count`` instructions and return how many were executed."""

        for _ in range(count):
            self.cpu.cycle()
        return max(count, 0)

    def decrease_timers(self) -> None:
        self.timers.decrease()

    def press_key(self, key: int) -> None:
        self.keypad.press(key)

    def release_key(self, key: int) -> None:
        self.keypad.release(key)

    def reset(self) -> None:
        """Return every component to its power-on state."""

        self.memory.clear()
        store_font(self.memory)
        self.framebuffer.clear()
        self.keypad.reset()
        self.timers.reset()
        self.cpu.reset()

    @property
    def delay_timer(self) -> int:
        return self.timers.delay

    @property
    def sound_timer(self) -> int:
        return self.timers.sound

    @property
    def sound_active(self) -> bool:
        return self.timers.sound_active


def create_machine(config: MachineConfig | None = None) -> Machine:
    """Instantiate a CHIP-8 machine with the requested configuration."""

    config = config or MachineConfig()

    memory = Memory()
    store_font(memory)

    framebuffer = Framebuffer()
    keypad = Keypad()
    timers = Timers()

    cpu = Chip8CPU(
        memory,
        framebuffer,
        keypad,
        timers=timers,
        quirks=config.quirks,
        rng=random.Random(config.seed),
        clock=config.clock,
        trace=config.trace,
    )

    return Machine(
        memory=memory,
        cpu=cpu,
        framebuffer=framebuffer,
        keypad=keypad,
        timers=timers,
    )
