"""Tests for the sprite drawing instruction."""

from __future__ import annotations

import pytest

from pychip8.cpu import Quirks
from pychip8.system import Machine, MachineConfig, create_machine
from pychip8.video import FONT_START


class FakeClock:
    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def make_machine(*words: int, display_wait: bool = False, clock: FakeClock | None = None) -> Machine:
    config = MachineConfig(quirks=Quirks(display_wait=display_wait))
    if clock is not None:
        config.clock = clock
    machine = create_machine(config)
    machine.load_program(b"".join(word.to_bytes(2, "big") for word in words))
    return machine


def test_clear_then_draw_shows_sprite_only() -> None:
    machine = make_machine(0xA000 | FONT_START, 0x6000, 0x6100, 0xD015, 0x00E0, 0xD015)
    machine.run_cycles(4)
    assert machine.framebuffer.lit_count() > 0

    machine.run_cycles(2)

    fb = machine.framebuffer
    assert machine.cpu.state.v[0xF] == 0
    # Glyph "0": F0 90 90 90 F0
    assert [fb.pixel(x, 0) for x in range(5)] == [True, True, True, True, False]
    assert [fb.pixel(x, 1) for x in range(5)] == [True, False, False, True, False]
    assert fb.lit_count() == 4 + 2 + 2 + 2 + 4


def test_drawing_twice_erases_and_reports_collision() -> None:
    machine = make_machine(0xA000 | FONT_START, 0x6008, 0x6104, 0xD015, 0xD015)
    machine.run_cycles(4)
    assert machine.cpu.state.v[0xF] == 0
    assert not machine.framebuffer.is_blank()

    machine.cycle()

    assert machine.framebuffer.is_blank()
    assert machine.cpu.state.v[0xF] == 1


def test_sprite_is_clipped_at_right_and_bottom_edges() -> None:
    machine = make_machine(0x603E, 0x611E, 0xA300, 0xD014)
    machine.memory.store_block(0x300, b"\xFF\xFF\xFF\xFF")
    machine.run_cycles(4)

    fb = machine.framebuffer
    assert fb.lit_count() == 4
    for x, y in ((62, 30), (63, 30), (62, 31), (63, 31)):
        assert fb.pixel(x, y)
    assert not fb.pixel(0, 30)
    assert not fb.pixel(62, 0)


def test_sprite_origin_wraps_once() -> None:
    machine = make_machine(0x6045, 0x6122, 0xA300, 0xD011)
    machine.memory.store8(0x300, 0x80)
    machine.run_cycles(4)

    assert machine.framebuffer.pixel(5, 2)
    assert machine.framebuffer.lit_count() == 1


def test_sprite_rows_read_with_wrapped_addresses() -> None:
    machine = make_machine(0xAFFF, 0x6000, 0x6100, 0xD012)
    machine.memory.store8(0xFFF, 0x80)
    machine.memory.store8(0x000, 0x40)
    machine.run_cycles(4)

    assert machine.framebuffer.pixel(0, 0)
    assert machine.framebuffer.pixel(1, 1)


def test_display_wait_retries_until_next_frame() -> None:
    clock = FakeClock()
    machine = make_machine(0xA000 | FONT_START, 0xD001, 0xD001, display_wait=True, clock=clock)
    machine.run_cycles(2)
    assert machine.framebuffer.lit_count() == 4
    before = machine.framebuffer.snapshot()

    clock.now = 0.005
    machine.cycle()
    assert machine.cpu.state.pc == 0x204
    assert machine.framebuffer.snapshot() == before
    assert machine.cpu.state.v[0xF] == 0

    clock.now = 0.02
    machine.cycle()
    assert machine.cpu.state.pc == 0x206
    assert machine.framebuffer.is_blank()
    assert machine.cpu.state.v[0xF] == 1


def test_without_display_wait_back_to_back_draws_run() -> None:
    clock = FakeClock()
    machine = make_machine(0xA000 | FONT_START, 0xD001, 0xD001, clock=clock)
    machine.run_cycles(3)

    assert machine.cpu.state.pc == 0x206
    assert machine.framebuffer.is_blank()


@pytest.mark.parametrize("frame_seconds", [1.0 / 60.0, 0.016, 0.0162])
def test_display_wait_allows_one_draw_per_host_frame(frame_seconds: float) -> None:
    clock = FakeClock()
    # A050 D015 1202: draw glyph "0" in a tight loop.
    machine = make_machine(0xA000 | FONT_START, 0xD015, 0x1202, display_wait=True, clock=clock)
    machine.cycle()

    frames = 30
    draws = 0
    for frame in range(frames):
        clock.now = frame * frame_seconds
        before = machine.framebuffer.revision
        machine.run_cycles(11)
        draws += machine.framebuffer.revision - before

    assert draws == frames
