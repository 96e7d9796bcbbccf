"""Pygame front end for the CHIP-8 interpreter."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

from pychip8.audio import ToneBeeper
from pychip8.cpu import CPUError, Quirks
from pychip8.io import map_host_key
from pychip8.loader import RomFormatError, load_rom_from_path
from pychip8.system import Machine, MachineConfig, create_machine
from pychip8.utils import TraceRecorder, debug_enabled, debug_log
from pychip8.video import MONOCHROME, SCREEN_HEIGHT, SCREEN_WIDTH, Renderer
from pychip8.video.palette import RGBColor


@dataclass
class AppConfig:
    """Configuration for the pygame front end."""

    rom_path: Optional[Path] = None
    scale: int = 10
    cpu_hz: int = 700
    quirks_preset: str = "default"
    fullscreen: bool = False
    palette: Sequence[RGBColor] = field(default=MONOCHROME)


class Chip8App:
    """Own the pygame window, the audio device and the host loop."""

    def __init__(self, config: AppConfig) -> None:
        self._config = config
        self._running = False
        self._machine: Machine | None = None
        self._beeper: ToneBeeper | None = None
        self._pygame = None
        self._perf_enabled = debug_enabled("perf")
        self._frame_counter = 0
        self._trace_recorder: TraceRecorder | None = None
        if debug_enabled("trace"):
            self._trace_recorder = TraceRecorder(512)

    @property
    def cycles_per_frame(self) -> int:
        return max(1, self._config.cpu_hz // _FRAME_RATE)

    def frame_time(self) -> float:
        """Emulated time in seconds, advancing exactly one frame per loop pass."""

        return self._frame_counter / _FRAME_RATE

    def run(self) -> None:
        if self._config.scale <= 0:
            raise RuntimeError("scale must be positive")
        if not self._config.rom_path:
            raise RuntimeError("ROM image is required")
        rom_path = self._config.rom_path
        if not rom_path.exists():
            raise RuntimeError(f"ROM file not found: {rom_path}")

        machine = self._create_machine(rom_path)
        self._machine = machine

        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to run the UI") from exc

        pygame.mixer.pre_init(44_100, -16, 1, 512)
        pygame.init()
        pygame.display.set_caption(f"CHIP-8 - {rom_path.name}")
        self._pygame = pygame
        self._initialise_audio(pygame)

        renderer = Renderer(self._config.palette)
        surface_size = (SCREEN_WIDTH * self._config.scale, SCREEN_HEIGHT * self._config.scale)
        flags = pygame.FULLSCREEN if self._config.fullscreen else 0
        screen = pygame.display.set_mode(surface_size, flags)

        clock = pygame.time.Clock()
        self._running = True

        try:
            while self._running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self._running = False
                    elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                        self._running = False
                    elif event.type == pygame.KEYDOWN:
                        self._handle_key_event(pygame, event.key, pressed=True)
                    elif event.type == pygame.KEYUP:
                        self._handle_key_event(pygame, event.key, pressed=False)

                frame_start = time.perf_counter()
                self._step_machine(machine)

                if self._beeper is not None:
                    self._beeper.set_state(machine.sound_active)

                frame = renderer.render(machine.framebuffer.rows(), scale=self._config.scale)
                screen.blit(frame.to_surface(), (0, 0))
                pygame.display.flip()

                if self._perf_enabled:
                    elapsed = time.perf_counter() - frame_start
                    debug_log(
                        "perf",
                        "frame=%d cycles=%d frame_ms=%.3f",
                        self._frame_counter,
                        machine.cpu.cycle_count,
                        elapsed * 1000.0,
                    )

                clock.tick(_FRAME_RATE)
                self._frame_counter += 1
        finally:
            if self._beeper is not None:
                self._beeper.shutdown()
            pygame.quit()

    # ------------------------------------------------------------------
    # Setup

    def _create_machine(self, rom_path: Path) -> Machine:
        try:
            quirks = Quirks.from_preset(self._config.quirks_preset)
        except ValueError as exc:
            raise RuntimeError(str(exc)) from exc

        config = MachineConfig(quirks=quirks, clock=self.frame_time, trace=self._trace_recorder)
        machine = create_machine(config)
        try:
            image = load_rom_from_path(rom_path, machine)
        except RomFormatError as exc:
            raise RuntimeError(f"Failed to load ROM {rom_path}: {exc}") from exc

        if debug_enabled("cpu"):
            debug_log("cpu", "loaded rom=%s size=%d quirks=%s", image.name, image.size, quirks.describe())
        return machine

    def _initialise_audio(self, pygame) -> None:
        if pygame.mixer.get_init() is None:
            try:
                pygame.mixer.init(44_100, -16, 1)
            except pygame.error as exc:  # pragma: no cover - best-effort path
                if debug_enabled("audio"):
                    debug_log("audio", "mixer_init_failed=%s", exc)
                return

        mixer_state = pygame.mixer.get_init()
        if mixer_state is None:
            if debug_enabled("audio"):
                debug_log("audio", "mixer_unavailable")
            return
        try:
            self._beeper = ToneBeeper(sample_rate=mixer_state[0])
        except RuntimeError as exc:
            self._beeper = None
            if debug_enabled("audio"):
                debug_log("audio", "beeper_init_failed=%s", exc)

    # ------------------------------------------------------------------
    # Per-frame work

    def _handle_key_event(self, pygame, key_code: int, *, pressed: bool) -> None:
        if self._machine is None:
            return
        name = pygame.key.name(key_code)
        key = map_host_key(name)
        if debug_enabled("input"):
            debug_log("input", "event=%s key=%s pressed=%s", name, key, pressed)
        if key is None:
            return
        if pressed:
            self._machine.press_key(key)
        else:
            self._machine.release_key(key)

    def _step_machine(self, machine: Machine) -> None:
        """Run one frame's worth of instructions followed by one timer tick."""

        try:
            machine.run_cycles(self.cycles_per_frame)
        except CPUError as exc:
            self._running = False
            if self._trace_recorder is not None:
                self._trace_recorder.dump("trace", limit=64)
            raise RuntimeError(f"CPU halted: {exc}") from exc
        machine.decrease_timers()


_FRAME_RATE = 60
