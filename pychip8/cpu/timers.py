"""Delay and sound timers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Timers:
    """The two 8-bit countdown timers, decremented by the host at 60 Hz."""

    delay: int = 0
    sound: int = 0

    def decrease(self) -> None:
        if self.delay > 0:
            self.delay -= 1
        if self.sound > 0:
            self.sound -= 1

    @property
    def sound_active(self) -> bool:
        return self.sound > 0

    def reset(self) -> None:
        self.delay = 0
        self.sound = 0
