"""CHIP-8 hexadecimal keypad handling."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Mapping

from pychip8.utils import debug_enabled, debug_log

KEY_COUNT = 16

# COSMAC VIP layout    Host keys
#   1 2 3 C            1 2 3 4
#   4 5 6 D            q w e r
#   7 8 9 E            a s d f
#   A 0 B F            z x c v
KEY_MAP: Mapping[str, int] = {
    "1": 0x1,
    "2": 0x2,
    "3": 0x3,
    "4": 0xC,
    "q": 0x4,
    "w": 0x5,
    "e": 0x6,
    "r": 0xD,
    "a": 0x7,
    "s": 0x8,
    "d": 0x9,
    "f": 0xE,
    "z": 0xA,
    "x": 0x0,
    "c": 0xB,
    "v": 0xF,
}


def map_host_key(name: str) -> int | None:
    """Translate a host key name into a CHIP-8 key, or ``None`` if unmapped."""

    return KEY_MAP.get(name.lower())


def _check_key(key: int) -> int:
    if not 0 <= key < KEY_COUNT:
        raise ValueError(f"key {key!r} outside 0x0-0xF")
    return key


@dataclass
class Keypad:
    """Sixteen-key state plus the latch used by the blocking key-wait instruction."""

    _pressed: List[bool] = field(default_factory=lambda: [False] * KEY_COUNT)
    waiting: bool = False
    released_key: int | None = None

    def press(self, key: int) -> None:
        key = _check_key(key)
        self._pressed[key] = True
        if debug_enabled("input"):
            debug_log("input", "press key=%X", key)

    def release(self, key: int) -> None:
        key = _check_key(key)
        self._pressed[key] = False
        if self.waiting:
            self.released_key = key
        if debug_enabled("input"):
            debug_log("input", "release key=%X waiting=%s", key, self.waiting)

    def is_pressed(self, key: int) -> bool:
        return self._pressed[key & 0x0F]

    def begin_wait(self) -> int | None:
        """Arm the key-wait latch and consume a recorded release, if any."""

        self.waiting = True
        key = self.released_key
        if key is None:
            return None
        self.waiting = False
        self.released_key = None
        return key

    def reset(self) -> None:
        self._pressed[:] = [False] * KEY_COUNT
        self.waiting = False
        self.released_key = None

    def snapshot(self) -> tuple[bool, ...]:
        return tuple(self._pressed)

