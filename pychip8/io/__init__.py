"""Input helpers for the CHIP-8 interpreter."""

from .keypad import KEY_COUNT, KEY_MAP, Keypad, map_host_key

__all__ = [
    "Keypad",
    "KEY_COUNT",
    "KEY_MAP",
    "map_host_key",
]
