"""Lightweight debug logging helpers for the CHIP-8 interpreter."""

from __future__ import annotations

import os
from typing import Iterable

ENV_VARIABLE = "CHIP8_DEBUG"

CATEGORIES = {
    "cpu": "fetched opcode for every executed instruction",
    "input": "host key events and their keypad mapping",
    "audio": "mixer and beeper setup",
    "trace": "record recent instructions and dump them when the CPU halts",
    "perf": "per-frame cycle count and host frame time",
}

_CATEGORIES: set[str] | None = None


def _load_categories() -> set[str]:
    global _CATEGORIES
    if _CATEGORIES is not None:
        return _CATEGORIES
    value = os.environ.get(ENV_VARIABLE, "")
    if not value:
        _CATEGORIES = set()
        return _CATEGORIES
    parts: Iterable[str] = (part.strip().lower() for part in value.split(","))
    _CATEGORIES = {part for part in parts if part}
    return _CATEGORIES


def reload_categories() -> set[str]:
    """Drop the cached category set and re-read ``CHIP8_DEBUG``."""

    global _CATEGORIES
    _CATEGORIES = None
    return _load_categories()


def unknown_categories() -> list[str]:
    """Return the names in ``CHIP8_DEBUG`` that no call site ever logs under."""

    return sorted(name for name in _load_categories() if name != "all" and name not in CATEGORIES)


def describe_categories() -> str:
    lines = [f"  {name:<6} {summary}" for name, summary in CATEGORIES.items()]
    return "\n".join([f"{ENV_VARIABLE} categories (comma separated, 'all' for every one):", *lines])


def debug_enabled(category: str | None = None) -> bool:
    categories = _load_categories()
    if not categories:
        return False
    if "all" in categories:
        return True
    if category is None:
        return True
    return category.lower() in categories


def debug_log(category: str, message: str, *args) -> None:
    if not debug_enabled(category):
        return
    prefix = f"[CHIP8][{category}]"
    if args:
        try:
            message = message % args
        except (TypeError, ValueError):
            message = f"{message} {args!r}"
    print(f"{prefix} {message}")
