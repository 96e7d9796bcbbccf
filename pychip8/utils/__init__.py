"""Utility helpers for the CHIP-8 interpreter."""

from .debug import (
    CATEGORIES,
    debug_enabled,
    debug_log,
    describe_categories,
    reload_categories,
    unknown_categories,
)
from .trace import TraceEntry, TraceRecorder

__all__ = [
    "CATEGORIES",
    "debug_enabled",
    "debug_log",
    "describe_categories",
    "reload_categories",
    "unknown_categories",
    "TraceEntry",
    "TraceRecorder",
]
