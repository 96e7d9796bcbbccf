"""Compatibility toggles for instructions whose behaviour differs between interpreters."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Mapping


@dataclass(frozen=True)
class Quirks:
    """Immutable set of behaviour switches fixed when the CPU is built.

    vf_reset
        ``8xy1``/``8xy2``/``8xy3`` clear VF after the logic operation.
    shift_use_vy
        ``8xy6``/``8xyE`` shift Vy into Vx instead of shifting Vx in place.
    bnnn
        ``Bnnn`` jumps to ``nnn + V0``; otherwise to ``xnn + Vx``.
    store_load_increments_i
        ``Fx55``/``Fx65`` leave I pointing past the last register transferred.
    display_wait
        ``Dxyn`` draws at most once per 1/60 second and retries otherwise.
    """

    vf_reset: bool = True
    shift_use_vy: bool = False
    bnnn: bool = False
    store_load_increments_i: bool = True
    display_wait: bool = True

    @classmethod
    def from_preset(cls, name: str) -> "Quirks":
        try:
            return PRESETS[name.lower()]
        except KeyError:
            choices = ", ".join(sorted(PRESETS))
            raise ValueError(f"unknown quirk preset {name!r} (choose from {choices})") from None

    def replace(self, **changes: bool) -> "Quirks":
        return replace(self, **changes)

    def describe(self) -> str:
        enabled = [item.name for item in fields(self) if getattr(self, item.name)]
        return ",".join(enabled) or "-"


PRESETS: Mapping[str, Quirks] = {
    "default": Quirks(),
    "cosmac": Quirks(
        vf_reset=True,
        shift_use_vy=True,
        bnnn=True,
        store_load_increments_i=True,
        display_wait=True,
    ),
    "modern": Quirks(
        vf_reset=False,
        shift_use_vy=False,
        bnnn=False,
        store_load_increments_i=False,
        display_wait=False,
    ),
}
