"""Tests for quirk configuration."""

from __future__ import annotations

import dataclasses

import pytest

from pychip8.cpu import PRESETS, Quirks


def test_defaults_match_default_preset() -> None:
    quirks = Quirks()

    assert quirks == Quirks.from_preset("default")
    assert quirks.vf_reset
    assert not quirks.shift_use_vy
    assert not quirks.bnnn
    assert quirks.store_load_increments_i
    assert quirks.display_wait


def test_presets_are_distinct() -> None:
    assert len(set(PRESETS.values())) == len(PRESETS)
    assert Quirks.from_preset("COSMAC").shift_use_vy
    assert Quirks.from_preset("modern").describe() == "-"


def test_unknown_preset_raises() -> None:
    with pytest.raises(ValueError, match="unknown quirk preset"):
        Quirks.from_preset("xo-chip")


def test_quirks_are_immutable() -> None:
    quirks = Quirks()

    with pytest.raises(dataclasses.FrozenInstanceError):
        quirks.bnnn = True  # type: ignore[misc]

    changed = quirks.replace(bnnn=True)
    assert changed.bnnn
    assert not quirks.bnnn
    assert "bnnn" in changed.describe()
