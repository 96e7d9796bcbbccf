"""Audio output for the CHIP-8 interpreter."""

from .beeper import TONE_FREQUENCY, ToneBeeper

__all__ = ["ToneBeeper", "TONE_FREQUENCY"]
