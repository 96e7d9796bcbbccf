"""Fixed-pitch tone driven by the CHIP-8 sound timer."""

from __future__ import annotations

from array import array
import math
from typing import Optional

TONE_FREQUENCY = 440.0


class ToneBeeper:
    """Manage a looping sine tone using pygame's mixer."""

    def __init__(
        self,
        *,
        sample_rate: int = 44_100,
        frequency: float = TONE_FREQUENCY,
        volume: float = 0.25,
    ) -> None:
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required for audio output") from exc

        if pygame.mixer.get_init() is None:
            raise RuntimeError("pygame mixer must be initialised before creating ToneBeeper")

        self._pygame = pygame
        self._sample_rate = max(1, sample_rate)
        self._frequency = frequency
        self._volume = max(0.0, min(1.0, volume))
        self._channel: Optional[pygame.mixer.Channel] = None
        self._sound: Optional[pygame.mixer.Sound] = None
        self._playing = False

    # ------------------------------------------------------------------
    # Public API

    def set_state(self, enabled: bool) -> None:
        """Start or stop the tone; repeated calls with the same state are no-ops."""

        if enabled == self._playing:
            return
        if not enabled:
            self._stop()
            return

        if self._sound is None:
            self._sound = self._build_sound()
        channel = self._channel
        if channel is None:
            channel = self._pygame.mixer.find_channel(True)
            if channel is None:
                return
            self._channel = channel

        channel.play(self._sound, loops=-1)
        channel.set_volume(self._volume)
        self._playing = True

    @property
    def playing(self) -> bool:
        return self._playing

    def shutdown(self) -> None:
        """Stop any active tone and release resources."""

        self._stop()
        self._channel = None
        self._sound = None

    # ------------------------------------------------------------------
    # Internals

    def _stop(self) -> None:
        if self._channel is not None:
            self._channel.stop()
        self._playing = False

    def _build_sound(self) -> "pygame.mixer.Sound":
        # Whole number of periods so the loop point is seamless.
        period_samples = self._sample_rate / self._frequency
        periods = max(1, int(round(self._sample_rate / 10 / period_samples)))
        sample_count = int(round(period_samples * periods))

        buffer = array("h")
        amplitude = 12_000
        for index in range(sample_count):
            phase = (2.0 * math.pi * periods * index) / sample_count
            buffer.append(int(math.sin(phase) * amplitude))

        return self._pygame.mixer.Sound(buffer=buffer.tobytes())


__all__ = ["ToneBeeper"]
