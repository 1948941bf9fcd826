"""Audio cues fired by the game and tone synthesis for playing them."""

from __future__ import annotations

import io
import logging
import wave
from dataclasses import dataclass
from typing import Protocol

import numpy as np

logger = logging.getLogger(__name__)

ATE = "ate"
DIED = "died"

SAMPLE_RATE = 44_100

# cue name -> (frequency Hz, duration s, base volume)
CUE_TONES: dict[str, tuple[float, float, float]] = {
    ATE: (880.0, 0.08, 0.6),
    DIED: (110.0, 0.25, 0.7),
}


@dataclass(frozen=True)
class Cue:
    """A named sound event with a volume hint in [0, 1]."""

    name: str
    volume: float

    def __post_init__(self) -> None:
        if self.name not in CUE_TONES:
            raise ValueError(f"Unknown cue {self.name!r}.")
        object.__setattr__(self, "volume", min(max(self.volume, 0.0), 1.0))


class CueSink(Protocol):
    def play(self, cue: Cue) -> None: ...


class NullCueSink:
    """Discards every cue."""

    def play(self, cue: Cue) -> None:
        return None


class RecordingCueSink:
    """Stores cues in order, for headless runs and tests."""

    def __init__(self) -> None:
        self.cues: list[Cue] = []

    def play(self, cue: Cue) -> None:
        logger.debug("Cue %s at volume %.2f.", cue.name, cue.volume)
        self.cues.append(cue)

    @property
    def names(self) -> list[str]:
        return [c.name for c in self.cues]


def sine_wav(frequency_hz: float, duration_s: float, volume: float) -> bytes:
    """Render a 16-bit mono PCM WAV sine tone."""
    num_samples = int(duration_s * SAMPLE_RATE)
    amplitude = min(max(volume, 0.0), 1.0) * 0.7
    t = np.arange(num_samples, dtype=np.float64) / SAMPLE_RATE
    samples = (amplitude * np.sin(2 * np.pi * frequency_hz * t) * np.iinfo(np.int16).max)
    pcm = samples.astype("<i2")

    buf = io.BytesIO()
    with wave.open(buf, "wb") as out:
        out.setnchannels(1)
        out.setsampwidth(2)
        out.setframerate(SAMPLE_RATE)
        out.writeframes(pcm.tobytes())
    return buf.getvalue()


def cue_wav(name: str) -> bytes:
    """WAV bytes for a named cue at its base volume."""
    frequency, duration, volume = CUE_TONES[name]
    return sine_wav(frequency, duration, volume)
