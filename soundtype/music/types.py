from dataclasses import dataclass
from enum import Enum
from typing import Protocol, Tuple

import numpy as np


class Waveform(Enum):
    SINE = "sine"
    SQUARE = "square"
    TRIANGLE = "triangle"
    SAWTOOTH = "sawtooth"


class UnknownPreset(LookupError):
    """Raised when a preset id is not part of the catalog."""

    def __init__(self, preset_id: str) -> None:
        super().__init__(f"Unknown preset: {preset_id!r}")
        self.preset_id = preset_id


class AudioDeviceUnavailable(RuntimeError):
    """Raised when the live audio output cannot be opened."""


@dataclass(frozen=True)
class Envelope:
    attack: float  # seconds
    decay: float  # seconds
    sustain: float  # gain fraction 0..1
    release: float  # seconds

    @property
    def duration(self) -> float:
        return self.attack + self.decay + self.release


@dataclass(frozen=True)
class InstrumentPreset:
    name: str
    waveform: Waveform
    base_frequency: float  # Hz
    envelope: Envelope


@dataclass(frozen=True)
class Note:
    character: str
    frequency: float  # Hz
    start: float  # seconds


@dataclass(frozen=True)
class EnvelopeCurve:
    points: Tuple[Tuple[float, float], ...]  # (seconds, gain)

    @property
    def duration(self) -> float:
        return self.points[-1][0] if self.points else 0.0

    def gain_at(self, times: np.ndarray) -> np.ndarray:
        """Piecewise-linear gain for each time; zero outside the curve."""
        times = np.asarray(times, dtype=np.float64)
        gain = np.zeros_like(times)
        for (t0, g0), (t1, g1) in zip(self.points, self.points[1:]):
            span = t1 - t0
            if span <= 0:
                continue  # instantaneous jump
            mask = (times >= t0) & (times < t1)
            gain[mask] = g0 + (g1 - g0) * (times[mask] - t0) / span
        return gain


@dataclass(frozen=True)
class EncodedAudioFile:
    filename: str
    data: bytes
    duration: float  # seconds


class SampleBuffer:
    """Float samples shaped (channels, frames) at a fixed sample rate."""

    def __init__(self, channels: int, frames: int, sample_rate: int) -> None:
        if channels < 1:
            raise ValueError("A sample buffer needs at least one channel.")
        self.sample_rate = sample_rate
        self.samples = np.zeros((channels, max(frames, 0)), dtype=np.float64)

    @classmethod
    def for_duration(cls, duration: float, sample_rate: int, channels: int) -> "SampleBuffer":
        return cls(channels, int(round(sample_rate * duration)), sample_rate)

    @classmethod
    def from_array(cls, samples: np.ndarray, sample_rate: int) -> "SampleBuffer":
        samples = np.atleast_2d(np.asarray(samples, dtype=np.float64))
        buffer = cls(samples.shape[0], samples.shape[1], sample_rate)
        buffer.samples[:] = samples
        return buffer

    @property
    def channels(self) -> int:
        return self.samples.shape[0]

    @property
    def frames(self) -> int:
        return self.samples.shape[1]

    @property
    def duration(self) -> float:
        return self.frames / self.sample_rate

    def mix(self, mono: np.ndarray, offset: int) -> None:
        """Add a mono slice into every channel starting at ``offset``."""
        if offset >= self.frames or offset < 0:
            return
        end = min(offset + len(mono), self.frames)
        self.samples[:, offset:end] += mono[: end - offset]

    def interleaved(self) -> np.ndarray:
        return self.samples.T.reshape(-1)


class AudioOutput(Protocol):
    """Real-time output the live scheduler hands synthesized notes to."""

    def open(self) -> None:
        """Acquire the device; raise AudioDeviceUnavailable on failure."""

    def play(self, samples: np.ndarray, sample_rate: int) -> None:
        """Start playing a mono float slice now, mixed with anything already sounding."""

    def close(self) -> None:
        ...
