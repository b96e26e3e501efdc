import itertools
import logging
from typing import Iterable

import numpy as np
from pydub.generators import Sawtooth, Sine, Square, Triangle

from .types import EnvelopeCurve, InstrumentPreset, Note, SampleBuffer, Waveform

_LOG = logging.getLogger("soundtype.synthesis")

GENERATOR_MAP = {
    Waveform.SINE: Sine,
    Waveform.SQUARE: Square,
    Waveform.TRIANGLE: Triangle,
    Waveform.SAWTOOTH: Sawtooth,
}


# pydub ramps start at -1; skip ahead so every shape starts at 0 and rises, like Sine
PHASE_OFFSET = {
    Waveform.TRIANGLE: 0.25,
    Waveform.SAWTOOTH: 0.5,
}


def oscillator(waveform: Waveform, frequency: float, count: int, sample_rate: int) -> np.ndarray:
    """First ``count`` samples of a naive (non band-limited) oscillator.

    Triangle and sawtooth phases are aligned to the nearest sample.
    """
    generator = GENERATOR_MAP[waveform](frequency, sample_rate=sample_rate)
    skip = int(round(PHASE_OFFSET.get(waveform, 0.0) * sample_rate / frequency))
    samples = itertools.islice(generator.generate(), skip, skip + count)
    return np.fromiter(samples, dtype=np.float64, count=count)


def synthesize_note(
    note: Note,
    preset: InstrumentPreset,
    envelope: EnvelopeCurve,
    sample_rate: int,
) -> np.ndarray:
    count = int(round(envelope.duration * sample_rate))
    if count <= 0:
        return np.zeros(0, dtype=np.float64)
    times = np.arange(count, dtype=np.float64) / sample_rate
    wave = oscillator(preset.waveform, note.frequency, count, sample_rate)
    return np.clip(wave * envelope.gain_at(times), -1.0, 1.0)


def render_notes(
    notes: Iterable[Note],
    preset: InstrumentPreset,
    envelope: EnvelopeCurve,
    duration: float,
    sample_rate: int = 44100,
    channels: int = 2,
) -> SampleBuffer:
    """Offline pass: every note is summed into one pre-sized buffer at its start frame."""
    buffer = SampleBuffer.for_duration(duration, sample_rate, channels)
    rendered = 0
    for note in notes:
        samples = synthesize_note(note, preset, envelope, sample_rate)
        buffer.mix(samples, int(round(note.start * sample_rate)))
        rendered += 1
    _LOG.debug(
        "Rendered %d notes into %d frames x %d channels", rendered, buffer.frames, buffer.channels
    )
    return buffer
