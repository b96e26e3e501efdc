"""Music helpers for SoundType."""

from .envelope import PEAK_GAIN, build_envelope
from .note_mapper import map_character
from .presets import DEFAULT_CATALOG, DEFAULT_PRESET_ID, PresetCatalog
from .sequencer import NOTE_INTERVAL, LiveScheduler, buffer_duration, layout, total_duration
from .synthesis import render_notes, synthesize_note
from .types import (
    AudioDeviceUnavailable,
    AudioOutput,
    EncodedAudioFile,
    Envelope,
    EnvelopeCurve,
    InstrumentPreset,
    Note,
    SampleBuffer,
    UnknownPreset,
    Waveform,
)
from .wav import decode, encode

__all__ = [
    "AudioDeviceUnavailable",
    "AudioOutput",
    "DEFAULT_CATALOG",
    "DEFAULT_PRESET_ID",
    "EncodedAudioFile",
    "Envelope",
    "EnvelopeCurve",
    "InstrumentPreset",
    "LiveScheduler",
    "NOTE_INTERVAL",
    "Note",
    "PEAK_GAIN",
    "PresetCatalog",
    "SampleBuffer",
    "UnknownPreset",
    "Waveform",
    "buffer_duration",
    "build_envelope",
    "decode",
    "encode",
    "layout",
    "map_character",
    "render_notes",
    "synthesize_note",
    "total_duration",
]
