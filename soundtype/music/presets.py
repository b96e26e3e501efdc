from types import MappingProxyType
from typing import Iterator, Mapping, Tuple

from .types import Envelope, InstrumentPreset, UnknownPreset, Waveform

DEFAULT_PRESET_ID = "piano"

_PRESETS: Mapping[str, InstrumentPreset] = {
    "piano": InstrumentPreset(
        name="Piano",
        waveform=Waveform.SINE,
        base_frequency=261.63,  # C4
        envelope=Envelope(attack=0.01, decay=0.1, sustain=0.3, release=0.4),
    ),
    "bass": InstrumentPreset(
        name="Bass",
        waveform=Waveform.SQUARE,
        base_frequency=82.41,  # E2
        envelope=Envelope(attack=0.03, decay=0.2, sustain=0.2, release=0.5),
    ),
    "cello": InstrumentPreset(
        name="Cello",
        waveform=Waveform.TRIANGLE,
        base_frequency=65.41,  # C2
        envelope=Envelope(attack=0.05, decay=0.3, sustain=0.3, release=0.6),
    ),
    "flute": InstrumentPreset(
        name="Flute",
        waveform=Waveform.SINE,
        base_frequency=523.25,  # C5
        envelope=Envelope(attack=0.05, decay=0.1, sustain=0.4, release=0.3),
    ),
    "xylophone": InstrumentPreset(
        name="Xylophone",
        waveform=Waveform.SINE,
        base_frequency=392.00,  # G4
        envelope=Envelope(attack=0.01, decay=0.1, sustain=0.0, release=0.3),
    ),
    "marimba": InstrumentPreset(
        name="Marimba",
        waveform=Waveform.SINE,
        base_frequency=440.00,  # A4
        envelope=Envelope(attack=0.01, decay=0.2, sustain=0.0, release=0.4),
    ),
    "notification": InstrumentPreset(
        name="Notification",
        waveform=Waveform.SINE,
        base_frequency=1046.50,  # C6, short alert tones
        envelope=Envelope(attack=0.01, decay=0.05, sustain=0.1, release=0.2),
    ),
}


class PresetCatalog:
    """Read-only table of instrument presets keyed by id."""

    def __init__(self, presets: Mapping[str, InstrumentPreset]) -> None:
        self._presets = MappingProxyType(dict(presets))

    def get(self, preset_id: str) -> InstrumentPreset:
        try:
            return self._presets[preset_id]
        except KeyError:
            raise UnknownPreset(preset_id) from None

    def items(self) -> Iterator[Tuple[str, InstrumentPreset]]:
        return iter(self._presets.items())

    def __contains__(self, preset_id: object) -> bool:
        return preset_id in self._presets

    def __iter__(self) -> Iterator[str]:
        return iter(self._presets)

    def __len__(self) -> int:
        return len(self._presets)


DEFAULT_CATALOG = PresetCatalog(_PRESETS)
