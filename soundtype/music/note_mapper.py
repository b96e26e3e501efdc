from .types import InstrumentPreset

PITCH_STEPS = 12  # one chromatic octave above the preset's base


def map_character(char: str, preset: InstrumentPreset) -> float:
    """Frequency for ``char``: the code point picks one of twelve steps above the base."""
    if len(char) != 1:
        raise ValueError(f"Expected a single character, got {char!r}.")
    step = ord(char) % PITCH_STEPS
    return preset.base_frequency * (1 + step / PITCH_STEPS)
