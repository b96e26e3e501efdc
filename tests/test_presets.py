import dataclasses

import pytest

from soundtype.music import DEFAULT_CATALOG, DEFAULT_PRESET_ID, PresetCatalog, UnknownPreset, Waveform


def test_catalog_holds_every_instrument():
    assert len(DEFAULT_CATALOG) == 7
    assert set(DEFAULT_CATALOG) == {
        "piano",
        "bass",
        "cello",
        "flute",
        "xylophone",
        "marimba",
        "notification",
    }
    assert DEFAULT_PRESET_ID in DEFAULT_CATALOG


def test_get_returns_preset_values():
    bass = DEFAULT_CATALOG.get("bass")
    assert bass.name == "Bass"
    assert bass.waveform is Waveform.SQUARE
    assert bass.base_frequency == 82.41
    assert bass.envelope.duration == pytest.approx(0.73)


def test_unknown_preset_is_rejected():
    with pytest.raises(UnknownPreset) as excinfo:
        DEFAULT_CATALOG.get("kazoo")
    assert excinfo.value.preset_id == "kazoo"
    assert isinstance(excinfo.value, LookupError)


def test_catalog_is_detached_from_its_source():
    source = dict(DEFAULT_CATALOG.items())
    catalog = PresetCatalog(source)
    source.pop("piano")
    assert "piano" in catalog


def test_presets_are_immutable():
    piano = DEFAULT_CATALOG.get("piano")
    with pytest.raises(dataclasses.FrozenInstanceError):
        piano.base_frequency = 1.0  # type: ignore[misc]


def test_every_preset_is_playable():
    for preset_id, preset in DEFAULT_CATALOG.items():
        assert preset.base_frequency > 0, preset_id
        assert 0.0 <= preset.envelope.sustain <= 1.0, preset_id
        assert min(preset.envelope.attack, preset.envelope.decay, preset.envelope.release) >= 0


def test_presets_module_exposes_no_mutable_table():
    import soundtype.music.presets as presets_module

    assert not hasattr(presets_module, "PRESETS")
    with pytest.raises(TypeError):
        DEFAULT_CATALOG._presets["kazoo"] = DEFAULT_CATALOG.get("piano")  # type: ignore[index]
