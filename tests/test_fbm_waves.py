# tests/test_fbm_waves.py
# Unit tests for the declarative FBM octave configuration
# RELEVANT FILES: python/oceanforge/fbm_waves.py, python/oceanforge/uniforms.py
import pytest

from oceanforge.fbm_waves import (
    FBM_PARAMETERS,
    FbmDomainParams,
    FbmWaterMaterial,
    FbmWaveConfig,
    update,
)


def test_default_config_values() -> None:
    cfg = FbmWaveConfig()
    assert cfg.vertex_wave_count == 40
    assert cfg.fragment_wave_count == 40
    assert cfg.vertex_seed_iter == pytest.approx(1253.2131)
    for domain in (cfg.vertex, cfg.fragment):
        assert domain.seed == 0.0
        assert domain.frequency == pytest.approx(1.0)
        assert domain.frequency_mult == pytest.approx(1.18)
        assert domain.amplitude == pytest.approx(1.0)
        assert domain.amplitude_mult == pytest.approx(0.82)
        assert domain.initial_speed == pytest.approx(2.0)
        assert domain.speed_ramp == pytest.approx(1.07)
        assert domain.drag == pytest.approx(1.0)
        assert domain.height == pytest.approx(1.0)
        assert domain.max_peak == pytest.approx(1.0)
        assert domain.peak_offset == pytest.approx(1.0)


def test_domains_are_independent() -> None:
    cfg = FbmWaveConfig()
    cfg.update("vertex_drag", 0.25)
    assert cfg.vertex_drag == pytest.approx(0.25)
    assert cfg.fragment_drag == pytest.approx(1.0)


def test_fields_cover_both_mirrored_blocks() -> None:
    names = FbmWaveConfig.fields()
    assert len(names) == 2 * len(FBM_PARAMETERS) == 26
    assert names[0] == "vertex_wave_count"
    assert names[13] == "fragment_wave_count"
    assert names[-1] == "fragment_peak_offset"
    assert list(FbmWaveConfig().to_dict()) == names


def test_update_every_scalar() -> None:
    cfg = FbmWaveConfig()
    for i, name in enumerate(FbmWaveConfig.fields()):
        update(cfg, name, i + 1)
    for i, name in enumerate(FbmWaveConfig.fields()):
        assert cfg.get(name) == i + 1


def test_wave_count_must_be_positive_integer() -> None:
    cfg = FbmWaveConfig()
    with pytest.raises(ValueError):
        cfg.update("vertex_wave_count", 0)
    with pytest.raises(ValueError):
        cfg.update("fragment_wave_count", 2.5)
    with pytest.raises(ValueError):
        FbmDomainParams(wave_count=-3)
    cfg.update("fragment_wave_count", 12.0)
    assert cfg.fragment_wave_count == 12
    assert isinstance(cfg.fragment_wave_count, int)


@pytest.mark.parametrize("value", [0, -4, 2.5, 2**32, "many"])
def test_flat_wave_count_updates_are_checked(value) -> None:
    cfg = FbmWaveConfig()
    with pytest.raises(ValueError):
        cfg.update("vertex_wave_count", value)
    with pytest.raises(ValueError):
        FbmWaveConfig.from_mapping({"fragment_wave_count": value})
    with pytest.raises(ValueError):
        FbmWaveConfig.from_mapping({"vertex": {"wave_count": value}})
    assert cfg.vertex_wave_count == 40
    assert isinstance(cfg.vertex_wave_count, int)


def test_multipliers_are_not_range_checked() -> None:
    cfg = FbmWaveConfig()
    cfg.update("vertex_frequency_mult", 5.0)
    cfg.update("vertex_amplitude_mult", -0.5)
    assert cfg.vertex_frequency_mult == pytest.approx(5.0)
    assert cfg.vertex_amplitude_mult == pytest.approx(-0.5)


def test_unknown_names_rejected() -> None:
    cfg = FbmWaveConfig()
    with pytest.raises(ValueError):
        cfg.update("compute_seed", 1.0)
    with pytest.raises(ValueError):
        cfg.update("vertex_octaves", 1.0)
    with pytest.raises(AttributeError):
        cfg.vertex_octaves


def test_from_mapping_flat_and_nested() -> None:
    cfg = FbmWaveConfig.from_mapping({"vertex_seed": 17, "fragment": {"height": 0.5, "wave_count": 8}})
    assert cfg.vertex_seed == pytest.approx(17.0)
    assert cfg.fragment_height == pytest.approx(0.5)
    assert cfg.fragment_wave_count == 8
    with pytest.raises(TypeError):
        FbmWaveConfig.from_mapping({"vertex": 3})


def test_material_copy_is_deep() -> None:
    material = FbmWaterMaterial()
    clone = material.copy()
    clone.fbm_config.update("vertex_seed", 99.0)
    assert material.fbm_config.vertex_seed == 0.0
    assert clone.fbm_config.vertex_seed == pytest.approx(99.0)
