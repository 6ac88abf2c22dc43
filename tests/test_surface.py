# tests/test_surface.py
# Tests for method switching, time advance and dirty tracking on WaterSurface
# Exists to keep the three materials independent while one of them is displayed
# RELEVANT FILES: python/oceanforge/surface.py, python/oceanforge/uniforms.py
import math

import numpy as np
import pytest

from oceanforge.shading import ShadingModel
from oceanforge.spectrum import SpectrumSettings
from oceanforge.fbm_waves import FbmWaveConfig
from oceanforge.sum_waves import WaveType
from oceanforge.surface import TIME_WRAP_SECONDS, WaterSurface, WaveMethod


@pytest.fixture
def surface(rng):
    s = WaterSurface.create(rng)
    s.take_dirty()
    return s


def test_create_defaults(rng) -> None:
    s = WaterSurface.create(rng)
    assert s.method is WaveMethod.FBM
    assert s.sum_material.wave_type is WaveType.STEEP_SINE
    assert len(s.sum_material.waves) == 4
    assert s.time == 0.0
    assert s.take_dirty() == set(WaveMethod)
    assert s.take_dirty() == set()


@pytest.mark.parametrize(
    "value, expected",
    [
        ("sum", WaveMethod.SUM_OF_SINES),
        ("Sum-Of-Sines", WaveMethod.SUM_OF_SINES),
        ("FBM", WaveMethod.FBM),
        ("spectrum", WaveMethod.FFT),
        (WaveMethod.FFT, WaveMethod.FFT),
    ],
)
def test_method_parse(value, expected) -> None:
    assert WaveMethod.parse(value) is expected


def test_method_parse_rejects_unknown() -> None:
    with pytest.raises(ValueError):
        WaveMethod.parse("gerstner")


def test_set_method_only_flags_change(surface) -> None:
    assert surface.set_method("fbm") is False
    assert surface.take_dirty() == set()
    assert surface.set_method("fft") is True
    assert surface.method is WaveMethod.FFT
    assert surface.is_dirty()
    assert surface.take_dirty() == {WaveMethod.FFT}


def test_switching_method_keeps_materials(surface) -> None:
    before = surface.sum_material.waves.as_matrices().copy()
    surface.set_method("fft")
    surface.set_method("sum")
    np.testing.assert_array_equal(surface.sum_material.waves.as_matrices(), before)
    assert surface.material() is surface.sum_material


def test_advance_sets_time_everywhere(surface) -> None:
    assert surface.advance(2.5) == 2.5
    for method in WaveMethod:
        assert surface.material(method).time == 2.5
    assert surface.take_dirty() == set(WaveMethod)


def test_advance_wraps(surface) -> None:
    t = surface.advance(TIME_WRAP_SECONDS + 1.25)
    assert t == pytest.approx(1.25)
    assert surface.fft_material.time == pytest.approx(1.25)


@pytest.mark.parametrize("bad", [-0.1, math.inf, math.nan])
def test_advance_rejects_invalid(surface, bad) -> None:
    with pytest.raises(ValueError):
        surface.advance(bad)
    assert surface.time == 0.0


def test_set_wave_type(surface) -> None:
    assert surface.set_wave_type("steep_sine") is False
    assert surface.set_wave_type(WaveType.SINE) is True
    assert all(w.ty is WaveType.SINE for w in surface.sum_material.waves)
    assert surface.take_dirty() == {WaveMethod.SUM_OF_SINES}


def test_regenerate_keeps_wave_type(surface, rng) -> None:
    surface.set_wave_type("sine")
    before = surface.sum_material.waves.as_matrices().copy()
    surface.regenerate(rng)
    after = surface.sum_material.waves.as_matrices()
    assert not np.array_equal(before, after)
    assert surface.sum_material.wave_type is WaveType.SINE
    assert WaveMethod.SUM_OF_SINES in surface.take_dirty()


def test_apply_shading_copies_per_material(surface) -> None:
    shading = ShadingModel(shininess=9.0)
    surface.apply_shading(shading)
    assert surface.take_dirty() == set(WaveMethod)
    for method in WaveMethod:
        assert surface.material(method).shading.shininess == 9.0
    surface.fbm_material.shading.shininess = 1.0
    assert surface.sum_material.shading.shininess == 9.0
    assert shading.shininess == 9.0


def test_apply_shading_subset(surface) -> None:
    surface.apply_shading(ShadingModel(tip_attenuation=1.5), methods=["sum", "fbm"])
    assert surface.take_dirty() == {WaveMethod.SUM_OF_SINES, WaveMethod.FBM}
    assert surface.fft_material.shading.tip_attenuation == 6.0


def test_apply_configs(surface) -> None:
    fbm = FbmWaveConfig()
    fbm.update("vertex_drag", 0.3)
    surface.apply_fbm_config(fbm)
    fbm.update("vertex_drag", 0.9)
    assert surface.fbm_material.fbm_config.vertex_drag == pytest.approx(0.3)

    surface.apply_spectrum(SpectrumSettings(wind_speed=11.0))
    assert surface.fft_material.spectrum.wind_speed == 11.0
    assert surface.take_dirty() == {WaveMethod.FBM, WaveMethod.FFT}


def test_mark_dirty_and_is_dirty(surface) -> None:
    assert not surface.is_dirty("sum")
    surface.mark_dirty("sum")
    assert surface.is_dirty("sum")
    assert not surface.is_dirty()


def test_pack_active_matches_method(surface) -> None:
    assert surface.pack_active().name == "FbmWaterMaterial"
    surface.set_method("sum")
    assert surface.pack_active().name == "SumWaterMaterial"
    assert surface.pack("fft").name == "FftWaterMaterial"


def test_pack_all(surface) -> None:
    surface.advance(4.0)
    records = surface.pack_all()
    assert set(records) == set(WaveMethod)
    for record in records.values():
        assert record.field("time") == pytest.approx(4.0)
