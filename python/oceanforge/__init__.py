# python/oceanforge/__init__.py
# Public API for procedural ocean wave and shading parameter synthesis
# Exists to re-export generators, materials and the uniform packing layer in one namespace
# RELEVANT FILES: python/oceanforge/uniforms.py, python/oceanforge/surface.py, python/oceanforge/config.py
from .colors import hex_to_rgba, rgba_u8, srgb_to_linear
from .shading import DEEP_OCEAN, Fresnel, ShadingModel
from .rng import RandomSource, as_random_source, sample
from .sum_waves import (
    GRAVITY,
    WAVE_COUNT,
    SumWaterMaterial,
    SumWaveField,
    SumWaveSettings,
    WaveSpec,
    WaveType,
    random_field,
    random_wave,
    randomize,
    set_wave_type,
)
from .fbm_waves import FbmDomainParams, FbmWaterMaterial, FbmWaveConfig
from .spectrum import (
    FftWaterMaterial,
    SpectrumSettings,
    SpectrumUniform,
    derive,
    jonswap_alpha,
    jonswap_peak_frequency,
)
from .uniforms import UniformLayout, UniformRecord, pack, pack_fbm, pack_fft, pack_spectrum, pack_sum
from .surface import TIME_WRAP_SECONDS, WaveMethod, WaterSurface
from .config import WaterConfig, build_surface, load_water_config
from . import presets

__version__ = "0.1.0"

__all__ = [
    "hex_to_rgba",
    "rgba_u8",
    "srgb_to_linear",
    "DEEP_OCEAN",
    "Fresnel",
    "ShadingModel",
    "RandomSource",
    "as_random_source",
    "sample",
    "GRAVITY",
    "WAVE_COUNT",
    "SumWaterMaterial",
    "SumWaveField",
    "SumWaveSettings",
    "WaveSpec",
    "WaveType",
    "random_field",
    "random_wave",
    "randomize",
    "set_wave_type",
    "FbmDomainParams",
    "FbmWaterMaterial",
    "FbmWaveConfig",
    "FftWaterMaterial",
    "SpectrumSettings",
    "SpectrumUniform",
    "derive",
    "jonswap_alpha",
    "jonswap_peak_frequency",
    "UniformLayout",
    "UniformRecord",
    "pack",
    "pack_fbm",
    "pack_fft",
    "pack_spectrum",
    "pack_sum",
    "TIME_WRAP_SECONDS",
    "WaveMethod",
    "WaterSurface",
    "WaterConfig",
    "build_surface",
    "load_water_config",
    "presets",
    "__version__",
]
