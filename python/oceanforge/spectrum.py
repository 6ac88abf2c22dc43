# python/oceanforge/spectrum.py
# JONSWAP spectrum shape constants derived from wind, fetch and swell
# Exists to hand a spectrum-based displacement shader its parameters without evaluating the spectrum here
# RELEVANT FILES: python/oceanforge/uniforms.py, python/oceanforge/presets.py, tests/test_spectrum.py
"""JONSWAP spectrum parameters.

    alpha      = 0.076 * (g * fetch / U^2) ** -0.22
    peak_omega = 22 * (U * fetch / g^2) ** -0.33

with ``U`` the wind speed (m/s), ``fetch`` in meters and ``g = 9.81``.
"""

from __future__ import annotations

import copy
import logging
import math
from dataclasses import dataclass, field, fields, replace
from typing import Any, Mapping, Optional, Tuple

import numpy as np

from . import _validate
from .shading import ShadingModel
from .sum_waves import GRAVITY

logger = logging.getLogger(__name__)

SWELL_BOUNDS: Tuple[float, float] = (0.01, 1.0)


def _check_inputs(fetch: float, wind_speed: float) -> Tuple[float, float]:
    return _validate.positive("fetch", fetch), _validate.positive("wind_speed", wind_speed)


def jonswap_alpha(fetch: float, wind_speed: float) -> float:
    """Phillips constant of the JONSWAP spectrum.

    Raises:
        ValueError: if fetch or wind speed is not strictly positive.
    """
    fetch, wind_speed = _check_inputs(fetch, wind_speed)
    return 0.076 * (GRAVITY * fetch / wind_speed / wind_speed) ** -0.22


def jonswap_peak_frequency(fetch: float, wind_speed: float) -> float:
    """Peak angular frequency of the JONSWAP spectrum (rad/s)."""
    fetch, wind_speed = _check_inputs(fetch, wind_speed)
    return 22.0 * (wind_speed * fetch / GRAVITY / GRAVITY) ** -0.33


@dataclass
class SpectrumSettings:
    """User-facing spectrum inputs; wind direction is in degrees."""

    scale: float = 0.5
    wind_speed: float = 20.0
    wind_direction: float = 22.0
    fetch: float = 100000000.0
    spread_blend: float = 1.0
    swell: float = 0.42
    peak_enhancement: float = 1.0
    short_waves_fade: float = 1.0

    def __post_init__(self) -> None:
        for f in fields(self):
            setattr(self, f.name, _validate.as_float(f.name, getattr(self, f.name)))
        _check_inputs(self.fetch, self.wind_speed)

    def update(self, name: str, value: Any) -> None:
        """Set one input, rejecting values that would break the derivation."""
        if name not in {f.name for f in fields(self)}:
            raise ValueError(f"Unknown spectrum parameter: {name!r}")
        checked = replace(self, **{name: value})
        setattr(self, name, getattr(checked, name))

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def copy(self) -> "SpectrumSettings":
        return copy.deepcopy(self)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], default: Optional["SpectrumSettings"] = None) -> "SpectrumSettings":
        base = copy.deepcopy(default) if default is not None else cls()
        for key, value in data.items():
            base.update(key, value)
        return base


@dataclass(frozen=True)
class SpectrumUniform:
    """Derived spectrum constants in the order the shader reads them."""

    scale: float
    angle: float
    spread_blend: float
    swell: float
    alpha: float
    peak_omega: float
    gamma: float
    short_waves_fade: float

    def to_array(self) -> np.ndarray:
        """Convert to numpy array for GPU upload."""
        return np.array([getattr(self, f.name) for f in fields(self)], dtype=np.float32)

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def clamp_swell(swell: float, bounds: Tuple[float, float] = SWELL_BOUNDS) -> float:
    lo, hi = _validate.ordered_range("swell bounds", *bounds)
    return min(max(float(swell), lo), hi)


def derive(settings: SpectrumSettings, swell_bounds: Tuple[float, float] = SWELL_BOUNDS) -> SpectrumUniform:
    """Turn spectrum settings into shader constants; swell is always clamped."""
    swell = clamp_swell(settings.swell, swell_bounds)
    if swell != settings.swell:
        logger.debug("Clamped swell %.4f to %.4f", settings.swell, swell)
    return SpectrumUniform(
        scale=settings.scale,
        angle=settings.wind_direction / 180.0 * math.pi,
        spread_blend=settings.spread_blend,
        swell=swell,
        alpha=jonswap_alpha(settings.fetch, settings.wind_speed),
        peak_omega=jonswap_peak_frequency(settings.fetch, settings.wind_speed),
        gamma=settings.peak_enhancement,
        short_waves_fade=settings.short_waves_fade,
    )


@dataclass
class FftWaterMaterial:
    """Spectrum-driven water: time, spectrum inputs and its own shading copy."""

    time: float = 0.0
    spectrum: SpectrumSettings = field(default_factory=SpectrumSettings)
    shading: ShadingModel = field(default_factory=ShadingModel)

    def spectrum_uniform(self) -> SpectrumUniform:
        return derive(self.spectrum)

    def copy(self) -> "FftWaterMaterial":
        return copy.deepcopy(self)
