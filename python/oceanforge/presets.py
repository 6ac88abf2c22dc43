"""
python/oceanforge/presets.py
Named sea-state presets.

Each preset returns a plain dict compatible with
python/oceanforge/config.py::WaterConfig.from_mapping(). Only the values that
differ from the defaults are listed, so presets can be layered on top of a
user configuration.

Example
-------
>>> from oceanforge import presets
>>> from oceanforge.config import load_water_config
>>> cfg = load_water_config(presets.get("storm"), overrides={"wind_direction": 90.0})
"""
from __future__ import annotations

from typing import Any, Callable, Dict, List


def _normalize_name(name: str) -> str:
    return "".join(c for c in str(name).strip().lower() if c not in {"-", "_", " ", "."})


def default() -> Dict[str, Any]:
    """Defaults as shipped: FBM surface, steep-sine waves, 20 m/s open-ocean wind."""
    return {"method": "fbm", "wave_type": "steep-sine"}


def calm() -> Dict[str, Any]:
    """Light breeze over a short fetch with small, slow sum-of-sines waves."""
    return {
        "method": "sum",
        "wave_type": "sine",
        "sum": {
            "median_amplitude": 0.04,
            "median_speed": 0.3,
            "speed_range": 0.05,
            "directional_range_deg": 15.0,
        },
        "fbm": {
            "vertex": {"amplitude": 0.5, "amplitude_mult": 0.75},
            "fragment": {"amplitude": 0.5, "amplitude_mult": 0.75},
        },
        "spectrum": {"wind_speed": 4.0, "fetch": 20000.0, "swell": 0.1},
    }


def storm() -> Dict[str, Any]:
    """Strong wind, long fetch, sharp crests and a bright foam tint."""
    return {
        "method": "fft",
        "wave_type": "steep-sine",
        "sum": {"median_amplitude": 0.18, "median_speed": 0.9, "speed_range": 0.3},
        "fbm": {
            "vertex": {"wave_count": 48, "height": 1.6, "max_peak": 1.4, "drag": 0.6},
            "fragment": {"wave_count": 48, "height": 1.6, "max_peak": 1.4, "drag": 0.6},
        },
        "spectrum": {"wind_speed": 35.0, "fetch": 500000.0, "peak_enhancement": 3.3, "swell": 0.8},
        "shading": {"tip_attenuation": 3.0},
    }


def swell() -> Dict[str, Any]:
    """Long-period swell: narrow directional spread, high swell factor."""
    return {
        "method": "fft",
        "sum": {"median_wavelength": 4.0, "wavelength_range": 0.5, "directional_range_deg": 8.0},
        "spectrum": {"wind_speed": 12.0, "swell": 1.0, "spread_blend": 0.2, "short_waves_fade": 0.5},
    }


_PRESETS: Dict[str, Callable[[], Dict[str, Any]]] = {
    "default": default,
    "calm": calm,
    "storm": storm,
    "swell": swell,
}


def available() -> List[str]:
    return sorted(_PRESETS)


def get(name: str) -> Dict[str, Any]:
    """Return a fresh mapping for ``name``; raises ValueError for unknown presets."""
    key = _normalize_name(name)
    if key not in _PRESETS:
        raise ValueError(f"Unknown preset: {name!r}. Available: {', '.join(available())}")
    return _PRESETS[key]()
