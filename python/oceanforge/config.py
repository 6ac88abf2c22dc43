# python/oceanforge/config.py
# Water configuration parsing for shading, wave generators and the active method
# Exists to validate every user-supplied value before it reaches a generator or a packed buffer
# RELEVANT FILES: python/oceanforge/presets.py, python/oceanforge/surface.py, python/oceanforge/cli.py, tests/test_water_config.py
from __future__ import annotations

import copy
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from . import _validate
from .fbm_waves import FbmWaveConfig
from .rng import RandomLike, as_random_source
from .shading import ShadingModel
from .spectrum import SpectrumSettings
from .sum_waves import DEFAULT_SETTINGS, SumWaveSettings, WaveType, settings_from_mapping
from .surface import WaveMethod, WaterSurface

logger = logging.getLogger(__name__)

ConfigSource = Union["WaterConfig", Mapping[str, Any], str, Path, None]

_SECTIONS = ("shading", "sum", "fbm", "spectrum")

_SPECTRUM_OVERRIDES = {
    "wind_speed",
    "wind_direction",
    "fetch",
    "swell",
    "scale",
    "spread_blend",
    "peak_enhancement",
    "short_waves_fade",
}


@dataclass
class WaterConfig:
    method: WaveMethod = WaveMethod.FBM
    wave_type: WaveType = WaveType.STEEP_SINE
    seed: Optional[int] = None
    shading: ShadingModel = field(default_factory=ShadingModel)
    sum: SumWaveSettings = DEFAULT_SETTINGS
    fbm: FbmWaveConfig = field(default_factory=FbmWaveConfig)
    spectrum: SpectrumSettings = field(default_factory=SpectrumSettings)

    def to_dict(self) -> dict:
        return {
            "method": self.method.value,
            "wave_type": self.wave_type.name.lower(),
            "seed": self.seed,
            "shading": self.shading.to_dict(),
            "sum": self.sum.to_dict(),
            "fbm": self.fbm.to_dict(),
            "spectrum": self.spectrum.to_dict(),
        }

    def copy(self) -> "WaterConfig":
        return copy.deepcopy(self)

    def validate(self) -> None:
        self.shading.validate()
        # Re-run the boundary checks in case fields were assigned directly.
        SpectrumSettings(**self.spectrum.to_dict())
        FbmWaveConfig.from_mapping(self.fbm.to_dict())
        if self.seed is not None:
            _validate.as_int("seed", self.seed)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], default: Optional["WaterConfig"] = None) -> "WaterConfig":
        base = copy.deepcopy(default) if default is not None else cls()
        for key, value in data.items():
            if key in _SECTIONS and not isinstance(value, Mapping):
                raise TypeError(f"{key} must be a mapping")
            if key == "method":
                base.method = WaveMethod.parse(value)
            elif key == "wave_type":
                base.wave_type = WaveType.parse(value)
            elif key == "seed":
                base.seed = None if value is None else _validate.as_int("seed", value)
            elif key == "shading":
                base.shading = ShadingModel.from_mapping(value, base.shading)
            elif key == "sum":
                base.sum = settings_from_mapping(value, base.sum)
            elif key == "fbm":
                base.fbm = FbmWaveConfig.from_mapping(value, base.fbm)
            elif key == "spectrum":
                base.spectrum = SpectrumSettings.from_mapping(value, base.spectrum)
            else:
                raise ValueError(f"Unknown water config key: {key!r}")
        return base


def read_config_file(path: Path) -> Mapping[str, Any]:
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix in {".json", ""}:
        data = json.loads(text)
        if not isinstance(data, Mapping):
            raise TypeError(f"water config file must contain a JSON object: {path}")
        return data
    raise ValueError(f"Unsupported water config file format: {path}")


def _build_override_mapping(overrides: Mapping[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, value in overrides.items():
        if key in {"method", "wave_type", "seed"}:
            out[key] = value
        elif key in _SPECTRUM_OVERRIDES:
            out.setdefault("spectrum", {})[key] = value
        elif key == "wave_count":
            out.setdefault("sum", {})[key] = value
        elif key in _SECTIONS:
            if not isinstance(value, Mapping):
                raise TypeError(f"{key} override must be a mapping")
            out.setdefault(key, {}).update(value)
        else:
            raise ValueError(f"Unknown water config override: {key!r}")
    return out


def load_water_config(config: ConfigSource = None, overrides: Optional[Mapping[str, Any]] = None) -> WaterConfig:
    if isinstance(config, WaterConfig):
        cfg = config.copy()
    elif isinstance(config, Mapping):
        cfg = WaterConfig.from_mapping(config)
    elif isinstance(config, (str, Path)):
        cfg = WaterConfig.from_mapping(read_config_file(Path(config)))
        logger.debug("Loaded water config from %s", config)
    elif config is None:
        cfg = WaterConfig()
    else:
        raise TypeError("config must be WaterConfig, mapping, path, or None")

    if overrides:
        cfg = WaterConfig.from_mapping(_build_override_mapping(overrides), cfg)
    cfg.validate()
    return cfg


def build_surface(config: ConfigSource = None, rng: RandomLike = None) -> WaterSurface:
    """Create a fully populated :class:`WaterSurface` from a configuration.

    ``rng`` wins over ``config.seed`` when both are given.
    """
    cfg = load_water_config(config)
    source = as_random_source(rng if rng is not None else cfg.seed)
    surface = WaterSurface.create(source, cfg.wave_type, cfg.method, cfg.sum)
    surface.apply_shading(cfg.shading)
    surface.apply_fbm_config(cfg.fbm)
    surface.apply_spectrum(cfg.spectrum)
    return surface
