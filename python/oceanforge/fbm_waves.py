# python/oceanforge/fbm_waves.py
# Declarative FBM octave parameters for the vertex and fragment shader stages
# Exists to keep the two mirrored parameter blocks aligned with the FBM shader uniform
# RELEVANT FILES: python/oceanforge/uniforms.py, python/oceanforge/config.py, tests/test_fbm_waves.py
from __future__ import annotations

import copy
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional, Tuple

from . import _validate
from .shading import ShadingModel

FBM_DOMAINS: Tuple[str, ...] = ("vertex", "fragment")


@dataclass
class FbmDomainParams:
    """Octave parameters for one shader stage.

    Seeds feed the GPU-side noise function; nothing is randomized here.
    """

    wave_count: int = 40
    seed: float = 0.0
    seed_iter: float = 1253.2131
    frequency: float = 1.0
    frequency_mult: float = 1.18
    amplitude: float = 1.0
    amplitude_mult: float = 0.82
    initial_speed: float = 2.0
    speed_ramp: float = 1.07
    drag: float = 1.0
    height: float = 1.0
    max_peak: float = 1.0
    peak_offset: float = 1.0

    def __post_init__(self) -> None:
        for name in FBM_PARAMETERS:
            setattr(self, name, _coerce(name, getattr(self, name)))

    def to_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in FBM_PARAMETERS}


FBM_PARAMETERS: Tuple[str, ...] = tuple(f.name for f in fields(FbmDomainParams))


def _coerce(name: str, value: Any) -> Any:
    if name == "wave_count":
        return _validate.u32(name, _validate.positive_int(name, value))
    return _validate.as_float(name, value)


def _split(name: str) -> Tuple[str, str]:
    domain, _, param = name.partition("_")
    if domain not in FBM_DOMAINS or param not in FBM_PARAMETERS:
        raise ValueError(f"Unknown FBM parameter: {name!r}")
    return domain, param


@dataclass
class FbmWaveConfig:
    """Vertex and fragment FBM parameter blocks.

    Flat names such as ``vertex_seed_iter`` or ``fragment_drag`` address a
    single scalar and can be read as attributes or written with :meth:`update`.
    """

    vertex: FbmDomainParams = field(default_factory=FbmDomainParams)
    fragment: FbmDomainParams = field(default_factory=FbmDomainParams)

    def __getattr__(self, name: str) -> Any:
        domain, _, param = name.partition("_")
        block = self.__dict__.get(domain)
        if block is None or param not in FBM_PARAMETERS:
            raise AttributeError(name)
        return getattr(block, param)

    @staticmethod
    def fields() -> List[str]:
        """Flat parameter names in uniform packing order."""
        return [f"{domain}_{param}" for domain in FBM_DOMAINS for param in FBM_PARAMETERS]

    def get(self, name: str) -> Any:
        domain, param = _split(name)
        return getattr(getattr(self, domain), param)

    def update(self, name: str, value: Any) -> None:
        domain, param = _split(name)
        setattr(getattr(self, domain), param, _coerce(param, value))

    def to_dict(self) -> Dict[str, Any]:
        return {name: self.get(name) for name in self.fields()}

    def copy(self) -> "FbmWaveConfig":
        return copy.deepcopy(self)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], default: Optional["FbmWaveConfig"] = None) -> "FbmWaveConfig":
        """Accept flat names or nested ``{"vertex": {...}, "fragment": {...}}`` blocks."""
        base = copy.deepcopy(default) if default is not None else cls()
        for key, value in data.items():
            if key in FBM_DOMAINS:
                if not isinstance(value, Mapping):
                    raise TypeError(f"fbm.{key} must be a mapping")
                for param, param_value in value.items():
                    base.update(f"{key}_{param}", param_value)
            else:
                base.update(key, value)
        return base


def update(config: FbmWaveConfig, name: str, value: Any) -> None:
    """Set one flat FBM scalar; no derived state to refresh."""
    config.update(name, value)


@dataclass
class FbmWaterMaterial:
    """FBM water: time, octave configuration and its own shading copy."""

    time: float = 0.0
    fbm_config: FbmWaveConfig = field(default_factory=FbmWaveConfig)
    shading: ShadingModel = field(default_factory=ShadingModel)

    def copy(self) -> "FbmWaterMaterial":
        return copy.deepcopy(self)
