# python/oceanforge/surface.py
# Keeps all three water materials warm and tracks which one the renderer shows
# Exists so switching methods is a tag change and repacking follows explicit dirty flags
# RELEVANT FILES: python/oceanforge/uniforms.py, python/oceanforge/config.py, tests/test_surface.py
from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Dict, Iterable, Optional, Set, Union

from .fbm_waves import FbmWaterMaterial, FbmWaveConfig
from .rng import RandomLike, as_random_source
from .shading import ShadingModel
from .spectrum import FftWaterMaterial, SpectrumSettings
from .sum_waves import SumWaterMaterial, SumWaveSettings, WaveType
from .uniforms import UniformRecord, pack

logger = logging.getLogger(__name__)

# Elapsed time wraps so f32 precision in the shader stays usable.
TIME_WRAP_SECONDS = 3600.0

_METHOD_ALIASES: Dict[str, str] = {
    "sum": "sum",
    "sumofsines": "sum",
    "sumsines": "sum",
    "sines": "sum",
    "fbm": "fbm",
    "fractionalbrownianmotion": "fbm",
    "fft": "fft",
    "spectrum": "fft",
    "jonswap": "fft",
}


class WaveMethod(Enum):
    SUM_OF_SINES = "sum"
    FBM = "fbm"
    FFT = "fft"

    @classmethod
    def parse(cls, value: Union["WaveMethod", str]) -> "WaveMethod":
        if isinstance(value, cls):
            return value
        key = "".join(c for c in str(value).strip().lower() if c not in {"-", "_", " ", "."})
        if key not in _METHOD_ALIASES:
            raise ValueError(f"Unknown wave method: {value!r}")
        return cls(_METHOD_ALIASES[key])


class WaterSurface:
    """Three independently owned water materials plus the active-method tag.

    Not thread-safe: callers serialize mutation and packing on one thread.
    """

    def __init__(
        self,
        sum_material: SumWaterMaterial,
        fbm_material: Optional[FbmWaterMaterial] = None,
        fft_material: Optional[FftWaterMaterial] = None,
        method: Union[WaveMethod, str] = WaveMethod.FBM,
        sum_settings: Optional[SumWaveSettings] = None,
    ):
        self._materials = {
            WaveMethod.SUM_OF_SINES: sum_material,
            WaveMethod.FBM: fbm_material if fbm_material is not None else FbmWaterMaterial(),
            WaveMethod.FFT: fft_material if fft_material is not None else FftWaterMaterial(),
        }
        self.sum_settings = sum_settings
        self._method = WaveMethod.parse(method)
        self._time = 0.0
        self._dirty: Set[WaveMethod] = set(WaveMethod)

    @classmethod
    def create(
        cls,
        rng: RandomLike = None,
        wave_type: Union[WaveType, int, str] = WaveType.STEEP_SINE,
        method: Union[WaveMethod, str] = WaveMethod.FBM,
        sum_settings: Optional[SumWaveSettings] = None,
    ) -> "WaterSurface":
        source = as_random_source(rng)
        sum_material = SumWaterMaterial.random(wave_type, source, sum_settings)
        return cls(sum_material, method=method, sum_settings=sum_settings)

    @property
    def method(self) -> WaveMethod:
        return self._method

    @property
    def time(self) -> float:
        return self._time

    @property
    def sum_material(self) -> SumWaterMaterial:
        return self._materials[WaveMethod.SUM_OF_SINES]  # type: ignore[return-value]

    @property
    def fbm_material(self) -> FbmWaterMaterial:
        return self._materials[WaveMethod.FBM]  # type: ignore[return-value]

    @property
    def fft_material(self) -> FftWaterMaterial:
        return self._materials[WaveMethod.FFT]  # type: ignore[return-value]

    def material(self, method: Union[WaveMethod, str, None] = None):
        return self._materials[self._method if method is None else WaveMethod.parse(method)]

    def advance(self, elapsed: float) -> float:
        """Set elapsed time (seconds) on every material, wrapped to ``TIME_WRAP_SECONDS``."""
        t = float(elapsed)
        if not math.isfinite(t) or t < 0.0:
            raise ValueError(f"elapsed time must be finite and >= 0, got {elapsed!r}")
        self._time = math.fmod(t, TIME_WRAP_SECONDS)
        for material in self._materials.values():
            material.time = self._time
        self._dirty.update(WaveMethod)
        return self._time

    def set_method(self, method: Union[WaveMethod, str]) -> bool:
        """Switch the active method; returns True when it changed."""
        new_method = WaveMethod.parse(method)
        if new_method is self._method:
            return False
        logger.debug("Wave method %s -> %s", self._method.value, new_method.value)
        self._method = new_method
        self._dirty.add(new_method)
        return True

    def set_wave_type(self, wave_type: Union[WaveType, int, str]) -> bool:
        new_type = WaveType.parse(wave_type)
        if self.sum_material.wave_type is new_type:
            return False
        self.sum_material.set_wave_type(new_type)
        self._dirty.add(WaveMethod.SUM_OF_SINES)
        return True

    def regenerate(self, rng: RandomLike = None) -> None:
        """Redraw the sum-of-sines waves, keeping their wave type."""
        self.sum_material.randomize(as_random_source(rng), self.sum_settings)
        self._dirty.add(WaveMethod.SUM_OF_SINES)

    def apply_shading(
        self,
        shading: ShadingModel,
        methods: Optional[Iterable[Union[WaveMethod, str]]] = None,
    ) -> None:
        """Copy ``shading`` into each selected material (all of them by default)."""
        targets = list(WaveMethod) if methods is None else [WaveMethod.parse(m) for m in methods]
        for method in targets:
            self._materials[method].shading = shading.copy()
            self._dirty.add(method)

    def apply_fbm_config(self, config: FbmWaveConfig) -> None:
        self.fbm_material.fbm_config = config.copy()
        self._dirty.add(WaveMethod.FBM)

    def apply_spectrum(self, settings: SpectrumSettings) -> None:
        self.fft_material.spectrum = settings.copy()
        self._dirty.add(WaveMethod.FFT)

    def mark_dirty(self, method: Union[WaveMethod, str]) -> None:
        self._dirty.add(WaveMethod.parse(method))

    def is_dirty(self, method: Union[WaveMethod, str, None] = None) -> bool:
        return (self._method if method is None else WaveMethod.parse(method)) in self._dirty

    def take_dirty(self) -> Set[WaveMethod]:
        """Return and clear the set of materials changed since the last call."""
        dirty, self._dirty = self._dirty, set()
        return dirty

    def pack(self, method: Union[WaveMethod, str, None] = None) -> UniformRecord:
        return pack(self.material(method))

    def pack_active(self) -> UniformRecord:
        return self.pack(self._method)

    def pack_all(self) -> Dict[WaveMethod, UniformRecord]:
        return {method: pack(material) for method, material in self._materials.items()}
