# python/oceanforge/sum_waves.py
# Randomized sum-of-sines wave fields and the material record that carries them
# Exists to synthesize plausible per-wave direction, frequency, amplitude and phase
# RELEVANT FILES: python/oceanforge/rng.py, python/oceanforge/uniforms.py, tests/test_sum_waves.py
"""Sum-of-sines water.

Each wave is built from (type, direction angle, speed, amplitude, wavelength,
steepness). Direction, frequency and phase are derived once at construction:

    direction = (cos(angle), sin(angle))
    frequency = 2 / wavelength
    phase     = speed * sqrt(g * 2 * pi / wavelength)
"""

from __future__ import annotations

import copy
import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, field, fields, replace
from enum import IntEnum
from typing import Any, Iterable, Iterator, List, Optional, Tuple, Union, overload

import numpy as np

from . import _validate
from .rng import RandomSource, sample, sample_around
from .shading import ShadingModel

logger = logging.getLogger(__name__)

GRAVITY = 9.81
WAVE_COUNT = 4

_WAVE_TYPE_NAMES = {
    "sine": "SINE",
    "steepsine": "STEEP_SINE",
    "steep": "STEEP_SINE",
}


class WaveType(IntEnum):
    """Display function used by the shader for one wave."""

    SINE = 0
    STEEP_SINE = 1

    def cycle(self) -> "WaveType":
        return WaveType.SINE if self is WaveType.STEEP_SINE else WaveType.STEEP_SINE

    @classmethod
    def parse(cls, value: Union["WaveType", int, str]) -> "WaveType":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = "".join(c for c in value.strip().lower() if c not in {"-", "_", " ", "."})
            if key not in _WAVE_TYPE_NAMES:
                raise ValueError(f"Unknown wave type: {value!r}")
            return cls[_WAVE_TYPE_NAMES[key]]
        try:
            return cls(int(value))
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Unknown wave type: {value!r}") from exc


@dataclass(frozen=True)
class SumWaveSettings:
    """Distribution the random generator draws waves from.

    Angles are in radians. ``min_speed`` keeps the dispersion formula defined.
    """

    wave_count: int = WAVE_COUNT
    median_wavelength: float = 1.0
    wavelength_range: float = 1.0
    median_direction: float = 0.0
    directional_range: float = math.radians(30.0)
    median_amplitude: float = 0.1
    median_speed: float = 0.5
    speed_range: float = 0.1
    min_speed: float = 0.01
    steepness: float = 2.0

    def __post_init__(self) -> None:
        _validate.positive_int("wave_count", self.wave_count)
        _validate.positive("median_wavelength", self.median_wavelength)
        _validate.non_negative("wavelength_range", self.wavelength_range)
        _validate.as_float("median_direction", self.median_direction)
        _validate.non_negative("directional_range", self.directional_range)
        _validate.non_negative("median_amplitude", self.median_amplitude)
        _validate.as_float("median_speed", self.median_speed)
        _validate.non_negative("speed_range", self.speed_range)
        _validate.positive("min_speed", self.min_speed)
        _validate.as_float("steepness", self.steepness)
        if self.median_speed + self.speed_range < self.min_speed:
            raise ValueError("median_speed + speed_range must reach min_speed")

    def wavelength_bounds(self) -> Tuple[float, float]:
        return (
            self.median_wavelength / (1.0 + self.wavelength_range),
            self.median_wavelength * (1.0 + self.wavelength_range),
        )

    def amplitude_ratio(self) -> float:
        return self.median_amplitude / self.median_wavelength

    def to_dict(self) -> dict:
        return {
            "wave_count": self.wave_count,
            "median_wavelength": self.median_wavelength,
            "wavelength_range": self.wavelength_range,
            "median_direction_deg": math.degrees(self.median_direction),
            "directional_range_deg": math.degrees(self.directional_range),
            "median_amplitude": self.median_amplitude,
            "median_speed": self.median_speed,
            "speed_range": self.speed_range,
            "min_speed": self.min_speed,
            "steepness": self.steepness,
        }


DEFAULT_SETTINGS = SumWaveSettings()


class WaveSpec:
    """One traveling wave of a sum-of-sines field.

    Only ``ty`` is writable; everything else is fixed at construction.
    """

    __slots__ = ("ty", "_direction", "_frequency", "_amplitude", "_phase", "_steepness")

    def __init__(
        self,
        ty: Union[WaveType, int, str],
        direction: float,
        speed: float,
        amplitude: float,
        wavelength: float,
        steepness: float,
    ) -> None:
        angle = _validate.as_float("direction", direction)
        speed = _validate.as_float("speed", speed)
        wavelength = _validate.positive("wavelength", wavelength)
        self.ty = WaveType.parse(ty)
        self._direction = (math.cos(angle), math.sin(angle))
        self._frequency = 2.0 / wavelength
        self._amplitude = _validate.as_float("amplitude", amplitude)
        self._phase = speed * math.sqrt(GRAVITY * 2.0 * math.pi / wavelength)
        self._steepness = _validate.as_float("steepness", steepness)

    @classmethod
    def default(cls) -> "WaveSpec":
        return cls(WaveType.SINE, 0.0, 1.0, 1.0, 1.0, 1.0)

    @property
    def direction(self) -> Tuple[float, float]:
        return self._direction

    @property
    def angle(self) -> float:
        return math.atan2(self._direction[1], self._direction[0])

    @property
    def frequency(self) -> float:
        return self._frequency

    @property
    def wavelength(self) -> float:
        return 2.0 / self._frequency

    @property
    def amplitude(self) -> float:
        return self._amplitude

    @property
    def phase(self) -> float:
        return self._phase

    @property
    def speed(self) -> float:
        return self._phase / math.sqrt(GRAVITY * 2.0 * math.pi / self.wavelength)

    @property
    def steepness(self) -> float:
        return self._steepness

    def as_matrix(self) -> np.ndarray:
        """Column-major 3x3 block the shader reads; row ``i`` of the result is column ``i``."""
        dx, dy = self._direction
        return np.array(
            [
                [dx, dy, self._frequency],
                [self._amplitude, self._phase, self._steepness],
                [float(int(self.ty)), 0.0, 0.0],
            ],
            dtype=np.float32,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WaveSpec):
            return NotImplemented
        return (
            self.ty == other.ty
            and self._direction == other._direction
            and self._frequency == other._frequency
            and self._amplitude == other._amplitude
            and self._phase == other._phase
            and self._steepness == other._steepness
        )

    def __repr__(self) -> str:
        return (
            f"WaveSpec(ty={self.ty.name}, direction=({self._direction[0]:.4f}, {self._direction[1]:.4f}), "
            f"frequency={self._frequency:.4f}, amplitude={self._amplitude:.4f}, "
            f"phase={self._phase:.4f}, steepness={self._steepness:.4f})"
        )


class SumWaveField(Sequence):
    """Fixed-length ordered collection of waves.

    The length is checked once here; the field can be redrawn in place but
    never grown or shrunk.
    """

    def __init__(self, waves: Iterable[WaveSpec], count: Optional[int] = None) -> None:
        items = list(waves)
        if not items:
            raise ValueError("a wave field needs at least one wave")
        if count is not None and len(items) != count:
            raise ValueError(f"expected {count} waves, got {len(items)}")
        for wave in items:
            if not isinstance(wave, WaveSpec):
                raise TypeError(f"waves must be WaveSpec, got {type(wave).__name__}")
        self._waves: List[WaveSpec] = items

    @overload
    def __getitem__(self, index: int) -> WaveSpec: ...

    @overload
    def __getitem__(self, index: slice) -> List[WaveSpec]: ...

    def __getitem__(self, index):
        return self._waves[index]

    def __len__(self) -> int:
        return len(self._waves)

    def __iter__(self) -> Iterator[WaveSpec]:
        return iter(self._waves)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SumWaveField):
            return NotImplemented
        return self._waves == other._waves

    def __repr__(self) -> str:
        return f"SumWaveField({self._waves!r})"

    @property
    def wave_type(self) -> WaveType:
        return self._waves[0].ty

    def replace_all(self, waves: Iterable[WaveSpec]) -> None:
        items = list(waves)
        if len(items) != len(self._waves):
            raise ValueError(f"expected {len(self._waves)} waves, got {len(items)}")
        self._waves[:] = items

    def as_matrices(self) -> np.ndarray:
        return np.stack([wave.as_matrix() for wave in self._waves])


def random_wave(
    ty: Union[WaveType, int, str],
    rng: RandomSource,
    settings: Optional[SumWaveSettings] = None,
) -> WaveSpec:
    """Draw one wave; amplitude scales with wavelength so steepness stays roughly constant."""
    s = settings or DEFAULT_SETTINGS
    wavelength = sample(rng, *s.wavelength_bounds())
    direction = sample_around(rng, s.median_direction, s.directional_range)
    amplitude = wavelength * s.amplitude_ratio()
    speed = sample_around(rng, s.median_speed, s.speed_range, floor=s.min_speed)
    return WaveSpec(ty, direction, speed, amplitude, wavelength, s.steepness)


def random_field(
    ty: Union[WaveType, int, str],
    rng: RandomSource,
    count: Optional[int] = None,
    settings: Optional[SumWaveSettings] = None,
) -> SumWaveField:
    """Draw ``count`` independent waves (defaults to ``settings.wave_count``)."""
    s = settings or DEFAULT_SETTINGS
    n = s.wave_count if count is None else _validate.positive_int("count", count)
    wave_type = WaveType.parse(ty)
    return SumWaveField((random_wave(wave_type, rng, s) for _ in range(n)), count=n)


def randomize(field: SumWaveField, rng: RandomSource, settings: Optional[SumWaveSettings] = None) -> None:
    """Redraw every wave in place, keeping the field's current wave type."""
    wave_type = field.wave_type
    field.replace_all(random_wave(wave_type, rng, settings) for _ in range(len(field)))
    logger.debug("Regenerated %d %s waves", len(field), wave_type.name)


def set_wave_type(field: SumWaveField, ty: Union[WaveType, int, str]) -> None:
    """Switch the display function of every wave without touching its geometry."""
    wave_type = WaveType.parse(ty)
    for wave in field:
        wave.ty = wave_type


@dataclass
class SumWaterMaterial:
    """Sum-of-sines water: time, wave field and its own shading copy."""

    waves: SumWaveField
    time: float = 0.0
    shading: ShadingModel = field(default_factory=ShadingModel)

    @classmethod
    def random(
        cls,
        wave_type: Union[WaveType, int, str],
        rng: RandomSource,
        settings: Optional[SumWaveSettings] = None,
    ) -> "SumWaterMaterial":
        return cls(waves=random_field(wave_type, rng, settings=settings))

    @property
    def wave_type(self) -> WaveType:
        return self.waves.wave_type

    def randomize(self, rng: RandomSource, settings: Optional[SumWaveSettings] = None) -> None:
        randomize(self.waves, rng, settings)

    def set_wave_type(self, ty: Union[WaveType, int, str]) -> None:
        set_wave_type(self.waves, ty)

    def copy(self) -> "SumWaterMaterial":
        return copy.deepcopy(self)

    def to_dict(self) -> dict:
        return {
            "time": self.time,
            "wave_type": self.wave_type.name,
            "waves": [
                {
                    "ty": wave.ty.name,
                    "direction": list(wave.direction),
                    "frequency": wave.frequency,
                    "amplitude": wave.amplitude,
                    "phase": wave.phase,
                    "steepness": wave.steepness,
                }
                for wave in self.waves
            ],
            "shading": self.shading.to_dict(),
        }


def settings_from_mapping(data: Any, default: Optional[SumWaveSettings] = None) -> SumWaveSettings:
    """Build settings from a mapping; directional keys ending in ``_deg`` are in degrees."""
    base = default or DEFAULT_SETTINGS
    known = {f.name for f in fields(SumWaveSettings)}
    updates = {}
    for key, value in data.items():
        if key in {"median_direction_deg", "directional_range_deg"}:
            updates[key[: -len("_deg")]] = math.radians(_validate.as_float(key, value))
        elif key == "wave_count":
            updates[key] = _validate.positive_int(key, value)
        elif key in known:
            updates[key] = _validate.as_float(key, value)
        else:
            raise ValueError(f"Unknown sum-of-sines parameter: {key!r}")
    return replace(base, **updates)
