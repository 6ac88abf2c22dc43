# python/oceanforge/_validate.py
# Argument coercion and range checks shared by the parameter dataclasses
# Exists so every configuration boundary fails fast with the same messages
# RELEVANT FILES: python/oceanforge/shading.py, python/oceanforge/spectrum.py, python/oceanforge/config.py
from __future__ import annotations

import math
from typing import Any, Sequence, Tuple


def as_int(name: str, v: Any) -> int:
    if isinstance(v, bool):
        raise ValueError(f"{name} must be an integer, got bool")
    if isinstance(v, float) and not v.is_integer():
        raise ValueError(f"{name} must be an integer, got {v!r}")
    try:
        i = int(v)
    except Exception as e:
        raise ValueError(f"{name} must be an integer, got {type(v).__name__}") from e
    return i


def as_float(name: str, v: Any) -> float:
    if isinstance(v, bool):
        raise ValueError(f"{name} must be a number, got bool")
    try:
        f = float(v)
    except Exception as e:
        raise ValueError(f"{name} must be a number, got {type(v).__name__}") from e
    if not math.isfinite(f):
        raise ValueError(f"{name} must be finite, got {f!r}")
    return f


def positive_int(name: str, v: Any) -> int:
    i = as_int(name, v)
    if i <= 0:
        raise ValueError(f"{name} must be > 0")
    return i


U32_MAX = 0xFFFFFFFF


def u32(name: str, v: Any) -> int:
    i = as_int(name, v)
    if not 0 <= i <= U32_MAX:
        raise ValueError(f"{name} must fit in an unsigned 32-bit integer, got {i}")
    return i


def positive(name: str, v: Any) -> float:
    f = as_float(name, v)
    if f <= 0.0:
        raise ValueError(f"{name} must be > 0")
    return f


def non_negative(name: str, v: Any) -> float:
    f = as_float(name, v)
    if f < 0.0:
        raise ValueError(f"{name} must be >= 0")
    return f


def unit_interval(name: str, v: Any) -> float:
    f = as_float(name, v)
    if not 0.0 <= f <= 1.0:
        raise ValueError(f"{name} must be within [0, 1]")
    return f


def ordered_range(name: str, low: Any, high: Any) -> Tuple[float, float]:
    lo = as_float(f"{name} low", low)
    hi = as_float(f"{name} high", high)
    if hi < lo:
        raise ValueError(f"{name} range is empty: high ({hi}) < low ({lo})")
    return lo, hi


def color4(name: str, color: Sequence[float]) -> None:
    if len(color) != 4:
        raise ValueError(f"{name} must be [R, G, B, A]")
    for channel in color:
        unit_interval(name, channel)
