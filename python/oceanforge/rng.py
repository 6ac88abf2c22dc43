# python/oceanforge/rng.py
# Bounded uniform sampling on top of an injected random source
# Exists so generators depend only on "uniform float in [0, 1)" and never own a seed
# RELEVANT FILES: python/oceanforge/sum_waves.py, tests/test_rng.py
from __future__ import annotations

from typing import Optional, Protocol, Union

import numpy as np

from ._validate import ordered_range


class RandomSource(Protocol):
    """Anything producing uniform floats in [0, 1) from ``random()``.

    ``random.Random`` and ``numpy.random.Generator`` both qualify.
    """

    def random(self) -> float:
        ...


RandomLike = Union[RandomSource, np.random.Generator, int, None]


def as_random_source(source: RandomLike = None) -> RandomSource:
    """Return a usable random source.

    ``None`` creates a fresh NumPy generator, an integer seeds one, and any
    object with a ``random()`` method is returned as-is.
    """
    if source is None or (isinstance(source, (int, np.integer)) and not isinstance(source, bool)):
        return np.random.default_rng(None if source is None else int(source))
    if callable(getattr(source, "random", None)):
        return source  # type: ignore[return-value]
    raise TypeError(f"random source must provide random(), got {type(source).__name__}")


def sample(rng: RandomSource, low: float, high: float) -> float:
    """Draw a uniform float in [low, high).

    Raises:
        ValueError: if ``high < low``.
    """
    lo, hi = ordered_range("sample", low, high)
    u = float(rng.random())
    return u * (hi - lo) + lo


def sample_around(rng: RandomSource, median: float, spread: float, floor: Optional[float] = None) -> float:
    """Uniform draw from [median - spread, median + spread], optionally floored at ``floor``."""
    low = median - spread
    if floor is not None:
        low = max(low, floor)
    return sample(rng, low, median + spread)
