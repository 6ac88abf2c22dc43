# tests/test_rng.py
# Unit tests for bounded uniform sampling and random-source adaptation
# RELEVANT FILES: python/oceanforge/rng.py
import random

import numpy as np
import pytest

from oceanforge.rng import as_random_source, sample, sample_around


def test_sample_stays_in_half_open_range(rng) -> None:
    values = [sample(rng, -2.0, 3.0) for _ in range(500)]
    assert min(values) >= -2.0
    assert max(values) < 3.0


def test_sample_maps_unit_interval_linearly(fixed_source) -> None:
    src = fixed_source([0.0, 0.5, 0.25])
    assert sample(src, 1.0, 3.0) == pytest.approx(1.0)
    assert sample(src, 1.0, 3.0) == pytest.approx(2.0)
    assert sample(src, 1.0, 3.0) == pytest.approx(1.5)


def test_sample_degenerate_range(fixed_source) -> None:
    assert sample(fixed_source([0.7]), 4.0, 4.0) == pytest.approx(4.0)


def test_sample_rejects_inverted_range(rng) -> None:
    with pytest.raises(ValueError):
        sample(rng, 1.0, 0.0)


def test_sample_around_applies_floor(fixed_source) -> None:
    # median 0.05 +- 0.1 floored at 0.01 -> [0.01, 0.15]
    assert sample_around(fixed_source([0.0]), 0.05, 0.1, floor=0.01) == pytest.approx(0.01)
    assert sample_around(fixed_source([0.0]), 0.05, 0.1) == pytest.approx(-0.05)


def test_as_random_source_variants() -> None:
    seeded_a = as_random_source(7)
    seeded_b = as_random_source(7)
    assert seeded_a.random() == seeded_b.random()
    assert isinstance(as_random_source(None), np.random.Generator)
    py = random.Random(1)
    assert as_random_source(py) is py
    gen = np.random.default_rng(3)
    assert as_random_source(gen) is gen
    with pytest.raises(TypeError):
        as_random_source("not-a-source")
