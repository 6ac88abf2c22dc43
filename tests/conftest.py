# tests/conftest.py
# Shared fixtures for the oceanforge test suite
# Exists to give every test a reproducible random source
# RELEVANT FILES: python/oceanforge/rng.py, conftest.py
import random

import numpy as np
import pytest


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "layout: tests pinning the uniform byte layout shared with the shaders"
    )


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def py_rng() -> random.Random:
    return random.Random(42)


class FixedSource:
    """Random source replaying a fixed sequence of unit-interval values."""

    def __init__(self, values):
        self._values = list(values)
        self._index = 0

    def random(self) -> float:
        value = self._values[self._index % len(self._values)]
        self._index += 1
        return value


@pytest.fixture
def fixed_source():
    return FixedSource
