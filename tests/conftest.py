"""Pytest configuration for sampler tests.

This module provides shared fixtures for all test modules: ready-made
samplers and a guard that keeps the sampler registry isolated between tests.
"""

import pytest

from pixelsampler.samplers import IndependentSampler
from pixelsampler.samplers import registry


@pytest.fixture
def sampler():
    """An independent sampler with 16 samples per pixel and base seed 0."""
    return IndependentSampler({"samples": 16})


@pytest.fixture
def seeded_sampler():
    """An independent sampler with a non-trivial base seed."""
    s = IndependentSampler({"samples": 8})
    s.set_base_seed(1337)
    return s


@pytest.fixture(autouse=True)
def restore_registry():
    """Restore the sampler registry after each test.

    Tests that register throwaway sampler kinds must not leak them into
    other tests.
    """
    saved = dict(registry._REGISTRY)
    yield
    registry._REGISTRY.clear()
    registry._REGISTRY.update(saved)
