"""Sample generators consumed by Monte Carlo integrators.

Components:
    base: Sampler contract, shared SamplerState and ConfigError
    independent: Independent uniform samples from a seeded PCG64 engine
    registry: Name-keyed construction of samplers from configuration

Importing this package registers every built-in sampler kind, so
``create_sampler("independent", {...})`` works right after
``import pixelsampler.samplers``.
"""

from .base import ConfigError, Sampler, SamplerState
from .independent import IndependentSampler
from .registry import (
    available_samplers,
    create_sampler,
    register_sampler,
    sampler_from_config,
    unregister_sampler,
)

__all__ = [
    "ConfigError",
    "Sampler",
    "SamplerState",
    "IndependentSampler",
    "available_samplers",
    "create_sampler",
    "register_sampler",
    "sampler_from_config",
    "unregister_sampler",
]
