"""Name-keyed sampler registry.

Maps a configuration key (e.g. "independent") to a sampler constructor taking
a configuration mapping. Concrete samplers register themselves with the
``register_sampler`` class decorator when their module is imported; importing
``pixelsampler.samplers`` registers all built-in kinds.

Example:
    >>> from pixelsampler.samplers.registry import create_sampler, sampler_from_config
    >>> sampler = create_sampler("independent", {"samples": 16})
    >>> sampler.samples_per_pixel
    16
    >>> sampler = sampler_from_config({"type": "independent", "samples": 4})
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from pixelsampler.samplers.base import ConfigError, Sampler

logger = logging.getLogger(__name__)

# Sampler kind used when a configuration block has no "type" key
DEFAULT_SAMPLER = "independent"

SamplerFactory = Callable[[Mapping[str, Any]], Sampler]

_REGISTRY: dict[str, SamplerFactory] = {}


def register_sampler(name: str) -> Callable[[SamplerFactory], SamplerFactory]:
    """Class decorator registering a sampler constructor under ``name``.

    Args:
        name: The configuration key for the sampler kind.

    Returns:
        A decorator that registers and returns the constructor unchanged.

    Raises:
        ValueError: If the name is already registered.
    """

    def decorator(factory: SamplerFactory) -> SamplerFactory:
        if name in _REGISTRY:
            raise ValueError(f"Sampler '{name}' is already registered")
        _REGISTRY[name] = factory
        logger.debug("Registered sampler '%s'", name)
        return factory

    return decorator


def unregister_sampler(name: str) -> None:
    """Remove a sampler kind from the registry.

    Raises:
        KeyError: If the name is not registered.
    """
    del _REGISTRY[name]


def available_samplers() -> list[str]:
    """Get the sorted names of all registered sampler kinds."""
    return sorted(_REGISTRY)


def create_sampler(name: str, config: Mapping[str, Any]) -> Sampler:
    """Construct a sampler by registered name.

    Args:
        name: Registered sampler kind, e.g. "independent".
        config: Configuration mapping passed to the constructor.

    Returns:
        A fully constructed sampler.

    Raises:
        ConfigError: If the name is unknown or the configuration is invalid.
    """
    factory = _REGISTRY.get(name)
    if factory is None:
        raise ConfigError(
            f"Unknown sampler type '{name}'. Available: {', '.join(available_samplers())}"
        )
    sampler = factory(config)
    logger.debug("Created %r", sampler)
    return sampler


def sampler_from_config(config: Mapping[str, Any]) -> Sampler:
    """Construct a sampler from a configuration block with a "type" key.

    This is the shape samplers take inside a scene file::

        {"type": "independent", "samples": 64}

    Args:
        config: Configuration mapping. "type" defaults to DEFAULT_SAMPLER.

    Returns:
        A fully constructed sampler.

    Raises:
        ConfigError: If the block is not a mapping, the type is unknown or the
            remaining options are invalid.
    """
    if not isinstance(config, Mapping):
        raise ConfigError(f"Sampler configuration must be a mapping, got {type(config).__name__}")
    name = config.get("type", DEFAULT_SAMPLER)
    if not isinstance(name, str):
        raise ConfigError(f"Sampler 'type' must be a string, got {type(name).__name__}")
    return create_sampler(name, config)
