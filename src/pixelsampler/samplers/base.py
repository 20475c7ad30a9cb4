"""Abstract sample generator contract.

A sampler generates the random number stream an integrator consumes while it
computes the radiance arriving through one pixel sample. Every concrete
sampler shares the bookkeeping in ``SamplerState``:

    base_seed          fixed for the whole render (set once, before cloning)
    samples_per_pixel  configured sample count
    sample_index       index of the sample being rendered
    dimension          number of values drawn since the last start_pixel()
    pixel              integer (x, y) coordinate being rendered

Lifecycle:
    1. Construct from configuration (usually through the registry).
    2. ``set_base_seed()`` once.
    3. ``clone()`` once per render worker.
    4. Per pixel and sample: ``start_pixel()``, then ``next1f()``/``next2f()``
       in the order the integrator needs them.

Example:
    >>> from pixelsampler.samplers.registry import create_sampler
    >>> sampler = create_sampler("independent", {"samples": 4})
    >>> sampler.set_base_seed(7)
    >>> worker = sampler.clone()
    >>> worker.start_pixel((10, 20), 0)
    >>> u = worker.next1f()
    >>> u1, u2 = worker.next2f()
    >>> worker.dimension
    3
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, replace
from numbers import Integral
from typing import Any

# Base seeds are stored as unsigned 32-bit values
SEED_MASK = 0xFFFFFFFF


class ConfigError(ValueError):
    """Raised when a sampler cannot be built from its configuration."""


@dataclass
class SamplerState:
    """Per-render and per-sample bookkeeping shared by all samplers.

    Attributes:
        base_seed: Global seed, constant across the render.
        samples_per_pixel: Number of samples rendered for every pixel.
        sample_index: Index of the current sample, in [0, samples_per_pixel).
        dimension: Values consumed since the current sample started.
        pixel: The (x, y) coordinate of the current pixel.
        pixel_active: True once start_pixel() has been called.
    """

    base_seed: int = 0
    samples_per_pixel: int = 1
    sample_index: int = 0
    dimension: int = 0
    pixel: tuple[int, int] = (0, 0)
    pixel_active: bool = False

    def copy(self) -> "SamplerState":
        """Return a value copy of this state."""
        return replace(self)


def read_positive_int(config: Mapping[str, Any], key: str) -> int:
    """Read a required positive integer option from a sampler configuration.

    Args:
        config: Parsed configuration mapping (e.g. a JSON object).
        key: The option name.

    Returns:
        The option value as an int.

    Raises:
        ConfigError: If the option is missing, not an integer, or not positive.
    """
    if not isinstance(config, Mapping):
        raise ConfigError(f"Sampler configuration must be a mapping, got {type(config).__name__}")
    if key not in config:
        raise ConfigError(f"Missing required sampler option '{key}'")

    value = config[key]
    # bool is an Integral subclass but "samples": true is never intended
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise ConfigError(
            f"Sampler option '{key}' must be an integer, got {type(value).__name__} ({value!r})"
        )
    if value <= 0:
        raise ConfigError(f"Sampler option '{key}' must be positive, got {value}")
    return int(value)


class Sampler(ABC):
    """Abstract base class for pixel sample generators.

    Subclasses embed a ``SamplerState`` (available as ``self._state``) and add
    their own private generator state. They must implement ``next1f``,
    ``next2f`` and ``clone``; samplers that reseed per pixel also extend
    ``start_pixel``.
    """

    def __init__(self, samples_per_pixel: int = 1) -> None:
        self._state = SamplerState(samples_per_pixel=samples_per_pixel)

    # =========================================================================
    # Configuration
    # =========================================================================

    def set_base_seed(self, seed: int) -> None:
        """Set the base seed shared by the whole render.

        Seeding deterministically is what makes two runs with the same
        configuration produce identical images. Call this once, before the
        sampler is cloned for the render workers.

        Args:
            seed: A non-negative integer; only the low 32 bits are kept.

        Raises:
            ValueError: If the seed is negative or not an integer.
        """
        if isinstance(seed, bool) or not isinstance(seed, Integral):
            raise ValueError(f"Base seed must be an integer, got {type(seed).__name__}")
        if seed < 0:
            raise ValueError(f"Base seed must be non-negative, got {seed}")
        self._state.base_seed = int(seed) & SEED_MASK

    @property
    def base_seed(self) -> int:
        """The base seed of the render."""
        return self._state.base_seed

    @property
    def samples_per_pixel(self) -> int:
        """The number of configured pixel samples."""
        return self._state.samples_per_pixel

    # =========================================================================
    # Per-sample bookkeeping
    # =========================================================================

    def start_pixel(self, pixel: tuple[int, int], sample_index: int) -> None:
        """Prepare to generate values for one sample of pixel (x, y).

        Called by the integrator every time it starts a new (pixel, sample)
        pair. The base implementation stores the coordinate and index and
        resets the dimension to zero.

        Args:
            pixel: Integer (x, y) image coordinate.
            sample_index: Sample number within the pixel.

        Raises:
            ValueError: If sample_index is not an integer in
                [0, samples_per_pixel), or the pixel is not an integer pair.
        """
        self._check_sample_index(sample_index)
        x, y = pixel
        for name, coord in (("x", x), ("y", y)):
            if isinstance(coord, bool) or not isinstance(coord, Integral):
                raise ValueError(
                    f"Pixel {name} coordinate must be an integer, got {type(coord).__name__}"
                )
        self._state.pixel = (int(x), int(y))
        self._state.sample_index = int(sample_index)
        self._state.dimension = 0
        self._state.pixel_active = True

    @property
    def sample_index(self) -> int:
        """Index of the sample currently being generated.

        Writable so callers can resume or re-render a specific sample. Setting
        it does not reseed the generator; the next ``start_pixel`` call does.
        """
        return self._state.sample_index

    @sample_index.setter
    def sample_index(self, index: int) -> None:
        self._check_sample_index(index)
        self._state.sample_index = int(index)

    @property
    def dimension(self) -> int:
        """Number of values drawn since the current sample started."""
        return self._state.dimension

    @property
    def pixel(self) -> tuple[int, int]:
        """The pixel coordinate of the current sample."""
        return self._state.pixel

    def _check_sample_index(self, index: int) -> None:
        if isinstance(index, bool) or not isinstance(index, Integral):
            raise ValueError(f"Sample index must be an integer, got {type(index).__name__}")
        if not 0 <= index < self._state.samples_per_pixel:
            raise ValueError(
                f"Sample index {index} is outside [0, {self._state.samples_per_pixel})"
            )

    def _require_pixel(self) -> None:
        assert self._state.pixel_active, "start_pixel() must be called before drawing samples"

    # =========================================================================
    # Sample generation
    # =========================================================================

    @abstractmethod
    def next1f(self) -> float:
        """Retrieve the next value (one dimension) of the current sample."""

    @abstractmethod
    def next2f(self) -> tuple[float, float]:
        """Retrieve the next two values (two dimensions) of the current sample."""

    @abstractmethod
    def clone(self) -> "Sampler":
        """Create an exact, fully independent copy of this sampler.

        Used to give every render worker its own sampler. No later mutation of
        either instance may be observable in the other.
        """

    def __repr__(self) -> str:
        """Return a string representation of the sampler state."""
        state = self._state
        return (
            f"{type(self).__name__}(samples_per_pixel={state.samples_per_pixel}, "
            f"base_seed={state.base_seed}, pixel={state.pixel}, "
            f"sample_index={state.sample_index}, dimension={state.dimension})"
        )
