"""Independent sampler.

Returns independent, uniformly distributed random numbers in [0, 1). The
sampler is essentially a wrapper around a PCG64 engine with a per-pixel
seeding policy:

    seed    = hash_pixel(pixel, base_seed)
    stream  = engine seeded with `seed`, then advanced by `sample_index` draws

The hash decorrelates pixels from one another. The advance only offsets
samples within a pixel: the sub-streams of a pixel's samples overlap, and
sample k's values are sample 0's values shifted by k draws. The first value
of each sample still differs, but a sample consuming several dimensions
reuses values its neighbours saw in other dimensions.

The result only depends on (base_seed, pixel, sample_index), which makes
renders reproducible regardless of how pixels are split between workers.

Configuration:
    {"samples": <positive int>}
"""

from collections.abc import Mapping
from typing import Any

from pixelsampler.core.hashing import hash_pixel
from pixelsampler.core.rng import RandomEngine
from pixelsampler.samplers.base import Sampler, read_positive_int
from pixelsampler.samplers.registry import register_sampler


@register_sampler("independent")
class IndependentSampler(Sampler):
    """Sampler producing independent uniform variates from a seeded PCG64 engine."""

    def __init__(self, config: Mapping[str, Any]) -> None:
        """Build the sampler from its configuration.

        Args:
            config: Mapping with a required positive integer "samples" key.

        Raises:
            ConfigError: If "samples" is missing or not a positive integer.
        """
        super().__init__(read_positive_int(config, "samples"))
        self._rng = RandomEngine()

    def start_pixel(self, pixel: tuple[int, int], sample_index: int) -> None:
        super().start_pixel(pixel, sample_index)
        self._rng.seed(hash_pixel(self._state.pixel, self._state.base_seed))
        self._rng.advance(self._state.sample_index)

    def next1f(self) -> float:
        self._require_pixel()
        self._state.dimension += 1
        return self._rng.draw_scalar()

    def next2f(self) -> tuple[float, float]:
        self._require_pixel()
        self._state.dimension += 2
        return self._rng.draw_pair()

    def clone(self) -> "IndependentSampler":
        """Create an exact copy of this sampler, engine state included.

        The copy reproduces the original's future draws until either one is
        mutated. This is how a sampler is duplicated for worker threads.
        """
        cloned = type(self).__new__(type(self))
        cloned._state = self._state.copy()
        cloned._rng = self._rng.copy()
        return cloned
