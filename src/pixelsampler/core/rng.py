"""Seedable random engine with deterministic jump-ahead.

This module wraps numpy's PCG64 bit generator behind the small interface a
pixel sampler needs: reseed from an integer, skip ahead by a number of draws,
and produce uniform floats in [0, 1).

PCG64 is a good fit for pixel samplers because its linear state transition
allows ``advance(n)`` to jump over ``n`` draws in O(log n) steps. A sampler
can therefore reseed per pixel and skip straight to the sub-stream of a given
sample index without storing any per-sample state.

Every uniform float consumes exactly one 64-bit output of the bit generator,
so "advance by n" and "draw n floats" move the stream to the same place.

Example:
    >>> from pixelsampler.core.rng import RandomEngine
    >>> rng = RandomEngine()
    >>> rng.seed(42)
    >>> u = rng.draw_scalar()  # uniform float in [0, 1)
    >>> rng.advance(10)  # skip ten draws
    >>> u1, u2 = rng.draw_pair()
"""

from typing import Any

from numpy.random import PCG64, Generator


class RandomEngine:
    """Random engine built on numpy's PCG64 bit generator.

    The engine is a plain value type: copying it (``copy()``, ``copy.copy``
    or ``copy.deepcopy``) yields an independent engine that produces the same
    future output until either one is advanced.
    """

    __slots__ = ("_bit_generator", "_generator")

    def __init__(self, seed: int = 0) -> None:
        self._bit_generator = PCG64(seed)
        self._generator = Generator(self._bit_generator)

    def seed(self, value: int) -> None:
        """Reset the engine deterministically from a non-negative integer.

        Args:
            value: The seed, e.g. a pixel hash.
        """
        self._bit_generator = PCG64(value)
        self._generator = Generator(self._bit_generator)

    def advance(self, delta: int) -> None:
        """Jump the engine forward by ``delta`` draws.

        Equivalent to calling ``draw_scalar()`` ``delta`` times, but runs in
        O(log delta).

        Args:
            delta: Number of draws to skip.

        Raises:
            ValueError: If delta is negative.
        """
        if delta < 0:
            raise ValueError(f"Cannot advance by a negative number of draws ({delta})")
        if delta:
            self._bit_generator.advance(int(delta))

    def draw_scalar(self) -> float:
        """Draw a single uniformly distributed float in [0, 1)."""
        return float(self._generator.random())

    def draw_pair(self) -> tuple[float, float]:
        """Draw two independent uniformly distributed floats in [0, 1).

        The first element is drawn before the second, so a pair consumes the
        stream exactly like two consecutive ``draw_scalar()`` calls.
        """
        first = self.draw_scalar()
        second = self.draw_scalar()
        return (first, second)

    @property
    def state(self) -> dict[str, Any]:
        """The bit generator state, as reported by numpy."""
        return self._bit_generator.state

    def copy(self) -> "RandomEngine":
        """Return an independent copy with identical future output."""
        cloned = RandomEngine.__new__(RandomEngine)
        cloned._bit_generator = PCG64()
        cloned._bit_generator.state = self._bit_generator.state
        cloned._generator = Generator(cloned._bit_generator)
        return cloned

    def __copy__(self) -> "RandomEngine":
        return self.copy()

    def __deepcopy__(self, memo: dict) -> "RandomEngine":
        return self.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RandomEngine):
            return NotImplemented
        return self.state == other.state

    __hash__ = None

    def __repr__(self) -> str:
        inner = self.state["state"]
        return f"RandomEngine(state=0x{inner['state']:032x}, inc=0x{inner['inc']:032x})"
