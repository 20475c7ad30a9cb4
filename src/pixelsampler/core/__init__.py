"""Core random-number building blocks.

Components:
    rng: Random engine (numpy PCG64) with seeding, jump-ahead and uniform draws
    hashing: Deterministic hashing of pixel coordinates with a base seed

These are the collaborators every sampler is built on. Neither module knows
anything about pixels being rendered; they only turn integers into streams.
"""

from .hashing import hash_pixel, mix64
from .rng import RandomEngine

__all__ = [
    "RandomEngine",
    "hash_pixel",
    "mix64",
]
