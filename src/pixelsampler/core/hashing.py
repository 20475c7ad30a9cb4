"""Deterministic hashing of pixel coordinates.

Samplers reseed their random engine once per pixel. The seed is derived from
the pixel coordinate and the render's base seed through ``hash_pixel``, which
must be deterministic across processes and runs (Python's built-in ``hash``
is salted per process for some types, so it is not used here) and must not
leave visible correlation between neighbouring pixels.

The mixing function is the SplitMix64 finalizer, a bijection on 64-bit
integers with full avalanche: flipping any input bit flips each output bit
with probability close to 1/2.
"""

MASK64 = 0xFFFFFFFFFFFFFFFF

# Golden-ratio increment used by SplitMix64
GOLDEN_GAMMA = 0x9E3779B97F4A7C15


def mix64(value: int) -> int:
    """Scramble a 64-bit integer with the SplitMix64 finalizer.

    Args:
        value: Any integer; it is reduced modulo 2^64 first.

    Returns:
        The mixed 64-bit value.
    """
    z = value & MASK64
    z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & MASK64
    z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & MASK64
    return z ^ (z >> 31)


def hash_pixel(pixel: tuple[int, int], seed: int) -> int:
    """Combine a pixel coordinate and a seed into one 64-bit value.

    Each component is folded into the running hash with a golden-ratio offset
    and a full ``mix64`` round, so (x, y) and (y, x) hash differently and
    adjacent pixels land on unrelated values.

    Args:
        pixel: Integer (x, y) image coordinate. Negative values are allowed.
        seed: The render's base seed.

    Returns:
        A deterministic 64-bit hash.
    """
    x, y = pixel
    h = mix64(seed + GOLDEN_GAMMA)
    h = mix64(h ^ ((int(x) + GOLDEN_GAMMA) & MASK64))
    h = mix64(h ^ ((int(y) + 2 * GOLDEN_GAMMA) & MASK64))
    return h
