"""Pixel sample generators for Monte Carlo rendering.

This package provides the pseudorandom number streams a path tracer consumes
while estimating radiance at a pixel, with support for:
- Deterministic, reproducible streams per (pixel, sample index) pair
- Cheap duplication of samplers across parallel render workers
- Dimension bookkeeping for every scalar or paired draw
- Name-keyed construction from JSON-style configuration

Subpackages:
    core: Random engine (numpy PCG64) and deterministic pixel hashing
    samplers: Sampler contract, concrete samplers and the sampler registry
"""

__version__ = "0.1.0"
