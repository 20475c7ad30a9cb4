"""Tests for the independent sampler.

This module tests:
- Construction from configuration
- Deterministic, reproducible streams per (pixel, sample index)
- Decorrelation across samples and pixels
- Dimension accounting
- Clone fidelity and independence
"""

import numpy as np
import pytest

from pixelsampler.core.hashing import hash_pixel
from pixelsampler.core.rng import RandomEngine
from pixelsampler.samplers import ConfigError, IndependentSampler


def draw_sequence(sampler, count=8):
    """Draw a mixed sequence of scalars and pairs."""
    values = []
    for i in range(count):
        if i % 2 == 0:
            values.append(sampler.next1f())
        else:
            values.extend(sampler.next2f())
    return values


class TestIndependentSamplerConfig:
    """Test construction from configuration."""

    def test_samples_per_pixel_from_config(self):
        """Test that {"samples": 16} yields 16 samples per pixel."""
        assert IndependentSampler({"samples": 16}).samples_per_pixel == 16

    def test_missing_samples(self):
        """Test that a configuration without "samples" fails."""
        with pytest.raises(ConfigError, match="samples"):
            IndependentSampler({})

    def test_zero_samples(self):
        """Test that zero samples fails."""
        with pytest.raises(ConfigError, match="positive"):
            IndependentSampler({"samples": 0})

    def test_invalid_samples_type(self):
        """Test that a non-integer sample count fails."""
        with pytest.raises(ConfigError, match="integer"):
            IndependentSampler({"samples": "many"})

    def test_extra_keys_are_ignored(self):
        """Test that unrelated configuration keys do not interfere."""
        sampler = IndependentSampler({"type": "independent", "samples": 2, "note": "x"})
        assert sampler.samples_per_pixel == 2


class TestIndependentSamplerDeterminism:
    """Test reproducibility."""

    def test_concrete_scenario(self):
        """Test base seed 0, pixel (0, 0), sample 0 reproduces f0 exactly."""
        first = IndependentSampler({"samples": 1})
        first.set_base_seed(0)
        first.start_pixel((0, 0), 0)
        f0 = first.next1f()

        second = IndependentSampler({"samples": 1})
        second.set_base_seed(0)
        second.start_pixel((0, 0), 0)

        assert 0.0 <= f0 < 1.0
        assert second.next1f() == f0

    def test_independent_instances_agree(self):
        """Test that separately constructed samplers produce identical sequences."""
        a = IndependentSampler({"samples": 8})
        b = IndependentSampler({"samples": 8})
        a.set_base_seed(42)
        b.set_base_seed(42)
        a.start_pixel((17, 3), 5)
        b.start_pixel((17, 3), 5)
        assert draw_sequence(a) == draw_sequence(b)

    def test_restarting_pixel_replays_stream(self, seeded_sampler):
        """Test that start_pixel with the same pair replays the same values."""
        seeded_sampler.start_pixel((4, 4), 2)
        first = draw_sequence(seeded_sampler)
        seeded_sampler.start_pixel((9, 9), 0)
        draw_sequence(seeded_sampler)
        seeded_sampler.start_pixel((4, 4), 2)
        assert draw_sequence(seeded_sampler) == first

    def test_stream_matches_engine_contract(self, seeded_sampler):
        """Test the stream is the hashed seed advanced by the sample index."""
        rng = RandomEngine()
        rng.seed(hash_pixel((6, 2), 1337))
        rng.advance(3)

        seeded_sampler.start_pixel((6, 2), 3)
        assert seeded_sampler.next1f() == rng.draw_scalar()
        assert seeded_sampler.next2f() == rng.draw_pair()

    def test_base_seed_changes_stream(self):
        """Test that a different base seed changes the values."""
        a = IndependentSampler({"samples": 1})
        b = IndependentSampler({"samples": 1})
        b.set_base_seed(1)
        a.start_pixel((0, 0), 0)
        b.start_pixel((0, 0), 0)
        assert draw_sequence(a) != draw_sequence(b)


class TestIndependentSamplerDecorrelation:
    """Test that different samples and pixels differ."""

    def test_samples_differ(self, sampler):
        """Test that sample indices 0 and 1 give different first values."""
        sampler.start_pixel((0, 0), 0)
        u0 = sampler.next1f()
        sampler.start_pixel((0, 0), 1)
        u1 = sampler.next1f()
        assert u0 != u1

    def test_sample_streams_are_shifted_copies(self, sampler):
        """Test that sample 1 replays sample 0's stream offset by one draw."""
        sampler.start_pixel((3, 3), 0)
        first = [sampler.next1f() for _ in range(3)]
        sampler.start_pixel((3, 3), 1)
        second = [sampler.next1f() for _ in range(3)]
        assert second[:2] == first[1:]

    def test_pixels_differ(self, sampler):
        """Test that neighbouring pixels give different first values."""
        firsts = set()
        for x in range(8):
            for y in range(8):
                sampler.start_pixel((x, y), 0)
                firsts.add(sampler.next1f())
        assert len(firsts) == 64

    def test_first_values_uniform_over_image(self, sampler):
        """Test that first draws across many pixels look uniform."""
        values = []
        for x in range(64):
            for y in range(64):
                sampler.start_pixel((x, y), 0)
                values.append(sampler.next1f())
        values = np.array(values)

        assert np.all((values >= 0.0) & (values < 1.0))
        assert abs(values.mean() - 0.5) < 0.02
        counts, _ = np.histogram(values, bins=8, range=(0.0, 1.0))
        assert counts.min() > 0.8 * len(values) / 8


class TestIndependentSamplerDimensions:
    """Test dimension accounting."""

    def test_dimension_accounting(self, sampler):
        """Test 0 after start_pixel, 1 after next1f, 3 after next2f."""
        sampler.start_pixel((2, 3), 0)
        assert sampler.dimension == 0
        sampler.next1f()
        assert sampler.dimension == 1
        sampler.next2f()
        assert sampler.dimension == 3

    def test_values_in_unit_interval(self, sampler):
        """Test that every drawn value lies in [0, 1)."""
        sampler.start_pixel((1, 1), 0)
        for _ in range(500):
            assert 0.0 <= sampler.next1f() < 1.0
            u, v = sampler.next2f()
            assert 0.0 <= u < 1.0
            assert 0.0 <= v < 1.0

    def test_draw_before_start_pixel(self, sampler):
        """Test that drawing before start_pixel fails an assertion."""
        with pytest.raises(AssertionError):
            sampler.next2f()


class TestIndependentSamplerClone:
    """Test duplication for parallel workers."""

    def test_clone_copies_state(self, seeded_sampler):
        """Test that every state field is copied."""
        seeded_sampler.start_pixel((5, 6), 3)
        seeded_sampler.next1f()
        cloned = seeded_sampler.clone()

        assert isinstance(cloned, IndependentSampler)
        assert cloned.base_seed == 1337
        assert cloned.samples_per_pixel == 8
        assert cloned.sample_index == 3
        assert cloned.dimension == 1
        assert cloned.pixel == (5, 6)

    def test_clone_fidelity_then_divergence(self, sampler):
        """Test that a clone matches the original, then ignores its mutations."""
        sampler.start_pixel((10, 10), 0)
        cloned = sampler.clone()

        assert sampler.next1f() == cloned.next1f()

        reference = cloned.clone()
        expected = reference.next1f()

        sampler.next2f()
        sampler.start_pixel((11, 12), 7)
        sampler.next1f()

        assert cloned.next1f() == expected
        assert cloned.dimension == 2
        assert cloned.pixel == (10, 10)

    def test_clone_does_not_share_engine(self, sampler):
        """Test that the clone owns a distinct engine object."""
        cloned = sampler.clone()
        assert cloned._rng is not sampler._rng
        assert cloned._state is not sampler._state

    def test_clone_before_start_pixel_keeps_precondition(self, sampler):
        """Test that a clone of an idle sampler still requires start_pixel."""
        cloned = sampler.clone()
        with pytest.raises(AssertionError):
            cloned.next1f()
        cloned.start_pixel((0, 0), 0)
        assert 0.0 <= cloned.next1f() < 1.0
