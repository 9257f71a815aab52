"""Tests for chunk energy and windowed tone detection."""

import numpy as np
import pytest

from cwdecode.analysis import ToneDetector, compute_energy, quantize


class TestComputeEnergy:
    """Test population RMS deviation."""

    def test_constant_chunk_is_zero(self):
        assert compute_energy([5, 5, 5, 5]) == 0.0
        assert compute_energy([-32768] * 64) == 0.0

    def test_known_values(self):
        assert compute_energy([1, -1, 1, -1]) == pytest.approx(1.0)
        assert compute_energy([0, 2]) == pytest.approx(1.0)
        # DC offset does not count as energy
        assert compute_energy([100, 102]) == pytest.approx(1.0)

    def test_small_deviation_is_positive(self):
        assert compute_energy([0, 1]) == pytest.approx(0.5)
        assert compute_energy([7, 7, 7, 8]) > 0

    def test_non_negative_on_random_chunks(self):
        rng = np.random.default_rng(0)
        for _ in range(50):
            chunk = rng.integers(-32768, 32767, size=64)
            assert compute_energy(chunk) >= 0

    def test_matches_mean_square_formula(self):
        rng = np.random.default_rng(1)
        chunk = rng.integers(-1000, 1000, size=64).astype(np.float64)
        expected = np.sqrt(np.mean(chunk ** 2) - np.mean(chunk) ** 2)
        assert compute_energy(chunk) == pytest.approx(expected)

    def test_empty_chunk_raises(self):
        with pytest.raises(ValueError):
            compute_energy([])
        with pytest.raises(ValueError):
            compute_energy(np.array([], dtype=np.int16))


class TestQuantize:
    """Test the min/max midpoint discriminator."""

    def test_midpoint_split(self):
        # discriminator = 0 + (10 - 0) / 2 = 5, inclusive
        assert quantize([0, 10, 5, 4]) == [False, True, True, False]

    def test_threshold_follows_offset(self):
        # discriminator = 100 + 10 / 2 = 105
        assert quantize([100, 110, 104, 106]) == [False, True, False, True]

    def test_flat_window_is_all_tone(self):
        assert quantize([3.0, 3.0, 3.0]) == [True, True, True]

    def test_empty_window(self):
        assert quantize([]) == []

    def test_returns_plain_bools(self):
        assert all(type(v) is bool for v in quantize([0.0, 1.0]))


class TestToneDetector:
    """Test the windowed accumulator."""

    def test_buffers_until_full_window(self):
        detector = ToneDetector(window_size=4)
        assert detector.push(0) == []
        assert detector.push(10) == []
        assert detector.push(0) == []
        assert detector.pending == 3
        assert detector.push(10) == [False, True, False, True]
        assert detector.pending == 0

    def test_each_window_gets_its_own_threshold(self):
        detector = ToneDetector(window_size=4)
        loud = [0, 1000, 0, 1000]
        quiet = [0, 10, 0, 10]
        events = []
        for amp in loud + quiet:
            events.extend(detector.push(amp))
        assert events == [False, True, False, True] * 2

    def test_feed_computes_energy(self):
        detector = ToneDetector(window_size=2)
        assert detector.feed([0, 0, 0, 0]) == []
        assert detector.feed([100, -100, 100, -100]) == [False, True]

    def test_flush_partial_window(self):
        chunks = [[0, 0]] * 3 + [[50, -50]] * 3
        detector = ToneDetector(window_size=4, flush_partial=True)
        events = list(detector.detect(chunks))
        assert len(events) == 6
        assert events == [False, False, False, True, True, True]

    def test_flush_uses_last_full_window_threshold(self):
        detector = ToneDetector(window_size=4)
        events = []
        for amp in [0, 100, 0, 100, 0, 0]:
            events.extend(detector.push(amp))
        assert detector.threshold == pytest.approx(50.0)
        # A silent tail stays silent instead of being split on its own min/max
        assert detector.flush() == [False, False]
        assert events == [False, True, False, True]

    def test_flush_without_full_window_uses_own_threshold(self):
        detector = ToneDetector(window_size=4)
        detector.push(0)
        detector.push(10)
        assert detector.threshold is None
        assert detector.flush() == [False, True]

    def test_discard_partial_window(self):
        chunks = [[0, 0]] * 3 + [[50, -50]] * 3
        detector = ToneDetector(window_size=4, flush_partial=False)
        events = list(detector.detect(chunks))
        assert events == [False, False, False, True]
        assert detector.discarded == 2

    def test_flush_empty_is_noop(self):
        detector = ToneDetector(window_size=4)
        assert detector.flush() == []

    def test_invalid_window_size(self):
        with pytest.raises(ValueError):
            ToneDetector(window_size=0)

    def test_empty_chunk_in_stream_raises(self):
        detector = ToneDetector(window_size=4)
        with pytest.raises(ValueError):
            list(detector.detect([[1, 2], []]))
