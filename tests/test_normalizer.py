"""Tests for unit estimation and duration clamping."""

import pytest

from cwdecode.core import Run, UNCLASSIFIABLE
from cwdecode.processing import UnitNormalizer, estimate_unit, normalize, clamp


class TestEstimateUnit:
    """Test the 25th percentile unit estimate."""

    def test_percentile_index(self):
        # sorted [1, 2, 3, 7], index 4 // 4 = 1
        assert estimate_unit([3, 1, 2, 7]) == 2

    def test_reference_durations(self):
        assert estimate_unit([1, 1, 3, 3, 7, 1, 3, 3]) == 1

    def test_single_value(self):
        assert estimate_unit([5]) == 5

    def test_ignores_single_glitch(self):
        # The minimum is a glitch; index 8 // 4 = 2 skips it
        assert estimate_unit([1, 4, 4, 4, 12, 12, 28, 4]) == 4

    @pytest.mark.parametrize("scale", [2, 3, 10])
    def test_scales_with_durations(self, scale):
        durations = [1, 1, 3, 3, 7, 1, 3, 3, 1, 10, 1, 1]
        assert estimate_unit([d * scale for d in durations]) == estimate_unit(durations) * scale

    def test_does_not_reorder_input(self):
        durations = [3, 1, 2]
        estimate_unit(durations)
        assert durations == [3, 1, 2]

    def test_empty_raises(self):
        with pytest.raises(ValueError):
            estimate_unit([])


class TestNormalizeAndClamp:
    def test_true_division(self):
        assert normalize(5, 2) == 2.5
        assert normalize(2, 3) == pytest.approx(0.6667, abs=1e-4)

    def test_tone_bands(self):
        assert clamp(0.5, tone=True) == 1
        assert clamp(2.0, tone=True) == 1
        assert clamp(2.01, tone=True) == 3
        assert clamp(5.0, tone=True) == 3
        assert clamp(5.01, tone=True) == UNCLASSIFIABLE
        assert clamp(8.0, tone=True) == UNCLASSIFIABLE
        assert clamp(20.0, tone=True) == UNCLASSIFIABLE

    def test_silence_bands(self):
        assert clamp(1.0, tone=False) == 1
        assert clamp(2.0, tone=False) == 1
        assert clamp(3.0, tone=False) == 3
        assert clamp(5.0, tone=False) == 3
        assert clamp(5.5, tone=False) == 7
        assert clamp(8.0, tone=False) == 7
        assert clamp(8.01, tone=False) == 10
        assert clamp(100.0, tone=False) == 10


class TestUnitNormalizer:
    """Test group-wise normalization."""

    def test_emits_after_full_group(self):
        normalizer = UnitNormalizer(group_size=4)
        group = [Run(True, 2), Run(False, 2), Run(True, 6), Run(False, 6)]
        assert normalizer.push(group[0]) == []
        assert normalizer.push(group[1]) == []
        assert normalizer.push(group[2]) == []
        assert normalizer.push(group[3]) == [1, 1, 3, 3]
        assert list(normalizer.units) == [2]

    def test_fractional_ratio_is_not_truncated(self):
        # unit 2; a 5-event tone is 2.5 units, a dah
        normalizer = UnitNormalizer(group_size=4)
        runs = [Run(True, 2), Run(False, 2), Run(True, 5), Run(False, 2)]
        assert list(normalizer.normalize_runs(runs)) == [1, 1, 3, 1]

    def test_unit_recalibrates_per_group(self):
        normalizer = UnitNormalizer(group_size=4)
        fast = [Run(True, 2), Run(False, 2), Run(True, 6), Run(False, 6)]
        slow = [Run(True, 5), Run(False, 5), Run(True, 15), Run(False, 35)]
        assert list(normalizer.normalize_runs(fast + slow)) == [1, 1, 3, 3, 1, 1, 3, 7]
        assert list(normalizer.units) == [2, 5]

    def test_long_tone_is_unclassifiable(self):
        normalizer = UnitNormalizer(group_size=4)
        runs = [Run(True, 1), Run(False, 1), Run(True, 7), Run(False, 1)]
        assert list(normalizer.normalize_runs(runs)) == [1, 1, UNCLASSIFIABLE, 1]

    def test_flush_partial_group(self):
        normalizer = UnitNormalizer(group_size=4, flush_partial=True)
        runs = [Run(True, 2), Run(False, 2), Run(True, 6), Run(False, 6),
                Run(True, 3), Run(False, 9)]
        values = list(normalizer.normalize_runs(runs))
        # Partial group [3, 9]: unit = sorted[2 // 4] = 3
        assert values == [1, 1, 3, 3, 1, 3]
        assert normalizer.discarded == 0

    def test_discard_partial_group(self):
        normalizer = UnitNormalizer(group_size=4, flush_partial=False)
        runs = [Run(True, 2), Run(False, 2), Run(True, 6), Run(False, 6),
                Run(True, 3), Run(False, 9)]
        assert list(normalizer.normalize_runs(runs)) == [1, 1, 3, 3]
        assert normalizer.discarded == 2

    def test_invalid_group_size(self):
        with pytest.raises(ValueError):
            UnitNormalizer(group_size=0)
