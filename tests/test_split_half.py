"""
Tests for odd-even split-half reliability.
"""
import logging
import math

import numpy as np
import pandas as pd
import pytest

from item_reliability import (
    InsufficientColumnsError,
    apply_spearman_brown_correction,
    split_half_reliability,
)
from item_reliability.split_half import half_scores


class TestSpearmanBrownCorrection:
    """Tests for apply_spearman_brown_correction()."""

    @pytest.mark.parametrize(
        "r_half,expected",
        [
            (1.0, 1.0),
            (0.5, 2 / 3),
            (0.0, 0.0),
            (-0.5, -2.0),
        ],
    )
    def test_correction(self, r_half, expected):
        assert apply_spearman_brown_correction(r_half) == pytest.approx(expected)

    def test_perfect_negative_half_correlation_diverges(self):
        assert apply_spearman_brown_correction(-1.0) == -np.inf

    def test_nan_stays_nan(self):
        assert math.isnan(apply_spearman_brown_correction(float("nan")))


class TestHalfScores:
    """Tests for the odd-even split."""

    def test_split_is_by_position(self):
        items = pd.DataFrame(
            {"a": [1.0, 2.0], "b": [10.0, 20.0], "c": [3.0, 4.0], "d": [30.0, 40.0]}
        )

        first, second = half_scores(items)

        assert first.tolist() == [2.0, 3.0]
        assert second.tolist() == [20.0, 30.0]

    def test_missing_values_shrink_the_mean(self):
        items = pd.DataFrame({"a": [1.0, np.nan], "b": [2.0, 2.0], "c": [3.0, 5.0]})

        first, _ = half_scores(items)

        assert first.tolist() == [2.0, 5.0]

    def test_odd_item_count_puts_extra_item_in_first_half(self):
        items = pd.DataFrame({"a": [1.0], "b": [2.0], "c": [3.0]})

        first, second = half_scores(items)

        assert first.tolist() == [2.0]
        assert second.tolist() == [2.0]


class TestSplitHalfReliability:
    """Tests for split_half_reliability()."""

    def test_identical_halves(self):
        a = [1, 2, 3, 4, 5, 3]
        b = [2, 1, 4, 3, 5, 2]
        # Positions 0 and 2 hold (a, b), positions 1 and 3 hold the same
        items = pd.DataFrame({"a1": a, "a2": a, "b1": b, "b2": b})

        result = split_half_reliability(items)

        assert result["splithalf"] == pytest.approx(1.0)
        assert result["spearmanbrown"] == pytest.approx(1.0)

    def test_halves_are_not_first_and_second_half(self):
        a = [1, 2, 3, 4, 5, 3]
        b = [2, 1, 4, 3, 5, 2]
        items = pd.DataFrame({"a1": a, "b1": b, "a2": a, "b2": b})

        result = split_half_reliability(items)

        # Odd-even split now pairs (a, a) against (b, b)
        assert result["splithalf"] < 1.0

    def test_hand_computed_values(self, correlated_scale):
        result = split_half_reliability(correlated_scale)

        # Halves (q1, q3) and (q2, q4):
        # r = (S12 + S14 + S23 + S34) / sqrt((S11 + S33) × (S22 + S44 + 2·S24))
        r_half = 81.5 / math.sqrt(102.5 * 92.5)
        assert result["splithalf"] == pytest.approx(r_half)
        assert result["spearmanbrown"] == pytest.approx(2 * r_half / (1 + r_half))

    def test_missing_values_keep_the_row(self, likert_scale_with_missing):
        result = split_half_reliability(likert_scale_with_missing)

        first = likert_scale_with_missing.iloc[:, 0::2].mean(axis=1)
        second = likert_scale_with_missing.iloc[:, 1::2].mean(axis=1)
        expected = np.corrcoef(first, second)[0, 1]

        assert result["splithalf"] == pytest.approx(expected)

    def test_two_items(self):
        result = split_half_reliability({"a": [1, 2, 3, 4], "b": [1, 3, 2, 4]})

        assert result["splithalf"] == pytest.approx(0.8)
        assert result["spearmanbrown"] == pytest.approx(1.6 / 1.8)

    def test_one_item_raises(self):
        with pytest.raises(InsufficientColumnsError) as exc_info:
            split_half_reliability({"only": [1, 2, 3]})

        assert exc_info.value.required == 2
        assert exc_info.value.actual == 1

    def test_opposed_halves_are_not_clamped(self):
        result = split_half_reliability({"a": [1, 2, 3, 4], "b": [4, 3, 2, 1]})

        assert result["splithalf"] == pytest.approx(-1.0)
        # -inf for an exact r = -1, unbounded below otherwise
        assert result["spearmanbrown"] < -1e6

    def test_constant_half_is_undefined(self, caplog):
        items = {"a": [1, 2, 3, 4], "b": [2, 2, 2, 2]}

        with caplog.at_level(logging.WARNING, logger="item_reliability.split_half"):
            result = split_half_reliability(items)

        assert math.isnan(result["splithalf"])
        assert math.isnan(result["spearmanbrown"])
        assert "undefined" in caplog.text

    def test_unrounded_by_default(self, correlated_scale):
        result = split_half_reliability(correlated_scale)
        assert result["splithalf"] != round(result["splithalf"], 3)

    def test_rounding(self, correlated_scale):
        result = split_half_reliability(correlated_scale, digits=2)

        assert result["splithalf"] == pytest.approx(0.84)
        assert result["spearmanbrown"] == pytest.approx(0.91)

    def test_does_not_mutate_input(self, likert_scale_with_missing):
        original = likert_scale_with_missing.copy()
        split_half_reliability(likert_scale_with_missing)
        pd.testing.assert_frame_equal(likert_scale_with_missing, original)
