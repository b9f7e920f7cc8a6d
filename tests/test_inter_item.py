"""
Tests for the mean inter-item correlation.
"""
import logging
import math

import numpy as np
import pandas as pd
import pytest
from scipy import stats

from item_reliability import (
    InsufficientColumnsError,
    InvalidInputKindError,
    get_mic_interpretation,
    lower_triangle_values,
    mean_inter_item_correlation,
)

# Off-diagonal values 0.1 ... 0.6 are distinct, so counting the diagonal or a
# pair twice would change the mean
CORRELATIONS = np.array(
    [
        [1.0, 0.1, 0.2, 0.4],
        [0.1, 1.0, 0.3, 0.5],
        [0.2, 0.3, 1.0, 0.6],
        [0.4, 0.5, 0.6, 1.0],
    ]
)


class TestLowerTriangleValues:
    """Tests for lower_triangle_values()."""

    def test_values_column_by_column(self):
        values = lower_triangle_values(pd.DataFrame(CORRELATIONS))
        np.testing.assert_allclose(values, [0.1, 0.2, 0.4, 0.3, 0.5, 0.6])

    @pytest.mark.parametrize("n_items", [2, 3, 4, 7, 12])
    def test_pair_count(self, n_items):
        corr = pd.DataFrame(np.eye(n_items))
        assert lower_triangle_values(corr).size == n_items * (n_items - 1) // 2


class TestMeanInterItemCorrelation:
    """Tests for mean_inter_item_correlation()."""

    def test_correlation_matrix_mean(self):
        mic = mean_inter_item_correlation(CORRELATIONS, is_correlation=True)
        assert mic == pytest.approx(0.35)

    def test_correlation_matrix_is_detected(self):
        assert mean_inter_item_correlation(CORRELATIONS) == pytest.approx(0.35)

    def test_correlation_matrix_of_unnamed_frame_is_not_correlated_again(self):
        raw = np.random.default_rng(11).normal(size=(50, 4))
        corr = np.corrcoef(raw, rowvar=False)
        expected = corr[np.tril_indices(4, k=-1)].mean()

        mic = mean_inter_item_correlation(pd.DataFrame(raw).corr())

        assert mic == pytest.approx(expected)

    def test_invariant_under_symmetric_permutation(self):
        order = [2, 0, 3, 1]
        permuted = CORRELATIONS[np.ix_(order, order)]

        assert mean_inter_item_correlation(permuted, is_correlation=True) == pytest.approx(
            mean_inter_item_correlation(CORRELATIONS, is_correlation=True)
        )

    def test_negative_correlations_are_averaged_with_sign(self):
        corr = np.array([[1.0, -0.6, 0.2], [-0.6, 1.0, 0.1], [0.2, 0.1, 1.0]])
        assert mean_inter_item_correlation(corr, is_correlation=True) == pytest.approx(-0.1)

    def test_raw_scores_hand_computed(self, correlated_scale):
        mic = mean_inter_item_correlation(correlated_scale)

        pairs = [
            78.5 / 82.5,
            0.0,
            0.0,
            3 / math.sqrt(82.5 * 20),
            1 / math.sqrt(82.5 * 8),
            0.0,
        ]
        assert mic == pytest.approx(sum(pairs) / 6)

    def test_raw_scores_drop_incomplete_rows(self, likert_scale_with_missing):
        mic = mean_inter_item_correlation(likert_scale_with_missing, is_correlation=False)
        expected = mean_inter_item_correlation(
            likert_scale_with_missing.dropna(), is_correlation=False
        )

        assert mic == pytest.approx(expected)

    def test_spearman_method(self, likert_scale):
        rho = stats.spearmanr(likert_scale.to_numpy()).statistic
        expected = rho[np.tril_indices(rho.shape[0], k=-1)].mean()

        mic = mean_inter_item_correlation(likert_scale, method="spearman")

        assert mic == pytest.approx(expected)

    def test_method_is_ignored_for_correlation_matrix(self):
        assert mean_inter_item_correlation(
            CORRELATIONS, method="kendall", is_correlation=True
        ) == pytest.approx(0.35)

    def test_unknown_method(self, correlated_scale):
        with pytest.raises(ValueError):
            mean_inter_item_correlation(correlated_scale, method="polychoric")

    def test_invalid_correlation_matrix(self):
        not_symmetric = np.array([[1.0, 0.3], [0.1, 1.0]])
        with pytest.raises(InvalidInputKindError):
            mean_inter_item_correlation(not_symmetric, is_correlation=True)

    def test_single_item_raises(self):
        with pytest.raises(InsufficientColumnsError):
            mean_inter_item_correlation({"only": [1, 2, 3]}, is_correlation=False)

    def test_undefined_pair_makes_mean_undefined(self, caplog):
        items = {"a": [1, 2, 3, 4], "b": [2, 1, 4, 3], "flat": [5, 5, 5, 5]}

        with caplog.at_level(logging.WARNING, logger="item_reliability.inter_item"):
            mic = mean_inter_item_correlation(items, is_correlation=False)

        assert math.isnan(mic)
        assert "2 of 3 item pairs" in caplog.text

    def test_does_not_mutate_input(self, likert_scale_with_missing):
        original = likert_scale_with_missing.copy()
        mean_inter_item_correlation(likert_scale_with_missing)
        pd.testing.assert_frame_equal(likert_scale_with_missing, original)


class TestGetMicInterpretation:
    """Tests for get_mic_interpretation()."""

    @pytest.mark.parametrize(
        "mic,expected",
        [
            (0.05, "low"),
            (0.20, "ideal"),
            (0.35, "ideal"),
            (0.40, "ideal"),
            (0.55, "high"),
            (float("nan"), "undefined"),
        ],
    )
    def test_interpretation(self, mic, expected):
        assert get_mic_interpretation(mic) == expected
