"""
Pytest configuration and shared fixtures for testing.

The fixture scales are small enough that their covariances can be worked out
by hand; the expected values quoted in the tests come from those sums of
products.
"""
import logging

import numpy as np
import pandas as pd
import pytest


@pytest.fixture
def correlated_scale() -> pd.DataFrame:
    """
    Four items, ten respondents.

    q1 and q2 correlate at r = 78.5 / 82.5 ≈ 0.95. q3 and q4 are built from
    deviations orthogonal to q1, so they correlate with the rest at most
    weakly (r < 0.08).

    Sums of cross-products (N - 1 = 9 cancels in every ratio):
        S11 = 82.5, S22 = 82.5, S33 = 20, S44 = 8
        S12 = 78.5, S13 = 0, S14 = 0, S23 = 3, S24 = 1, S34 = 0
    """
    return pd.DataFrame(
        {
            "q1": [1, 2, 3, 4, 5, 6, 7, 8, 9, 10],
            "q2": [2, 1, 4, 3, 5, 7, 6, 8, 10, 9],
            "q3": [5, 1, 4, 2, 3, 3, 2, 4, 1, 5],
            "q4": [4, 4, 2, 2, 3, 3, 2, 2, 4, 4],
        }
    )


@pytest.fixture
def reverse_scored_scale(correlated_scale: pd.DataFrame) -> pd.DataFrame:
    """The correlated scale plus q5, a reverse-coded copy of q1."""
    scale = correlated_scale.copy()
    scale["q5"] = 11 - scale["q1"]
    return scale


@pytest.fixture
def likert_scale() -> pd.DataFrame:
    """Six 1-5 rating items with a moderately consistent response pattern."""
    return pd.DataFrame(
        {
            "c1": [4, 3, 5, 2, 4, 1, 3, 5, 2, 4, 3, 5],
            "c2": [4, 2, 5, 2, 3, 1, 3, 4, 1, 5, 3, 4],
            "c3": [5, 3, 4, 1, 4, 2, 2, 5, 2, 4, 4, 5],
            "c4": [3, 3, 5, 2, 5, 1, 3, 4, 3, 3, 2, 5],
            "c5": [4, 2, 4, 3, 4, 2, 3, 5, 1, 4, 3, 4],
            "c6": [5, 3, 5, 1, 3, 1, 4, 5, 2, 4, 3, 5],
        }
    )


@pytest.fixture
def likert_scale_with_missing(likert_scale: pd.DataFrame) -> pd.DataFrame:
    """likert_scale with three cells missing in three different rows."""
    scale = likert_scale.astype("float64")
    scale.loc[1, "c2"] = np.nan
    scale.loc[4, "c5"] = np.nan
    scale.loc[9, "c1"] = np.nan
    return scale


@pytest.fixture
def reset_package_logger():
    """Restore the package logger after tests that call setup_logging()."""
    package_logger = logging.getLogger("item_reliability")
    yield package_logger
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True
