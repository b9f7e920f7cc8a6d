"""
Mean inter-item correlation.

The mean inter-item correlation is the average of the correlations of all
distinct item pairs. Self-correlations on the diagonal are excluded and each
unordered pair is counted once, by taking the entries strictly below the
diagonal: M × (M - 1) / 2 values for M items.

"Ideally, the average inter-item correlation for a set of items should be
between .20 and .40, suggesting that while the items are reasonably
homogenous, they do contain sufficiently unique variance so as to not be
isomorphic with each other." (Piedmont 2014)

Usage Example:
    from item_reliability import mean_inter_item_correlation

    mic = mean_inter_item_correlation(df, method="spearman")

    # An existing correlation matrix is used as-is
    mic = mean_inter_item_correlation(df.corr(), is_correlation=True)
"""

import logging
import math
from typing import Any, Optional

import numpy as np
import pandas as pd

from ._constants import MIC_IDEAL_RANGE, MIN_INTER_ITEM_COLUMNS, CorrelationMethod
from .correlation import resolve_correlation_matrix
from .exceptions import InsufficientColumnsError

logger = logging.getLogger(__name__)


def get_mic_interpretation(mic: float) -> str:
    """
    Get interpretation string for a mean inter-item correlation.

    Returns:
        "low" (< 0.20, items may not share a content domain), "ideal"
        (0.20 - 0.40), "high" (> 0.40, narrow bandwidth of the construct),
        or "undefined" for NaN
    """
    low, high = MIC_IDEAL_RANGE
    if math.isnan(mic):
        return "undefined"
    elif mic < low:
        return "low"
    elif mic > high:
        return "high"
    else:
        return "ideal"


def lower_triangle_values(corr: pd.DataFrame) -> np.ndarray:
    """
    Entries strictly below the diagonal of a square matrix.

    Returns:
        1-D array of M × (M - 1) / 2 values, column by column.
    """
    values = corr.to_numpy()
    rows, cols = np.tril_indices(values.shape[0], k=-1)
    order = np.lexsort((rows, cols))
    return values[rows[order], cols[order]]


def mean_inter_item_correlation(
    x: Any,
    method: CorrelationMethod = "pearson",
    is_correlation: Optional[bool] = None,
) -> float:
    """
    Calculate the mean inter-item correlation.

    Args:
        x: Raw item scores, or a correlation matrix.
        method: Correlation method for raw scores ("pearson", "spearman" or
            "kendall"). Ignored for a supplied correlation matrix.
        is_correlation: True if ``x`` is a correlation matrix, False if it is
            raw scores, None to detect it. Raw scores have rows with any
            missing value removed before the correlations are computed.

    Returns:
        Mean of the distinct off-diagonal correlations. NaN if any pair
        correlation is undefined.

    Raises:
        InvalidInputKindError: If ``x`` is neither a numeric table nor a
            valid correlation matrix.
        InsufficientColumnsError: If there are fewer than two items.
        ValueError: If ``method`` is unknown.
    """
    corr = resolve_correlation_matrix(
        x, method=method, is_correlation=is_correlation, complete_rows=True
    )

    n_items = corr.shape[1]
    if n_items < MIN_INTER_ITEM_COLUMNS:
        raise InsufficientColumnsError(
            "Need at least 2 items for a mean inter-item correlation",
            required=MIN_INTER_ITEM_COLUMNS,
            actual=n_items,
        )

    pairs = lower_triangle_values(corr)
    mic = float(np.mean(pairs))

    if math.isnan(mic):
        logger.warning(
            f"Mean inter-item correlation is undefined: "
            f"{int(np.isnan(pairs).sum())} of {pairs.size} item pairs have no correlation"
        )
    else:
        logger.debug(f"Mean inter-item correlation = {mic:.4f} over {pairs.size} pairs")

    return mic
