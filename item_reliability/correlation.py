"""
Correlation provider for item-level reliability statistics.

Correlations are computed with pandas, which excludes missing values pairwise:
each column pair uses every row where both items are present. Operations that
need globally complete rows (the leave-one-out item analysis, the mean
inter-item correlation of raw data) drop incomplete rows before calling in
here; this module never does so on their behalf.

Supported methods:
    pearson  - product-moment correlation
    spearman - Pearson correlation of average ranks
    kendall  - Kendall's tau-b (computed by scipy)
"""

import logging
from typing import Any, Optional, Sequence

import numpy as np
import pandas as pd

from ._constants import VALID_CORRELATION_METHODS, CorrelationMethod
from ._input import InputKind, drop_incomplete_rows, resolve_input
from .exceptions import InvalidInputKindError

logger = logging.getLogger(__name__)


def validate_correlation_method(method: str) -> str:
    """
    Check a correlation method name.

    Raises:
        ValueError: If ``method`` is not pearson, spearman or kendall.
    """
    if method not in VALID_CORRELATION_METHODS:
        raise ValueError(
            f"Invalid correlation method: '{method}'. "
            f"Value must be one of: {', '.join(sorted(VALID_CORRELATION_METHODS))}."
        )
    return method


def compute_correlation_matrix(
    items: Any,
    method: CorrelationMethod = "pearson",
) -> pd.DataFrame:
    """
    Compute the item-by-item correlation matrix of raw scores.

    Missing values are excluded pairwise per column pair, not row-wise
    across the whole table.

    Args:
        items: Raw item scores (N observations x M items).
        method: "pearson", "spearman" or "kendall".

    Returns:
        New M x M DataFrame indexed and labelled by item name. Pairs
        without enough variance or overlap are NaN.

    Raises:
        InvalidInputKindError: If ``items`` is not a rectangular numeric table.
        ValueError: If ``method`` is unknown.
    """
    validate_correlation_method(method)
    resolved = resolve_input(items, is_correlation=False)
    return resolved.frame.corr(method=method)


def resolve_correlation_matrix(
    x: Any,
    method: CorrelationMethod = "pearson",
    is_correlation: Optional[bool] = None,
    complete_rows: bool = False,
) -> pd.DataFrame:
    """
    Return a correlation matrix for ``x``, computing it only when needed.

    Args:
        x: Raw item scores or an existing correlation matrix.
        method: Correlation method used when ``x`` holds raw scores.
        is_correlation: See resolve_input(); None detects the kind.
        complete_rows: Drop rows with any missing value before computing,
            instead of the default pairwise exclusion. Has no effect on a
            supplied correlation matrix.

    Returns:
        A correlation matrix. A supplied matrix is returned as a copy,
        never recomputed.
    """
    validate_correlation_method(method)
    resolved = resolve_input(x, is_correlation=is_correlation)

    if resolved.kind is InputKind.CORRELATION_MATRIX:
        return resolved.frame

    frame = resolved.frame
    if complete_rows:
        frame = drop_incomplete_rows(frame)

    logger.debug(
        f"Computing {method} correlations for {frame.shape[1]} items "
        f"over {frame.shape[0]} rows"
    )
    return frame.corr(method=method)


def correlate(
    x: Sequence[float],
    y: Sequence[float],
    method: CorrelationMethod = "pearson",
) -> float:
    """
    Correlate two score vectors over the positions where both are present.

    Args:
        x: First vector of scores (NaN marks a missing value).
        y: Second vector, same length as ``x``.
        method: "pearson", "spearman" or "kendall".

    Returns:
        The correlation coefficient, or NaN when it is undefined (fewer than
        two complete pairs, or zero variance in either vector). The value is
        never clamped.

    Raises:
        InvalidInputKindError: If the vectors differ in length.
    """
    validate_correlation_method(method)
    x_arr = np.asarray(x, dtype="float64")
    y_arr = np.asarray(y, dtype="float64")

    if x_arr.shape != y_arr.shape or x_arr.ndim != 1:
        raise InvalidInputKindError(
            "Correlated vectors must be one-dimensional and of equal length",
            context={"x_shape": x_arr.shape, "y_shape": y_arr.shape},
        )

    with np.errstate(divide="ignore", invalid="ignore"):
        return float(pd.Series(x_arr).corr(pd.Series(y_arr), method=method))
