"""
Split-half reliability using an odd-even split.

Columns are split by position: items at positions 0, 2, 4, ... form the first
half and items at positions 1, 3, 5, ... the second. Each row's half score is
the mean of the items it answered in that half, so missing values shrink the
mean's base instead of deleting the row. The two half-score vectors are then
correlated over the rows where both half scores exist.

The raw correlation between halves underestimates full-test reliability
(each half is only half as long), so the Spearman-Brown correction is
applied:

    r_full = (2 × r_half) / (1 + r_half)

Usage Example:
    from item_reliability import split_half_reliability

    result = split_half_reliability(df)
    print(f"Split-half r: {result['splithalf']:.4f}")
    print(f"Spearman-Brown corrected: {result['spearmanbrown']:.4f}")
"""

import logging
import math
from typing import Any, Optional, Tuple

import numpy as np
import pandas as pd

from ._constants import MIN_SPLIT_HALF_COLUMNS
from ._input import resolve_input, validate_digits
from ._types import SplitHalfResult
from .correlation import correlate
from .exceptions import InsufficientColumnsError

logger = logging.getLogger(__name__)


def apply_spearman_brown_correction(r_half: float) -> float:
    """
    Apply the Spearman-Brown prophecy formula to estimate full-test reliability.

    Formula:
        r_full = (2 × r_half) / (1 + r_half)

    Args:
        r_half: Correlation between the two test halves

    Returns:
        Estimated full-test reliability. Not clamped: r_half = -1 gives -inf
        and NaN stays NaN.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        r_full = np.float64(2 * r_half) / np.float64(1 + r_half)
    return float(r_full)


def half_scores(items: pd.DataFrame) -> Tuple[pd.Series, pd.Series]:
    """
    Per-row mean scores of the even-position and odd-position items.

    A row with no answered item in a half gets NaN for that half.
    """
    first = items.iloc[:, 0::2].mean(axis=1, skipna=True)
    second = items.iloc[:, 1::2].mean(axis=1, skipna=True)
    return first, second


def split_half_reliability(
    items: Any,
    digits: Optional[int] = None,
) -> SplitHalfResult:
    """
    Calculate odd-even split-half reliability with Spearman-Brown correction.

    Args:
        items: Item scores (N observations x M items). Missing values are
            excluded from the half means, not deleted row-wise.
        digits: Decimal places of the returned values, or None to leave them
            unrounded.

    Returns:
        SplitHalfResult with ``splithalf`` and ``spearmanbrown``. Either may
        be NaN when a half has no variance.

    Raises:
        InvalidInputKindError: If ``items`` is not a rectangular numeric table.
        InsufficientColumnsError: If there are fewer than two items, which
            would leave one half empty.
    """
    if digits is not None:
        validate_digits(digits)

    frame = resolve_input(items).frame

    n_items = frame.shape[1]
    if n_items < MIN_SPLIT_HALF_COLUMNS:
        logger.warning(
            f"Split-half reliability skipped: {n_items} items "
            f"(need at least {MIN_SPLIT_HALF_COLUMNS})"
        )
        raise InsufficientColumnsError(
            "Need at least 2 items to split the scale into halves",
            required=MIN_SPLIT_HALF_COLUMNS,
            actual=n_items,
        )

    first, second = half_scores(frame)
    r_half = correlate(first, second)
    r_full = apply_spearman_brown_correction(r_half)

    if not math.isfinite(r_full):
        logger.warning(
            f"Split-half reliability is undefined: r_half = {r_half} "
            f"for {n_items} items"
        )
    else:
        logger.info(
            f"Split-half reliability calculated: r_half = {r_half:.4f}, "
            f"Spearman-Brown r = {r_full:.4f} from {n_items} items",
            extra={
                "n_items": n_items,
                "n_obs": frame.shape[0],
                "metric": "split_half",
            },
        )

    if digits is not None:
        r_half = round(r_half, digits)
        r_full = round(r_full, digits)

    return {"splithalf": r_half, "spearmanbrown": r_full}
