"""
Variance aggregation for alpha and standardization.

All variances are sample variances (N - 1 denominator). Cronbach's alpha is
defined in terms of them, and switching to population variances changes the
coefficient, so no caller may pass a different ``ddof``.
"""

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

# Sample variance, used everywhere
VARIANCE_DDOF = 1


@dataclass(frozen=True)
class VarianceSummary:
    """
    Variances of a complete-case item matrix.

    Attributes:
        item_variances: Sample variance per item, indexed by item name.
        total_variance: Sample variance of the row-wise sum of all items.
        n_obs: Number of rows used.
        n_items: Number of items.
    """

    item_variances: pd.Series
    total_variance: float
    n_obs: int
    n_items: int

    @property
    def sum_item_variances(self) -> float:
        """Sum of the item variances (Σσ²ᵢ)."""
        return float(self.item_variances.sum(skipna=False))


def total_scores(items: pd.DataFrame) -> pd.Series:
    """Row-wise sum of item scores."""
    return items.sum(axis=1, skipna=False)


def summarize_variance(items: pd.DataFrame) -> VarianceSummary:
    """
    Compute per-item and total-score sample variances.

    Args:
        items: Complete-case item matrix (no missing values).

    Returns:
        VarianceSummary. With fewer than two rows every variance is NaN;
        a zero total variance is reported as-is.
    """
    item_variances = items.var(axis=0, ddof=VARIANCE_DDOF)
    total_variance = float(total_scores(items).var(ddof=VARIANCE_DDOF))

    return VarianceSummary(
        item_variances=item_variances,
        total_variance=total_variance,
        n_obs=items.shape[0],
        n_items=items.shape[1],
    )


def standardize_items(items: pd.DataFrame) -> pd.DataFrame:
    """
    Rescale each item to zero mean and unit sample variance.

    Constant items have zero standard deviation and become NaN; they are
    not special-cased, so the statistics computed from them are undefined.

    Returns:
        New DataFrame with the same labels.
    """
    std = items.std(axis=0, ddof=VARIANCE_DDOF)

    constant = [str(name) for name, value in std.items() if value == 0]
    if constant:
        logger.warning(f"Standardizing constant items yields undefined values: {constant}")

    with np.errstate(divide="ignore", invalid="ignore"):
        return (items - items.mean(axis=0)) / std
