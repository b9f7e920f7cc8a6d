r"""
Cronbach's alpha calculation for internal consistency.

Cronbach's alpha measures how closely related a set of items are as a group.
Higher alpha indicates that the items measure the same underlying construct.

Formula:
    α = (k / (k-1)) × (1 - Σσ²ᵢ / σ²ₜ)

Where:
    k = number of items
    σ²ᵢ = sample variance of item i
    σ²ₜ = sample variance of total scores

Rows with any missing value are dropped before the calculation.

Usage Example:
    from item_reliability import cronbach_alpha, get_alpha_interpretation

    alpha = cronbach_alpha(df[["q1", "q2", "q3", "q4"]])
    print(f"Cronbach's alpha: {alpha:.4f} ({get_alpha_interpretation(alpha)})")
"""

import logging
import math
from typing import Any

import numpy as np
import pandas as pd

from ._constants import ALPHA_THRESHOLDS, MIN_ALPHA_COLUMNS
from ._input import drop_incomplete_rows, resolve_input
from .exceptions import InsufficientColumnsError
from .variance import summarize_variance

logger = logging.getLogger(__name__)


def get_alpha_interpretation(alpha: float) -> str:
    """
    Get interpretation string for a Cronbach's alpha value.

    Args:
        alpha: Cronbach's alpha coefficient

    Returns:
        Interpretation: "excellent", "good", "acceptable", "questionable",
                       "poor", "unacceptable", or "undefined" for NaN
    """
    if math.isnan(alpha):
        return "undefined"
    elif alpha >= ALPHA_THRESHOLDS["excellent"]:
        return "excellent"
    elif alpha >= ALPHA_THRESHOLDS["good"]:
        return "good"
    elif alpha >= ALPHA_THRESHOLDS["acceptable"]:
        return "acceptable"
    elif alpha >= ALPHA_THRESHOLDS["questionable"]:
        return "questionable"
    elif alpha >= ALPHA_THRESHOLDS["poor"]:
        return "poor"
    else:
        return "unacceptable"


def alpha_from_complete_cases(items: pd.DataFrame) -> float:
    """
    Apply the alpha formula to a matrix that has no missing values.

    Shared by cronbach_alpha() and the alpha-if-deleted loop, which has
    already performed row-wise deletion on the full scale.

    Args:
        items: Complete-case item matrix.

    Returns:
        Alpha, unclamped. NaN or ±inf when the total-score variance is zero
        or undefined.

    Raises:
        InsufficientColumnsError: If there are fewer than two items.
    """
    k = items.shape[1]
    if k < MIN_ALPHA_COLUMNS:
        raise InsufficientColumnsError(
            "Need at least 2 items for Cronbach's alpha calculation",
            required=MIN_ALPHA_COLUMNS,
            actual=k,
        )

    summary = summarize_variance(items)

    with np.errstate(divide="ignore", invalid="ignore"):
        ratio = np.float64(summary.sum_item_variances) / np.float64(
            summary.total_variance
        )
    alpha = float((k / (k - 1)) * (1 - ratio))

    if not math.isfinite(alpha):
        logger.warning(
            f"Cronbach's alpha is undefined: total score variance is "
            f"{summary.total_variance} over {summary.n_obs} complete rows"
        )

    return alpha


def cronbach_alpha(items: Any) -> float:
    """
    Calculate Cronbach's alpha for a set of items.

    Args:
        items: Item scores (N observations x K items). Rows with any missing
            value are removed first.

    Returns:
        Cronbach's alpha. Not rounded and not clamped; a non-finite value
        means the statistic is undefined for this data.

    Raises:
        InvalidInputKindError: If ``items`` is not a rectangular numeric table.
        InsufficientColumnsError: If there are fewer than two items.
    """
    frame = drop_incomplete_rows(resolve_input(items).frame)
    alpha = alpha_from_complete_cases(frame)

    logger.debug(
        f"Cronbach's alpha calculated: α = {alpha:.4f} "
        f"from {frame.shape[0]} complete rows and {frame.shape[1]} items",
        extra={
            "n_items": frame.shape[1],
            "n_obs": frame.shape[0],
            "metric": "cronbachs_alpha",
        },
    )

    return alpha
