r"""
Item-total statistics: item discrimination and alpha-if-deleted.

For every item of a scale this module computes

- the corrected item-total correlation ("item discrimination"): the Pearson
  correlation between the item and the sum of all OTHER items, which avoids
  the part-whole inflation of correlating an item with a total that contains
  it, and
- Cronbach's alpha of the scale with the item removed ("alpha if deleted").

Rows with any missing value are dropped once, up front, and that
complete-case matrix is used for every item. Optional standardization is
likewise applied once to the whole matrix, never per iteration.

Interpretation of item discrimination (absolute value):
    < 0.10      poor  - item is often ambiguously worded, examine it
    0.10 - 0.30 fair
    > 0.30      good
Negative values usually indicate a reverse-scored or miskeyed item.

Usage Example:
    from item_reliability import compute_reliability, get_problematic_items

    rows = compute_reliability(df, standardize=False, digits=3)
    for row in rows:
        print(f"{row['term']}: r = {row['item_discr']}, "
              f"alpha if deleted = {row['alpha_if_deleted']}")

    for item in get_problematic_items(rows):
        print(f"{item['term']}: {item['recommendation']}")
"""

import logging
import math
from typing import Any, List, Optional

from ._constants import (
    DEFAULT_DIGITS,
    DISCRIMINATION_THRESHOLDS,
    MIN_RELIABILITY_COLUMNS,
)
from ._input import drop_incomplete_rows, resolve_input, validate_digits
from ._types import ItemReliabilityRow, ProblematicItem
from .correlation import correlate
from .cronbach import alpha_from_complete_cases
from .exceptions import InsufficientColumnsError
from .variance import standardize_items, total_scores

logger = logging.getLogger(__name__)


def get_discrimination_quality(item_discr: float) -> str:
    """
    Classify an item discrimination index by its absolute value.

    Args:
        item_discr: Corrected item-total correlation

    Returns:
        "poor" (|r| < 0.10), "fair" (0.10 <= |r| <= 0.30), "good"
        (|r| > 0.30), or "undefined" for NaN
    """
    if math.isnan(item_discr):
        return "undefined"

    magnitude = abs(item_discr)
    if magnitude > DISCRIMINATION_THRESHOLDS["good"]:
        return "good"
    elif magnitude >= DISCRIMINATION_THRESHOLDS["fair"]:
        return "fair"
    else:
        return "poor"


def item_total_statistics(
    items: Any,
    standardize: bool = False,
) -> List[ItemReliabilityRow]:
    """
    Unrounded item discrimination and alpha-if-deleted for every item.

    Same as compute_reliability() without the final rounding. Comparisons
    between items and the full-scale alpha should use these values.

    Raises:
        InvalidInputKindError: If ``items`` is not a rectangular numeric table.
        InsufficientColumnsError: If there are fewer than three items.
    """
    frame = drop_incomplete_rows(resolve_input(items).frame)

    n_items = frame.shape[1]
    if n_items < MIN_RELIABILITY_COLUMNS:
        logger.warning(
            f"Item analysis skipped: {n_items} items "
            f"(need at least {MIN_RELIABILITY_COLUMNS})",
            extra={
                "n_items": n_items,
                "n_obs": frame.shape[0],
                "metric": "item_analysis",
            },
        )
        raise InsufficientColumnsError(
            "Data frame needs at least three columns for reliability-test",
            required=MIN_RELIABILITY_COLUMNS,
            actual=n_items,
        )

    if standardize:
        frame = standardize_items(frame)

    rows: List[ItemReliabilityRow] = []

    for i, term in enumerate(frame.columns):
        # Scale with the current item deleted
        rest = frame.iloc[:, [j for j in range(n_items) if j != i]]

        rows.append(
            {
                "term": term,
                "alpha_if_deleted": alpha_from_complete_cases(rest),
                "item_discr": correlate(frame.iloc[:, i], total_scores(rest)),
            }
        )

    logger.info(
        f"Item analysis calculated for {n_items} items "
        f"from {frame.shape[0]} complete rows (standardized: {standardize})",
        extra={
            "n_items": n_items,
            "n_obs": frame.shape[0],
            "metric": "item_analysis",
        },
    )

    return rows


def compute_reliability(
    items: Any,
    standardize: bool = False,
    digits: int = DEFAULT_DIGITS,
) -> List[ItemReliabilityRow]:
    """
    Calculate item discrimination and alpha-if-deleted for every item.

    Args:
        items: Item scores (N observations x M items).
        standardize: Rescale every item to zero mean and unit variance
            before the analysis. Recommended when items use different
            response scales.
        digits: Decimal places of the returned values. Rounding happens
            only when the rows are built.

    Returns:
        One ItemReliabilityRow per item, in input column order.

    Raises:
        InvalidInputKindError: If ``items`` is not a rectangular numeric table.
        InsufficientColumnsError: If there are fewer than three items. Deleting
            one item from a two-item scale leaves a single column, for which
            alpha is undefined.
        ValueError: If ``digits`` is not a non-negative integer.
    """
    validate_digits(digits)

    return [
        {
            "term": row["term"],
            "alpha_if_deleted": round(row["alpha_if_deleted"], digits),
            "item_discr": round(row["item_discr"], digits),
        }
        for row in item_total_statistics(items, standardize=standardize)
    ]


def get_problematic_items(
    rows: List[ItemReliabilityRow],
    threshold: float = DISCRIMINATION_THRESHOLDS["fair"],
    scale_alpha: Optional[float] = None,
) -> List[ProblematicItem]:
    """
    Identify items that weaken the scale.

    An item is flagged when its discrimination is negative, when it is
    below ``threshold``, or (if ``scale_alpha`` is given) when deleting it
    would raise alpha above the full-scale value.

    Args:
        rows: Output of compute_reliability()
        threshold: Discrimination below which an item is flagged
        scale_alpha: Cronbach's alpha of the full scale

    Returns:
        List of ProblematicItem, most negative discrimination first.
    """
    problematic: List[ProblematicItem] = []

    for row in rows:
        corr = row["item_discr"]

        if math.isnan(corr):
            continue

        if corr < 0:
            reason = "negative_discrimination"
            recommendation = (
                "Negative discrimination indicates this item may be "
                "reverse-scored or measuring something different. "
                "Check its coding before keeping it in the scale."
            )
        elif corr < threshold:
            reason = "low_discrimination"
            recommendation = (
                f"Low discrimination ({corr:.3f}) suggests the item barely "
                "separates high and low scorers. Review its wording."
            )
        elif scale_alpha is not None and row["alpha_if_deleted"] > scale_alpha:
            reason = "alpha_increases_if_deleted"
            recommendation = (
                f"Removing this item would raise alpha to "
                f"{row['alpha_if_deleted']:.3f}. Consider dropping or revising it."
            )
        else:
            continue

        problematic.append(
            {
                "term": row["term"],
                "item_discr": corr,
                "reason": reason,
                "recommendation": recommendation,
            }
        )

    problematic.sort(key=lambda x: x["item_discr"])

    return problematic
