"""
Item difficulty and ideal item difficulty.

Difficulty is the mean response relative to the item's maximum observed
value:

    difficulty = sum(x) / (max(x) × n)

It should range between 0.2 and 0.8; lower values signal harder items,
values close to one easier items. The ideal difficulty of an item with
maximum ``max(x)`` is

    p = 1 / max(x)
    ideal = p + (1 - p) / 2

which for most rating scales lies between 0.5 and 0.8. Both values are
rounded to two decimals.

Missing values are dropped per item, so one item's missingness never affects
another item's difficulty.
"""

import logging
import math
from typing import Any, List

import numpy as np
import pandas as pd

from ._constants import DIFFICULTY_ACCEPTABLE_RANGE, DIFFICULTY_DIGITS
from ._input import resolve_input
from ._types import ItemDifficultyRow

logger = logging.getLogger(__name__)


def get_difficulty_interpretation(difficulty: float) -> str:
    """
    Get interpretation string for an item difficulty.

    Returns:
        "difficult" (< 0.20), "easy" (> 0.80), "acceptable", or "undefined"
        for NaN
    """
    low, high = DIFFICULTY_ACCEPTABLE_RANGE
    if math.isnan(difficulty):
        return "undefined"
    elif difficulty < low:
        return "difficult"
    elif difficulty > high:
        return "easy"
    else:
        return "acceptable"


def _item_difficulty(values: pd.Series) -> float:
    observed = values.dropna()
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(
            np.float64(observed.sum()) / (np.float64(observed.max()) * len(observed))
        )


def _ideal_difficulty(values: pd.Series) -> float:
    with np.errstate(divide="ignore", invalid="ignore"):
        p = np.float64(1.0) / np.float64(values.max(skipna=True))
        return float(p + (1 - p) / 2)


def item_difficulty(items: Any) -> List[ItemDifficultyRow]:
    """
    Calculate difficulty and ideal difficulty for every item.

    Args:
        items: Item scores (N observations x M items).

    Returns:
        One ItemDifficultyRow per item, in input column order. Items with no
        observed value, or a maximum of zero, get NaN.

    Raises:
        InvalidInputKindError: If ``items`` is not a rectangular numeric table.
    """
    frame = resolve_input(items).frame

    rows: List[ItemDifficultyRow] = []
    for i, term in enumerate(frame.columns):
        values = frame.iloc[:, i]
        rows.append(
            {
                "term": term,
                "difficulty": round(_item_difficulty(values), DIFFICULTY_DIGITS),
                "ideal_difficulty": round(_ideal_difficulty(values), DIFFICULTY_DIGITS),
            }
        )

    undefined = [row["term"] for row in rows if math.isnan(row["difficulty"])]
    if undefined:
        logger.warning(f"Item difficulty is undefined for items: {undefined}")

    return rows
