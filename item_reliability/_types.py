"""
TypedDict definitions for reliability calculation results.

These are the records handed across the output boundary. Field names are
fixed: downstream formatting and plotting code relies on ``term``,
``item_discr``, ``alpha_if_deleted``, ``splithalf`` and ``spearmanbrown``.
"""

from typing import TypedDict


class ItemReliabilityRow(TypedDict):
    """
    One row of the item-total statistics table.

    Fields:
        term: Item (column) name.
        alpha_if_deleted: Cronbach's alpha of the scale with this item removed.
        item_discr: Corrected item-total correlation, i.e. the correlation of
            the item with the sum of all other items.
    """

    term: str
    alpha_if_deleted: float
    item_discr: float


class SplitHalfResult(TypedDict):
    """
    Result of an odd-even split-half reliability estimate.

    Fields:
        splithalf: Correlation between the two half-test scores.
        spearmanbrown: Full-length reliability estimated with the
            Spearman-Brown prophecy formula.
    """

    splithalf: float
    spearmanbrown: float


class ItemDifficultyRow(TypedDict):
    """Difficulty and theoretical ideal difficulty of one item."""

    term: str
    difficulty: float
    ideal_difficulty: float


class ProblematicItem(TypedDict):
    """Item flagged by get_problematic_items()."""

    term: str
    item_discr: float
    reason: str
    recommendation: str
