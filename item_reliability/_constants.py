"""
Shared constants for scale reliability analysis.

This module contains threshold constants, type aliases, and minimum-size
requirements used across all reliability submodules.

Reference:
    Cronbach LJ. 1951. Coefficient alpha and the internal structure of tests.
    Piedmont RL. 2014. Inter-item Correlations. Encyclopedia of Quality of
    Life and Well-Being Research, 3303-3304.
"""

from typing import Literal


# =============================================================================
# TYPE ALIASES
# =============================================================================

# Correlation methods accepted by every correlation-dependent operation.
CorrelationMethod = Literal["pearson", "spearman", "kendall"]

VALID_CORRELATION_METHODS = {"pearson", "spearman", "kendall"}

# "text" renders a plain numeric summary, "structured" returns the
# annotated report model.
OutputMode = Literal["text", "structured"]

VALID_OUTPUT_MODES = {"text", "structured"}


# =============================================================================
# MINIMUM COLUMN REQUIREMENTS
# =============================================================================
# Alpha needs two items to compare the sum of item variances with the
# variance of the total score. The leave-one-out analysis deletes one item
# before computing alpha, so it needs three.

MIN_ALPHA_COLUMNS = 2
MIN_RELIABILITY_COLUMNS = 3
MIN_SPLIT_HALF_COLUMNS = 2
MIN_INTER_ITEM_COLUMNS = 2


# =============================================================================
# CRONBACH'S ALPHA THRESHOLDS
# =============================================================================

ALPHA_THRESHOLDS = {
    "excellent": 0.90,  # α ≥ 0.90
    "good": 0.80,  # α ≥ 0.80
    "acceptable": 0.70,  # α ≥ 0.70
    "questionable": 0.60,  # α ≥ 0.60
    "poor": 0.50,  # α ≥ 0.50
    # α < 0.50: Unacceptable
}

# Minimum alpha (and Spearman-Brown split-half) for a usable scale
ACCEPTABLE_RELIABILITY_THRESHOLD = 0.70


# =============================================================================
# ITEM DISCRIMINATION THRESHOLDS
# =============================================================================
# Absolute corrected item-total correlation:
# - |r| < 0.10: poor, item barely separates high and low scorers
# - 0.10 <= |r| <= 0.30: fair
# - |r| > 0.30: good
# Negative values usually mean the item is reverse-scored or miskeyed.

DISCRIMINATION_THRESHOLDS = {
    "fair": 0.10,
    "good": 0.30,
}

# Minimum number of flagged items that escalates the item-review
# recommendation to high priority.
PROBLEMATIC_ITEM_COUNT_THRESHOLD = 3


# =============================================================================
# MEAN INTER-ITEM CORRELATION RANGE (Piedmont 2014)
# =============================================================================

MIC_IDEAL_RANGE = (0.20, 0.40)


# =============================================================================
# ITEM DIFFICULTY RANGE
# =============================================================================
# Difficulty should lie between 0.2 and 0.8. Lower values indicate hard
# items, values close to one indicate easy items.

DIFFICULTY_ACCEPTABLE_RANGE = (0.20, 0.80)

# Difficulty and ideal difficulty are always reported with two decimals.
DIFFICULTY_DIGITS = 2


# =============================================================================
# NUMERIC TOLERANCES
# =============================================================================

# Tolerance for symmetry, unit-diagonal and [-1, 1] bound checks on
# caller-supplied correlation matrices.
CORRELATION_MATRIX_TOLERANCE = 1e-8

DEFAULT_DIGITS = 3
