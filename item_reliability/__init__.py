r"""
Internal-consistency reliability statistics for multi-item scales.

This package implements reliability calculations for psychometric tests and
questionnaires:
- Cronbach's alpha (internal consistency)
- Item-total statistics: item discrimination and alpha-if-deleted
- Split-half reliability (odd-even split with Spearman-Brown correction)
- Mean inter-item correlation
- Item difficulty and ideal item difficulty

All operations are pure functions of a table of item scores (rows =
respondents, columns = items). Inputs may be a pandas DataFrame, a 2-D numpy
array, a mapping of item name to scores, or a list of rows. Missing values
are NaN/None.

Usage Example
-------------
Item-total statistics and alpha:

    from item_reliability import (
        compute_reliability,
        cronbach_alpha,
        get_alpha_interpretation,
        get_problematic_items,
    )

    alpha = cronbach_alpha(df)
    print(f"Cronbach's alpha: {alpha:.3f} ({get_alpha_interpretation(alpha)})")

    rows = compute_reliability(df, standardize=False, digits=3)
    for row in rows:
        print(row["term"], row["alpha_if_deleted"], row["item_discr"])

    for item in get_problematic_items(rows, scale_alpha=alpha):
        print(f"{item['term']}: {item['recommendation']}")

Other coefficients:

    from item_reliability import (
        item_difficulty,
        mean_inter_item_correlation,
        split_half_reliability,
    )

    split_half_reliability(df)            # {"splithalf": ..., "spearmanbrown": ...}
    mean_inter_item_correlation(df, method="spearman")
    item_difficulty(df)                   # [{"term", "difficulty", "ideal_difficulty"}, ...]

Full report:

    from item_reliability import get_scale_report

    report = get_scale_report(df, digits=3)
    print(report.overall_status.value)
    print(get_scale_report(df, output_mode="text"))

Errors
------
InvalidInputKindError and InsufficientColumnsError (both ReliabilityError)
signal unusable input. Undefined statistics are returned as NaN/inf rather
than raised.
"""

# =============================================================================
# Public API exports
# =============================================================================

# Type definitions
from ._constants import CorrelationMethod, OutputMode
from ._types import (
    ItemDifficultyRow,
    ItemReliabilityRow,
    ProblematicItem,
    SplitHalfResult,
)

# Threshold constants
from ._constants import (
    ALPHA_THRESHOLDS,
    ACCEPTABLE_RELIABILITY_THRESHOLD,
    DISCRIMINATION_THRESHOLDS,
    MIC_IDEAL_RANGE,
    DIFFICULTY_ACCEPTABLE_RANGE,
    MIN_ALPHA_COLUMNS,
    MIN_RELIABILITY_COLUMNS,
    MIN_SPLIT_HALF_COLUMNS,
    MIN_INTER_ITEM_COLUMNS,
)

# Errors
from .exceptions import (
    ReliabilityError,
    InvalidInputKindError,
    InsufficientColumnsError,
)

# Input boundary
from ._input import InputKind, ResolvedInput, resolve_input, is_correlation_like

# Correlation and variance
from .correlation import (
    compute_correlation_matrix,
    resolve_correlation_matrix,
    correlate,
)
from .variance import VarianceSummary, summarize_variance, standardize_items

# Cronbach's alpha
from .cronbach import cronbach_alpha, get_alpha_interpretation

# Item-total statistics
from .item_analysis import (
    compute_reliability,
    get_discrimination_quality,
    get_problematic_items,
    item_total_statistics,
)

# Split-half reliability
from .split_half import split_half_reliability, apply_spearman_brown_correction

# Mean inter-item correlation
from .inter_item import (
    mean_inter_item_correlation,
    lower_triangle_values,
    get_mic_interpretation,
)

# Item difficulty
from .difficulty import item_difficulty, get_difficulty_interpretation

# Report
from .report import (
    get_scale_report,
    get_scale_report_from_settings,
    format_report_text,
    generate_reliability_recommendations,
)
from .schemas import ScaleReliabilityReport

# Configuration and logging
from .config import ReliabilitySettings, get_settings
from .logging_config import setup_logging

__all__ = [
    # Type definitions
    "CorrelationMethod",
    "OutputMode",
    "ItemDifficultyRow",
    "ItemReliabilityRow",
    "ProblematicItem",
    "SplitHalfResult",
    # Threshold constants
    "ALPHA_THRESHOLDS",
    "ACCEPTABLE_RELIABILITY_THRESHOLD",
    "DISCRIMINATION_THRESHOLDS",
    "MIC_IDEAL_RANGE",
    "DIFFICULTY_ACCEPTABLE_RANGE",
    "MIN_ALPHA_COLUMNS",
    "MIN_RELIABILITY_COLUMNS",
    "MIN_SPLIT_HALF_COLUMNS",
    "MIN_INTER_ITEM_COLUMNS",
    # Errors
    "ReliabilityError",
    "InvalidInputKindError",
    "InsufficientColumnsError",
    # Input boundary
    "InputKind",
    "ResolvedInput",
    "resolve_input",
    "is_correlation_like",
    # Correlation and variance
    "compute_correlation_matrix",
    "resolve_correlation_matrix",
    "correlate",
    "VarianceSummary",
    "summarize_variance",
    "standardize_items",
    # Cronbach's alpha
    "cronbach_alpha",
    "get_alpha_interpretation",
    # Item-total statistics
    "compute_reliability",
    "get_discrimination_quality",
    "get_problematic_items",
    "item_total_statistics",
    # Split-half reliability
    "split_half_reliability",
    "apply_spearman_brown_correction",
    # Mean inter-item correlation
    "mean_inter_item_correlation",
    "lower_triangle_values",
    "get_mic_interpretation",
    # Item difficulty
    "item_difficulty",
    "get_difficulty_interpretation",
    # Report
    "get_scale_report",
    "get_scale_report_from_settings",
    "format_report_text",
    "generate_reliability_recommendations",
    "ScaleReliabilityReport",
    # Configuration and logging
    "ReliabilitySettings",
    "get_settings",
    "setup_logging",
]
