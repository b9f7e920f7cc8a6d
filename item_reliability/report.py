"""
Scale reliability report.

Combines Cronbach's alpha, item-total statistics, split-half reliability,
mean inter-item correlation and item difficulty into one report with
interpretations, flagged items, recommendations and an overall status.

Every metric is computed independently from the same input. A metric that
cannot be computed (e.g. too few items) records its error in its own section
and the report carries on with the rest. Invalid input, on the other hand,
fails the whole report before anything is computed.

Usage Example:
    from item_reliability import get_scale_report

    report = get_scale_report(df, digits=3, correlation_method="pearson")

    print(f"Overall status: {report.overall_status.value}")
    print(f"Cronbach's alpha: {report.internal_consistency.cronbachs_alpha}")
    print(f"Split-half (corrected): {report.split_half.spearmanbrown}")

    for rec in report.recommendations:
        print(f"[{rec.priority.value}] {rec.category.value}: {rec.message}")

    # Plain-text summary instead of the model
    print(get_scale_report(df, output_mode="text"))
"""

import logging
import math
import uuid
from typing import Any, Dict, List, Tuple, Union

import pandas as pd

from ._constants import (
    ACCEPTABLE_RELIABILITY_THRESHOLD,
    ALPHA_THRESHOLDS,
    DEFAULT_DIGITS,
    DISCRIMINATION_THRESHOLDS,
    PROBLEMATIC_ITEM_COUNT_THRESHOLD,
    VALID_OUTPUT_MODES,
    CorrelationMethod,
    OutputMode,
)
from ._input import drop_incomplete_rows, resolve_input, validate_digits
from .config import ReliabilitySettings
from .correlation import validate_correlation_method
from .cronbach import alpha_from_complete_cases, get_alpha_interpretation
from .difficulty import get_difficulty_interpretation, item_difficulty
from .exceptions import ReliabilityError
from .inter_item import get_mic_interpretation, mean_inter_item_correlation
from .item_analysis import (
    get_discrimination_quality,
    get_problematic_items,
    item_total_statistics,
)
from .logging_config import calculation_id_context
from .schemas import ScaleReliabilityReport
from .split_half import split_half_reliability
from .variance import standardize_items

logger = logging.getLogger(__name__)


def _is_finite(value: Any) -> bool:
    return value is not None and math.isfinite(value)


def _create_error_result(error: ReliabilityError) -> Dict:
    """
    Create a default error result dict for a failed section.

    Args:
        error: The error raised by the estimator

    Returns:
        Dict with error set and insufficient_data flagged
    """
    return {
        "error": error.message,
        "insufficient_data": True,
    }


def _internal_consistency_section(
    frame: pd.DataFrame, standardize: bool, digits: int
) -> Tuple[Dict, List[Dict]]:
    """
    Alpha and item-total statistics, plus the items flagged from them.

    Items are flagged on unrounded values, so an alpha increase smaller than
    the reporting precision is still detected.
    """
    complete = drop_incomplete_rows(frame)
    result: Dict = {
        "cronbachs_alpha": None,
        "interpretation": None,
        "meets_threshold": False,
        "num_items": frame.shape[1],
        "num_obs": complete.shape[0],
        "items": [],
        "error": None,
        "item_analysis_error": None,
        "insufficient_data": False,
    }

    if standardize:
        complete = standardize_items(complete)

    try:
        alpha = alpha_from_complete_cases(complete)
    except ReliabilityError as e:
        logger.warning(f"Cronbach's alpha skipped: {e}")
        result.update(_create_error_result(e))
        return result, []

    result["cronbachs_alpha"] = round(alpha, digits)
    result["interpretation"] = get_alpha_interpretation(alpha)
    result["meets_threshold"] = (
        math.isfinite(alpha) and alpha >= ACCEPTABLE_RELIABILITY_THRESHOLD
    )

    try:
        rows = item_total_statistics(frame, standardize=standardize)
    except ReliabilityError as e:
        logger.info(f"Item-total statistics skipped: {e}")
        result["item_analysis_error"] = e.message
        return result, []

    result["items"] = [
        {
            "term": row["term"],
            "alpha_if_deleted": round(row["alpha_if_deleted"], digits),
            "item_discr": round(row["item_discr"], digits),
            "quality": get_discrimination_quality(row["item_discr"]),
        }
        for row in rows
    ]

    flagged = [
        {**item, "item_discr": round(item["item_discr"], digits)}
        for item in get_problematic_items(rows, scale_alpha=alpha)
    ]
    return result, flagged


def _split_half_section(frame: pd.DataFrame, digits: int) -> Dict:
    result: Dict = {
        "splithalf": None,
        "spearmanbrown": None,
        "interpretation": None,
        "meets_threshold": False,
        "error": None,
        "insufficient_data": False,
    }

    try:
        split = split_half_reliability(frame)
    except ReliabilityError as e:
        result.update(_create_error_result(e))
        return result

    r_full = split["spearmanbrown"]
    result["splithalf"] = round(split["splithalf"], digits)
    result["spearmanbrown"] = round(r_full, digits)
    result["interpretation"] = get_alpha_interpretation(r_full)
    result["meets_threshold"] = (
        math.isfinite(r_full) and r_full >= ACCEPTABLE_RELIABILITY_THRESHOLD
    )
    return result


def _inter_item_section(
    frame: pd.DataFrame, method: CorrelationMethod, digits: int
) -> Dict:
    n_items = frame.shape[1]
    result: Dict = {
        "mean_inter_item_correlation": None,
        "method": method,
        "num_pairs": n_items * (n_items - 1) // 2,
        "interpretation": None,
        "error": None,
        "insufficient_data": False,
    }

    try:
        mic = mean_inter_item_correlation(frame, method=method, is_correlation=False)
    except ReliabilityError as e:
        result.update(_create_error_result(e))
        result["num_pairs"] = 0
        return result

    result["mean_inter_item_correlation"] = round(mic, digits)
    result["interpretation"] = get_mic_interpretation(mic)
    return result


def _difficulty_section(frame: pd.DataFrame) -> Dict:
    try:
        rows = item_difficulty(frame)
    except ReliabilityError as e:
        return {"items": [], "error": e.message}

    return {
        "items": [
            {**row, "interpretation": get_difficulty_interpretation(row["difficulty"])}
            for row in rows
        ],
        "error": None,
    }


def _collect_undefined_statistics(
    alpha_result: Dict,
    split_half_result: Dict,
    inter_item_result: Dict,
    difficulty_result: Dict,
) -> List[str]:
    undefined: List[str] = []

    alpha = alpha_result["cronbachs_alpha"]
    if alpha is not None and not math.isfinite(alpha):
        undefined.append("cronbachs_alpha")

    for row in alpha_result["items"]:
        for field in ("alpha_if_deleted", "item_discr"):
            if not math.isfinite(row[field]):
                undefined.append(f"{field}:{row['term']}")

    for field in ("splithalf", "spearmanbrown"):
        value = split_half_result[field]
        if value is not None and not math.isfinite(value):
            undefined.append(field)

    mic = inter_item_result["mean_inter_item_correlation"]
    if mic is not None and not math.isfinite(mic):
        undefined.append("mean_inter_item_correlation")

    for row in difficulty_result["items"]:
        for field in ("difficulty", "ideal_difficulty"):
            if not math.isfinite(row[field]):
                undefined.append(f"{field}:{row['term']}")

    return undefined


def generate_reliability_recommendations(
    alpha_result: Dict,
    split_half_result: Dict,
    inter_item_result: Dict,
    flagged_items: List[Dict],
) -> List[Dict[str, str]]:
    """
    Generate actionable recommendations based on reliability metrics.

    Categories:
    - data_collection: Not enough items or complete rows
    - item_review: Items with negative/low discrimination or that lower alpha
    - threshold_warning: Metrics below acceptable thresholds

    Args:
        alpha_result: Internal consistency section of the report
        split_half_result: Split-half section of the report
        inter_item_result: Mean inter-item correlation section of the report
        flagged_items: Output of get_problematic_items()

    Returns:
        List of {"category", "message", "priority"} dicts, high priority first.
    """
    recommendations: List[Dict[str, str]] = []

    # ==========================================================================
    # DATA COLLECTION RECOMMENDATIONS
    # ==========================================================================

    if alpha_result.get("insufficient_data", False):
        recommendations.append(
            {
                "category": "data_collection",
                "message": (
                    f"Cronbach's alpha requires at least 2 items. "
                    f"Current: {alpha_result.get('num_items', 0)}."
                ),
                "priority": "high",
            }
        )
    elif alpha_result.get("item_analysis_error"):
        recommendations.append(
            {
                "category": "data_collection",
                "message": (
                    "Item-total statistics require at least 3 items. "
                    "Add items to evaluate each item's contribution."
                ),
                "priority": "medium",
            }
        )

    if alpha_result.get("num_obs", 0) < 2 and not alpha_result.get(
        "insufficient_data", False
    ):
        recommendations.append(
            {
                "category": "data_collection",
                "message": (
                    f"Only {alpha_result.get('num_obs', 0)} complete row(s) remain "
                    f"after removing rows with missing values."
                ),
                "priority": "high",
            }
        )

    # ==========================================================================
    # ITEM REVIEW RECOMMENDATIONS
    # ==========================================================================

    negative_items = [
        item for item in flagged_items if item["reason"] == "negative_discrimination"
    ]
    if negative_items:
        count = len(negative_items)
        priority = "high" if count >= PROBLEMATIC_ITEM_COUNT_THRESHOLD else "medium"
        recommendations.append(
            {
                "category": "item_review",
                "message": (
                    f"Found {count} item(s) with negative discrimination: "
                    f"{', '.join(item['term'] for item in negative_items)}. "
                    f"Check whether they need reverse scoring."
                ),
                "priority": priority,
            }
        )

    weak_items = [
        item for item in flagged_items if item["reason"] != "negative_discrimination"
    ]
    if weak_items:
        count = len(weak_items)
        priority = "medium" if count >= PROBLEMATIC_ITEM_COUNT_THRESHOLD else "low"
        recommendations.append(
            {
                "category": "item_review",
                "message": (
                    f"Found {count} item(s) with low discrimination "
                    f"(< {DISCRIMINATION_THRESHOLDS['fair']}) or that lower alpha: "
                    f"{', '.join(item['term'] for item in weak_items)}."
                ),
                "priority": priority,
            }
        )

    # ==========================================================================
    # THRESHOLD WARNING RECOMMENDATIONS
    # ==========================================================================

    alpha = alpha_result.get("cronbachs_alpha")
    if _is_finite(alpha) and alpha < ACCEPTABLE_RELIABILITY_THRESHOLD:
        recommendations.append(
            {
                "category": "threshold_warning",
                "message": (
                    f"Cronbach's alpha ({alpha:.2f}) is below the acceptable "
                    f"threshold (≥ {ACCEPTABLE_RELIABILITY_THRESHOLD}). Internal "
                    f"consistency is {alpha_result.get('interpretation', 'poor')}."
                ),
                "priority": "high",
            }
        )

    spearman_brown = split_half_result.get("spearmanbrown")
    if _is_finite(spearman_brown) and spearman_brown < ACCEPTABLE_RELIABILITY_THRESHOLD:
        recommendations.append(
            {
                "category": "threshold_warning",
                "message": (
                    f"Split-half reliability ({spearman_brown:.2f}) is below the "
                    f"acceptable threshold (≥ {ACCEPTABLE_RELIABILITY_THRESHOLD}). "
                    f"Internal consistency is "
                    f"{split_half_result.get('interpretation', 'poor')}."
                ),
                "priority": "medium",
            }
        )

    mic = inter_item_result.get("mean_inter_item_correlation")
    mic_interpretation = inter_item_result.get("interpretation")
    if _is_finite(mic) and mic_interpretation == "low":
        recommendations.append(
            {
                "category": "threshold_warning",
                "message": (
                    f"Mean inter-item correlation ({mic:.2f}) is below 0.20. "
                    f"The items may not represent the same content domain."
                ),
                "priority": "medium",
            }
        )
    elif _is_finite(mic) and mic_interpretation == "high":
        recommendations.append(
            {
                "category": "threshold_warning",
                "message": (
                    f"Mean inter-item correlation ({mic:.2f}) is above 0.40. "
                    f"The items may capture only a narrow bandwidth of the construct."
                ),
                "priority": "low",
            }
        )

    # Sort recommendations by priority (high > medium > low)
    priority_order = {"high": 0, "medium": 1, "low": 2}
    recommendations.sort(key=lambda x: priority_order.get(x["priority"], 99))

    return recommendations


def _determine_overall_status(alpha_result: Dict, split_half_result: Dict) -> str:
    """
    Determine overall reliability status based on combined metrics.

    Only finite coefficients count as available.

    Returns:
        Overall status: "excellent", "acceptable", "needs_attention", "insufficient_data"
    """
    values = [
        value
        for value in (
            alpha_result.get("cronbachs_alpha"),
            split_half_result.get("spearmanbrown"),
        )
        if _is_finite(value)
    ]

    if not values:
        return "insufficient_data"

    if all(value >= ALPHA_THRESHOLDS["excellent"] for value in values):
        return "excellent"

    if all(value >= ACCEPTABLE_RELIABILITY_THRESHOLD for value in values):
        return "acceptable"

    return "needs_attention"


def _format_value(value: Any, digits: int) -> str:
    if value is None:
        return "n/a"
    if not math.isfinite(value):
        return str(value)
    return f"{value:.{digits}f}"


def format_report_text(report: ScaleReliabilityReport) -> str:
    """
    Render a report as a plain-text numeric summary.

    Args:
        report: Structured report from get_scale_report()

    Returns:
        Multi-line string with one line per metric and one per item.
    """
    digits = report.digits
    consistency = report.internal_consistency
    split = report.split_half
    inter_item = report.inter_item

    lines = [
        f"Scale reliability: {report.num_items} items, {report.num_obs} rows "
        f"({consistency.num_obs} complete)",
        f"Overall status: {report.overall_status.value}",
        "",
        f"Cronbach's alpha: {_format_value(consistency.cronbachs_alpha, digits)}"
        + (f" ({consistency.interpretation.value})" if consistency.interpretation else ""),
        f"Split-half: {_format_value(split.splithalf, digits)}, "
        f"Spearman-Brown: {_format_value(split.spearmanbrown, digits)}",
        f"Mean inter-item correlation ({inter_item.method}): "
        f"{_format_value(inter_item.mean_inter_item_correlation, digits)}",
    ]

    if consistency.items:
        width = max(len("term"), *(len(item.term) for item in consistency.items))
        lines += ["", f"{'term':<{width}}  alpha_if_deleted  item_discr"]
        for item in consistency.items:
            lines.append(
                f"{item.term:<{width}}  "
                f"{_format_value(item.alpha_if_deleted, digits):>16}  "
                f"{_format_value(item.item_discr, digits):>10}"
            )

    if report.difficulty.items:
        width = max(len("term"), *(len(item.term) for item in report.difficulty.items))
        lines += ["", f"{'term':<{width}}  difficulty  ideal_difficulty"]
        for item in report.difficulty.items:
            lines.append(
                f"{item.term:<{width}}  "
                f"{_format_value(item.difficulty, 2):>10}  "
                f"{_format_value(item.ideal_difficulty, 2):>16}"
            )

    for rec in report.recommendations:
        lines.append(f"[{rec.priority.value}] {rec.category.value}: {rec.message}")

    return "\n".join(lines)


def get_scale_report(
    items: Any,
    *,
    standardize: bool = False,
    digits: int = DEFAULT_DIGITS,
    correlation_method: CorrelationMethod = "pearson",
    output_mode: OutputMode = "structured",
) -> Union[ScaleReliabilityReport, str]:
    """
    Generate a complete internal-consistency report for one scale.

    Args:
        items: Item scores (N observations x M items).
        standardize: Rescale items to unit variance before alpha and the
            item-total statistics.
        digits: Decimal places of reported coefficients. Difficulties always
            use two.
        correlation_method: Method for the mean inter-item correlation.
        output_mode: "structured" for a ScaleReliabilityReport, "text" for a
            plain-text summary.

    Returns:
        ScaleReliabilityReport or str, depending on ``output_mode``.

    Raises:
        InvalidInputKindError: If ``items`` is not a rectangular numeric table.
        ValueError: If a parameter is out of range.
    """
    validate_digits(digits)
    validate_correlation_method(correlation_method)
    if output_mode not in VALID_OUTPUT_MODES:
        raise ValueError(
            f"Invalid output_mode: '{output_mode}'. "
            f"Value must be one of: {', '.join(sorted(VALID_OUTPUT_MODES))}."
        )

    frame = resolve_input(items).frame

    token = calculation_id_context.set(uuid.uuid4().hex[:12])
    try:
        alpha_result, flagged_items = _internal_consistency_section(
            frame, standardize, digits
        )
        split_half_result = _split_half_section(frame, digits)
        inter_item_result = _inter_item_section(frame, correlation_method, digits)
        difficulty_result = _difficulty_section(frame)

        recommendations = generate_reliability_recommendations(
            alpha_result, split_half_result, inter_item_result, flagged_items
        )
        undefined = _collect_undefined_statistics(
            alpha_result, split_half_result, inter_item_result, difficulty_result
        )
        overall_status = _determine_overall_status(alpha_result, split_half_result)

        if undefined:
            logger.warning(f"Undefined statistics in scale report: {undefined}")

        logger.info(
            f"Scale report generated for {frame.shape[1]} items and "
            f"{frame.shape[0]} rows. Overall status: {overall_status}",
            extra={
                "n_items": frame.shape[1],
                "n_obs": frame.shape[0],
                "metric": "scale_report",
            },
        )
    finally:
        calculation_id_context.reset(token)

    report = ScaleReliabilityReport(
        num_obs=frame.shape[0],
        num_items=frame.shape[1],
        standardized=standardize,
        digits=digits,
        internal_consistency=alpha_result,
        split_half=split_half_result,
        inter_item=inter_item_result,
        difficulty=difficulty_result,
        flagged_items=flagged_items,
        recommendations=recommendations,
        undefined_statistics=undefined,
        overall_status=overall_status,
    )

    if output_mode == "text":
        return format_report_text(report)
    return report


def get_scale_report_from_settings(
    items: Any,
    settings: ReliabilitySettings,
) -> Union[ScaleReliabilityReport, str]:
    """
    Generate a scale report with parameters taken from ``settings``.

    Args:
        items: Item scores (N observations x M items).
        settings: Settings supplying digits, correlation method, output mode
            and standardization.
    """
    return get_scale_report(
        items,
        standardize=settings.STANDARDIZE,
        digits=settings.DIGITS,
        correlation_method=settings.CORRELATION_METHOD,
        output_mode=settings.OUTPUT_MODE,
    )
