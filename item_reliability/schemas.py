"""
Pydantic models for the structured scale reliability report.

Coefficient fields are plain floats without range constraints: an undefined
statistic is carried as NaN (or ±inf) so that consumers can see it, and is
also listed in ScaleReliabilityReport.undefined_statistics.
"""
import math
from enum import Enum
from typing import List, Optional, Self

from pydantic import BaseModel, Field, model_validator


class ReliabilityInterpretation(str, Enum):
    """Interpretation of reliability coefficient values.

    - excellent: >= 0.90
    - good: >= 0.80
    - acceptable: >= 0.70
    - questionable: >= 0.60
    - poor: >= 0.50
    - unacceptable: < 0.50
    - undefined: coefficient could not be computed (NaN)
    """

    EXCELLENT = "excellent"
    GOOD = "good"
    ACCEPTABLE = "acceptable"
    QUESTIONABLE = "questionable"
    POOR = "poor"
    UNACCEPTABLE = "unacceptable"
    UNDEFINED = "undefined"


class DiscriminationQuality(str, Enum):
    """Quality of an item discrimination index (absolute value)."""

    GOOD = "good"  # > 0.30
    FAIR = "fair"  # 0.10 - 0.30
    POOR = "poor"  # < 0.10
    UNDEFINED = "undefined"


class InterItemInterpretation(str, Enum):
    """Mean inter-item correlation relative to the 0.20-0.40 ideal range."""

    LOW = "low"
    IDEAL = "ideal"
    HIGH = "high"
    UNDEFINED = "undefined"


class DifficultyInterpretation(str, Enum):
    """Item difficulty relative to the 0.20-0.80 acceptable range."""

    DIFFICULT = "difficult"
    ACCEPTABLE = "acceptable"
    EASY = "easy"
    UNDEFINED = "undefined"


class RecommendationCategory(str, Enum):
    """Category of reliability recommendation."""

    DATA_COLLECTION = "data_collection"
    ITEM_REVIEW = "item_review"
    THRESHOLD_WARNING = "threshold_warning"


class RecommendationPriority(str, Enum):
    """Priority level for recommendations."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class OverallStatus(str, Enum):
    """Overall reliability status for the scale."""

    EXCELLENT = "excellent"
    ACCEPTABLE = "acceptable"
    NEEDS_ATTENTION = "needs_attention"
    INSUFFICIENT_DATA = "insufficient_data"


# =============================================================================
# Internal Consistency Schemas
# =============================================================================


class ItemStatistic(BaseModel):
    """Item-total statistics of one item."""

    term: str = Field(..., description="Item (column) name")
    alpha_if_deleted: float = Field(
        ..., description="Cronbach's alpha of the scale without this item"
    )
    item_discr: float = Field(
        ..., description="Corrected item-total correlation (item discrimination)"
    )
    quality: DiscriminationQuality = Field(
        ..., description="poor (<0.10), fair (0.10-0.30) or good (>0.30)"
    )


class InternalConsistencyMetrics(BaseModel):
    """
    Cronbach's alpha for the whole scale plus item-total statistics.
    """

    cronbachs_alpha: Optional[float] = Field(
        None,
        description="Cronbach's alpha. None if it could not be attempted, NaN if undefined.",
    )
    interpretation: Optional[ReliabilityInterpretation] = None
    meets_threshold: bool = Field(
        ...,
        description="Whether alpha meets the minimum acceptable threshold (>= 0.70)",
    )
    num_items: int = Field(..., ge=0)
    num_obs: int = Field(
        ..., ge=0, description="Complete rows used after row-wise deletion"
    )
    items: List[ItemStatistic] = Field(default_factory=list)
    error: Optional[str] = None
    item_analysis_error: Optional[str] = Field(
        None,
        description="Why item-total statistics are missing (e.g. fewer than 3 items)",
    )
    insufficient_data: bool = False

    @model_validator(mode="after")
    def validate_meets_threshold_consistency(self) -> Self:
        """meets_threshold cannot be True without a finite alpha."""
        if self.meets_threshold and (
            self.cronbachs_alpha is None or not math.isfinite(self.cronbachs_alpha)
        ):
            raise ValueError(
                "meets_threshold cannot be True when cronbachs_alpha is missing "
                "or undefined"
            )
        return self


# =============================================================================
# Split-Half Reliability Schemas
# =============================================================================


class SplitHalfMetrics(BaseModel):
    """Odd-even split-half reliability with Spearman-Brown correction."""

    splithalf: Optional[float] = Field(
        None, description="Correlation between the two half-test scores"
    )
    spearmanbrown: Optional[float] = Field(
        None, description="Spearman-Brown corrected full-test reliability"
    )
    interpretation: Optional[ReliabilityInterpretation] = None
    meets_threshold: bool = False
    error: Optional[str] = None
    insufficient_data: bool = False

    @model_validator(mode="after")
    def validate_meets_threshold_consistency(self) -> Self:
        """meets_threshold cannot be True without a finite corrected value."""
        if self.meets_threshold and (
            self.spearmanbrown is None or not math.isfinite(self.spearmanbrown)
        ):
            raise ValueError(
                "meets_threshold cannot be True when spearmanbrown is missing "
                "or undefined"
            )
        return self


# =============================================================================
# Mean Inter-Item Correlation Schemas
# =============================================================================


class InterItemCorrelationMetrics(BaseModel):
    """Mean of all distinct item-pair correlations."""

    mean_inter_item_correlation: Optional[float] = None
    method: str = Field(..., description="pearson, spearman or kendall")
    num_pairs: int = Field(0, ge=0, description="M × (M - 1) / 2 item pairs")
    interpretation: Optional[InterItemInterpretation] = None
    error: Optional[str] = None
    insufficient_data: bool = False


# =============================================================================
# Item Difficulty Schemas
# =============================================================================


class ItemDifficulty(BaseModel):
    """Difficulty of one item."""

    term: str
    difficulty: float
    ideal_difficulty: float
    interpretation: DifficultyInterpretation


class DifficultyMetrics(BaseModel):
    """Item difficulties in column order."""

    items: List[ItemDifficulty] = Field(default_factory=list)
    error: Optional[str] = None


# =============================================================================
# Report Schemas
# =============================================================================


class FlaggedItem(BaseModel):
    """An item that weakens the scale."""

    term: str
    item_discr: float
    reason: str
    recommendation: str


class ReliabilityRecommendation(BaseModel):
    """An actionable recommendation derived from the report."""

    category: RecommendationCategory
    message: str
    priority: RecommendationPriority


class ScaleReliabilityReport(BaseModel):
    """
    Complete internal-consistency report for one scale.

    Each section is computed independently; a section that failed carries
    its own ``error`` and does not affect the others.
    """

    num_obs: int = Field(..., ge=0, description="Rows in the input")
    num_items: int = Field(..., ge=0, description="Items (columns) in the input")
    standardized: bool
    digits: int = Field(..., ge=0)
    internal_consistency: InternalConsistencyMetrics
    split_half: SplitHalfMetrics
    inter_item: InterItemCorrelationMetrics
    difficulty: DifficultyMetrics
    flagged_items: List[FlaggedItem] = Field(default_factory=list)
    recommendations: List[ReliabilityRecommendation] = Field(default_factory=list)
    undefined_statistics: List[str] = Field(
        default_factory=list,
        description="Statistics that came out NaN or infinite",
    )
    overall_status: OverallStatus
