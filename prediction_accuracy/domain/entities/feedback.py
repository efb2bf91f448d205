"""
Domain Entities - Feedback Loop

Error mining, drift detection and improvement recommendations derived from
reconciled predictions.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from .health_status import HealthStatus


class ImprovementArea(str, Enum):
    PROMPT = "PROMPT"
    THRESHOLDS = "THRESHOLDS"
    FEATURES = "FEATURES"
    MODEL = "MODEL"


class Priority(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"

    @property
    def rank(self) -> int:
        return {"HIGH": 0, "MEDIUM": 1, "LOW": 2}[self.value]


class DriftType(str, Enum):
    NONE = "NONE"
    CONCEPT_DRIFT = "CONCEPT_DRIFT"
    DATA_DRIFT = "DATA_DRIFT"


@dataclass(slots=True)
class HighConfidenceError:
    """An incorrect prediction that was made with high confidence."""

    prediction_id: Optional[int]
    prediction_time: datetime
    predicted: HealthStatus
    actual: HealthStatus
    confidence: float
    model_type: str
    reasoning: Optional[str] = None
    possible_causes: List[str] = field(default_factory=list)


@dataclass(slots=True)
class ErrorPattern:
    predicted: HealthStatus
    actual: HealthStatus
    occurrence_count: int
    average_confidence: float
    likely_cause: str


@dataclass(slots=True)
class MisclassificationPattern:
    """Share of all errors that share one predicted/actual pair."""

    predicted: HealthStatus
    actual: HealthStatus
    count: int
    percentage_of_errors: float
    description: str


@dataclass(slots=True)
class FeatureInsight:
    feature_name: str
    correlation_with_error: float
    insight: str
    recommendation: str


@dataclass(slots=True)
class ImprovementRecommendation:
    area: ImprovementArea
    priority: Priority
    recommendation: str
    expected_improvement_percent: float
    rationale: str


@dataclass(slots=True)
class DriftAnalysis:
    """Accuracy shift between the older and the recent half of a window."""

    drift_detected: bool = False
    drift_score: float = 0.0
    drift_type: DriftType = DriftType.NONE
    baseline_accuracy: Optional[float] = None
    recent_accuracy: Optional[float] = None
    drift_start_date: Optional[datetime] = None
    insufficient_data: bool = False
    description: str = ""
    recommendations: List[str] = field(default_factory=list)


@dataclass(slots=True)
class FeedbackReport:
    window_days: int
    generated_at: datetime
    total_evaluated: int
    total_errors: int
    high_confidence_errors: List[HighConfidenceError] = field(default_factory=list)
    error_patterns: List[ErrorPattern] = field(default_factory=list)
    misclassification_patterns: List[MisclassificationPattern] = field(
        default_factory=list
    )
    feature_insights: List[FeatureInsight] = field(default_factory=list)
    recommendations: List[ImprovementRecommendation] = field(default_factory=list)
    drift: DriftAnalysis = field(default_factory=DriftAnalysis)
