"""
Domain Entities - Accuracy Snapshot

Value objects produced by the accuracy metrics engine. They are computed
fresh on every request and never persisted.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, List, Optional

from .health_status import HealthStatus


@dataclass(slots=True)
class ClassMetrics:
    """One-vs-rest classification quality for a single health status."""

    status: HealthStatus
    true_positives: int = 0
    false_positives: int = 0
    false_negatives: int = 0
    true_negatives: int = 0
    precision: float = 0.0
    recall: float = 0.0
    f1_score: float = 0.0
    specificity: float = 0.0
    accuracy: float = 0.0

    @property
    def support(self) -> int:
        """Number of records whose actual outcome is this status."""
        return self.true_positives + self.false_negatives


@dataclass(slots=True)
class AggregateMetrics:
    precision: float = 0.0
    recall: float = 0.0
    f1_score: float = 0.0


@dataclass(slots=True)
class ConfusionMatrix:
    """Rows are predicted statuses, columns are actual outcomes."""

    labels: List[HealthStatus] = field(default_factory=HealthStatus.ordered)
    matrix: List[List[int]] = field(
        default_factory=lambda: [[0] * 4 for _ in range(4)]
    )

    @property
    def total(self) -> int:
        return sum(sum(row) for row in self.matrix)

    def predicted_count(self, status: HealthStatus) -> int:
        return sum(self.matrix[self.labels.index(status)])

    def actual_count(self, status: HealthStatus) -> int:
        col = self.labels.index(status)
        return sum(row[col] for row in self.matrix)


@dataclass(slots=True)
class AccuracySnapshot:
    """Classification quality of evaluated predictions over a lookback window."""

    window_days: int
    start_time: datetime
    end_time: datetime
    total_predictions: int = 0
    evaluated_predictions: int = 0
    correct_predictions: int = 0
    overall_accuracy: float = 0.0
    average_confidence: float = 0.0
    class_metrics: Dict[HealthStatus, ClassMetrics] = field(default_factory=dict)
    weighted: AggregateMetrics = field(default_factory=AggregateMetrics)
    macro: AggregateMetrics = field(default_factory=AggregateMetrics)
    confusion_matrix: ConfusionMatrix = field(default_factory=ConfusionMatrix)
    calibration_score: float = 0.0
    accuracy_trend: float = 0.0
    insights: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
    no_data: bool = False


@dataclass(slots=True)
class StatusAccuracy:
    """Hit rate of the evaluated predictions that named one status."""

    status: HealthStatus
    total_predictions: int
    correct_predictions: int
    accuracy: float
    average_confidence: float


@dataclass(slots=True)
class DailyAccuracy:
    day: date
    total_predictions: int
    correct_predictions: int
    accuracy: Optional[float] = None
    average_confidence: float = 0.0


@dataclass(slots=True)
class PredictionAccuracyReport:
    """
    Confidence split, per-status hit rate and daily trend over a window.

    Unlike AccuracySnapshot it also covers predictions still awaiting
    evaluation, and ``overall_accuracy`` is None rather than zero when
    nothing has been evaluated.
    """

    window_days: int
    period_start: date
    period_end: date
    generated_at: datetime
    total_predictions: int = 0
    evaluated_predictions: int = 0
    correct_predictions: int = 0
    incorrect_predictions: int = 0
    pending_evaluation: int = 0
    overall_accuracy: Optional[float] = None
    average_confidence: float = 0.0
    average_confidence_correct: float = 0.0
    average_confidence_incorrect: float = 0.0
    accuracy_by_predicted_status: Dict[HealthStatus, StatusAccuracy] = field(
        default_factory=dict
    )
    daily_accuracy: List[DailyAccuracy] = field(default_factory=list)
    insights: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
