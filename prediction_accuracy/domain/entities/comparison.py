"""
Domain Entities - Model Comparison

Value objects for the side-by-side evaluation of two prediction strategies.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List

from .health_status import HealthStatus

TIE = "TIE"


@dataclass(slots=True)
class ModelPerformance:
    """Performance summary of one model type over a window."""

    model_type: str
    total_predictions: int = 0
    evaluated_predictions: int = 0
    correct_predictions: int = 0
    accuracy: float = 0.0
    precision: float = 0.0
    recall: float = 0.0
    f1_score: float = 0.0
    average_confidence: float = 0.0
    average_response_time_ms: float = 0.0
    error_count: int = 0
    accuracy_by_status: Dict[HealthStatus, float] = field(default_factory=dict)

    @property
    def blended_score(self) -> float:
        """Score used to pick a winner: 60% accuracy, 40% F1."""
        return 0.6 * self.accuracy + 0.4 * self.f1_score


@dataclass(slots=True)
class SignificanceResult:
    """Two-proportion z-test outcome and effect size."""

    p_value: float = 1.0
    z_score: float = 0.0
    is_significant: bool = False
    effect_size: float = 0.0
    sufficient_data: bool = False


@dataclass(slots=True)
class StatusComparison:
    """Per-predicted-status accuracy of both models."""

    status: HealthStatus
    accuracy_a: float
    accuracy_b: float
    count_a: int
    count_b: int
    better_model: str


@dataclass(slots=True)
class ComparisonResult:
    window_days: int
    start_time: datetime
    end_time: datetime
    model_a: ModelPerformance
    model_b: ModelPerformance
    accuracy_difference: float
    f1_difference: float
    confidence_difference: float
    winner: str
    win_margin: float
    significance: SignificanceResult
    status_comparisons: List[StatusComparison] = field(default_factory=list)
    insights: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
