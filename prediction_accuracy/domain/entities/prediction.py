"""
Domain Entities - Prediction Audit Record

A PredictionRecord is written once when a prediction is made and mutated
at most once more, when the actual outcome for its horizon is known.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Optional

from .health_status import HealthStatus

DEFAULT_MODEL_TYPE = "AI"


@dataclass
class PredictionRecord:
    """Audited prediction plus its (optional) reconciled outcome."""

    predicted_status: HealthStatus
    confidence: float
    prediction_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    time_horizon_hours: int = 6
    model_type: str = DEFAULT_MODEL_TYPE
    predicted_error_rate: Optional[float] = None
    id: Optional[int] = None

    # Reconciled outcome
    actual_outcome: Optional[HealthStatus] = None
    is_correct: Optional[bool] = None
    actual_error_rate: Optional[float] = None
    outcome_timestamp: Optional[datetime] = None
    evaluation_notes: Optional[str] = None

    # Audit context
    merchant_id: Optional[str] = None
    reasoning: Optional[str] = None
    prompt_version: Optional[str] = None
    response_time_ms: Optional[int] = None
    is_error: bool = False
    error_message: Optional[str] = None
    is_ab_test: bool = False
    ab_test_group: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_evaluated(self) -> bool:
        """True once the outcome triple has been written."""
        return self.actual_outcome is not None

    @property
    def horizon_end(self) -> datetime:
        """End (exclusive) of the window this prediction forecasts."""
        return self.prediction_time + timedelta(hours=self.time_horizon_hours)

    def record_outcome(
        self,
        actual_outcome: HealthStatus,
        notes: Optional[str] = None,
        actual_error_rate: Optional[float] = None,
        at: Optional[datetime] = None,
    ) -> None:
        """Attach the ground truth, keeping the outcome triple consistent."""
        self.actual_outcome = actual_outcome
        self.is_correct = self.predicted_status == actual_outcome
        self.outcome_timestamp = at or datetime.now(timezone.utc)
        if actual_error_rate is not None:
            self.actual_error_rate = actual_error_rate
        if notes is not None:
            self.evaluation_notes = notes
