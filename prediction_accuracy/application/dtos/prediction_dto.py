"""
Prediction DTOs - Application Layer

Payloads for appending audit records, recording outcomes and reporting
evaluation runs. Status and confidence are validated by the domain so that
bad values surface as 400 rather than schema errors.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from prediction_accuracy.domain.entities.health_status import HealthStatus
from prediction_accuracy.domain.entities.prediction import (
    DEFAULT_MODEL_TYPE,
    PredictionRecord,
)


class PredictionCreateDTO(BaseModel):
    """DTO for appending a prediction to the audit store."""

    predicted_status: str = Field(..., description="HEALTHY, WARNING, CRITICAL or UNKNOWN")
    confidence: float = Field(..., description="Confidence in [0, 1]")
    time_horizon_hours: int = Field(6, description="Forecast window length in hours")
    model_type: str = Field(DEFAULT_MODEL_TYPE, description="Prediction strategy tag")
    predicted_error_rate: Optional[float] = None
    prediction_time: Optional[datetime] = Field(
        None, description="Defaults to the time the record is received"
    )
    merchant_id: Optional[str] = None
    reasoning: Optional[str] = None
    prompt_version: Optional[str] = None
    response_time_ms: Optional[int] = None
    is_error: bool = False
    error_message: Optional[str] = None
    is_ab_test: bool = False
    ab_test_group: Optional[str] = None

    model_config = {
        "protected_namespaces": (),
        "json_schema_extra": {
            "example": {
                "predicted_status": "WARNING",
                "confidence": 0.82,
                "time_horizon_hours": 6,
                "model_type": "AI",
                "predicted_error_rate": 0.06,
                "merchant_id": "M-1001",
                "response_time_ms": 840,
            }
        }
    }


class PredictionResponseDTO(BaseModel):
    """DTO for an audit record, including its outcome once evaluated."""

    id: int
    prediction_time: datetime
    predicted_status: HealthStatus
    confidence: float
    time_horizon_hours: int
    model_type: str
    predicted_error_rate: Optional[float] = None
    actual_outcome: Optional[HealthStatus] = None
    is_correct: Optional[bool] = None
    actual_error_rate: Optional[float] = None
    outcome_timestamp: Optional[datetime] = None
    evaluation_notes: Optional[str] = None
    evaluated: bool = False
    merchant_id: Optional[str] = None
    reasoning: Optional[str] = None
    prompt_version: Optional[str] = None
    response_time_ms: Optional[int] = None
    is_error: bool = False
    error_message: Optional[str] = None
    is_ab_test: bool = False
    ab_test_group: Optional[str] = None
    created_at: datetime

    model_config = {"protected_namespaces": ()}

    @classmethod
    def from_domain(cls, record: PredictionRecord) -> "PredictionResponseDTO":
        return cls(
            id=record.id,
            prediction_time=record.prediction_time,
            predicted_status=record.predicted_status,
            confidence=record.confidence,
            time_horizon_hours=record.time_horizon_hours,
            model_type=record.model_type,
            predicted_error_rate=record.predicted_error_rate,
            actual_outcome=record.actual_outcome,
            is_correct=record.is_correct,
            actual_error_rate=record.actual_error_rate,
            outcome_timestamp=record.outcome_timestamp,
            evaluation_notes=record.evaluation_notes,
            evaluated=record.is_evaluated,
            merchant_id=record.merchant_id,
            reasoning=record.reasoning,
            prompt_version=record.prompt_version,
            response_time_ms=record.response_time_ms,
            is_error=record.is_error,
            error_message=record.error_message,
            is_ab_test=record.is_ab_test,
            ab_test_group=record.ab_test_group,
            created_at=record.created_at,
        )


class OutcomeRecordDTO(BaseModel):
    """DTO for manually attaching the actual outcome to a prediction."""

    actual_outcome: str = Field(..., description="HEALTHY, WARNING, CRITICAL or UNKNOWN")
    notes: Optional[str] = Field(None, description="Free-text evaluation notes")

    model_config = {
        "json_schema_extra": {
            "example": {"actual_outcome": "CRITICAL", "notes": "Confirmed by on-call"}
        }
    }


class EvaluationSummaryDTO(BaseModel):
    """Result of one reconciliation run over pending predictions."""

    cutoff: datetime
    pending_found: int = 0
    evaluated: int = 0
    skipped: int = 0
    failed: int = 0
    started_at: datetime
    finished_at: datetime
