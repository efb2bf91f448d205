"""Domain service helpers for validating audit records before they are stored."""

from typing import List

from prediction_accuracy.domain.entities.errors import PredictionValidationError
from prediction_accuracy.domain.entities.health_status import HealthStatus
from prediction_accuracy.domain.entities.prediction import PredictionRecord


def _validate_rate(name: str, value, errors: List[str]) -> None:
    if value is not None and not 0.0 <= value <= 1.0:
        errors.append(f"{name} must be between 0 and 1 (inclusive).")


def validate_prediction_record(record: PredictionRecord) -> None:
    """Validate a prediction before it is appended to the audit store.

    Raises:
        PredictionValidationError: If one or more validation rules fail.
    """

    errors: List[str] = []

    if not isinstance(record.predicted_status, HealthStatus):
        errors.append("Predicted status must be one of HEALTHY, WARNING, CRITICAL, UNKNOWN.")
    if not 0.0 <= record.confidence <= 1.0:
        errors.append("Confidence must be between 0 and 1 (inclusive).")
    if record.time_horizon_hours < 1:
        errors.append("Time horizon must be at least 1 hour.")
    if not record.model_type or not record.model_type.strip():
        errors.append("Model type must be a non-empty string.")
    _validate_rate("Predicted error rate", record.predicted_error_rate, errors)
    if record.response_time_ms is not None and record.response_time_ms < 0:
        errors.append("Response time must not be negative.")
    if record.is_evaluated:
        errors.append("New predictions must not carry an actual outcome.")

    if errors:
        raise PredictionValidationError(
            "Prediction validation failed.", details={"errors": errors}
        )


def parse_health_status(value: str) -> HealthStatus:
    """Parse a status name case-insensitively.

    Raises:
        PredictionValidationError: If the value is not a known status.
    """
    try:
        return HealthStatus(str(value).strip().upper())
    except ValueError as e:
        raise PredictionValidationError(
            f"Unknown health status: {value}",
            details={"allowed": [s.value for s in HealthStatus]},
        ) from e
