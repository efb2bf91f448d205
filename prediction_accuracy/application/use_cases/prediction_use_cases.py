"""
Prediction Use Cases - Application Layer

Ingestion and lookup of prediction audit records.
"""

from datetime import datetime, timezone

from prediction_accuracy.domain.entities.errors import PredictionNotFoundError
from prediction_accuracy.domain.entities.prediction import PredictionRecord
from prediction_accuracy.domain.repositories.prediction_audit_repository import (
    IPredictionAuditRepository,
)
from prediction_accuracy.domain.services import (
    parse_health_status,
    validate_prediction_record,
)
from prediction_accuracy.shared import get_logger

from ..dtos.prediction_dto import PredictionCreateDTO, PredictionResponseDTO

logger = get_logger(__name__)


class RecordPredictionUseCase:
    """Append a new prediction to the audit store."""

    def __init__(self, audit_repository: IPredictionAuditRepository) -> None:
        self.audit_repository = audit_repository

    async def execute(self, payload: PredictionCreateDTO) -> PredictionResponseDTO:
        """
        Validate and store a prediction.

        Args:
            payload: Prediction data from the upstream prediction service

        Returns:
            The stored record with its assigned id

        Raises:
            PredictionValidationError: If status, confidence or horizon are invalid
        """
        now = datetime.now(timezone.utc)
        record = PredictionRecord(
            predicted_status=parse_health_status(payload.predicted_status),
            confidence=payload.confidence,
            prediction_time=payload.prediction_time or now,
            time_horizon_hours=payload.time_horizon_hours,
            model_type=payload.model_type,
            predicted_error_rate=payload.predicted_error_rate,
            merchant_id=payload.merchant_id,
            reasoning=payload.reasoning,
            prompt_version=payload.prompt_version,
            response_time_ms=payload.response_time_ms,
            is_error=payload.is_error,
            error_message=payload.error_message,
            is_ab_test=payload.is_ab_test,
            ab_test_group=payload.ab_test_group,
            created_at=now,
        )
        validate_prediction_record(record)

        stored = await self.audit_repository.create(record)
        logger.info(
            "prediction.recorded",
            prediction_id=stored.id,
            model_type=stored.model_type,
            predicted_status=stored.predicted_status.value,
            confidence=stored.confidence,
        )
        return PredictionResponseDTO.from_domain(stored)


class GetPredictionUseCase:
    def __init__(self, audit_repository: IPredictionAuditRepository) -> None:
        self.audit_repository = audit_repository

    async def execute(self, prediction_id: int) -> PredictionResponseDTO:
        record = await self.audit_repository.find_by_id(prediction_id)
        if record is None:
            raise PredictionNotFoundError(prediction_id)
        return PredictionResponseDTO.from_domain(record)
