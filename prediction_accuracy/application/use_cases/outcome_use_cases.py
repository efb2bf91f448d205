"""
Outcome Use Cases - Application Layer

Reconciliation of predictions with what actually happened, either entered
manually or derived from raw batch metrics once the horizon has elapsed.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from prediction_accuracy.domain.entities.errors import PredictionNotFoundError
from prediction_accuracy.domain.entities.prediction import PredictionRecord
from prediction_accuracy.domain.repositories.prediction_audit_repository import (
    IPredictionAuditRepository,
)
from prediction_accuracy.domain.repositories.raw_metrics_repository import (
    IRawMetricsRepository,
)
from prediction_accuracy.domain.services import (
    aggregate_error_rate,
    classify_error_rate,
    parse_health_status,
)
from prediction_accuracy.shared import get_logger, record_outcome_metric

from ..dtos.prediction_dto import (
    EvaluationSummaryDTO,
    OutcomeRecordDTO,
    PredictionResponseDTO,
)
from ..models import EvaluationPolicy

logger = get_logger(__name__)

AUTO_EVALUATION_NOTE = "Auto-evaluated based on metrics"


class RecordOutcomeUseCase:
    """Manually attach the actual outcome to a prediction."""

    def __init__(self, audit_repository: IPredictionAuditRepository) -> None:
        self.audit_repository = audit_repository

    async def execute(
        self, prediction_id: int, payload: OutcomeRecordDTO
    ) -> PredictionResponseDTO:
        """
        Record the outcome, overwriting a previous one if present.

        Raises:
            PredictionNotFoundError: If no prediction has this id
            PredictionValidationError: If the outcome is not a known status
        """
        actual = parse_health_status(payload.actual_outcome)
        record = await self.audit_repository.find_by_id(prediction_id)
        if record is None:
            raise PredictionNotFoundError(prediction_id)

        if record.is_evaluated:
            logger.warning(
                "outcome.overwrite",
                prediction_id=prediction_id,
                previous_outcome=record.actual_outcome.value,
                new_outcome=actual.value,
            )

        record.record_outcome(actual, notes=payload.notes)
        saved = await self.audit_repository.save(record)
        logger.info(
            "outcome.recorded",
            prediction_id=prediction_id,
            predicted=saved.predicted_status.value,
            actual=actual.value,
            correct=saved.is_correct,
        )
        record_outcome_metric(
            saved.predicted_status.value, actual.value, bool(saved.is_correct)
        )
        return PredictionResponseDTO.from_domain(saved)


class ResolveOutcomeUseCase:
    """Derive the ground truth of one prediction window from raw metrics."""

    def __init__(
        self,
        audit_repository: IPredictionAuditRepository,
        metrics_repository: IRawMetricsRepository,
        policy: EvaluationPolicy,
    ) -> None:
        self.audit_repository = audit_repository
        self.metrics_repository = metrics_repository
        self.policy = policy

    async def execute(self, record: PredictionRecord) -> Optional[PredictionRecord]:
        """
        Classify ``[prediction_time, prediction_time + horizon)`` and persist it.

        Returns:
            The evaluated record, or None when the window has no samples or
            another writer evaluated the record first. The record stays
            pending in the store in both cases.
        """
        horizon = record.time_horizon_hours or self.policy.default_horizon_hours
        start = record.prediction_time
        end = start + timedelta(hours=horizon)

        samples = await self.metrics_repository.find_samples_between(start, end)
        error_rate = aggregate_error_rate(samples)
        if error_rate is None:
            logger.debug(
                "outcome.no_samples",
                prediction_id=record.id,
                window_start=start.isoformat(),
                window_end=end.isoformat(),
            )
            return None

        actual = classify_error_rate(
            error_rate,
            warning_threshold=self.policy.warning_threshold,
            critical_threshold=self.policy.critical_threshold,
        )
        record.record_outcome(
            actual, notes=AUTO_EVALUATION_NOTE, actual_error_rate=error_rate
        )

        written = await self.audit_repository.save_outcome_if_pending(record)
        if not written:
            logger.info("outcome.already_evaluated", prediction_id=record.id)
            return None

        logger.info(
            "outcome.recorded",
            prediction_id=record.id,
            predicted=record.predicted_status.value,
            actual=actual.value,
            correct=record.is_correct,
            actual_error_rate=error_rate,
        )
        record_outcome_metric(
            record.predicted_status.value, actual.value, bool(record.is_correct)
        )
        return record


class EvaluatePendingPredictionsUseCase:
    """Reconcile every pending prediction whose horizon has elapsed."""

    def __init__(
        self,
        audit_repository: IPredictionAuditRepository,
        resolver: ResolveOutcomeUseCase,
        policy: EvaluationPolicy,
    ) -> None:
        self.audit_repository = audit_repository
        self.resolver = resolver
        self.policy = policy

    async def execute(self) -> EvaluationSummaryDTO:
        started_at = datetime.now(timezone.utc)
        cutoff = started_at - timedelta(hours=self.policy.default_horizon_hours)

        pending = await self.audit_repository.find_pending_before(cutoff)
        logger.info(
            "evaluation.started", cutoff=cutoff.isoformat(), pending_found=len(pending)
        )

        evaluated = skipped = failed = 0
        for record in pending:
            if record.horizon_end > started_at:
                skipped += 1
                continue
            try:
                result = await self.resolver.execute(record)
            except Exception as e:
                failed += 1
                logger.warning(
                    "evaluation.record_failed", prediction_id=record.id, error=str(e)
                )
                continue
            if result is None:
                skipped += 1
            else:
                evaluated += 1

        summary = EvaluationSummaryDTO(
            cutoff=cutoff,
            pending_found=len(pending),
            evaluated=evaluated,
            skipped=skipped,
            failed=failed,
            started_at=started_at,
            finished_at=datetime.now(timezone.utc),
        )
        logger.info(
            "evaluation.completed",
            pending_found=summary.pending_found,
            evaluated=evaluated,
            skipped=skipped,
            failed=failed,
        )
        return summary
