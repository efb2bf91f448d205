from __future__ import annotations

from datetime import timedelta

import pytest
from prometheus_client import REGISTRY

from prediction_accuracy.application.dtos.prediction_dto import OutcomeRecordDTO
from prediction_accuracy.application.models import EvaluationPolicy
from prediction_accuracy.application.use_cases.accuracy_use_cases import (
    GetAccuracyMetricsUseCase,
)
from prediction_accuracy.application.use_cases.outcome_use_cases import (
    RecordOutcomeUseCase,
    ResolveOutcomeUseCase,
)
from prediction_accuracy.domain.entities.health_status import HealthStatus
from prediction_accuracy.domain.entities.metrics_sample import RawMetricSample
from tests.conftest import InMemoryPredictionAuditRepository, make_record

H, W, C = HealthStatus.HEALTHY, HealthStatus.WARNING, HealthStatus.CRITICAL


def _recorded(predicted: str, actual: str, correct: str) -> float:
    value = REGISTRY.get_sample_value(
        "ai_prediction_outcome_recorded_total",
        {"predicted": predicted, "actual": actual, "correct": correct},
    )
    return value or 0.0


def _gauge(name: str) -> float:
    return REGISTRY.get_sample_value(name)


@pytest.mark.asyncio
async def test_manual_outcome_increments_counter(audit_repository) -> None:
    record = make_record(W)
    audit_repository._store(record)
    before = _recorded("WARNING", "HEALTHY", "false")

    await RecordOutcomeUseCase(audit_repository).execute(
        record.id, OutcomeRecordDTO(actual_outcome="HEALTHY")
    )

    assert _recorded("WARNING", "HEALTHY", "false") == before + 1


@pytest.mark.asyncio
async def test_resolved_outcome_increments_counter(
    audit_repository, metrics_repository
) -> None:
    record = make_record(H, hours_ago=8)
    audit_repository._store(record)
    metrics_repository.samples = [
        RawMetricSample(
            timestamp=record.prediction_time + timedelta(hours=1),
            merchant_id="M-1",
            processed_count=100,
            error_count=50,
        )
    ]
    resolver = ResolveOutcomeUseCase(
        audit_repository, metrics_repository, EvaluationPolicy()
    )
    before = _recorded("HEALTHY", "CRITICAL", "false")

    await resolver.execute(record)
    # a second pass finds the record already evaluated
    await resolver.execute(record)

    assert _recorded("HEALTHY", "CRITICAL", "false") == before + 1


@pytest.mark.asyncio
async def test_unresolved_outcome_leaves_counter(
    audit_repository, metrics_repository
) -> None:
    record = make_record(C, hours_ago=8)
    audit_repository._store(record)
    before = _recorded("CRITICAL", "CRITICAL", "true")

    resolved = await ResolveOutcomeUseCase(
        audit_repository, metrics_repository, EvaluationPolicy()
    ).execute(record)

    assert resolved is None
    assert _recorded("CRITICAL", "CRITICAL", "true") == before


@pytest.mark.asyncio
async def test_accuracy_metrics_publish_gauges(scenario_records) -> None:
    repository = InMemoryPredictionAuditRepository(scenario_records)

    snapshot = await GetAccuracyMetricsUseCase(repository).compute(30)

    assert _gauge("ai_prediction_accuracy_overall") == pytest.approx(0.8)
    assert _gauge("ai_prediction_f1_weighted") == pytest.approx(
        snapshot.weighted.f1_score
    )
    assert _gauge("ai_prediction_calibration_score") == pytest.approx(
        snapshot.calibration_score
    )


@pytest.mark.asyncio
async def test_empty_window_keeps_last_gauges(scenario_records, audit_repository) -> None:
    await GetAccuracyMetricsUseCase(
        InMemoryPredictionAuditRepository(scenario_records)
    ).compute(30)

    await GetAccuracyMetricsUseCase(audit_repository).compute(7)

    assert _gauge("ai_prediction_accuracy_overall") == pytest.approx(0.8)
