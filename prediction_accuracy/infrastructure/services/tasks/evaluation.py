"""Celery task that reconciles pending predictions with raw batch metrics."""

from __future__ import annotations

import asyncio
from typing import Any

from prediction_accuracy.application.models import EvaluationPolicy
from prediction_accuracy.application.use_cases.outcome_use_cases import (
    EvaluatePendingPredictionsUseCase,
    ResolveOutcomeUseCase,
)
from prediction_accuracy.infrastructure.database.mongo_database import MongoDatabase
from prediction_accuracy.infrastructure.repositories import (
    PredictionAuditRepository,
    RawMetricsRepository,
)
from prediction_accuracy.infrastructure.services.celery_config import (
    EVALUATE_PENDING_TASK,
    celery_app,
)
from prediction_accuracy.infrastructure.services.tasks.base import CallbackTask, logger
from prediction_accuracy.infrastructure.settings import InfrastructureSettings, get_settings


def build_evaluation_use_case(
    database: MongoDatabase, settings: InfrastructureSettings
) -> EvaluatePendingPredictionsUseCase:
    policy = EvaluationPolicy(
        default_horizon_hours=settings.evaluation.default_horizon_hours,
        warning_threshold=settings.evaluation.warning_threshold,
        critical_threshold=settings.evaluation.critical_threshold,
    )
    audit_repository = PredictionAuditRepository(database)
    resolver = ResolveOutcomeUseCase(
        audit_repository=audit_repository,
        metrics_repository=RawMetricsRepository(database),
        policy=policy,
    )
    return EvaluatePendingPredictionsUseCase(
        audit_repository=audit_repository, resolver=resolver, policy=policy
    )


@celery_app.task(bind=True, base=CallbackTask, name=EVALUATE_PENDING_TASK)
def evaluate_pending_predictions(self) -> dict[str, Any]:
    """Evaluate every pending prediction whose horizon has elapsed."""
    settings = get_settings()
    database = MongoDatabase(
        mongo_uri=settings.database.mongo_uri,
        db_name=settings.database.database_name,
    )
    try:
        use_case = build_evaluation_use_case(database, settings)
        summary = asyncio.run(use_case.execute())
    except Exception as exc:
        logger.error("evaluation.task_failed", error=str(exc), exc_info=exc)
        raise
    finally:
        database.close()

    return summary.model_dump(mode="json")
