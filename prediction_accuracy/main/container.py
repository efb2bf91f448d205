"""
Dependency container injection module - Main Layer

Composition root: builds the Mongo adapters once per process and hands
fresh use cases to the controllers through ``Provide[...]`` markers.
"""

from contextlib import asynccontextmanager
from typing import Optional

from dependency_injector import containers, providers

from prediction_accuracy.application.models import EvaluationPolicy, SystemInfo
from prediction_accuracy.application.use_cases import (
    CompareModelsUseCase,
    EvaluatePendingPredictionsUseCase,
    GenerateFeedbackUseCase,
    GetAccuracyMetricsUseCase,
    GetAccuracySummaryUseCase,
    GetApplicationInfoUseCase,
    GetComparisonSummaryUseCase,
    GetDriftAnalysisUseCase,
    GetHealthStatusUseCase,
    GetHighConfidenceErrorsUseCase,
    GetImprovementRecommendationsUseCase,
    GetPredictionAccuracyReportUseCase,
    GetPredictionUseCase,
    RecordOutcomeUseCase,
    RecordPredictionUseCase,
    ResolveOutcomeUseCase,
)
from prediction_accuracy.infrastructure.database import MongoDatabase
from prediction_accuracy.infrastructure.repositories import (
    PredictionAuditRepository,
    RawMetricsRepository,
)
from prediction_accuracy.infrastructure.services.health_check_service import (
    HealthCheckService,
)
from prediction_accuracy.shared import get_logger

from .config import AppSettings

logger = get_logger(__name__)


def _enum_value(value):
    return value.value if hasattr(value, "value") else str(value)


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependency-injector."""

    wiring_config = containers.WiringConfiguration(
        packages=["..presentation", "..application"]
    )

    # Settings
    config = providers.Configuration()

    # Infrastructure
    mongo_database = providers.Singleton(
        MongoDatabase,
        mongo_uri=config.database.mongo_uri,
        db_name=config.database.database_name,
    )

    prediction_audit_repository = providers.Singleton(
        PredictionAuditRepository,
        database=mongo_database,
    )

    raw_metrics_repository = providers.Singleton(
        RawMetricsRepository,
        database=mongo_database,
    )

    health_check_service = providers.Singleton(
        HealthCheckService,
        mongo_database=mongo_database,
        broker_url=config.celery.broker_url,
        redis_url=config.celery.result_backend_url,
    )

    # Application models
    policy = providers.Singleton(
        EvaluationPolicy,
        default_horizon_hours=config.accuracy.default_horizon_hours,
        warning_threshold=config.accuracy.warning_threshold,
        critical_threshold=config.accuracy.critical_threshold,
        high_confidence_threshold=config.accuracy.high_confidence_threshold,
        primary_model=config.accuracy.primary_model,
        challenger_model=config.accuracy.challenger_model,
    )

    system_info = providers.Singleton(
        SystemInfo,
        title=config.service.title,
        description=config.service.description,
        version=config.service.version,
        environment=providers.Callable(_enum_value, config.environment),
        git_commit=config.service.git_commit,
        build_time=config.service.build_time,
        celery_broker_url=config.celery.broker_url,
        celery_result_backend_url=config.celery.result_backend_url,
    )

    # Application (use cases)
    record_prediction_use_case = providers.Factory(
        RecordPredictionUseCase,
        audit_repository=prediction_audit_repository,
    )

    get_prediction_use_case = providers.Factory(
        GetPredictionUseCase,
        audit_repository=prediction_audit_repository,
    )

    record_outcome_use_case = providers.Factory(
        RecordOutcomeUseCase,
        audit_repository=prediction_audit_repository,
    )

    resolve_outcome_use_case = providers.Factory(
        ResolveOutcomeUseCase,
        audit_repository=prediction_audit_repository,
        metrics_repository=raw_metrics_repository,
        policy=policy,
    )

    evaluate_pending_use_case = providers.Factory(
        EvaluatePendingPredictionsUseCase,
        audit_repository=prediction_audit_repository,
        resolver=resolve_outcome_use_case,
        policy=policy,
    )

    get_accuracy_metrics_use_case = providers.Factory(
        GetAccuracyMetricsUseCase,
        audit_repository=prediction_audit_repository,
    )

    get_accuracy_summary_use_case = providers.Factory(
        GetAccuracySummaryUseCase,
        metrics_use_case=get_accuracy_metrics_use_case,
    )

    get_prediction_accuracy_report_use_case = providers.Factory(
        GetPredictionAccuracyReportUseCase,
        audit_repository=prediction_audit_repository,
    )

    compare_models_use_case = providers.Factory(
        CompareModelsUseCase,
        audit_repository=prediction_audit_repository,
        policy=policy,
    )

    get_comparison_summary_use_case = providers.Factory(
        GetComparisonSummaryUseCase,
        compare_use_case=compare_models_use_case,
    )

    generate_feedback_use_case = providers.Factory(
        GenerateFeedbackUseCase,
        audit_repository=prediction_audit_repository,
        policy=policy,
    )

    get_high_confidence_errors_use_case = providers.Factory(
        GetHighConfidenceErrorsUseCase,
        feedback_use_case=generate_feedback_use_case,
    )

    get_drift_analysis_use_case = providers.Factory(
        GetDriftAnalysisUseCase,
        feedback_use_case=generate_feedback_use_case,
    )

    get_improvement_recommendations_use_case = providers.Factory(
        GetImprovementRecommendationsUseCase,
        feedback_use_case=generate_feedback_use_case,
    )

    get_health_status_use_case = providers.Factory(
        GetHealthStatusUseCase,
        health_check_service=health_check_service,
    )

    get_application_info_use_case = providers.Factory(
        GetApplicationInfoUseCase,
        health_check_service=health_check_service,
        system_info=system_info,
        policy=policy,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: Optional[AppContainer] = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@asynccontextmanager
async def app_lifespan():
    """
    Create the Mongo indexes on startup and close the client on shutdown.

    Used by the FastAPI lifespan; yields the global container.
    """
    container = get_container()
    mongo_database = container.mongo_database()

    try:
        logger.info("container.mongo.ensure_indexes")
        await mongo_database.create_indexes()
        logger.info("container.resources.initialized")
        yield container
    finally:
        logger.info("container.mongo.close")
        mongo_database.close()
        logger.info("container.resources.shutdown")
