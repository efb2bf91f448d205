"""
Accuracy Router - Presentation Layer

Outcome recording, on-demand reconciliation and the accuracy, prediction
report, A/B and feedback endpoints.
"""

from typing import List, Optional

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Query

from prediction_accuracy.application.dtos.accuracy_dto import (
    AccuracySnapshotDTO,
    AccuracySummaryDTO,
    PredictionAccuracyReportDTO,
)
from prediction_accuracy.application.dtos.comparison_dto import (
    ComparisonResultDTO,
    ComparisonSummaryDTO,
)
from prediction_accuracy.application.dtos.feedback_dto import (
    DriftAnalysisDTO,
    FeedbackReportDTO,
    HighConfidenceErrorDTO,
    ImprovementRecommendationDTO,
)
from prediction_accuracy.application.dtos.prediction_dto import (
    EvaluationSummaryDTO,
    OutcomeRecordDTO,
    PredictionResponseDTO,
)
from prediction_accuracy.application.use_cases.accuracy_use_cases import (
    GetAccuracyMetricsUseCase,
    GetAccuracySummaryUseCase,
    GetPredictionAccuracyReportUseCase,
)
from prediction_accuracy.application.use_cases.comparison_use_cases import (
    CompareModelsUseCase,
    GetComparisonSummaryUseCase,
)
from prediction_accuracy.application.use_cases.feedback_use_cases import (
    GenerateFeedbackUseCase,
    GetDriftAnalysisUseCase,
    GetHighConfidenceErrorsUseCase,
    GetImprovementRecommendationsUseCase,
)
from prediction_accuracy.application.use_cases.outcome_use_cases import (
    EvaluatePendingPredictionsUseCase,
    RecordOutcomeUseCase,
)

from .errors import to_http_error

MAX_WINDOW_DAYS = 365
MAX_SUMMARY_DAYS = 90

router = APIRouter(prefix="/accuracy", tags=["Accuracy"])


def _days(default: int, maximum: int = MAX_WINDOW_DAYS):
    return Query(default, ge=1, le=maximum, description="Lookback window in days")


def _model(role: str):
    return Query(None, min_length=1, description=f"Model type compared as {role}")


@router.post("/outcomes/{prediction_id}", response_model=PredictionResponseDTO)
@inject
async def record_outcome(
    prediction_id: int,
    payload: OutcomeRecordDTO,
    record_outcome_use_case: RecordOutcomeUseCase = Depends(
        Provide["record_outcome_use_case"]
    ),
) -> PredictionResponseDTO:
    """Manually record the actual outcome of a prediction."""
    try:
        return await record_outcome_use_case.execute(prediction_id, payload)
    except Exception as e:
        raise to_http_error(
            e, "accuracy.outcome_failed", prediction_id=prediction_id
        ) from e


@router.post("/evaluate", response_model=EvaluationSummaryDTO)
@inject
async def evaluate_pending(
    evaluate_pending_use_case: EvaluatePendingPredictionsUseCase = Depends(
        Provide["evaluate_pending_use_case"]
    ),
) -> EvaluationSummaryDTO:
    """Reconcile pending predictions now instead of waiting for the scheduler."""
    try:
        return await evaluate_pending_use_case.execute()
    except Exception as e:
        raise to_http_error(e, "accuracy.evaluate_failed") from e


@router.get("/metrics", response_model=AccuracySnapshotDTO)
@inject
async def get_accuracy_metrics(
    days: int = _days(30),
    use_case: GetAccuracyMetricsUseCase = Depends(
        Provide["get_accuracy_metrics_use_case"]
    ),
) -> AccuracySnapshotDTO:
    try:
        return await use_case.execute(days)
    except Exception as e:
        raise to_http_error(e, "accuracy.metrics_failed", days=days) from e


@router.get("/summary", response_model=AccuracySummaryDTO)
@inject
async def get_accuracy_summary(
    days: int = _days(7, MAX_SUMMARY_DAYS),
    use_case: GetAccuracySummaryUseCase = Depends(
        Provide["get_accuracy_summary_use_case"]
    ),
) -> AccuracySummaryDTO:
    try:
        return await use_case.execute(days)
    except Exception as e:
        raise to_http_error(e, "accuracy.summary_failed", days=days) from e


@router.get("/report", response_model=PredictionAccuracyReportDTO)
@inject
async def get_prediction_report(
    days: int = _days(30),
    use_case: GetPredictionAccuracyReportUseCase = Depends(
        Provide["get_prediction_accuracy_report_use_case"]
    ),
) -> PredictionAccuracyReportDTO:
    """Confidence split, per-status accuracy and daily trend, pending included."""
    try:
        return await use_case.execute(days)
    except Exception as e:
        raise to_http_error(e, "accuracy.report_failed", days=days) from e

@router.get("/ab-test", response_model=ComparisonResultDTO)
@inject
async def compare_models(
    days: int = _days(30),
    model_a: Optional[str] = _model("A"),
    model_b: Optional[str] = _model("B"),
    use_case: CompareModelsUseCase = Depends(Provide["compare_models_use_case"]),
) -> ComparisonResultDTO:
    """Compare two model types, the primary against the challenger by default."""
    try:
        return await use_case.execute(days, model_a=model_a, model_b=model_b)
    except Exception as e:
        raise to_http_error(e, "accuracy.ab_test_failed", days=days) from e


@router.get("/ab-test/summary", response_model=ComparisonSummaryDTO)
@inject
async def get_comparison_summary(
    days: int = _days(7, MAX_SUMMARY_DAYS),
    model_a: Optional[str] = _model("A"),
    model_b: Optional[str] = _model("B"),
    use_case: GetComparisonSummaryUseCase = Depends(
        Provide["get_comparison_summary_use_case"]
    ),
) -> ComparisonSummaryDTO:
    try:
        return await use_case.execute(days, model_a=model_a, model_b=model_b)
    except Exception as e:
        raise to_http_error(e, "accuracy.ab_test_summary_failed", days=days) from e


@router.get("/feedback", response_model=FeedbackReportDTO)
@inject
async def get_feedback(
    days: int = _days(30),
    use_case: GenerateFeedbackUseCase = Depends(Provide["generate_feedback_use_case"]),
) -> FeedbackReportDTO:
    try:
        return await use_case.execute(days)
    except Exception as e:
        raise to_http_error(e, "accuracy.feedback_failed", days=days) from e


@router.get("/feedback/errors", response_model=List[HighConfidenceErrorDTO])
@inject
async def get_high_confidence_errors(
    days: int = _days(7),
    use_case: GetHighConfidenceErrorsUseCase = Depends(
        Provide["get_high_confidence_errors_use_case"]
    ),
) -> List[HighConfidenceErrorDTO]:
    try:
        return await use_case.execute(days)
    except Exception as e:
        raise to_http_error(e, "accuracy.feedback_errors_failed", days=days) from e


@router.get("/feedback/drift", response_model=DriftAnalysisDTO)
@inject
async def get_drift_analysis(
    days: int = _days(30),
    use_case: GetDriftAnalysisUseCase = Depends(Provide["get_drift_analysis_use_case"]),
) -> DriftAnalysisDTO:
    try:
        return await use_case.execute(days)
    except Exception as e:
        raise to_http_error(e, "accuracy.drift_failed", days=days) from e


@router.get(
    "/feedback/recommendations", response_model=List[ImprovementRecommendationDTO]
)
@inject
async def get_improvement_recommendations(
    days: int = _days(30),
    use_case: GetImprovementRecommendationsUseCase = Depends(
        Provide["get_improvement_recommendations_use_case"]
    ),
) -> List[ImprovementRecommendationDTO]:
    try:
        return await use_case.execute(days)
    except Exception as e:
        raise to_http_error(e, "accuracy.recommendations_failed", days=days) from e
