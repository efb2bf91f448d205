"""
Use Cases Package - Application Layer

One class per operation; each exposes an ``execute()`` coroutine returning
DTOs. Report use cases also expose ``compute()`` returning the domain value
object so summaries can reuse them.
"""

from .accuracy_use_cases import (
    GetAccuracyMetricsUseCase,
    GetAccuracySummaryUseCase,
    GetPredictionAccuracyReportUseCase,
)
from .comparison_use_cases import CompareModelsUseCase, GetComparisonSummaryUseCase
from .feedback_use_cases import (
    GenerateFeedbackUseCase,
    GetDriftAnalysisUseCase,
    GetHighConfidenceErrorsUseCase,
    GetImprovementRecommendationsUseCase,
)
from .health_use_cases import GetApplicationInfoUseCase, GetHealthStatusUseCase
from .outcome_use_cases import (
    EvaluatePendingPredictionsUseCase,
    RecordOutcomeUseCase,
    ResolveOutcomeUseCase,
)
from .prediction_use_cases import GetPredictionUseCase, RecordPredictionUseCase

__all__ = [
    "RecordPredictionUseCase",
    "GetPredictionUseCase",
    "RecordOutcomeUseCase",
    "ResolveOutcomeUseCase",
    "EvaluatePendingPredictionsUseCase",
    "GetAccuracyMetricsUseCase",
    "GetAccuracySummaryUseCase",
    "GetPredictionAccuracyReportUseCase",
    "CompareModelsUseCase",
    "GetComparisonSummaryUseCase",
    "GenerateFeedbackUseCase",
    "GetHighConfidenceErrorsUseCase",
    "GetDriftAnalysisUseCase",
    "GetImprovementRecommendationsUseCase",
    "GetHealthStatusUseCase",
    "GetApplicationInfoUseCase",
]
