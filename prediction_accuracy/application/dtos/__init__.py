"""
DTOs Package - Application Layer

Pydantic models exchanged between the use cases and the HTTP routers.
"""

from .accuracy_dto import (
    AccuracySnapshotDTO,
    AccuracySummaryDTO,
    AggregateMetricsDTO,
    ClassMetricsDTO,
    ConfusionMatrixDTO,
    DailyAccuracyDTO,
    PredictionAccuracyReportDTO,
    StatusAccuracyDTO,
)
from .comparison_dto import (
    ComparisonResultDTO,
    ComparisonSummaryDTO,
    ModelPerformanceDTO,
    SignificanceDTO,
    StatusComparisonDTO,
)
from .feedback_dto import (
    DriftAnalysisDTO,
    ErrorPatternDTO,
    FeatureInsightDTO,
    FeedbackReportDTO,
    HighConfidenceErrorDTO,
    ImprovementRecommendationDTO,
    MisclassificationPatternDTO,
)
from .health_dto import ApplicationInfoDTO, DependencyStatusDTO, SystemHealthDTO
from .prediction_dto import (
    EvaluationSummaryDTO,
    OutcomeRecordDTO,
    PredictionCreateDTO,
    PredictionResponseDTO,
)

__all__ = [
    "PredictionCreateDTO",
    "PredictionResponseDTO",
    "OutcomeRecordDTO",
    "EvaluationSummaryDTO",
    "AccuracySnapshotDTO",
    "AccuracySummaryDTO",
    "AggregateMetricsDTO",
    "ClassMetricsDTO",
    "ConfusionMatrixDTO",
    "PredictionAccuracyReportDTO",
    "StatusAccuracyDTO",
    "DailyAccuracyDTO",
    "ComparisonResultDTO",
    "ComparisonSummaryDTO",
    "ModelPerformanceDTO",
    "SignificanceDTO",
    "StatusComparisonDTO",
    "FeedbackReportDTO",
    "HighConfidenceErrorDTO",
    "ErrorPatternDTO",
    "MisclassificationPatternDTO",
    "FeatureInsightDTO",
    "ImprovementRecommendationDTO",
    "DriftAnalysisDTO",
    "SystemHealthDTO",
    "DependencyStatusDTO",
    "ApplicationInfoDTO",
]
