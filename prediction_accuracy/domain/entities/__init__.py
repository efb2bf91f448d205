"""
Domain Entities Package

Prediction audit records, raw metric samples and the report value objects
computed from them.
"""

from .accuracy import (
    AccuracySnapshot,
    AggregateMetrics,
    ClassMetrics,
    ConfusionMatrix,
    DailyAccuracy,
    PredictionAccuracyReport,
    StatusAccuracy,
)
from .comparison import (
    TIE,
    ComparisonResult,
    ModelPerformance,
    SignificanceResult,
    StatusComparison,
)
from .errors import (
    DomainError,
    InvalidAnalysisWindowError,
    PredictionNotFoundError,
    PredictionValidationError,
)
from .feedback import (
    DriftAnalysis,
    DriftType,
    ErrorPattern,
    FeatureInsight,
    FeedbackReport,
    HighConfidenceError,
    ImprovementArea,
    ImprovementRecommendation,
    MisclassificationPattern,
    Priority,
)
from .health import ApplicationInfo, DependencyStatus, ServiceStatus, SystemHealth
from .health_status import HealthStatus
from .metrics_sample import RawMetricSample
from .prediction import DEFAULT_MODEL_TYPE, PredictionRecord

__all__ = [
    "HealthStatus",
    "PredictionRecord",
    "DEFAULT_MODEL_TYPE",
    "RawMetricSample",
    "AccuracySnapshot",
    "AggregateMetrics",
    "ClassMetrics",
    "ConfusionMatrix",
    "PredictionAccuracyReport",
    "StatusAccuracy",
    "DailyAccuracy",
    "ComparisonResult",
    "ModelPerformance",
    "SignificanceResult",
    "StatusComparison",
    "TIE",
    "FeedbackReport",
    "HighConfidenceError",
    "ErrorPattern",
    "MisclassificationPattern",
    "FeatureInsight",
    "ImprovementArea",
    "ImprovementRecommendation",
    "Priority",
    "DriftAnalysis",
    "DriftType",
    "ApplicationInfo",
    "DependencyStatus",
    "ServiceStatus",
    "SystemHealth",
    "DomainError",
    "PredictionNotFoundError",
    "PredictionValidationError",
    "InvalidAnalysisWindowError",
]
