"""DTOs for the feedback loop report and its focused projections."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from prediction_accuracy.domain.entities.feedback import (
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
from prediction_accuracy.domain.entities.health_status import HealthStatus


class HighConfidenceErrorDTO(BaseModel):
    prediction_id: Optional[int] = None
    prediction_time: datetime
    predicted: HealthStatus
    actual: HealthStatus
    confidence: float
    model_type: str
    reasoning: Optional[str] = None
    possible_causes: List[str] = Field(default_factory=list)

    model_config = {"protected_namespaces": ()}

    @classmethod
    def from_domain(cls, error: HighConfidenceError) -> "HighConfidenceErrorDTO":
        return cls(
            prediction_id=error.prediction_id,
            prediction_time=error.prediction_time,
            predicted=error.predicted,
            actual=error.actual,
            confidence=error.confidence,
            model_type=error.model_type,
            reasoning=error.reasoning,
            possible_causes=list(error.possible_causes),
        )


class ErrorPatternDTO(BaseModel):
    predicted: HealthStatus
    actual: HealthStatus
    occurrence_count: int
    average_confidence: float
    likely_cause: str

    @classmethod
    def from_domain(cls, pattern: ErrorPattern) -> "ErrorPatternDTO":
        return cls(
            predicted=pattern.predicted,
            actual=pattern.actual,
            occurrence_count=pattern.occurrence_count,
            average_confidence=pattern.average_confidence,
            likely_cause=pattern.likely_cause,
        )


class MisclassificationPatternDTO(BaseModel):
    predicted: HealthStatus
    actual: HealthStatus
    count: int
    percentage_of_errors: float
    description: str

    @classmethod
    def from_domain(
        cls, pattern: MisclassificationPattern
    ) -> "MisclassificationPatternDTO":
        return cls(
            predicted=pattern.predicted,
            actual=pattern.actual,
            count=pattern.count,
            percentage_of_errors=pattern.percentage_of_errors,
            description=pattern.description,
        )


class FeatureInsightDTO(BaseModel):
    feature_name: str
    correlation_with_error: float
    insight: str
    recommendation: str

    @classmethod
    def from_domain(cls, insight: FeatureInsight) -> "FeatureInsightDTO":
        return cls(
            feature_name=insight.feature_name,
            correlation_with_error=insight.correlation_with_error,
            insight=insight.insight,
            recommendation=insight.recommendation,
        )


class ImprovementRecommendationDTO(BaseModel):
    area: ImprovementArea
    priority: Priority
    recommendation: str
    expected_improvement_percent: float
    rationale: str

    @classmethod
    def from_domain(
        cls, recommendation: ImprovementRecommendation
    ) -> "ImprovementRecommendationDTO":
        return cls(
            area=recommendation.area,
            priority=recommendation.priority,
            recommendation=recommendation.recommendation,
            expected_improvement_percent=recommendation.expected_improvement_percent,
            rationale=recommendation.rationale,
        )


class DriftAnalysisDTO(BaseModel):
    drift_detected: bool
    drift_score: float
    drift_type: DriftType
    baseline_accuracy: Optional[float] = None
    recent_accuracy: Optional[float] = None
    drift_start_date: Optional[datetime] = None
    insufficient_data: bool = False
    description: str
    recommendations: List[str] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, drift: DriftAnalysis) -> "DriftAnalysisDTO":
        return cls(
            drift_detected=drift.drift_detected,
            drift_score=drift.drift_score,
            drift_type=drift.drift_type,
            baseline_accuracy=drift.baseline_accuracy,
            recent_accuracy=drift.recent_accuracy,
            drift_start_date=drift.drift_start_date,
            insufficient_data=drift.insufficient_data,
            description=drift.description,
            recommendations=list(drift.recommendations),
        )


class FeedbackReportDTO(BaseModel):
    """Complete feedback loop report."""

    window_days: int
    generated_at: datetime
    total_evaluated: int
    total_errors: int
    high_confidence_errors: List[HighConfidenceErrorDTO] = Field(default_factory=list)
    error_patterns: List[ErrorPatternDTO] = Field(default_factory=list)
    misclassification_patterns: List[MisclassificationPatternDTO] = Field(
        default_factory=list
    )
    feature_insights: List[FeatureInsightDTO] = Field(default_factory=list)
    improvement_recommendations: List[ImprovementRecommendationDTO] = Field(
        default_factory=list
    )
    drift_analysis: DriftAnalysisDTO

    @classmethod
    def from_domain(cls, report: FeedbackReport) -> "FeedbackReportDTO":
        return cls(
            window_days=report.window_days,
            generated_at=report.generated_at,
            total_evaluated=report.total_evaluated,
            total_errors=report.total_errors,
            high_confidence_errors=[
                HighConfidenceErrorDTO.from_domain(e)
                for e in report.high_confidence_errors
            ],
            error_patterns=[ErrorPatternDTO.from_domain(p) for p in report.error_patterns],
            misclassification_patterns=[
                MisclassificationPatternDTO.from_domain(p)
                for p in report.misclassification_patterns
            ],
            feature_insights=[
                FeatureInsightDTO.from_domain(i) for i in report.feature_insights
            ],
            improvement_recommendations=[
                ImprovementRecommendationDTO.from_domain(r)
                for r in report.recommendations
            ],
            drift_analysis=DriftAnalysisDTO.from_domain(report.drift),
        )
