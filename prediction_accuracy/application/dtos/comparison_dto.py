"""DTOs for A/B comparison responses."""

from datetime import datetime
from typing import Dict, List

from pydantic import BaseModel, Field

from prediction_accuracy.domain.entities.comparison import (
    ComparisonResult,
    ModelPerformance,
    SignificanceResult,
    StatusComparison,
)
from prediction_accuracy.domain.entities.health_status import HealthStatus


class ModelPerformanceDTO(BaseModel):
    model_type: str
    total_predictions: int
    evaluated_predictions: int
    correct_predictions: int
    accuracy: float
    precision: float
    recall: float
    f1_score: float
    average_confidence: float
    average_response_time_ms: float
    error_count: int
    accuracy_by_status: Dict[HealthStatus, float] = Field(default_factory=dict)

    model_config = {"protected_namespaces": ()}

    @classmethod
    def from_domain(cls, performance: ModelPerformance) -> "ModelPerformanceDTO":
        return cls(
            model_type=performance.model_type,
            total_predictions=performance.total_predictions,
            evaluated_predictions=performance.evaluated_predictions,
            correct_predictions=performance.correct_predictions,
            accuracy=performance.accuracy,
            precision=performance.precision,
            recall=performance.recall,
            f1_score=performance.f1_score,
            average_confidence=performance.average_confidence,
            average_response_time_ms=performance.average_response_time_ms,
            error_count=performance.error_count,
            accuracy_by_status=dict(performance.accuracy_by_status),
        )


class SignificanceDTO(BaseModel):
    p_value: float
    z_score: float
    is_significant: bool
    effect_size: float
    sufficient_data: bool

    @classmethod
    def from_domain(cls, result: SignificanceResult) -> "SignificanceDTO":
        return cls(
            p_value=result.p_value,
            z_score=result.z_score,
            is_significant=result.is_significant,
            effect_size=result.effect_size,
            sufficient_data=result.sufficient_data,
        )


class StatusComparisonDTO(BaseModel):
    status: HealthStatus
    accuracy_a: float
    accuracy_b: float
    count_a: int
    count_b: int
    better_model: str

    @classmethod
    def from_domain(cls, row: StatusComparison) -> "StatusComparisonDTO":
        return cls(
            status=row.status,
            accuracy_a=row.accuracy_a,
            accuracy_b=row.accuracy_b,
            count_a=row.count_a,
            count_b=row.count_b,
            better_model=row.better_model,
        )


class ComparisonResultDTO(BaseModel):
    """Full A/B comparison between the primary and challenger models."""

    window_days: int
    start_time: datetime
    end_time: datetime
    model_a: ModelPerformanceDTO
    model_b: ModelPerformanceDTO
    accuracy_difference: float
    f1_difference: float
    confidence_difference: float
    winner: str = Field(description="Winning model type or TIE")
    win_margin: float
    significance: SignificanceDTO
    comparison_by_status: List[StatusComparisonDTO] = Field(default_factory=list)
    insights: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)

    model_config = {"protected_namespaces": ()}

    @classmethod
    def from_domain(cls, result: ComparisonResult) -> "ComparisonResultDTO":
        return cls(
            window_days=result.window_days,
            start_time=result.start_time,
            end_time=result.end_time,
            model_a=ModelPerformanceDTO.from_domain(result.model_a),
            model_b=ModelPerformanceDTO.from_domain(result.model_b),
            accuracy_difference=result.accuracy_difference,
            f1_difference=result.f1_difference,
            confidence_difference=result.confidence_difference,
            winner=result.winner,
            win_margin=result.win_margin,
            significance=SignificanceDTO.from_domain(result.significance),
            comparison_by_status=[
                StatusComparisonDTO.from_domain(row) for row in result.status_comparisons
            ],
            insights=list(result.insights),
            recommendations=list(result.recommendations),
        )


class ComparisonSummaryDTO(BaseModel):
    """Condensed A/B view."""

    window_days: int
    winner: str
    win_margin: float
    p_value: float
    is_significant: bool
    accuracy: Dict[str, float]
    evaluated_predictions: Dict[str, int]
    insights: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, result: ComparisonResult) -> "ComparisonSummaryDTO":
        a, b = result.model_a, result.model_b
        return cls(
            window_days=result.window_days,
            winner=result.winner,
            win_margin=result.win_margin,
            p_value=result.significance.p_value,
            is_significant=result.significance.is_significant,
            accuracy={a.model_type: a.accuracy, b.model_type: b.accuracy},
            evaluated_predictions={
                a.model_type: a.evaluated_predictions,
                b.model_type: b.evaluated_predictions,
            },
            insights=list(result.insights),
            recommendations=list(result.recommendations),
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "window_days": 7,
                "winner": "AI",
                "win_margin": 0.08,
                "p_value": 0.012,
                "is_significant": True,
                "accuracy": {"AI": 0.88, "RULE_BASED": 0.8},
                "evaluated_predictions": {"AI": 120, "RULE_BASED": 118},
                "insights": ["AI model outperforms RULE_BASED by 8.0%"],
                "recommendations": ["Continue using AI model as primary"],
            }
        }
    }
