"""DTOs for accuracy snapshot responses."""

from datetime import date, datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from prediction_accuracy.domain.entities.accuracy import (
    AccuracySnapshot,
    AggregateMetrics,
    ClassMetrics,
    ConfusionMatrix,
    DailyAccuracy,
    PredictionAccuracyReport,
    StatusAccuracy,
)
from prediction_accuracy.domain.entities.health_status import HealthStatus


class ClassMetricsDTO(BaseModel):
    status: HealthStatus
    true_positives: int
    false_positives: int
    false_negatives: int
    true_negatives: int
    support: int
    precision: float
    recall: float
    f1_score: float
    specificity: float
    accuracy: float

    @classmethod
    def from_domain(cls, metrics: ClassMetrics) -> "ClassMetricsDTO":
        return cls(
            status=metrics.status,
            true_positives=metrics.true_positives,
            false_positives=metrics.false_positives,
            false_negatives=metrics.false_negatives,
            true_negatives=metrics.true_negatives,
            support=metrics.support,
            precision=metrics.precision,
            recall=metrics.recall,
            f1_score=metrics.f1_score,
            specificity=metrics.specificity,
            accuracy=metrics.accuracy,
        )


class AggregateMetricsDTO(BaseModel):
    precision: float
    recall: float
    f1_score: float

    @classmethod
    def from_domain(cls, metrics: AggregateMetrics) -> "AggregateMetricsDTO":
        return cls(
            precision=metrics.precision,
            recall=metrics.recall,
            f1_score=metrics.f1_score,
        )


class ConfusionMatrixDTO(BaseModel):
    """Rows are predicted statuses, columns are actual outcomes."""

    labels: List[HealthStatus]
    matrix: List[List[int]]

    @classmethod
    def from_domain(cls, matrix: ConfusionMatrix) -> "ConfusionMatrixDTO":
        return cls(labels=list(matrix.labels), matrix=[list(row) for row in matrix.matrix])


class AccuracySnapshotDTO(BaseModel):
    """Full accuracy report for a lookback window."""

    window_days: int
    start_time: datetime
    end_time: datetime
    no_data: bool = Field(description="True when no evaluated predictions exist")
    total_predictions: int
    evaluated_predictions: int
    correct_predictions: int
    overall_accuracy: float
    average_confidence: float
    metrics_by_status: Dict[HealthStatus, ClassMetricsDTO]
    weighted: AggregateMetricsDTO
    macro: AggregateMetricsDTO
    confusion_matrix: ConfusionMatrixDTO
    calibration_score: float = Field(description="1 - expected calibration error")
    accuracy_trend: float = Field(description="Recent half minus older half accuracy")
    insights: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, snapshot: AccuracySnapshot) -> "AccuracySnapshotDTO":
        return cls(
            window_days=snapshot.window_days,
            start_time=snapshot.start_time,
            end_time=snapshot.end_time,
            no_data=snapshot.no_data,
            total_predictions=snapshot.total_predictions,
            evaluated_predictions=snapshot.evaluated_predictions,
            correct_predictions=snapshot.correct_predictions,
            overall_accuracy=snapshot.overall_accuracy,
            average_confidence=snapshot.average_confidence,
            metrics_by_status={
                status: ClassMetricsDTO.from_domain(metrics)
                for status, metrics in snapshot.class_metrics.items()
            },
            weighted=AggregateMetricsDTO.from_domain(snapshot.weighted),
            macro=AggregateMetricsDTO.from_domain(snapshot.macro),
            confusion_matrix=ConfusionMatrixDTO.from_domain(snapshot.confusion_matrix),
            calibration_score=snapshot.calibration_score,
            accuracy_trend=snapshot.accuracy_trend,
            insights=list(snapshot.insights),
            recommendations=list(snapshot.recommendations),
        )


class AccuracySummaryDTO(BaseModel):
    """Condensed accuracy view for dashboards."""

    window_days: int
    no_data: bool
    total_predictions: int
    evaluated_predictions: int
    correct_predictions: int
    overall_accuracy: float
    weighted_f1_score: float
    calibration_score: float
    accuracy_trend: float
    insights: List[str] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, snapshot: AccuracySnapshot) -> "AccuracySummaryDTO":
        return cls(
            window_days=snapshot.window_days,
            no_data=snapshot.no_data,
            total_predictions=snapshot.total_predictions,
            evaluated_predictions=snapshot.evaluated_predictions,
            correct_predictions=snapshot.correct_predictions,
            overall_accuracy=snapshot.overall_accuracy,
            weighted_f1_score=snapshot.weighted.f1_score,
            calibration_score=snapshot.calibration_score,
            accuracy_trend=snapshot.accuracy_trend,
            insights=list(snapshot.insights),
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "window_days": 7,
                "no_data": False,
                "total_predictions": 168,
                "evaluated_predictions": 140,
                "correct_predictions": 119,
                "overall_accuracy": 0.85,
                "weighted_f1_score": 0.84,
                "calibration_score": 0.91,
                "accuracy_trend": 0.03,
                "insights": [
                    "Good accuracy at 85.0%",
                    "Confidence scores are well-calibrated",
                ],
            }
        }
    }


class StatusAccuracyDTO(BaseModel):
    status: HealthStatus
    total_predictions: int
    correct_predictions: int
    accuracy: float
    average_confidence: float

    @classmethod
    def from_domain(cls, row: StatusAccuracy) -> "StatusAccuracyDTO":
        return cls(
            status=row.status,
            total_predictions=row.total_predictions,
            correct_predictions=row.correct_predictions,
            accuracy=row.accuracy,
            average_confidence=row.average_confidence,
        )


class DailyAccuracyDTO(BaseModel):
    day: date = Field(description="UTC calendar day of prediction_time")
    total_predictions: int
    correct_predictions: int
    accuracy: Optional[float] = Field(
        default=None, description="None while every prediction of the day is pending"
    )
    average_confidence: float

    @classmethod
    def from_domain(cls, row: DailyAccuracy) -> "DailyAccuracyDTO":
        return cls(
            day=row.day,
            total_predictions=row.total_predictions,
            correct_predictions=row.correct_predictions,
            accuracy=row.accuracy,
            average_confidence=row.average_confidence,
        )


class PredictionAccuracyReportDTO(BaseModel):
    """Prediction accuracy report including predictions awaiting evaluation."""

    window_days: int
    period_start: date
    period_end: date
    generated_at: datetime
    total_predictions: int
    evaluated_predictions: int
    correct_predictions: int
    incorrect_predictions: int
    pending_evaluation: int
    overall_accuracy: Optional[float] = Field(
        default=None, description="None when nothing has been evaluated"
    )
    average_confidence: float
    average_confidence_correct: float
    average_confidence_incorrect: float
    accuracy_by_predicted_status: Dict[HealthStatus, StatusAccuracyDTO]
    daily_accuracy: List[DailyAccuracyDTO]
    insights: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)

    @classmethod
    def from_domain(
        cls, report: PredictionAccuracyReport
    ) -> "PredictionAccuracyReportDTO":
        return cls(
            window_days=report.window_days,
            period_start=report.period_start,
            period_end=report.period_end,
            generated_at=report.generated_at,
            total_predictions=report.total_predictions,
            evaluated_predictions=report.evaluated_predictions,
            correct_predictions=report.correct_predictions,
            incorrect_predictions=report.incorrect_predictions,
            pending_evaluation=report.pending_evaluation,
            overall_accuracy=report.overall_accuracy,
            average_confidence=report.average_confidence,
            average_confidence_correct=report.average_confidence_correct,
            average_confidence_incorrect=report.average_confidence_incorrect,
            accuracy_by_predicted_status={
                status: StatusAccuracyDTO.from_domain(row)
                for status, row in report.accuracy_by_predicted_status.items()
            },
            daily_accuracy=[DailyAccuracyDTO.from_domain(d) for d in report.daily_accuracy],
            insights=list(report.insights),
            recommendations=list(report.recommendations),
        )
