"""
Heuristics that turn reconciled prediction errors into feedback.

Everything here is pure; the feedback use case fetches records and feeds
them in.
"""

from collections import Counter
from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from prediction_accuracy.domain.entities.feedback import (
    DriftAnalysis,
    DriftType,
    ErrorPattern,
    FeatureInsight,
    HighConfidenceError,
    ImprovementArea,
    ImprovementRecommendation,
    MisclassificationPattern,
    Priority,
)
from prediction_accuracy.domain.entities.health_status import HealthStatus
from prediction_accuracy.domain.entities.prediction import PredictionRecord
from prediction_accuracy.domain.services.classification import accuracy_of

HIGH_CONFIDENCE_THRESHOLD = 0.8
HIGH_CONFIDENCE_RELIABILITY = 0.85
HIGH_CONFIDENCE_ERROR_LIMIT = 10
TOP_ERROR_PATTERNS = 5
FALSE_ALARM_LIMIT = 5
DRIFT_THRESHOLD = 0.10

_LIKELY_CAUSES = {
    (HealthStatus.HEALTHY, HealthStatus.WARNING): (
        "Model too optimistic - increase sensitivity to warning signs"
    ),
    (HealthStatus.HEALTHY, HealthStatus.CRITICAL): (
        "Critical miss - model failed to detect serious issues"
    ),
    (HealthStatus.CRITICAL, HealthStatus.HEALTHY): "False alarm - model too pessimistic",
    (HealthStatus.WARNING, HealthStatus.CRITICAL): "Underestimated severity",
}


def likely_cause(predicted: HealthStatus, actual: HealthStatus) -> str:
    return _LIKELY_CAUSES.get((predicted, actual), "Threshold calibration needed")


def severity_direction(predicted: HealthStatus, actual: HealthStatus) -> Optional[str]:
    """Under- or over-estimate of ``actual``; None for matches and UNKNOWN."""
    if HealthStatus.UNKNOWN in (predicted, actual) or predicted == actual:
        return None
    if actual.severity > predicted.severity:
        return "Underestimated severity"
    return "Overestimated severity"


def to_high_confidence_error(record: PredictionRecord) -> HighConfidenceError:
    causes: List[str] = []
    if record.actual_error_rate is not None and record.predicted_error_rate is not None:
        if record.actual_error_rate > record.predicted_error_rate:
            causes.append("Underestimated error rate")
        else:
            causes.append("Overestimated error rate")
    elif record.actual_outcome is not None:
        direction = severity_direction(record.predicted_status, record.actual_outcome)
        if direction:
            causes.append(direction)
    causes.append("Review input metrics quality")

    return HighConfidenceError(
        prediction_id=record.id,
        prediction_time=record.prediction_time,
        predicted=record.predicted_status,
        actual=record.actual_outcome,
        confidence=record.confidence,
        model_type=record.model_type,
        reasoning=record.reasoning,
        possible_causes=causes,
    )


def error_pattern(
    predicted: HealthStatus,
    actual: HealthStatus,
    count: int,
    examples: Sequence[PredictionRecord],
) -> ErrorPattern:
    avg_conf = sum(r.confidence for r in examples) / len(examples) if examples else 0.0
    return ErrorPattern(
        predicted=predicted,
        actual=actual,
        occurrence_count=count,
        average_confidence=avg_conf,
        likely_cause=likely_cause(predicted, actual),
    )


def rank_error_patterns(
    patterns: Iterable[ErrorPattern], limit: int = TOP_ERROR_PATTERNS
) -> List[ErrorPattern]:
    ranked = sorted(patterns, key=lambda p: p.occurrence_count, reverse=True)
    return ranked[:limit]


def misclassification_patterns(
    records: Sequence[PredictionRecord],
) -> List[MisclassificationPattern]:
    """Group incorrect records by predicted/actual pair as a share of all errors."""
    errors = [r for r in records if r.is_correct is False]
    if not errors:
        return []

    counts = Counter((r.predicted_status, r.actual_outcome) for r in errors)
    total = len(errors)
    patterns = [
        MisclassificationPattern(
            predicted=predicted,
            actual=actual,
            count=count,
            percentage_of_errors=count / total * 100,
            description=f"{predicted.value} misclassified as {actual.value}",
        )
        for (predicted, actual), count in counts.items()
    ]
    patterns.sort(key=lambda p: p.count, reverse=True)
    return patterns


def feature_insights(
    records: Sequence[PredictionRecord],
    high_confidence: float = HIGH_CONFIDENCE_THRESHOLD,
) -> List[FeatureInsight]:
    confident = [r for r in records if r.confidence >= high_confidence]
    ratio = accuracy_of(confident)
    if ratio is None or ratio >= HIGH_CONFIDENCE_RELIABILITY:
        return []
    return [
        FeatureInsight(
            feature_name="Confidence Score",
            correlation_with_error=1.0 - ratio,
            insight="High confidence predictions are not reliable enough",
            recommendation="Recalibrate confidence scoring",
        )
    ]


def improvement_recommendations(
    patterns: Sequence[ErrorPattern], high_confidence_errors: int
) -> List[ImprovementRecommendation]:
    """Prioritized recommendations; never empty.

    ``patterns`` must be the full, unranked set of error patterns so that a
    rare critical miss is not hidden by more frequent pairs.
    """
    recommendations: List[ImprovementRecommendation] = []

    if any(
        p.predicted == HealthStatus.HEALTHY and p.actual == HealthStatus.CRITICAL
        for p in patterns
    ):
        recommendations.append(
            ImprovementRecommendation(
                area=ImprovementArea.THRESHOLDS,
                priority=Priority.HIGH,
                recommendation="Lower the threshold for CRITICAL detection to reduce misses",
                expected_improvement_percent=10.0,
                rationale="Critical issues were predicted as HEALTHY",
            )
        )

    false_alarms = sum(
        p.occurrence_count
        for p in patterns
        if p.predicted == HealthStatus.CRITICAL and p.actual == HealthStatus.HEALTHY
    )
    if false_alarms > FALSE_ALARM_LIMIT:
        recommendations.append(
            ImprovementRecommendation(
                area=ImprovementArea.MODEL,
                priority=Priority.MEDIUM,
                recommendation="Reduce false CRITICAL predictions",
                expected_improvement_percent=5.0,
                rationale=f"{false_alarms} false CRITICAL alarms detected",
            )
        )

    if high_confidence_errors > 0:
        recommendations.append(
            ImprovementRecommendation(
                area=ImprovementArea.PROMPT,
                priority=Priority.HIGH,
                recommendation="Review and improve prompts for edge cases",
                expected_improvement_percent=8.0,
                rationale=f"{high_confidence_errors} high-confidence errors detected",
            )
        )

    if not recommendations:
        recommendations.append(
            ImprovementRecommendation(
                area=ImprovementArea.MODEL,
                priority=Priority.LOW,
                recommendation="Continue monitoring - no significant issues detected",
                expected_improvement_percent=0.0,
                rationale="Model performing within acceptable parameters",
            )
        )

    recommendations.sort(key=lambda r: r.priority.rank)
    return recommendations


def analyze_drift(
    older: Sequence[PredictionRecord],
    recent: Sequence[PredictionRecord],
    midpoint: Optional[datetime] = None,
) -> DriftAnalysis:
    baseline_acc = accuracy_of(older)
    recent_acc = accuracy_of(recent)
    if baseline_acc is None or recent_acc is None:
        return DriftAnalysis(
            insufficient_data=True,
            baseline_accuracy=baseline_acc,
            recent_accuracy=recent_acc,
            description="Insufficient data for drift detection",
            recommendations=["Collect more data"],
        )

    drift = baseline_acc - recent_acc
    detected = abs(drift) > DRIFT_THRESHOLD
    if not detected:
        return DriftAnalysis(
            drift_score=abs(drift),
            baseline_accuracy=baseline_acc,
            recent_accuracy=recent_acc,
            description="No significant drift detected",
            recommendations=["Continue normal monitoring"],
        )

    worsened = drift > 0
    return DriftAnalysis(
        drift_detected=True,
        drift_score=abs(drift),
        drift_type=DriftType.CONCEPT_DRIFT if worsened else DriftType.DATA_DRIFT,
        baseline_accuracy=baseline_acc,
        recent_accuracy=recent_acc,
        drift_start_date=midpoint,
        description=(
            f"Accuracy {'declined' if worsened else 'improved'} by "
            f"{abs(drift) * 100:.1f}% against the baseline half"
        ),
        recommendations=[
            "Investigate recent changes in data patterns",
            "Consider retraining or adjusting model",
        ],
    )
