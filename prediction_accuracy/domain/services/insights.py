"""
Rule-based, human-readable insights for accuracy and comparison reports.
"""

from typing import List

from prediction_accuracy.domain.entities.accuracy import (
    AccuracySnapshot,
    PredictionAccuracyReport,
)
from prediction_accuracy.domain.entities.comparison import TIE, ComparisonResult
from prediction_accuracy.domain.entities.health_status import HealthStatus

NO_DATA_INSIGHT = "No evaluated predictions found in the time period"
TREND_THRESHOLD = 0.05
WEAK_CLASS_F1 = 0.7
MIN_COMPARISON_SAMPLES = 50
MODEL_ERROR_RATE_LIMIT = 0.1
CALIBRATION_GAP = 0.1
LOW_CONFIDENCE = 0.6


def _pct(value: float) -> str:
    return f"{value * 100:.1f}%"


def accuracy_insights(snapshot: AccuracySnapshot) -> List[str]:
    if snapshot.no_data:
        return [NO_DATA_INSIGHT]

    insights: List[str] = []
    accuracy = snapshot.overall_accuracy
    if accuracy >= 0.9:
        insights.append(f"Excellent overall accuracy at {_pct(accuracy)}")
    elif accuracy >= 0.8:
        insights.append(f"Good accuracy at {_pct(accuracy)}")
    elif accuracy >= 0.7:
        insights.append(f"Moderate accuracy at {_pct(accuracy)} - room for improvement")
    else:
        insights.append(f"Low accuracy at {_pct(accuracy)} - needs attention")

    trend = snapshot.accuracy_trend
    if trend > TREND_THRESHOLD:
        insights.append(f"Accuracy is improving (+{trend * 100:.1f}% recently)")
    elif trend < -TREND_THRESHOLD:
        insights.append(f"Accuracy is declining ({trend * 100:.1f}% recently)")

    if snapshot.calibration_score >= 0.9:
        insights.append("Confidence scores are well-calibrated")
    elif snapshot.calibration_score < 0.8:
        insights.append("Confidence calibration needs improvement")

    supported = [m for m in snapshot.class_metrics.values() if m.support > 0]
    if supported:
        weakest = min(supported, key=lambda m: m.f1_score)
        if weakest.f1_score < WEAK_CLASS_F1:
            insights.append(
                f"Weakest performance on {weakest.status.value} status "
                f"(F1: {weakest.f1_score:.2f})"
            )
    return insights


def accuracy_recommendations(snapshot: AccuracySnapshot) -> List[str]:
    if snapshot.no_data:
        return []

    recommendations: List[str] = []
    if snapshot.overall_accuracy < 0.8:
        recommendations.append("Consider retraining the model or adjusting prompts")
        recommendations.append("Review recent prediction errors for patterns")

    if snapshot.calibration_score < 0.85:
        recommendations.append("Implement confidence recalibration")

    critical = snapshot.class_metrics.get(HealthStatus.CRITICAL)
    if critical is not None and critical.support > 0 and critical.recall < 0.8:
        recommendations.append(
            "CRITICAL status recall is low - increase sensitivity for critical predictions"
        )

    if not recommendations:
        recommendations.append("Continue current monitoring and evaluation practices")
    return recommendations


def comparison_insights(result: ComparisonResult) -> List[str]:
    a, b = result.model_a, result.model_b
    insights: List[str] = []

    if result.winner == TIE:
        insights.append("Both models perform similarly")
    else:
        winner, loser = (a, b) if result.winner == a.model_type else (b, a)
        insights.append(
            f"{winner.model_type} model outperforms {loser.model_type} by "
            f"{_pct(winner.accuracy - loser.accuracy)}"
        )

    if result.significance.is_significant:
        insights.append("Results are statistically significant")
    else:
        insights.append("Results are not statistically significant - need more data")

    if 0 < a.average_response_time_ms < b.average_response_time_ms:
        insights.append(
            f"{a.model_type} model is faster (avg {a.average_response_time_ms:.0f}ms)"
        )
    elif 0 < b.average_response_time_ms < a.average_response_time_ms:
        insights.append(
            f"{b.model_type} model is faster (avg {b.average_response_time_ms:.0f}ms)"
        )
    return insights


def comparison_recommendations(result: ComparisonResult) -> List[str]:
    """Recommendations from the primary model's (``model_a``) point of view."""
    a, b = result.model_a, result.model_b
    recommendations: List[str] = []

    if result.winner == a.model_type and a.accuracy >= 0.85:
        recommendations.append(f"Continue using {a.model_type} model as primary")
    elif result.winner == b.model_type:
        recommendations.append(
            f"Consider improving {a.model_type} model or increasing {b.model_type} usage"
        )

    if a.error_count > a.total_predictions * MODEL_ERROR_RATE_LIMIT:
        recommendations.append(
            f"High {a.model_type} error rate - investigate model stability"
        )

    if (
        a.evaluated_predictions < MIN_COMPARISON_SAMPLES
        or b.evaluated_predictions < MIN_COMPARISON_SAMPLES
    ):
        recommendations.append("Collect more data for reliable comparison")
    return recommendations


def report_insights(report: PredictionAccuracyReport) -> List[str]:
    insights: List[str] = []
    accuracy = report.overall_accuracy
    if accuracy is not None:
        if accuracy >= 0.8:
            insights.append(f"Prediction accuracy is excellent at {_pct(accuracy)}")
        elif accuracy >= 0.6:
            insights.append(f"Prediction accuracy is moderate at {_pct(accuracy)}")
        else:
            insights.append(f"Prediction accuracy needs improvement at {_pct(accuracy)}")

    correct = report.average_confidence_correct
    incorrect = report.average_confidence_incorrect
    if correct > incorrect + CALIBRATION_GAP:
        insights.append(
            "Confidence scores are well calibrated - "
            "higher confidence correlates with accuracy"
        )
    elif correct < incorrect:
        insights.append(
            "Confidence calibration issue detected - "
            "incorrect predictions have higher confidence"
        )
    return insights


def report_recommendations(report: PredictionAccuracyReport) -> List[str]:
    recommendations: List[str] = []
    if report.overall_accuracy is not None and report.overall_accuracy < 0.7:
        recommendations.append("Consider adjusting prediction thresholds")
        recommendations.append("Review and update AI prompts for better accuracy")

    if report.total_predictions and report.average_confidence < LOW_CONFIDENCE:
        recommendations.append(
            "Low confidence predictions may benefit from more historical data"
        )

    if not recommendations:
        recommendations.append("Continue monitoring prediction accuracy")
    return recommendations
