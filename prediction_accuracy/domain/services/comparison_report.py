"""Per-model performance summaries and the A/B comparison built from them."""

from typing import List, Optional, Sequence

from prediction_accuracy.domain.entities.comparison import (
    TIE,
    ComparisonResult,
    ModelPerformance,
    StatusComparison,
)
from prediction_accuracy.domain.entities.health_status import HealthStatus
from prediction_accuracy.domain.entities.prediction import PredictionRecord

from .analysis_window import AnalysisWindow
from .classification import (
    accuracy_by_predicted_status,
    accuracy_of,
    aggregate_metrics,
    build_confusion_matrix,
    compute_class_metrics,
)
from .insights import comparison_insights, comparison_recommendations
from .significance import determine_winner, two_proportion_test


def build_model_performance(
    model_type: str,
    evaluated: Sequence[PredictionRecord],
    total_predictions: int,
    average_confidence: Optional[float] = None,
    average_response_time_ms: Optional[float] = None,
    error_count: int = 0,
) -> ModelPerformance:
    """Accuracy plus support-weighted precision/recall/F1 for one model type."""
    performance = ModelPerformance(
        model_type=model_type,
        total_predictions=total_predictions,
        evaluated_predictions=len(evaluated),
        average_confidence=average_confidence or 0.0,
        average_response_time_ms=average_response_time_ms or 0.0,
        error_count=error_count,
    )
    if not evaluated:
        return performance

    weighted, _ = aggregate_metrics(
        compute_class_metrics(evaluated, build_confusion_matrix(evaluated))
    )
    performance.correct_predictions = sum(1 for r in evaluated if r.is_correct)
    performance.accuracy = performance.correct_predictions / len(evaluated)
    performance.precision = weighted.precision
    performance.recall = weighted.recall
    performance.f1_score = weighted.f1_score
    performance.accuracy_by_status = accuracy_by_predicted_status(evaluated)
    return performance


def compare_by_status(
    model_a: str,
    evaluated_a: Sequence[PredictionRecord],
    model_b: str,
    evaluated_b: Sequence[PredictionRecord],
) -> List[StatusComparison]:
    rows: List[StatusComparison] = []
    for status in HealthStatus.ordered():
        subset_a = [r for r in evaluated_a if r.predicted_status == status]
        subset_b = [r for r in evaluated_b if r.predicted_status == status]
        acc_a = accuracy_of(subset_a) or 0.0
        acc_b = accuracy_of(subset_b) or 0.0
        if acc_a > acc_b:
            better = model_a
        elif acc_b > acc_a:
            better = model_b
        else:
            better = TIE
        rows.append(
            StatusComparison(
                status=status,
                accuracy_a=acc_a,
                accuracy_b=acc_b,
                count_a=len(subset_a),
                count_b=len(subset_b),
                better_model=better,
            )
        )
    return rows


def build_comparison(
    window: AnalysisWindow,
    model_a: ModelPerformance,
    model_b: ModelPerformance,
    status_comparisons: List[StatusComparison],
) -> ComparisonResult:
    accuracy_diff = model_a.accuracy - model_b.accuracy
    result = ComparisonResult(
        window_days=window.days,
        start_time=window.start,
        end_time=window.end,
        model_a=model_a,
        model_b=model_b,
        accuracy_difference=accuracy_diff,
        f1_difference=model_a.f1_score - model_b.f1_score,
        confidence_difference=model_a.average_confidence - model_b.average_confidence,
        winner=determine_winner(model_a, model_b),
        win_margin=abs(accuracy_diff),
        significance=two_proportion_test(
            model_a.accuracy,
            model_a.evaluated_predictions,
            model_b.accuracy,
            model_b.evaluated_predictions,
        ),
        status_comparisons=status_comparisons,
    )
    result.insights = comparison_insights(result)
    result.recommendations = comparison_recommendations(result)
    return result
