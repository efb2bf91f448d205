"""Assembles an AccuracySnapshot from evaluated records."""

from typing import Sequence

from prediction_accuracy.domain.entities.accuracy import AccuracySnapshot
from prediction_accuracy.domain.entities.prediction import PredictionRecord

from .analysis_window import AnalysisWindow
from .classification import (
    accuracy_trend,
    aggregate_metrics,
    build_confusion_matrix,
    calibration_score,
    compute_class_metrics,
    split_at,
)
from .insights import accuracy_insights, accuracy_recommendations


def build_accuracy_snapshot(
    evaluated: Sequence[PredictionRecord],
    total_predictions: int,
    window: AnalysisWindow,
) -> AccuracySnapshot:
    """
    Compute every accuracy statistic for one window.

    Args:
        evaluated: Evaluated records with ``prediction_time`` inside the window
        total_predictions: All records in the window, evaluated or not
        window: The lookback window

    Returns:
        AccuracySnapshot: Zero-valued with ``no_data`` set when nothing is evaluated
    """
    snapshot = AccuracySnapshot(
        window_days=window.days,
        start_time=window.start,
        end_time=window.end,
        total_predictions=total_predictions,
    )
    if not evaluated:
        snapshot.no_data = True
        snapshot.class_metrics = compute_class_metrics([], snapshot.confusion_matrix)
        snapshot.insights = accuracy_insights(snapshot)
        snapshot.recommendations = accuracy_recommendations(snapshot)
        return snapshot

    correct = sum(1 for r in evaluated if r.is_correct)
    matrix = build_confusion_matrix(evaluated)
    class_metrics = compute_class_metrics(evaluated, matrix)
    weighted, macro = aggregate_metrics(class_metrics)
    older, recent = split_at(evaluated, window.midpoint)

    snapshot.evaluated_predictions = len(evaluated)
    snapshot.correct_predictions = correct
    snapshot.overall_accuracy = correct / len(evaluated)
    snapshot.average_confidence = sum(r.confidence for r in evaluated) / len(evaluated)
    snapshot.class_metrics = class_metrics
    snapshot.weighted = weighted
    snapshot.macro = macro
    snapshot.confusion_matrix = matrix
    snapshot.calibration_score = calibration_score(evaluated)
    snapshot.accuracy_trend = accuracy_trend(older, recent)
    snapshot.insights = accuracy_insights(snapshot)
    snapshot.recommendations = accuracy_recommendations(snapshot)
    return snapshot
