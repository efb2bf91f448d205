"""Confidence split, per-status hit rate and daily trend of a window's predictions."""

from collections import defaultdict
from datetime import date, datetime, timezone
from typing import Dict, List, Optional, Sequence

from prediction_accuracy.domain.entities.accuracy import (
    DailyAccuracy,
    PredictionAccuracyReport,
    StatusAccuracy,
)
from prediction_accuracy.domain.entities.health_status import HealthStatus
from prediction_accuracy.domain.entities.prediction import PredictionRecord

from .analysis_window import AnalysisWindow
from .insights import report_insights, report_recommendations


def _mean_confidence(records: Sequence[PredictionRecord]) -> float:
    if not records:
        return 0.0
    return sum(r.confidence for r in records) / len(records)


def _utc_day(moment: datetime) -> date:
    if moment.tzinfo is None:
        return moment.date()
    return moment.astimezone(timezone.utc).date()


def status_accuracy(
    evaluated: Sequence[PredictionRecord],
) -> Dict[HealthStatus, StatusAccuracy]:
    """Per predicted status; statuses never predicted are left out."""
    breakdown: Dict[HealthStatus, StatusAccuracy] = {}
    for status in HealthStatus.ordered():
        subset = [r for r in evaluated if r.predicted_status == status]
        if not subset:
            continue
        correct = sum(1 for r in subset if r.is_correct)
        breakdown[status] = StatusAccuracy(
            status=status,
            total_predictions=len(subset),
            correct_predictions=correct,
            accuracy=correct / len(subset),
            average_confidence=_mean_confidence(subset),
        )
    return breakdown


def daily_accuracy(records: Sequence[PredictionRecord]) -> List[DailyAccuracy]:
    """
    Bucket predictions by UTC calendar day of ``prediction_time``.

    Days without predictions are skipped. A day whose predictions are all
    pending keeps ``accuracy`` at None.
    """
    by_day: Dict[date, List[PredictionRecord]] = defaultdict(list)
    for record in records:
        by_day[_utc_day(record.prediction_time)].append(record)

    trend: List[DailyAccuracy] = []
    for day in sorted(by_day):
        bucket = by_day[day]
        evaluated = [r for r in bucket if r.is_evaluated]
        correct = sum(1 for r in evaluated if r.is_correct)
        trend.append(
            DailyAccuracy(
                day=day,
                total_predictions=len(bucket),
                correct_predictions=correct,
                accuracy=correct / len(evaluated) if evaluated else None,
                average_confidence=_mean_confidence(bucket),
            )
        )
    return trend


def build_prediction_report(
    records: Sequence[PredictionRecord],
    window: AnalysisWindow,
    generated_at: Optional[datetime] = None,
) -> PredictionAccuracyReport:
    """
    Summarize every prediction made inside ``window``.

    Args:
        records: All records of the window, evaluated or still pending
        window: The lookback window
        generated_at: Defaults to now

    Returns:
        PredictionAccuracyReport: ``overall_accuracy`` is None when nothing
        in the window has been evaluated
    """
    evaluated = [r for r in records if r.is_evaluated]
    correct = [r for r in evaluated if r.is_correct]
    incorrect = [r for r in evaluated if r.is_correct is False]

    report = PredictionAccuracyReport(
        window_days=window.days,
        period_start=_utc_day(window.start),
        period_end=_utc_day(window.end),
        generated_at=generated_at or datetime.now(timezone.utc),
        total_predictions=len(records),
        evaluated_predictions=len(evaluated),
        correct_predictions=len(correct),
        incorrect_predictions=len(evaluated) - len(correct),
        pending_evaluation=len(records) - len(evaluated),
        overall_accuracy=len(correct) / len(evaluated) if evaluated else None,
        average_confidence=_mean_confidence(records),
        average_confidence_correct=_mean_confidence(correct),
        average_confidence_incorrect=_mean_confidence(incorrect),
        accuracy_by_predicted_status=status_accuracy(evaluated),
        daily_accuracy=daily_accuracy(records),
    )
    report.insights = report_insights(report)
    report.recommendations = report_recommendations(report)
    return report
