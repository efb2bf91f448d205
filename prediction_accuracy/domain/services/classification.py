"""
Classification-quality statistics over reconciled predictions.

Per-class precision, recall and F1 come from scikit-learn; specificity and
the one-vs-rest accuracy are derived from the confusion matrix. Every
degenerate ratio (empty class, empty bin, empty set) resolves to 0.
"""

from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
from sklearn.metrics import confusion_matrix, precision_recall_fscore_support

from prediction_accuracy.domain.entities.accuracy import (
    AggregateMetrics,
    ClassMetrics,
    ConfusionMatrix,
)
from prediction_accuracy.domain.entities.health_status import HealthStatus
from prediction_accuracy.domain.entities.prediction import PredictionRecord

CALIBRATION_BINS = 10


def _labels() -> List[str]:
    return [status.value for status in HealthStatus.ordered()]


def build_confusion_matrix(records: Sequence[PredictionRecord]) -> ConfusionMatrix:
    """Count predicted (rows) against actual (columns) in fixed class order."""
    labels = HealthStatus.ordered()
    if not records:
        return ConfusionMatrix(labels=labels)

    actual = [r.actual_outcome.value for r in records]
    predicted = [r.predicted_status.value for r in records]
    # sklearn puts true labels on rows
    matrix = confusion_matrix(actual, predicted, labels=_labels()).T
    return ConfusionMatrix(labels=labels, matrix=matrix.astype(int).tolist())


def compute_class_metrics(
    records: Sequence[PredictionRecord], matrix: ConfusionMatrix
) -> Dict[HealthStatus, ClassMetrics]:
    """One-vs-rest metrics for every status, including zero-support ones."""
    ordered = HealthStatus.ordered()
    if not records:
        return {status: ClassMetrics(status=status) for status in ordered}

    actual = [r.actual_outcome.value for r in records]
    predicted = [r.predicted_status.value for r in records]
    precision, recall, f1, _ = precision_recall_fscore_support(
        actual, predicted, labels=_labels(), average=None, zero_division=0
    )

    cells = np.asarray(matrix.matrix)
    total = int(cells.sum())
    result: Dict[HealthStatus, ClassMetrics] = {}
    for idx, status in enumerate(ordered):
        tp = int(cells[idx, idx])
        fp = int(cells[idx, :].sum()) - tp
        fn = int(cells[:, idx].sum()) - tp
        tn = total - tp - fp - fn
        result[status] = ClassMetrics(
            status=status,
            true_positives=tp,
            false_positives=fp,
            false_negatives=fn,
            true_negatives=tn,
            precision=float(precision[idx]),
            recall=float(recall[idx]),
            f1_score=float(f1[idx]),
            specificity=tn / (tn + fp) if (tn + fp) > 0 else 0.0,
            accuracy=(tp + tn) / total if total > 0 else 0.0,
        )
    return result


def aggregate_metrics(
    class_metrics: Dict[HealthStatus, ClassMetrics],
) -> Tuple[AggregateMetrics, AggregateMetrics]:
    """Weighted and macro averages over classes with non-zero support.

    Returns:
        Tuple of (weighted, macro).
    """
    supported = [m for m in class_metrics.values() if m.support > 0]
    if not supported:
        return AggregateMetrics(), AggregateMetrics()

    values = np.array([[m.precision, m.recall, m.f1_score] for m in supported])
    weights = np.array([m.support for m in supported], dtype=float)
    weighted = np.average(values, axis=0, weights=weights)
    macro = values.mean(axis=0)
    return (
        AggregateMetrics(*(float(v) for v in weighted)),
        AggregateMetrics(*(float(v) for v in macro)),
    )


def calibration_score(records: Sequence[PredictionRecord]) -> float:
    """1 - Expected Calibration Error over ten equal-width confidence bins."""
    if not records:
        return 0.0

    confidence = np.array([r.confidence for r in records], dtype=float)
    hits = np.array([1.0 if r.is_correct else 0.0 for r in records])
    bins = np.minimum(
        np.floor(confidence * CALIBRATION_BINS), CALIBRATION_BINS - 1
    ).astype(int)

    ece = 0.0
    for b in np.unique(bins):
        mask = bins == b
        ece += mask.mean() * abs(hits[mask].mean() - confidence[mask].mean())
    return float(np.clip(1.0 - ece, 0.0, 1.0))


def accuracy_of(records: Sequence[PredictionRecord]) -> Optional[float]:
    """Share of correct records; None when there are none."""
    if not records:
        return None
    return sum(1 for r in records if r.is_correct) / len(records)


def split_at(
    records: Sequence[PredictionRecord], midpoint: datetime
) -> Tuple[List[PredictionRecord], List[PredictionRecord]]:
    """Split into (older, recent) halves; recent includes the midpoint itself."""
    older = [r for r in records if r.prediction_time < midpoint]
    recent = [r for r in records if r.prediction_time >= midpoint]
    return older, recent


def accuracy_trend(
    older: Sequence[PredictionRecord], recent: Sequence[PredictionRecord]
) -> float:
    """Recent minus older accuracy; 0 if either half is empty."""
    older_acc = accuracy_of(older)
    recent_acc = accuracy_of(recent)
    if older_acc is None or recent_acc is None:
        return 0.0
    return recent_acc - older_acc


def accuracy_by_predicted_status(
    records: Sequence[PredictionRecord],
) -> Dict[HealthStatus, float]:
    """Accuracy restricted to each predicted status that occurs at least once."""
    result: Dict[HealthStatus, float] = {}
    for status in HealthStatus.ordered():
        acc = accuracy_of([r for r in records if r.predicted_status == status])
        if acc is not None:
            result[status] = acc
    return result
