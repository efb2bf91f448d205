"""
Prometheus Metrics - Shared Layer

Collectors live on the default prometheus_client registry and are exposed
by the API's ``/metrics`` route. Gauges hold the values of the most recent
accuracy computation, whatever its window.
"""

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    Counter,
    Gauge,
    generate_latest,
)

from prediction_accuracy.shared.consts import METRICS_PREFIX

outcomes_recorded = Counter(
    f"{METRICS_PREFIX}_outcome_recorded_total",
    "Outcomes attached to predictions, manually or by the evaluation scheduler",
    ["predicted", "actual", "correct"],
)

overall_accuracy = Gauge(
    f"{METRICS_PREFIX}_accuracy_overall",
    "Overall accuracy of the last computed accuracy snapshot",
)

weighted_f1 = Gauge(
    f"{METRICS_PREFIX}_f1_weighted",
    "Support-weighted F1 score of the last computed accuracy snapshot",
)

calibration = Gauge(
    f"{METRICS_PREFIX}_calibration_score",
    "1 - expected calibration error of the last computed accuracy snapshot",
)


def record_outcome_metric(predicted: str, actual: str, correct: bool) -> None:
    outcomes_recorded.labels(
        predicted=predicted, actual=actual, correct=str(correct).lower()
    ).inc()


def publish_accuracy(accuracy: float, f1_score: float, calibration_score: float) -> None:
    overall_accuracy.set(accuracy)
    weighted_f1.set(f1_score)
    calibration.set(calibration_score)


def render_latest():
    """Text exposition of the default registry and its content type."""
    return generate_latest(REGISTRY), CONTENT_TYPE_LATEST
