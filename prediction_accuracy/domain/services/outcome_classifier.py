"""
Ground-truth classification of a prediction window from raw batch metrics.
"""

from typing import Iterable, Optional

from prediction_accuracy.domain.entities.health_status import HealthStatus
from prediction_accuracy.domain.entities.metrics_sample import RawMetricSample

WARNING_THRESHOLD = 0.05
CRITICAL_THRESHOLD = 0.10


def aggregate_error_rate(samples: Iterable[RawMetricSample]) -> Optional[float]:
    """Total errors over total processed; None when there are no samples.

    A window with samples but nothing processed has an error rate of 0.
    """
    seen = False
    processed = 0
    errors = 0
    for sample in samples:
        seen = True
        processed += sample.processed_count
        errors += sample.error_count
    if not seen:
        return None
    return errors / processed if processed > 0 else 0.0


def classify_error_rate(
    error_rate: float,
    warning_threshold: float = WARNING_THRESHOLD,
    critical_threshold: float = CRITICAL_THRESHOLD,
) -> HealthStatus:
    if error_rate >= critical_threshold:
        return HealthStatus.CRITICAL
    if error_rate >= warning_threshold:
        return HealthStatus.WARNING
    return HealthStatus.HEALTHY
