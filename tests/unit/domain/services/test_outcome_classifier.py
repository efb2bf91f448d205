from __future__ import annotations

from datetime import datetime, timezone

import pytest

from prediction_accuracy.domain.entities.health_status import HealthStatus
from prediction_accuracy.domain.entities.metrics_sample import RawMetricSample
from prediction_accuracy.domain.services.outcome_classifier import (
    aggregate_error_rate,
    classify_error_rate,
)

_NOW = datetime(2024, 5, 1, tzinfo=timezone.utc)


def _sample(processed: int, errors: int) -> RawMetricSample:
    return RawMetricSample(
        timestamp=_NOW, merchant_id="M-1", processed_count=processed, error_count=errors
    )


def test_no_samples_yields_none() -> None:
    assert aggregate_error_rate([]) is None


def test_error_rate_sums_counts_across_samples() -> None:
    rate = aggregate_error_rate([_sample(100, 2), _sample(300, 18)])

    assert rate == pytest.approx(20 / 400)


def test_samples_with_nothing_processed_yield_zero() -> None:
    assert aggregate_error_rate([_sample(0, 0), _sample(0, 0)]) == 0.0


@pytest.mark.parametrize(
    ("rate", "expected"),
    [
        (0.0, HealthStatus.HEALTHY),
        (0.0499, HealthStatus.HEALTHY),
        (0.05, HealthStatus.WARNING),
        (0.0999, HealthStatus.WARNING),
        (0.10, HealthStatus.CRITICAL),
        (0.75, HealthStatus.CRITICAL),
    ],
)
def test_classify_error_rate_thresholds(rate: float, expected: HealthStatus) -> None:
    assert classify_error_rate(rate) is expected


def test_classify_error_rate_respects_custom_thresholds() -> None:
    assert (
        classify_error_rate(0.03, warning_threshold=0.02, critical_threshold=0.04)
        is HealthStatus.WARNING
    )
