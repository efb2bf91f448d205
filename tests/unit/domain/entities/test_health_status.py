from __future__ import annotations

from prediction_accuracy.domain.entities.health_status import HealthStatus


def test_ordered_is_fixed_class_order() -> None:
    assert HealthStatus.ordered() == [
        HealthStatus.HEALTHY,
        HealthStatus.WARNING,
        HealthStatus.CRITICAL,
        HealthStatus.UNKNOWN,
    ]


def test_severity_orders_known_statuses() -> None:
    assert HealthStatus.HEALTHY.severity < HealthStatus.WARNING.severity
    assert HealthStatus.WARNING.severity < HealthStatus.CRITICAL.severity
    assert HealthStatus.UNKNOWN.severity < HealthStatus.HEALTHY.severity


def test_status_is_string_valued() -> None:
    assert HealthStatus("CRITICAL") is HealthStatus.CRITICAL
    assert HealthStatus.WARNING == "WARNING"
