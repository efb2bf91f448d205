"""Port behind ``/health`` and ``/info``: checks the audit store and Celery services."""

from __future__ import annotations

from typing import Protocol

from prediction_accuracy.domain.entities.health import SystemHealth


class IHealthCheckService(Protocol):
    """Reports on the Mongo audit store, the Redis backend and the RabbitMQ broker."""

    async def evaluate(self) -> SystemHealth:
        """One DependencyStatus per backing service plus the rolled-up status."""
        ...
