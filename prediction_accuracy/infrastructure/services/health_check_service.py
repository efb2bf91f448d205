"""Infrastructure implementation for system health checks."""

from __future__ import annotations

import asyncio
from time import perf_counter
from typing import Any, Awaitable, Callable, Dict, Iterable, Optional

import pika
import redis.asyncio as aioredis

from prediction_accuracy.domain.entities.health import (
    DependencyStatus,
    ServiceStatus,
    SystemHealth,
)
from prediction_accuracy.domain.ports.health_check import IHealthCheckService
from prediction_accuracy.infrastructure.database.mongo_database import MongoDatabase


class HealthCheckService(IHealthCheckService):
    """Checks MongoDB, the RabbitMQ broker and the Redis result backend."""

    def __init__(
        self,
        mongo_database: Optional[MongoDatabase],
        broker_url: str,
        redis_url: str,
        *,
        socket_timeout: float = 5.0,
    ) -> None:
        self._mongo_database = mongo_database
        self._broker_url = broker_url
        self._redis_url = redis_url
        self._socket_timeout = socket_timeout

    async def evaluate(self) -> SystemHealth:
        """Run checks concurrently and aggregate system health."""
        statuses = await asyncio.gather(
            self._check_mongo(), self._check_rabbitmq(), self._check_redis()
        )
        dependencies = list(statuses)
        return SystemHealth(
            status=self._aggregate_status(dependencies), dependencies=dependencies
        )

    def _aggregate_status(self, statuses: Iterable[DependencyStatus]) -> ServiceStatus:
        seen = {status.status for status in statuses}
        if ServiceStatus.DOWN in seen:
            return ServiceStatus.DOWN
        if ServiceStatus.DEGRADED in seen:
            return ServiceStatus.DEGRADED
        if ServiceStatus.UNKNOWN in seen:
            return ServiceStatus.UNKNOWN
        return ServiceStatus.UP

    async def _probe(
        self,
        name: str,
        label: str,
        probe: Callable[[], Awaitable[Any]],
        details: Optional[Dict[str, Any]] = None,
    ) -> DependencyStatus:
        start = perf_counter()
        try:
            await probe()
        except Exception as exc:
            return DependencyStatus(
                name=name,
                status=ServiceStatus.DOWN,
                message=f"{label} check failed: {exc}",
                latency_ms=(perf_counter() - start) * 1000,
            )
        return DependencyStatus(
            name=name,
            status=ServiceStatus.UP,
            message=f"{label} check successful",
            latency_ms=(perf_counter() - start) * 1000,
            details=details or {},
        )

    async def _check_mongo(self) -> DependencyStatus:
        if not self._mongo_database:
            return DependencyStatus(
                name="mongo",
                status=ServiceStatus.UNKNOWN,
                message="Mongo database client not configured.",
            )
        return await self._probe(
            "mongo",
            "MongoDB ping",
            lambda: asyncio.to_thread(self._mongo_database.ping),
            details={"database": self._mongo_database.db.name},
        )

    async def _check_rabbitmq(self) -> DependencyStatus:
        if not self._broker_url:
            return DependencyStatus(
                name="rabbitmq",
                status=ServiceStatus.UNKNOWN,
                message="RabbitMQ broker URL not configured.",
            )

        def _connect() -> None:
            connection = pika.BlockingConnection(pika.URLParameters(self._broker_url))
            connection.close()

        return await self._probe(
            "rabbitmq", "RabbitMQ connection", lambda: asyncio.to_thread(_connect)
        )

    async def _check_redis(self) -> DependencyStatus:
        if not self._redis_url:
            return DependencyStatus(
                name="redis",
                status=ServiceStatus.UNKNOWN,
                message="Redis URL not configured.",
            )

        async def _ping() -> None:
            client = aioredis.from_url(
                self._redis_url,
                socket_connect_timeout=self._socket_timeout,
                socket_timeout=self._socket_timeout,
            )
            try:
                await client.ping()
            finally:
                await client.aclose()

        return await self._probe("redis", "Redis ping", _ping)

