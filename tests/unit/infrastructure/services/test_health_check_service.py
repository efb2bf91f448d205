from __future__ import annotations

from types import SimpleNamespace

import pytest

from prediction_accuracy.domain.entities.health import DependencyStatus, ServiceStatus
from prediction_accuracy.infrastructure.services import health_check_service as module
from prediction_accuracy.infrastructure.services.health_check_service import (
    HealthCheckService,
)


class _StubMongo:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.db = SimpleNamespace(name="prediction_accuracy")

    def ping(self):
        if self.fail:
            raise RuntimeError("server selection timeout")
        return {"ok": 1.0}


class _StubRedis:
    def __init__(self, fail: bool) -> None:
        self.fail = fail
        self.closed = False

    async def ping(self) -> bool:
        if self.fail:
            raise ConnectionError("redis unreachable")
        return True

    async def aclose(self) -> None:
        self.closed = True


def _patch_clients(monkeypatch, *, rabbit_fail: bool = False, redis_fail: bool = False):
    redis_clients = []

    class _Connection:
        def __init__(self, params) -> None:
            if rabbit_fail:
                raise ConnectionError("broker refused")

        def close(self) -> None:
            pass

    def _from_url(url, **kwargs):
        client = _StubRedis(redis_fail)
        redis_clients.append(client)
        return client

    monkeypatch.setattr(
        module,
        "pika",
        SimpleNamespace(BlockingConnection=_Connection, URLParameters=lambda url: url),
    )
    monkeypatch.setattr(module, "aioredis", SimpleNamespace(from_url=_from_url))
    return redis_clients


@pytest.mark.asyncio
async def test_all_dependencies_up(monkeypatch) -> None:
    redis_clients = _patch_clients(monkeypatch)
    service = HealthCheckService(
        _StubMongo(), "amqp://guest@rabbit//", "redis://redis:6379/0"
    )

    health = await service.evaluate()

    assert health.status is ServiceStatus.UP
    assert [d.name for d in health.dependencies] == ["mongo", "rabbitmq", "redis"]
    assert health.dependencies[0].details == {"database": "prediction_accuracy"}
    assert redis_clients[0].closed is True


@pytest.mark.asyncio
async def test_failed_dependency_marks_system_down(monkeypatch) -> None:
    redis_clients = _patch_clients(monkeypatch, redis_fail=True)
    service = HealthCheckService(_StubMongo(), "amqp://rabbit//", "redis://redis")

    health = await service.evaluate()

    redis = health.dependencies[2]
    assert health.status is ServiceStatus.DOWN
    assert redis.status is ServiceStatus.DOWN
    assert "redis unreachable" in redis.message
    assert redis_clients[0].closed is True


@pytest.mark.asyncio
async def test_mongo_and_broker_failures_are_reported(monkeypatch) -> None:
    _patch_clients(monkeypatch, rabbit_fail=True)
    service = HealthCheckService(_StubMongo(fail=True), "amqp://rabbit//", "redis://r")

    health = await service.evaluate()

    statuses = {d.name: d.status for d in health.dependencies}
    assert statuses == {
        "mongo": ServiceStatus.DOWN,
        "rabbitmq": ServiceStatus.DOWN,
        "redis": ServiceStatus.UP,
    }


@pytest.mark.asyncio
async def test_unconfigured_dependencies_are_unknown(monkeypatch) -> None:
    _patch_clients(monkeypatch)
    service = HealthCheckService(None, "", "")

    health = await service.evaluate()

    assert health.status is ServiceStatus.UNKNOWN
    assert all(d.status is ServiceStatus.UNKNOWN for d in health.dependencies)


def test_aggregate_status_priority() -> None:
    service = HealthCheckService(None, "", "")

    def _statuses(*values):
        return [DependencyStatus(name=str(i), status=v) for i, v in enumerate(values)]

    assert service._aggregate_status([]) is ServiceStatus.UP
    assert (
        service._aggregate_status(_statuses(ServiceStatus.UP, ServiceStatus.DEGRADED))
        is ServiceStatus.DEGRADED
    )
    assert (
        service._aggregate_status(
            _statuses(ServiceStatus.UNKNOWN, ServiceStatus.DEGRADED, ServiceStatus.DOWN)
        )
        is ServiceStatus.DOWN
    )
