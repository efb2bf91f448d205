from __future__ import annotations

import pytest

from prediction_accuracy.main import app as module_app
from prediction_accuracy.main.app import create_app


class _StubMongoDatabase:
    async def create_indexes(self) -> None:
        pass

    def close(self) -> None:
        pass


@pytest.mark.asyncio
async def test_create_app_initializes_lifespan(monkeypatch) -> None:
    monkeypatch.setattr(
        "prediction_accuracy.main.container.MongoDatabase",
        lambda *args, **kwargs: _StubMongoDatabase(),
    )

    app = create_app()
    assert app.title

    async with app.router.lifespan_context(app):
        assert app.state.started_at is not None
        assert app.state.container is not None

    assert isinstance(module_app.app, type(app))


def test_routes_are_mounted() -> None:
    paths = {route.path for route in create_app().routes}

    assert {
        "/predictions",
        "/predictions/{prediction_id}",
        "/accuracy/outcomes/{prediction_id}",
        "/accuracy/evaluate",
        "/accuracy/metrics",
        "/accuracy/summary",
        "/accuracy/ab-test",
        "/accuracy/ab-test/summary",
        "/accuracy/feedback",
        "/accuracy/feedback/errors",
        "/accuracy/feedback/drift",
        "/accuracy/feedback/recommendations",
        "/health",
        "/info",
        "/metrics",
        "/accuracy/report",
    } <= paths
