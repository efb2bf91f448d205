from __future__ import annotations

import os
from unittest.mock import MagicMock

import pytest

from prediction_accuracy.main.worker import create_worker, main


class _StubCeleryApp:
    def __init__(self, **kwargs) -> None:
        self.kwargs = kwargs
        self.main = "prediction_accuracy_worker"
        self.worker_main = MagicMock()


@pytest.fixture(autouse=True)
def patch_create_celery(monkeypatch):
    monkeypatch.setattr(
        "prediction_accuracy.infrastructure.services.celery_config.create_celery_app",
        lambda **kwargs: _StubCeleryApp(**kwargs),
    )


def test_create_worker_sets_environment(monkeypatch) -> None:
    for key in (
        "CELERY_BROKER_URL",
        "CELERY_RESULT_BACKEND",
        "ACCURACY_DEFAULT_HORIZON_HOURS",
    ):
        monkeypatch.delenv(key, raising=False)

    worker_app = create_worker()

    assert worker_app.main == "prediction_accuracy_worker"
    assert worker_app.kwargs["evaluation_interval_seconds"] == 3600
    assert os.environ["CELERY_BROKER_URL"].startswith("amqp://")
    assert os.environ["CELERY_RESULT_BACKEND"].startswith("redis://")
    assert os.environ["ACCURACY_DEFAULT_HORIZON_HOURS"] == "6"


def test_main_invokes_worker_with_beat(monkeypatch) -> None:
    stub_app = _StubCeleryApp()
    monkeypatch.setattr("prediction_accuracy.main.worker.create_worker", lambda: stub_app)

    main()

    stub_app.worker_main.assert_called_once()
    argv = stub_app.worker_main.call_args.args[0]
    assert "--beat" in argv
    assert "--queues=accuracy_evaluation" in argv
