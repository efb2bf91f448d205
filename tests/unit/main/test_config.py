from __future__ import annotations

import pytest
from pydantic import ValidationError

from prediction_accuracy.main.config import AccuracySettings, AppSettings, get_settings
from prediction_accuracy.shared.consts import EnumEnvironment


def test_get_settings_loads_defaults(monkeypatch) -> None:
    monkeypatch.delenv("DB_MONGO_URI", raising=False)
    monkeypatch.delenv("ENVIRONMENT", raising=False)

    settings = get_settings()

    assert settings.database.mongo_uri.startswith("mongodb://")
    assert settings.environment == EnumEnvironment.DEVELOPMENT
    assert settings.accuracy.default_horizon_hours == 6
    assert settings.accuracy.primary_model == "AI"


def test_settings_respect_environment_variables(monkeypatch) -> None:
    monkeypatch.setenv("DB_MONGO_URI", "mongodb://test")
    monkeypatch.setenv("SERVICE_TITLE", "Testing")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("CELERY_BROKER_URL", "amqp://other//")
    monkeypatch.setenv("ACCURACY_WARNING_THRESHOLD", "0.02")
    monkeypatch.setenv("ACCURACY_CHALLENGER_MODEL", "FALLBACK")

    settings = AppSettings()

    assert settings.database.mongo_uri == "mongodb://test"
    assert settings.service.title == "Testing"
    assert settings.logging.level.value == "DEBUG"
    assert settings.celery.broker_url == "amqp://other//"
    assert settings.accuracy.warning_threshold == 0.02
    assert settings.accuracy.challenger_model == "FALLBACK"


def test_git_commit_accepts_unprefixed_alias(monkeypatch) -> None:
    monkeypatch.delenv("SERVICE_GIT_COMMIT", raising=False)
    monkeypatch.setenv("GIT_COMMIT", "deadbeef")

    assert AppSettings().service.git_commit == "deadbeef"


def test_accuracy_settings_are_bounded(monkeypatch) -> None:
    monkeypatch.setenv("ACCURACY_EVALUATION_INTERVAL_SECONDS", "10")

    with pytest.raises(ValidationError):
        AccuracySettings()
