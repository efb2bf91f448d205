"""Infrastructure-level configuration helpers for background workers."""

from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class _DatabaseSettings(BaseSettings):
    mongo_uri: str = Field(
        default="mongodb://localhost:27017/prediction_accuracy",
        validation_alias=AliasChoices("DB_MONGO_URI", "MONGO_URI"),
    )
    database_name: str = Field(
        default="prediction_accuracy",
        validation_alias=AliasChoices("DB_DATABASE_NAME", "DATABASE_NAME"),
    )

    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")


class _EvaluationSettings(BaseSettings):
    default_horizon_hours: int = Field(
        default=6,
        ge=1,
        validation_alias=AliasChoices(
            "ACCURACY_DEFAULT_HORIZON_HOURS", "DEFAULT_HORIZON_HOURS"
        ),
    )
    evaluation_interval_seconds: int = Field(
        default=3600,
        ge=60,
        validation_alias=AliasChoices(
            "ACCURACY_EVALUATION_INTERVAL_SECONDS", "EVALUATION_INTERVAL_SECONDS"
        ),
        description="Period of the pending-prediction reconciliation",
    )
    warning_threshold: float = Field(
        default=0.05,
        validation_alias=AliasChoices("ACCURACY_WARNING_THRESHOLD", "WARNING_THRESHOLD"),
    )
    critical_threshold: float = Field(
        default=0.10,
        validation_alias=AliasChoices(
            "ACCURACY_CRITICAL_THRESHOLD", "CRITICAL_THRESHOLD"
        ),
    )

    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")


class InfrastructureSettings(BaseSettings):
    database: _DatabaseSettings = Field(default_factory=_DatabaseSettings)
    evaluation: _EvaluationSettings = Field(default_factory=_EvaluationSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )


_settings: InfrastructureSettings | None = None


def get_settings() -> InfrastructureSettings:
    """Lazy-load infrastructure settings for Celery workers."""
    global _settings
    if _settings is None:
        _settings = InfrastructureSettings()
    return _settings
