"""Lightweight settings structures consumed by the application layer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SystemInfo:
    """Subset of configuration required by system-related use cases."""

    title: str
    description: str
    version: str
    environment: str
    git_commit: str
    build_time: str
    celery_broker_url: str
    celery_result_backend_url: str


@dataclass(frozen=True)
class EvaluationPolicy:
    """Thresholds and model names used when reconciling and comparing predictions."""

    default_horizon_hours: int = 6
    warning_threshold: float = 0.05
    critical_threshold: float = 0.10
    high_confidence_threshold: float = 0.8
    primary_model: str = "AI"
    challenger_model: str = "RULE_BASED"
