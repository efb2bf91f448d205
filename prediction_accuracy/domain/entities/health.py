"""
Health domain entities.

Availability of the Mongo audit store and the Celery broker and backend
that the accuracy engine depends on, plus the build and evaluation
metadata returned by ``/info``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


class ServiceStatus(str, Enum):
    """Availability of a dependency or of the service as a whole."""

    UP = "up"
    DEGRADED = "degraded"
    DOWN = "down"
    UNKNOWN = "unknown"


@dataclass(slots=True)
class DependencyStatus:
    """Result of checking one backing service, e.g. ``mongo`` or ``rabbitmq``."""

    name: str
    status: ServiceStatus
    message: Optional[str] = None
    checked_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    latency_ms: Optional[float] = None
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class SystemHealth:
    """Overall status is the worst of the dependency statuses."""

    status: ServiceStatus
    dependencies: List[DependencyStatus] = field(default_factory=list)


@dataclass(slots=True)
class ApplicationInfo:
    """Build metadata, uptime and evaluation settings of the running service."""

    name: str
    description: str
    version: str
    environment: str
    git_commit: str
    build_time: str
    started_at: datetime
    uptime_seconds: float
    status: ServiceStatus
    dependencies: List[DependencyStatus] = field(default_factory=list)
    evaluation: Dict[str, Any] = field(default_factory=dict)
    extras: Dict[str, Any] = field(default_factory=dict)
