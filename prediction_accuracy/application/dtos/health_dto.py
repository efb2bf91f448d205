"""DTOs for system health and application info responses."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from prediction_accuracy.domain.entities.health import (
    ApplicationInfo,
    DependencyStatus,
    ServiceStatus,
    SystemHealth,
)


class DependencyStatusDTO(BaseModel):
    """Result of checking one backing service."""

    name: str = Field(description="Dependency identifier")
    status: ServiceStatus
    message: Optional[str] = None
    checked_at: datetime
    latency_ms: Optional[float] = Field(default=None, description="Check latency")
    details: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, status: DependencyStatus) -> "DependencyStatusDTO":
        return cls(
            name=status.name,
            status=status.status,
            message=status.message,
            checked_at=status.checked_at,
            latency_ms=status.latency_ms,
            details=status.details,
        )


class SystemHealthDTO(BaseModel):
    """Payload of ``GET /health``."""

    status: ServiceStatus
    dependencies: List[DependencyStatusDTO] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, health: SystemHealth) -> "SystemHealthDTO":
        return cls(
            status=health.status,
            dependencies=[
                DependencyStatusDTO.from_domain(dep) for dep in health.dependencies
            ],
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "status": "up",
                "dependencies": [
                    {
                        "name": "mongo",
                        "status": "up",
                        "message": "MongoDB ping successful",
                        "checked_at": "2025-01-10T12:00:00Z",
                        "latency_ms": 4.2,
                        "details": {"database": "prediction_accuracy"},
                    }
                ],
            }
        }
    }


class ApplicationInfoDTO(BaseModel):
    """Payload of ``GET /info``."""

    name: str
    description: str
    version: str
    environment: str
    git_commit: str
    build_time: str
    started_at: datetime
    uptime_seconds: float
    status: ServiceStatus
    dependencies: List[DependencyStatusDTO] = Field(default_factory=list)
    evaluation: Dict[str, Any] = Field(
        default_factory=dict, description="Active reconciliation and comparison settings"
    )
    extras: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, info: ApplicationInfo) -> "ApplicationInfoDTO":
        return cls(
            name=info.name,
            description=info.description,
            version=info.version,
            environment=info.environment,
            git_commit=info.git_commit,
            build_time=info.build_time,
            started_at=info.started_at,
            uptime_seconds=info.uptime_seconds,
            status=info.status,
            dependencies=[
                DependencyStatusDTO.from_domain(dep) for dep in info.dependencies
            ],
            evaluation=info.evaluation,
            extras=info.extras,
        )
