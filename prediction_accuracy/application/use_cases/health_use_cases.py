"""Use cases for health and application info endpoints."""

from dataclasses import asdict
from datetime import datetime, timezone
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

from prediction_accuracy.application.dtos.health_dto import (
    ApplicationInfoDTO,
    SystemHealthDTO,
)
from prediction_accuracy.application.models import EvaluationPolicy, SystemInfo
from prediction_accuracy.domain.entities.health import ApplicationInfo
from prediction_accuracy.domain.ports.health_check import IHealthCheckService


def redact_url(url: str) -> str:
    """Strip credentials from a broker or backend URL."""
    if not url:
        return url

    parsed = urlsplit(url)
    if not (parsed.username or parsed.password):
        return url
    netloc = parsed.hostname or ""
    if parsed.port:
        netloc = f"{netloc}:{parsed.port}"
    return urlunsplit((parsed.scheme, netloc, parsed.path, parsed.query, parsed.fragment))


class GetHealthStatusUseCase:
    def __init__(self, health_check_service: IHealthCheckService) -> None:
        self._health_check_service = health_check_service

    async def execute(self) -> SystemHealthDTO:
        system_health = await self._health_check_service.evaluate()
        return SystemHealthDTO.from_domain(system_health)


class GetApplicationInfoUseCase:
    """Build metadata, uptime, dependency status and active evaluation policy."""

    def __init__(
        self,
        health_check_service: IHealthCheckService,
        system_info: SystemInfo,
        policy: EvaluationPolicy,
    ) -> None:
        self._health_check_service = health_check_service
        self._info = system_info
        self._policy = policy

    async def execute(self, started_at: Optional[datetime]) -> ApplicationInfoDTO:
        system_health = await self._health_check_service.evaluate()

        now = datetime.now(timezone.utc)
        started = started_at or now

        info = ApplicationInfo(
            name=self._info.title,
            description=self._info.description,
            version=self._info.version,
            environment=self._info.environment,
            git_commit=self._info.git_commit,
            build_time=self._info.build_time,
            started_at=started,
            uptime_seconds=max(0.0, (now - started).total_seconds()),
            status=system_health.status,
            dependencies=system_health.dependencies,
            evaluation=asdict(self._policy),
            extras={
                "celery": {
                    "broker": redact_url(self._info.celery_broker_url),
                    "result_backend": redact_url(self._info.celery_result_backend_url),
                },
            },
        )
        return ApplicationInfoDTO.from_domain(info)
