"""System endpoints exposing health, info and Prometheus metrics."""

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from prediction_accuracy.application.dtos.health_dto import (
    ApplicationInfoDTO,
    SystemHealthDTO,
)
from prediction_accuracy.application.use_cases.health_use_cases import (
    GetApplicationInfoUseCase,
    GetHealthStatusUseCase,
)
from prediction_accuracy.shared import get_logger, render_latest

logger = get_logger(__name__)

router = APIRouter(tags=["System"])


@router.get("/health", response_model=SystemHealthDTO)
@inject
async def health(
    get_health_status_use_case: GetHealthStatusUseCase = Depends(
        Provide["get_health_status_use_case"]
    ),
) -> SystemHealthDTO:
    """Health of MongoDB, the Celery broker and the result backend."""
    try:
        health_status = await get_health_status_use_case.execute()
    except Exception as exc:
        logger.error("health.check.failure", error=str(exc), exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Unable to retrieve system health status",
        ) from exc
    logger.debug("health.check.success", status=health_status.status.value)
    return health_status


@router.get("/info", response_model=ApplicationInfoDTO)
@inject
async def info(
    request: Request,
    get_application_info_use_case: GetApplicationInfoUseCase = Depends(
        Provide["get_application_info_use_case"]
    ),
) -> ApplicationInfoDTO:
    """Build metadata, uptime and the active evaluation settings."""
    started_at = getattr(request.app.state, "started_at", None)
    try:
        return await get_application_info_use_case.execute(started_at)
    except Exception as exc:
        logger.error("info.fetch.failure", error=str(exc), exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to retrieve application info",
        ) from exc


@router.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    """Prometheus exposition of outcome counters and accuracy gauges."""
    payload, content_type = render_latest()
    return Response(content=payload, media_type=content_type)
