"""Mapping of domain errors to HTTP responses."""

from fastapi import HTTPException, status

from prediction_accuracy.domain.entities.errors import (
    DomainError,
    InvalidAnalysisWindowError,
    PredictionNotFoundError,
    PredictionValidationError,
)
from prediction_accuracy.shared import get_logger

logger = get_logger(__name__)


def to_http_error(exc: Exception, event: str, **context) -> HTTPException:
    """
    Translate an exception raised by a use case into an HTTPException.

    Unknown errors are logged under ``event`` and reported as a generic 500.
    """
    if isinstance(exc, PredictionNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message)
    if isinstance(exc, (PredictionValidationError, InvalidAnalysisWindowError)):
        detail = {"message": exc.message, **exc.details} if exc.details else exc.message
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
    if isinstance(exc, DomainError):
        logger.warning(event, error=exc.message, **context)
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message)

    logger.error(event, error=str(exc), **context)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error",
    )
