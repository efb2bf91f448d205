"""
Predictions Router - Presentation Layer

Ingestion and lookup of prediction audit records.
"""

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, status

from prediction_accuracy.application.dtos.prediction_dto import (
    PredictionCreateDTO,
    PredictionResponseDTO,
)
from prediction_accuracy.application.use_cases.prediction_use_cases import (
    GetPredictionUseCase,
    RecordPredictionUseCase,
)

from .errors import to_http_error

router = APIRouter(prefix="/predictions", tags=["Predictions"])


@router.post(
    "",
    response_model=PredictionResponseDTO,
    status_code=status.HTTP_201_CREATED,
)
@inject
async def record_prediction(
    payload: PredictionCreateDTO,
    record_prediction_use_case: RecordPredictionUseCase = Depends(
        Provide["record_prediction_use_case"]
    ),
) -> PredictionResponseDTO:
    """
    Append a prediction to the audit store.

    The record stays pending until its horizon has elapsed and an outcome
    is reconciled.
    """
    try:
        return await record_prediction_use_case.execute(payload)
    except Exception as e:
        raise to_http_error(e, "predictions.record_failed") from e


@router.get("/{prediction_id}", response_model=PredictionResponseDTO)
@inject
async def get_prediction(
    prediction_id: int,
    get_prediction_use_case: GetPredictionUseCase = Depends(
        Provide["get_prediction_use_case"]
    ),
) -> PredictionResponseDTO:
    try:
        return await get_prediction_use_case.execute(prediction_id)
    except Exception as e:
        raise to_http_error(
            e, "predictions.fetch_failed", prediction_id=prediction_id
        ) from e
