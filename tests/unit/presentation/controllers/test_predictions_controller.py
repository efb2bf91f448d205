from __future__ import annotations

import pytest
from fastapi import HTTPException

from prediction_accuracy.application.dtos.prediction_dto import PredictionCreateDTO
from prediction_accuracy.application.use_cases.prediction_use_cases import (
    GetPredictionUseCase,
    RecordPredictionUseCase,
)
from prediction_accuracy.domain.entities.health_status import HealthStatus
from prediction_accuracy.presentation.controllers.predictions_controller import (
    get_prediction,
    record_prediction,
)


@pytest.mark.asyncio
async def test_record_and_fetch_prediction(audit_repository) -> None:
    created = await record_prediction(
        payload=PredictionCreateDTO(predicted_status="warning", confidence=0.7),
        record_prediction_use_case=RecordPredictionUseCase(audit_repository),
    )

    fetched = await get_prediction(
        prediction_id=created.id,
        get_prediction_use_case=GetPredictionUseCase(audit_repository),
    )

    assert fetched.predicted_status is HealthStatus.WARNING
    assert fetched.evaluated is False


@pytest.mark.asyncio
async def test_record_prediction_rejects_invalid_confidence(audit_repository) -> None:
    with pytest.raises(HTTPException) as exc:
        await record_prediction(
            payload=PredictionCreateDTO(predicted_status="HEALTHY", confidence=1.5),
            record_prediction_use_case=RecordPredictionUseCase(audit_repository),
        )

    assert exc.value.status_code == 400
    assert audit_repository.items == {}


@pytest.mark.asyncio
async def test_get_prediction_missing_is_404(audit_repository) -> None:
    with pytest.raises(HTTPException) as exc:
        await get_prediction(
            prediction_id=41,
            get_prediction_use_case=GetPredictionUseCase(audit_repository),
        )

    assert exc.value.status_code == 404


@pytest.mark.asyncio
async def test_unexpected_failure_is_500() -> None:
    class _Fail(RecordPredictionUseCase):
        def __init__(self) -> None:
            pass

        async def execute(self, payload):
            raise RuntimeError("database offline")

    with pytest.raises(HTTPException) as exc:
        await record_prediction(
            payload=PredictionCreateDTO(predicted_status="HEALTHY", confidence=0.5),
            record_prediction_use_case=_Fail(),
        )

    assert exc.value.status_code == 500
