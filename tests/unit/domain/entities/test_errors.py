from __future__ import annotations

from prediction_accuracy.domain.entities.errors import (
    DomainError,
    InvalidAnalysisWindowError,
    PredictionNotFoundError,
    PredictionValidationError,
)


def test_not_found_error_carries_id() -> None:
    error = PredictionNotFoundError(42)

    assert isinstance(error, DomainError)
    assert error.prediction_id == 42
    assert "42" in error.message


def test_validation_error_keeps_details() -> None:
    error = PredictionValidationError("bad", details={"errors": ["x"]})

    assert error.details == {"errors": ["x"]}
    assert str(error) == "bad"


def test_invalid_window_error_message() -> None:
    error = InvalidAnalysisWindowError(0)

    assert error.window_days == 0
    assert error.details == {}
    assert "at least 1 day" in error.message
