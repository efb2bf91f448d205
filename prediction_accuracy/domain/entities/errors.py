"""
Domain Errors

This module defines custom error classes for domain-specific exceptions.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class PredictionNotFoundError(DomainError):
    """Raised when a prediction audit record cannot be found."""

    def __init__(self, prediction_id: int, details: Optional[Dict[str, Any]] = None):
        self.prediction_id = prediction_id
        message = f"Prediction with ID {prediction_id} not found"
        super().__init__(message, details)


class PredictionValidationError(DomainError):
    """Raised when a prediction record or outcome payload is invalid."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class InvalidAnalysisWindowError(DomainError):
    """Raised when a report is requested over a window shorter than one day."""

    def __init__(self, window_days: int, details: Optional[Dict[str, Any]] = None):
        self.window_days = window_days
        message = f"Analysis window must be at least 1 day, got {window_days}"
        super().__init__(message, details)
