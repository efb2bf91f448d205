"""
Controllers Package - Presentation Layer

FastAPI routers for predictions, accuracy reports and system endpoints.
"""

from .accuracy_controller import router as accuracy_router
from .predictions_controller import router as predictions_router
from .system_controller import router as system_router

__all__ = ["accuracy_router", "predictions_router", "system_router"]
