"""
Infrastructure Layer Package

MongoDB repositories, Celery worker tasks and dependency health checks
implementing the interfaces defined by the domain layer.
"""

from prediction_accuracy.infrastructure import repositories

__all__ = ["repositories"]
