"""
Repositories Package - Infrastructure Layer

MongoDB implementations of the domain repository interfaces.
"""

from .prediction_audit_repository import PredictionAuditRepository
from .raw_metrics_repository import RawMetricsRepository

__all__ = ["PredictionAuditRepository", "RawMetricsRepository"]
