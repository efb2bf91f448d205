"""
Repositories Package

Interfaces for the prediction audit store and the raw metrics store.
Implementations live in the infrastructure layer.
"""

from .prediction_audit_repository import IPredictionAuditRepository
from .raw_metrics_repository import IRawMetricsRepository

__all__ = ["IPredictionAuditRepository", "IRawMetricsRepository"]
