"""Ports implemented by the infrastructure layer."""

from .health_check import IHealthCheckService

__all__ = ["IHealthCheckService"]
