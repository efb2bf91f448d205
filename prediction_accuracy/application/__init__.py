"""
Application Layer Package

Use cases that orchestrate the audit store and the domain services, and the
DTOs they return.
"""

from prediction_accuracy.application import dtos, models, use_cases

__all__ = ["dtos", "use_cases", "models"]
