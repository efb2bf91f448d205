"""
Domain Layer

Entities, repository interfaces and the pure services that score
predictions against reconciled outcomes. Only numpy, scikit-learn and
scipy are imported here.
"""

from prediction_accuracy.domain import entities, ports, repositories, services

__all__ = ["entities", "repositories", "services", "ports"]
