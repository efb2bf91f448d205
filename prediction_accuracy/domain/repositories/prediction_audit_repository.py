"""
Domain Repository Interface - Prediction Audit Store

Every prediction made upstream is appended here and later reconciled with
its actual outcome. All time bounds are inclusive lower bounds on
``prediction_time`` unless stated otherwise.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from prediction_accuracy.domain.entities.health_status import HealthStatus
from prediction_accuracy.domain.entities.prediction import PredictionRecord


class IPredictionAuditRepository(ABC):
    """Interface for the prediction audit store."""

    @abstractmethod
    async def create(self, record: PredictionRecord) -> PredictionRecord:
        """
        Append a new audit record, assigning the next id.

        Args:
            record: Record without an id

        Returns:
            PredictionRecord: The stored record with its id set
        """
        pass

    @abstractmethod
    async def find_by_id(self, prediction_id: int) -> Optional[PredictionRecord]:
        """Get a record by id."""
        pass

    @abstractmethod
    async def save(self, record: PredictionRecord) -> PredictionRecord:
        """Replace a record unconditionally."""
        pass

    @abstractmethod
    async def save_outcome_if_pending(self, record: PredictionRecord) -> bool:
        """
        Write the outcome fields only if the stored record is still pending.

        Args:
            record: Record carrying the outcome to persist

        Returns:
            bool: False when another writer evaluated the record first
        """
        pass

    @abstractmethod
    async def find_evaluated_since(self, since: datetime) -> List[PredictionRecord]:
        """Evaluated records made at or after ``since``."""
        pass

    @abstractmethod
    async def find_since(self, since: datetime) -> List[PredictionRecord]:
        """Every record made at or after ``since``, evaluated or not."""
        pass

    @abstractmethod
    async def find_pending_before(self, before: datetime) -> List[PredictionRecord]:
        """Pending records made strictly before ``before``."""
        pass

    @abstractmethod
    async def find_by_model_type_since(
        self, model_type: str, since: datetime
    ) -> List[PredictionRecord]:
        """All records of one model type, evaluated or not."""
        pass

    @abstractmethod
    async def find_evaluated_by_model_type_since(
        self, model_type: str, since: datetime
    ) -> List[PredictionRecord]:
        """Evaluated records of one model type."""
        pass

    @abstractmethod
    async def count_total_since(self, since: datetime) -> int:
        """Count all records, evaluated or not."""
        pass

    @abstractmethod
    async def find_high_confidence_errors(
        self, min_confidence: float, since: datetime
    ) -> List[PredictionRecord]:
        """Incorrect evaluated records with confidence >= ``min_confidence``, newest first."""
        pass

    @abstractmethod
    async def count_misclassifications(
        self, predicted: HealthStatus, actual: HealthStatus, since: datetime
    ) -> int:
        """Count evaluated records with the given predicted/actual pair."""
        pass

    @abstractmethod
    async def find_misclassifications(
        self, predicted: HealthStatus, actual: HealthStatus, since: datetime
    ) -> List[PredictionRecord]:
        """Evaluated records with the given predicted/actual pair."""
        pass

    @abstractmethod
    async def average_confidence_by_model_type(
        self, model_type: str, since: datetime
    ) -> Optional[float]:
        """Mean confidence of all records of a model type, None if there are none."""
        pass

    @abstractmethod
    async def average_response_time_by_model_type(
        self, model_type: str, since: datetime
    ) -> Optional[float]:
        """Mean ``response_time_ms`` over records that carry one."""
        pass

    @abstractmethod
    async def count_errors_by_model_type(self, model_type: str, since: datetime) -> int:
        """Count records of a model type flagged ``is_error``."""
        pass
