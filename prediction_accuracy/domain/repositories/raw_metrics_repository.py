"""Domain Repository Interface - Raw Batch Metrics"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List

from prediction_accuracy.domain.entities.metrics_sample import RawMetricSample


class IRawMetricsRepository(ABC):
    """Read-only access to the batch metrics collected by the pipeline."""

    @abstractmethod
    async def find_samples_between(
        self, start: datetime, end: datetime
    ) -> List[RawMetricSample]:
        """
        Get samples with ``start <= timestamp < end``.

        Args:
            start: Inclusive lower bound
            end: Exclusive upper bound

        Returns:
            List[RawMetricSample]: Samples ordered by timestamp
        """
        pass
