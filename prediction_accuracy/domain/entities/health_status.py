"""
Domain Entities - Health Status

The closed classification used both for predictions and for the ground
truth reconciled from raw batch metrics.
"""

from enum import Enum
from typing import List


class HealthStatus(str, Enum):
    """Operational health of the batch pipeline, ordered by severity."""

    HEALTHY = "HEALTHY"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"
    UNKNOWN = "UNKNOWN"

    @property
    def severity(self) -> int:
        """Ordinal severity; UNKNOWN sorts below HEALTHY."""
        return _SEVERITY[self]

    @classmethod
    def ordered(cls) -> List["HealthStatus"]:
        """Fixed class order used for confusion matrix rows and columns."""
        return [cls.HEALTHY, cls.WARNING, cls.CRITICAL, cls.UNKNOWN]


_SEVERITY = {
    HealthStatus.UNKNOWN: -1,
    HealthStatus.HEALTHY: 0,
    HealthStatus.WARNING: 1,
    HealthStatus.CRITICAL: 2,
}
