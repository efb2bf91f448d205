"""Raw batch-processing metrics used to reconcile prediction outcomes."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True, slots=True)
class RawMetricSample:
    """One batch run's counters; read-only input to the outcome resolver."""

    timestamp: datetime
    merchant_id: Optional[str]
    processed_count: int
    error_count: int
    processing_time_ms: int = 0
    batch_id: Optional[str] = None
