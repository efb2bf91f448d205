"""
Infrastructure Repository - Batch Metrics MongoDB Implementation
"""

from datetime import datetime
from typing import Any, Dict, List

import structlog
from pymongo.errors import PyMongoError

from prediction_accuracy.domain.entities.metrics_sample import RawMetricSample
from prediction_accuracy.domain.repositories.raw_metrics_repository import (
    IRawMetricsRepository,
)
from prediction_accuracy.infrastructure.database.mongo_database import (
    BATCH_METRICS,
    MongoDatabase,
)

logger = structlog.get_logger(__name__)


class RawMetricsRepository(IRawMetricsRepository):
    """Reads batch run counters written by the pipeline."""

    def __init__(self, database: MongoDatabase):
        self.database = database
        self.collection_name = BATCH_METRICS

    async def find_samples_between(
        self, start: datetime, end: datetime
    ) -> List[RawMetricSample]:
        try:
            documents = await self.database.find_many(
                self.collection_name,
                {"timestamp": {"$gte": start, "$lt": end}},
                sort_by="timestamp",
            )
        except PyMongoError as e:
            logger.error(
                "metrics.query_failed",
                start=start.isoformat(),
                end=end.isoformat(),
                error=str(e),
            )
            raise e
        return [self._from_document(doc) for doc in documents]

    def _from_document(self, document: Dict[str, Any]) -> RawMetricSample:
        return RawMetricSample(
            timestamp=document["timestamp"],
            merchant_id=document.get("merchant_id"),
            processed_count=int(document.get("processed_count") or 0),
            error_count=int(document.get("error_count") or 0),
            processing_time_ms=int(document.get("processing_time_ms") or 0),
            batch_id=document.get("batch_id"),
        )
