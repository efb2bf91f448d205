from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import cast

import pytest

from prediction_accuracy.infrastructure.database.mongo_database import (
    BATCH_METRICS,
    MongoDatabase,
)
from prediction_accuracy.infrastructure.repositories.raw_metrics_repository import (
    RawMetricsRepository,
)

_START = datetime(2024, 5, 1, 6, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_find_samples_between_is_half_open(fake_mongo_database) -> None:
    collection = fake_mongo_database.get_collection(BATCH_METRICS)
    end = _START + timedelta(hours=6)
    for offset, processed in ((timedelta(0), 10), (timedelta(hours=3), 20), (timedelta(hours=6), 30)):
        collection.insert_one(
            {
                "timestamp": _START + offset,
                "merchant_id": "M-1",
                "processed_count": processed,
                "error_count": 1,
                "batch_id": f"b-{processed}",
            }
        )
    repository = RawMetricsRepository(cast(MongoDatabase, fake_mongo_database))

    samples = await repository.find_samples_between(_START, end)

    assert [s.processed_count for s in samples] == [10, 20]
    assert samples[0].batch_id == "b-10"
    assert samples[0].processing_time_ms == 0


@pytest.mark.asyncio
async def test_missing_counters_default_to_zero(fake_mongo_database) -> None:
    fake_mongo_database.get_collection(BATCH_METRICS).insert_one({"timestamp": _START})
    repository = RawMetricsRepository(cast(MongoDatabase, fake_mongo_database))

    samples = await repository.find_samples_between(_START, _START + timedelta(hours=1))

    assert samples[0].processed_count == 0
    assert samples[0].error_count == 0
    assert samples[0].merchant_id is None
