from __future__ import annotations

import copy
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, Iterator, List, Optional, Sequence

import pytest

from prediction_accuracy.application.models import EvaluationPolicy
from prediction_accuracy.domain.entities.health_status import HealthStatus
from prediction_accuracy.domain.entities.metrics_sample import RawMetricSample
from prediction_accuracy.domain.entities.prediction import PredictionRecord
from prediction_accuracy.domain.repositories.prediction_audit_repository import (
    IPredictionAuditRepository,
)
from prediction_accuracy.domain.repositories.raw_metrics_repository import (
    IRawMetricsRepository,
)

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def make_record(
    predicted: HealthStatus,
    actual: Optional[HealthStatus] = None,
    *,
    confidence: float = 0.8,
    hours_ago: float = 24,
    model_type: str = "AI",
    now: Optional[datetime] = None,
    **fields: Any,
) -> PredictionRecord:
    """Build a record ``hours_ago`` in the past, evaluated when ``actual`` is set."""
    reference = now or datetime.now(timezone.utc)
    record = PredictionRecord(
        predicted_status=predicted,
        confidence=confidence,
        prediction_time=reference - timedelta(hours=hours_ago),
        model_type=model_type,
        **fields,
    )
    if actual is not None:
        record.record_outcome(actual, at=reference)
    return record


# ---------------------------------------------------------------------------
# In-memory repositories
# ---------------------------------------------------------------------------


class InMemoryPredictionAuditRepository(IPredictionAuditRepository):
    """Audit store keeping private copies, like a real database would."""

    def __init__(self, records: Sequence[PredictionRecord] = ()) -> None:
        self.items: Dict[int, PredictionRecord] = {}
        self._sequence = 0
        self.saved: List[int] = []
        self.conditional_writes: List[int] = []
        for record in records:
            self._store(record)

    def _store(self, record: PredictionRecord) -> PredictionRecord:
        if record.id is None:
            self._sequence += 1
            record.id = self._sequence
        else:
            self._sequence = max(self._sequence, record.id)
        self.items[record.id] = copy.deepcopy(record)
        return record

    def _select(self, predicate) -> List[PredictionRecord]:
        selected = [r for r in self.items.values() if predicate(r)]
        selected.sort(key=lambda r: r.prediction_time)
        return [copy.deepcopy(r) for r in selected]

    async def create(self, record: PredictionRecord) -> PredictionRecord:
        record.id = None
        return self._store(record)

    async def find_by_id(self, prediction_id: int) -> Optional[PredictionRecord]:
        record = self.items.get(prediction_id)
        return copy.deepcopy(record) if record else None

    async def save(self, record: PredictionRecord) -> PredictionRecord:
        self.items[record.id] = copy.deepcopy(record)
        self.saved.append(record.id)
        return record

    async def save_outcome_if_pending(self, record: PredictionRecord) -> bool:
        stored = self.items.get(record.id)
        if stored is None or stored.actual_outcome is not None:
            return False
        self.items[record.id] = copy.deepcopy(record)
        self.conditional_writes.append(record.id)
        return True

    async def find_evaluated_since(self, since: datetime) -> List[PredictionRecord]:
        return self._select(lambda r: r.prediction_time >= since and r.is_evaluated)

    async def find_since(self, since: datetime) -> List[PredictionRecord]:
        return self._select(lambda r: r.prediction_time >= since)

    async def find_pending_before(self, before: datetime) -> List[PredictionRecord]:
        return self._select(
            lambda r: r.prediction_time < before and not r.is_evaluated
        )

    async def find_by_model_type_since(
        self, model_type: str, since: datetime
    ) -> List[PredictionRecord]:
        return self._select(
            lambda r: r.prediction_time >= since and r.model_type == model_type
        )

    async def find_evaluated_by_model_type_since(
        self, model_type: str, since: datetime
    ) -> List[PredictionRecord]:
        return self._select(
            lambda r: r.prediction_time >= since
            and r.model_type == model_type
            and r.is_evaluated
        )

    async def count_total_since(self, since: datetime) -> int:
        return len(self._select(lambda r: r.prediction_time >= since))

    async def find_high_confidence_errors(
        self, min_confidence: float, since: datetime
    ) -> List[PredictionRecord]:
        found = self._select(
            lambda r: r.prediction_time >= since
            and r.is_correct is False
            and r.confidence >= min_confidence
        )
        return list(reversed(found))

    async def count_misclassifications(
        self, predicted: HealthStatus, actual: HealthStatus, since: datetime
    ) -> int:
        return len(await self.find_misclassifications(predicted, actual, since))

    async def find_misclassifications(
        self, predicted: HealthStatus, actual: HealthStatus, since: datetime
    ) -> List[PredictionRecord]:
        return self._select(
            lambda r: r.prediction_time >= since
            and r.predicted_status == predicted
            and r.actual_outcome == actual
        )

    async def average_confidence_by_model_type(
        self, model_type: str, since: datetime
    ) -> Optional[float]:
        records = await self.find_by_model_type_since(model_type, since)
        if not records:
            return None
        return sum(r.confidence for r in records) / len(records)

    async def average_response_time_by_model_type(
        self, model_type: str, since: datetime
    ) -> Optional[float]:
        times = [
            r.response_time_ms
            for r in await self.find_by_model_type_since(model_type, since)
            if r.response_time_ms is not None
        ]
        return sum(times) / len(times) if times else None

    async def count_errors_by_model_type(self, model_type: str, since: datetime) -> int:
        records = await self.find_by_model_type_since(model_type, since)
        return sum(1 for r in records if r.is_error)


class InMemoryRawMetricsRepository(IRawMetricsRepository):
    def __init__(self, samples: Sequence[RawMetricSample] = ()) -> None:
        self.samples = list(samples)
        self.queries: List[tuple] = []

    async def find_samples_between(
        self, start: datetime, end: datetime
    ) -> List[RawMetricSample]:
        self.queries.append((start, end))
        return [s for s in self.samples if start <= s.timestamp < end]


@pytest.fixture()
def audit_repository() -> InMemoryPredictionAuditRepository:
    return InMemoryPredictionAuditRepository()


@pytest.fixture()
def metrics_repository() -> InMemoryRawMetricsRepository:
    return InMemoryRawMetricsRepository()


@pytest.fixture()
def policy() -> EvaluationPolicy:
    return EvaluationPolicy()


@pytest.fixture()
def dummy_now() -> datetime:
    return datetime.now(timezone.utc)


@pytest.fixture()
def scenario_records(dummy_now: datetime) -> List[PredictionRecord]:
    """Four correct and one WARNING-for-HEALTHY miss."""
    H, W, C = HealthStatus.HEALTHY, HealthStatus.WARNING, HealthStatus.CRITICAL
    pairs = [(H, H), (H, H), (W, W), (W, H), (C, C)]
    return [
        make_record(predicted, actual, hours_ago=12 + i, now=dummy_now)
        for i, (predicted, actual) in enumerate(pairs)
    ]


# ---------------------------------------------------------------------------
# Fake MongoDB
# ---------------------------------------------------------------------------


def _matches_condition(value: Any, condition: Any) -> bool:
    if isinstance(condition, dict) and any(k.startswith("$") for k in condition):
        for operator, operand in condition.items():
            if operator == "$gte" and not (value is not None and value >= operand):
                return False
            if operator == "$lt" and not (value is not None and value < operand):
                return False
            if operator == "$ne" and value == operand:
                return False
        return True
    return value == condition


def matches(document: Dict[str, Any], query: Dict[str, Any]) -> bool:
    return all(
        _matches_condition(document.get(key), condition)
        for key, condition in query.items()
    )


class FakeCursor:
    def __init__(self, documents: Sequence[Dict[str, Any]]):
        self._documents = list(documents)
        self._limit: Optional[int] = None

    def sort(self, key: str, direction: int = 1) -> "FakeCursor":
        self._documents.sort(key=lambda d: d.get(key), reverse=direction < 0)
        return self

    def limit(self, amount: int) -> "FakeCursor":
        self._limit = amount
        return self

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        docs = self._documents
        if self._limit is not None:
            docs = docs[: self._limit]
        return iter(copy.deepcopy(docs))


class FakeCollection:
    def __init__(self) -> None:
        self.documents: List[Dict[str, Any]] = []
        self.last_query: Optional[Dict[str, Any]] = None
        self.dropped_indexes: List[str] = []
        self.created_indexes: List[tuple] = []

    def find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        self.last_query = query
        for document in self.documents:
            if matches(document, query):
                return copy.deepcopy(document)
        return None

    def find(self, query: Dict[str, Any]) -> FakeCursor:
        self.last_query = query
        return FakeCursor([d for d in self.documents if matches(d, query)])

    def insert_one(self, document: Dict[str, Any]) -> Any:
        self.documents.append(copy.deepcopy(document))
        return SimpleNamespace(acknowledged=True, inserted_id=document.get("id"))

    def replace_one(self, query: Dict[str, Any], document: Dict[str, Any]) -> Any:
        for idx, existing in enumerate(self.documents):
            if matches(existing, query):
                self.documents[idx] = copy.deepcopy(document)
                return SimpleNamespace(matched_count=1, modified_count=1)
        return SimpleNamespace(matched_count=0, modified_count=0)

    def update_one(self, query: Dict[str, Any], update: Dict[str, Any]) -> Any:
        self.last_query = query
        for existing in self.documents:
            if matches(existing, query):
                existing.update(copy.deepcopy(update.get("$set", {})))
                return SimpleNamespace(matched_count=1, modified_count=1)
        return SimpleNamespace(matched_count=0, modified_count=0)

    def count_documents(self, query: Dict[str, Any]) -> int:
        self.last_query = query
        return sum(1 for d in self.documents if matches(d, query))

    def aggregate(self, pipeline: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        match = pipeline[0]["$match"]
        field = pipeline[1]["$group"]["value"]["$avg"].lstrip("$")
        values = [
            d[field] for d in self.documents if matches(d, match) and d.get(field) is not None
        ]
        if not values:
            return []
        return [{"_id": None, "value": sum(values) / len(values)}]

    def find_one_and_update(
        self, query: Dict[str, Any], update: Dict[str, Any], **kwargs: Any
    ) -> Dict[str, Any]:
        document = next((d for d in self.documents if matches(d, query)), None)
        if document is None:
            document = dict(query)
            self.documents.append(document)
        for key, amount in update.get("$inc", {}).items():
            document[key] = document.get(key, 0) + amount
        return copy.deepcopy(document)

    def drop_index(self, index_name: str) -> None:
        self.dropped_indexes.append(index_name)

    def create_index(self, keys: Any, name: Optional[str] = None, **kwargs: Any) -> Any:
        self.created_indexes.append((keys, name, kwargs))
        return name or keys


class FakeMongoDatabase:
    """Stands in for ``MongoDatabase`` in repository tests."""

    def __init__(self) -> None:
        self.collections: Dict[str, FakeCollection] = {}
        self.closed = False

    def get_collection(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())

    async def find_one(self, collection_name: str, query: Dict[str, Any]) -> Any:
        return self.get_collection(collection_name).find_one(query)

    async def find_many(
        self,
        collection_name: str,
        query: Dict[str, Any],
        sort_by: Optional[str] = None,
        sort_direction: int = 1,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        cursor = self.get_collection(collection_name).find(query)
        if sort_by:
            cursor.sort(sort_by, sort_direction)
        if limit:
            cursor.limit(limit)
        return list(cursor)

    async def next_sequence(self, name: str) -> int:
        counter = self.get_collection("counters").find_one_and_update(
            {"_id": name}, {"$inc": {"seq": 1}}
        )
        return int(counter["seq"])

    async def create_indexes(self) -> None:  # pragma: no cover - stub for tests
        pass

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def fake_mongo_database() -> FakeMongoDatabase:
    return FakeMongoDatabase()
