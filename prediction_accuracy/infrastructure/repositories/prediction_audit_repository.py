"""
Infrastructure Repository - Prediction Audit MongoDB Implementation

Records live in the ``prediction_audits`` collection keyed by an integer
``id`` drawn from the ``counters`` collection.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

import structlog
from pymongo.errors import PyMongoError

from prediction_accuracy.domain.entities.errors import PredictionNotFoundError
from prediction_accuracy.domain.entities.health_status import HealthStatus
from prediction_accuracy.domain.entities.prediction import PredictionRecord
from prediction_accuracy.domain.repositories.prediction_audit_repository import (
    IPredictionAuditRepository,
)
from prediction_accuracy.infrastructure.database.mongo_database import (
    PREDICTION_AUDITS,
    MongoDatabase,
)

logger = structlog.get_logger(__name__)

_OUTCOME_FIELDS = (
    "actual_outcome",
    "is_correct",
    "actual_error_rate",
    "outcome_timestamp",
    "evaluation_notes",
)


def _since(since: datetime) -> Dict[str, Any]:
    return {"prediction_time": {"$gte": since}}


class PredictionAuditRepository(IPredictionAuditRepository):
    """MongoDB implementation of the prediction audit store."""

    def __init__(self, database: MongoDatabase):
        self.database = database
        self.collection_name = PREDICTION_AUDITS

    @property
    def _collection(self):
        return self.database.get_collection(self.collection_name)

    async def create(self, record: PredictionRecord) -> PredictionRecord:
        try:
            record.id = await self.database.next_sequence(self.collection_name)
            self._collection.insert_one(self._to_document(record))
            return record
        except PyMongoError as e:
            logger.error("audit.create_failed", error=str(e))
            raise e

    async def find_by_id(self, prediction_id: int) -> Optional[PredictionRecord]:
        try:
            document = await self.database.find_one(
                self.collection_name, {"id": prediction_id}
            )
            return self._from_document(document) if document else None
        except PyMongoError as e:
            logger.error(
                "audit.find_failed", prediction_id=prediction_id, error=str(e)
            )
            raise e

    async def save(self, record: PredictionRecord) -> PredictionRecord:
        try:
            result = self._collection.replace_one(
                {"id": record.id}, self._to_document(record)
            )
        except PyMongoError as e:
            logger.error("audit.save_failed", prediction_id=record.id, error=str(e))
            raise e
        if result.matched_count == 0:
            raise PredictionNotFoundError(record.id)
        return record

    async def save_outcome_if_pending(self, record: PredictionRecord) -> bool:
        document = self._to_document(record)
        update = {field: document[field] for field in _OUTCOME_FIELDS}
        try:
            result = self._collection.update_one(
                {"id": record.id, "actual_outcome": None}, {"$set": update}
            )
        except PyMongoError as e:
            logger.error(
                "audit.outcome_write_failed", prediction_id=record.id, error=str(e)
            )
            raise e
        return result.modified_count == 1

    async def _find(
        self, query: Dict[str, Any], newest_first: bool = False
    ) -> List[PredictionRecord]:
        try:
            documents = await self.database.find_many(
                self.collection_name,
                query,
                sort_by="prediction_time",
                sort_direction=-1 if newest_first else 1,
            )
            return [self._from_document(doc) for doc in documents]
        except PyMongoError as e:
            logger.error("audit.query_failed", query=str(query), error=str(e))
            raise e

    async def _count(self, query: Dict[str, Any]) -> int:
        try:
            return int(self._collection.count_documents(query))
        except PyMongoError as e:
            logger.error("audit.count_failed", query=str(query), error=str(e))
            raise e

    async def _average(self, field: str, query: Dict[str, Any]) -> Optional[float]:
        pipeline = [
            {"$match": {**query, field: {"$ne": None}}},
            {"$group": {"_id": None, "value": {"$avg": f"${field}"}}},
        ]
        try:
            rows = list(self._collection.aggregate(pipeline))
        except PyMongoError as e:
            logger.error("audit.aggregate_failed", field=field, error=str(e))
            raise e
        if not rows or rows[0].get("value") is None:
            return None
        return float(rows[0]["value"])

    async def find_evaluated_since(self, since: datetime) -> List[PredictionRecord]:
        return await self._find({**_since(since), "actual_outcome": {"$ne": None}})

    async def find_since(self, since: datetime) -> List[PredictionRecord]:
        return await self._find(_since(since))

    async def find_pending_before(self, before: datetime) -> List[PredictionRecord]:
        return await self._find(
            {"prediction_time": {"$lt": before}, "actual_outcome": None}
        )

    async def find_by_model_type_since(
        self, model_type: str, since: datetime
    ) -> List[PredictionRecord]:
        return await self._find({**_since(since), "model_type": model_type})

    async def find_evaluated_by_model_type_since(
        self, model_type: str, since: datetime
    ) -> List[PredictionRecord]:
        return await self._find(
            {**_since(since), "model_type": model_type, "actual_outcome": {"$ne": None}}
        )

    async def count_total_since(self, since: datetime) -> int:
        return await self._count(_since(since))

    async def find_high_confidence_errors(
        self, min_confidence: float, since: datetime
    ) -> List[PredictionRecord]:
        return await self._find(
            {
                **_since(since),
                "is_correct": False,
                "confidence": {"$gte": min_confidence},
            },
            newest_first=True,
        )

    async def count_misclassifications(
        self, predicted: HealthStatus, actual: HealthStatus, since: datetime
    ) -> int:
        return await self._count(
            {
                **_since(since),
                "predicted_status": predicted.value,
                "actual_outcome": actual.value,
            }
        )

    async def find_misclassifications(
        self, predicted: HealthStatus, actual: HealthStatus, since: datetime
    ) -> List[PredictionRecord]:
        return await self._find(
            {
                **_since(since),
                "predicted_status": predicted.value,
                "actual_outcome": actual.value,
            }
        )

    async def average_confidence_by_model_type(
        self, model_type: str, since: datetime
    ) -> Optional[float]:
        return await self._average(
            "confidence", {**_since(since), "model_type": model_type}
        )

    async def average_response_time_by_model_type(
        self, model_type: str, since: datetime
    ) -> Optional[float]:
        return await self._average(
            "response_time_ms", {**_since(since), "model_type": model_type}
        )

    async def count_errors_by_model_type(self, model_type: str, since: datetime) -> int:
        return await self._count(
            {**_since(since), "model_type": model_type, "is_error": True}
        )

    def _to_document(self, record: PredictionRecord) -> Dict[str, Any]:
        return {
            "id": record.id,
            "prediction_time": record.prediction_time,
            "predicted_status": record.predicted_status.value,
            "confidence": record.confidence,
            "time_horizon_hours": record.time_horizon_hours,
            "model_type": record.model_type,
            "predicted_error_rate": record.predicted_error_rate,
            "actual_outcome": (
                record.actual_outcome.value if record.actual_outcome else None
            ),
            "is_correct": record.is_correct,
            "actual_error_rate": record.actual_error_rate,
            "outcome_timestamp": record.outcome_timestamp,
            "evaluation_notes": record.evaluation_notes,
            "merchant_id": record.merchant_id,
            "reasoning": record.reasoning,
            "prompt_version": record.prompt_version,
            "response_time_ms": record.response_time_ms,
            "is_error": record.is_error,
            "error_message": record.error_message,
            "is_ab_test": record.is_ab_test,
            "ab_test_group": record.ab_test_group,
            "created_at": record.created_at,
        }

    def _from_document(self, document: Dict[str, Any]) -> PredictionRecord:
        outcome = document.get("actual_outcome")
        return PredictionRecord(
            id=document["id"],
            prediction_time=document["prediction_time"],
            predicted_status=HealthStatus(document["predicted_status"]),
            confidence=float(document["confidence"]),
            time_horizon_hours=int(document.get("time_horizon_hours") or 6),
            model_type=document.get("model_type", "AI"),
            predicted_error_rate=document.get("predicted_error_rate"),
            actual_outcome=HealthStatus(outcome) if outcome else None,
            is_correct=document.get("is_correct"),
            actual_error_rate=document.get("actual_error_rate"),
            outcome_timestamp=document.get("outcome_timestamp"),
            evaluation_notes=document.get("evaluation_notes"),
            merchant_id=document.get("merchant_id"),
            reasoning=document.get("reasoning"),
            prompt_version=document.get("prompt_version"),
            response_time_ms=document.get("response_time_ms"),
            is_error=bool(document.get("is_error", False)),
            error_message=document.get("error_message"),
            is_ab_test=bool(document.get("is_ab_test", False)),
            ab_test_group=document.get("ab_test_group"),
            created_at=document.get("created_at") or document["prediction_time"],
        )
