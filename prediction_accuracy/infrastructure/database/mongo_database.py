"""
MongoDB Database - Infrastructure Layer

Thin MongoDB client shared by the repositories. Datetimes are stored as
native BSON dates in UTC and read back timezone-aware.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import pymongo.errors
import structlog
from pymongo import ASCENDING, MongoClient, ReturnDocument
from pymongo.collection import Collection
from pymongo.database import Database

logger = structlog.get_logger(__name__)

PREDICTION_AUDITS = "prediction_audits"
BATCH_METRICS = "batch_metrics"
COUNTERS = "counters"

IndexKeys = Union[str, Sequence[Tuple[str, int]]]

_INDEXES: Dict[str, List[Tuple[IndexKeys, str, bool]]] = {
    PREDICTION_AUDITS: [
        ("id", "id_unique_idx", True),
        ("prediction_time", "prediction_time_idx", False),
        (
            [("model_type", ASCENDING), ("prediction_time", ASCENDING)],
            "model_type_time_idx",
            False,
        ),
        (
            [("actual_outcome", ASCENDING), ("prediction_time", ASCENDING)],
            "outcome_time_idx",
            False,
        ),
        (
            [("predicted_status", ASCENDING), ("actual_outcome", ASCENDING)],
            "predicted_actual_idx",
            False,
        ),
    ],
    BATCH_METRICS: [("timestamp", "timestamp_idx", False)],
}


class MongoDatabase:
    """MongoDB database client."""

    def __init__(self, mongo_uri: str, db_name: str):
        """
        Initialize the MongoDB database client.

        Args:
            mongo_uri: MongoDB connection URI
            db_name: Name of the database to use
        """
        self.client: MongoClient = MongoClient(mongo_uri, tz_aware=True)
        self.db: Database = self.client[db_name]

    def get_collection(self, collection_name: str) -> Collection:
        return self.db[collection_name]

    async def find_one(
        self, collection_name: str, query: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        return self.db[collection_name].find_one(query)

    async def find_many(
        self,
        collection_name: str,
        query: Dict[str, Any],
        sort_by: Optional[str] = None,
        sort_direction: int = 1,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Find documents in a collection.

        Args:
            collection_name: Name of the collection
            query: Query to match documents
            sort_by: Field to sort by
            sort_direction: Sort direction (1 for ascending, -1 for descending)
            limit: Maximum number of documents to return, all if None

        Returns:
            List of documents
        """
        cursor = self.db[collection_name].find(query)
        if sort_by:
            cursor = cursor.sort(sort_by, sort_direction)
        if limit:
            cursor = cursor.limit(limit)
        return list(cursor)

    async def next_sequence(self, name: str) -> int:
        """
        Atomically increment and return a named counter.

        Args:
            name: Counter name, usually the collection it numbers

        Returns:
            The next value, starting at 1
        """
        counter = self.db[COUNTERS].find_one_and_update(
            {"_id": name},
            {"$inc": {"seq": 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return int(counter["seq"])

    def ping(self) -> Dict[str, Any]:
        return self.client.admin.command("ping")

    def close(self) -> None:
        """Close the database connection."""
        self.client.close()

    def _safe_drop_index(self, collection_name: str, index_name: str) -> None:
        try:
            self.db[collection_name].drop_index(index_name)
        except pymongo.errors.OperationFailure:
            # Index doesn't exist, nothing to do
            pass

    async def create_indexes(self) -> None:
        """
        Create the indexes used by the audit and metrics queries.
        Called once during application startup.
        """
        for collection_name, indexes in _INDEXES.items():
            for keys, name, unique in indexes:
                self._safe_drop_index(collection_name, name)
                try:
                    self.db[collection_name].create_index(
                        keys, name=name, unique=unique, background=True
                    )
                except pymongo.errors.OperationFailure as e:
                    logger.warning(
                        "mongo.index_creation_failed",
                        collection=collection_name,
                        index=name,
                        error=str(e),
                    )
