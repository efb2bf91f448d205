"""
Database Package - Infrastructure Layer

MongoDB client and collection names.
"""

from .mongo_database import BATCH_METRICS, COUNTERS, PREDICTION_AUDITS, MongoDatabase

__all__ = ["MongoDatabase", "PREDICTION_AUDITS", "BATCH_METRICS", "COUNTERS"]
