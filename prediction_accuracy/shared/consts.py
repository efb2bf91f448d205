"""Environment names, log levels and metric naming shared by the API and the worker."""

from enum import Enum

METRICS_PREFIX = "ai_prediction"


class EnumEnvironment(str, Enum):
    """Deployment stage; PRODUCTION switches logs to JSON."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"

    @classmethod
    def is_production(cls, environment: str) -> bool:
        """Case-insensitive check of a raw environment name."""
        return environment.lower() == cls.PRODUCTION.value


class EnumLogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"
