#!/usr/bin/env python3
"""
Worker Entry Point - Main Layer

Starts the Celery worker consuming the evaluation queue, with the embedded
beat scheduler that triggers the pending-prediction reconciliation.
"""

import os

from prediction_accuracy.main.config import get_settings
from prediction_accuracy.shared import (
    configure_logging,
    get_logger,
    update_logging_from_settings,
)

configure_logging()

settings = get_settings()

update_logging_from_settings(settings)

logger = get_logger(__name__)


def create_worker():
    """
    Configure and return the Celery worker.

    Application settings are exported to the environment first so that
    the task module, which reads its own lightweight settings, sees the
    same database and thresholds.
    """
    settings = get_settings()

    os.environ.setdefault("CELERY_BROKER_URL", settings.celery.broker_url)
    os.environ.setdefault("CELERY_RESULT_BACKEND", settings.celery.result_backend_url)
    os.environ.setdefault("DB_MONGO_URI", settings.database.mongo_uri)
    os.environ.setdefault("DB_DATABASE_NAME", settings.database.database_name)
    os.environ.setdefault(
        "ACCURACY_DEFAULT_HORIZON_HOURS", str(settings.accuracy.default_horizon_hours)
    )
    os.environ.setdefault(
        "ACCURACY_WARNING_THRESHOLD", str(settings.accuracy.warning_threshold)
    )
    os.environ.setdefault(
        "ACCURACY_CRITICAL_THRESHOLD", str(settings.accuracy.critical_threshold)
    )

    from prediction_accuracy.infrastructure.services.celery_config import (
        create_celery_app,
    )

    worker_app = create_celery_app(
        broker_url=settings.celery.broker_url,
        backend_url=settings.celery.result_backend_url,
        evaluation_interval_seconds=settings.accuracy.evaluation_interval_seconds,
    )

    logger.info(
        "Configuring Celery worker",
        broker_url=settings.celery.broker_url,
        backend_url=settings.celery.result_backend_url,
        evaluation_interval_seconds=settings.accuracy.evaluation_interval_seconds,
        app_name=worker_app.main,
    )

    return worker_app


def main():
    """Main entry point for Celery worker."""

    logger.info("Starting Celery worker")

    worker_app = create_worker()

    worker_app.worker_main(
        [
            "worker",
            "--beat",
            "--loglevel=info",
            "--queues=accuracy_evaluation",
            "--concurrency=1",
        ]
    )


if __name__ == "__main__":
    main()
