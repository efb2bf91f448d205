"""Shared Celery infrastructure components."""

import structlog
from celery import Task

logger = structlog.get_logger(__name__)


class CallbackTask(Task):
    """Base task class that logs the outcome of every task run."""

    def on_success(self, retval, task_id, args, kwargs):
        logger.info("task.succeeded", task=self.name, task_id=task_id, result=retval)

    def on_failure(self, exc, task_id, args, kwargs, einfo):
        logger.error(
            "task.failed",
            task=self.name,
            task_id=task_id,
            error=str(exc),
            traceback=einfo.traceback,
            exc_info=exc,
        )
