"""Celery tasks of the accuracy worker."""
