"""
Services Package - Infrastructure Layer

Celery application, tasks and dependency health checks.
"""
