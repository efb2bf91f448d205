"""
Shared module - Cross-cutting concerns / Shared Layer

This module provides the utilities, constants and enums used across
multiple layers of the accuracy engine:
- Environment names and log levels
- structlog configuration and logger factory
- prometheus_client collectors for outcomes and accuracy

Following Clean Architecture principles the shared module must not depend
on Infrastructure or Frameworks.
"""

from .consts import EnumEnvironment, EnumLogLevel
from .logging import configure_logging, get_logger, update_logging_from_settings
from .metrics import publish_accuracy, record_outcome_metric, render_latest

__all__ = [
    "EnumEnvironment",
    "EnumLogLevel",
    "configure_logging",
    "get_logger",
    "update_logging_from_settings",
    "record_outcome_metric",
    "publish_accuracy",
    "render_latest",
]
