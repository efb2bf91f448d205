"""
Main module - Composition Root Layer

Loads configuration, assembles the dependency graph and starts either
the FastAPI application or the Celery evaluation worker.
"""

from .config import AppSettings, get_settings
from .container import AppContainer, get_container, init_container

__all__ = [
    "AppSettings",
    "get_settings",
    "AppContainer",
    "init_container",
    "get_container",
]
