"""Application factory that wires settings, storage and the HTTP API."""
from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

from fastapi import FastAPI

from .api import create_app
from .config import Settings, load_settings
from .database import Database, resolve_database_path

logger = logging.getLogger("taskboard.application")


def create_application(
    *,
    config_path: Optional[Path] = None,
    database_path: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Create the ASGI application from the environment and configuration file.

    Suitable for ``uvicorn --factory taskboard.application:create_application``.
    """

    if settings is None:
        settings = load_settings(config_path)
    if database_path:
        settings = replace(settings, database_path=resolve_database_path(database_path))

    database = Database(settings.database_path)
    logger.info(
        "Using database at %s (atomic registration %s)",
        settings.database_path,
        "enabled" if settings.atomic_registration else "disabled",
    )
    return create_app(database=database, settings=settings)


__all__ = ["create_application"]
