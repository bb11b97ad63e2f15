"""Application lifespan: startup and shutdown.

Wiring only: storage root check on startup, background OCR tasks drained
and the DB engine disposed on shutdown.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from fastapi import FastAPI

from recordvault.core.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown."""
    settings = get_settings()

    # ---- Startup ----
    Path(settings.storage_root).mkdir(parents=True, exist_ok=True)
    logger.info("Storage root: %s", settings.storage_root)

    yield

    # ---- Shutdown ----
    from recordvault.application.use_cases.documents.ocr_enrichment import (
        drain_pending_tasks,
    )

    await drain_pending_tasks()

    from recordvault.infrastructure.persistence import database

    if getattr(database, "engine", None) is not None:
        await database.engine.dispose()
        logger.info("Database engine disposed")
