# catalog/core/lifespan.py
from contextlib import asynccontextmanager
from fastapi import FastAPI
from catalog.db import mongo
from catalog.core.config import get_settings

import logging
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()

    # --- Startup ---
    if not settings.MONGO_URI:
        # every catalog route needs the store
        raise RuntimeError("MONGO_URI is not configured")
    await mongo.connect()

    yield

    # --- Shutdown ---
    await mongo.disconnect()
    logger.info("Mongo disconnected")
