# catalog/db/mongo.py
"""
Process-wide Motor client for the catalog database.

`connect()` runs once from the lifespan; routes reach the database through
`get_db()` (wrapped by the api deps). Motor connects lazily, so an
unreachable server at startup is logged and the first query fails with a
store error instead of the app refusing to boot.
"""
from typing import Any, Dict

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError
import certifi
import logging

from catalog.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

_client: AsyncIOMotorClient | None = None
_db: AsyncIOMotorDatabase | None = None


def get_db() -> AsyncIOMotorDatabase:
    assert _db is not None, "Mongo DB not initialized"
    return _db


def client_options(settings: Settings) -> Dict[str, Any]:
    options: Dict[str, Any] = {
        "appname": settings.APP_NAME,
        "uuidRepresentation": "standard",
        "serverSelectionTimeoutMS": settings.MONGO_TIMEOUT_MS,
        "connectTimeoutMS": settings.MONGO_TIMEOUT_MS,
        "maxPoolSize": settings.MONGO_MAX_POOL_SIZE,
    }
    if settings.MONGO_TLS:
        options.update(tls=True, tlsCAFile=certifi.where())
    return options


async def ping() -> bool:
    """True when the server answers; False when there is no client or no server."""
    if _db is None:
        return False
    try:
        await _db.command("ping")
    except PyMongoError as e:
        logger.warning("Mongo ping failed: %s", e)
        return False
    return True


async def connect(settings: Settings | None = None) -> None:
    global _client, _db
    settings = settings or get_settings()
    if _client is not None:
        return

    _client = AsyncIOMotorClient(settings.MONGO_URI, **client_options(settings))
    _db = _client[settings.MONGO_DB]

    if await ping():
        logger.info("Mongo connected db=%s", settings.MONGO_DB)
    else:
        logger.warning("Mongo not reachable at startup; queries will retry server selection")


async def disconnect() -> None:
    global _client, _db
    if _client is not None:
        _client.close()
    _client = None
    _db = None
