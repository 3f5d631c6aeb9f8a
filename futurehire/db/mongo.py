# futurehire/db/mongo.py
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase

from futurehire.core.config import Settings

_mongo_client: Optional[AsyncIOMotorClient] = None

def get_mongo_client(settings: Settings) -> AsyncIOMotorClient:
    """
    Returns a cached Motor client. Motor connects lazily, so building the
    client never blocks or fails on an unreachable server.
    """
    global _mongo_client
    if _mongo_client is None:
        _mongo_client = AsyncIOMotorClient(settings.MONGODB_URI, tz_aware=True)
    return _mongo_client

def get_db(settings: Settings) -> AsyncIOMotorDatabase:
    client = get_mongo_client(settings)
    return client[settings.MONGODB_DB]

def get_users_collection(settings: Settings) -> AsyncIOMotorCollection:
    return get_db(settings)[settings.MONGODB_USERS_COLLECTION]

def close_db() -> None:
    global _mongo_client
    if _mongo_client is not None:
        _mongo_client.close()
        _mongo_client = None
