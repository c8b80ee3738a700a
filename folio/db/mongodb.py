"""MongoDB connection for portfolio documents."""

import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase

from folio.config import settings

logger = logging.getLogger(__name__)

mongodb_client: AsyncIOMotorClient | None = None
mongodb_database: AsyncIOMotorDatabase | None = None


async def init_mongodb() -> None:
    """Open the MongoDB client and ensure indexes."""
    global mongodb_client, mongodb_database

    mongodb_client = AsyncIOMotorClient(settings.MONGODB_URL)
    mongodb_database = mongodb_client[settings.MONGODB_DATABASE]

    # Index creation failures must not block startup
    try:
        await _create_indexes()
    except Exception as e:
        logger.warning(f"Could not create MongoDB indexes (non-fatal): {e}")


async def _create_indexes() -> None:
    if mongodb_database is None:
        return

    portfolios = mongodb_database.portfolios
    await portfolios.create_index([("user_id", 1), ("updated_at", -1)])
    await portfolios.create_index([("is_published", 1)])


async def close_mongodb() -> None:
    """Close MongoDB connection."""
    if mongodb_client:
        mongodb_client.close()


def get_mongodb() -> AsyncIOMotorDatabase:
    """Get MongoDB database instance."""
    if mongodb_database is None:
        raise RuntimeError("MongoDB is not initialized")
    return mongodb_database


def get_portfolios_collection() -> AsyncIOMotorCollection:
    """Dependency returning the portfolios collection."""
    return get_mongodb().portfolios
