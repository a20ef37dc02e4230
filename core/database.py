"""
Recipes API Database Configuration
Async MongoDB client setup with Motor
"""

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError
import structlog
from typing import Optional

from core.config import settings

logger = structlog.get_logger()

# Database client
client: Optional[AsyncIOMotorClient] = None
database: Optional[AsyncIOMotorDatabase] = None


async def init_db() -> AsyncIOMotorDatabase:
    """Connect to MongoDB and verify the server is reachable"""
    global client, database

    try:
        client = AsyncIOMotorClient(
            settings.MONGODB_URI,
            serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS,
            tz_aware=True,
        )

        # Test connection
        await client.admin.command("ping")

        database = client.get_default_database(settings.MONGODB_DATABASE)
        logger.info(
            "MongoDB connected successfully",
            host=",".join(f"{host}:{port}" for host, port in client.nodes) or settings.MONGODB_URI,
            database=database.name,
        )
        return database

    except PyMongoError as e:
        logger.error(f"Error connecting to MongoDB: {str(e)}")
        if client is not None:
            client.close()
            client = None
        raise


async def close_db() -> None:
    """Close database connections"""
    global client, database

    if client is not None:
        client.close()
        client = None
        database = None
        logger.info("Database connections closed")


__all__ = [
    "init_db",
    "close_db",
]
