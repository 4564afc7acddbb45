from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from fastapi import Request
import logging

from config import MONGO_URL, DB_NAME, MONGO_SERVER_SELECTION_TIMEOUT_MS

logger = logging.getLogger(__name__)


def open_client(url: str = MONGO_URL) -> AsyncIOMotorClient:
    """Open the Motor client. The caller owns it and must close it on shutdown."""
    client = AsyncIOMotorClient(url, serverSelectionTimeoutMS=MONGO_SERVER_SELECTION_TIMEOUT_MS)
    logger.info(f"[Database] Client opened for database: {DB_NAME}")
    return client


def close_client(client: AsyncIOMotorClient) -> None:
    client.close()
    logger.info("[Database] Client closed")


async def create_indexes(db: AsyncIOMotorDatabase):
    """Create database indexes. The unique keys back the read-or-create and
    duplicate-delivery guarantees of the catalog and order queue."""
    try:
        # global_settings: one catalog per shop
        await db.global_settings.create_index("shopDomain", unique=True)

        # customizations: one toggle per (shop, product)
        await db.customizations.create_index([("shopDomain", 1), ("productId", 1)], unique=True)

        # order_queue: one intake record per (shop, order)
        await db.order_queue.create_index([("shopDomain", 1), ("orderId", 1)], unique=True)
        await db.order_queue.create_index([("shopDomain", 1), ("createdAt", -1)])
        await db.order_queue.create_index("status")

        logger.info("[Database] Indexes created successfully")
    except Exception as e:
        logger.warning(f"[Database] Index creation error (may already exist): {e}")


async def ping(db: AsyncIOMotorDatabase) -> bool:
    try:
        await db.command("ping")
        return True
    except Exception as e:
        logger.warning(f"[Database] Ping failed: {e}")
        return False


def get_db(request: Request) -> AsyncIOMotorDatabase:
    """FastAPI dependency returning the database handle owned by the app"""
    return request.app.state.db
