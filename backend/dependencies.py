from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from database import get_db
from services.catalog_service import CatalogResolver
from services.customization_service import CustomizationStore
from services.order_queue import OrderQueue
from services.order_processor import OrderProcessor


def get_catalog_resolver(db: AsyncIOMotorDatabase = Depends(get_db)) -> CatalogResolver:
    return CatalogResolver(db)


def get_customization_store(db: AsyncIOMotorDatabase = Depends(get_db)) -> CustomizationStore:
    return CustomizationStore(db)


def get_order_queue(db: AsyncIOMotorDatabase = Depends(get_db)) -> OrderQueue:
    return OrderQueue(db)


def get_order_processor(
    catalogs: CatalogResolver = Depends(get_catalog_resolver),
    queue: OrderQueue = Depends(get_order_queue)
) -> OrderProcessor:
    return OrderProcessor(catalogs, queue)
