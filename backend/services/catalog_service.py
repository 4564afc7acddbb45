"""
Shop catalog persistence - read-or-create with the documented defaults,
and shallow replace of the configured lists
"""
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError
import logging

from models.catalog import ShopCatalog, CatalogUpdate, default_catalog, format_timestamp, utc_now
from services.errors import CatalogUnavailable

logger = logging.getLogger(__name__)


class CatalogResolver:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db.global_settings

    async def resolve(self, shop_domain: str) -> ShopCatalog:
        """Get the shop's catalog, creating the default one on first access"""
        try:
            doc = await self.collection.find_one({"shopDomain": shop_domain}, {"_id": 0})
            if doc:
                return ShopCatalog.model_validate(doc)
            return await self._create_default(shop_domain)
        except PyMongoError as e:
            logger.error(f"Error fetching settings for {shop_domain}: {e}")
            raise CatalogUnavailable(shop_domain, str(e)) from e

    async def _create_default(self, shop_domain: str) -> ShopCatalog:
        catalog = default_catalog(shop_domain)
        try:
            await self.collection.insert_one(catalog.to_document())
        except DuplicateKeyError:
            # Lost the creation race; the winner's document is authoritative
            doc = await self.collection.find_one({"shopDomain": shop_domain}, {"_id": 0})
            return ShopCatalog.model_validate(doc)

        logger.info(f"Created default settings for shop: {shop_domain}")
        return catalog

    async def replace(self, shop_domain: str, update: CatalogUpdate) -> ShopCatalog:
        """Overwrite the lists present in `update` and refresh updatedAt (upsert)"""
        fields = update.model_dump(mode="json", by_alias=True, exclude_none=True)
        fields["updatedAt"] = format_timestamp(utc_now())
        fields["shopDomain"] = shop_domain

        try:
            try:
                doc = await self._upsert(shop_domain, fields)
            except DuplicateKeyError:
                # Concurrent upsert inserted first; the retry updates that document
                doc = await self._upsert(shop_domain, fields)
        except PyMongoError as e:
            logger.error(f"Error updating settings for {shop_domain}: {e}")
            raise CatalogUnavailable(shop_domain, str(e)) from e

        logger.info(f"Updated settings for shop: {shop_domain} ({', '.join(sorted(fields))})")
        return ShopCatalog.model_validate(doc)

    async def _upsert(self, shop_domain: str, fields: dict) -> dict:
        return await self.collection.find_one_and_update(
            {"shopDomain": shop_domain},
            {"$set": fields},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
