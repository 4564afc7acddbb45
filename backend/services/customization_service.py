"""
Per-product personalization toggles
"""
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from typing import List
import logging

from models.catalog import format_timestamp, utc_now
from models.customization import ProductCustomization, ProductCustomizationUpdate

logger = logging.getLogger(__name__)


class CustomizationStore:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db.customizations

    async def get(self, shop_domain: str, product_id: str) -> ProductCustomization:
        """Stored toggle, or a disabled one when the product was never configured"""
        doc = await self.collection.find_one(
            {"shopDomain": shop_domain, "productId": product_id}, {"_id": 0}
        )
        if not doc:
            return ProductCustomization(shop_domain=shop_domain, product_id=product_id)
        return ProductCustomization.model_validate(doc)

    async def put(self, shop_domain: str, product_id: str, update: ProductCustomizationUpdate) -> ProductCustomization:
        now = format_timestamp(utc_now())
        fields = update.model_dump(mode="json", by_alias=True, exclude_none=True)
        fields.update({"shopDomain": shop_domain, "productId": product_id, "updatedAt": now})
        fields.pop("createdAt", None)
        fields.pop("_id", None)

        doc = await self.collection.find_one_and_update(
            {"shopDomain": shop_domain, "productId": product_id},
            {"$set": fields, "$setOnInsert": {"createdAt": now}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        doc.pop("_id", None)
        logger.info(f"Updated customization for product {product_id} in shop {shop_domain}")
        return ProductCustomization.model_validate(doc)

    async def list_for_shop(self, shop_domain: str, limit: int = 500) -> List[ProductCustomization]:
        docs = await self.collection.find(
            {"shopDomain": shop_domain}, {"_id": 0}
        ).sort("productId", 1).to_list(limit)
        return [ProductCustomization.model_validate(d) for d in docs]
