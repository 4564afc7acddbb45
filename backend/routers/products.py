from fastapi import APIRouter, Depends
import logging

from dependencies import get_customization_store
from services.customization_service import CustomizationStore

router = APIRouter(prefix="/products", tags=["products"])
logger = logging.getLogger(__name__)


@router.get("/{shop}")
async def get_products(shop: str, store: CustomizationStore = Depends(get_customization_store)):
    """Products that have a customization configured for this shop"""
    logger.info(f"Fetching products for shop: {shop}")
    customizations = await store.list_for_shop(shop)
    products = [
        {"id": c.product_id, "customization": c.to_document()}
        for c in customizations
    ]
    return {"products": products}
