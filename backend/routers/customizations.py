from fastapi import APIRouter, Depends
import logging

from dependencies import get_customization_store
from models.customization import ProductCustomizationUpdate
from services.customization_service import CustomizationStore

router = APIRouter(prefix="/customization", tags=["customization"])
logger = logging.getLogger(__name__)


@router.get("/{shop}/{product_id}")
async def get_customization(
    shop: str,
    product_id: str,
    store: CustomizationStore = Depends(get_customization_store)
):
    """Get product customization; unconfigured products come back disabled"""
    logger.info(f"Fetching customization for product {product_id} in shop {shop}")
    customization = await store.get(shop, product_id)
    return customization.to_document()


@router.put("/{shop}/{product_id}")
async def update_customization(
    shop: str,
    product_id: str,
    update: ProductCustomizationUpdate,
    store: CustomizationStore = Depends(get_customization_store)
):
    """Create or update product customization"""
    logger.info(f"Updating customization for product {product_id} in shop {shop}")
    customization = await store.put(shop, product_id, update)
    return customization.to_document()
