from fastapi import APIRouter, Depends
import logging

from dependencies import get_catalog_resolver
from models.catalog import CatalogUpdate
from services.catalog_service import CatalogResolver

router = APIRouter(prefix="/settings", tags=["settings"])
logger = logging.getLogger(__name__)


@router.get("/{shop}")
async def get_settings(shop: str, catalogs: CatalogResolver = Depends(get_catalog_resolver)):
    """Get global settings for a shop (created with defaults on first access)"""
    logger.info(f"Fetching settings for shop: {shop}")
    catalog = await catalogs.resolve(shop)
    return catalog.to_document()


@router.put("/{shop}")
async def update_settings(
    shop: str,
    update: CatalogUpdate,
    catalogs: CatalogResolver = Depends(get_catalog_resolver)
):
    """Replace text options, placements and/or fonts for a shop"""
    logger.info(f"Updating settings for shop: {shop}")
    catalog = await catalogs.replace(shop, update)
    return catalog.to_document()
