from fastapi import APIRouter, HTTPException, Depends, Query
from typing import Optional
import logging

from config import ORDER_QUEUE_DEFAULT_LIMIT
from dependencies import get_catalog_resolver, get_order_queue
from models.order_queue import IntakeStatus
from services.catalog_service import CatalogResolver
from services.order_queue import OrderQueue
from services.production_compiler import compile_production

router = APIRouter(prefix="/orders", tags=["orders"])
logger = logging.getLogger(__name__)


@router.get("/{shop}")
async def get_orders(
    shop: str,
    status: Optional[IntakeStatus] = None,
    limit: int = Query(ORDER_QUEUE_DEFAULT_LIMIT, ge=1, le=500, description="Max records, newest first"),
    queue: OrderQueue = Depends(get_order_queue)
):
    """Get the order queue for a shop"""
    records = await queue.query(shop, status, limit)
    orders = [r.to_document() for r in records]
    return {"orders": orders, "count": len(orders)}


@router.get("/{shop}/{order_id}/production")
async def get_production_record(
    shop: str,
    order_id: str,
    queue: OrderQueue = Depends(get_order_queue),
    catalogs: CatalogResolver = Depends(get_catalog_resolver)
):
    """Recompile the production record of a queued order against the current catalog"""
    record = await queue.get(shop, order_id)
    if not record:
        raise HTTPException(status_code=404, detail="Order not found")
    if record.status == IntakeStatus.ERROR:
        raise HTTPException(status_code=409, detail=f"Order failed processing: {record.error}")

    catalog = await catalogs.resolve(shop)
    production = compile_production(record, catalog)
    return production.model_dump(mode="json", by_alias=True, exclude_none=True)
