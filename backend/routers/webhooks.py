"""
Webhook handler for Shopify order notifications
"""
from fastapi import APIRouter, HTTPException, Request, Header, Depends
from typing import Optional
import hmac
import hashlib
import base64
import json
import logging

import config
from dependencies import get_order_processor
from services.errors import MalformedOrderPayload
from services.order_processor import OrderProcessor

router = APIRouter(prefix="/webhooks", tags=["webhooks"])
logger = logging.getLogger(__name__)


def verify_shopify_webhook(data: bytes, hmac_header: Optional[str], secret: str) -> bool:
    """Verify Shopify webhook signature"""
    if not secret:
        return True  # Skip verification if no secret configured
    if not hmac_header:
        return False

    computed_hmac = base64.b64encode(
        hmac.new(secret.encode(), data, hashlib.sha256).digest()
    ).decode()

    # bytes on both sides: compare_digest rejects non-ASCII str
    return hmac.compare_digest(computed_hmac.encode(), hmac_header.encode("utf-8", "surrogateescape"))


@router.post("/orders/create")
async def shopify_order_created(
    request: Request,
    x_shopify_hmac_sha256: Optional[str] = Header(None),
    x_shopify_shop_domain: Optional[str] = Header(None),
    x_shopify_topic: Optional[str] = Header(None),
    x_shopify_webhook_id: Optional[str] = Header(None),
    processor: OrderProcessor = Depends(get_order_processor)
):
    """Handle Shopify order created webhook"""
    logger.info(
        f"Webhook received - Shop: {x_shopify_shop_domain}, Topic: {x_shopify_topic}, ID: {x_shopify_webhook_id}"
    )
    body = await request.body()

    # Verify webhook signature
    if not verify_shopify_webhook(body, x_shopify_hmac_sha256, config.SHOPIFY_WEBHOOK_SECRET):
        logger.error(f"Webhook verification failed for shop {x_shopify_shop_domain}")
        raise HTTPException(status_code=401, detail="Invalid webhook signature")

    if not x_shopify_shop_domain:
        raise HTTPException(status_code=400, detail="Missing X-Shopify-Shop-Domain header")

    try:
        shopify_order = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise HTTPException(status_code=400, detail="Invalid JSON payload")

    try:
        record = await processor.process_order(x_shopify_shop_domain, shopify_order)
    except MalformedOrderPayload as e:
        raise HTTPException(status_code=400, detail=str(e))

    if record is None:
        return {"status": "no_customizations"}

    return {
        "status": "queued",
        "order_id": record.order_id,
        "order_status": record.status.value
    }
