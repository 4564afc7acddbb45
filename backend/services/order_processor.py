"""
Order-to-production pipeline

Shopify order -> customization candidates -> queued intake record ->
production record -> stored status
"""
from pydantic import ValidationError
from typing import Any, Optional
import logging

from models.order_queue import IntakeRecord, ShopifyOrder
from models.production import ProductionOutcome, ProductionCompiled, ProductionFailed
from services.catalog_service import CatalogResolver
from services.errors import MalformedOrderPayload
from services.order_queue import OrderQueue
from services.production_compiler import compile_production
from services.property_extractor import extract_candidates

logger = logging.getLogger(__name__)


def parse_order(payload: Any) -> ShopifyOrder:
    """Validate the webhook payload; id, name and line_items are required"""
    if not isinstance(payload, dict):
        raise MalformedOrderPayload("Order payload must be a JSON object")
    try:
        return ShopifyOrder.model_validate(payload)
    except ValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        raise MalformedOrderPayload(f"Invalid order payload: {', '.join(fields)}") from e


class OrderProcessor:
    def __init__(self, catalogs: CatalogResolver, queue: OrderQueue):
        self.catalogs = catalogs
        self.queue = queue

    async def process_order(self, shop_domain: str, payload: Any) -> Optional[IntakeRecord]:
        """Queue an order's customizations and generate its production record.

        Returns None when no line item carries customization text. Raises
        MalformedOrderPayload before anything is stored. Compilation failures
        are stored on the record, never raised.
        """
        order = parse_order(payload)
        logger.info(f"Processing order {order.name} ({order.id}) for {shop_domain}")

        candidates = extract_candidates(order)
        if not candidates:
            logger.info(f"Order {order.name} has no customizations")
            return None

        logger.info(f"Found {len(candidates)} customized items in order {order.name}")
        record = await self.queue.enqueue(shop_domain, order, candidates)

        claimed = await self.queue.claim(record)
        if claimed is None:
            return record

        outcome = await self.generate_production(claimed)
        return await self.queue.record_outcome(claimed, outcome)

    async def generate_production(self, record: IntakeRecord) -> ProductionOutcome:
        logger.info(f"Generating production file for order {record.order_number}")
        try:
            catalog = await self.catalogs.resolve(record.shop_domain)
            production = compile_production(record, catalog)
        except Exception as e:
            logger.exception(f"Error generating production file for order {record.order_number}")
            return ProductionFailed(error=str(e) or e.__class__.__name__)

        logger.info(f"Production data generated for order {record.order_number}:\n{production.to_json()}")
        return ProductionCompiled(record=production)
