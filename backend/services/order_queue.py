"""
Order queue - intake records and their status lifecycle

pending -> processing -> completed | error

`claim` is the only conditional transition: it moves a record out of
pending exactly once, so a redelivered webhook cannot compile an order twice.
A record stuck in processing past CLAIM_LEASE_SECONDS can be claimed again.
The terminal writes are last-write-wins.
"""
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument, DESCENDING
from pymongo.errors import DuplicateKeyError, PyMongoError
from datetime import timedelta
from typing import List, Optional
import logging

from config import ORDER_QUEUE_DEFAULT_LIMIT, CLAIM_LEASE_SECONDS
from models.catalog import format_timestamp, utc_now
from models.order_queue import (
    IntakeRecord, IntakeStatus, ItemCandidate, ShopifyOrder, OrderSummary, CustomerInfo
)
from models.production import ProductionOutcome, ProductionCompiled

logger = logging.getLogger(__name__)


def summarize_order(order: ShopifyOrder) -> OrderSummary:
    customer = order.customer
    first_name = (customer.first_name if customer else None) or ""
    last_name = (customer.last_name if customer else None) or ""
    return OrderSummary(
        customer=CustomerInfo(email=order.email, name=f"{first_name} {last_name}".strip()),
        created_at=order.created_at,
    )


class OrderQueue:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db.order_queue

    def _key(self, record: IntakeRecord) -> dict:
        return {"shopDomain": record.shop_domain, "orderId": record.order_id}

    async def enqueue(self, shop_domain: str, order: ShopifyOrder, candidates: List[ItemCandidate]) -> IntakeRecord:
        """Insert a pending record for the order, or return the one already queued"""
        if not candidates:
            raise ValueError(f"Order {order.name} has no customizations to queue")

        record = IntakeRecord(
            shop_domain=shop_domain,
            order_id=str(order.id),
            order_number=order.name,
            order_data=summarize_order(order),
            customizations=candidates,
        )

        try:
            doc = await self._insert_once(record)
        except DuplicateKeyError:
            doc = await self.collection.find_one(self._key(record), {"_id": 0})

        queued = IntakeRecord.model_validate(doc)
        if queued.created_at == record.created_at:
            logger.info(f"Order {order.name} added to processing queue for {shop_domain}")
        else:
            logger.info(f"Order {order.name} already queued for {shop_domain} (status: {queued.status.value})")
        return queued

    async def _insert_once(self, record: IntakeRecord) -> dict:
        return await self.collection.find_one_and_update(
            self._key(record),
            {"$setOnInsert": record.to_document()},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )

    async def claim(self, record: IntakeRecord) -> Optional[IntakeRecord]:
        """pending -> processing; None if the record was already claimed.

        A processing record whose claim is older than the lease is taken
        again, so an order stranded by a failed status write is retried on
        redelivery.
        """
        now = utc_now()
        lease_expired = format_timestamp(now - timedelta(seconds=CLAIM_LEASE_SECONDS))
        doc = await self.collection.find_one_and_update(
            {
                **self._key(record),
                "$or": [
                    {"status": IntakeStatus.PENDING.value},
                    {"status": IntakeStatus.PROCESSING.value, "claimedAt": {"$lt": lease_expired}},
                ],
            },
            {"$set": {"status": IntakeStatus.PROCESSING.value, "claimedAt": format_timestamp(now)}},
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            logger.info(f"Order {record.order_number} already claimed, skipping")
            return None
        return IntakeRecord.model_validate(doc)

    async def mark_completed(self, record: IntakeRecord) -> IntakeRecord:
        doc = await self.collection.find_one_and_update(
            self._key(record),
            {
                "$set": {
                    "status": IntakeStatus.COMPLETED.value,
                    "processedAt": format_timestamp(utc_now()),
                },
                "$unset": {"error": ""},
            },
            return_document=ReturnDocument.AFTER,
        )
        logger.info(f"Order {record.order_number} marked completed")
        return IntakeRecord.model_validate(doc)

    async def mark_error(self, record: IntakeRecord, message: str) -> IntakeRecord:
        doc = await self.collection.find_one_and_update(
            self._key(record),
            {"$set": {"status": IntakeStatus.ERROR.value, "error": message}},
            return_document=ReturnDocument.AFTER,
        )
        logger.warning(f"Order {record.order_number} marked error: {message}")
        return IntakeRecord.model_validate(doc)

    async def record_outcome(self, record: IntakeRecord, outcome: ProductionOutcome) -> IntakeRecord:
        """Store the result of production generation on the record"""
        try:
            if isinstance(outcome, ProductionCompiled):
                return await self.mark_completed(record)
            return await self.mark_error(record, outcome.error)
        except PyMongoError as e:
            logger.error(f"Failed to store status for order {record.order_number}: {e}")
            return await self.mark_error(record, f"Failed to store production status: {e}")

    async def get(self, shop_domain: str, order_id: str) -> Optional[IntakeRecord]:
        doc = await self.collection.find_one({"shopDomain": shop_domain, "orderId": order_id}, {"_id": 0})
        return IntakeRecord.model_validate(doc) if doc else None

    async def query(
        self,
        shop_domain: str,
        status: Optional[IntakeStatus] = None,
        limit: int = ORDER_QUEUE_DEFAULT_LIMIT
    ) -> List[IntakeRecord]:
        """Newest first, optionally filtered by status"""
        query = {"shopDomain": shop_domain}
        if status:
            query["status"] = IntakeStatus(status).value

        docs = await self.collection.find(query, {"_id": 0}).sort(
            [("createdAt", DESCENDING), ("_id", DESCENDING)]
        ).limit(limit).to_list(limit)
        return [IntakeRecord.model_validate(d) for d in docs]
