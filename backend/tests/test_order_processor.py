"""
Order-to-production pipeline tests:
- orders without customizations are not queued
- successful compilation completes the record
- redelivered notifications compile once
- failures are stored on the record instead of raised
- a record stranded in processing is retried once its claim lease expires
"""
from datetime import timedelta

import pytest
from pymongo.errors import AutoReconnect

import services.order_processor as order_processor
from config import CLAIM_LEASE_SECONDS
from models.catalog import format_timestamp, utc_now
from models.order_queue import IntakeStatus
from models.production import ProductionCompiled, ProductionFailed
from services.catalog_service import CatalogResolver
from services.errors import CatalogUnavailable, MalformedOrderPayload
from services.order_processor import OrderProcessor, parse_order
from services.order_queue import OrderQueue
from services.property_extractor import extract_candidates

SHOP = "jersey-shop.myshopify.com"


@pytest.fixture
def processor(indexed_db):
    return OrderProcessor(CatalogResolver(indexed_db), OrderQueue(indexed_db))


class TestParseOrder:

    @pytest.mark.parametrize("missing", ["id", "name", "line_items"])
    def test_required_fields(self, make_order, missing):
        payload = make_order()
        del payload[missing]
        with pytest.raises(MalformedOrderPayload) as exc_info:
            parse_order(payload)
        assert missing in str(exc_info.value)

    def test_not_an_object(self):
        with pytest.raises(MalformedOrderPayload):
            parse_order(["not", "an", "order"])


class TestProcessOrder:

    async def test_order_without_customizations(self, processor, indexed_db, make_order):
        payload = make_order(line_items=[
            {"id": 1, "product_id": 2, "variant_id": 3, "sku": "CAP", "title": "Cap", "quantity": 1,
             "properties": [{"name": "Gift Wrap", "value": "yes"}]},
            {"id": 4, "product_id": 5, "variant_id": 6, "sku": "MUG", "title": "Mug", "quantity": 1},
        ])

        assert await processor.process_order(SHOP, payload) is None
        assert await indexed_db.order_queue.count_documents({}) == 0

    async def test_customized_order_is_completed(self, processor, make_order):
        record = await processor.process_order(SHOP, make_order())

        assert record.status == IntakeStatus.COMPLETED
        assert record.processed_at is not None
        assert record.error is None
        assert record.order_number == "#1001"

    async def test_malformed_order_creates_nothing(self, processor, indexed_db, make_order):
        payload = make_order()
        del payload["line_items"]

        with pytest.raises(MalformedOrderPayload):
            await processor.process_order(SHOP, payload)
        assert await indexed_db.order_queue.count_documents({}) == 0

    async def test_redelivery_compiles_once(self, processor, indexed_db, make_order, monkeypatch):
        calls = []
        compile_production = order_processor.compile_production

        def counting_compile(record, catalog):
            calls.append(record.order_id)
            return compile_production(record, catalog)

        monkeypatch.setattr(order_processor, "compile_production", counting_compile)

        first = await processor.process_order(SHOP, make_order())
        second = await processor.process_order(SHOP, make_order())

        assert calls == ["5512345678901"]
        assert first.status == IntakeStatus.COMPLETED
        assert second.status == IntakeStatus.COMPLETED
        assert await indexed_db.order_queue.count_documents({}) == 1

    async def test_compilation_failure_is_stored(self, processor, make_order, monkeypatch):
        def broken_compile(record, catalog):
            raise RuntimeError("coordinates missing")

        monkeypatch.setattr(order_processor, "compile_production", broken_compile)

        record = await processor.process_order(SHOP, make_order())

        assert record.status == IntakeStatus.ERROR
        assert record.error == "coordinates missing"

    async def test_catalog_failure_is_stored(self, processor, make_order, monkeypatch):
        async def unavailable(shop_domain):
            raise CatalogUnavailable(shop_domain, "connection refused")

        monkeypatch.setattr(processor.catalogs, "resolve", unavailable)

        record = await processor.process_order(SHOP, make_order())

        assert record.status == IntakeStatus.ERROR
        assert "connection refused" in record.error

    async def test_status_write_failure_is_stored_as_error(self, processor, indexed_db, make_order, monkeypatch):
        async def lost_connection(record):
            raise AutoReconnect("connection reset by peer")

        monkeypatch.setattr(processor.queue, "mark_completed", lost_connection)

        record = await processor.process_order(SHOP, make_order())
        assert record.status == IntakeStatus.ERROR
        assert "connection reset by peer" in record.error

        redelivered = await processor.process_order(SHOP, make_order())
        assert redelivered.status == IntakeStatus.ERROR
        stored = await indexed_db.order_queue.find_one({"orderId": "5512345678901"})
        assert stored["status"] == "error"

    async def test_stranded_order_is_retried_after_lease(self, processor, indexed_db, make_order):
        payload = make_order()
        order = parse_order(payload)
        queued = await processor.queue.enqueue(SHOP, order, extract_candidates(order))
        await processor.queue.claim(queued)

        # claimed but never finished, and still inside the lease
        fresh = await processor.process_order(SHOP, payload)
        assert fresh.status == IntakeStatus.PROCESSING

        await indexed_db.order_queue.update_one(
            {"orderId": queued.order_id},
            {"$set": {"claimedAt": format_timestamp(utc_now() - timedelta(seconds=CLAIM_LEASE_SECONDS + 1))}},
        )
        retried = await processor.process_order(SHOP, payload)
        assert retried.status == IntakeStatus.COMPLETED


class TestGenerateProduction:

    async def test_compiled_outcome(self, processor, make_order, monkeypatch):
        outcomes = []
        generate = processor.generate_production

        async def capture(record):
            outcome = await generate(record)
            outcomes.append(outcome)
            return outcome

        monkeypatch.setattr(processor, "generate_production", capture)
        await processor.process_order(SHOP, make_order())

        outcome = outcomes[0]
        assert isinstance(outcome, ProductionCompiled)
        item = outcome.record.line_items[0]
        assert item.id == "13800000001"
        assert [(c.placement, c.font, c.value) for c in item.customizations] == [
            ("chest", "varsity", "SMITH"),
            ("back", "varsity", "SMITH"),
        ]

    async def test_unmatched_placements_still_complete(self, processor, make_order):
        payload = make_order(line_items=[{
            "id": 1, "product_id": 2, "variant_id": 3, "sku": "JERSEY", "title": "Jersey", "quantity": 1,
            "properties": [{"name": "Player Name", "value": "Smith"}, {"name": "Placement", "value": "Collar"}],
        }])
        record = await processor.process_order(SHOP, payload)

        assert record.status == IntakeStatus.COMPLETED
        outcome = await processor.generate_production(record)
        assert isinstance(outcome, ProductionCompiled)
        assert outcome.record.line_items == []

    async def test_failed_outcome(self, processor, make_order, monkeypatch):
        def broken_compile(record, catalog):
            raise KeyError("fonts")

        record = await processor.process_order(SHOP, make_order())
        monkeypatch.setattr(order_processor, "compile_production", broken_compile)

        outcome = await processor.generate_production(record)
        assert isinstance(outcome, ProductionFailed)
        assert outcome.error == "'fonts'"
