"""
Production compiler - assembles interpreted customizations into the
manufacturing record of one queued order
"""
from models.catalog import ShopCatalog, format_timestamp
from models.order_queue import IntakeRecord
from models.production import ProductionRecord, ProductionLineItem
from services.interpreter import interpret


def compile_production(record: IntakeRecord, catalog: ShopCatalog) -> ProductionRecord:
    """Build the production record for `record`.

    Pure: the timestamp is the intake record's creation time, so the same
    record and catalog always compile to the same output. Line items whose
    customizations resolve to nothing are left out.
    """
    line_items = []
    for candidate in record.customizations:
        instructions = interpret(candidate, catalog)
        if not instructions:
            continue
        line_items.append(ProductionLineItem(
            id=candidate.line_item_id,
            product_id=candidate.product_id,
            variant_id=candidate.variant_id,
            sku=candidate.sku,
            title=candidate.title,
            quantity=candidate.quantity,
            customizations=instructions,
        ))

    return ProductionRecord(
        order_id=record.order_id,
        order_number=record.order_number,
        created_at=format_timestamp(record.created_at),
        customer=record.order_data.customer.model_copy(),
        line_items=line_items,
    )
