"""
Line item property extraction - finds the order lines that carry
personalization text and normalizes their properties
"""
from typing import Any, Dict, List, Optional

from models.order_queue import ShopifyOrder, ShopifyLineItem, ItemCandidate, CustomizationProperties

# Property names that carry the personalization text, highest priority first
TEXT_PROPERTY_KEYS = ("Custom Text", "Player Name", "Jersey Number", "Custom Message")


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def property_map(item: ShopifyLineItem) -> Dict[str, Optional[str]]:
    """Name/value map of a line item's properties; repeated names keep the last value"""
    props = {}
    for prop in item.properties or []:
        props[prop.name] = _as_text(prop.value)
    return props


def has_customization_text(props: Dict[str, Optional[str]]) -> bool:
    return any(props.get(key) for key in TEXT_PROPERTY_KEYS)


def _as_id(value) -> Optional[str]:
    return None if value is None else str(value)


def extract_candidates(order: ShopifyOrder) -> List[ItemCandidate]:
    """Line items with at least one non-empty text property, in order"""
    candidates = []
    for item in order.line_items:
        if not item.properties:
            continue

        props = property_map(item)
        if not has_customization_text(props):
            continue

        candidates.append(ItemCandidate(
            line_item_id=str(item.id),
            product_id=_as_id(item.product_id),
            variant_id=_as_id(item.variant_id),
            sku=item.sku,
            title=item.title,
            quantity=item.quantity if item.quantity is not None else 1,
            properties=CustomizationProperties.from_map(props),
        ))

    return candidates
