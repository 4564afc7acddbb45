"""
Order intake models - Shopify order payload, extracted customization
candidates and the queued intake record
"""
from pydantic import BaseModel, Field, ConfigDict, model_serializer, model_validator
from typing import List, Optional, Dict, Any, Union
from enum import Enum

from models.catalog import CamelModel, Timestamp, utc_now


class IntakeStatus(str, Enum):
    """Lifecycle of a queued order"""
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


# ============== Shopify payload ==============

class LineItemProperty(BaseModel):
    model_config = ConfigDict(extra="ignore")
    name: str
    value: Any = None


class ShopifyLineItem(BaseModel):
    model_config = ConfigDict(extra="ignore")
    id: Union[int, str]
    product_id: Optional[Union[int, str]] = None
    variant_id: Optional[Union[int, str]] = None
    sku: Optional[str] = None
    title: Optional[str] = None
    quantity: Optional[int] = None
    properties: Optional[List[LineItemProperty]] = None


class ShopifyCustomer(BaseModel):
    model_config = ConfigDict(extra="ignore")
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class ShopifyOrder(BaseModel):
    """The subset of the Shopify order webhook payload used for intake"""
    model_config = ConfigDict(extra="ignore")
    id: Union[int, str]
    name: str  # human order number, e.g. "#1001"
    email: Optional[str] = None
    customer: Optional[ShopifyCustomer] = None
    created_at: Optional[str] = None
    line_items: List[ShopifyLineItem]


# ============== Extracted customizations ==============

class CustomizationProperties(CamelModel):
    """Recognized line item properties. Anything else lands in `extra` and is
    never consulted when interpreting a customization. Stored and served as
    the flat name/value map that appeared on the order."""
    custom_text: Optional[str] = Field(default=None, alias="Custom Text")
    player_name: Optional[str] = Field(default=None, alias="Player Name")
    jersey_number: Optional[str] = Field(default=None, alias="Jersey Number")
    custom_message: Optional[str] = Field(default=None, alias="Custom Message")
    placement: Optional[str] = Field(default=None, alias="Placement")
    font_style: Optional[str] = Field(default=None, alias="Font Style")
    extra: Dict[str, Optional[str]] = {}

    @model_validator(mode="before")
    @classmethod
    def _split_recognized(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        field_aliases = {name: field.alias for name, field in cls.model_fields.items() if name != "extra"}
        known = {}
        nested = data.get("extra")
        extra = dict(nested) if isinstance(nested, dict) else {}
        for name, value in data.items():
            if name == "extra" and isinstance(value, dict):
                continue
            if name in PROPERTY_ALIASES:
                known[name] = value
            elif name in field_aliases:
                known[field_aliases[name]] = value
            else:
                extra[name] = value
        return {**known, "extra": extra}

    @classmethod
    def from_map(cls, props: Dict[str, Optional[str]]) -> "CustomizationProperties":
        return cls.model_validate(props)

    @model_serializer
    def to_map(self) -> Dict[str, Optional[str]]:
        """Flat name/value map as it appeared on the order"""
        props = dict(self.extra)
        for name, field in type(self).model_fields.items():
            value = getattr(self, name)
            if name != "extra" and value is not None:
                props[field.alias] = value
        return props


PROPERTY_ALIASES = {
    field.alias for name, field in CustomizationProperties.model_fields.items() if name != "extra"
}


class ItemCandidate(CamelModel):
    """A line item carrying personalization text"""
    line_item_id: str
    product_id: Optional[str] = None
    variant_id: Optional[str] = None
    sku: Optional[str] = None
    title: Optional[str] = None
    quantity: int = 1
    properties: CustomizationProperties


class CustomerInfo(BaseModel):
    email: Optional[str] = None
    name: str = ""


class OrderSummary(CamelModel):
    customer: CustomerInfo
    created_at: Optional[str] = None  # upstream order timestamp, kept verbatim


# ============== Queue ==============

class IntakeRecord(CamelModel):
    shop_domain: str
    order_id: str
    order_number: str
    order_data: OrderSummary
    customizations: List[ItemCandidate]
    status: IntakeStatus = IntakeStatus.PENDING
    claimed_at: Optional[Timestamp] = None
    processed_at: Optional[Timestamp] = None
    error: Optional[str] = None
    created_at: Timestamp = Field(default_factory=utc_now)
