from pydantic import BaseModel, Field
from typing import Annotated, List, Literal, Optional, Union

from models.catalog import Coordinates
from models.order_queue import CustomerInfo


class CustomizationInstruction(BaseModel):
    type: Literal["text"] = "text"
    value: str
    placement: str  # placement code
    font: str  # font code
    color: str = "white"
    coordinates: Coordinates


class ProductionLineItem(BaseModel):
    id: str  # source line item id
    product_id: Optional[str] = None
    variant_id: Optional[str] = None
    sku: Optional[str] = None
    title: Optional[str] = None
    quantity: int = 1
    customizations: List[CustomizationInstruction]


class ProductionRecord(BaseModel):
    """Manufacturing-ready description of an order. Derived, never stored."""
    order_id: str
    order_number: str
    created_at: str
    customer: CustomerInfo
    line_items: List[ProductionLineItem] = []

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=2)


# ============== Compilation outcome ==============

class ProductionCompiled(BaseModel):
    outcome: Literal["compiled"] = "compiled"
    record: ProductionRecord


class ProductionFailed(BaseModel):
    outcome: Literal["failed"] = "failed"
    error: str


ProductionOutcome = Annotated[Union[ProductionCompiled, ProductionFailed], Field(discriminator="outcome")]
