from pydantic import ConfigDict
from typing import List, Optional

from models.catalog import CamelModel, Timestamp


class ProductCustomization(CamelModel):
    """Per-product personalization toggle. Extra widget settings are kept as-is."""
    model_config = ConfigDict(extra="allow")
    shop_domain: str
    product_id: str
    enabled: bool = False
    text_options: List[int] = []
    available_placements: List[int] = []
    available_fonts: List[int] = []
    default_font: int = 1
    created_at: Optional[Timestamp] = None
    updated_at: Optional[Timestamp] = None


class ProductCustomizationUpdate(CamelModel):
    model_config = ConfigDict(extra="allow")
    enabled: Optional[bool] = None
    text_options: Optional[List[int]] = None
    available_placements: Optional[List[int]] = None
    available_fonts: Optional[List[int]] = None
    default_font: Optional[int] = None
