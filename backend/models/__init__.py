from models.catalog import (
    ShopCatalog, CatalogUpdate, TextOption, Placement, Font, Coordinates, default_catalog
)
from models.customization import ProductCustomization, ProductCustomizationUpdate
from models.order_queue import (
    IntakeStatus, IntakeRecord, ItemCandidate, CustomizationProperties,
    CustomerInfo, OrderSummary, ShopifyOrder, ShopifyLineItem
)
from models.production import (
    CustomizationInstruction, ProductionLineItem, ProductionRecord,
    ProductionCompiled, ProductionFailed, ProductionOutcome
)

__all__ = [
    "ShopCatalog", "CatalogUpdate", "TextOption", "Placement", "Font", "Coordinates", "default_catalog",
    "ProductCustomization", "ProductCustomizationUpdate",
    "IntakeStatus", "IntakeRecord", "ItemCandidate", "CustomizationProperties",
    "CustomerInfo", "OrderSummary", "ShopifyOrder", "ShopifyLineItem",
    "CustomizationInstruction", "ProductionLineItem", "ProductionRecord",
    "ProductionCompiled", "ProductionFailed", "ProductionOutcome",
]
