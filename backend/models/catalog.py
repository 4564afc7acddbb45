"""
Shop catalog models - text options, placements and fonts configured per shop
"""
from pydantic import BaseModel, Field, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel
from typing import Annotated, List, Optional, Union
from datetime import datetime, timezone

Number = Union[int, float]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Fixed-width UTC string, so stored timestamps sort chronologically as text"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


Timestamp = Annotated[datetime, PlainSerializer(format_timestamp, return_type=str, when_used="json")]


class CamelModel(BaseModel):
    """Base for documents shared with the storefront widget (camelCase on the wire)"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class TextOption(CamelModel):
    id: int
    name: str
    max_length: int
    base_price: Number = 0


class Coordinates(CamelModel):
    x: Number
    y: Number
    max_width: Number
    max_height: Number
    rotation: Optional[Number] = None


class Placement(CamelModel):
    id: int
    name: str
    code: str
    price: Number = 0
    coordinates: Coordinates


class Font(CamelModel):
    id: int
    name: str
    code: str
    price: Number = 0
    font_file: Optional[str] = None
    display_name: str  # label shown in the widget, matched against the order's "Font Style"


class ShopCatalog(CamelModel):
    shop_domain: str
    text_options: List[TextOption] = []
    placements: List[Placement] = []
    fonts: List[Font] = []
    updated_at: Timestamp = Field(default_factory=utc_now)


class CatalogUpdate(CamelModel):
    """Shallow replacement; only the lists present in the payload are overwritten"""
    text_options: Optional[List[TextOption]] = None
    placements: Optional[List[Placement]] = None
    fonts: Optional[List[Font]] = None


DEFAULT_TEXT_OPTIONS = [
    TextOption(id=1, name="Player Name", max_length=15, base_price=0),
    TextOption(id=2, name="Custom Text", max_length=25, base_price=0),
    TextOption(id=3, name="Jersey Number", max_length=3, base_price=0),
]

DEFAULT_PLACEMENTS = [
    Placement(id=1, name="Chest", code="chest", price=5,
              coordinates=Coordinates(x=360, y=250, max_width=200, max_height=60)),
    Placement(id=2, name="Back", code="back", price=5,
              coordinates=Coordinates(x=360, y=300, max_width=280, max_height=100)),
    Placement(id=3, name="Left Sleeve", code="left_sleeve", price=7,
              coordinates=Coordinates(x=150, y=320, max_width=80, max_height=40, rotation=-90)),
    Placement(id=4, name="Right Sleeve", code="right_sleeve", price=7,
              coordinates=Coordinates(x=150, y=320, max_width=80, max_height=40, rotation=-90)),
]

DEFAULT_FONTS = [
    Font(id=1, name="Standard", code="standard", price=0, font_file="Arial",
         display_name="Standard Font (Free)"),
    Font(id=2, name="Varsity", code="varsity", price=3, font_file="Impact",
         display_name="Varsity Style (+$3)"),
    Font(id=3, name="Script", code="script", price=5, font_file="BrushScriptMT",
         display_name="Script Style (+$5)"),
    Font(id=4, name="Modern", code="modern", price=3, font_file="HelveticaNeue-Light",
         display_name="Modern Style (+$3)"),
]


def default_catalog(shop_domain: str) -> ShopCatalog:
    return ShopCatalog(
        shop_domain=shop_domain,
        text_options=[o.model_copy(deep=True) for o in DEFAULT_TEXT_OPTIONS],
        placements=[p.model_copy(deep=True) for p in DEFAULT_PLACEMENTS],
        fonts=[f.model_copy(deep=True) for f in DEFAULT_FONTS],
    )
