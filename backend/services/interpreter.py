"""
Customization interpreter

Turns one candidate line item into print instructions by resolving the
requested text, placements and font against the shop catalog. Matching is
by exact name: "Chest" matches the placement named "Chest" but not "chest"
or " Chest " stored in the catalog. Placements the catalog does not know are
dropped without error.
"""
from typing import List, Optional

from models.catalog import ShopCatalog, Placement, Font
from models.order_queue import ItemCandidate, CustomizationProperties
from models.production import CustomizationInstruction

DEFAULT_FONT_LABEL = "Standard Font (Free)"
FALLBACK_FONT_CODE = "standard"
TEXT_COLOR = "white"


def resolve_text(props: CustomizationProperties) -> Optional[str]:
    """First non-empty of Custom Text, Player Name, Jersey Number, Custom Message"""
    for value in (props.custom_text, props.player_name, props.jersey_number, props.custom_message):
        if value:
            return value
    return None


def split_placements(props: CustomizationProperties) -> List[str]:
    """'Chest, Back' -> ['Chest', 'Back']"""
    if not props.placement:
        return []
    return [name.strip() for name in props.placement.split(",")]


def match_font(catalog: ShopCatalog, label: Optional[str]) -> Optional[Font]:
    """Font whose display name equals `label`, else the catalog's first font"""
    label = label or DEFAULT_FONT_LABEL
    for font in catalog.fonts:
        if font.display_name == label:
            return font
    return catalog.fonts[0] if catalog.fonts else None


def match_placement(catalog: ShopCatalog, name: str) -> Optional[Placement]:
    for placement in catalog.placements:
        if placement.name == name:
            return placement
    return None


def interpret(candidate: ItemCandidate, catalog: ShopCatalog) -> List[CustomizationInstruction]:
    props = candidate.properties

    text = resolve_text(props)
    if not text:
        return []

    placement_names = split_placements(props)
    if not placement_names:
        return []

    font = match_font(catalog, props.font_style)
    font_code = font.code if font and font.code else FALLBACK_FONT_CODE

    instructions = []
    for name in placement_names:
        placement = match_placement(catalog, name)
        if placement is None:
            continue
        instructions.append(CustomizationInstruction(
            type="text",
            value=text.upper(),
            placement=placement.code,
            font=font_code,
            color=TEXT_COLOR,
            coordinates=placement.coordinates.model_copy(),
        ))

    return instructions
