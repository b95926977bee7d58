"""
Item categories and the fixed vocabularies used to decide them.
"""

from enum import Enum
from typing import Tuple


class ItemCategory(Enum):
    """Category an item instance is listed under."""

    WEAPON = "weapon"
    ARMOR = "armor"
    ACCESSORY = "accessory"
    CONSUMABLE = "consumable"
    MISCELLANEOUS = "miscellaneous"
    UNCLASSIFIED = "unclassified"
    """No signal decided; listed with miscellaneous items."""

    @property
    def listing_category(self) -> "ItemCategory":
        """Category used in categorized listings."""
        return ItemCategory.MISCELLANEOUS if self is ItemCategory.UNCLASSIFIED else self


# Catalog kinds (blueprint class names), compared lower-cased without spaces
KIND_WEAPON = "blueprintitemweapon"
KIND_ARMOR = "blueprintitemarmor"
KIND_SHIELD = "blueprintitemshield"
KIND_USABLE = "blueprintitemequipmentusable"
KIND_EQUIPMENT_PREFIX = "blueprintitemequipment"

# Runtime item entity types found in "$type"
ENTITY_WEAPON = "ItemEntityWeapon"
ENTITY_ARMOR = "ItemEntityArmor"
ENTITY_SHIELD = "ItemEntityShield"
ENTITY_USABLE = "ItemEntityUsable"
ENTITY_SIMPLE = "ItemEntitySimple"

WEAPON_SUBTYPES: Tuple[str, ...] = (
    "Longsword", "Shortsword", "Greatsword", "Bastard Sword", "Dueling Sword",
    "Dagger", "Kukri", "Punching Dagger", "Sickle", "Starknife",
    "Battleaxe", "Handaxe", "Greataxe", "Warhammer", "Light Hammer", "Dwarven Waraxe",
    "Heavy Flail", "Light Flail", "Flail", "Greatclub", "Club", "Heavy Mace", "Light Mace",
    "Scimitar", "Falchion", "Falcata", "Rapier", "Estoc", "Sai",
    "Glaive", "Scythe", "Bardiche", "Fauchard", "Nunchaku",
    "Light Pick", "Heavy Pick", "Kama", "Trident", "Sling Staff",
    "Quarterstaff", "Spear", "Longspear", "Javelin", "Earth Breaker",
    "Shortbow", "Longbow", "Light Crossbow", "Heavy Crossbow",
    "Dart", "Throwing Axe", "Sling",
    "Composite Shortbow", "Composite Longbow",
)

ARMOR_SUBTYPES: Tuple[str, ...] = (
    "Light Armor", "Medium Armor", "Heavy Armor",
    "Buckler", "Light Shield", "Heavy Shield", "Tower Shield",
    "Padded", "Leather", "Studded", "Chainshirt", "Chain Shirt", "Hide", "Scale Mail",
    "Chainmail", "Breastplate", "Splint Mail", "Banded Mail", "Half-Plate", "Halfplate",
    "Fullplate", "Full Plate", "Cloth", "Ring Mail",
)

# Short words that occur inside unrelated names ("Rattlecap", "Handicap")
ACCESSORY_WHOLE_WORDS: Tuple[str, ...] = ("Ring", "Belt", "Hat", "Cap")

ACCESSORY_SUBSTRINGS: Tuple[str, ...] = (
    "Amulet", "Bracers", "Cloak", "Headband", "Circlet",
    "Helmet", "Gloves", "Boots", "Companion",
)

CONSUMABLE_SUBSTRINGS: Tuple[str, ...] = (
    "Potion", "Scroll", "Elixir", "Extract", "Wand",
    "Oil of ", "Antidote", "Antitoxin", "Holy Water",
    "Flask", "Alchemist",
)
