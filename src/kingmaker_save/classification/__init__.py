"""
Item classification into weapon, armor, accessory, consumable and
miscellaneous categories.
"""

from .categories import ItemCategory
from .policy import (
    ItemClassifier,
    category_from_kind,
    category_from_structural_type,
    category_from_subtype,
    category_from_name,
    is_weapon_subtype,
    is_armor_subtype,
    is_accessory_name,
    is_consumable_name,
)

__all__ = [
    "ItemCategory",
    "ItemClassifier",
    "category_from_kind",
    "category_from_structural_type",
    "category_from_subtype",
    "category_from_name",
    "is_weapon_subtype",
    "is_armor_subtype",
    "is_accessory_name",
    "is_consumable_name",
]
