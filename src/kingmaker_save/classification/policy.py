"""
Item classification policy.

No single signal is reliable for every item: the catalog and the save
format are versioned independently and each has gaps. The classifier asks
a fixed sequence of tiers and takes the first decision:

1. catalog kind (blueprint class name), derived offline with the catalog
2. runtime entity type ("$type") on the item instance
3. equipment subtype label, against weapon then armor vocabularies
4. display name keywords, consumables first, then accessories
"""

import logging
import re
from typing import Callable, List, Optional, Pattern, Tuple

from .categories import (
    ItemCategory,
    KIND_WEAPON,
    KIND_ARMOR,
    KIND_SHIELD,
    KIND_USABLE,
    KIND_EQUIPMENT_PREFIX,
    ENTITY_WEAPON,
    ENTITY_ARMOR,
    ENTITY_SHIELD,
    ENTITY_USABLE,
    WEAPON_SUBTYPES,
    ARMOR_SUBTYPES,
    ACCESSORY_WHOLE_WORDS,
    ACCESSORY_SUBSTRINGS,
    CONSUMABLE_SUBSTRINGS,
)

logger = logging.getLogger(__name__)


def _contains_any(text: str, keywords: Tuple[str, ...]) -> bool:
    lowered = text.lower()
    return any(keyword.lower() in lowered for keyword in keywords)


def _whole_word_patterns(words: Tuple[str, ...]) -> List[Pattern[str]]:
    return [re.compile(rf"\b{re.escape(word)}\b", re.IGNORECASE) for word in words]


_ACCESSORY_WORD_PATTERNS = _whole_word_patterns(ACCESSORY_WHOLE_WORDS)


def category_from_kind(kind: Optional[str]) -> Optional[ItemCategory]:
    """Decide from the catalog kind tag (e.g. "BlueprintItemWeapon")."""
    if not kind:
        return None
    normalized = kind.replace(" ", "").lower()
    if normalized.startswith(KIND_WEAPON):
        return ItemCategory.WEAPON
    if normalized.startswith(KIND_ARMOR) or normalized.startswith(KIND_SHIELD):
        return ItemCategory.ARMOR
    if normalized.startswith(KIND_USABLE):
        return ItemCategory.CONSUMABLE
    if normalized.startswith(KIND_EQUIPMENT_PREFIX):
        return ItemCategory.ACCESSORY
    return None


def category_from_structural_type(structural_type: Optional[str]) -> Optional[ItemCategory]:
    """Decide from the runtime entity type string of the item instance."""
    if not structural_type:
        return None
    lowered = structural_type.lower()
    if ENTITY_WEAPON.lower() in lowered:
        return ItemCategory.WEAPON
    if ENTITY_ARMOR.lower() in lowered or ENTITY_SHIELD.lower() in lowered:
        return ItemCategory.ARMOR
    if ENTITY_USABLE.lower() in lowered:
        return ItemCategory.CONSUMABLE
    # ItemEntitySimple and anything unknown need further signals
    return None


def is_weapon_subtype(subtype_label: Optional[str]) -> bool:
    """Check a subtype label against the weapon vocabulary."""
    return bool(subtype_label) and _contains_any(subtype_label, WEAPON_SUBTYPES)


def is_armor_subtype(subtype_label: Optional[str]) -> bool:
    """Check a subtype label against the armor and shield vocabulary."""
    return bool(subtype_label) and _contains_any(subtype_label, ARMOR_SUBTYPES)


def category_from_subtype(subtype_label: Optional[str]) -> Optional[ItemCategory]:
    """Decide from the equipment subtype label (e.g. "Heavy Shield")."""
    if is_weapon_subtype(subtype_label):
        return ItemCategory.WEAPON
    if is_armor_subtype(subtype_label):
        return ItemCategory.ARMOR
    return None


def is_consumable_name(display_name: Optional[str]) -> bool:
    """Check a display name for consumable keywords (substring match)."""
    return bool(display_name) and _contains_any(display_name, CONSUMABLE_SUBSTRINGS)


def is_accessory_name(display_name: Optional[str]) -> bool:
    """Check a display name for accessory keywords.

    Short words must match as whole words; longer ones by substring.
    """
    if not display_name:
        return False
    if any(pattern.search(display_name) for pattern in _ACCESSORY_WORD_PATTERNS):
        return True
    return _contains_any(display_name, ACCESSORY_SUBSTRINGS)


def category_from_name(display_name: Optional[str]) -> Optional[ItemCategory]:
    """Decide from display name keywords."""
    if is_consumable_name(display_name):
        return ItemCategory.CONSUMABLE
    if is_accessory_name(display_name):
        return ItemCategory.ACCESSORY
    return None


class ItemClassifier:
    """Ordered fallback chain over the four classification tiers."""

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._tiers: List[Tuple[str, Callable[..., Optional[ItemCategory]]]] = [
            ("kind", category_from_kind),
            ("structural_type", category_from_structural_type),
            ("subtype_label", category_from_subtype),
            ("display_name", category_from_name),
        ]

    def classify(
        self,
        kind: Optional[str] = None,
        subtype_label: Optional[str] = None,
        structural_type: Optional[str] = None,
        display_name: Optional[str] = None,
    ) -> ItemCategory:
        """Decide the category of one item instance.

        Args:
            kind: Catalog blueprint class name
            subtype_label: Catalog equipment subtype label
            structural_type: "$type" of the item instance
            display_name: Resolved item name

        Returns:
            The first tier's decision, or UNCLASSIFIED when no tier decides
        """
        signals = {
            "kind": kind,
            "structural_type": structural_type,
            "subtype_label": subtype_label,
            "display_name": display_name,
        }
        for tier_name, tier in self._tiers:
            category = tier(signals[tier_name])
            if category is not None:
                return category

        self.logger.debug(f"No classification signal for item '{display_name}'")
        return ItemCategory.UNCLASSIFIED
