"""
Item projection: raw item entities to ItemInstance.
"""

import logging
import re
from typing import List, Optional

from ..catalog import BlueprintCatalog
from ..classification import ItemClassifier
from ..save_data import ReferenceResolver, SourceNode, TYPE_KEY
from .models import ItemInstance
from .shapes import ITEM_BLUEPRINT_KEYS, enchantment_entries

ENHANCEMENT_BONUS = "enhancement bonus"

_ITEM_BONUS = re.compile(r"\+([1-6])(?!\d)")
_NUMBER = re.compile(r"\d+")


def is_listable_name(name: Optional[str]) -> bool:
    """Check that a catalog name can be shown (not empty, "None" or a placeholder)."""
    return bool(name) and name != "None" and not BlueprintCatalog.is_placeholder(name)


def is_redundant_enchantment(enchantment_name: str, item_name: str) -> bool:
    """Check whether an enhancement bonus is already spelled out in the item name.

    "Longsword +2" makes "Enhancement Bonus 2" redundant. An enchantment name
    without its own number is redundant whenever the item carries a +N.
    """
    if ENHANCEMENT_BONUS not in enchantment_name.lower():
        return False
    item_bonus = _ITEM_BONUS.search(item_name)
    if item_bonus is None:
        return False
    own_bonus = _NUMBER.search(enchantment_name)
    return own_bonus is None or own_bonus.group(0) == item_bonus.group(1)


def blueprint_of(item: SourceNode) -> Optional[str]:
    """Return the blueprint GUID of an item entity (m_Blueprint or Blueprint)."""
    if not isinstance(item, dict):
        return None
    for key in ITEM_BLUEPRINT_KEYS:
        value = item.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def count_of(item: SourceNode, default: int = 1) -> int:
    """Return the stack size of an item entity (m_Count, default 1)."""
    if isinstance(item, dict):
        value = item.get("m_Count")
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return default


class ItemProjector:
    """Builds ItemInstance values from item entities of one document."""

    def __init__(
        self,
        resolver: ReferenceResolver,
        catalog: BlueprintCatalog,
        classifier: Optional[ItemClassifier] = None,
    ):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.resolver = resolver
        self.catalog = catalog
        self.classifier = classifier or ItemClassifier()

    def enchantment_names(self, item: SourceNode, item_name: str) -> List[str]:
        """Return the displayable enchantment names of an item.

        Args:
            item: Resolved item entity
            item_name: Display name of the item, for redundancy suppression

        Returns:
            Names in save order, without unresolvable or redundant entries
        """
        if not isinstance(item, dict):
            return []
        names: List[str] = []
        for entry in enchantment_entries(item.get("m_Enchantments"), self.resolver):
            enchantment = self.resolver.resolve(entry)
            blueprint_id = blueprint_of(enchantment)
            if not blueprint_id:
                continue
            name = self.catalog.name(blueprint_id)
            if not is_listable_name(name):
                continue
            if is_redundant_enchantment(name, item_name):
                continue
            names.append(name)
        return names

    def project(self, node: SourceNode, quantity: Optional[int] = None) -> Optional[ItemInstance]:
        """Project one item entity.

        Args:
            node: Item entity or a reference to one
            quantity: Stack size override (defaults to the entity's m_Count)

        Returns:
            The item, or None when it has no blueprint or the catalog
            cannot name it
        """
        item = self.resolver.resolve(node)
        blueprint_id = blueprint_of(item)
        if not blueprint_id:
            return None
        name = self.catalog.name(blueprint_id)
        if not is_listable_name(name):
            self.logger.debug(f"Dropping unnamed item {blueprint_id}")
            return None

        structural_type = item.get(TYPE_KEY)
        return self._build(
            blueprint_id,
            name,
            enchantments=self.enchantment_names(item, name),
            structural_type=structural_type if isinstance(structural_type, str) else None,
            quantity=quantity if quantity is not None else count_of(item),
        )

    def project_blueprint(self, blueprint_id: Optional[str], quantity: int = 1) -> Optional[ItemInstance]:
        """Project an item known only by its blueprint GUID."""
        if not blueprint_id:
            return None
        name = self.catalog.name(blueprint_id)
        if not is_listable_name(name):
            return None
        return self._build(blueprint_id, name, quantity=quantity)

    def _build(
        self,
        blueprint_id: str,
        name: str,
        enchantments: Optional[List[str]] = None,
        structural_type: Optional[str] = None,
        quantity: int = 1,
    ) -> ItemInstance:
        subtype_label = self.catalog.subtype_label(blueprint_id)
        category = self.classifier.classify(
            kind=self.catalog.kind(blueprint_id),
            subtype_label=subtype_label,
            structural_type=structural_type,
            display_name=name,
        )
        return ItemInstance(
            name=name,
            blueprint_id=blueprint_id,
            subtype_label=subtype_label,
            enchantments=enchantments or [],
            description=self.catalog.description(blueprint_id),
            quantity=quantity,
            category=category,
        )
