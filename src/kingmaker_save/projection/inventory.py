"""
Inventory projection: the player's personal chest and the shared party
inventory.
"""

import logging
from typing import Optional

from ..save_data import ReferenceResolver, SourceNode
from .items import ItemProjector
from .models import InventoryCollection

INVENTORY_SLOT_KEY = "m_InventorySlotIndex"


class InventoryProjector:
    """Categorizes the item list of one container."""

    def __init__(self, resolver: ReferenceResolver, items: ItemProjector):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.resolver = resolver
        self.items = items

    def collect(self, item_list: SourceNode, carried_only: bool = False) -> InventoryCollection:
        """Project and categorize an item list.

        Args:
            item_list: m_Items array (or a reference to it)
            carried_only: Skip items with a negative inventory slot index
                (equipped items appear in the party list too)

        Returns:
            Collection sorted by item name within each category
        """
        collection = InventoryCollection()
        for index, raw_item in enumerate(self.resolver.resolve_list(item_list)):
            try:
                item = self.resolver.resolve_object(raw_item)
                if item is None:
                    continue
                if carried_only and not self._is_carried(item):
                    continue
                projected = self.items.project(item)
            except Exception as e:
                self.logger.warning(f"Failed to parse inventory item #{index}: {e}")
                continue
            if projected is not None:
                collection.add(projected)
        collection.sort()
        return collection

    @staticmethod
    def _is_carried(item: dict) -> bool:
        slot = item.get(INVENTORY_SLOT_KEY)
        return isinstance(slot, int) and slot >= 0

    def personal_chest(self, player_root: SourceNode) -> InventoryCollection:
        """Items in the player's shared stash."""
        return self.collect(self.resolver.get(player_root, "SharedStash", "m_Items"))

    def shared_inventory(self, party_root: SourceNode) -> InventoryCollection:
        """Items carried by the party (held on the first unit's descriptor)."""
        first_unit = self._first_unit(party_root)
        if first_unit is None:
            return InventoryCollection()
        items = self.resolver.get(first_unit, "Descriptor", "m_Inventory", "m_Items")
        return self.collect(items, carried_only=True)

    def _first_unit(self, party_root: SourceNode) -> Optional[dict]:
        units = self.resolver.resolve_list(self.resolver.get(party_root, "m_EntityData"))
        return self.resolver.resolve_object(units[0]) if units else None
