"""
Equipment projection: a character body to weapon sets, armor and
accessory slots and quick slots.
"""

import logging
from typing import Dict, List, Optional, Tuple

from ..save_data import ReferenceResolver, SourceNode, SourceObject
from .items import ItemProjector
from .models import Equipment, EquipmentSlot, ItemInstance, WeaponSet
from .shapes import slot_item

# Body field names per slot; older saves use the m_-prefixed form
SLOT_SOURCES: Dict[EquipmentSlot, Tuple[str, ...]] = {
    EquipmentSlot.BODY: ("Armor", "m_Armor"),
    EquipmentSlot.HEAD: ("Head", "m_Head"),
    EquipmentSlot.NECK: ("Neck", "m_Neck"),
    EquipmentSlot.BELT: ("Belt", "m_Belt"),
    EquipmentSlot.CLOAK: ("Shoulders", "m_Shoulders"),
    EquipmentSlot.RING1: ("Ring1", "m_Ring1"),
    EquipmentSlot.RING2: ("Ring2", "m_Ring2"),
    EquipmentSlot.BRACERS: ("Wrist", "m_Wrist"),
    EquipmentSlot.GLOVES: ("Gloves", "m_Gloves"),
    EquipmentSlot.BOOTS: ("Feet", "m_Feet"),
}

HAND_SETS_KEY = "m_HandsEquipmentSets"
ACTIVE_SET_KEY = "m_CurrentHandsEquipmentSetIndex"
QUICK_SLOTS_KEY = "m_QuickSlots"
LEGACY_HAND_KEYS = ("m_PrimaryHand", "m_SecondaryHand")


class EquipmentProjector:
    """Projects the Body node of a unit descriptor."""

    def __init__(self, resolver: ReferenceResolver, items: ItemProjector):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.resolver = resolver
        self.items = items

    def project(self, descriptor: SourceObject) -> Optional[Equipment]:
        """Project the equipment of a unit descriptor.

        Returns:
            Equipment, or None when the descriptor has no usable Body
        """
        body = self.resolver.resolve_object(descriptor.get("Body"))
        if body is None:
            return None

        weapon_sets = self._weapon_sets(body)
        return Equipment(
            weapon_sets=weapon_sets,
            active_index=self._active_index(body, len(weapon_sets)),
            slots={slot: self._slot(body, keys) for slot, keys in SLOT_SOURCES.items()},
            quick_slots=self._quick_slots(body),
        )

    def _item_in(self, slot: SourceNode) -> Optional[ItemInstance]:
        item = slot_item(slot, self.resolver)
        return self.items.project(item) if item is not None else None

    def _slot(self, body: SourceObject, keys: Tuple[str, ...]) -> Optional[ItemInstance]:
        for key in keys:
            if body.get(key) is not None:
                return self._item_in(body[key])
        return None

    def _weapon_sets(self, body: SourceObject) -> List[WeaponSet]:
        if HAND_SETS_KEY in body:
            sets: List[WeaponSet] = []
            for index, raw_set in enumerate(self.resolver.resolve_list(body[HAND_SETS_KEY])):
                hand_set = self.resolver.resolve_object(raw_set) or {}
                sets.append(
                    WeaponSet(
                        set_number=index + 1,
                        main_hand=self._item_in(hand_set.get("PrimaryHand")),
                        off_hand=self._item_in(hand_set.get("SecondaryHand")),
                    )
                )
            return sets

        # Bodies without hand sets hold a single pair directly
        primary, secondary = LEGACY_HAND_KEYS
        if primary in body or secondary in body:
            return [
                WeaponSet(
                    set_number=1,
                    main_hand=self._item_in(body.get(primary)),
                    off_hand=self._item_in(body.get(secondary)),
                )
            ]
        return []

    def _active_index(self, body: SourceObject, set_count: int) -> int:
        value = body.get(ACTIVE_SET_KEY)
        index = value if isinstance(value, int) and not isinstance(value, bool) else 0
        if set_count == 0:
            return 0
        if not 0 <= index < set_count:
            self.logger.warning(
                f"Active weapon set index {index} out of range for {set_count} sets"
            )
            index = min(max(index, 0), set_count - 1)
        return index

    def _quick_slots(self, body: SourceObject) -> List[ItemInstance]:
        quick: List[ItemInstance] = []
        for slot in self.resolver.resolve_list(body.get(QUICK_SLOTS_KEY)):
            item = self._item_in(slot)
            if item is not None:
                quick.append(item)
        return quick
