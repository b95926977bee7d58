"""
Projection of raw save documents into the report model.

Provides the report-ready dataclasses (characters, equipment, spellbooks,
kingdom, settlements, inventory) and the projectors that build them.
"""

from .service import StateProjector, order_characters
from .options import ReportOptions
from .models import (
    ItemInstance,
    EquipmentSlot,
    WeaponSet,
    Equipment,
    Attributes,
    Skills,
    ClassLevel,
    LevelProgression,
    Spellbook,
    Character,
    AdvisorStatus,
    KingdomStat,
    Advisor,
    Kingdom,
    Artisan,
    Settlement,
    InventoryCollection,
    Inventory,
    CurrentState,
)
from .items import ItemProjector
from .equipment import EquipmentProjector
from .spellbooks import SpellbookProjector
from .characters import CharacterProjector
from .inventory import InventoryProjector
from .kingdom import KingdomProjector

# Public exports
__all__ = [
    # Main service
    "StateProjector",
    "order_characters",
    "ReportOptions",
    # Items and equipment
    "ItemInstance",
    "EquipmentSlot",
    "WeaponSet",
    "Equipment",
    # Characters
    "Attributes",
    "Skills",
    "ClassLevel",
    "LevelProgression",
    "Spellbook",
    "Character",
    # Kingdom
    "AdvisorStatus",
    "KingdomStat",
    "Advisor",
    "Kingdom",
    "Artisan",
    "Settlement",
    # Inventory and state
    "InventoryCollection",
    "Inventory",
    "CurrentState",
    # Component classes
    "ItemProjector",
    "EquipmentProjector",
    "SpellbookProjector",
    "CharacterProjector",
    "InventoryProjector",
    "KingdomProjector",
]
