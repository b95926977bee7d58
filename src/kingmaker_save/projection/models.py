"""
Data models for the projected save state.

These are the normalized, report-ready entities built from a save. Every
model serializes to a plain dict with snake_case keys; fields that are None
(sections excluded by options, or data the save does not have) are left
out of the serialized form.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from ..classification import ItemCategory


def compact(data: Dict[str, Any]) -> Dict[str, Any]:
    """Drop None values from a serialized mapping."""
    return {key: value for key, value in data.items() if value is not None}


# =============================================================================
# Items and Equipment
# =============================================================================

@dataclass
class ItemInstance:
    """One item with its catalog metadata resolved.

    The name is never a placeholder; items the catalog cannot name are
    dropped before an ItemInstance is built.
    """
    name: str
    blueprint_id: str
    subtype_label: Optional[str] = None
    enchantments: List[str] = field(default_factory=list)
    description: Optional[str] = None
    quantity: int = 1
    category: ItemCategory = ItemCategory.UNCLASSIFIED

    def to_dict(self) -> Dict[str, Any]:
        return compact({
            "name": self.name,
            "type": self.subtype_label,
            "count": self.quantity,
            "category": self.category.listing_category.value,
            "enchantments": list(self.enchantments) or None,
            "description": self.description,
        })


class EquipmentSlot(Enum):
    """The ten fixed armor and accessory positions of a character body."""

    BODY = "body"
    HEAD = "head"
    NECK = "neck"
    BELT = "belt"
    CLOAK = "cloak"
    RING1 = "ring1"
    RING2 = "ring2"
    BRACERS = "bracers"
    GLOVES = "gloves"
    BOOTS = "boots"

    @property
    def label(self) -> str:
        """Human-readable slot name."""
        return _SLOT_LABELS[self]


_SLOT_LABELS = {
    EquipmentSlot.BODY: "Body",
    EquipmentSlot.HEAD: "Head",
    EquipmentSlot.NECK: "Neck",
    EquipmentSlot.BELT: "Belt",
    EquipmentSlot.CLOAK: "Cloak",
    EquipmentSlot.RING1: "Ring 1",
    EquipmentSlot.RING2: "Ring 2",
    EquipmentSlot.BRACERS: "Bracers",
    EquipmentSlot.GLOVES: "Gloves",
    EquipmentSlot.BOOTS: "Boots",
}


@dataclass
class WeaponSet:
    """A main-hand/off-hand pair. set_number is 1-based."""
    set_number: int
    main_hand: Optional[ItemInstance] = None
    off_hand: Optional[ItemInstance] = None

    def to_dict(self) -> Dict[str, Any]:
        return compact({
            "set_number": self.set_number,
            "main_hand": self.main_hand.to_dict() if self.main_hand else None,
            "off_hand": self.off_hand.to_dict() if self.off_hand else None,
        })


@dataclass
class Equipment:
    """Everything a character has equipped."""
    weapon_sets: List[WeaponSet] = field(default_factory=list)
    active_index: int = 0
    slots: Dict[EquipmentSlot, Optional[ItemInstance]] = field(
        default_factory=lambda: {slot: None for slot in EquipmentSlot}
    )
    quick_slots: List[ItemInstance] = field(default_factory=list)

    @property
    def active_set(self) -> Optional[WeaponSet]:
        """The weapon set currently in the character's hands."""
        if 0 <= self.active_index < len(self.weapon_sets):
            return self.weapon_sets[self.active_index]
        return None

    def slot(self, slot: EquipmentSlot) -> Optional[ItemInstance]:
        return self.slots.get(slot)

    def to_dict(self) -> Dict[str, Any]:
        active = self.active_set
        data: Dict[str, Any] = {
            "weapon_sets": [weapon_set.to_dict() for weapon_set in self.weapon_sets],
            "active_weapon_set_index": self.active_index,
            "main_hand": active.main_hand.to_dict() if active and active.main_hand else None,
            "off_hand": active.off_hand.to_dict() if active and active.off_hand else None,
        }
        for slot in EquipmentSlot:
            item = self.slots.get(slot)
            data[slot.value] = item.to_dict() if item else None
        data["quick_slots"] = [item.to_dict() for item in self.quick_slots] or None
        return compact(data)


# =============================================================================
# Characters
# =============================================================================

ATTRIBUTE_NAMES = ("Strength", "Dexterity", "Constitution", "Intelligence", "Wisdom", "Charisma")


@dataclass
class Attributes:
    """The six ability scores; a missing score reads as 0."""
    strength: int = 0
    dexterity: int = 0
    constitution: int = 0
    intelligence: int = 0
    wisdom: int = 0
    charisma: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "strength": self.strength,
            "dexterity": self.dexterity,
            "constitution": self.constitution,
            "intelligence": self.intelligence,
            "wisdom": self.wisdom,
            "charisma": self.charisma,
        }


@dataclass
class Skills:
    """Skill ranks; None when the save has no value for a skill."""
    mobility: Optional[int] = None
    athletics: Optional[int] = None
    stealth: Optional[int] = None
    thievery: Optional[int] = None
    knowledge_arcana: Optional[int] = None
    knowledge_world: Optional[int] = None
    lore_nature: Optional[int] = None
    lore_religion: Optional[int] = None
    perception: Optional[int] = None
    persuasion: Optional[int] = None
    use_magic_device: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return compact(dict(self.__dict__))


@dataclass
class ClassLevel:
    class_name: str
    level: int
    archetype: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return compact({
            "class_name": self.class_name,
            "archetype": self.archetype,
            "level": self.level,
        })


@dataclass
class LevelProgression:
    level: int
    features: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"level": self.level, "features": list(self.features)}


@dataclass
class Spellbook:
    """Spell slots and known spells of one casting class."""
    name: str
    caster_level: int = 0
    is_spontaneous: bool = False
    slots_per_day: Dict[int, int] = field(default_factory=dict)
    domain_slot_levels: List[int] = field(default_factory=list)
    known_spells: Dict[int, List[str]] = field(default_factory=dict)

    def describe_slots(self, level: int) -> str:
        """Render the slot count of a spell level.

        A level with a domain slot and more than one slot in total is shown
        as base slots plus one domain slot; the total is unchanged.
        """
        count = self.slots_per_day.get(level, 0)
        if level in self.domain_slot_levels and count > 1:
            base = count - 1
            return f"{base} slot{'s' if base != 1 else ''} + 1 domain slot"
        return f"{count} slot{'s' if count != 1 else ''}"

    def to_dict(self) -> Dict[str, Any]:
        return compact({
            "class_name": self.name,
            "caster_level": self.caster_level,
            "is_spontaneous": self.is_spontaneous,
            "spell_slots_per_day": {str(level): count for level, count in self.slots_per_day.items()},
            "domain_slot_levels": list(self.domain_slot_levels) or None,
            "known_spells": {str(level): list(spells) for level, spells in self.known_spells.items()},
        })


@dataclass
class Character:
    """A playable party member.

    Optional sections are None when excluded by report options or absent
    from the save.
    """
    name: str
    custom_name: Optional[str] = None
    race: Optional[str] = None
    alignment: Optional[str] = None
    classes: Optional[List[ClassLevel]] = None
    attributes: Optional[Attributes] = None
    skills: Optional[Skills] = None
    equipment: Optional[Equipment] = None
    spellbooks: Optional[List[Spellbook]] = None
    level_progression: Optional[List[LevelProgression]] = None

    def to_dict(self) -> Dict[str, Any]:
        return compact({
            "name": self.name,
            "race": self.race,
            "alignment": self.alignment,
            "classes": [c.to_dict() for c in self.classes] if self.classes is not None else None,
            "attributes": self.attributes.to_dict() if self.attributes else None,
            "skills": self.skills.to_dict() if self.skills else None,
            "equipment": self.equipment.to_dict() if self.equipment else None,
            "spellbooks": (
                [s.to_dict() for s in self.spellbooks] if self.spellbooks is not None else None
            ),
            "level_progression": (
                [p.to_dict() for p in self.level_progression]
                if self.level_progression is not None
                else None
            ),
        })


# =============================================================================
# Kingdom and Settlements
# =============================================================================

class AdvisorStatus(Enum):
    """State of an advisor position."""

    ASSIGNED = "Assigned"
    VACANT = "Vacant"
    """Position available but nobody appointed."""

    LOCKED = "Locked"
    """Kingdom stat requirements for the position are not met yet."""


@dataclass
class KingdomStat:
    type: str
    value: int = 0
    rank: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "value": self.value, "rank": self.rank}


@dataclass
class Advisor:
    position: str
    status: AdvisorStatus
    advisor: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return compact({
            "position": self.position,
            "advisor": self.advisor,
            "status": self.status.value,
        })


@dataclass
class Kingdom:
    name: Optional[str] = None
    alignment: Optional[str] = None
    days: int = 0
    game_time: Optional[str] = None
    gold: int = 0
    build_points: int = 0
    build_points_per_turn: Optional[int] = None
    unrest: Optional[str] = None
    stats: List[KingdomStat] = field(default_factory=list)
    advisors: Optional[List[Advisor]] = None

    def to_dict(self) -> Dict[str, Any]:
        return compact({
            "name": self.name,
            "alignment": self.alignment,
            "kingdom_days": self.days,
            "game_time": self.game_time,
            "gold": self.gold,
            "build_points": self.build_points,
            "build_points_per_turn": self.build_points_per_turn,
            "unrest_level": self.unrest,
            "stats": [stat.to_dict() for stat in self.stats],
            "advisors": (
                [advisor.to_dict() for advisor in self.advisors]
                if self.advisors is not None
                else None
            ),
        })


@dataclass
class Artisan:
    name: str
    production_started_on: int = 0
    production_ends_on: int = 0
    building_unlocked: bool = False
    tiers_unlocked: int = 0
    help_project_event: Optional[str] = None
    previous_items: List[ItemInstance] = field(default_factory=list)
    current_production: List[ItemInstance] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return compact({
            "name": self.name,
            "production_started_on": self.production_started_on,
            "production_ends_on": self.production_ends_on,
            "building_unlocked": self.building_unlocked,
            "tiers_unlocked": self.tiers_unlocked,
            "help_project_event": self.help_project_event,
            "previous_items": [item.to_dict() for item in self.previous_items],
            "current_production": [item.to_dict() for item in self.current_production],
        })


@dataclass
class Settlement:
    region_name: str
    settlement_name: Optional[str] = None
    level: Optional[str] = None
    is_claimed: bool = False
    buildings: List[str] = field(default_factory=list)
    artisans: List[Artisan] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return compact({
            "region_name": self.region_name,
            "settlement_name": self.settlement_name,
            "level": self.level,
            "is_claimed": self.is_claimed,
            "buildings": list(self.buildings),
            "artisans": [artisan.to_dict() for artisan in self.artisans] or None,
        })


# =============================================================================
# Inventory and Combined State
# =============================================================================

@dataclass
class InventoryCollection:
    """Items of one container, grouped by listing category."""
    weapons: List[ItemInstance] = field(default_factory=list)
    armor: List[ItemInstance] = field(default_factory=list)
    accessories: List[ItemInstance] = field(default_factory=list)
    consumables: List[ItemInstance] = field(default_factory=list)
    other: List[ItemInstance] = field(default_factory=list)

    def add(self, item: ItemInstance) -> None:
        """File an item under its listing category."""
        category = item.category.listing_category
        if category is ItemCategory.WEAPON:
            self.weapons.append(item)
        elif category is ItemCategory.ARMOR:
            self.armor.append(item)
        elif category is ItemCategory.ACCESSORY:
            self.accessories.append(item)
        elif category is ItemCategory.CONSUMABLE:
            self.consumables.append(item)
        else:
            self.other.append(item)

    def sort(self) -> None:
        """Sort every category by item name."""
        for items in self.groups().values():
            items.sort(key=lambda item: item.name)

    def groups(self) -> Dict[str, List[ItemInstance]]:
        return {
            "weapons": self.weapons,
            "armor": self.armor,
            "accessories": self.accessories,
            "consumables": self.consumables,
            "other": self.other,
        }

    @property
    def unique_items(self) -> int:
        return sum(len(items) for items in self.groups().values())

    @property
    def total_items(self) -> int:
        return sum(item.quantity for items in self.groups().values() for item in items)

    @property
    def is_empty(self) -> bool:
        return self.unique_items == 0

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            name: [item.to_dict() for item in items] for name, items in self.groups().items()
        }
        data["total_items"] = self.total_items
        data["unique_items"] = self.unique_items
        return data


@dataclass
class Inventory:
    personal_chest: InventoryCollection = field(default_factory=InventoryCollection)
    shared_inventory: InventoryCollection = field(default_factory=InventoryCollection)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "personal_chest": self.personal_chest.to_dict(),
            "shared_inventory": self.shared_inventory.to_dict(),
        }


@dataclass
class CurrentState:
    """The complete projection of one save."""
    kingdom: Optional[Kingdom] = None
    characters: Optional[List[Character]] = None
    settlements: Optional[List[Settlement]] = None
    explored_locations: Optional[List[str]] = None
    inventory: Optional[Inventory] = None

    def to_dict(self) -> Dict[str, Any]:
        return compact({
            "kingdom": self.kingdom.to_dict() if self.kingdom else None,
            "characters": (
                [c.to_dict() for c in self.characters] if self.characters is not None else None
            ),
            "settlements": (
                [s.to_dict() for s in self.settlements] if self.settlements is not None else None
            ),
            "explored_locations": (
                list(self.explored_locations) if self.explored_locations is not None else None
            ),
            "inventory": self.inventory.to_dict() if self.inventory else None,
        })
