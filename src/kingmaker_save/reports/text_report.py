"""
Plain-text report materializer.

Each section renders to a string first (render_* functions) so layouts can
be checked without touching the filesystem; TextReportWriter then writes
one file per non-empty section plus CurrentState.txt.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from ..projection import (
    Character,
    CurrentState,
    Equipment,
    EquipmentSlot,
    Inventory,
    InventoryCollection,
    ItemInstance,
    Kingdom,
    ReportOptions,
    Settlement,
    Spellbook,
    AdvisorStatus,
)

KINGDOM_FILE = "kingdom_stats.txt"
CHARACTERS_FILE = "all_characters.txt"
SETTLEMENTS_FILE = "settlements.txt"
LOCATIONS_FILE = "explored_locations.txt"
INVENTORY_FILE = "inventory.txt"
STATE_FILE = "CurrentState.txt"
WARNINGS_FILE = "warnings.txt"

HEAVY_RULE = "=" * 80
LIGHT_RULE = "-" * 80
EMPTY_SLOT = "(empty)"

ARMOR_SLOTS = (EquipmentSlot.BODY,)
ACCESSORY_SLOTS = (
    EquipmentSlot.HEAD,
    EquipmentSlot.NECK,
    EquipmentSlot.BELT,
    EquipmentSlot.CLOAK,
    EquipmentSlot.RING1,
    EquipmentSlot.RING2,
    EquipmentSlot.BRACERS,
    EquipmentSlot.GLOVES,
    EquipmentSlot.BOOTS,
)

SKILL_LABELS = (
    ("mobility", "Mobility"),
    ("athletics", "Athletics"),
    ("stealth", "Stealth"),
    ("thievery", "Thievery"),
    ("knowledge_arcana", "Knowledge (Arcana)"),
    ("knowledge_world", "Knowledge (World)"),
    ("lore_nature", "Lore (Nature)"),
    ("lore_religion", "Lore (Religion)"),
    ("perception", "Perception"),
    ("persuasion", "Persuasion"),
    ("use_magic_device", "Use Magic Device"),
)

INVENTORY_HEADERS = (
    ("weapons", "WEAPONS:"),
    ("armor", "ARMOR & SHIELDS:"),
    ("accessories", "ACCESSORIES (Belts, Amulets, Rings, etc.):"),
    ("consumables", "USABLES (Potions, Scrolls, Flasks, etc.):"),
    ("other", "OTHER ITEMS:"),
)


def _text(lines: Iterable[str]) -> str:
    return "\n".join(lines) + "\n"


def describe_item(item: Optional[ItemInstance], show_enchantments: bool = True) -> str:
    """One-line item description: "Name [Type] (Enchantment, ...)"."""
    if item is None:
        return EMPTY_SLOT
    result = item.name
    if item.subtype_label:
        result += f" [{item.subtype_label}]"
    if show_enchantments and item.enchantments:
        result += f" ({', '.join(item.enchantments)})"
    return result


# =============================================================================
# Kingdom
# =============================================================================

def render_kingdom(kingdom: Kingdom) -> str:
    lines = [
        "=== KINGDOM STATISTICS ===",
        "",
        f"Kingdom Name: {kingdom.name or ''}",
        f"Alignment: {kingdom.alignment or ''}",
        f"Game Time: {kingdom.game_time or ''}",
        f"Days: {kingdom.days}",
        f"Gold: {kingdom.gold:,}",
        f"Build Points: {kingdom.build_points}",
        "Build Points Per Turn: "
        + (str(kingdom.build_points_per_turn) if kingdom.build_points_per_turn is not None else "Unknown"),
        f"Unrest Level: {kingdom.unrest or ''}",
        "",
    ]
    if kingdom.stats:
        lines.append("Kingdom Stats:")
        for stat in kingdom.stats:
            lines.append(f"  {stat.type:<15} Value: {stat.value:>3}  Rank: {stat.rank}")
        lines.append("")
    if kingdom.advisors:
        lines.append("Advisors:")
        for advisor in kingdom.advisors:
            if advisor.advisor:
                assigned = advisor.advisor
            elif advisor.status is AdvisorStatus.LOCKED:
                assigned = "Locked"
            else:
                assigned = "Unassigned"
            lines.append(f"  {advisor.position:<20} {assigned}")
    return _text(lines)


# =============================================================================
# Characters
# =============================================================================

def render_equipment(equipment: Equipment, options: ReportOptions) -> List[str]:
    """Equipment block of a character."""
    lines = ["EQUIPMENT", HEAVY_RULE]
    show = options.show_enchantments

    if options.include_all_weapon_sets:
        for weapon_set in equipment.weapon_sets:
            marker = " (active)" if weapon_set is equipment.active_set else ""
            lines.append("")
            lines.append(f"Weapon Set {weapon_set.set_number}{marker}:")
            lines.append(f"  Main Hand:  {describe_item(weapon_set.main_hand, show)}")
            lines.append(f"  Off Hand:   {describe_item(weapon_set.off_hand, show)}")
    elif options.include_active_weapon_set and equipment.active_set is not None:
        active = equipment.active_set
        lines.append("")
        lines.append(f"Active Weapon Set (Set {active.set_number}):")
        lines.append(f"  Main Hand:  {describe_item(active.main_hand, show)}")
        lines.append(f"  Off Hand:   {describe_item(active.off_hand, show)}")

    slots: List[EquipmentSlot] = []
    if options.include_armor:
        slots.extend(ARMOR_SLOTS)
    if options.include_accessories:
        slots.extend(ACCESSORY_SLOTS)
    if slots:
        lines.append("")
        lines.append("Armor & Accessories:")
        for slot in slots:
            item = equipment.slot(slot)
            if item is None and not options.show_empty_slots:
                continue
            lines.append(f"  {slot.label:<10}: {describe_item(item, show)}")

    if equipment.quick_slots:
        lines.append("")
        lines.append("Quick Slots:")
        for index, item in enumerate(equipment.quick_slots, start=1):
            lines.append(f"  Slot {index}: {describe_item(item, show)}")
    return lines


def render_spellbook(spellbook: Spellbook) -> List[str]:
    kind = "spontaneous" if spellbook.is_spontaneous else "prepared"
    lines = [f"  {spellbook.name} ({kind}):", f"    Caster Level: {spellbook.caster_level}"]
    if spellbook.slots_per_day:
        lines.append("    Spell Slots Per Day:")
        for level in sorted(spellbook.slots_per_day):
            lines.append(f"      Level {level}: {spellbook.describe_slots(level)}")
    if spellbook.known_spells:
        lines.append("    Known Spells:")
        for level in sorted(spellbook.known_spells):
            spells = spellbook.known_spells[level]
            if spells:
                lines.append(f"      Level {level}: {', '.join(spells)}")
    return lines


def render_character(character: Character, options: ReportOptions) -> List[str]:
    """Full text block of one character."""
    lines = ["=== CHARACTER BUILD ANALYSIS ===", "", f"Character Name: {character.name}"]
    if character.alignment:
        lines.append(f"Alignment: {character.alignment}")
    if character.attributes is not None:
        a = character.attributes
        lines.append(
            f"Stats: Str {a.strength}, Dex {a.dexterity}, Con {a.constitution}, "
            f"Int {a.intelligence}, Wis {a.wisdom}, Cha {a.charisma}"
        )
    if character.race:
        lines.append(f"Race - {character.race}")
    for class_level in character.classes or []:
        line = f"Class - {class_level.class_name} lvl {class_level.level}"
        if class_level.archetype:
            line += f" ({class_level.archetype})"
        lines.append(line)

    if character.skills is not None:
        skills = character.skills
        skill_lines = [
            f"  {label:<25} {getattr(skills, field_name):>3}"
            for field_name, label in SKILL_LABELS
            if getattr(skills, field_name) is not None
        ]
        if skill_lines:
            lines.append("")
            lines.append("Skills:")
            lines.extend(skill_lines)

    if character.equipment is not None:
        lines.append("")
        lines.extend(render_equipment(character.equipment, options))

    if character.spellbooks:
        lines.append("")
        lines.append("SPELLCASTING")
        lines.append(HEAVY_RULE)
        for spellbook in character.spellbooks:
            lines.extend(render_spellbook(spellbook))

    if character.level_progression:
        lines.append("")
        lines.append("LEVEL-BY-LEVEL BUILD HISTORY")
        lines.append(HEAVY_RULE)
        for progression in character.level_progression:
            lines.append(f"Level {progression.level}: {', '.join(progression.features)}")
    return lines


def render_characters(characters: List[Character], options: ReportOptions) -> str:
    lines: List[str] = []
    for character in characters:
        lines.extend(render_character(character, options))
        lines.append("")
        lines.append(HEAVY_RULE)
        lines.append("")
    return _text(lines)


# =============================================================================
# Settlements and map
# =============================================================================

def _artisan_item(item: ItemInstance) -> str:
    return f"        - {describe_item(item)}"


def render_settlements(settlements: List[Settlement]) -> str:
    lines = ["=== SETTLEMENTS ===", ""]
    for settlement in settlements:
        lines.append(f"Settlement: {settlement.settlement_name or ''}")
        lines.append(f"  Region: {settlement.region_name}")
        lines.append(f"  Level: {settlement.level or ''}")
        lines.append(f"  Status: {'Claimed' if settlement.is_claimed else 'Unclaimed'}")
        if settlement.buildings:
            lines.append(f"  Buildings ({len(settlement.buildings)}):")
            lines.extend(f"    • {building}" for building in settlement.buildings)
        if settlement.is_claimed and settlement.artisans:
            lines.append(f"  Artisans ({len(settlement.artisans)}):")
            for artisan in settlement.artisans:
                lines.append(f"    • {artisan.name}")
                lines.append(f"      Building Unlocked: {'Yes' if artisan.building_unlocked else 'No'}")
                lines.append(f"      Tiers Unlocked: {artisan.tiers_unlocked}/6")
                if artisan.help_project_event:
                    lines.append(f"      Help Project: {artisan.help_project_event}")
                lines.append(f"      Production Started On: Day {artisan.production_started_on}")
                lines.append(f"      Production Ends On: Day {artisan.production_ends_on}")
                if artisan.current_production:
                    lines.append("      Current Production:")
                    lines.extend(_artisan_item(item) for item in artisan.current_production)
                if artisan.previous_items:
                    lines.append("      Previous Items:")
                    lines.extend(_artisan_item(item) for item in artisan.previous_items)
        lines.append("")
    return _text(lines)


def render_explored_locations(locations: List[str]) -> str:
    lines = ["=== EXPLORED LOCATIONS ===", "", f"Total Locations Explored: {len(locations)}", ""]
    lines.extend(f"  • {location}" for location in sorted(locations))
    return _text(lines)


# =============================================================================
# Inventory
# =============================================================================

def render_collection(collection: InventoryCollection) -> List[str]:
    """Categorized item listing with a totals line."""
    if collection.is_empty:
        return [EMPTY_SLOT]
    lines: List[str] = []
    groups = collection.groups()
    for group, header in INVENTORY_HEADERS:
        items = groups[group]
        if not items:
            continue
        lines.append(header)
        for item in items:
            type_str = f" [{item.subtype_label}]" if item.subtype_label else ""
            count_str = f" x{item.quantity}" if item.quantity > 1 else ""
            lines.append(f"  {item.name}{type_str}{count_str}")
        lines.append("")
    lines.append(LIGHT_RULE)
    lines.append(f"Total: {collection.total_items} items ({collection.unique_items} unique)")
    return lines


def render_inventory(inventory: Inventory) -> str:
    lines = ["INVENTORY", HEAVY_RULE, ""]
    lines.append("PERSONAL CHEST (SharedStash):")
    lines.append(LIGHT_RULE)
    lines.extend(render_collection(inventory.personal_chest))
    lines.extend(["", ""])
    lines.append("SHARED PARTY INVENTORY:")
    lines.append(LIGHT_RULE)
    lines.extend(render_collection(inventory.shared_inventory))
    return _text(lines)


# =============================================================================
# Combined state and writer
# =============================================================================

def render_current_state(sections: List[str]) -> str:
    """Concatenate rendered sections into the combined report."""
    lines = [
        HEAVY_RULE,
        "=== CURRENT GAME STATE ===",
        HEAVY_RULE,
        "",
        "This file contains the complete combined information from all other text files.",
        "",
        HEAVY_RULE,
        "",
    ]
    for section in sections:
        lines.append(section.rstrip("\n"))
        lines.extend(["", HEAVY_RULE, ""])
    lines.extend([HEAVY_RULE, "END OF CURRENT GAME STATE", HEAVY_RULE])
    return _text(lines)


def render_sections(state: CurrentState, options: ReportOptions) -> Dict[str, str]:
    """Render every non-empty section, keyed by file name, in report order."""
    sections: Dict[str, str] = {}
    if state.kingdom is not None:
        sections[KINGDOM_FILE] = render_kingdom(state.kingdom)
    if state.characters:
        sections[CHARACTERS_FILE] = render_characters(state.characters, options)
    if state.settlements:
        sections[SETTLEMENTS_FILE] = render_settlements(state.settlements)
    if state.explored_locations:
        sections[LOCATIONS_FILE] = render_explored_locations(state.explored_locations)
    if state.inventory is not None:
        sections[INVENTORY_FILE] = render_inventory(state.inventory)
    return sections


class TextReportWriter:
    """Writes the text reports of a projected save."""

    def __init__(self, output_dir: str | Path, options: Optional[ReportOptions] = None):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.output_dir = Path(output_dir)
        self.options = options or ReportOptions()

    def _write(self, file_name: str, content: str) -> Path:
        path = self.output_dir / file_name
        path.write_text(content, encoding="utf-8")
        self.logger.debug(f"Wrote {path}")
        return path

    def write_all(self, state: CurrentState) -> List[Path]:
        """Write every non-empty section and CurrentState.txt.

        Returns:
            Paths of the files written
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        sections = render_sections(state, self.options)
        written = [self._write(name, content) for name, content in sections.items()]
        written.append(self._write(STATE_FILE, render_current_state(list(sections.values()))))
        self.logger.info(f"Wrote {len(written)} text reports to {self.output_dir}")
        return written

    def write_warnings(self, messages: List[str]) -> Optional[Path]:
        """Write warnings.txt; nothing is written when there are no warnings."""
        if not messages:
            return None
        self.output_dir.mkdir(parents=True, exist_ok=True)
        return self._write(WARNINGS_FILE, _text(messages))
