"""
Character projection: party units to Character values.

A unit only counts as a character when its descriptor has progression
data; everything else in the party list is scenery (summons, pets with no
class, cutscene dummies).
"""

import logging
import re
from typing import Any, Callable, Dict, List, Optional

from ..catalog import BlueprintCatalog
from ..save_data import ReferenceResolver, SourceNode, SourceObject, TYPE_KEY
from .equipment import EquipmentProjector
from .items import is_listable_name
from .models import (
    ATTRIBUTE_NAMES,
    Attributes,
    Character,
    ClassLevel,
    Equipment,
    LevelProgression,
    Skills,
)
from .options import ReportOptions
from .spellbooks import SpellbookProjector

SKILL_VALUE_TYPE = "ModifiableValueSkill"
SKILL_PREFIX = "Skill"

SKILL_FIELDS: Dict[str, str] = {
    "SkillMobility": "mobility",
    "SkillAthletics": "athletics",
    "SkillStealth": "stealth",
    "SkillThievery": "thievery",
    "SkillKnowledgeArcana": "knowledge_arcana",
    "SkillKnowledgeWorld": "knowledge_world",
    "SkillLoreNature": "lore_nature",
    "SkillLoreReligion": "lore_religion",
    "SkillPerception": "perception",
    "SkillPersuasion": "persuasion",
    "SkillUseMagicDevice": "use_magic_device",
}

# Feature parameter fields in priority order
PARAMETER_FIELDS = ("WeaponCategory", "SpellSchool", "StatType")

_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")


def humanize(value: str) -> str:
    """Split a CamelCase enum value into words ("BastardSword" -> "Bastard Sword")."""
    return _CAMEL_BOUNDARY.sub(r"\1 \2", value)


def _int(value: Any, default: int = 0) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return default


class CharacterProjector:
    """Projects party units of one party document."""

    def __init__(
        self,
        resolver: ReferenceResolver,
        catalog: BlueprintCatalog,
        equipment: EquipmentProjector,
        spellbooks: SpellbookProjector,
        options: Optional[ReportOptions] = None,
    ):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.resolver = resolver
        self.catalog = catalog
        self.equipment = equipment
        self.spellbooks = spellbooks
        self.options = options or ReportOptions()

    def project_all(self, party_root: SourceNode) -> List[Character]:
        """Project every playable unit in the party document.

        A unit that fails to project is logged and skipped.
        """
        characters: List[Character] = []
        units = self.resolver.get(party_root, "m_EntityData")
        if not isinstance(units, list):
            self.logger.warning("Party document has no m_EntityData unit list")
            return characters

        for index, raw_unit in enumerate(units):
            try:
                character = self.project(raw_unit)
            except Exception as e:
                self.logger.warning(f"Failed to parse unit #{index}: {e}")
                continue
            if character is not None:
                characters.append(character)

        self.logger.info(f"Projected {len(characters)} characters from {len(units)} units")
        return characters

    def project(self, raw_unit: SourceNode) -> Optional[Character]:
        """Project one party unit.

        Returns:
            The character, or None for units without progression data or
            without a usable name
        """
        unit = self.resolver.resolve_object(raw_unit)
        if unit is None:
            return None
        descriptor = self.resolver.resolve_object(unit.get("Descriptor"))
        if descriptor is None:
            return None

        custom_name = descriptor.get("CustomName")
        custom_name = custom_name if isinstance(custom_name, str) and custom_name else None
        base_name = self.catalog.name(self._str(descriptor.get("Blueprint")))
        name = f"{custom_name} ({base_name})" if custom_name else base_name

        progression = self.resolver.resolve_object(descriptor.get("Progression"))
        if progression is None:
            return None
        if not name or name == "None":
            return None

        options = self.options
        character = Character(name=name, custom_name=custom_name)
        character.alignment = self._alignment(descriptor)
        if options.include_race:
            character.race = self._race(progression)
        if options.include_class:
            character.classes = self._classes(progression)

        stats = self.resolver.resolve_object(descriptor.get("Stats"))
        if stats is not None:
            if options.include_stats:
                character.attributes = self._attributes(stats)
            if options.include_skills:
                character.skills = self._skills(stats)

        if options.include_equipment:
            character.equipment = self._section(
                name, "equipment", lambda: self.equipment.project(descriptor), Equipment
            )
        if options.include_spellcasting:
            character.spellbooks = self._section(
                name, "spellbooks", lambda: self.spellbooks.project_all(descriptor), list
            )
        if options.include_level_history:
            character.level_progression = self._section(
                name, "level history", lambda: self._level_history(progression), list
            )
        return character

    def _section(self, name: str, label: str, build: Callable[[], Any], empty: Callable[[], Any]) -> Any:
        """Build one character section; a failure leaves that section empty."""
        try:
            return build()
        except Exception as e:
            self.logger.warning(f"Failed to parse {label} for {name}: {e}")
            return empty()

    @staticmethod
    def _str(value: Any) -> Optional[str]:
        return value if isinstance(value, str) and value else None

    def _alignment(self, descriptor: SourceObject) -> Optional[str]:
        alignment = self.resolver.resolve(descriptor.get("Alignment"))
        if isinstance(alignment, dict):
            alignment = alignment.get("Value", alignment.get("m_Value"))
        return humanize(alignment) if isinstance(alignment, str) and alignment else None

    def _race(self, progression: SourceObject) -> Optional[str]:
        race_id = self._str(progression.get("m_Race", progression.get("Race")))
        return self.catalog.name(race_id) if race_id else None

    def _classes(self, progression: SourceObject) -> List[ClassLevel]:
        classes: List[ClassLevel] = []
        for raw_class in self.resolver.resolve_list(progression.get("Classes")):
            entry = self.resolver.resolve_object(raw_class)
            if entry is None:
                continue
            archetypes = [
                self.catalog.name(archetype)
                for archetype in self.resolver.resolve_list(entry.get("Archetypes"))
                if isinstance(archetype, str)
            ]
            classes.append(
                ClassLevel(
                    class_name=self.catalog.name(self._str(entry.get("CharacterClass"))),
                    level=_int(entry.get("Level")),
                    archetype=", ".join(archetypes) if archetypes else None,
                )
            )
        return classes

    def _attribute(self, stats: SourceObject, attribute: str) -> Optional[SourceObject]:
        return self.resolver.resolve_object(stats.get(attribute))

    def _attributes(self, stats: SourceObject) -> Attributes:
        values: Dict[str, int] = {}
        for attribute in ATTRIBUTE_NAMES:
            stat = self._attribute(stats, attribute)
            values[attribute.lower()] = _int(stat.get("PermanentValue")) if stat else 0
        return Attributes(**values)

    def _skills(self, stats: SourceObject) -> Skills:
        skills = Skills()
        for attribute in ATTRIBUTE_NAMES:
            stat = self._attribute(stats, attribute)
            if stat is None:
                continue
            for raw_dependent in self.resolver.resolve_list(stat.get("m_Dependents")):
                dependent = self.resolver.resolve_object(raw_dependent)
                if dependent is None:
                    continue
                value_type = dependent.get(TYPE_KEY)
                if not isinstance(value_type, str) or SKILL_VALUE_TYPE not in value_type:
                    continue
                skill_type = dependent.get("Type")
                if not isinstance(skill_type, str) or not skill_type.startswith(SKILL_PREFIX):
                    continue
                field_name = SKILL_FIELDS.get(skill_type)
                if field_name:
                    setattr(skills, field_name, _int(dependent.get("PermanentValue")))
        return skills

    def _feature_parameters(self, progression: SourceObject) -> Dict[str, str]:
        """Map feature GUID to its parameter label (e.g. "Longsword")."""
        parameters: Dict[str, str] = {}
        facts = self.resolver.get(progression, "Features", "m_Facts")
        for raw_fact in facts if isinstance(facts, list) else []:
            fact = self.resolver.resolve_object(raw_fact)
            if fact is None:
                continue
            blueprint_id = self._str(fact.get("Blueprint"))
            param = self.resolver.resolve_object(fact.get("Param"))
            if not blueprint_id or param is None or blueprint_id in parameters:
                continue
            for field_name in PARAMETER_FIELDS:
                value = param.get(field_name)
                if isinstance(value, str) and value and value != "None":
                    parameters[blueprint_id] = humanize(value)
                    break
        return parameters

    def _level_history(self, progression: SourceObject) -> List[LevelProgression]:
        parameters = (
            self._feature_parameters(progression) if self.options.show_feat_parameters else {}
        )
        history: Dict[int, List[str]] = {}
        for raw_selection in self.resolver.resolve_list(progression.get("m_Selections")):
            selection = self.resolver.resolve_object(raw_selection)
            if selection is None:
                continue
            by_level = self.resolver.get(selection, "Value", "m_SelectionsByLevel")
            for raw_entry in by_level if isinstance(by_level, list) else []:
                entry = self.resolver.resolve_object(raw_entry)
                if entry is None:
                    continue
                features = history.setdefault(_int(entry.get("Key")), [])
                for guid in self.resolver.resolve_list(entry.get("Value")):
                    if not isinstance(guid, str):
                        continue
                    name = self.catalog.name(guid)
                    if not is_listable_name(name):
                        continue
                    parameter = parameters.get(guid)
                    features.append(f"{name} ({parameter})" if parameter else name)

        return [
            LevelProgression(level=level, features=features)
            for level, features in sorted(history.items())
            if features
        ]
