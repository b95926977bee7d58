"""
Spellbook projection.
"""

import logging
from typing import Any, Dict, List, Optional

from ..catalog import BlueprintCatalog
from ..save_data import ReferenceResolver, SourceNode, SourceObject
from .items import blueprint_of, is_listable_name
from .models import Spellbook
from .shapes import (
    SlotCountShape,
    key_value_entries,
    per_level_values,
    slot_count_shape,
)

DOMAIN_SUFFIX = " (Domain)"


class SpellbookProjector:
    """Projects the spellbooks of a unit descriptor."""

    def __init__(self, resolver: ReferenceResolver, catalog: BlueprintCatalog):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.resolver = resolver
        self.catalog = catalog

    def project_all(self, descriptor: SourceObject) -> List[Spellbook]:
        """Project every spellbook of a descriptor, skipping broken ones."""
        spellbooks: List[Spellbook] = []
        for _, raw_book in key_value_entries(self._spellbook_list(descriptor), self.resolver):
            try:
                spellbook = self.project(raw_book)
            except Exception as e:
                self.logger.warning(f"Failed to parse spellbook: {e}")
                continue
            if spellbook is not None:
                spellbooks.append(spellbook)
        return spellbooks

    def _spellbook_list(self, descriptor: SourceObject) -> SourceNode:
        if "m_Spellbooks" in descriptor:
            return descriptor["m_Spellbooks"]
        # Older saves keep spellbooks on the Demilich sub-object
        return self.resolver.get(descriptor, "Demilich", "m_Spellbooks")

    def project(self, node: SourceNode) -> Optional[Spellbook]:
        """Project one spellbook entity.

        Returns:
            The spellbook, or None when it has no class blueprint
        """
        book = self.resolver.resolve_object(node)
        if book is None:
            return None
        blueprint_id = blueprint_of(book)
        if not blueprint_id:
            return None

        caster_level = book.get("m_CasterLevelInternal", book.get("CasterLevel"))
        spontaneous = self.resolver.resolve(book.get("m_SpontaneousSlots"))
        memorized = self.resolver.resolve(book.get("m_MemorizedSpells"))
        shape = slot_count_shape(spontaneous, memorized)

        special = per_level_values(book.get("m_SpecialSpells"), self.resolver)
        return Spellbook(
            name=self.catalog.name(blueprint_id),
            caster_level=caster_level if isinstance(caster_level, int) else 0,
            is_spontaneous=shape is SlotCountShape.SPONTANEOUS,
            slots_per_day=self._slots(shape, spontaneous, memorized),
            domain_slot_levels=sorted(
                level for level, spells in special.items() if isinstance(spells, list) and spells
            ),
            known_spells=self._known_spells(
                per_level_values(book.get("m_KnownSpells"), self.resolver), special
            ),
        )

    def _slots(self, shape: SlotCountShape, spontaneous: Any, memorized: Any) -> Dict[int, int]:
        slots: Dict[int, int] = {}
        if shape is SlotCountShape.SPONTANEOUS:
            for level, count in enumerate(spontaneous):
                if isinstance(count, int) and count > 0:
                    slots[level] = count
        elif shape is SlotCountShape.PREPARED:
            for level, entries in per_level_values(memorized, self.resolver).items():
                if isinstance(entries, list) and entries:
                    slots[level] = len(entries)
        return slots

    def _spell_names(self, spells: Any) -> List[str]:
        names: List[str] = []
        if not isinstance(spells, list):
            return names
        for spell in spells:
            blueprint_id = blueprint_of(self.resolver.resolve(spell))
            name = self.catalog.name(blueprint_id) if blueprint_id else None
            if is_listable_name(name):
                names.append(name)
        return names

    def _known_spells(
        self, known: Dict[int, Any], special: Dict[int, Any]
    ) -> Dict[int, List[str]]:
        result: Dict[int, List[str]] = {}
        for level in sorted(set(known) | set(special)):
            spells = self._spell_names(known.get(level))
            for name in self._spell_names(special.get(level)):
                if name not in spells and name + DOMAIN_SUFFIX not in spells:
                    spells.append(name + DOMAIN_SUFFIX)
            if spells:
                result[level] = spells
        return result
