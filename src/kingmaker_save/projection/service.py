"""
Projection service: one loaded save plus the catalog to a CurrentState.
"""

import logging
from typing import List, Optional

from ..catalog import BlueprintCatalog
from ..classification import ItemClassifier
from ..save_data import SaveDataService, SaveDocument
from .characters import CharacterProjector
from .equipment import EquipmentProjector
from .inventory import InventoryProjector
from .items import ItemProjector
from .kingdom import KingdomProjector
from .models import Character, CurrentState, Inventory
from .options import ReportOptions
from .spellbooks import SpellbookProjector


def _matches(character: Character, wanted: str) -> bool:
    wanted = wanted.strip().lower()
    if not wanted:
        return False
    if character.name.lower() == wanted:
        return True
    return character.custom_name is not None and character.custom_name.lower() == wanted


def order_characters(characters: List[Character], options: ReportOptions) -> List[Character]:
    """Apply the exclusion list, then move ordered names to the front.

    Names match the custom name or the full display name, ignoring case.
    Characters not named in character_order keep their document order.
    """
    kept = [
        character
        for character in characters
        if not any(_matches(character, name) for name in options.excluded_characters)
    ]
    ordered: List[Character] = []
    placed = set()
    for name in options.character_order:
        for character in kept:
            if id(character) not in placed and _matches(character, name):
                ordered.append(character)
                placed.add(id(character))
    return ordered + [character for character in kept if id(character) not in placed]


class StateProjector:
    """Builds the complete report model of a save.

    Each document is projected with its own resolver; the catalog and the
    classifier are shared by the whole pass.
    """

    def __init__(
        self,
        save: SaveDataService,
        catalog: BlueprintCatalog,
        options: Optional[ReportOptions] = None,
        classifier: Optional[ItemClassifier] = None,
    ):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.save = save
        self.catalog = catalog
        self.options = options or ReportOptions()
        self.classifier = classifier or ItemClassifier()

    def _items(self, document: SaveDocument) -> ItemProjector:
        return ItemProjector(document.resolver, self.catalog, self.classifier)

    def project(self) -> CurrentState:
        """Project every section enabled in the options.

        Sections whose source document is missing stay None.
        """
        options = self.options
        state = CurrentState()
        party = self.save.party
        player = self.save.player

        if party is not None:
            state.characters = self.project_characters(party)

        if player is not None:
            kingdom = KingdomProjector(
                player.resolver, self.catalog, self._items(player), options
            )
            if options.include_kingdom_stats:
                state.kingdom = kingdom.project_kingdom(player.root)
            if options.include_settlements:
                state.settlements = kingdom.project_settlements(player.root)
            if options.include_explored_locations:
                state.explored_locations = kingdom.project_explored_locations(player.root)

        if options.include_inventory and (party is not None or player is not None):
            state.inventory = self.project_inventory(party, player)

        self.logger.info(
            f"Projection complete: {len(state.characters or [])} characters, "
            f"{len(state.settlements or [])} settlements, "
            f"{len(state.explored_locations or [])} explored locations"
        )
        return state

    def project_characters(self, party: SaveDocument) -> List[Character]:
        """Project, filter and order the party characters."""
        items = self._items(party)
        characters = CharacterProjector(
            party.resolver,
            self.catalog,
            EquipmentProjector(party.resolver, items),
            SpellbookProjector(party.resolver, self.catalog),
            self.options,
        ).project_all(party.root)
        return order_characters(characters, self.options)

    def project_inventory(
        self, party: Optional[SaveDocument], player: Optional[SaveDocument]
    ) -> Inventory:
        """Project the personal chest (player) and shared inventory (party)."""
        inventory = Inventory()
        if player is not None:
            projector = InventoryProjector(player.resolver, self._items(player))
            inventory.personal_chest = projector.personal_chest(player.root)
        if party is not None:
            projector = InventoryProjector(party.resolver, self._items(party))
            inventory.shared_inventory = projector.shared_inventory(party.root)
        return inventory

