"""
Kingdom projection: kingdom stats, advisors, settlements with artisans and
explored map locations, all read from the player document.
"""

import logging
import math
import re
from typing import Any, Dict, List, Optional, Tuple

from ..catalog import BlueprintCatalog
from ..save_data import ReferenceResolver, SourceNode, SourceObject
from .items import ItemProjector, blueprint_of, is_listable_name
from .models import (
    Advisor,
    AdvisorStatus,
    Artisan,
    ItemInstance,
    Kingdom,
    KingdomStat,
    Settlement,
)
from .options import ReportOptions

# Stat type, minimum rank and minimum value unlocking each advisor position
ADVISOR_REQUIREMENTS: Dict[str, Tuple[str, int, int]] = {
    "GrandDiplomat": ("Community", 3, 60),
    "Warden": ("Military", 3, 60),
    "Magister": ("Arcane", 3, 60),
    "Curator": ("Loyalty", 3, 60),
    "Spymaster": ("Relations", 3, 60),
}

POSITION_DISPLAY_NAMES = {"Spymaster": "Minister"}

_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")


def format_position_name(position: str) -> str:
    """Turn a leader type into a display name ("GrandDiplomat" -> "Grand Diplomat")."""
    if position in POSITION_DISPLAY_NAMES:
        return POSITION_DISPLAY_NAMES[position]
    return _CAMEL_BOUNDARY.sub(r"\1 \2", position)


def _int(value: Any, default: int = 0) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    return default


def _str(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


class KingdomProjector:
    """Projects the kingdom-related parts of the player document."""

    def __init__(
        self,
        resolver: ReferenceResolver,
        catalog: BlueprintCatalog,
        items: ItemProjector,
        options: Optional[ReportOptions] = None,
    ):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.resolver = resolver
        self.catalog = catalog
        self.items = items
        self.options = options or ReportOptions()

    # -------------------------------------------------------------------------
    # Kingdom
    # -------------------------------------------------------------------------

    def project_kingdom(self, player_root: SourceNode) -> Optional[Kingdom]:
        """Project kingdom stats and advisors.

        Returns:
            The kingdom, or None when the save has no kingdom yet
        """
        player = self.resolver.resolve_object(player_root)
        kingdom_node = self.resolver.resolve_object(player.get("Kingdom")) if player else None
        if kingdom_node is None:
            return None

        per_turn = kingdom_node.get("BPPerTurn")
        stats = self._stats(kingdom_node)
        kingdom = Kingdom(
            name=_str(kingdom_node.get("KingdomName")),
            alignment=_str(kingdom_node.get("Alignment")),
            days=_int(kingdom_node.get("CurrentDay")),
            game_time=_str(player.get("GameTime")),
            gold=_int(player.get("Money")),
            build_points=_int(kingdom_node.get("BP")),
            build_points_per_turn=_int(per_turn) if per_turn is not None else None,
            unrest=_str(kingdom_node.get("Unrest")),
            stats=stats,
        )
        if self.options.include_kingdom_advisors:
            has_stats = self.resolver.get(kingdom_node, "Stats", "m_Stats") is not None
            kingdom.advisors = self._advisors(kingdom_node, stats if has_stats else None)
        return kingdom

    def _stats(self, kingdom_node: SourceObject) -> List[KingdomStat]:
        stats: List[KingdomStat] = []
        for raw_stat in self.resolver.resolve_list(self.resolver.get(kingdom_node, "Stats", "m_Stats")):
            stat = self.resolver.resolve_object(raw_stat)
            if stat is None:
                continue
            stats.append(
                KingdomStat(
                    type=_str(stat.get("Type")) or "",
                    value=_int(stat.get("Value")),
                    rank=_int(stat.get("Rank")),
                )
            )
        return stats

    @staticmethod
    def is_position_available(position: str, stats: Optional[List[KingdomStat]]) -> bool:
        """Check the stat requirement of an advisor position.

        Args:
            position: Leader type as stored in the save
            stats: Kingdom stats, or None when the kingdom has no stats block

        Returns:
            True when the position has no requirement, the kingdom has no
            stats block, or the required stat meets both thresholds
        """
        requirement = ADVISOR_REQUIREMENTS.get(position)
        if requirement is None or stats is None:
            return True
        stat_type, min_rank, min_value = requirement
        for stat in stats:
            if stat.type == stat_type:
                return stat.rank >= min_rank and stat.value >= min_value
        return False

    def _advisors(
        self, kingdom_node: SourceObject, stats: Optional[List[KingdomStat]]
    ) -> List[Advisor]:
        advisors: List[Advisor] = []
        for raw_leader in self.resolver.resolve_list(kingdom_node.get("Leaders")):
            leader = self.resolver.resolve_object(raw_leader)
            if leader is None:
                continue
            position = _str(leader.get("Type")) or ""
            blueprint_id = blueprint_of(self.resolver.resolve(leader.get("LeaderSelection")))
            advisor_name = self.catalog.name(blueprint_id) if blueprint_id else None

            if advisor_name is not None:
                status = AdvisorStatus.ASSIGNED
            elif self.is_position_available(position, stats):
                status = AdvisorStatus.VACANT
            else:
                status = AdvisorStatus.LOCKED
            advisors.append(
                Advisor(
                    position=format_position_name(position),
                    status=status,
                    advisor=advisor_name,
                )
            )
        return advisors

    # -------------------------------------------------------------------------
    # Settlements
    # -------------------------------------------------------------------------

    def project_settlements(self, player_root: SourceNode) -> List[Settlement]:
        """Project the settlements of every (claimed) region, sorted by region name."""
        settlements: List[Settlement] = []
        regions = self.resolver.get(player_root, "Kingdom", "Regions")
        for index, raw_region in enumerate(self.resolver.resolve_list(regions)):
            try:
                settlement = self._settlement(raw_region)
            except Exception as e:
                self.logger.warning(f"Failed to parse region #{index}: {e}")
                continue
            if settlement is not None:
                settlements.append(settlement)
        settlements.sort(key=lambda s: s.region_name)
        return settlements

    def _settlement(self, raw_region: SourceNode) -> Optional[Settlement]:
        region = self.resolver.resolve_object(raw_region)
        if region is None:
            return None
        settlement_node = self.resolver.resolve_object(region.get("Settlement"))
        if settlement_node is None:
            return None

        is_claimed = region.get("IsClaimed") is True
        if not is_claimed and not self.options.include_unclaimed_settlements:
            return None

        region_name = self.catalog.name(_str(region.get("Blueprint")))
        if not region_name or region_name == "None":
            return None

        buildings: List[str] = []
        facts = self.resolver.get(settlement_node, "m_Buildings", "m_Facts")
        for raw_building in self.resolver.resolve_list(facts):
            building = self.resolver.resolve_object(raw_building)
            if building is None or building.get("IsFinished") is not True:
                continue
            blueprint_id = blueprint_of(building)
            if not blueprint_id:
                continue
            name = self.catalog.name(blueprint_id)
            if name and name != "None":
                buildings.append(name)

        return Settlement(
            region_name=region_name,
            settlement_name=_str(settlement_node.get("Name")),
            level=_str(settlement_node.get("Level")),
            is_claimed=is_claimed,
            buildings=sorted(buildings),
            artisans=self._artisans(region),
        )

    def _artisans(self, region: SourceObject) -> List[Artisan]:
        artisans: List[Artisan] = []
        for raw_artisan in self.resolver.resolve_list(region.get("Artisans")):
            artisan = self.resolver.resolve_object(raw_artisan)
            if artisan is None:
                continue
            blueprint_id = blueprint_of(artisan)
            if not blueprint_id:
                continue
            event_id = _str(artisan.get("HelpProjectEvent"))
            artisans.append(
                Artisan(
                    name=self.catalog.name(blueprint_id),
                    production_started_on=_int(artisan.get("ProductionStartedOn")),
                    production_ends_on=_int(artisan.get("ProductionEndsOn")),
                    building_unlocked=artisan.get("BuildingUnlocked") is True,
                    tiers_unlocked=_int(artisan.get("TiersUnlocked")),
                    help_project_event=self.catalog.name(event_id) if event_id else None,
                    previous_items=self._artisan_items(artisan.get("PreviousItems")),
                    current_production=self._artisan_items(artisan.get("CurrentProduction")),
                )
            )
        return artisans

    def _artisan_items(self, node: SourceNode) -> List[ItemInstance]:
        items: List[ItemInstance] = []
        for raw_item in self.resolver.resolve_list(node):
            # Entries are either item entities or bare blueprint GUIDs
            if isinstance(raw_item, str):
                item = self.items.project_blueprint(raw_item)
            else:
                item = self.items.project(raw_item)
            if item is not None:
                items.append(item)
        return items

    # -------------------------------------------------------------------------
    # Global map
    # -------------------------------------------------------------------------

    def project_explored_locations(self, player_root: SourceNode) -> List[str]:
        """Names of explored global map locations, sorted."""
        locations: List[str] = []
        entries = self.resolver.get(player_root, "m_GlobalMap", "Locations")
        for raw_entry in self.resolver.resolve_list(entries):
            entry = self.resolver.resolve_object(raw_entry)
            if entry is None:
                continue
            location = self.resolver.resolve_object(entry.get("Value", entry))
            if location is None or location.get("IsExplored") is not True:
                continue
            blueprint_id = blueprint_of(location)
            if not blueprint_id:
                continue
            name = self.catalog.name(blueprint_id)
            if is_listable_name(name):
                locations.append(name)
        return sorted(locations)
