"""
Report options: which sections of the save state to build and render.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class ReportOptions:
    """Plain options value handed to the projectors and report writers.

    Sections that are switched off are not computed at all.
    """

    # Character sections
    include_stats: bool = True
    include_skills: bool = True
    include_race: bool = True
    include_class: bool = True
    include_equipment: bool = True
    include_spellcasting: bool = True
    include_level_history: bool = True

    # Kingdom sections
    include_kingdom_stats: bool = True
    include_kingdom_advisors: bool = True
    include_settlements: bool = True
    include_unclaimed_settlements: bool = False
    include_explored_locations: bool = True
    include_inventory: bool = True

    # Equipment detail (text reports)
    include_active_weapon_set: bool = True
    include_all_weapon_sets: bool = False
    include_armor: bool = True
    include_accessories: bool = True
    show_empty_slots: bool = True
    show_enchantments: bool = True

    # Feature detail
    show_feat_parameters: bool = True

    # Character list
    character_order: List[str] = field(default_factory=list)
    excluded_characters: List[str] = field(default_factory=list)
