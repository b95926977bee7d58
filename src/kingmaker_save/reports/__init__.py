"""
Report materializers: JSON and plain-text renderings of a projected save.
"""

from .json_report import JsonReportWriter, dump_json
from .text_report import (
    TextReportWriter,
    describe_item,
    render_character,
    render_characters,
    render_collection,
    render_current_state,
    render_equipment,
    render_explored_locations,
    render_inventory,
    render_kingdom,
    render_sections,
    render_settlements,
    render_spellbook,
    WARNINGS_FILE,
)

__all__ = [
    "JsonReportWriter",
    "dump_json",
    "TextReportWriter",
    "describe_item",
    "render_character",
    "render_characters",
    "render_collection",
    "render_current_state",
    "render_equipment",
    "render_explored_locations",
    "render_inventory",
    "render_kingdom",
    "render_sections",
    "render_settlements",
    "render_spellbook",
    "WARNINGS_FILE",
]
