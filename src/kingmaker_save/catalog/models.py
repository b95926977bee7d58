"""
Data models for the blueprint catalog.

The catalog maps opaque blueprint GUIDs to display names and a few pieces
of metadata extracted offline from the game's blueprint dump.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, TypeAlias

# Type aliases for clarity
CatalogTable: TypeAlias = Dict[str, str]
"""Maps blueprint GUID to a string value (name, subtype, kind or description)."""


UNKNOWN_NAME = "Unknown"
"""Name returned for a null or empty identifier."""

PLACEHOLDER_PREFIX = "Blueprint_"
"""Prefix of the synthesized name of an identifier missing from the catalog."""

PLACEHOLDER_ID_LENGTH = 8

# Section keys of the sectioned table layout
NAMES_SECTION = "Names"
SUBTYPES_SECTION = "EquipmentTypes"
KINDS_SECTION = "BlueprintTypes"
DESCRIPTIONS_SECTION = "Descriptions"

DEFAULT_CATALOG_FILE = "blueprint_database.json"


class CatalogSchema(Enum):
    """Table layout a catalog was loaded from, newest first."""

    SECTIONED_WITH_DESCRIPTIONS = "sectioned+kinds+descriptions"
    """Names, EquipmentTypes, BlueprintTypes and Descriptions sections."""

    SECTIONED_WITH_KINDS = "sectioned+kinds"
    """Names, EquipmentTypes and BlueprintTypes sections."""

    SECTIONED = "sectioned"
    """Names and EquipmentTypes sections only."""

    LEGACY_FLAT = "legacy"
    """A single flat GUID -> name object."""

    EMPTY = "empty"
    """Nothing could be loaded."""


@dataclass
class CatalogTables:
    """The lookup tables of one loaded catalog."""

    names: CatalogTable = field(default_factory=dict)
    subtypes: CatalogTable = field(default_factory=dict)
    kinds: CatalogTable = field(default_factory=dict)
    descriptions: CatalogTable = field(default_factory=dict)
    schema: CatalogSchema = CatalogSchema.EMPTY


@dataclass(frozen=True)
class CatalogEntry:
    """All catalog knowledge about one identifier."""

    blueprint_id: str
    name: str
    subtype_label: Optional[str] = None
    kind: Optional[str] = None
    description: Optional[str] = None

    @property
    def is_placeholder(self) -> bool:
        """True when the name was synthesized for an unmapped identifier."""
        return self.name.startswith(PLACEHOLDER_PREFIX)
