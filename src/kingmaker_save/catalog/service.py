"""
Blueprint catalog service.

Turns blueprint GUIDs found in save documents into display names, equipment
subtype labels, blueprint class names ("kinds") and descriptions.
"""

import logging
from pathlib import Path
from typing import Optional

from .loaders import CatalogFileLoader
from .models import (
    DEFAULT_CATALOG_FILE,
    PLACEHOLDER_ID_LENGTH,
    PLACEHOLDER_PREFIX,
    UNKNOWN_NAME,
    CatalogEntry,
    CatalogTable,
    CatalogTables,
)

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent.parent / "data" / DEFAULT_CATALOG_FILE


class BlueprintCatalog:
    """Read-mostly GUID lookup shared by a whole projection pass.

    Lookups never raise. Unknown identifiers get a deterministic placeholder
    name starting with PLACEHOLDER_PREFIX, which downstream code uses to
    detect unresolved items.
    """

    def __init__(self, tables: Optional[CatalogTables] = None):
        """Initialize the catalog from already-loaded tables.

        Args:
            tables: Lookup tables (an empty catalog if omitted)
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        tables = tables or CatalogTables()
        self._names = dict(tables.names)
        self._subtypes = dict(tables.subtypes)
        self._kinds = dict(tables.kinds)
        self._descriptions = dict(tables.descriptions)
        self.schema = tables.schema

    @classmethod
    def from_file(
        cls, path: Optional[str | Path] = None, loader: Optional[CatalogFileLoader] = None
    ) -> "BlueprintCatalog":
        """Load the catalog table from disk.

        Args:
            path: Table location (defaults to the file shipped with the package)
            loader: File loader to use

        Returns:
            Loaded catalog, empty if the table could not be read
        """
        loader = loader or CatalogFileLoader()
        return cls(loader.load(Path(path) if path else DEFAULT_CATALOG_PATH))

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, blueprint_id: object) -> bool:
        return blueprint_id in self._names

    @property
    def is_empty(self) -> bool:
        """Check whether no names are known."""
        return not self._names

    @staticmethod
    def placeholder(blueprint_id: str) -> str:
        """Return the synthesized name for an unmapped identifier."""
        return f"{PLACEHOLDER_PREFIX}{blueprint_id[:PLACEHOLDER_ID_LENGTH]}"

    @staticmethod
    def is_placeholder(name: Optional[str]) -> bool:
        """Check whether a name is a synthesized placeholder."""
        return bool(name) and str(name).startswith(PLACEHOLDER_PREFIX)

    def name(self, blueprint_id: Optional[str]) -> str:
        """Return the display name for an identifier.

        Returns:
            The mapped name, "Unknown" for a null/empty identifier, or a
            placeholder for an identifier that is not in the catalog
        """
        if not blueprint_id:
            return UNKNOWN_NAME
        name = self._names.get(blueprint_id)
        return name if name is not None else self.placeholder(blueprint_id)

    def subtype_label(self, blueprint_id: Optional[str]) -> Optional[str]:
        """Return the equipment subtype label (e.g. "Longsword"), if known."""
        return self._lookup(self._subtypes, blueprint_id)

    def kind(self, blueprint_id: Optional[str]) -> Optional[str]:
        """Return the blueprint class name (e.g. "BlueprintItemWeapon"), if known."""
        return self._lookup(self._kinds, blueprint_id)

    def description(self, blueprint_id: Optional[str]) -> Optional[str]:
        """Return the item description text, if known."""
        return self._lookup(self._descriptions, blueprint_id)

    def entry(self, blueprint_id: Optional[str]) -> CatalogEntry:
        """Return everything known about an identifier."""
        return CatalogEntry(
            blueprint_id=blueprint_id or "",
            name=self.name(blueprint_id),
            subtype_label=self.subtype_label(blueprint_id),
            kind=self.kind(blueprint_id),
            description=self.description(blueprint_id),
        )

    def add_override(self, blueprint_id: str, name: str) -> None:
        """Insert or replace a name mapping at runtime."""
        self._names[blueprint_id] = name
        self.logger.debug(f"Catalog override: {blueprint_id} -> {name}")

    def mappings(self) -> CatalogTable:
        """Return a copy of the name table."""
        return dict(self._names)

    @staticmethod
    def _lookup(table: CatalogTable, blueprint_id: Optional[str]) -> Optional[str]:
        if not blueprint_id:
            return None
        return table.get(blueprint_id)
