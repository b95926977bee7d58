"""
File loader for the blueprint catalog table.

The table has gone through several layouts over time. Each layout is a
separate parse attempt that either yields complete tables or nothing; the
attempts are tried newest first and the first success wins.
"""

import logging
from pathlib import Path
from typing import Any, Callable, List, Optional

import orjson

from .models import (
    NAMES_SECTION,
    SUBTYPES_SECTION,
    KINDS_SECTION,
    DESCRIPTIONS_SECTION,
    CatalogSchema,
    CatalogTable,
    CatalogTables,
)

ParseAttempt = Callable[[Any], Optional[CatalogTables]]


def _string_table(value: Any) -> Optional[CatalogTable]:
    """Return value as a str -> str table, or None if it is not one.

    Null values are dropped; any other non-string value rejects the table.
    """
    if not isinstance(value, dict):
        return None
    table: CatalogTable = {}
    for key, item in value.items():
        if item is None:
            continue
        if not isinstance(item, str):
            return None
        table[key] = item
    return table


def _parse_sections(data: Any, sections: List[str]) -> Optional[List[CatalogTable]]:
    if not isinstance(data, dict):
        return None
    tables: List[CatalogTable] = []
    for section in sections:
        if section not in data:
            return None
        table = _string_table(data[section])
        if table is None:
            return None
        tables.append(table)
    return tables


def parse_with_descriptions(data: Any) -> Optional[CatalogTables]:
    """Sectioned layout with kinds and descriptions."""
    tables = _parse_sections(
        data, [NAMES_SECTION, SUBTYPES_SECTION, KINDS_SECTION, DESCRIPTIONS_SECTION]
    )
    if tables is None:
        return None
    names, subtypes, kinds, descriptions = tables
    return CatalogTables(
        names, subtypes, kinds, descriptions, CatalogSchema.SECTIONED_WITH_DESCRIPTIONS
    )


def parse_with_kinds(data: Any) -> Optional[CatalogTables]:
    """Sectioned layout with kinds."""
    tables = _parse_sections(data, [NAMES_SECTION, SUBTYPES_SECTION, KINDS_SECTION])
    if tables is None:
        return None
    names, subtypes, kinds = tables
    return CatalogTables(names, subtypes, kinds, {}, CatalogSchema.SECTIONED_WITH_KINDS)


def parse_sectioned(data: Any) -> Optional[CatalogTables]:
    """Sectioned layout with names and equipment subtypes only."""
    tables = _parse_sections(data, [NAMES_SECTION, SUBTYPES_SECTION])
    if tables is None:
        return None
    names, subtypes = tables
    return CatalogTables(names, subtypes, {}, {}, CatalogSchema.SECTIONED)


def parse_legacy(data: Any) -> Optional[CatalogTables]:
    """Flat GUID -> name object."""
    names = _string_table(data)
    if names is None:
        return None
    return CatalogTables(names=names, schema=CatalogSchema.LEGACY_FLAT)


PARSE_ATTEMPTS: List[ParseAttempt] = [
    parse_with_descriptions,
    parse_with_kinds,
    parse_sectioned,
    parse_legacy,
]


class CatalogFileLoader:
    """Loads the catalog table, degrading to empty tables on any failure."""

    def __init__(self, attempts: Optional[List[ParseAttempt]] = None):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.attempts = attempts if attempts is not None else PARSE_ATTEMPTS

    def parse(self, data: Any) -> CatalogTables:
        """Run the parse attempts over an already-decoded table.

        Args:
            data: Decoded JSON value

        Returns:
            Tables from the first successful attempt, or empty tables
        """
        for attempt in self.attempts:
            tables = attempt(data)
            if tables is not None:
                return tables
        self.logger.warning("Blueprint catalog has an unrecognized layout; names will be generic")
        return CatalogTables()

    def load(self, path: Path) -> CatalogTables:
        """Read and parse the catalog table file.

        Args:
            path: Path to blueprint_database.json

        Returns:
            Loaded tables; empty tables if the file is missing or unreadable
        """
        if not path.is_file():
            self.logger.warning(f"Blueprint catalog not found at {path}; names will be generic")
            return CatalogTables()

        try:
            with path.open("rb") as f:
                data = orjson.loads(f.read())
        except (OSError, orjson.JSONDecodeError) as e:
            self.logger.warning(f"Failed to load blueprint catalog {path}: {e}")
            return CatalogTables()

        tables = self.parse(data)
        if tables.schema is not CatalogSchema.EMPTY:
            self.logger.info(
                f"Loaded {len(tables.names)} blueprints, {len(tables.subtypes)} equipment types, "
                f"{len(tables.kinds)} blueprint types and {len(tables.descriptions)} descriptions "
                f"({tables.schema.value} layout)"
            )
        return tables
