"""
Blueprint catalog: GUID -> name, subtype, kind and description lookup.
"""

from .service import BlueprintCatalog, DEFAULT_CATALOG_PATH
from .models import (
    CatalogEntry,
    CatalogSchema,
    CatalogTable,
    CatalogTables,
    PLACEHOLDER_PREFIX,
    UNKNOWN_NAME,
)
from .loaders import CatalogFileLoader
from .builder import CatalogBuilder, normalize_blueprint_name

__all__ = [
    "BlueprintCatalog",
    "DEFAULT_CATALOG_PATH",
    "CatalogEntry",
    "CatalogSchema",
    "CatalogTable",
    "CatalogTables",
    "PLACEHOLDER_PREFIX",
    "UNKNOWN_NAME",
    "CatalogFileLoader",
    "CatalogBuilder",
    "normalize_blueprint_name",
]
