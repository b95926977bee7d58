"""
Module for reading Kingmaker save data.

Provides loading of the save documents (plain directories or .zks archives)
and the identity index used to dereference "$ref" stubs inside them.
"""

from .service import SaveDataService, SaveDocument
from .models import (
    SourceNode,
    SourceObject,
    IdentityIndex,
    SaveDataError,
    ID_KEY,
    REF_KEY,
    TYPE_KEY,
    PARTY_DOCUMENT,
    PLAYER_DOCUMENT,
)
from .loaders import SaveFileLoader
from .resolver import ReferenceResolver

# Public exports
__all__ = [
    # Main service
    "SaveDataService",
    "SaveDocument",
    # Type aliases
    "SourceNode",
    "SourceObject",
    "IdentityIndex",
    # Constants
    "ID_KEY",
    "REF_KEY",
    "TYPE_KEY",
    "PARTY_DOCUMENT",
    "PLAYER_DOCUMENT",
    # Errors
    "SaveDataError",
    # Component classes
    "SaveFileLoader",
    "ReferenceResolver",
]
