"""
Data models for raw save documents.

Save documents are kept as the generic dict/list trees produced by orjson.
This module only names those shapes and the special keys the game engine's
serializer uses for object identity.
"""

from typing import Any, Dict, TypeAlias

# Type aliases for clarity
SourceNode: TypeAlias = Any
"""Any parsed JSON value: dict, list, str, int, float, bool or None."""

SourceObject: TypeAlias = Dict[str, Any]
"""A JSON object node."""

IdentityIndex: TypeAlias = Dict[str, SourceObject]
"""Maps identity tag value to the canonical object carrying it."""


# Keys written by the engine's reference-preserving serializer
ID_KEY = "$id"
REF_KEY = "$ref"
TYPE_KEY = "$type"

# Document file names inside a save
PARTY_DOCUMENT = "party.json"
PLAYER_DOCUMENT = "player.json"
SAVE_ARCHIVE_SUFFIX = ".zks"


class SaveDataError(Exception):
    """Raised when no parseable source document can be found."""
    pass
