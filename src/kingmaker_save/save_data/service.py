"""
Service that loads the documents of one save and indexes them.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .loaders import SaveFileLoader
from .models import PARTY_DOCUMENT, PLAYER_DOCUMENT, SaveDataError, SourceNode
from .resolver import ReferenceResolver


@dataclass
class SaveDocument:
    """A parsed document paired with its own identity index."""

    name: str
    root: SourceNode
    resolver: ReferenceResolver


class SaveDataService:
    """Loads party.json and player.json from an extracted save directory.

    Either document may be missing; the save is only unusable when neither
    of them parses.
    """

    def __init__(self, save_dir: str | Path, loader: Optional[SaveFileLoader] = None):
        """Load and index the save documents.

        Args:
            save_dir: Directory holding party.json and player.json
            loader: File loader (a default one is created if omitted)

        Raises:
            SaveDataError: If neither document can be parsed
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.save_dir = Path(save_dir)
        self.loader = loader or SaveFileLoader()

        self.logger.info(f"Loading save documents from: {self.save_dir}")
        self.party = self._load(PARTY_DOCUMENT)
        self.player = self._load(PLAYER_DOCUMENT)

        if self.party is None and self.player is None:
            raise SaveDataError(f"No parseable save documents in {self.save_dir}")

    def _load(self, name: str) -> Optional[SaveDocument]:
        root = self.loader.read_document(self.save_dir / name)
        if root is None:
            return None
        resolver = ReferenceResolver(root)
        self.logger.info(f"Loaded {name}: {len(resolver)} indexed objects")
        return SaveDocument(name=name, root=root, resolver=resolver)
