"""
File loaders for Kingmaker save data.

Handles locating save files on disk, unpacking .zks archives and parsing
the JSON documents inside them with orjson.
"""

import logging
import zipfile
from pathlib import Path
from typing import Optional

import orjson

from .models import (
    PARTY_DOCUMENT,
    PLAYER_DOCUMENT,
    SAVE_ARCHIVE_SUFFIX,
    SaveDataError,
    SourceNode,
)


class SaveFileLoader:
    """Locates, unpacks and parses save documents."""

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def read_document(self, json_file: Path) -> Optional[SourceNode]:
        """Read and parse one JSON document.

        Args:
            json_file: Path to the document

        Returns:
            Parsed tree, or None if the file is missing or not valid JSON
        """
        if not json_file.is_file():
            self.logger.warning(f"Document not found: {json_file}")
            return None
        try:
            with json_file.open("rb") as f:  # orjson works with bytes
                data = orjson.loads(f.read())
        except (OSError, orjson.JSONDecodeError) as e:
            self.logger.error(f"Error reading JSON file {json_file}: {e}")
            return None

        self.logger.debug(f"Parsed {json_file.name} ({json_file.stat().st_size} bytes)")
        return data

    def extract_archive(self, archive: Path, destination: Path) -> Path:
        """Unpack a .zks save archive.

        Args:
            archive: Path to the .zks file (a ZIP archive)
            destination: Directory to extract into (created if needed)

        Returns:
            The destination directory

        Raises:
            SaveDataError: If the archive cannot be read
        """
        if not archive.is_file():
            raise SaveDataError(f"Save file not found: {archive}")

        destination.mkdir(parents=True, exist_ok=True)
        self.logger.info(f"Extracting save file {archive.name} to {destination}")
        try:
            with zipfile.ZipFile(archive) as zf:
                zf.extractall(destination)
        except (zipfile.BadZipFile, OSError) as e:
            raise SaveDataError(f"Cannot extract {archive}: {e}") from e

        missing = [
            name
            for name in (PARTY_DOCUMENT, PLAYER_DOCUMENT)
            if not (destination / name).exists()
        ]
        if missing:
            self.logger.warning(
                f"Extraction completed but {', '.join(missing)} not found in {archive.name}"
            )
        return destination

    def find_latest_archive(self, folder: Path) -> Optional[Path]:
        """Return the most recently modified .zks file under folder (recursive)."""
        if not folder.is_dir():
            return None

        archives = list(folder.rglob(f"*{SAVE_ARCHIVE_SUFFIX}"))
        if not archives:
            return None

        latest = max(archives, key=lambda p: p.stat().st_mtime)
        self.logger.debug(f"Latest of {len(archives)} save archives: {latest}")
        return latest

    def locate(self, source: Path, work_dir: Path) -> Path:
        """Turn a user-supplied save location into a directory of documents.

        Accepts an extracted save directory, a single .zks archive, or a
        folder that contains .zks archives somewhere below it (the newest
        one is used).

        Args:
            source: Save directory, archive, or folder of archives
            work_dir: Scratch directory used for extraction

        Returns:
            Directory containing party.json and/or player.json

        Raises:
            SaveDataError: If nothing usable is found
        """
        if source.is_file() and source.suffix.lower() == SAVE_ARCHIVE_SUFFIX:
            return self.extract_archive(source, work_dir)

        if source.is_dir():
            if (source / PARTY_DOCUMENT).exists() or (source / PLAYER_DOCUMENT).exists():
                return source
            latest = self.find_latest_archive(source)
            if latest is not None:
                self.logger.info(f"Using latest save file: {latest}")
                return self.extract_archive(latest, work_dir)

        raise SaveDataError(f"No save documents or .zks archives found at {source}")
