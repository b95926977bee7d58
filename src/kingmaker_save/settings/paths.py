"""
Path-related settings for kingmaker-save.
"""

from pathlib import Path
from typing import Optional

from .base import SettingsGroup

DEFAULT_OUTPUT_DIR = "Output"
DEFAULT_SAVE_DIR = "SavedGame"


class PathSettings(SettingsGroup):
    """Manages path-related settings."""

    @property
    def save_path(self) -> Optional[Path]:
        """Get the save to parse (directory, .zks archive or saves folder)."""
        path_str = self._get_str("paths/save", "")
        return Path(path_str) if path_str else None

    @save_path.setter
    def save_path(self, value: Optional[Path]) -> None:
        """Set the save to parse."""
        self._set("paths/save", str(value) if value else "")

    @property
    def output_dir(self) -> Path:
        """Get the report output directory."""
        return Path(self._get_str("paths/output", DEFAULT_OUTPUT_DIR) or DEFAULT_OUTPUT_DIR)

    @output_dir.setter
    def output_dir(self, value: Path) -> None:
        """Set the report output directory."""
        self._set("paths/output", str(value))

    @property
    def catalog_path(self) -> Optional[Path]:
        """Get the blueprint catalog override (None means the bundled table)."""
        path_str = self._get_str("paths/catalog", "")
        return Path(path_str) if path_str else None

    @catalog_path.setter
    def catalog_path(self, value: Optional[Path]) -> None:
        """Set the blueprint catalog override."""
        self._set("paths/catalog", str(value) if value else "")
