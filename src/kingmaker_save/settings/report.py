"""
Report section settings for kingmaker-save.

Every boolean field of ReportOptions is stored under "report/<field name>"
with the dataclass default as fallback.
"""

from dataclasses import fields
from typing import Dict, List

from ..projection.options import ReportOptions
from .base import SettingsGroup

REPORT_GROUP = "report"
LIST_FIELDS = ("character_order", "excluded_characters")


def _toggle_defaults() -> Dict[str, bool]:
    defaults = ReportOptions()
    return {
        f.name: getattr(defaults, f.name)
        for f in fields(ReportOptions)
        if f.name not in LIST_FIELDS
    }


TOGGLE_DEFAULTS = _toggle_defaults()


class ReportSettings(SettingsGroup):
    """Manages which report sections are built and how they are rendered."""

    @staticmethod
    def toggle_names() -> List[str]:
        """Names of all boolean report toggles."""
        return list(TOGGLE_DEFAULTS)

    def get_toggle(self, name: str) -> bool:
        """Get a boolean report toggle.

        Raises:
            KeyError: If name is not a report toggle
        """
        return self._get_bool(f"{REPORT_GROUP}/{name}", TOGGLE_DEFAULTS[name])

    def set_toggle(self, name: str, value: bool) -> None:
        """Set a boolean report toggle.

        Raises:
            KeyError: If name is not a report toggle
        """
        if name not in TOGGLE_DEFAULTS:
            raise KeyError(name)
        self._set(f"{REPORT_GROUP}/{name}", value)

    @property
    def character_order(self) -> List[str]:
        """Character names listed first in reports, in this order."""
        return self._get_list(f"{REPORT_GROUP}/character_order", [])

    @character_order.setter
    def character_order(self, value: List[str]) -> None:
        self._set(f"{REPORT_GROUP}/character_order", list(value))

    @property
    def excluded_characters(self) -> List[str]:
        """Character names left out of reports."""
        return self._get_list(f"{REPORT_GROUP}/excluded_characters", [])

    @excluded_characters.setter
    def excluded_characters(self, value: List[str]) -> None:
        self._set(f"{REPORT_GROUP}/excluded_characters", list(value))

    def to_options(self) -> ReportOptions:
        """Build the plain options value handed to the projectors."""
        toggles = {name: self.get_toggle(name) for name in TOGGLE_DEFAULTS}
        return ReportOptions(
            **toggles,
            character_order=self.character_order,
            excluded_characters=self.excluded_characters,
        )
