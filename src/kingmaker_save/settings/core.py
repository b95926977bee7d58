"""
Core settings management for kingmaker-save.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from PySide6.QtCore import QSettings

from .base import ConfigError, SettingsGroup
from .validation import SettingsValidator, ValidationResult
from .paths import PathSettings
from .report import ReportSettings
from .logging import LoggingSettings
from ..projection.options import ReportOptions

logger = logging.getLogger(__name__)

ORGANIZATION = "kingmaker-save"
APPLICATION = "kingmaker_save"
CONFIG_VERSION = "1"


class AppSettings(SettingsGroup):
    """
    Configuration management using QSettings in INI format.

    Provides type-safe access to application settings with automatic
    cross-platform storage and validation.
    """

    def __init__(self, config_file: Optional[Union[str, Path]] = None, profile: str = "default"):
        """Initialize settings from an INI file and a profile.

        Args:
            config_file: INI file to use (the user-scope INI file if omitted)
            profile: Settings profile name (default: "default")

        Raises:
            ConfigError: If the configuration file cannot be read
        """
        if config_file is not None:
            settings = QSettings(str(config_file), QSettings.Format.IniFormat)
        else:
            settings = QSettings(
                QSettings.Format.IniFormat, QSettings.Scope.UserScope, ORGANIZATION, APPLICATION
            )
        if settings.status() != QSettings.Status.NoError:
            raise ConfigError(f"Cannot read configuration: {settings.fileName()}")
        super().__init__(settings)
        self.profile = profile

        # Profile as a group: [default] section, default/paths/save, ...
        self.settings.beginGroup(profile)

        self._validator = SettingsValidator(self)
        self._paths = PathSettings(self.settings)
        self._report = ReportSettings(self.settings)
        self._logging = LoggingSettings(self.settings)

        self._ensure_version()

        logger.debug(
            f"Settings initialized for profile '{profile}', stored at: {self.settings.fileName()}"
        )

    def _ensure_version(self) -> None:
        """Stamp the configuration format version, warning on a foreign one."""
        stored = self._get_str("app/version", "")
        if stored == CONFIG_VERSION:
            return
        if stored:
            logger.warning(
                f"Unrecognized configuration version {stored}, treating it as {CONFIG_VERSION}"
            )
        else:
            logger.info("Initializing configuration")
        self._set("app/version", CONFIG_VERSION)

    # === SUBSYSTEM ACCESS ===

    @property
    def paths(self) -> PathSettings:
        """Access path settings subsystem."""
        return self._paths

    @property
    def report(self) -> ReportSettings:
        """Access report settings subsystem."""
        return self._report

    @property
    def logging(self) -> LoggingSettings:
        """Access logging settings subsystem."""
        return self._logging

    @property
    def version(self) -> str:
        """Get configuration version."""
        return self._get_str("app/version", CONFIG_VERSION)

    # === DELEGATED SHORTCUTS ===

    @property
    def console_logging(self) -> bool:
        return self._logging.console_logging

    @property
    def console_log_level(self) -> str:
        return self._logging.console_log_level

    @property
    def console_use_colors(self) -> bool:
        return self._logging.console_use_colors

    @property
    def file_logging(self) -> bool:
        return self._logging.file_logging

    @property
    def log_file_path(self) -> str:
        return self._logging.log_file_path

    @property
    def warnings_max_lines(self) -> int:
        return self._logging.warnings_max_lines

    def to_options(self) -> ReportOptions:
        """Build the report options value for a projection pass."""
        return self._report.to_options()

    # === VALIDATION ===

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        return self._validator.validate()

    def sync(self) -> None:
        """Force synchronization of settings to storage."""
        self.settings.sync()
