"""
Logging-related settings for kingmaker-save.
"""

import logging

from .base import SettingsGroup

logger = logging.getLogger(__name__)

DEFAULT_LOG_FILE = "logs/kingmaker_save.csv"
VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingSettings(SettingsGroup):
    """Manages logging-related settings."""

    # === CONSOLE LOGGING SETTINGS ===

    @property
    def console_logging(self) -> bool:
        """Check if console logging is enabled."""
        return self._get_bool("logging/console_enabled", True)

    @console_logging.setter
    def console_logging(self, value: bool) -> None:
        self._set("logging/console_enabled", value)

    @property
    def console_log_level(self) -> str:
        """Get console logging level."""
        return self._get_str("logging/console_level", "INFO")

    @console_log_level.setter
    def console_log_level(self, value: str) -> None:
        if value.upper() in VALID_LEVELS:
            self._set("logging/console_level", value.upper())
        else:
            logger.warning(
                f"Invalid console log level: {value}, keeping current: {self.console_log_level}"
            )

    @property
    def console_use_colors(self) -> bool:
        """Check if console should use colors."""
        return self._get_bool("logging/console_use_colors", True)

    @console_use_colors.setter
    def console_use_colors(self, value: bool) -> None:
        self._set("logging/console_use_colors", value)

    # === FILE LOGGING SETTINGS ===

    @property
    def file_logging(self) -> bool:
        """Check if file logging is enabled."""
        return self._get_bool("logging/file_enabled", False)

    @file_logging.setter
    def file_logging(self, value: bool) -> None:
        self._set("logging/file_enabled", value)

    @property
    def log_file_path(self) -> str:
        """Get log file path."""
        return self._get_str("logging/file_path", DEFAULT_LOG_FILE) or DEFAULT_LOG_FILE

    @log_file_path.setter
    def log_file_path(self, value: str) -> None:
        self._set("logging/file_path", value)

    # === WARNING COLLECTION ===

    @property
    def warnings_max_lines(self) -> int:
        """Get the maximum number of warnings kept for warnings.txt."""
        value = self.settings.value("logging/warnings_max_lines", 1000)
        try:
            return int(str(value)) if value is not None else 1000
        except (ValueError, TypeError):
            return 1000

    @warnings_max_lines.setter
    def warnings_max_lines(self, value: int) -> None:
        if value > 0:
            self._set("logging/warnings_max_lines", value)
        else:
            logger.warning(
                f"Invalid warnings max lines: {value}, keeping current: {self.warnings_max_lines}"
            )
