"""
Logging configuration for kingmaker-save.
"""

import logging
import logging.handlers
from collections import deque
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from ..settings import AppSettings

CONSOLE_FORMAT = "%(asctime)s : %(levelname)-8s : %(message)s"
CONSOLE_DATEFMT = "%H:%M:%S"


class ColoredFormatter(logging.Formatter):
    """Console formatter that colors the level name."""

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.COLORS["RESET"])
        reset = self.COLORS["RESET"]
        formatted = super().format(record)

        # Only the level name is colored
        if record.levelname in formatted:
            formatted = formatted.replace(
                record.levelname, f"{color}{record.levelname}{reset}", 1
            )
        return formatted


class CSVFormatter(logging.Formatter):
    """Semicolon-separated formatter for the log file."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self.formatTime(record, self.datefmt)
        level = record.levelname.ljust(8)
        duration = f"{int(record.relativeCreated)} ms"
        module = record.name
        line_no = str(record.lineno)
        message = record.getMessage().replace('"', '""')
        return f'"{timestamp}";{level};"{duration}";"{module}";"{line_no}";"{message}"'


class WarningCollector(logging.Handler):
    """
    Buffers WARNING-and-above records of a run so they can be written to
    warnings.txt next to the reports.
    """

    def __init__(self, max_lines: int = 1000):
        super().__init__(level=logging.WARNING)
        self.max_lines = max_lines
        self.buffer: deque[logging.LogRecord] = deque(maxlen=max_lines)
        self.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.buffer.append(record)
        except Exception:
            self.handleError(record)

    def get_buffer(self) -> List[logging.LogRecord]:
        """Get collected records as a list."""
        return list(self.buffer)

    def messages(self) -> List[str]:
        """Formatted collected records, oldest first."""
        return [self.format(record) for record in self.buffer]

    def clear_buffer(self) -> None:
        self.buffer.clear()


def setup_logging(settings: Optional["AppSettings"] = None) -> WarningCollector:
    """
    Setup application logging with console, file and warning-collector handlers.

    Args:
        settings: AppSettings instance for logging configuration (console
            logging at INFO only when omitted)

    Returns:
        The warning collector attached to the root logger
    """
    console_enabled = settings.console_logging if settings else True
    console_level = settings.console_log_level if settings else "INFO"
    use_colors = settings.console_use_colors if settings else True
    file_enabled = settings.file_logging if settings else False
    log_file = settings.log_file_path if settings else ""
    max_warnings = settings.warnings_max_lines if settings else 1000

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    if console_enabled:
        if use_colors:
            console_formatter: logging.Formatter = ColoredFormatter(
                fmt=CONSOLE_FORMAT, datefmt=CONSOLE_DATEFMT
            )
        else:
            console_formatter = logging.Formatter(fmt=CONSOLE_FORMAT, datefmt=CONSOLE_DATEFMT)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper(), logging.INFO))
        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

    log_path = None
    if file_enabled and log_file:
        try:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(CSVFormatter(datefmt="%Y-%m-%d %H:%M:%S"))
            root_logger.addHandler(file_handler)
        except OSError as e:
            log_path = None
            root_logger.warning(f"Could not setup file logging: {e}")

    collector = WarningCollector(max_lines=max_warnings)
    root_logger.addHandler(collector)

    logger = logging.getLogger(__name__)
    logger.info("Logging initialized")
    if console_enabled:
        logger.debug(f"Console logging: {console_level} (colors: {use_colors})")
    if log_path:
        logger.debug(f"File logging: DEBUG at {log_path.absolute()}")
    return collector
