"""
Settings package for kingmaker-save.

This package provides a modular, type-safe configuration management system
using Qt's QSettings with INI storage.

Usage:
    from kingmaker_save.settings import AppSettings

    settings = AppSettings("kingmaker.ini")
    options = settings.to_options()
"""

from .core import AppSettings, CONFIG_VERSION
from .base import ConfigError
from .validation import ValidationResult
from .paths import PathSettings
from .report import ReportSettings
from .logging import LoggingSettings

__all__ = [
    "AppSettings",
    "CONFIG_VERSION",
    "ConfigError",
    "ValidationResult",
    "PathSettings",
    "ReportSettings",
    "LoggingSettings",
]
