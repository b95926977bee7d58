"""
Utility modules for kingmaker-save.
"""

from .logging_config import ColoredFormatter, CSVFormatter, WarningCollector, setup_logging

__all__ = ["ColoredFormatter", "CSVFormatter", "WarningCollector", "setup_logging"]
