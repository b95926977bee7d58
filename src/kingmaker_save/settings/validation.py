"""
Settings validation system for kingmaker-save.
"""

import logging
from dataclasses import dataclass, field
from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from .core import AppSettings

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Outcome of a configuration check."""
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


class SettingsValidator:
    """Validates configuration settings."""

    def __init__(self, settings: "AppSettings"):
        self.settings = settings

    def validate(self) -> ValidationResult:
        """Validate current configuration.

        Missing paths are warnings since the command line can supply them;
        a configured catalog that is not a file is an error.
        """
        errors: List[str] = []
        warnings: List[str] = []
        paths = self.settings.paths

        if paths.save_path:
            if not paths.save_path.exists():
                warnings.append(f"Save path does not exist: {paths.save_path}")
        else:
            warnings.append("Save path not set")

        if paths.catalog_path:
            if not paths.catalog_path.exists():
                errors.append(f"Catalog file does not exist: {paths.catalog_path}")
            elif not paths.catalog_path.is_file():
                errors.append(f"Catalog path is not a file: {paths.catalog_path}")

        if paths.output_dir.exists() and not paths.output_dir.is_dir():
            errors.append(f"Output path is not a directory: {paths.output_dir}")

        report = self.settings.report
        overlap = {name.lower() for name in report.character_order} & {
            name.lower() for name in report.excluded_characters
        }
        for name in sorted(overlap):
            warnings.append(f"Character is both ordered and excluded: {name}")

        result = ValidationResult(is_valid=len(errors) == 0, errors=errors, warnings=warnings)
        logger.debug(f"Validation: {len(errors)} errors, {len(warnings)} warnings")
        return result
