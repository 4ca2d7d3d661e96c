"""
Settings validation system for level_compiler.
"""

import logging
from typing import List, TYPE_CHECKING

from .logging import VALID_LEVELS
from .types import ValidationResult

if TYPE_CHECKING:
    from .core import CompilerSettings

logger = logging.getLogger(__name__)


class SettingsValidator:
    """Validates configuration settings."""

    def __init__(self, settings: "CompilerSettings"):
        self.settings = settings

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        errors: List[str] = []
        warnings: List[str] = []

        input_dir = self.settings.input_dir
        if not input_dir.exists():
            errors.append(f"Input directory does not exist: {input_dir}")
        elif not input_dir.is_dir():
            errors.append(f"Input path is not a directory: {input_dir}")

        output_dir = self.settings.output_dir
        if output_dir.exists() and not output_dir.is_dir():
            errors.append(f"Output path is not a directory: {output_dir}")
        elif not output_dir.exists():
            warnings.append(f"Output directory will be created: {output_dir}")

        for name in (self.settings.module_namespace, self.settings.tile_module):
            if not name or not name[0].isupper():
                errors.append(f"Elm module name must start with an upper-case letter: {name!r}")

        font_path = self.settings.font_path
        if font_path and not font_path.exists():
            warnings.append(f"Sign font not found, built-in font will be used: {font_path}")

        if self.settings.console_log_level not in VALID_LEVELS:
            warnings.append(f"Unknown console log level: {self.settings.console_log_level}")

        return ValidationResult(
            is_valid=len(errors) == 0, errors=errors, warnings=warnings
        )
