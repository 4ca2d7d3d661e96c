"""
Core settings management for level_compiler.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from .types import ValidationResult
from .store import SettingsStore
from .validation import SettingsValidator
from .paths import PathSettings
from .emitter import EmitterSettings
from .logging import LoggingSettings
from .textures import TextureSettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "level_compiler.json"


class CompilerSettings:
    """
    Configuration management for the map compiler.

    Provides type-safe access to settings stored in a JSON file, split into
    subsystems. Values changed at runtime (e.g. from the command line) only
    reach the file after `sync()`.
    """

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        """Initialize settings from a JSON config file.

        Args:
            config_file: Path to the config file. When omitted, `level_compiler.json`
                in the working directory is used if it exists, otherwise settings
                live in memory only.
        """
        if config_file is None and Path(DEFAULT_CONFIG_FILE).exists():
            config_file = DEFAULT_CONFIG_FILE
        self.settings = SettingsStore(config_file)

        # Initialize subsystems
        self._validator = SettingsValidator(self)
        self._paths = PathSettings(self.settings)
        self._emitter = EmitterSettings(self.settings)
        self._logging = LoggingSettings(self.settings)
        self._textures = TextureSettings(self.settings)

        logger.debug(
            f"Settings initialized, stored at: {self.settings.file_name() or '<memory>'}"
        )

    # === SUBSYSTEM ACCESS ===

    @property
    def paths(self) -> PathSettings:
        """Access path settings subsystem."""
        return self._paths

    @property
    def emitter(self) -> EmitterSettings:
        """Access emitter settings subsystem."""
        return self._emitter

    @property
    def logging(self) -> LoggingSettings:
        """Access logging settings subsystem."""
        return self._logging

    @property
    def textures(self) -> TextureSettings:
        """Access texture settings subsystem."""
        return self._textures

    # === PATH SETTINGS (DELEGATED) ===

    @property
    def input_dir(self) -> Path:
        return self._paths.input_dir

    @input_dir.setter
    def input_dir(self, value: Path) -> None:
        self._paths.input_dir = value

    @property
    def output_dir(self) -> Path:
        return self._paths.output_dir

    @output_dir.setter
    def output_dir(self, value: Optional[Path]) -> None:
        self._paths.output_dir = value

    @property
    def map_extension(self) -> str:
        return self._paths.map_extension

    @property
    def report_file(self) -> Optional[Path]:
        return self._paths.report_file

    @report_file.setter
    def report_file(self, value: Optional[Path]) -> None:
        self._paths.report_file = value

    # === EMITTER SETTINGS (DELEGATED) ===

    @property
    def module_namespace(self) -> str:
        return self._emitter.module_namespace

    @property
    def tile_module(self) -> str:
        return self._emitter.tile_module

    @property
    def max_workers(self) -> int:
        return self._emitter.max_workers

    @max_workers.setter
    def max_workers(self, value: int) -> None:
        self._emitter.max_workers = value

    # === TEXTURE SETTINGS (DELEGATED) ===

    @property
    def font_path(self) -> Optional[Path]:
        return self._textures.font_path

    @font_path.setter
    def font_path(self, value: Optional[Path]) -> None:
        self._textures.font_path = value

    # === LOGGING SETTINGS (DELEGATED) ===

    @property
    def console_logging(self) -> bool:
        """Check if console logging is enabled."""
        return self._logging.console_logging

    @console_logging.setter
    def console_logging(self, value: bool) -> None:
        self._logging.console_logging = value

    @property
    def console_log_level(self) -> str:
        """Get console logging level."""
        return self._logging.console_log_level

    @console_log_level.setter
    def console_log_level(self, value: str) -> None:
        self._logging.console_log_level = value

    @property
    def console_use_colors(self) -> bool:
        """Check if console should use colors."""
        return self._logging.console_use_colors

    @property
    def file_logging(self) -> bool:
        """Check if file logging is enabled."""
        return self._logging.file_logging

    @file_logging.setter
    def file_logging(self, value: bool) -> None:
        self._logging.file_logging = value

    @property
    def log_file_path(self) -> str:
        """Get log file path."""
        return self._logging.log_file_path

    # === VALIDATION ===

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        return self._validator.validate()

    # === UTILITY METHODS ===

    def get_settings_file_path(self) -> str:
        """Get the file path where settings are stored."""
        return self.settings.file_name()

    def sync(self) -> None:
        """Force synchronization of settings to storage."""
        self.settings.sync()
