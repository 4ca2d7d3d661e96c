"""
Code generation settings for level_compiler.
"""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .store import SettingsStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 8


class EmitterSettings:
    """Manages Elm output and build parallelism settings."""

    def __init__(self, settings: "SettingsStore"):
        self.settings = settings

    def _get_str(self, key: str, default: str = "") -> str:
        """Type-safe string retrieval from settings."""
        value = self.settings.value(key, default)
        return str(value) if value is not None else default

    @property
    def module_namespace(self) -> str:
        """Parent Elm module of generated map modules."""
        return self._get_str("emitter/module_namespace", "Level")

    @property
    def tile_module(self) -> str:
        """Elm module providing the tile constructors."""
        return self._get_str("emitter/tile_module", "LevelTile")

    @property
    def max_workers(self) -> int:
        """Number of threads compiling map files in parallel."""
        value = self.settings.value("emitter/max_workers", DEFAULT_MAX_WORKERS)
        try:
            return int(str(value)) if value is not None else DEFAULT_MAX_WORKERS
        except (ValueError, TypeError):
            return DEFAULT_MAX_WORKERS

    @max_workers.setter
    def max_workers(self, value: int) -> None:
        if value > 0:
            self.settings.set_value("emitter/max_workers", value)
        else:
            logger.warning(
                f"Invalid worker count: {value}, keeping current: {self.max_workers}"
            )
