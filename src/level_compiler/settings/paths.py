"""
Path-related settings for level_compiler.
"""

from pathlib import Path
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .store import SettingsStore

DEFAULT_INPUT_DIR = "levels"
DEFAULT_MAP_EXTENSION = ".txt"


class PathSettings:
    """Manages input/output locations."""

    def __init__(self, settings: "SettingsStore"):
        self.settings = settings

    def _get_str(self, key: str, default: str = "") -> str:
        """Type-safe string retrieval from settings."""
        value = self.settings.value(key, default)
        return str(value) if value is not None else default

    @property
    def input_dir(self) -> Path:
        """Directory holding the ASCII map files."""
        return Path(self._get_str("paths/input_dir", DEFAULT_INPUT_DIR))

    @input_dir.setter
    def input_dir(self, value: Path) -> None:
        self.settings.set_value("paths/input_dir", str(value))

    @property
    def output_dir(self) -> Path:
        """Directory receiving generated Elm modules.

        Defaults to `src/Level` next to the input directory.
        """
        path_str = self._get_str("paths/output_dir", "")
        if path_str:
            return Path(path_str)
        return self.input_dir.parent / "src" / "Level"

    @output_dir.setter
    def output_dir(self, value: Optional[Path]) -> None:
        if value is None:
            self.settings.remove("paths/output_dir")
        else:
            self.settings.set_value("paths/output_dir", str(value))

    @property
    def map_extension(self) -> str:
        """File extension of map sources."""
        extension = self._get_str("paths/map_extension", DEFAULT_MAP_EXTENSION)
        return extension if extension.startswith(".") else f".{extension}"

    @property
    def report_file(self) -> Optional[Path]:
        """Where to write the JSON build report, if anywhere."""
        path_str = self._get_str("paths/report_file", "")
        return Path(path_str) if path_str else None

    @report_file.setter
    def report_file(self, value: Optional[Path]) -> None:
        self.settings.set_value("paths/report_file", str(value) if value else "")
