"""
Key/value storage for settings, persisted as a JSON file.

Keys are slash-separated (`paths/input_dir`) and stored nested in the JSON
document (`{"paths": {"input_dir": ...}}`).
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import orjson

from .types import ConfigError

logger = logging.getLogger(__name__)


class SettingsStore:
    """JSON-backed settings storage.

    Values set at runtime stay in memory until `sync()` writes them back.
    A store without a file path is purely in-memory.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else None
        self._data: Dict[str, Any] = {}
        if self.path is not None and self.path.exists():
            self._data = self._read(self.path)
            logger.debug(f"Settings loaded from {self.path}")

    @staticmethod
    def _read(path: Path) -> Dict[str, Any]:
        try:
            data = orjson.loads(path.read_bytes())
        except (OSError, orjson.JSONDecodeError) as e:
            raise ConfigError(f"Failed to read settings from {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Settings file {path} must contain a JSON object")
        return data  # type: ignore[return-value]

    def value(self, key: str, default: Any = None) -> Any:
        """Get a value by slash-separated key."""
        node: Any = self._data
        for part in key.split("/"):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def set_value(self, key: str, value: Any) -> None:
        """Set a value by slash-separated key."""
        *groups, name = key.split("/")
        node = self._data
        for part in groups:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[name] = value

    def remove(self, key: str) -> None:
        """Remove a key if present."""
        *groups, name = key.split("/")
        node: Any = self._data
        for part in groups:
            node = node.get(part) if isinstance(node, dict) else None
        if isinstance(node, dict):
            node.pop(name, None)

    def sync(self) -> None:
        """Write settings to the backing file (no-op for in-memory stores)."""
        if self.path is None:
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_bytes(
                orjson.dumps(self._data, option=orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS)
            )
        except OSError as e:
            raise ConfigError(f"Failed to write settings to {self.path}: {e}") from e

    def file_name(self) -> str:
        """Get the backing file path, or an empty string for in-memory stores."""
        return str(self.path) if self.path is not None else ""
