"""
Sign texture settings for level_compiler.
"""

from pathlib import Path
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .store import SettingsStore


class TextureSettings:
    """Manages sign texture rendering settings."""

    def __init__(self, settings: "SettingsStore"):
        self.settings = settings

    @property
    def font_path(self) -> Optional[Path]:
        """TrueType font used for sign text (None uses Pillow's built-in font)."""
        value = self.settings.value("textures/font_path", "")
        return Path(str(value)) if value else None

    @font_path.setter
    def font_path(self, value: Optional[Path]) -> None:
        self.settings.set_value("textures/font_path", str(value) if value else "")
