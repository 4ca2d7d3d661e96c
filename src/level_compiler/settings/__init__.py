"""
Settings package for level_compiler.

This package provides a modular, type-safe configuration management system
backed by a JSON file.

Usage:
    from level_compiler.settings import CompilerSettings, ValidationResult

    settings = CompilerSettings("level_compiler.json")
    result = settings.validate()
"""

from .core import CompilerSettings
from .store import SettingsStore
from .types import ConfigError, ValidationResult

__all__ = [
    "CompilerSettings",
    "SettingsStore",
    "ConfigError",
    "ValidationResult",
]
