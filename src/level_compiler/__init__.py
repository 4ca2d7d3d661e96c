"""
level_compiler: asset pipeline for the web game

Compiles ASCII level maps into Elm modules and renders sign textures.
"""

__version__ = "0.1.0"
__author__ = "level_compiler Contributors"

# Core service imports
from .maps import MapCompilerService, parse_map, render_map_module, render_index_module
from .settings import CompilerSettings
from .textures import SignTextureGenerator
from .utils.logging_config import setup_logging

# Main data models
from .maps.models import (
    Orientation, TileKind, LegendEntry, Trigger, SpawnPoint, CompiledMap
)

__all__ = [
    # Services
    'MapCompilerService',
    'SignTextureGenerator',
    'CompilerSettings',

    # Pipeline functions
    'parse_map',
    'render_map_module',
    'render_index_module',

    # Logging
    'setup_logging',

    # Data models
    'Orientation',
    'TileKind',
    'LegendEntry',
    'Trigger',
    'SpawnPoint',
    'CompiledMap',
]
