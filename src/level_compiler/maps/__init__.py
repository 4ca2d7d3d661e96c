"""ASCII map parsing and Elm module generation."""

from .models import (
    Position,
    PositionIndex,
    LegendEntry,
    Trigger,
    SpawnPoint,
    Orientation,
    TileKind,
    DEFAULT_TILES,
    SPAWN_GLYPHS,
    CompiledMap,
)
from .errors import MapCompilerError, InputError, MapFormatError, OutputError
from .parser import parse_map, build_position_index
from .emitter import render_map_module, render_index_module
from .scanner import scan_map_directory
from .report import BuildReport, MapFailure
from .service import MapCompilerService

__all__ = [
    "Position",
    "PositionIndex",
    "LegendEntry",
    "Trigger",
    "SpawnPoint",
    "Orientation",
    "TileKind",
    "DEFAULT_TILES",
    "SPAWN_GLYPHS",
    "CompiledMap",
    "MapCompilerError",
    "InputError",
    "MapFormatError",
    "OutputError",
    "parse_map",
    "build_position_index",
    "render_map_module",
    "render_index_module",
    "scan_map_directory",
    "BuildReport",
    "MapFailure",
    "MapCompilerService",
]
