"""
Elm source rendering for compiled maps.

Each function renders one piece of Elm literal syntax. Descriptors written
by map authors are already valid Elm expressions and are passed through
unchanged apart from qualifying tile constructors with the tile module.
"""

from typing import Iterable, Sequence

from .models import CompiledMap, Position, TileMatrix, Trigger

DEFAULT_NAMESPACE = "Level"
DEFAULT_TILE_MODULE = "LevelTile"
INDEX_MODULE = "Index"


def format_position(position: Position) -> str:
    """Render a position as an Elm tuple, e.g. `(3, 4)`."""
    x, y = position
    return f"({x}, {y})"


def format_position_list(positions: Iterable[Position]) -> str:
    """Render positions as an Elm list, e.g. `[(1, 2),(3, 4)]`."""
    return "[" + ",".join(format_position(p) for p in positions) + "]"


def qualify_tile(descriptor: str, tile_module: str = DEFAULT_TILE_MODULE) -> str:
    """Qualify a tile descriptor with the tile module.

    `floor` becomes `LevelTile.floor`, `(door 1)` becomes `(LevelTile.door 1)`.
    """
    if descriptor.startswith("("):
        return f"({tile_module}.{descriptor[1:]}"
    return f"{tile_module}.{descriptor}"


def render_tiles(tiles: TileMatrix, tile_module: str = DEFAULT_TILE_MODULE) -> str:
    rows = [
        "[" + ",".join(qualify_tile(tile, tile_module) for tile in row) + "]"
        for row in tiles
    ]
    return "[" + ",".join(rows) + "]"


def render_trigger(trigger: Trigger) -> str:
    return f"Trigger.localTrigger {format_position(trigger.position)} {trigger.body}"


def render_triggers(triggers: Sequence[Trigger]) -> str:
    return "[" + ",".join(render_trigger(t) for t in triggers) + "]"


def module_path(name: str, namespace: str = DEFAULT_NAMESPACE) -> str:
    """Fully qualified Elm module name for a map, e.g. `Level.intro`."""
    return f"{namespace}.{name}"


def render_map_module(
    compiled: CompiledMap,
    namespace: str = DEFAULT_NAMESPACE,
    tile_module: str = DEFAULT_TILE_MODULE,
) -> str:
    """Render a compiled map as a complete Elm module.

    Args:
        compiled: Parsed map
        namespace: Parent module of all generated map modules
        tile_module: Module providing the tile constructors

    Returns:
        Elm source text ending with a newline
    """
    record = ", ".join(
        [
            f"tiles = {render_tiles(compiled.tiles, tile_module)}",
            f"triggers = {render_triggers(compiled.triggers)}",
            f"playerStartPosition = {format_position(compiled.spawn.position)}",
            f"playerStartingOrientation = {compiled.spawn.orientation.value}",
        ]
    )
    lines = [
        f"module {module_path(compiled.name, namespace)} exposing (data)",
        f"import {namespace}",
        f"import {tile_module}",
        "import Trigger exposing (Trigger, TriggerCondition(..), TriggerEffect(..))",
        "import Orientation exposing (Orientation(..))",
        "import Color",
        "import Length",
        "",
        f"data = {namespace}.fromData {{ {record} }}",
    ]
    return "\n".join(lines) + "\n"


def render_index_module(
    module_names: Sequence[str], namespace: str = DEFAULT_NAMESPACE
) -> str:
    """Render the aggregate module exposing the first map and the rest.

    Args:
        module_names: Map module identifiers in scan order
        namespace: Parent module of all generated map modules

    Raises:
        ValueError: If no module names are given
    """
    if not module_names:
        raise ValueError("Cannot build a level index without any maps")

    modules = [module_path(name, namespace) for name in module_names]
    data = [f"{module}.data" for module in modules]
    lines = [
        f"module {module_path(INDEX_MODULE, namespace)} exposing (firstLevel, restLevels)",
        "",
        f"import {namespace}",
        *(f"import {module}" for module in modules),
        "",
        "",
        f"firstLevel = {data[0]}",
        f"restLevels = [{', '.join(data[1:])}]",
    ]
    return "\n".join(lines) + "\n"
