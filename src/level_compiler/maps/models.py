"""
Data models for compiled maps.

These models form the intermediate representation between the ASCII map
parser and the Elm emitter. Every model is immutable: a parse produces a
fresh set of values per file and nothing is shared between files.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, TypeAlias, Union

Position: TypeAlias = tuple[int, int]
"""Grid coordinate as (x, y): x is the column, y is the row, both 0-based."""

TileRow: TypeAlias = tuple[str, ...]
"""One row of tile descriptors."""

TileMatrix: TypeAlias = tuple[TileRow, ...]
"""All tile rows of a map, top to bottom."""


LEGEND_SEPARATOR = "---"
"""Line separating the grid from the legend."""

LEVEL_LOADED_CONDITION = "[LevelLoaded]"
"""Condition list substituted for empty conditions on spawn glyph triggers."""

EMPTY_CONDITIONS_PREFIX = "[] "


class Orientation(Enum):
    """Facing direction of the player at spawn."""

    NORTH = "North"
    EAST = "East"
    SOUTH = "South"
    WEST = "West"


SPAWN_GLYPHS: dict[str, Orientation] = {
    "^": Orientation.NORTH,
    ">": Orientation.EAST,
    "v": Orientation.SOUTH,
    "<": Orientation.WEST,
}
"""Grid characters marking the spawn point, with the facing they imply."""


class TileKind(Enum):
    """Built-in tiles used for grid characters without a legend entry."""

    FLOOR = "floor"
    WALL = "wall"
    EMPTY = "empty"


# Fallback policy for characters not overridden by the legend.
# Anything missing from this table becomes TileKind.EMPTY.
DEFAULT_TILES: dict[str, TileKind] = {
    ".": TileKind.FLOOR,
    "^": TileKind.FLOOR,
    ">": TileKind.FLOOR,
    "v": TileKind.FLOOR,
    "<": TileKind.FLOOR,
    "#": TileKind.WALL,
}


def default_tile_for(char: str) -> TileKind:
    """Get the built-in tile for a grid character."""
    return DEFAULT_TILES.get(char, TileKind.EMPTY)


class PositionIndex:
    """Positions of every distinct character in a grid.

    A character seen once resolves to a single Position, a character seen
    several times resolves to a tuple of Positions in row-major discovery
    order.
    """

    def __init__(self, occurrences: dict[str, tuple[Position, ...]]):
        self._occurrences = dict(occurrences)

    def __contains__(self, char: object) -> bool:
        return char in self._occurrences

    def __len__(self) -> int:
        return len(self._occurrences)

    def __repr__(self) -> str:
        return f"PositionIndex({self._occurrences!r})"

    @property
    def chars(self) -> list[str]:
        """Characters in order of first appearance."""
        return list(self._occurrences)

    def occurrences(self, char: str) -> tuple[Position, ...]:
        """All positions of a character (empty tuple if absent)."""
        return self._occurrences.get(char, ())

    def is_unique(self, char: str) -> bool:
        """Check whether a character appears exactly once."""
        return len(self.occurrences(char)) == 1

    def lookup(self, char: str) -> Union[Position, tuple[Position, ...]]:
        """Resolve a character to one position or a tuple of positions.

        Raises:
            KeyError: If the character does not appear in the grid
        """
        positions = self._occurrences[char]
        if len(positions) == 1:
            return positions[0]
        return positions


@dataclass(frozen=True)
class LegendEntry:
    """One parsed legend line.

    Attributes:
        key: Grid character this entry overrides
        tile: Tile descriptor, a bare name or a parenthesised constructor call
        trigger: Trigger body (conditions and effects), empty when absent
        line: 1-based line number in the source file
    """

    key: str
    tile: str
    trigger: str = ""
    line: Optional[int] = None

    @property
    def has_trigger(self) -> bool:
        return bool(self.trigger)


@dataclass(frozen=True)
class Trigger:
    """A trigger bound to one grid position.

    The body is an Elm expression fragment written by the map author,
    `<conditions> <effects>`, and is emitted verbatim.
    """

    position: Position
    body: str


@dataclass(frozen=True)
class SpawnPoint:
    """Player start position and facing."""

    position: Position
    orientation: Orientation


@dataclass(frozen=True)
class CompiledMap:
    """Fully parsed map, ready for emission.

    Attributes:
        name: Module identifier derived from the source file name
        tiles: Tile descriptors, one row per grid row
        triggers: Triggers in legend order, expanded per occurrence
        spawn: Player start position and facing
        source: Path of the source file, if it came from disk
    """

    name: str
    tiles: TileMatrix
    triggers: tuple[Trigger, ...]
    spawn: SpawnPoint
    source: Optional[Path] = field(default=None, compare=False)

    @property
    def width(self) -> int:
        return max((len(row) for row in self.tiles), default=0)

    @property
    def height(self) -> int:
        return len(self.tiles)
