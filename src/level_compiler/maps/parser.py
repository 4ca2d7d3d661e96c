"""
Parser for ASCII map files.

A map file is a character grid, optionally followed by a `---` line and a
legend. Each legend line has the form `<char> <tile> [<trigger>]` and may
refer to grid positions with `@<char>` back-references.

All functions here are pure: they take text and return fresh immutable
values, so files can be parsed in parallel without sharing state.
"""

import logging
import re
from pathlib import Path
from typing import Iterable, Optional, Sequence

from .emitter import format_position, format_position_list
from .errors import MapFormatError
from .models import (
    EMPTY_CONDITIONS_PREFIX,
    LEGEND_SEPARATOR,
    LEVEL_LOADED_CONDITION,
    SPAWN_GLYPHS,
    CompiledMap,
    LegendEntry,
    Position,
    PositionIndex,
    SpawnPoint,
    TileMatrix,
    Trigger,
    default_tile_for,
)

logger = logging.getLogger(__name__)

BACK_REFERENCE_RE = re.compile(r"@(.)")

NumberedLine = tuple[int, str]


def split_lines(text: str) -> list[str]:
    """Split text into lines, accepting both LF and CRLF endings."""
    lines = [line.rstrip("\r") for line in text.split("\n")]
    if lines and lines[-1] == "" and text.endswith("\n"):
        lines.pop()
    return lines


def split_source(text: str) -> tuple[list[str], list[NumberedLine]]:
    """Split map text into grid rows and numbered legend lines.

    Returns:
        Tuple of (grid rows, [(1-based line number, legend line), ...]).
        Without a separator line the whole text is grid and the legend is empty.
    """
    lines = split_lines(text)
    try:
        separator = lines.index(LEGEND_SEPARATOR)
    except ValueError:
        return lines, []

    legend = [
        (number, line)
        for number, line in enumerate(lines[separator + 1:], start=separator + 2)
    ]
    return lines[:separator], legend


def build_position_index(rows: Sequence[str]) -> PositionIndex:
    """Record the position of every character in the grid, row-major."""
    occurrences: dict[str, list[Position]] = {}
    for y, row in enumerate(rows):
        for x, char in enumerate(row):
            occurrences.setdefault(char, []).append((x, y))
    return PositionIndex({char: tuple(found) for char, found in occurrences.items()})


def substitute_references(
    descriptor: str, index: PositionIndex, line: Optional[int] = None
) -> str:
    """Replace every `@<char>` with the grid position(s) of that character.

    A character seen once becomes `(x, y)`, a character seen several times
    becomes a list `[(x1, y1),(x2, y2)]` in discovery order.

    Raises:
        MapFormatError: If a referenced character is not in the grid
    """

    def replace(match: "re.Match[str]") -> str:
        char = match.group(1)
        if char not in index:
            raise MapFormatError(
                f"back-reference '@{char}' points to a character not in the grid",
                line=line,
            )
        if index.is_unique(char):
            return format_position(index.occurrences(char)[0])
        return format_position_list(index.occurrences(char))

    return BACK_REFERENCE_RE.sub(replace, descriptor)


def _closing_paren(descriptor: str) -> int:
    depth = 0
    for offset, char in enumerate(descriptor):
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return offset
    return -1


def split_descriptor(descriptor: str, line: Optional[int] = None) -> tuple[str, str]:
    """Split a legend descriptor into tile and trigger parts.

    The tile is either the leading parenthesised expression or the first
    space-delimited token. The trigger is what follows after one space.

    Examples:
        `(Foo 1 2) Bar` -> (`(Foo 1 2)`, `Bar`)
        `Foo` -> (`Foo`, ``)

    Raises:
        MapFormatError: If the tile part is missing or malformed
    """
    if descriptor.startswith("("):
        end = _closing_paren(descriptor)
        if end == -1:
            raise MapFormatError(
                f"unbalanced parentheses in tile descriptor: {descriptor!r}",
                line=line,
            )
        tile = descriptor[: end + 1]
    else:
        tile = descriptor.split(" ")[0]

    if not tile:
        raise MapFormatError("missing tile descriptor", line=line)

    rest = descriptor[len(tile):]
    if rest and not rest.startswith(" "):
        raise MapFormatError(
            f"expected a space after tile descriptor {tile!r}", line=line
        )
    return tile, rest[1:]


def parse_legend_line(
    line: str, index: PositionIndex, number: Optional[int] = None
) -> LegendEntry:
    """Parse one non-blank legend line of the form `<char> <descriptor>`."""
    line = line.rstrip()
    key = line[0]
    descriptor = line[2:]
    if not descriptor.strip():
        raise MapFormatError(f"legend entry for {key!r} has no descriptor", line=number)

    descriptor = substitute_references(descriptor, index, number)
    tile, trigger = split_descriptor(descriptor, number)
    return LegendEntry(key=key, tile=tile, trigger=trigger, line=number)


def parse_legend(lines: Iterable[NumberedLine], index: PositionIndex) -> list[LegendEntry]:
    """Parse all legend lines, skipping blank ones."""
    entries: list[LegendEntry] = []
    seen: set[str] = set()
    for number, line in lines:
        if not line.strip():
            continue
        entry = parse_legend_line(line, index, number)
        if entry.key in seen:
            logger.warning(
                f"Line {number}: legend key {entry.key!r} redefined, later tile wins"
            )
        seen.add(entry.key)
        entries.append(entry)
    return entries


def trigger_body(key: str, trigger: str) -> str:
    """Apply the spawn glyph rule to a trigger body.

    Spawn glyph triggers with an empty condition list fire when the level
    is loaded.
    """
    if key in SPAWN_GLYPHS and trigger.startswith(EMPTY_CONDITIONS_PREFIX):
        return f"{LEVEL_LOADED_CONDITION} {trigger[len(EMPTY_CONDITIONS_PREFIX):]}"
    return trigger


def expand_triggers(
    entries: Iterable[LegendEntry], index: PositionIndex
) -> tuple[Trigger, ...]:
    """Create one trigger per grid occurrence of every legend key with a trigger.

    Raises:
        MapFormatError: If a legend key with a trigger is absent from the grid
    """
    triggers: list[Trigger] = []
    for entry in entries:
        if not entry.has_trigger:
            continue
        positions = index.occurrences(entry.key)
        if not positions:
            raise MapFormatError(
                f"legend key {entry.key!r} has a trigger but does not appear in the grid",
                line=entry.line,
            )
        body = trigger_body(entry.key, entry.trigger)
        triggers.extend(Trigger(position=position, body=body) for position in positions)
    return tuple(triggers)


def find_spawn(rows: Sequence[str]) -> SpawnPoint:
    """Find the player spawn: the first spawn glyph in the first row holding one.

    Raises:
        MapFormatError: If the grid has no spawn glyph
    """
    found: list[Position] = []
    spawn: Optional[SpawnPoint] = None
    for y, row in enumerate(rows):
        for x, char in enumerate(row):
            if char not in SPAWN_GLYPHS:
                continue
            found.append((x, y))
            if spawn is None:
                spawn = SpawnPoint(position=(x, y), orientation=SPAWN_GLYPHS[char])

    if spawn is None:
        glyphs = " ".join(SPAWN_GLYPHS)
        raise MapFormatError(f"no spawn glyph ({glyphs}) found in the grid")

    if len(found) > 1:
        extra = ", ".join(format_position(p) for p in found[1:])
        logger.warning(
            f"Several spawn glyphs found, using {format_position(spawn.position)} "
            f"and ignoring {extra}"
        )
    return spawn


def build_tile_matrix(rows: Sequence[str], legend: dict[str, str]) -> TileMatrix:
    """Map every grid character to its tile descriptor."""
    return tuple(
        tuple(legend[char] if char in legend else default_tile_for(char).value for char in row)
        for row in rows
    )


def map_name(filename: str) -> str:
    """Derive the module identifier from a map file name."""
    return Path(filename).stem


def parse_map(text: str, filename: str) -> CompiledMap:
    """Parse the text of one map file.

    Args:
        text: Full file content
        filename: Source file name, used for the module name and error messages

    Returns:
        CompiledMap ready for emission

    Raises:
        MapFormatError: If the map is malformed
    """
    try:
        rows, legend_lines = split_source(text)
        index = build_position_index(rows)
        entries = parse_legend(legend_lines, index)
        triggers = expand_triggers(entries, index)
        spawn = find_spawn(rows)
    except MapFormatError as e:
        raise e.with_filename(filename) from e

    legend = {entry.key: entry.tile for entry in entries}
    compiled = CompiledMap(
        name=map_name(filename),
        tiles=build_tile_matrix(rows, legend),
        triggers=triggers,
        spawn=spawn,
    )
    logger.debug(
        f"Parsed {filename}: {compiled.width}x{compiled.height} tiles, "
        f"{len(entries)} legend entries, {len(triggers)} triggers"
    )
    return compiled
