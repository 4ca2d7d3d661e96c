"""Unit tests for the ASCII map parser."""

import logging

import pytest

from level_compiler.maps.errors import MapFormatError
from level_compiler.maps.models import Orientation, SpawnPoint, Trigger
from level_compiler.maps.parser import (
    build_position_index,
    find_spawn,
    parse_legend_line,
    parse_map,
    split_descriptor,
    split_source,
    substitute_references,
)


class TestSplitSource:
    """Test splitting map text into grid and legend."""

    def test_without_separator_everything_is_grid(self) -> None:
        rows, legend = split_source("#^#\n#.#\n")
        assert rows == ["#^#", "#.#"]
        assert legend == []

    def test_legend_lines_are_numbered(self) -> None:
        rows, legend = split_source("^X\n---\nX door\n\nY wall\n")
        assert rows == ["^X"]
        assert legend == [(3, "X door"), (4, ""), (5, "Y wall")]

    def test_crlf_line_endings(self) -> None:
        rows, legend = split_source("^.\r\n---\r\n. floor\r\n")
        assert rows == ["^."]
        assert legend == [(3, ". floor")]


class TestPositionIndex:
    """Test building the character position index."""

    def test_single_and_multiple_occurrences(self) -> None:
        index = build_position_index(["#.#", ".x."])

        assert index.lookup("x") == (1, 1)
        assert index.lookup("#") == ((0, 0), (2, 0))
        assert index.lookup(".") == ((1, 0), (0, 1), (2, 1))

    def test_every_grid_character_has_an_entry(self) -> None:
        index = build_position_index(["ab", "ca"])
        assert index.chars == ["a", "b", "c"]
        assert len(index.occurrences("a")) == 2
        assert "z" not in index
        assert index.occurrences("z") == ()

    def test_ragged_rows(self) -> None:
        index = build_position_index(["abc", "a", "bb"])
        assert index.lookup("a") == ((0, 0), (0, 1))
        assert index.lookup("b") == ((1, 0), (0, 2), (1, 2))
        assert index.lookup("c") == (2, 0)


class TestDescriptors:
    """Test legend descriptor handling."""

    def test_parenthesised_tile_with_trigger(self) -> None:
        assert split_descriptor("(Foo 1 2) Bar") == ("(Foo 1 2)", "Bar")

    def test_bare_tile_without_trigger(self) -> None:
        assert split_descriptor("Foo") == ("Foo", "")

    def test_bare_tile_with_trigger(self) -> None:
        assert split_descriptor("door [StepOn] [Open]") == ("door", "[StepOn] [Open]")

    def test_nested_parentheses(self) -> None:
        assert split_descriptor("(sign (Color.rgb 1 0 0)) Baz") == (
            "(sign (Color.rgb 1 0 0))",
            "Baz",
        )

    def test_unbalanced_parentheses(self) -> None:
        with pytest.raises(MapFormatError):
            split_descriptor("(Foo 1 2 Bar", line=7)

    def test_missing_space_after_tile(self) -> None:
        with pytest.raises(MapFormatError):
            split_descriptor("(Foo 1)Bar")

    def test_back_reference_to_repeated_character(self) -> None:
        rows = ["^....", ".....", ".Y...", ".....", "...Y."]
        index = build_position_index(rows)

        result = substitute_references("[] [Teleport @Y]", index)
        assert result == "[] [Teleport [(1, 2),(3, 4)]]"

    def test_back_reference_to_unique_character(self) -> None:
        index = build_position_index([".^", "B."])
        assert substitute_references("[Goto @B]", index) == "[Goto (0, 1)]"

    def test_back_reference_to_unknown_character(self) -> None:
        index = build_position_index(["^"])
        with pytest.raises(MapFormatError) as exc_info:
            substitute_references("[Goto @Q]", index, line=4)
        assert exc_info.value.line == 4

    def test_legend_line(self) -> None:
        index = build_position_index(["^X"])
        entry = parse_legend_line("X (Foo 1 2) Bar", index, 3)
        assert entry.key == "X"
        assert entry.tile == "(Foo 1 2)"
        assert entry.trigger == "Bar"
        assert entry.line == 3


class TestSpawn:
    """Test spawn point detection."""

    def test_spawn_position_and_orientation(self) -> None:
        rows = ["......", "......", ".....v"]
        assert find_spawn(rows) == SpawnPoint((5, 2), Orientation.SOUTH)

    @pytest.mark.parametrize(
        "glyph,orientation",
        [("^", Orientation.NORTH), (">", Orientation.EAST), ("<", Orientation.WEST)],
    )
    def test_glyph_orientations(self, glyph: str, orientation: Orientation) -> None:
        assert find_spawn(["#" + glyph]).orientation == orientation

    def test_missing_spawn(self) -> None:
        with pytest.raises(MapFormatError):
            find_spawn(["###", "#.#"])

    def test_first_spawn_wins(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            spawn = find_spawn(["..>", "^.."])
        assert spawn == SpawnPoint((2, 0), Orientation.EAST)
        assert "Several spawn glyphs" in caplog.text


class TestParseMap:
    """Test parsing complete map files."""

    def test_map_without_legend_uses_default_tiles(self) -> None:
        compiled = parse_map("####\n#^.Z\n####\n", "intro.txt")

        assert compiled.name == "intro"
        assert compiled.tiles == (
            ("wall", "wall", "wall", "wall"),
            ("wall", "floor", "floor", "empty"),
            ("wall", "wall", "wall", "wall"),
        )
        assert compiled.triggers == ()
        assert compiled.spawn == SpawnPoint((1, 1), Orientation.NORTH)

    def test_single_occurrence_trigger(self) -> None:
        compiled = parse_map("^X\n---\nX (Foo 1 2) Bar\n", "m.txt")
        assert compiled.tiles == (("floor", "(Foo 1 2)"),)
        assert compiled.triggers == (Trigger((1, 0), "Bar"),)

    def test_legend_entry_without_trigger(self) -> None:
        compiled = parse_map("^X\n---\nX Foo\n", "m.txt")
        assert compiled.tiles == (("floor", "Foo"),)
        assert compiled.triggers == ()

    def test_trigger_per_occurrence(self) -> None:
        compiled = parse_map("X^X\n.X.\n---\nX door [StepOn] [Open]\n", "m.txt")
        assert compiled.triggers == (
            Trigger((0, 0), "[StepOn] [Open]"),
            Trigger((2, 0), "[StepOn] [Open]"),
            Trigger((1, 1), "[StepOn] [Open]"),
        )

    def test_spawn_glyph_trigger_fires_on_level_load(self) -> None:
        compiled = parse_map(".^.\n---\n^ floor [] Foo\n", "m.txt")
        assert compiled.triggers == (Trigger((1, 0), "[LevelLoaded] Foo"),)

    def test_spawn_glyph_trigger_with_conditions_is_kept(self) -> None:
        compiled = parse_map("^\n---\n^ floor [StepOn] Foo\n", "m.txt")
        assert compiled.triggers == (Trigger((0, 0), "[StepOn] Foo"),)

    def test_other_keys_keep_empty_conditions(self) -> None:
        compiled = parse_map("^X\n---\nX floor [] Foo\n", "m.txt")
        assert compiled.triggers == (Trigger((1, 0), "[] Foo"),)

    def test_back_reference_in_trigger(self) -> None:
        text = "^.B\n..B\n---\nB floor\n^ floor [] [Highlight @B]\n"
        compiled = parse_map(text, "m.txt")
        assert compiled.triggers == (
            Trigger((0, 0), "[LevelLoaded] [Highlight [(2, 0),(2, 1)]]"),
        )

    def test_blank_legend_lines_are_skipped(self) -> None:
        compiled = parse_map("^X\n---\n\nX door\n   \n", "m.txt")
        assert compiled.tiles == (("floor", "door"),)

    def test_missing_descriptor_reports_file_and_line(self) -> None:
        with pytest.raises(MapFormatError) as exc_info:
            parse_map("^X\n---\nX\n", "broken.txt")
        assert exc_info.value.filename == "broken.txt"
        assert exc_info.value.line == 3
        assert "broken.txt:3" in str(exc_info.value)

    def test_trigger_for_absent_character(self) -> None:
        with pytest.raises(MapFormatError) as exc_info:
            parse_map("^\n---\nQ door Foo\n", "m.txt")
        assert exc_info.value.line == 3

    def test_missing_spawn_reports_file(self) -> None:
        with pytest.raises(MapFormatError) as exc_info:
            parse_map("###\n", "nospawn.txt")
        assert exc_info.value.filename == "nospawn.txt"
