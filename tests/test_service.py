"""Tests for directory scanning and batch compilation."""

from pathlib import Path

import pytest

from level_compiler.maps.errors import InputError, OutputError
from level_compiler.maps.scanner import scan_map_directory
from level_compiler.maps.service import MapCompilerService
from level_compiler.settings import CompilerSettings, ConfigError

VALID_MAP = "#####\n#^.X#\n#####\n---\nX (door 1) [StepOn] [Open]\n"


def make_settings(tmp_path: Path) -> CompilerSettings:
    settings = CompilerSettings(tmp_path / "level_compiler.json")
    settings.input_dir = tmp_path / "levels"
    settings.output_dir = tmp_path / "src" / "Level"
    settings.max_workers = 4
    return settings


def write_maps(directory: Path, maps: dict[str, str]) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    for name, text in maps.items():
        (directory / name).write_text(text, encoding="utf-8")


class TestScanner:
    """Test map file discovery."""

    def test_only_map_files_are_listed(self, tmp_path: Path) -> None:
        write_maps(tmp_path, {"a.txt": VALID_MAP, "notes.md": "", "b.txt": VALID_MAP})
        (tmp_path / "dir.txt").mkdir()

        names = sorted(p.name for p in scan_map_directory(tmp_path))
        assert names == ["a.txt", "b.txt"]

    def test_custom_extension(self, tmp_path: Path) -> None:
        write_maps(tmp_path, {"a.map": VALID_MAP, "b.txt": VALID_MAP})
        assert [p.name for p in scan_map_directory(tmp_path, "map")] == ["a.map"]

    def test_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(InputError):
            scan_map_directory(tmp_path / "missing")

    def test_file_instead_of_directory(self, tmp_path: Path) -> None:
        target = tmp_path / "a.txt"
        target.write_text(VALID_MAP)
        with pytest.raises(InputError):
            scan_map_directory(target)


class TestCompileDirectory:
    """Test compiling a whole directory of maps."""

    def test_compiles_all_maps_and_index(self, tmp_path: Path) -> None:
        settings = make_settings(tmp_path)
        write_maps(settings.input_dir, {"a.txt": VALID_MAP, "b.txt": VALID_MAP, "c.txt": VALID_MAP})

        report = MapCompilerService(settings).compile_directory()

        scan_order = [p.stem for p in scan_map_directory(settings.input_dir)]
        assert report.ok
        assert report.compiled == scan_order
        for name in ("a", "b", "c"):
            assert (settings.output_dir / f"{name}.elm").exists()

        index = (settings.output_dir / "Index.elm").read_text(encoding="utf-8")
        assert f"firstLevel = Level.{scan_order[0]}.data" in index
        rest = ", ".join(f"Level.{name}.data" for name in scan_order[1:])
        assert f"restLevels = [{rest}]" in index

    def test_generated_module_content(self, tmp_path: Path) -> None:
        settings = make_settings(tmp_path)
        write_maps(settings.input_dir, {"intro.txt": VALID_MAP})

        MapCompilerService(settings).compile_directory()

        source = (settings.output_dir / "intro.elm").read_text(encoding="utf-8")
        assert source.startswith("module Level.intro exposing (data)\n")
        assert "(LevelTile.door 1)" in source
        assert "Trigger.localTrigger (3, 1) [StepOn] [Open]" in source
        assert "playerStartPosition = (1, 1)" in source

    def test_recompiling_is_byte_identical(self, tmp_path: Path) -> None:
        settings = make_settings(tmp_path)
        write_maps(settings.input_dir, {"a.txt": VALID_MAP, "b.txt": "^.\n"})
        service = MapCompilerService(settings)

        service.compile_directory()
        first = {p.name: p.read_bytes() for p in settings.output_dir.iterdir()}
        service.compile_directory()
        second = {p.name: p.read_bytes() for p in settings.output_dir.iterdir()}

        assert first == second
        assert set(first) == {"a.elm", "b.elm", "Index.elm"}

    def test_bad_map_does_not_affect_siblings(self, tmp_path: Path) -> None:
        settings = make_settings(tmp_path)
        write_maps(
            settings.input_dir,
            {"good.txt": VALID_MAP, "nospawn.txt": "###\n", "other.txt": "v\n"},
        )

        report = MapCompilerService(settings).compile_directory()

        assert not report.ok
        assert [f.file.name for f in report.failures] == ["nospawn.txt"]
        assert sorted(report.compiled) == ["good", "other"]
        assert (settings.output_dir / "good.elm").exists()
        assert (settings.output_dir / "other.elm").exists()
        assert not (settings.output_dir / "nospawn.elm").exists()
        assert report.index_path is None
        assert not (settings.output_dir / "Index.elm").exists()

    def test_unwritable_module_does_not_affect_siblings(self, tmp_path: Path) -> None:
        """Test a write failure is reported for its own file only."""
        settings = make_settings(tmp_path)
        write_maps(settings.input_dir, {"a.txt": VALID_MAP, "b.txt": VALID_MAP})
        # A directory in place of a.elm makes writing it fail
        (settings.output_dir / "a.elm").mkdir(parents=True)

        report = MapCompilerService(settings).compile_directory()

        assert not report.ok
        assert [f.file.name for f in report.failures] == ["a.txt"]
        assert "a.elm" in report.failures[0].message
        assert report.compiled == ["b"]
        assert (settings.output_dir / "b.elm").is_file()
        assert report.index_path is None
        assert not (settings.output_dir / "Index.elm").exists()

    def test_write_module_raises_output_error(self, tmp_path: Path) -> None:
        settings = make_settings(tmp_path)
        target = tmp_path / "blocked.elm"
        target.mkdir()

        with pytest.raises(OutputError) as exc_info:
            MapCompilerService(settings).write_module(target, "module X exposing (data)\n")
        assert exc_info.value.path == target

    def test_failure_carries_line_number(self, tmp_path: Path) -> None:
        settings = make_settings(tmp_path)
        write_maps(settings.input_dir, {"broken.txt": "^X\n---\nX\n"})

        report = MapCompilerService(settings).compile_directory()

        assert report.failures[0].line == 3

    def test_no_maps_is_a_configuration_error(self, tmp_path: Path) -> None:
        settings = make_settings(tmp_path)
        settings.input_dir.mkdir()

        with pytest.raises(ConfigError):
            MapCompilerService(settings).compile_directory()

    def test_missing_input_directory(self, tmp_path: Path) -> None:
        settings = make_settings(tmp_path)

        with pytest.raises(InputError):
            MapCompilerService(settings).compile_directory()

    def test_report_json(self, tmp_path: Path) -> None:
        import orjson

        settings = make_settings(tmp_path)
        write_maps(settings.input_dir, {"a.txt": VALID_MAP})
        report = MapCompilerService(settings).compile_directory()

        report_path = tmp_path / "build" / "report.json"
        report.write_json(report_path)
        data = orjson.loads(report_path.read_bytes())

        assert data["ok"] is True
        assert data["compiled"] == ["a"]
        assert data["failures"] == []
        assert data["index"].endswith("Index.elm")
