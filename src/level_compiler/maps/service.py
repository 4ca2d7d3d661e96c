"""
Batch compilation of a directory of ASCII maps into Elm modules.

Every map file is read, parsed, rendered and written independently on a
thread pool. The index module is generated once all files are done.
"""

import logging
from dataclasses import replace
from pathlib import Path
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, List, Optional, Sequence, TYPE_CHECKING

from .emitter import INDEX_MODULE, render_index_module, render_map_module
from .errors import InputError, MapFormatError, OutputError
from .models import CompiledMap
from .parser import parse_map
from .report import BuildReport, MapFailure
from .scanner import scan_map_directory
from ..settings.types import ConfigError

if TYPE_CHECKING:
    from ..settings import CompilerSettings

OUTPUT_EXTENSION = ".elm"


class MapCompilerService:
    """Compiles all maps of the configured input directory.

    Per-file format and write errors are collected in the BuildReport and do
    not stop sibling files. Input errors abort the run.
    """

    def __init__(self, settings: "CompilerSettings"):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.settings = settings

    @property
    def output_dir(self) -> Path:
        return self.settings.output_dir

    def read_source(self, path: Path) -> str:
        """Read a map file as UTF-8 text.

        Raises:
            InputError: If the file cannot be read or decoded
        """
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise InputError(f"Cannot read map file {path}: {e}") from e

    def write_module(self, path: Path, source: str) -> Path:
        """Write generated Elm source.

        Raises:
            OutputError: If the file cannot be written
        """
        try:
            with path.open("w", encoding="utf-8", newline="\n") as f:
                f.write(source)
        except OSError as e:
            raise OutputError(path, str(e)) from e
        return path

    def compile_file(self, path: Path) -> tuple[CompiledMap, Path]:
        """Compile one map file and write its module.

        Returns:
            Tuple of (compiled map, written module path)
        """
        compiled = replace(parse_map(self.read_source(path), path.name), source=path)
        source = render_map_module(
            compiled,
            namespace=self.settings.module_namespace,
            tile_module=self.settings.tile_module,
        )
        target = self.output_dir / f"{compiled.name}{OUTPUT_EXTENSION}"
        self.write_module(target, source)
        self.logger.debug(f"Wrote {target}")
        return compiled, target

    def write_index(self, module_names: Sequence[str]) -> Path:
        """Write the aggregate index module.

        Raises:
            ConfigError: If there are no maps
            OutputError: If the file cannot be written
        """
        if not module_names:
            raise ConfigError("No maps to index: at least one map file is required")
        source = render_index_module(module_names, namespace=self.settings.module_namespace)
        target = self.output_dir / f"{INDEX_MODULE}{OUTPUT_EXTENSION}"
        return self.write_module(target, source)

    def _prepare_output_dir(self) -> None:
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputError(self.output_dir, str(e)) from e

    def compile_directory(self, input_dir: Optional[Path] = None) -> BuildReport:
        """Compile every map in a directory and write the index.

        Args:
            input_dir: Directory to compile (defaults to configured input_dir)

        Returns:
            BuildReport describing compiled and failed files

        Raises:
            InputError: If the directory or a map file cannot be read
            ConfigError: If the directory holds no map files
            OutputError: If the output directory cannot be created
        """
        input_dir = input_dir or self.settings.input_dir
        map_files = scan_map_directory(input_dir, self.settings.map_extension)
        if not map_files:
            raise ConfigError(
                f"No '*{self.settings.map_extension}' map files found in {input_dir}"
            )

        self._prepare_output_dir()
        self.logger.info(f"Compiling {len(map_files)} map(s) into {self.output_dir}")

        compiled: Dict[Path, tuple[CompiledMap, Path]] = {}
        failures: Dict[Path, MapFailure] = {}
        input_errors: List[InputError] = []

        with ThreadPoolExecutor(max_workers=self.settings.max_workers) as executor:
            future_to_file = {
                executor.submit(self.compile_file, map_file): map_file
                for map_file in map_files
            }

            for future in as_completed(future_to_file):
                map_file = future_to_file[future]
                try:
                    compiled[map_file] = future.result()
                except MapFormatError as e:
                    self.logger.error(f"Invalid map {e}")
                    failures[map_file] = MapFailure(map_file, e.message, e.line)
                except OutputError as e:
                    self.logger.error(str(e))
                    failures[map_file] = MapFailure(map_file, str(e))
                except InputError as e:
                    self.logger.error(str(e))
                    input_errors.append(e)

        if input_errors:
            raise input_errors[0]

        # Restore scan order for deterministic output
        report = BuildReport()
        for map_file in map_files:
            if map_file in compiled:
                compiled_map, target = compiled[map_file]
                report.compiled.append(compiled_map.name)
                report.written.append(target)
            else:
                report.failures.append(failures[map_file])

        if report.failures:
            self.logger.error(
                f"{len(report.failures)} of {len(map_files)} map(s) failed, "
                f"index not updated"
            )
            return report

        try:
            report.index_path = self.write_index(report.compiled)
        except OutputError as e:
            self.logger.error(str(e))
            report.failures.append(MapFailure(e.path, str(e)))
            return report

        self.logger.info(
            f"Compiled {len(report.compiled)} map(s), first level: {report.compiled[0]}"
        )
        return report
