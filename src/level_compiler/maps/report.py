"""Build report for a compiler run."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import orjson


@dataclass(frozen=True)
class MapFailure:
    """A map file that could not be compiled.

    Attributes:
        file: Source file path
        message: Human readable error
        line: 1-based line number, when the error points at one
    """

    file: Path
    message: str
    line: Optional[int] = None


@dataclass
class BuildReport:
    """Outcome of compiling a directory of maps.

    Attributes:
        compiled: Module names compiled successfully, in scan order
        written: Paths of generated map modules, in scan order
        failures: Files that failed to compile or write
        index_path: Path of the generated index module, None if not written
    """

    compiled: list[str] = field(default_factory=lambda: [])
    written: list[Path] = field(default_factory=lambda: [])
    failures: list[MapFailure] = field(default_factory=lambda: [])
    index_path: Optional[Path] = None

    @property
    def ok(self) -> bool:
        return not self.failures and self.index_path is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "compiled": list(self.compiled),
            "written": [str(path) for path in self.written],
            "failures": [
                {"file": str(f.file), "line": f.line, "message": f.message}
                for f in self.failures
            ],
            "index": str(self.index_path) if self.index_path else None,
        }

    def write_json(self, path: Path) -> None:
        """Write the report as indented JSON."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(orjson.dumps(self.to_dict(), option=orjson.OPT_INDENT_2))
