"""
Exceptions raised while compiling map files.
"""

from pathlib import Path
from typing import Optional, Union


class MapCompilerError(Exception):
    """Base class for all map compilation errors."""
    pass


class InputError(MapCompilerError):
    """Raised when the input directory or a map file cannot be read.

    Fatal: aborts the whole run.
    """
    pass


class MapFormatError(MapCompilerError):
    """Raised when a map file is malformed.

    Carries the offending file name and, when known, the 1-based line number.
    Only the file being parsed is affected; sibling files keep compiling.
    """

    def __init__(
        self,
        message: str,
        filename: Optional[str] = None,
        line: Optional[int] = None,
    ):
        self.message = message
        self.filename = filename
        self.line = line
        super().__init__(self._format())

    def _format(self) -> str:
        location = self.filename or "<map>"
        if self.line is not None:
            location = f"{location}:{self.line}"
        return f"{location}: {self.message}"

    def with_filename(self, filename: str) -> "MapFormatError":
        """Return a copy of this error bound to a file name."""
        return MapFormatError(self.message, filename, self.line)


class OutputError(MapCompilerError):
    """Raised when a generated module cannot be written."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot write {self.path}: {reason}")
