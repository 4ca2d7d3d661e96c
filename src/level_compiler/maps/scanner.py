"""
Discovery of map source files.
"""

import logging
from pathlib import Path
from typing import List, Union

from .errors import InputError

logger = logging.getLogger(__name__)

DEFAULT_MAP_EXTENSION = ".txt"


def scan_map_directory(
    directory: Union[str, Path], extension: str = DEFAULT_MAP_EXTENSION
) -> List[Path]:
    """List map files in a directory.

    Files are returned in directory-listing order, which is stable for an
    unchanged directory but not necessarily sorted.

    Args:
        directory: Directory holding map files
        extension: File extension marking map files (e.g. ".txt")

    Returns:
        Paths of matching regular files

    Raises:
        InputError: If the directory does not exist or cannot be listed
    """
    directory = Path(directory)
    if not extension.startswith("."):
        extension = f".{extension}"

    if not directory.exists():
        raise InputError(f"Map directory not found: {directory}")
    if not directory.is_dir():
        raise InputError(f"Map path is not a directory: {directory}")

    try:
        entries = list(directory.iterdir())
    except OSError as e:
        raise InputError(f"Cannot list map directory {directory}: {e}") from e

    map_files = [entry for entry in entries if entry.suffix == extension and entry.is_file()]
    logger.info(f"Found {len(map_files)} map file(s) in {directory}")
    return map_files
