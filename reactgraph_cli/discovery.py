"""Source file discovery for React projects."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Set, Tuple, Union

from .diagnostics import DiagnosticsCollector

logger = logging.getLogger(__name__)

SOURCE_EXTENSIONS: Tuple[str, ...] = (".js", ".jsx", ".ts", ".tsx")

# Dependencies, VCS metadata, build output and media assets.
EXCLUDED_DIRS: Set[str] = {
    "node_modules",
    ".git",
    ".next",
    "out",
    "build",
    "dist",
    "media",
}


def is_source_file(path: Path) -> bool:
    return path.suffix.lower() in SOURCE_EXTENSIONS


def find_source_files(root: Union[str, Path], diagnostics: DiagnosticsCollector) -> List[Path]:
    """Return every candidate source file under *root*, depth first.

    *root* may be a single file, which is returned as-is. A missing root
    raises ``FileNotFoundError``; an unreadable subdirectory is recorded on
    *diagnostics* and skipped.
    """
    root_path = Path(root).expanduser().resolve()
    if not root_path.exists():
        raise FileNotFoundError(f"Path does not exist: {root}")

    if root_path.is_file():
        return [root_path]

    found: List[Path] = []
    _scan_directory(root_path, found, diagnostics)
    logger.debug("Discovered %d source files under %s", len(found), root_path)
    return found


def _scan_directory(dir_path: Path, found: List[Path], diagnostics: DiagnosticsCollector) -> None:
    try:
        entries = sorted(dir_path.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        diagnostics.directory_error(dir_path, str(exc))
        return

    for entry in entries:
        try:
            is_dir = entry.is_dir()
        except OSError as exc:
            diagnostics.directory_error(entry, str(exc))
            continue
        if is_dir:
            if entry.name not in EXCLUDED_DIRS:
                _scan_directory(entry, found, diagnostics)
        elif is_source_file(entry):
            found.append(entry)
