"""Per-run diagnostics collector.

One collector is created for every analysis run and handed to each stage
(discovery, classification, extraction, flow inference). Nothing here is
module-level state, so two runs never share log entries.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Union

from .models import Component, Diagnostics

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class DiagnosticsCollector:
    """Accumulates trace lines, parse errors and per-file bookkeeping."""

    def __init__(self) -> None:
        self.files_analyzed: List[str] = []
        self.components_found: List[str] = []
        self.parse_errors: List[str] = []
        self.analysis_log: List[str] = []
        self.accepted = 0

    # ------------------------------------------------------------------
    # Trace
    # ------------------------------------------------------------------

    def trace(self, message: str) -> None:
        self.analysis_log.append(message)
        logger.debug(message)

    def accept(self, name: str, reason: str) -> None:
        """Record an accepted component classification."""
        self.accepted += 1
        self.trace(f"✓ {name} identified as React component ({reason})")

    def reject(self, name: str, reason: str) -> None:
        self.trace(f"✗ {name} not identified as React component ({reason})")

    # ------------------------------------------------------------------
    # Bookkeeping
    # ------------------------------------------------------------------

    def file_analyzed(self, path: PathLike) -> None:
        self.files_analyzed.append(str(path))

    def component_found(self, component: Component) -> None:
        self.components_found.append(f"{component.name} ({len(component.items)} items)")

    def parse_error(self, path: PathLike, message: str) -> None:
        entry = f"Error parsing {path}: {message}"
        self.parse_errors.append(entry)
        logger.warning(entry)

    def directory_error(self, path: PathLike, message: str) -> None:
        entry = f"Error reading directory {path}: {message}"
        self.parse_errors.append(entry)
        logger.warning(entry)

    def freeze(self) -> Diagnostics:
        return Diagnostics(
            files_analyzed=tuple(self.files_analyzed),
            components_found=tuple(self.components_found),
            parse_errors=tuple(self.parse_errors),
            analysis_log=tuple(self.analysis_log),
        )
