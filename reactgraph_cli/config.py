"""Configuration paths and defaults for ReactGraph."""

from __future__ import annotations

import os
from pathlib import Path

BASE_DIR = Path(os.environ.get("REACTGRAPH_HOME", str(Path.home() / ".reactgraph"))).expanduser()
CONFIG_FILE = BASE_DIR / "config.toml"

OUTPUT_FORMATS = ("table", "json")
EXPORT_FORMATS = ("json", "dot")

# Defaults for the ``[output]`` section of config.toml
DEFAULT_OUTPUT_CONFIG = {
    "format": "table",
    "show_trace": False,
    "max_trace_lines": 200,
}
