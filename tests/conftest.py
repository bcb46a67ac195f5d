"""Pytest configuration and fixtures for ReactGraph CLI tests."""

import shutil
import tempfile
from pathlib import Path
from typing import Callable, Dict, Generator, Optional

import pytest

from reactgraph_cli import syntax
from reactgraph_cli.diagnostics import DiagnosticsCollector
from reactgraph_cli.parser import ParsedSource, SourceParser


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path_factory, monkeypatch):
    """Point the config file at a throwaway location so user settings never leak in."""
    config_dir = tmp_path_factory.mktemp("reactgraph_home")
    monkeypatch.setattr("reactgraph_cli.config.BASE_DIR", config_dir)
    monkeypatch.setattr("reactgraph_cli.config.CONFIG_FILE", config_dir / "config.toml")
    return config_dir / "config.toml"


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    tmp = Path(tempfile.mkdtemp()).resolve()
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def sample_app_path() -> Path:
    """Get path to the sample React app."""
    return Path(__file__).parent / "fixtures" / "sample_app"


@pytest.fixture
def write_files(temp_dir: Path) -> Callable[[Dict[str, str]], Path]:
    """Write ``{relative_path: source}`` into the temp dir and return the dir."""

    def _write(files: Dict[str, str]) -> Path:
        for rel, content in files.items():
            target = temp_dir / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return temp_dir

    return _write


@pytest.fixture
def diagnostics() -> DiagnosticsCollector:
    return DiagnosticsCollector()


@pytest.fixture
def parse() -> Callable[..., ParsedSource]:
    """Parse an in-memory snippet; the file name picks the grammar."""
    parser = SourceParser()

    def _parse(source: str, file_name: str = "Component.jsx") -> ParsedSource:
        return parser.parse(source, Path("/virtual") / file_name)

    return _parse


def find_node(root, node_type: str, name: Optional[str] = None):
    """First node of *node_type* in document order, optionally with a given name."""
    for node in syntax.walk(root):
        if node.type != node_type:
            continue
        if name is None:
            return node
        if node.type == "variable_declarator":
            if syntax.declarator_name(node) == name:
                return node
        elif syntax.declaration_name(node) == name:
            return node
    raise AssertionError(f"no {node_type} named {name!r} in tree")
