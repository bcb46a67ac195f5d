"""Source parser adapter built on Tree-sitter.

Wraps the JavaScript, TypeScript and TSX grammars so the rest of the engine
only deals with :class:`ParsedSource`. Tree-sitter recovers from syntax errors
instead of raising; this adapter turns any recovered error into a
:class:`SourceParseError` so a broken file contributes nothing rather than a
half-understood tree.
"""

from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from tree_sitter import Language, Parser as TSParser

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Language <-> file-extension mapping
# ---------------------------------------------------------------------------
LANGUAGE_MAP: Dict[str, str] = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".tsx": "tsx",
}

# Grammar retried when a JavaScript file fails to parse; type annotations
# and other TypeScript syntax are accepted in every source file.
_FALLBACK_LANGUAGES: Dict[str, str] = {
    "javascript": "tsx",
}

# Map language name -> (module, factory) that provides the tree-sitter Language
_GRAMMAR_MODULES: Dict[str, Tuple[str, str]] = {
    "javascript": ("tree_sitter_javascript", "language"),
    "typescript": ("tree_sitter_typescript", "language_typescript"),
    "tsx": ("tree_sitter_typescript", "language_tsx"),
}


class SourceParseError(Exception):
    """Raised when a file cannot be read or parsed cleanly."""

    def __init__(self, file_path: Union[str, Path], message: str) -> None:
        super().__init__(message)
        self.file_path = str(file_path)
        self.message = message


@dataclass(frozen=True)
class ParsedSource:
    file_path: Path
    language: str
    source: bytes
    tree: Any

    @property
    def root(self) -> Any:
        return self.tree.root_node


class SourceParser:
    """Parses JS/TS/JSX source files into Tree-sitter syntax trees."""

    def __init__(self) -> None:
        self._parsers: Dict[str, TSParser] = {}

    def parse_file(self, file_path: Union[str, Path]) -> ParsedSource:
        path = Path(file_path)
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceParseError(path, f"could not read file: {exc}") from exc
        return self.parse(source, path)

    def parse(self, source: str, file_path: Union[str, Path]) -> ParsedSource:
        """Parse *source*; *file_path* selects the grammar and labels errors."""
        path = Path(file_path)
        language = LANGUAGE_MAP.get(path.suffix.lower())
        if language is None:
            raise SourceParseError(path, f"unsupported file extension '{path.suffix}'")

        src = source.encode("utf-8")
        tree = self._parser_for(language).parse(src)
        if tree.root_node.has_error and language in _FALLBACK_LANGUAGES:
            fallback = _FALLBACK_LANGUAGES[language]
            retry = self._parser_for(fallback).parse(src)
            if not retry.root_node.has_error:
                logger.debug("Parsed %s with the %s grammar", path, fallback)
                language, tree = fallback, retry
        root = tree.root_node
        if root.has_error:
            raise SourceParseError(path, _describe_error(root))

        return ParsedSource(file_path=path, language=language, source=src, tree=tree)

    # ------------------------------------------------------------------
    # Grammar loading
    # ------------------------------------------------------------------

    def _parser_for(self, language: str) -> TSParser:
        parser = self._parsers.get(language)
        if parser is None:
            mod_name, factory = _GRAMMAR_MODULES[language]
            mod = importlib.import_module(mod_name)
            # tree-sitter >=0.22 per-language packages expose functions that
            # return the Language capsule.
            ts_lang = Language(getattr(mod, factory)())
            parser = TSParser(ts_lang)
            self._parsers[language] = parser
            logger.debug("Loaded tree-sitter parser for %s", language)
        return parser


def _describe_error(root: Any) -> str:
    node = _first_error_node(root)
    if node is None:
        return "Syntax error"
    line, column = node.start_point
    if node.is_missing:
        return f"Syntax error at line {line + 1}, column {column + 1}: missing '{node.type}'"
    return f"Syntax error at line {line + 1}, column {column + 1}"


def _first_error_node(root: Any) -> Optional[Any]:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        for child in reversed(node.children):
            if child.has_error or child.is_missing:
                stack.append(child)
    return None
