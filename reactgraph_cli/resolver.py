"""Relative import and re-export resolution.

Only relative specifiers are followed. Anything that does not resolve to a
file on disk is treated as defined elsewhere and silently ignored.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from . import syntax
from .diagnostics import DiagnosticsCollector
from .discovery import SOURCE_EXTENSIONS
from .parser import ParsedSource

logger = logging.getLogger(__name__)

# Resolution priority when the specifier carries no usable extension.
RESOLVE_EXTENSIONS: Tuple[str, ...] = (".tsx", ".ts", ".jsx", ".js")

# ``export * from './x'`` forwards every name; its key is ``*:./x``.
STAR_EXPORT = "*"


def resolve_import_path(from_file: Union[str, Path], specifier: str) -> Optional[Path]:
    """Resolve a relative *specifier* imported from *from_file* to a file.

    Tries the literal path (when it has an extension), then each of
    ``RESOLVE_EXTENSIONS`` appended, then ``index`` + extension inside the
    path as a directory. Returns ``None`` when nothing matches.
    """
    if not specifier.startswith("."):
        return None

    base = Path(os.path.normpath(Path(from_file).parent / specifier))

    if base.suffix and base.is_file():
        return base

    for ext in RESOLVE_EXTENSIONS:
        candidate = base.parent / f"{base.name}{ext}"
        if candidate.is_file():
            return candidate

    for ext in RESOLVE_EXTENSIONS:
        candidate = base / f"index{ext}"
        if candidate.is_file():
            return candidate

    return None


def collect_module_links(parsed: ParsedSource, diagnostics: DiagnosticsCollector) -> Dict[str, Path]:
    """Map imported / re-exported names to the source files they come from.

    Covers default and named imports, ``export { a, b as c } from`` and
    ``export * from``. Only specifiers resolving to analyzable source files
    are kept, in first-seen order.
    """
    links: Dict[str, Path] = {}
    file_path = parsed.file_path

    for node in syntax.named_children(parsed.root):
        if node.type == "import_statement":
            source = syntax.string_value(node.child_by_field_name("source"))
            if not source or not source.startswith("."):
                continue
            resolved = _resolve_source(file_path, source)
            if resolved is None:
                continue
            for local in _import_locals(node):
                links.setdefault(local, resolved)
                diagnostics.trace(f"  Import: {local} from {source}")

        elif node.type == "export_statement":
            source = syntax.string_value(node.child_by_field_name("source"))
            if not source:
                continue
            diagnostics.trace(f"Found re-export from: {source}")
            if not source.startswith("."):
                continue
            resolved = _resolve_source(file_path, source)
            if resolved is None:
                continue
            for exported in _reexported_names(node):
                if exported == STAR_EXPORT:
                    exported = f"{STAR_EXPORT}:{source}"
                links.setdefault(exported, resolved)
                diagnostics.trace(f"  Re-export: {exported} from {source}")

    return links


def _resolve_source(file_path: Path, source: str) -> Optional[Path]:
    resolved = resolve_import_path(file_path, source)
    if resolved is None or resolved.suffix.lower() not in SOURCE_EXTENSIONS:
        return None
    return resolved.resolve()


def _import_locals(import_node: syntax.Node) -> List[str]:
    names: List[str] = []
    for child in syntax.named_children(import_node):
        if child.type != "import_clause":
            continue
        for part in syntax.named_children(child):
            if part.type == "identifier":
                names.append(syntax.text(part))
            elif part.type == "named_imports":
                for spec in syntax.named_children(part):
                    if spec.type != "import_specifier":
                        continue
                    local = _specifier_name(spec)
                    if local:
                        names.append(local)
    return names


def _reexported_names(export_node: syntax.Node) -> List[str]:
    clause = None
    for child in syntax.named_children(export_node):
        if child.type == "export_clause":
            clause = child
        elif child.type == "namespace_export":
            target = syntax.first_named(child)
            return [syntax.text(target)] if target is not None else [STAR_EXPORT]
    if clause is None:
        return [STAR_EXPORT]

    names: List[str] = []
    for spec in syntax.named_children(clause):
        if spec.type != "export_specifier":
            continue
        exported = _specifier_name(spec) or syntax.text(spec)
        if exported:
            names.append(exported)
    return names


def _specifier_name(spec: syntax.Node) -> Optional[str]:
    """Local (import) or exported (re-export) name of a specifier; aliases win."""
    node = spec.child_by_field_name("alias")
    if node is None:
        node = spec.child_by_field_name("name")
    if node is None:
        return None
    return syntax.string_value(node) or syntax.text(node)
