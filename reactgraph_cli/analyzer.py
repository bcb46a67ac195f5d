"""Component analysis engine.

Discovery, per-file classification and extraction, then whole-project flow
inference, conflict detection and layout. Each :meth:`ComponentAnalyzer.analyze`
call owns its own accumulators; nothing carries over between runs.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Set, Union

from . import syntax
from .classifier import classify_class, classify_function
from .conflicts import detect_conflicts
from .diagnostics import DiagnosticsCollector
from .discovery import find_source_files
from .extractor import build_class_component, build_function_component
from .flows import DEFAULT_EXPORT_NAME, finalize_flows, infer_flows
from .layout import layout_components
from .models import AnalysisResult, Component
from .parser import ParsedSource, SourceParseError, SourceParser
from .registry import ComponentRegistry
from .resolver import collect_module_links
from .syntax import Node

logger = logging.getLogger(__name__)


class _AnalysisRun:
    """Mutable state of one analysis invocation."""

    def __init__(self, parser: SourceParser) -> None:
        self.parser = parser
        self.diagnostics = DiagnosticsCollector()
        self.registry = ComponentRegistry()
        self.components: List[Component] = []
        self.visited: Set[Path] = set()
        self.parsed: List[ParsedSource] = []
        self.links: Dict[Path, Dict[str, Path]] = {}

    def analyze_file(self, file_path: Path) -> List[Component]:
        path = file_path.resolve()
        if path in self.visited:
            logger.debug("Skipping already analyzed file %s", path)
            return []
        self.visited.add(path)
        self.diagnostics.file_analyzed(path)

        try:
            parsed = self.parser.parse_file(path)
        except SourceParseError as exc:
            self.diagnostics.parse_error(path, exc.message)
            return []
        self.parsed.append(parsed)

        links = collect_module_links(parsed, self.diagnostics)
        self.links[path] = links

        found = collect_components(parsed, self.diagnostics)
        for component in found:
            self.registry.register(component)
            self.components.append(component)
            self.diagnostics.component_found(component)

        if not found and links:
            # A file without components of its own may only forward them.
            for target in dict.fromkeys(links.values()):
                if target not in self.visited:
                    self.diagnostics.trace(f"Following re-export to: {target}")
                    self.analyze_file(target)

        return found


class ComponentAnalyzer:
    """Analyzes a React project (or a single file) into an :class:`AnalysisResult`."""

    def __init__(self, parser: Optional[SourceParser] = None) -> None:
        self.parser = parser or SourceParser()

    def analyze(self, root: Union[str, Path]) -> AnalysisResult:
        run = _AnalysisRun(self.parser)
        diag = run.diagnostics
        diag.trace(f"Starting analysis of: {root}")

        files = find_source_files(root, diag)
        diag.trace(f"Found {len(files)} React files")

        for file_path in files:
            run.analyze_file(file_path)

        diag.trace(f"Total components found: {len(run.components)}")

        flows = infer_flows(run.parsed, run.registry, diag, run.links)
        flows = finalize_flows(flows, run.components)
        conflicts = detect_conflicts(run.components)
        positioned = layout_components(run.components)

        logger.info(
            "Analyzed %d files: %d components, %d flows, %d conflicts",
            len(diag.files_analyzed),
            len(positioned),
            len(flows),
            len(conflicts),
        )
        return AnalysisResult(
            components=tuple(positioned),
            flows=tuple(flows),
            conflicts=tuple(conflicts),
            diagnostics=diag.freeze(),
        )


def analyze_project(root: Union[str, Path]) -> AnalysisResult:
    return ComponentAnalyzer().analyze(root)


# ===================================================================
# Per-file component collection
# ===================================================================

def collect_components(parsed: ParsedSource, diagnostics: DiagnosticsCollector) -> List[Component]:
    """Classify every candidate declaration of *parsed* in document order."""
    file_path = str(parsed.file_path)
    components: List[Component] = []

    for node in syntax.walk(parsed.root):
        if node.type == "export_statement":
            components.extend(_exported_components(node, file_path, diagnostics))

        elif node.type in syntax.FUNCTION_DECLARATION_TYPES:
            if _is_exported(node):
                continue
            name = syntax.declaration_name(node)
            if name:
                diagnostics.trace(f"Found function declaration: {name}")
                component = _function_component(node, name, file_path, diagnostics)
                if component is not None:
                    components.append(component)

        elif node.type == "variable_declarator":
            func = syntax.declarator_function(node)
            name = syntax.declarator_name(node)
            if func is None or not name or _is_exported(node.parent):
                continue
            diagnostics.trace(f"Found variable declaration: {name}")
            component = _function_component(func, name, file_path, diagnostics)
            if component is not None:
                components.append(component)

        elif node.type in ("class_declaration", "abstract_class_declaration"):
            name = syntax.declaration_name(node)
            if not name:
                continue
            if classify_class(node, name, diagnostics).accepted:
                components.append(build_class_component(node, name, file_path, diagnostics))

    return components


def _is_exported(node: Optional[Node]) -> bool:
    if node is None:
        return False
    parent = node.parent
    return parent is not None and parent.type == "export_statement"


def _exported_components(export: Node, file_path: str, diagnostics: DiagnosticsCollector) -> List[Component]:
    components: List[Component] = []

    declaration = export.child_by_field_name("declaration")
    if declaration is not None:
        if declaration.type in syntax.FUNCTION_DECLARATION_TYPES:
            name = syntax.declaration_name(declaration)
            if name:
                diagnostics.trace(f"Found exported function: {name}")
                component = _function_component(declaration, name, file_path, diagnostics)
                if component is not None:
                    components.append(component)
        elif declaration.type in ("lexical_declaration", "variable_declaration"):
            for declarator in syntax.named_children(declaration):
                func = syntax.declarator_function(declarator)
                name = syntax.declarator_name(declarator)
                if func is None or not name:
                    continue
                diagnostics.trace(f"Found exported variable: {name}")
                component = _function_component(func, name, file_path, diagnostics)
                if component is not None:
                    components.append(component)
        return components

    value = export.child_by_field_name("value")
    if value is None:
        return components

    if value.type in syntax.FUNCTION_EXPRESSION_TYPES:
        name = syntax.declaration_name(value)
        if name:
            diagnostics.trace(f"Found exported function: {name}")
            component = _function_component(value, name, file_path, diagnostics)
        else:
            diagnostics.trace("Found default export: anonymous function")
            component = _function_component(value, None, file_path, diagnostics)
        if component is not None:
            components.append(component)
    elif value.type == "identifier":
        # Declared elsewhere in the file and picked up there.
        diagnostics.trace(f"Found default export: {syntax.text(value)}")

    return components


def _function_component(
    func: Node,
    name: Optional[str],
    file_path: str,
    diagnostics: DiagnosticsCollector,
) -> Optional[Component]:
    if not classify_function(func, name, diagnostics).accepted:
        return None
    return build_function_component(func, name or DEFAULT_EXPORT_NAME, file_path, diagnostics)
