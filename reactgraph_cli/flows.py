"""Data-flow inference from JSX usage.

Runs after every file has been analyzed: each ``<Child prop={value} />`` inside
a known parent component is matched against the parent's items and the
child's props. Matching is by identifier name only.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Set, Tuple

from . import syntax
from .diagnostics import DiagnosticsCollector
from .models import Component, ComponentItem, DataFlow, FlowType, ItemKind
from .parser import ParsedSource
from .registry import ComponentRegistry
from .syntax import Node

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_NAME = "DefaultExport"

_CHILD_PROP_KINDS = (ItemKind.PROP, ItemKind.PROP_FUNCTION)


def determine_flow_type(from_kind: str, to_kind: str) -> str:
    if from_kind == ItemKind.STATE and to_kind == ItemKind.PROP:
        return FlowType.STATE_TO_PROP
    if from_kind == ItemKind.SETTER and to_kind == ItemKind.PROP_FUNCTION:
        return FlowType.SETTER_TO_PROP
    if from_kind == ItemKind.FUNCTION and to_kind == ItemKind.PROP_FUNCTION:
        return FlowType.FUNCTION_TO_PROP
    if from_kind == ItemKind.PROP and to_kind == ItemKind.PROP:
        return FlowType.PROP_TO_PROP
    if from_kind == ItemKind.CONTEXT_PROVIDER:
        return FlowType.CONTEXT_PROVIDER_TO_CONSUMER
    return FlowType.DATA_FLOW


def infer_flows(
    parsed_files: Iterable[ParsedSource],
    registry: ComponentRegistry,
    diagnostics: DiagnosticsCollector,
    links: Optional[Mapping[Path, Mapping[str, Path]]] = None,
) -> List[DataFlow]:
    """Infer flows across all parsed files; one failing file never stops the pass."""
    links = links or {}
    flows: List[DataFlow] = []
    for parsed in parsed_files:
        try:
            flows.extend(_file_flows(parsed, registry, diagnostics, links.get(parsed.file_path, {})))
        except Exception as exc:
            diagnostics.trace(f"Error analyzing JSX flows in {parsed.file_path}: {exc}")
    return flows


def finalize_flows(flows: Iterable[DataFlow], components: Iterable[Component]) -> List[DataFlow]:
    """Collapse exact duplicates and drop edges whose endpoints are unknown."""
    known: Set[Tuple[str, str]] = set()
    for comp in components:
        for item in comp.items:
            known.add((item.item_id, comp.file_path))
            known.add((item.item_id, ""))
    seen: Set[DataFlow] = set()
    result: List[DataFlow] = []
    for flow in flows:
        if (flow.from_item, flow.from_file) not in known or (flow.to_item, flow.to_file) not in known:
            logger.debug("Dropping dangling flow %s -> %s", flow.from_item, flow.to_item)
            continue
        if flow in seen:
            continue
        seen.add(flow)
        result.append(flow)
    return result


def _file_flows(
    parsed: ParsedSource,
    registry: ComponentRegistry,
    diagnostics: DiagnosticsCollector,
    imports: Mapping[str, Path],
) -> List[DataFlow]:
    file_path = str(parsed.file_path)
    flows: List[DataFlow] = []

    for node in syntax.walk(parsed.root):
        if node.type not in syntax.JSX_TAG_TYPES:
            continue

        tag = syntax.jsx_tag_name(node)
        if tag is None or tag.type != "identifier":
            continue
        tag_name = syntax.text(tag)
        if not syntax.starts_uppercase(tag_name):
            continue

        child = registry.lookup_tag(tag_name, file_path, imports.get(tag_name))
        if child is None:
            continue

        parent = enclosing_component(node, file_path, registry)
        if parent is None:
            continue

        diagnostics.trace(f"Found JSX: {parent.name} renders {child.name}")
        flows.extend(_attribute_flows(node, parent, child, diagnostics))

    return flows


def enclosing_component(node: Node, file_path: str, registry: ComponentRegistry) -> Optional[Component]:
    """Nearest lexically enclosing declaration that is a known component."""
    for ancestor in syntax.ancestors(node):
        name = _declared_name(ancestor)
        if name is None:
            continue
        component = registry.get(name, file_path)
        if component is not None:
            return component
    return None


def _declared_name(node: Node) -> Optional[str]:
    if node.type in syntax.FUNCTION_DECLARATION_TYPES or node.type in syntax.CLASS_TYPES:
        return syntax.declaration_name(node)
    if node.type == "variable_declarator" and syntax.declarator_function(node) is not None:
        return syntax.declarator_name(node)
    if node.type in syntax.FUNCTION_EXPRESSION_TYPES:
        parent = node.parent
        if parent is not None and parent.type == "export_statement":
            return syntax.declaration_name(node) or DEFAULT_EXPORT_NAME
    return None


def _attribute_flows(
    tag: Node,
    parent: Component,
    child: Component,
    diagnostics: DiagnosticsCollector,
) -> List[DataFlow]:
    flows: List[DataFlow] = []
    for name_node, value_node in syntax.jsx_attributes(tag):
        prop_name = syntax.text(name_node)
        child_item = child.find_item(prop_name, _CHILD_PROP_KINDS)
        if child_item is None:
            continue

        parent_item = _passed_item(value_node, parent)
        if parent_item is None:
            continue

        flows.append(DataFlow(
            flow_id=f"{prop_name}-flow",
            from_item=parent_item.item_id,
            to_item=child_item.item_id,
            flow_type=determine_flow_type(parent_item.kind, child_item.kind),
            from_file=parent.file_path,
            to_file=child.file_path,
        ))
        diagnostics.trace(f"  Flow: {parent.name}.{parent_item.name} → {child.name}.{prop_name}")
    return flows


def _passed_item(value: Optional[Node], parent: Component) -> Optional[ComponentItem]:
    """Parent item referenced by an attribute value, for identifiers and ``obj.field`` only."""
    expr = syntax.jsx_expression_value(value)
    if expr is None:
        return None
    if expr.type == "identifier":
        return parent.find_item(syntax.text(expr))
    if expr.type == "member_expression":
        prop = expr.child_by_field_name("property")
        if prop is not None and prop.type == "property_identifier":
            return parent.find_item(syntax.text(prop))
    return None


def group_by_flow_id(flows: Iterable[DataFlow]) -> Dict[str, List[DataFlow]]:
    grouped: Dict[str, List[DataFlow]] = {}
    for flow in flows:
        grouped.setdefault(flow.flow_id, []).append(flow)
    return grouped
