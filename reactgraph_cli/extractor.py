"""Item extraction for classified components.

Walks a component's body and collects its state pairs, context usage, local
functions and props. Each heuristic pass is isolated: an exception in one
pass is traced and the items gathered so far are kept.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from . import syntax
from .diagnostics import DiagnosticsCollector
from .models import Component, ComponentItem, ItemKind
from .syntax import Node

logger = logging.getLogger(__name__)

STATE_HOOKS: Dict[str, str] = {
    "useState": "setter",
    "useReducer": "dispatch",
}

CONTEXT_HOOK = "useContext"

CLASS_SKIPPED_METHODS = frozenset({"render", "constructor"})


class _ItemCollector:
    """Ordered item list for one component, with its own placeholder counter."""

    def __init__(self, component_name: str) -> None:
        self.component_name = component_name
        self.items: List[ComponentItem] = []
        self._counter = 0

    def next_placeholder(self, prefix: str) -> str:
        name = f"{prefix}{self._counter}"
        self._counter += 1
        return name

    def add(self, key: str, kind: str, flow_id: str, name: Optional[str] = None) -> ComponentItem:
        item = ComponentItem.create(self.component_name, key, kind, flow_id, name=name)
        # Repeated provider usages would otherwise produce identical items.
        if item not in self.items:
            self.items.append(item)
        return item


# ===================================================================
# Function components
# ===================================================================

def extract_function_items(func: Node, component_name: str, diagnostics: DiagnosticsCollector) -> List[ComponentItem]:
    """Items of a function or arrow-function component, hooks first then props."""
    collector = _ItemCollector(component_name)
    diagnostics.trace(f"Analyzing component: {component_name}")

    body = syntax.function_body(func)
    if body is not None:
        try:
            _collect_body_items(body, collector, diagnostics)
        except Exception as exc:
            diagnostics.trace(f"Error analyzing component {component_name}: {exc}")

    for prop in extract_props(func, component_name, diagnostics):
        collector.add(prop, ItemKind.PROP, f"{prop}-flow")

    diagnostics.trace(f"Component {component_name} analysis complete: {len(collector.items)} items found")
    return collector.items


def _collect_body_items(body: Node, collector: _ItemCollector, diagnostics: DiagnosticsCollector) -> None:
    for node in syntax.walk(body):
        try:
            _visit_body_node(node, collector, diagnostics)
        except Exception as exc:
            diagnostics.trace(f"Error analyzing {node.type} in {collector.component_name}: {exc}")


def _visit_body_node(node: Node, collector: _ItemCollector, diagnostics: DiagnosticsCollector) -> None:
    name = collector.component_name
    if node.type == "call_expression":
        _visit_call(node, collector, diagnostics)
    elif node.type in syntax.JSX_TAG_TYPES:
        context = syntax.provider_context_name(syntax.jsx_tag_name(node))
        if context is not None:
            diagnostics.trace(f"Found Context Provider element: {context}")
            collector.add(f"{context}Provider", ItemKind.CONTEXT_PROVIDER, f"{context}-context")
    elif node.type in syntax.FUNCTION_DECLARATION_TYPES:
        func_name = syntax.declaration_name(node)
        if func_name and func_name != name:
            diagnostics.trace(f"Found function: {func_name}")
            collector.add(func_name, ItemKind.FUNCTION, f"{func_name}-flow")
    elif node.type == "variable_declarator":
        value = node.child_by_field_name("value")
        local = syntax.declarator_name(node)
        if local and value is not None and value.type == "arrow_function":
            diagnostics.trace(f"Found arrow function: {local}")
            collector.add(local, ItemKind.FUNCTION, f"{local}-flow")


def _visit_call(call: Node, collector: _ItemCollector, diagnostics: DiagnosticsCollector) -> None:
    name = collector.component_name
    hook = syntax.callee_name(call)

    if hook in STATE_HOOKS:
        diagnostics.trace(f"Found {hook} in {name}")
        pattern = _bound_pattern(call)
        if pattern is not None and pattern.type == "array_pattern":
            elements = syntax.array_pattern_elements(pattern)
            if len(elements) >= 2:
                state_name = _slot_name(elements[0], collector, "state")
                setter_name = _slot_name(elements[1], collector, STATE_HOOKS[hook])
                diagnostics.trace(f"  State: {state_name}, Setter: {setter_name}")
                collector.add(state_name, ItemKind.STATE, f"{state_name}-flow")
                collector.add(setter_name, ItemKind.SETTER, f"{state_name}-flow")

    elif hook == CONTEXT_HOOK:
        diagnostics.trace(f"Found useContext in {name}")
        pattern = _bound_pattern(call)
        if pattern is not None and pattern.type == "identifier":
            local = syntax.text(pattern)
            collector.add(local, ItemKind.CONTEXT_CONSUMER, f"{local}-context", name=f"{local}()")

    context = syntax.provider_context_name(call.child_by_field_name("function"))
    if context is not None:
        diagnostics.trace(f"Found Context Provider: {context}")
        collector.add(f"{context}Provider", ItemKind.CONTEXT_PROVIDER, f"{context}-context")


def _bound_pattern(call: Node) -> Optional[Node]:
    """Binding target when *call* is the initializer of a variable declarator."""
    parent = call.parent
    if parent is None or parent.type != "variable_declarator":
        return None
    if not syntax.same_node(parent.child_by_field_name("value"), call):
        return None
    return parent.child_by_field_name("name")


def _slot_name(slot: Optional[Node], collector: _ItemCollector, prefix: str) -> str:
    if slot is not None and slot.type == "identifier":
        return syntax.text(slot)
    return collector.next_placeholder(prefix)


# ===================================================================
# Props
# ===================================================================

def extract_props(func: Node, component_name: str, diagnostics: DiagnosticsCollector) -> List[str]:
    """Prop names read from the first parameter of a function component."""
    props: List[str] = []
    diagnostics.trace(f"Extracting props for: {component_name}")

    try:
        params = syntax.function_params(func)
        if params:
            first = syntax.unwrap_param(params[0])
            if first.type == "object_pattern":
                for key in syntax.object_pattern_keys(first):
                    props.append(key)
                    diagnostics.trace(f"  Found destructured prop: {key}")
            elif first.type == "identifier" and syntax.text(first) == "props":
                diagnostics.trace("  Found props parameter, looking for props.* usage")
                body = syntax.function_body(func)
                if body is not None:
                    _collect_props_usage(body, props, diagnostics)
    except Exception as exc:
        diagnostics.trace(f"Error extracting props for {component_name}: {exc}")

    diagnostics.trace(f"Extracted {len(props)} props for {component_name}: [{', '.join(props)}]")
    return props


def _collect_props_usage(body: Node, props: List[str], diagnostics: DiagnosticsCollector) -> None:
    for node in syntax.walk(body):
        if node.type != "member_expression":
            continue
        obj = node.child_by_field_name("object")
        prop = node.child_by_field_name("property")
        if obj is None or prop is None:
            continue
        if obj.type == "identifier" and syntax.text(obj) == "props" and prop.type == "property_identifier":
            prop_name = syntax.text(prop)
            if prop_name not in props:
                props.append(prop_name)
                diagnostics.trace(f"  Found prop usage: props.{prop_name}")


# ===================================================================
# Class components
# ===================================================================

def extract_class_items(class_node: Node, component_name: str, diagnostics: DiagnosticsCollector) -> List[ComponentItem]:
    """Methods other than ``render``/``constructor``; props and state are not tracked for classes."""
    collector = _ItemCollector(component_name)
    diagnostics.trace(f"Analyzing class component: {component_name}")

    try:
        body = class_node.child_by_field_name("body")
        if body is not None:
            for node in syntax.walk(body):
                if node.type != "method_definition":
                    continue
                key = node.child_by_field_name("name")
                if key is None or key.type != "property_identifier":
                    continue
                method = syntax.text(key)
                if method not in CLASS_SKIPPED_METHODS:
                    diagnostics.trace(f"Found class method: {method}")
                    collector.add(method, ItemKind.FUNCTION, f"{method}-flow")
    except Exception as exc:
        diagnostics.trace(f"Error analyzing class component {component_name}: {exc}")

    return collector.items


def build_function_component(func: Node, name: str, file_path: str, diagnostics: DiagnosticsCollector) -> Component:
    return Component.build(name, file_path, extract_function_items(func, name, diagnostics))


def build_class_component(class_node: Node, name: str, file_path: str, diagnostics: DiagnosticsCollector) -> Component:
    return Component.build(name, file_path, extract_class_items(class_node, name, diagnostics))
