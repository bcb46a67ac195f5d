"""Heuristic React component classification.

No type information is available, so component-hood is decided from naming
convention and the presence of JSX in the function body.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from . import syntax
from .diagnostics import DiagnosticsCollector
from .syntax import Node

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Classification:
    accepted: bool
    reason: str
    has_jsx: bool = False
    return_count: int = 0


@dataclass
class _BodyScan:
    has_jsx: bool = False
    return_count: int = 0
    signal: Optional[str] = None


def is_class_component(class_node: Node) -> bool:
    """True when the class extends ``Component`` or ``<something>.Component``."""
    superclass = _superclass(class_node)
    if superclass is None:
        return False
    if superclass.type == "identifier":
        return syntax.text(superclass) == "Component"
    if superclass.type == "member_expression":
        prop = superclass.child_by_field_name("property")
        return prop is not None and syntax.text(prop) == "Component"
    return False


def _superclass(class_node: Node) -> Optional[Node]:
    for child in syntax.named_children(class_node):
        if child.type != "class_heritage":
            continue
        for part in syntax.named_children(child):
            # TypeScript wraps the expression in an extends_clause.
            if part.type == "extends_clause":
                value = part.child_by_field_name("value")
                return value if value is not None else syntax.first_named(part)
            if part.type == "implements_clause":
                continue
            return part
    return None


def classify_class(class_node: Node, name: str, diagnostics: DiagnosticsCollector) -> Classification:
    diagnostics.trace(f"Found class declaration: {name}")
    if is_class_component(class_node):
        diagnostics.accept(name, "extends Component")
        return Classification(accepted=True, reason="extends Component")
    diagnostics.reject(name, "does not extend Component")
    return Classification(accepted=False, reason="does not extend Component")


def classify_function(func: Node, name: Optional[str], diagnostics: DiagnosticsCollector) -> Classification:
    """Decide whether a function/arrow node is a component.

    *name* is ``None`` for anonymous functions (e.g. an anonymous default
    export); those are accepted only when JSX is found.
    """
    label = name or "anonymous function"

    if name and not syntax.starts_uppercase(name):
        reason = "doesn't start with uppercase"
        diagnostics.trace(f"  {name} rejected: {reason}")
        diagnostics.reject(label, reason)
        return Classification(accepted=False, reason=reason)

    scan = _BodyScan()
    try:
        body = syntax.function_body(func)
        if body is not None:
            _scan_body(body, scan)
    except Exception as exc:
        diagnostics.trace(f"  Error checking JSX for {label}: {exc}")

    diagnostics.trace(f"  {label}: hasJSX={scan.has_jsx}, returnStatements={scan.return_count}")

    if scan.has_jsx:
        reason = scan.signal or "contains JSX"
        diagnostics.accept(label, reason)
        return Classification(True, reason, has_jsx=True, return_count=scan.return_count)

    if name and scan.return_count > 0:
        reason = "uppercase name with return statements"
        diagnostics.accept(label, reason)
        return Classification(True, reason, has_jsx=False, return_count=scan.return_count)

    reason = "no JSX found" if name else "anonymous function without JSX"
    diagnostics.reject(label, reason)
    return Classification(False, reason, has_jsx=False, return_count=scan.return_count)


def _scan_body(body: Node, scan: _BodyScan) -> None:
    if syntax.is_jsx(body):
        scan.has_jsx = True
        scan.signal = "returns JSX directly"
        return

    for node in syntax.walk(body, skip=syntax.is_nested_declaration):
        if node.type == "return_statement":
            scan.return_count += 1
            signal = _return_signal(syntax.first_named(node))
            if signal is not None:
                scan.has_jsx = True
                if scan.signal is None:
                    scan.signal = signal
        elif syntax.is_jsx(node):
            scan.has_jsx = True
            if scan.signal is None:
                scan.signal = "contains JSX"


def _return_signal(argument: Optional[Node]) -> Optional[str]:
    if argument is None:
        return None
    if syntax.is_jsx(argument):
        return "returns JSX directly"
    if argument.type == "parenthesized_expression":
        inner = syntax.unwrap_parens(argument)
        if syntax.is_jsx(inner):
            return "returns JSX in parentheses"
        argument = inner
        if argument is None:
            return None
    if argument.type == "ternary_expression":
        branches = (
            syntax.unwrap_parens(argument.child_by_field_name("consequence")),
            syntax.unwrap_parens(argument.child_by_field_name("alternative")),
        )
        if any(syntax.is_jsx(b) for b in branches):
            return "returns JSX conditionally"
    if argument.type == "binary_expression":
        operator = argument.child_by_field_name("operator")
        if syntax.text(operator) in ("&&", "||", "??"):
            right = syntax.unwrap_parens(argument.child_by_field_name("right"))
            if syntax.is_jsx(right):
                return "returns JSX in logical expression"
    return None
