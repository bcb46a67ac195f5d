"""Helpers over Tree-sitter JS/TS/JSX syntax nodes.

All functions dispatch on ``node.type`` tags and never mutate the tree. The
JavaScript, TypeScript and TSX grammars share node names for everything
handled here; the few TypeScript-only wrappers (``required_parameter``,
``extends_clause``) are unwrapped explicitly.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Iterator, List, Optional, Tuple

Node = Any

FUNCTION_DECLARATION_TYPES = frozenset({
    "function_declaration",
    "generator_function_declaration",
})

FUNCTION_EXPRESSION_TYPES = frozenset({
    "arrow_function",
    "function_expression",
    "function",
    "generator_function",
})

FUNCTION_TYPES = FUNCTION_DECLARATION_TYPES | FUNCTION_EXPRESSION_TYPES | {"method_definition"}

CLASS_TYPES = frozenset({"class_declaration", "abstract_class_declaration", "class"})

JSX_ELEMENT_TYPES = frozenset({"jsx_element", "jsx_self_closing_element", "jsx_fragment"})

JSX_TAG_TYPES = frozenset({"jsx_opening_element", "jsx_self_closing_element"})

_UPPERCASE = re.compile(r"^[A-Z]")


def text(node: Optional[Node]) -> str:
    if node is None:
        return ""
    return node.text.decode("utf-8")


def starts_uppercase(name: Optional[str]) -> bool:
    return bool(name) and _UPPERCASE.match(name) is not None


def same_node(a: Optional[Node], b: Optional[Node]) -> bool:
    if a is None or b is None:
        return False
    return (a.type, a.start_byte, a.end_byte) == (b.type, b.start_byte, b.end_byte)


def named_children(node: Node) -> List[Node]:
    """Named children without comments."""
    return [child for child in node.named_children if child.type != "comment"]


def first_named(node: Optional[Node]) -> Optional[Node]:
    if node is None:
        return None
    children = named_children(node)
    return children[0] if children else None


def string_value(node: Optional[Node]) -> Optional[str]:
    """Value of a string literal node without its quotes."""
    if node is None or node.type != "string":
        return None
    raw = text(node)
    if len(raw) >= 2 and raw[0] in "'\"`" and raw[-1] == raw[0]:
        return raw[1:-1]
    return raw


def walk(root: Node, skip: Optional[Callable[[Node], bool]] = None) -> Iterator[Node]:
    """Pre-order walk in document order.

    ``skip`` prunes a child (and its whole subtree); it is never applied to
    *root* itself.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        for child in reversed(node.named_children):
            if skip is not None and skip(child):
                continue
            stack.append(child)


def ancestors(node: Node) -> Iterator[Node]:
    current = node.parent
    while current is not None:
        yield current
        current = current.parent


# ---------------------------------------------------------------------------
# Functions & declarations
# ---------------------------------------------------------------------------

def is_function(node: Optional[Node]) -> bool:
    return node is not None and node.type in FUNCTION_TYPES


def declarator_function(declarator: Node) -> Optional[Node]:
    """Function bound by ``const X = () => ...`` / ``const X = function () {}``."""
    if declarator.type != "variable_declarator":
        return None
    value = declarator.child_by_field_name("value")
    if value is not None and value.type in FUNCTION_EXPRESSION_TYPES:
        return value
    return None


def declarator_name(declarator: Node) -> Optional[str]:
    name_node = declarator.child_by_field_name("name")
    if name_node is None or name_node.type != "identifier":
        return None
    return text(name_node)


def declaration_name(node: Node) -> Optional[str]:
    name_node = node.child_by_field_name("name")
    if name_node is None:
        return None
    return text(name_node)


def function_body(func: Node) -> Optional[Node]:
    return func.child_by_field_name("body")


def function_params(func: Node) -> List[Node]:
    single = func.child_by_field_name("parameter")
    if single is not None:
        return [single]
    params = func.child_by_field_name("parameters")
    if params is None:
        return []
    return named_children(params)


def unwrap_param(param: Node) -> Node:
    """Binding pattern of a parameter, without TS wrappers or default values."""
    if param.type in ("required_parameter", "optional_parameter"):
        pattern = param.child_by_field_name("pattern")
        if pattern is not None:
            param = pattern
    if param.type == "assignment_pattern":
        left = param.child_by_field_name("left")
        if left is not None:
            param = left
    return param


def is_nested_declaration(node: Node) -> bool:
    """Nested function/class declarations that own their own body."""
    if node.type in FUNCTION_DECLARATION_TYPES or node.type in CLASS_TYPES:
        return True
    return declarator_function(node) is not None


# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

def array_pattern_elements(pattern: Node) -> List[Optional[Node]]:
    """Element slots of an array pattern; holes (``[, b]``) are ``None``."""
    elements: List[Optional[Node]] = []
    pending: Optional[Node] = None
    seen_value = False
    for child in pattern.children:
        if child.type == "[" or child.type == "comment":
            continue
        if child.type == ",":
            elements.append(pending)
            pending = None
            seen_value = False
        elif child.type == "]":
            if seen_value:
                elements.append(pending)
        else:
            pending = child
            seen_value = True
    return elements


def object_pattern_keys(pattern: Node) -> List[str]:
    """Destructured keys of an object pattern; a rest element becomes ``...name``."""
    keys: List[str] = []
    for child in named_children(pattern):
        if child.type == "shorthand_property_identifier_pattern":
            keys.append(text(child))
        elif child.type == "object_assignment_pattern":
            left = child.child_by_field_name("left")
            if left is not None and left.type == "shorthand_property_identifier_pattern":
                keys.append(text(left))
        elif child.type == "pair_pattern":
            key = child.child_by_field_name("key")
            if key is not None and key.type == "property_identifier":
                keys.append(text(key))
        elif child.type == "rest_pattern":
            target = first_named(child)
            if target is not None and target.type == "identifier":
                keys.append(f"...{text(target)}")
    return keys


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------

def member_parts(node: Node) -> Tuple[Optional[Node], Optional[Node]]:
    """``(object, property)`` of a member expression or JSX nested identifier."""
    if node.type not in ("member_expression", "nested_identifier"):
        return None, None
    obj = node.child_by_field_name("object")
    prop = node.child_by_field_name("property")
    if obj is None or prop is None:
        # JSX tag names are aliased nested identifiers and may lack fields.
        children = named_children(node)
        if len(children) >= 2:
            return children[0], children[-1]
    return obj, prop


def callee_name(call: Node) -> Optional[str]:
    """Name of a called function: ``useState`` for both ``useState()`` and ``React.useState()``."""
    func = call.child_by_field_name("function")
    if func is None:
        return None
    if func.type == "identifier":
        return text(func)
    if func.type == "member_expression":
        prop = func.child_by_field_name("property")
        if prop is not None:
            return text(prop)
    return None


def provider_context_name(target: Optional[Node]) -> Optional[str]:
    """Context name for ``X.Provider``; ``Context`` when X is not a plain identifier."""
    if target is None:
        return None
    obj, prop = member_parts(target)
    if prop is None or text(prop) != "Provider":
        return None
    if obj is not None and obj.type == "identifier":
        return text(obj)
    return "Context"


def unwrap_parens(node: Optional[Node]) -> Optional[Node]:
    while node is not None and node.type == "parenthesized_expression":
        node = first_named(node)
    return node


def is_jsx(node: Optional[Node]) -> bool:
    return node is not None and node.type in JSX_ELEMENT_TYPES


# ---------------------------------------------------------------------------
# JSX
# ---------------------------------------------------------------------------

def jsx_tag_name(tag: Node) -> Optional[Node]:
    return tag.child_by_field_name("name")


def jsx_attributes(tag: Node) -> List[Tuple[Node, Optional[Node]]]:
    """``(name_node, value_node)`` pairs for the plain attributes of a JSX tag."""
    attrs: List[Tuple[Node, Optional[Node]]] = []
    for child in named_children(tag):
        if child.type != "jsx_attribute":
            continue
        parts = named_children(child)
        if not parts:
            continue
        attrs.append((parts[0], parts[1] if len(parts) > 1 else None))
    return attrs


def jsx_expression_value(value: Optional[Node]) -> Optional[Node]:
    """Expression inside ``{...}`` of an attribute value."""
    if value is None or value.type != "jsx_expression":
        return None
    return first_named(value)
