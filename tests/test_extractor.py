"""Tests for component item extraction."""

from conftest import find_node
from reactgraph_cli import syntax
from reactgraph_cli.extractor import (
    build_function_component,
    extract_class_items,
    extract_function_items,
    extract_props,
)
from reactgraph_cli.models import ITEM_COLORS, ItemKind


def _items(parse, diagnostics, source, name, file_name="Component.jsx"):
    root = parse(source, file_name).root
    node = None
    for candidate in syntax.walk(root):
        if candidate.type in syntax.FUNCTION_DECLARATION_TYPES and syntax.declaration_name(candidate) == name:
            node = candidate
            break
        if candidate.type == "variable_declarator" and syntax.declarator_name(candidate) == name:
            node = syntax.declarator_function(candidate)
            break
    assert node is not None, f"{name} not found"
    return extract_function_items(node, name, diagnostics)


def _summary(items):
    return [(item.name, item.kind, item.flow_id) for item in items]


class TestStateHooks:
    def test_use_state_pair(self, parse, diagnostics):
        """useState yields a state and setter sharing a flow id."""
        source = "function Counter() {\n  const [count, setCount] = useState(0);\n  return <b>{count}</b>;\n}"

        items = _items(parse, diagnostics, source, "Counter")

        assert _summary(items) == [
            ("count", ItemKind.STATE, "count-flow"),
            ("setCount", ItemKind.SETTER, "count-flow"),
        ]
        assert [item.item_id for item in items] == ["Counter-count", "Counter-setCount"]
        assert items[0].color == ITEM_COLORS[ItemKind.STATE]

    def test_use_reducer_and_member_callee(self, parse, diagnostics):
        """useReducer and React.useState are recognized."""
        source = (
            "function Store() {\n"
            "  const [state, dispatch] = useReducer(reducer, {});\n"
            "  const [open, setOpen] = React.useState(false);\n"
            "  return <div />;\n"
            "}"
        )

        items = _items(parse, diagnostics, source, "Store")

        assert _summary(items) == [
            ("state", ItemKind.STATE, "state-flow"),
            ("dispatch", ItemKind.SETTER, "state-flow"),
            ("open", ItemKind.STATE, "open-flow"),
            ("setOpen", ItemKind.SETTER, "open-flow"),
        ]

    def test_placeholder_names_for_complex_slots(self, parse, diagnostics):
        """Non-identifier slots get numbered placeholder names."""
        source = (
            "function Form() {\n"
            "  const [{ name }, setForm] = useState({});\n"
            "  const [, dispatch] = useReducer(reducer);\n"
            "  const [value, [first]] = useState([]);\n"
            "  return <form />;\n"
            "}"
        )

        items = _items(parse, diagnostics, source, "Form")

        assert _summary(items) == [
            ("state0", ItemKind.STATE, "state0-flow"),
            ("setForm", ItemKind.SETTER, "state0-flow"),
            ("state1", ItemKind.STATE, "state1-flow"),
            ("dispatch", ItemKind.SETTER, "state1-flow"),
            ("value", ItemKind.STATE, "value-flow"),
            ("setter2", ItemKind.SETTER, "value-flow"),
        ]

    def test_placeholder_counters_are_per_component(self, parse, diagnostics):
        """Placeholder counters restart for each component."""
        source = (
            "function A() { const [{ a }, setA] = useState(); return <i />; }\n"
            "function B() { const [{ b }, setB] = useState(); return <i />; }\n"
        )

        a_items = _items(parse, diagnostics, source, "A")
        b_items = _items(parse, diagnostics, source, "B")

        assert a_items[0].name == "state0"
        assert b_items[0].name == "state0"

    def test_single_slot_pattern_is_ignored(self, parse, diagnostics):
        """A single-slot array pattern yields nothing."""
        source = "function Once() { const [value] = useState(1); return <i>{value}</i>; }"

        assert _items(parse, diagnostics, source, "Once") == []

    def test_unbound_state_call_is_ignored(self, parse, diagnostics):
        """A useState call that is not destructured yields nothing."""
        source = "function Loose() { useState(1); return <i />; }"

        assert _items(parse, diagnostics, source, "Loose") == []


class TestContext:
    def test_use_context_consumer(self, parse, diagnostics):
        """useContext bound to a name yields a consumer."""
        source = "function Profile() { const user = useContext(UserContext); return <p>{user.name}</p>; }"

        items = _items(parse, diagnostics, source, "Profile")

        assert len(items) == 1
        consumer = items[0]
        assert consumer.item_id == "Profile-user"
        assert consumer.name == "user()"
        assert consumer.kind == ItemKind.CONTEXT_CONSUMER
        assert consumer.flow_id == "user-context"

    def test_destructured_use_context_is_ignored(self, parse, diagnostics):
        """Destructured useContext results are ignored."""
        source = "function Profile() { const { user } = useContext(UserContext); return <p />; }"

        assert _items(parse, diagnostics, source, "Profile") == []

    def test_provider_call(self, parse, diagnostics):
        """A Provider call yields a provider item."""
        source = "function Root() { return UserContext.Provider({ value: 1 }); }"

        items = _items(parse, diagnostics, source, "Root")

        assert _summary(items) == [
            ("UserContextProvider", ItemKind.CONTEXT_PROVIDER, "UserContext-context"),
        ]

    def test_provider_jsx_collapses_repeats(self, parse, diagnostics):
        """Repeated Provider tags yield one provider item."""
        source = (
            "function Root() {\n"
            "  return (\n"
            "    <div>\n"
            "      <ThemeContext.Provider value={1}><A /></ThemeContext.Provider>\n"
            "      <ThemeContext.Provider value={2}><B /></ThemeContext.Provider>\n"
            "    </div>\n"
            "  );\n"
            "}"
        )

        items = _items(parse, diagnostics, source, "Root")

        assert _summary(items) == [
            ("ThemeContextProvider", ItemKind.CONTEXT_PROVIDER, "ThemeContext-context"),
        ]


class TestLocalFunctions:
    def test_nested_functions_and_arrows(self, parse, diagnostics):
        """Nested functions and arrows become function items."""
        source = (
            "function Panel() {\n"
            "  function toggle() {}\n"
            "  const close = () => {};\n"
            "  const label = 'x';\n"
            "  return <div onClick={toggle} />;\n"
            "}"
        )

        items = _items(parse, diagnostics, source, "Panel")

        assert _summary(items) == [
            ("toggle", ItemKind.FUNCTION, "toggle-flow"),
            ("close", ItemKind.FUNCTION, "close-flow"),
        ]


class TestProps:
    def test_destructured_props_even_if_unused(self, parse, diagnostics):
        """Destructured props are recorded even when unused."""
        source = "function Card({title, onClick}) { return <div>{title}</div>; }"

        items = _items(parse, diagnostics, source, "Card")

        assert _summary(items) == [
            ("title", ItemKind.PROP, "title-flow"),
            ("onClick", ItemKind.PROP, "onClick-flow"),
        ]

    def test_defaults_renames_and_rest(self, parse, diagnostics):
        """Defaults, renames and rest elements become props."""
        source = "const Field = ({ label = 'x', value: v, ...rest }) => <input {...rest} />;"

        items = _items(parse, diagnostics, source, "Field")

        assert [item.name for item in items] == ["label", "value", "...rest"]
        assert all(item.kind == ItemKind.PROP for item in items)

    def test_pattern_with_default_parameter(self, parse, diagnostics):
        """A defaulted props pattern is unwrapped."""
        source = "function Menu({ items } = {}) { return <ul />; }"

        assert [i.name for i in _items(parse, diagnostics, source, "Menu")] == ["items"]

    def test_typed_props(self, parse, diagnostics):
        """Type annotations on props are unwrapped."""
        source = "export const Tag = ({ text, color }: TagProps) => <span>{text}</span>;"

        items = _items(parse, diagnostics, source, "Tag", file_name="Tag.tsx")

        assert [i.name for i in items] == ["text", "color"]

    def test_props_identifier_usage(self, parse, diagnostics):
        """props.X accesses become props in first-seen order."""
        source = (
            "function Greeting(props) {\n"
            "  const name = props.name;\n"
            "  return <p title={props.title}>{props.name}</p>;\n"
            "}"
        )

        items = _items(parse, diagnostics, source, "Greeting")

        assert [i.name for i in items] == ["name", "title"]

    def test_other_parameter_names_are_ignored(self, parse, diagnostics):
        """A parameter not named props contributes nothing."""
        root = parse("function Card(p) { return <div>{p.title}</div>; }").root
        func = find_node(root, "function_declaration", "Card")

        assert extract_props(func, "Card", diagnostics) == []

    def test_hooks_before_props(self, parse, diagnostics):
        """Hook items precede props."""
        source = "function Counter({ step }) { const [n, setN] = useState(0); return <b>{n}</b>; }"

        items = _items(parse, diagnostics, source, "Counter")

        assert [i.name for i in items] == ["n", "setN", "step"]


class TestClassItems:
    def test_methods_except_render_and_constructor(self, parse, diagnostics):
        """Class methods other than render and constructor are functions."""
        source = (
            "class Modal extends React.Component {\n"
            "  constructor(props) { super(props); }\n"
            "  open() {}\n"
            "  close() {}\n"
            "  render() { return <div />; }\n"
            "}"
        )
        node = find_node(parse(source).root, "class_declaration")

        items = extract_class_items(node, "Modal", diagnostics)

        assert _summary(items) == [
            ("open", ItemKind.FUNCTION, "open-flow"),
            ("close", ItemKind.FUNCTION, "close-flow"),
        ]


def test_component_sizing(parse, diagnostics):
    """Width and height follow the name length and item count."""
    source = "function ExtraordinarilyLongComponentName({ a, b, c, d, e }) { return <div />; }"
    root = parse(source).root
    func = find_node(root, "function_declaration")

    component = build_function_component(func, "ExtraordinarilyLongComponentName", "/virtual/x.jsx", diagnostics)

    assert component.width == max(200, len("ExtraordinarilyLongComponentName") * 8 + 40)
    assert component.height == max(100, 5 * 18 + 60)

    small = build_function_component(func, "A", "/virtual/x.jsx", diagnostics)
    assert small.width == 200
