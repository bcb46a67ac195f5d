"""Core data models produced by the component analysis engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple


class ItemKind:
    STATE = "state"
    SETTER = "setter"
    PROP = "prop"
    PROP_FUNCTION = "prop-function"
    FUNCTION = "function"
    CONTEXT_PROVIDER = "context-provider"
    CONTEXT_CONSUMER = "context-consumer"

    ALL = (
        STATE,
        SETTER,
        PROP,
        PROP_FUNCTION,
        FUNCTION,
        CONTEXT_PROVIDER,
        CONTEXT_CONSUMER,
    )


ITEM_COLORS: Dict[str, str] = {
    ItemKind.STATE: "#22c55e",
    ItemKind.SETTER: "#10b981",
    ItemKind.PROP: "#f59e0b",
    ItemKind.PROP_FUNCTION: "#f59e0b",
    ItemKind.FUNCTION: "#3b82f6",
    ItemKind.CONTEXT_PROVIDER: "#ec4899",
    ItemKind.CONTEXT_CONSUMER: "#8b5cf6",
}


class FlowType:
    STATE_TO_PROP = "state-to-prop"
    SETTER_TO_PROP = "setter-to-prop"
    FUNCTION_TO_PROP = "function-to-prop"
    PROP_TO_PROP = "prop-to-prop"
    CONTEXT_PROVIDER_TO_CONSUMER = "context-provider-to-consumer"
    DATA_FLOW = "data-flow"


@dataclass(frozen=True)
class ComponentItem:
    item_id: str
    name: str
    kind: str
    color: str
    flow_id: str

    @classmethod
    def create(cls, component_name: str, key: str, kind: str, flow_id: str, name: Optional[str] = None) -> "ComponentItem":
        """Build an item whose id is ``{component}-{key}``.

        ``name`` defaults to ``key``; context consumers pass a display name
        with a trailing ``()`` while keeping the bare identifier in the id.
        """
        return cls(
            item_id=f"{component_name}-{key}",
            name=name if name is not None else key,
            kind=kind,
            color=ITEM_COLORS[kind],
            flow_id=flow_id,
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "id": self.item_id,
            "name": self.name,
            "type": self.kind,
            "color": self.color,
            "flowId": self.flow_id,
        }


@dataclass(frozen=True)
class Component:
    name: str
    file_path: str
    items: Tuple[ComponentItem, ...] = ()
    x: int = 0
    y: int = 0
    width: int = 200
    height: int = 100

    @classmethod
    def build(cls, name: str, file_path: str, items: List[ComponentItem]) -> "Component":
        return cls(
            name=name,
            file_path=file_path,
            items=tuple(items),
            width=max(200, len(name) * 8 + 40),
            height=max(100, len(items) * 18 + 60),
        )

    @property
    def key(self) -> Tuple[str, str]:
        return (self.name, self.file_path)

    def find_item(self, name: str, kinds: Optional[Tuple[str, ...]] = None) -> Optional[ComponentItem]:
        for item in self.items:
            if item.name == name and (kinds is None or item.kind in kinds):
                return item
        return None

    def items_of(self, kind: str) -> List[ComponentItem]:
        return [item for item in self.items if item.kind == kind]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.name,
            "filePath": self.file_path,
            "name": self.name,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "items": [item.to_dict() for item in self.items],
        }


@dataclass(frozen=True)
class DataFlow:
    flow_id: str
    from_item: str
    to_item: str
    flow_type: str
    # Owning component files; item ids alone repeat across same-name components.
    from_file: str = ""
    to_file: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {
            "id": self.flow_id,
            "fromItem": self.from_item,
            "toItem": self.to_item,
            "type": self.flow_type,
        }


@dataclass(frozen=True)
class Conflict:
    conflict_id: str
    description: str
    items: Tuple[str, ...]
    file_path: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.conflict_id,
            "description": self.description,
            "items": list(self.items),
        }


@dataclass(frozen=True)
class Diagnostics:
    files_analyzed: Tuple[str, ...] = ()
    components_found: Tuple[str, ...] = ()
    parse_errors: Tuple[str, ...] = ()
    analysis_log: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, List[str]]:
        return {
            "filesAnalyzed": list(self.files_analyzed),
            "componentsFound": list(self.components_found),
            "parseErrors": list(self.parse_errors),
            "analysisLog": list(self.analysis_log),
        }


@dataclass(frozen=True)
class AnalysisResult:
    components: Tuple[Component, ...]
    flows: Tuple[DataFlow, ...]
    conflicts: Tuple[Conflict, ...]
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    def item_ids(self) -> Set[str]:
        return {item.item_id for comp in self.components for item in comp.items}

    def find_component(self, name: str, file_path: Optional[str] = None) -> Optional[Component]:
        for comp in self.components:
            if comp.name == name and (file_path is None or comp.file_path == file_path):
                return comp
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "components": [c.to_dict() for c in self.components],
            "flows": [f.to_dict() for f in self.flows],
            "conflicts": [c.to_dict() for c in self.conflicts],
            "debug": self.diagnostics.to_dict(),
        }
