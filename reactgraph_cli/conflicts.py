"""Prop/context naming conflict detection."""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Optional

from .models import Component, ComponentItem, Conflict, ItemKind

_PROP_AFFIXES = re.compile(r"^(get|set|use)")
_CONTEXT_AFFIXES = re.compile(r"^(get|set|use)|\(\)$")


def prop_base(name: str) -> str:
    return _PROP_AFFIXES.sub("", name, count=1).lower()


def context_base(name: str) -> str:
    return _CONTEXT_AFFIXES.sub("", name).lower()


def names_overlap(prop_name: str, consumer_name: str) -> bool:
    """Fuzzy match: equal bases, or one base contained in the other."""
    a = prop_base(prop_name)
    b = context_base(consumer_name)
    return a == b or b in a or a in b


def detect_conflicts(components: Iterable[Component]) -> List[Conflict]:
    """Props that appear to duplicate a context value on the same component."""
    found: Dict[str, Conflict] = {}
    for component in components:
        consumers = component.items_of(ItemKind.CONTEXT_CONSUMER)
        if not consumers:
            continue
        for prop in component.items_of(ItemKind.PROP):
            consumer = _first_overlap(prop, consumers)
            if consumer is None:
                continue
            conflict_id = f"{component.name}-{prop.name}-conflict"
            if conflict_id in found:
                continue
            found[conflict_id] = Conflict(
                conflict_id=conflict_id,
                description=f'{component.name} receives "{prop.name}" via both props and context',
                items=(prop.item_id, consumer.item_id),
                file_path=component.file_path,
            )
    return list(found.values())


def _first_overlap(prop: ComponentItem, consumers: List[ComponentItem]) -> Optional[ComponentItem]:
    for consumer in consumers:
        if names_overlap(prop.name, consumer.name):
            return consumer
    return None
