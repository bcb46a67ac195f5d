"""Grid layout for the component graph."""

from __future__ import annotations

import math
from dataclasses import replace
from typing import Iterable, List

from .models import Component

SPACING = 50
MARGIN = 50


def layout_components(components: Iterable[Component]) -> List[Component]:
    """Place components on a square-ish grid in input order.

    Position depends only on the index and each component's own size, so the
    same input order always yields the same coordinates.
    """
    ordered = list(components)
    if not ordered:
        return []

    columns = math.ceil(math.sqrt(len(ordered)))
    return [
        replace(
            component,
            x=(index % columns) * (component.width + SPACING) + MARGIN,
            y=(index // columns) * (component.height + SPACING) + MARGIN,
        )
        for index, component in enumerate(ordered)
    ]
