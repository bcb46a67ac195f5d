"""Graph export helpers for JSON and DOT outputs."""

from __future__ import annotations

import json
import os
from collections import Counter
from pathlib import Path
from typing import Dict, List, Set, Tuple

from .models import AnalysisResult, Component


def export_json(result: AnalysisResult, output_file: Path) -> None:
    output_file.write_text(json.dumps(result.to_dict(), indent=2), encoding="utf-8")


def export_dot(result: AnalysisResult, output_file: Path, focus: str = "") -> None:
    output_file.write_text(render_dot(result, focus), encoding="utf-8")


def render_dot(result: AnalysisResult, focus: str = "") -> str:
    locations = _relative_locations(result.components)
    node_ids = _node_ids(result.components, locations)
    components = {node_ids[comp.key]: comp for comp in result.components}
    owners = _item_owners(result.components, node_ids)

    edges = []
    for flow in result.flows:
        src = owners.get((flow.from_item, flow.from_file))
        dst = owners.get((flow.to_item, flow.to_file))
        if src is not None and dst is not None:
            edges.append((src, dst, flow))

    selected = _focused_subgraph(components, edges, focus)

    conflicted: Set[str] = set()
    for conflict in result.conflicts:
        if conflict.items:
            owner = owners.get((conflict.items[0], conflict.file_path))
            if owner is not None:
                conflicted.add(owner)

    lines = ["digraph ReactGraph {"]
    lines.append("  rankdir=LR;")
    lines.append("  node [shape=record, fontname=Helvetica];")

    for node_id in selected["nodes"]:
        comp = components[node_id]
        style = ', style=dashed, color=red' if node_id in conflicted else ""
        label = _record_label(comp, locations[comp.file_path])
        lines.append(f'  "{_esc(node_id)}" [label="{label}"{style}];')

    for src, dst, flow in selected["edges"]:
        lines.append(
            f'  "{_esc(src)}" -> "{_esc(dst)}" [label="{_esc(flow.flow_type)}"];'
        )

    lines.append("}")
    return "\n".join(lines)


def _relative_locations(components) -> Dict[str, str]:
    """File paths relative to the deepest directory shared by every component."""
    files = sorted({comp.file_path for comp in components})
    if not files:
        return {}
    base = os.path.commonpath([os.path.dirname(f) for f in files])
    return {f: Path(os.path.relpath(f, base)).as_posix() for f in files}


def _node_ids(components, locations: Dict[str, str]) -> Dict[Tuple[str, str], str]:
    """One DOT id per component; repeated names are qualified by their file."""
    counts = Counter(comp.name for comp in components)
    ids: Dict[Tuple[str, str], str] = {}
    for comp in components:
        if counts[comp.name] > 1:
            ids[comp.key] = f"{comp.name} ({locations[comp.file_path]})"
        else:
            ids[comp.key] = comp.name
    return ids


def _item_owners(components, node_ids: Dict[Tuple[str, str], str]) -> Dict[Tuple[str, str], str]:
    # Keyed by (item id, file); the empty file entry serves flows without one.
    owners: Dict[Tuple[str, str], str] = {}
    for comp in components:
        for item in comp.items:
            owners[(item.item_id, comp.file_path)] = node_ids[comp.key]
            owners[(item.item_id, "")] = node_ids[comp.key]
    return owners


def _record_label(comp: Component, location: str) -> str:
    head = f"{_esc_record(comp.name)}|{_esc_record(location)}"
    rows = [f"{item.kind}: {item.name}" for item in comp.items]
    body = "\\l".join(_esc_record(row) for row in rows)
    if body:
        return f"{{{head}|{body}\\l}}"
    return f"{{{head}}}"


def _focused_subgraph(
    components: Dict[str, Component],
    edges: List[tuple],
    focus: str,
) -> Dict[str, List]:
    if not focus:
        return {"nodes": list(components.keys()), "edges": edges}

    focus_ids = {node_id for node_id, comp in components.items() if focus in comp.name}

    if not focus_ids:
        return {"nodes": list(components.keys()), "edges": edges}

    edge_subset = [e for e in edges if e[0] in focus_ids or e[1] in focus_ids]
    node_subset: Set[str] = set(focus_ids)
    for src, dst, _flow in edge_subset:
        node_subset.add(src)
        node_subset.add(dst)
    return {"nodes": sorted(node_subset), "edges": edge_subset}


def _esc(text: str) -> str:
    return text.replace('"', '\\"')


def _esc_record(text: str) -> str:
    for char in '\\{}|<>"':
        text = text.replace(char, f"\\{char}")
    return text
