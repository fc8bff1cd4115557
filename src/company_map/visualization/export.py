"""
Presentation payload: laid-out nodes and edges with emphasis applied.
"""

import json
from pathlib import Path
from typing import Any

from ..graph.highlight import Emphasis, highlight
from ..graph.model import CompanyGraph
from ..graph.schema import EdgeStyle

EMPHASIZED_NODE_OPACITY = 1.0
DIMMED_NODE_OPACITY = 0.2
EMPHASIZED_EDGE_OPACITY = 1.0
DIMMED_EDGE_OPACITY = 0.1
DIMMED_EDGE_STROKE = "#cbd5e1"
DASH_PATTERN = "5,5"


def graph_to_payload(
    graph: CompanyGraph, emphasis: Emphasis | None = None
) -> dict[str, Any]:
    """Convert a laid-out graph into the structure the map view renders.

    Args:
        graph: Graph whose nodes already carry positions
        emphasis: Emphasis flags; everything is emphasized when omitted

    Returns:
        Dictionary with ``nodes`` and ``edges`` lists
    """
    emphasis = emphasis or highlight(graph, None)

    nodes = []
    for node in graph.nodes.values():
        emphasized = emphasis.nodes.get(node.id, True)
        position = node.position
        nodes.append(
            {
                "id": node.id,
                "type": "businessCard",
                "position": {"x": position.x, "y": position.y} if position else None,
                "data": {
                    "label": node.label,
                    "type": node.kind.value,
                    "role": node.role,
                    "subtext": node.subtext,
                    "status": node.status,
                    "address": node.address,
                    "country": node.country,
                    "occupation": node.occupation,
                    "appointedOn": node.appointed_on,
                    "customColor": node.custom_color,
                    "notes": node.notes,
                },
                "style": {
                    "opacity": EMPHASIZED_NODE_OPACITY if emphasized else DIMMED_NODE_OPACITY
                },
            }
        )

    edges = []
    for edge in graph.edges.values():
        emphasized = emphasis.edges.get(edge.id, True)
        style: dict[str, Any] = {
            "stroke": edge.stroke if emphasized else DIMMED_EDGE_STROKE,
            "opacity": EMPHASIZED_EDGE_OPACITY if emphasized else DIMMED_EDGE_OPACITY,
        }
        if edge.style == EdgeStyle.DASHED:
            style["strokeDasharray"] = DASH_PATTERN
        edges.append(
            {
                "id": edge.id,
                "source": edge.source,
                "target": edge.target,
                "label": edge.label,
                "type": "smoothstep",
                "relation": edge.relation.value,
                "animated": edge.animated,
                "style": style,
            }
        )

    return {"nodes": nodes, "edges": edges}


def write_payload(payload: dict[str, Any], output_path: Path) -> Path:
    """Write a presentation payload as JSON."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(payload, f, indent=2)
    return output_path
