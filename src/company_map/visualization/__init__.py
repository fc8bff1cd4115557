"""
Visualization module: layout, detail views and presentation export.
"""

from .details import describe_appointment, describe_node
from .export import graph_to_payload, write_payload
from .layout import LayeredLayoutEngine, LayoutEngine, minimum_span

__all__ = [
    "LayoutEngine",
    "LayeredLayoutEngine",
    "minimum_span",
    "describe_node",
    "describe_appointment",
    "graph_to_payload",
    "write_payload",
]
