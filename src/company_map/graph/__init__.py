"""
Graph module for investigation graphs.

Contains record parsing, node identity rules, the graph container, seed
assembly, breadth-first expansion and connectivity highlighting.
"""

from .address import format_address
from .assembler import GraphAssembler
from .edges import make_edge
from .expansion import ExpansionEngine, ExpansionReport, ExpansionResult
from .highlight import Emphasis, highlight, resolve_active_node
from .model import CompanyGraph
from .schema import Edge, EdgeStyle, Node, NodeKind, Position, RelationKind

__all__ = [
    "CompanyGraph",
    "Node",
    "Edge",
    "NodeKind",
    "RelationKind",
    "EdgeStyle",
    "Position",
    "GraphAssembler",
    "ExpansionEngine",
    "ExpansionReport",
    "ExpansionResult",
    "Emphasis",
    "highlight",
    "resolve_active_node",
    "format_address",
    "make_edge",
]
