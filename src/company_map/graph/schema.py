"""
Node and edge types for investigation graphs.
"""

from dataclasses import dataclass, replace
from enum import Enum

from ..shared.exceptions import GraphIntegrityError
from .records import RegistryRecord


class NodeKind(str, Enum):
    """Kinds of entity a node can represent."""

    COMPANY = "company"
    OFFICER = "officer"
    PSC = "psc"
    ADDRESS = "address"


class RelationKind(str, Enum):
    """Kinds of relationship an edge can represent."""

    OFFICER_ROLE = "officer-role"
    PSC = "psc"
    REGISTERED_OFFICE = "registered-office"
    CORRESPONDENCE_ADDRESS = "correspondence-address"
    REGISTERED_AT = "registered-at"


class EdgeStyle(str, Enum):
    """Line style hint for presentation."""

    SOLID = "solid"
    DASHED = "dashed"


@dataclass(frozen=True)
class Position:
    """Top-left corner of a laid-out node."""

    x: float
    y: float


@dataclass(frozen=True)
class Node:
    """A graph node. ``id`` and ``kind`` never change once created.

    Changes to display attributes, annotations or position produce a new
    ``Node`` through :meth:`evolve`, which refuses to touch identity.
    """

    id: str
    kind: NodeKind
    label: str
    role: str | None = None
    subtext: str | None = None
    status: str | None = None
    address: str | None = None
    country: str | None = None
    occupation: str | None = None
    appointed_on: str | None = None
    officer_registry_id: str | None = None
    fingerprint: str | None = None
    has_stable_identity: bool = True
    source_record: RegistryRecord | None = None
    custom_color: str | None = None
    notes: str | None = None
    position: Position | None = None

    def evolve(self, **changes) -> "Node":
        """Return a copy with the given attributes changed."""
        if "id" in changes or "kind" in changes:
            raise GraphIntegrityError("Node identity is immutable", {"node_id": self.id})
        return replace(self, **changes)

    @property
    def is_expandable(self) -> bool:
        """Whether expanding this node can discover anything."""
        if self.kind == NodeKind.OFFICER:
            return bool(self.officer_registry_id)
        if self.kind == NodeKind.PSC:
            return False
        return True


@dataclass(frozen=True)
class Edge:
    """A directed relationship between two nodes."""

    id: str
    source: str
    target: str
    relation: RelationKind
    label: str
    style: EdgeStyle = EdgeStyle.SOLID
    stroke: str = "#94a3b8"
    animated: bool = True
