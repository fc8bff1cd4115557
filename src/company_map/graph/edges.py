"""
Edge construction with identity and style derived from the relationship kind.
"""

from .schema import Edge, EdgeStyle, RelationKind

DEFAULT_STROKE = "#94a3b8"
PSC_STROKE = "#f59e0b"

DEFAULT_LABELS = {
    RelationKind.OFFICER_ROLE: "Officer",
    RelationKind.PSC: "PSC",
    RelationKind.REGISTERED_OFFICE: "Registered Office",
    RelationKind.CORRESPONDENCE_ADDRESS: "Correspondence",
    RelationKind.REGISTERED_AT: "Registered At",
}


def edge_identity(source: str, target: str) -> str:
    """At most one edge exists per ordered (source, target) pair."""
    return f"e-{source}-{target}"


def edge_style(relation: RelationKind) -> EdgeStyle:
    if relation == RelationKind.CORRESPONDENCE_ADDRESS:
        return EdgeStyle.DASHED
    return EdgeStyle.SOLID


def edge_stroke(relation: RelationKind) -> str:
    return PSC_STROKE if relation == RelationKind.PSC else DEFAULT_STROKE


def make_edge(
    source: str, target: str, relation: RelationKind, label: str | None = None
) -> Edge:
    """Build an edge between two node identities.

    Args:
        source: Source node id
        target: Target node id
        relation: Relationship kind, which decides the style hints
        label: Display label; officer-role edges pass the role text

    Returns:
        The edge, identified by ``e-<source>-<target>``
    """
    return Edge(
        id=edge_identity(source, target),
        source=source,
        target=target,
        relation=relation,
        label=label or DEFAULT_LABELS[relation],
        style=edge_style(relation),
        stroke=edge_stroke(relation),
    )
