"""
Tests for the layered layout engine.
"""

import pytest

from company_map.graph.edges import make_edge
from company_map.graph.model import CompanyGraph
from company_map.graph.schema import Node, NodeKind, Position, RelationKind
from company_map.shared.exceptions import ConfigurationError
from company_map.shared.models import LayoutDirection
from company_map.visualization.layout import LayeredLayoutEngine, minimum_span


def _chain() -> CompanyGraph:
    return CompanyGraph(
        [
            Node(id="c", kind=NodeKind.COMPANY, label="C"),
            Node(id="o", kind=NodeKind.OFFICER, label="O"),
            Node(id="a", kind=NodeKind.ADDRESS, label="A"),
        ],
        [
            make_edge("c", "o", RelationKind.OFFICER_ROLE),
            make_edge("o", "a", RelationKind.CORRESPONDENCE_ADDRESS),
        ],
    )


class TestLayeredLayoutEngine:
    """Tests for position computation."""

    def test_top_to_bottom_spacing(self) -> None:
        """Test rank spans and separations in TB direction."""
        positions = LayeredLayoutEngine().compute_positions(_chain(), LayoutDirection.TB)
        assert positions["c"] == Position(0, 0)
        assert positions["o"] == Position(0, 440)
        assert positions["a"] == Position(0, 640)

    def test_left_to_right_spacing(self) -> None:
        """Test the same chain stacks along x in LR direction."""
        positions = LayeredLayoutEngine().compute_positions(_chain(), "LR")
        assert positions["c"] == Position(0, 0)
        assert positions["o"] == Position(600, 0)
        assert positions["a"] == Position(960, 0)

    def test_siblings_are_separated(self) -> None:
        """Test nodes sharing a rank are spaced by width plus separation."""
        graph = CompanyGraph(
            [
                Node(id="c", kind=NodeKind.COMPANY, label="C"),
                Node(id="o1", kind=NodeKind.OFFICER, label="O1"),
                Node(id="o2", kind=NodeKind.OFFICER, label="O2"),
            ],
            [
                make_edge("c", "o1", RelationKind.OFFICER_ROLE),
                make_edge("c", "o2", RelationKind.OFFICER_ROLE),
            ],
        )
        positions = LayeredLayoutEngine().compute_positions(graph)
        assert positions["o1"] == Position(0, 440)
        assert positions["o2"] == Position(440, 440)
        assert positions["c"] == Position(220, 0)

    def test_cycles_are_laid_out(self) -> None:
        """Test a cyclic graph still gets a position for every node."""
        graph = CompanyGraph(
            [
                Node(id="c1", kind=NodeKind.COMPANY, label="C1"),
                Node(id="o", kind=NodeKind.OFFICER, label="O"),
                Node(id="c2", kind=NodeKind.COMPANY, label="C2"),
            ],
            [
                make_edge("c1", "o", RelationKind.OFFICER_ROLE),
                make_edge("o", "c2", RelationKind.OFFICER_ROLE),
                make_edge("c2", "c1", RelationKind.REGISTERED_AT),
            ],
        )
        positions = LayeredLayoutEngine().compute_positions(graph)
        assert set(positions) == {"c1", "o", "c2"}
        assert min(p.x for p in positions.values()) == 0
        assert min(p.y for p in positions.values()) == 0

    def test_deterministic(self) -> None:
        """Test the same graph always gets the same positions."""
        engine = LayeredLayoutEngine()
        assert engine.compute_positions(_chain()) == engine.compute_positions(_chain())

    def test_empty_graph(self) -> None:
        """Test an empty graph lays out to nothing."""
        assert LayeredLayoutEngine().compute_positions(CompanyGraph()) == {}

    def test_layout_returns_positioned_copy(self) -> None:
        """Test layout leaves the input graph without positions."""
        graph = _chain()
        laid_out = LayeredLayoutEngine().layout(graph)
        assert all(node.position is not None for node in laid_out)
        assert all(node.position is None for node in graph)

    def test_unknown_direction(self) -> None:
        """Test an unknown direction is rejected."""
        with pytest.raises(ConfigurationError):
            LayeredLayoutEngine().compute_positions(_chain(), "BT")


class TestMinimumSpan:
    """Tests for per-edge rank spans."""

    def test_spans(self) -> None:
        """Test correspondence edges span one rank and others three."""
        assert minimum_span(make_edge("o", "a", RelationKind.CORRESPONDENCE_ADDRESS)) == 1
        assert minimum_span(make_edge("c", "o", RelationKind.OFFICER_ROLE)) == 3
        assert minimum_span(make_edge("c", "a", RelationKind.REGISTERED_OFFICE)) == 3
