"""
Tests for seed graph assembly.
"""

import copy
from typing import Any

from company_map.graph.assembler import GraphAssembler
from company_map.graph.model import CompanyGraph
from company_map.graph.records import CompanyRecord, OfficerRecord, PscRecord
from company_map.graph.schema import EdgeStyle, NodeKind, RelationKind


def _assemble(
    profile: dict[str, Any], officers: list[dict[str, Any]], pscs: list[dict[str, Any]]
) -> CompanyGraph:
    return GraphAssembler().assemble(
        CompanyRecord.from_api(profile),
        [OfficerRecord.from_api(o) for o in officers],
        [PscRecord.from_api(p) for p in pscs],
    )


class TestGraphAssembler:
    """Tests for GraphAssembler.assemble."""

    def test_seed_graph(
        self,
        company_profile: dict[str, Any],
        officer_jane: dict[str, Any],
        psc_smith: dict[str, Any],
    ) -> None:
        """Test the root company, its officer, PSC and registered office."""
        graph = _assemble(company_profile, [officer_jane], [psc_smith])

        assert list(graph.nodes) == ["00000006", "officer-abc", "psc-0", "address-1"]
        assert set(graph.edges) == {
            "e-00000006-officer-abc",
            "e-00000006-psc-0",
            "e-00000006-address-1",
        }
        assert graph.edges["e-00000006-officer-abc"].label == "director"
        assert graph.edges["e-00000006-address-1"].relation == RelationKind.REGISTERED_OFFICE
        assert graph.nodes["address-1"].label == "1 High Street, London, EC1A 1AA, United Kingdom"
        assert graph.nodes["address-1"].role == "Registered Address"

    def test_company_without_address(self, company_profile: dict[str, Any]) -> None:
        """Test no registered-office node is created for an address-less company."""
        del company_profile["registered_office_address"]
        graph = _assemble(company_profile, [], [])
        assert list(graph.nodes) == ["00000006"]
        assert graph.edges == {}

    def test_duplicate_officers_collapse(
        self, company_profile: dict[str, Any], officer_jane: dict[str, Any]
    ) -> None:
        """Test officers with the same registry id become one node."""
        graph = _assemble(company_profile, [officer_jane, copy.deepcopy(officer_jane)], [])
        assert len(graph.nodes_of_kind(NodeKind.OFFICER)) == 1

    def test_officer_at_registered_office_reuses_node(
        self,
        company_profile: dict[str, Any],
        officer_jane: dict[str, Any],
        address_a: dict[str, Any],
    ) -> None:
        """Test an officer address equal to the company address links to address-1."""
        officer_jane["address"] = address_a
        graph = _assemble(company_profile, [officer_jane], [])

        assert len(graph.nodes_of_kind(NodeKind.ADDRESS)) == 1
        edge = graph.edges["e-officer-abc-address-1"]
        assert edge.relation == RelationKind.CORRESPONDENCE_ADDRESS
        assert edge.style == EdgeStyle.DASHED

    def test_shared_correspondence_address(
        self, company_profile: dict[str, Any], address_b: dict[str, Any]
    ) -> None:
        """Test officers sharing an address share one address node."""
        officers = [
            {"name": "ONE, First", "officer_role": "director", "address": dict(address_b)},
            {"name": "TWO, Second", "officer_role": "secretary", "address": dict(address_b)},
        ]
        graph = _assemble(company_profile, officers, [])

        shared = graph.find_address_node("22 Mill Lane, Unit 3, Leeds, LS1 4AB")
        assert shared is not None
        assert shared.id != "address-1"
        assert shared.role == "Correspondence Address"
        assert len(graph.nodes_of_kind(NodeKind.ADDRESS)) == 2
        assert graph.has_edge(f"e-officer-00000006-0-{shared.id}")
        assert graph.has_edge(f"e-officer-00000006-1-{shared.id}")

    def test_every_edge_has_both_endpoints(
        self,
        company_profile: dict[str, Any],
        officer_jane: dict[str, Any],
        psc_smith: dict[str, Any],
        address_b: dict[str, Any],
    ) -> None:
        """Test the assembled graph is closed over its edges."""
        officer_jane["address"] = address_b
        graph = _assemble(company_profile, [officer_jane], [psc_smith, psc_smith])
        for edge in graph.edges.values():
            assert edge.source in graph.nodes
            assert edge.target in graph.nodes
        assert [n.id for n in graph.nodes_of_kind(NodeKind.PSC)] == ["psc-0", "psc-1"]

    def test_assembly_is_repeatable(
        self,
        company_profile: dict[str, Any],
        officer_jane: dict[str, Any],
        psc_smith: dict[str, Any],
        address_b: dict[str, Any],
    ) -> None:
        """Test identical inputs assemble to identical nodes and edges."""
        officer_jane["address"] = address_b
        first = _assemble(company_profile, [officer_jane], [psc_smith])
        second = _assemble(company_profile, [officer_jane], [psc_smith])
        assert first.nodes == second.nodes
        assert first.edges == second.edges
