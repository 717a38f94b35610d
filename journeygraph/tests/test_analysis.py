"""Tests for journey statistics and the integrity report."""

from journeygraph.analysis import (
    DanglingReference,
    find_dangling_references,
    journey_summary,
    summary_to_dict,
)
from journeygraph.models import (
    Edge,
    Function,
    FunctionConfig,
    FunctionHeader,
    FunctionType,
    HeaderKind,
    Journey,
    Node,
    NodeFunctionMapping,
    NodeType,
    Property,
    PropertyType,
)


def _journey() -> Journey:
    return Journey(
        id="j1",
        name="Signup",
        properties=[Property(id="p1", key="email", type=PropertyType.STRING)],
        nodes=[
            Node(id="s", name="Start", type=NodeType.start),
            Node(id="a", name="A", type=NodeType.custom, properties=["p1", "lost"]),
        ],
        functions=[Function(
            id="f",
            name="Send",
            type=FunctionType.API,
            config=FunctionConfig(
                headers=[
                    FunctionHeader(key="X-Email", kind=HeaderKind.property, value="p1"),
                    FunctionHeader(key="X-Phone", kind=HeaderKind.property, value="p9"),
                    FunctionHeader(key="X-Static", value="literal"),
                ],
                request_body={"to": "p1"},
            ),
        )],
        mappings=[NodeFunctionMapping(id="m", name="m", node_id="ghost", function_id="f")],
        edges=[Edge(id="e", from_node_id="s", to_node_id="b")],
    )


def test_summary_counts():
    summary = journey_summary(_journey())
    assert (summary.property_count, summary.node_count, summary.function_count) == (1, 2, 1)
    assert (summary.mapping_count, summary.edge_count) == (1, 1)


def test_summary_to_dict():
    journey = _journey()
    data = summary_to_dict(journey_summary(journey))

    assert data["id"] == "j1"
    assert data["isActive"] is False
    assert data["updatedAt"] == journey.updated_at.isoformat()
    assert data["counts"] == {
        "properties": 1,
        "nodes": 2,
        "functions": 1,
        "mappings": 1,
        "edges": 1,
    }


def test_dangling_references_in_fixed_order():
    assert find_dangling_references(_journey()) == [
        DanglingReference("node", "a", "properties", "lost"),
        DanglingReference("edge", "e", "toNodeId", "b"),
        DanglingReference("mapping", "m", "nodeId", "ghost"),
        DanglingReference("function", "f", "config", "p9"),
    ]


def test_consistent_journey_has_no_dangling_references():
    journey = Journey(
        nodes=[Node(id="s", name="Start", type=NodeType.start)],
        edges=[Edge(id="e", from_node_id="s", to_node_id="s")],
    )
    assert find_dangling_references(journey) == []
