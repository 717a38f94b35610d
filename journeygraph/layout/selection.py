"""Single-node selection and the detail panel it drives.

Details are always resolved from the snapshot passed in, never cached,
and tolerate dangling ids: an unresolved property or function is left
out, an unresolved peer node is reported by name as "Unknown".
"""

from dataclasses import dataclass, field

from journeygraph.layout.scene import UNKNOWN_LABEL
from journeygraph.models.edge import Edge
from journeygraph.models.function import Function
from journeygraph.models.journey import Journey
from journeygraph.models.mapping import NodeFunctionMapping
from journeygraph.models.node import Node
from journeygraph.models.property import Property


class SelectionState:
    """Tracks at most one selected node id."""

    def __init__(self) -> None:
        self.selected_id: str | None = None

    def toggle(self, node_id: str) -> str | None:
        """Select `node_id`, or deselect it when it is already selected."""
        self.selected_id = None if self.selected_id == node_id else node_id
        return self.selected_id

    def clear(self) -> None:
        self.selected_id = None

    def is_selected(self, node_id: str) -> bool:
        return self.selected_id is not None and self.selected_id == node_id


@dataclass(frozen=True)
class MappedFunction:
    """A mapping on the node together with the function it resolves to."""

    mapping: NodeFunctionMapping
    function: Function


@dataclass(frozen=True)
class ConnectedEdge:
    """An incoming or outgoing edge with the name of the node at its other end."""

    edge: Edge
    peer_name: str


@dataclass
class NodeDetails:
    node: Node
    properties: list[Property] = field(default_factory=list)
    functions: list[MappedFunction] = field(default_factory=list)
    incoming: list[ConnectedEdge] = field(default_factory=list)
    outgoing: list[ConnectedEdge] = field(default_factory=list)

    @property
    def has_connections(self) -> bool:
        return bool(self.incoming or self.outgoing)


def resolve_properties(journey: Journey, node: Node) -> list[Property]:
    """The node's properties in list order, dropping ids that do not resolve."""
    resolved = []
    for property_id in node.properties:
        prop = journey.find_property(property_id)
        if prop is not None:
            resolved.append(prop)
    return resolved


def resolve_functions(journey: Journey, node_id: str) -> list[MappedFunction]:
    """Functions mapped onto the node, in mapping collection order."""
    resolved = []
    for mapping in journey.mappings:
        if mapping.node_id != node_id:
            continue
        func = journey.find_function(mapping.function_id)
        if func is not None:
            resolved.append(MappedFunction(mapping=mapping, function=func))
    return resolved


def _peer_name(journey: Journey, node_id: str) -> str:
    peer = journey.find_node(node_id)
    return peer.name if peer else UNKNOWN_LABEL


def resolve_edges(journey: Journey, node_id: str) -> tuple[list[ConnectedEdge], list[ConnectedEdge]]:
    """(incoming, outgoing) edges of the node, from two independent scans."""
    incoming = [
        ConnectedEdge(edge=e, peer_name=_peer_name(journey, e.from_node_id))
        for e in journey.edges
        if e.to_node_id == node_id
    ]
    outgoing = [
        ConnectedEdge(edge=e, peer_name=_peer_name(journey, e.to_node_id))
        for e in journey.edges
        if e.from_node_id == node_id
    ]
    return incoming, outgoing


def resolve_node_details(journey: Journey, node_id: str | None) -> NodeDetails | None:
    """Details for the selected node, or None if nothing (resolvable) is selected."""
    if node_id is None:
        return None
    node = journey.find_node(node_id)
    if node is None:
        return None

    incoming, outgoing = resolve_edges(journey, node.id)
    return NodeDetails(
        node=node,
        properties=resolve_properties(journey, node),
        functions=resolve_functions(journey, node.id),
        incoming=incoming,
        outgoing=outgoing,
    )


def details_to_dict(details: NodeDetails) -> dict:
    """JSON-serializable view of the detail panel."""
    return {
        "node": details.node.model_dump(mode="json", by_alias=True),
        "properties": [p.model_dump(mode="json", by_alias=True) for p in details.properties],
        "functions": [
            {
                "mapping": mf.mapping.model_dump(mode="json", by_alias=True),
                "function": mf.function.model_dump(mode="json", by_alias=True),
            }
            for mf in details.functions
        ],
        "incoming": [
            {"edge": c.edge.model_dump(mode="json", by_alias=True), "peerName": c.peer_name}
            for c in details.incoming
        ],
        "outgoing": [
            {"edge": c.edge.model_dump(mode="json", by_alias=True), "peerName": c.peer_name}
            for c in details.outgoing
        ],
    }
