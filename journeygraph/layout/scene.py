"""Derive the drawable scene (nodes, edges, overlays) from a journey snapshot."""

from dataclasses import dataclass

from journeygraph.layout.grid import (
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_CANVAS_WIDTH,
    PositionedNode,
    compute_positions,
    position_index,
)
from journeygraph.models.edge import Edge
from journeygraph.models.journey import Journey
from journeygraph.models.node import Node, NodeType

UNKNOWN_LABEL = "Unknown"

NODE_COLORS = {
    NodeType.start: "#10B981",
    NodeType.end: "#EF4444",
    NodeType.dead_end: "#EF4444",
    NodeType.custom: "#3B82F6",
    NodeType.loader: "#F59E0B",
}
FALLBACK_NODE_COLOR = "#6B7280"


@dataclass(frozen=True)
class DrawnEdge:
    """An edge that passed the visibility filter, with its endpoints placed."""

    edge: Edge
    source: PositionedNode
    target: PositionedNode
    label: str | None = None  # the guard condition, drawn at the midpoint

    @property
    def midpoint(self) -> tuple[float, float]:
        return (self.source.x + self.target.x) / 2, (self.source.y + self.target.y) / 2


@dataclass(frozen=True)
class SceneNode:
    """A placed node with its overlays."""

    position: PositionedNode
    color: str
    selected: bool = False
    property_count: int = 0  # badge shown when > 0
    function_label: str | None = None  # badge shown when a mapping targets the node

    @property
    def has_function(self) -> bool:
        return self.function_label is not None


@dataclass(frozen=True)
class GraphScene:
    """Everything a drawing surface needs to render one journey."""

    width: float
    height: float
    nodes: tuple[SceneNode, ...]
    edges: tuple[DrawnEdge, ...]
    selected_node_id: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.nodes


def node_color(node: Node) -> str:
    return NODE_COLORS.get(node.type, FALLBACK_NODE_COLOR)


def is_drawable_source(node: Node | None) -> bool:
    """Dead-end nodes are terminal sinks: none of their outgoing edges are drawn."""
    return node is not None and node.type != NodeType.dead_end


def visible_edges(journey: Journey, positioned: list[PositionedNode]) -> list[DrawnEdge]:
    """Edges to draw, in collection order.

    Edges out of dead-end nodes are filtered; edges whose endpoints are not
    among the positioned nodes are skipped without complaint.
    """
    by_id = position_index(positioned)
    drawn: list[DrawnEdge] = []

    for edge in journey.edges:
        source = by_id.get(edge.from_node_id)
        target = by_id.get(edge.to_node_id)
        if source is None or target is None:
            continue
        if not is_drawable_source(source.node):
            continue
        drawn.append(DrawnEdge(
            edge=edge,
            source=source,
            target=target,
            label=edge.validation_condition or None,
        ))

    return drawn


def function_label(journey: Journey, node_id: str) -> str | None:
    """Name of the function reached through the first mapping on the node.

    None when no mapping targets the node; UNKNOWN_LABEL when the mapping
    points at a function that no longer exists.
    """
    mapping = next((m for m in journey.mappings if m.node_id == node_id), None)
    if mapping is None:
        return None
    func = journey.find_function(mapping.function_id)
    return func.name if func else UNKNOWN_LABEL


def build_scene(
    journey: Journey,
    width: float = DEFAULT_CANVAS_WIDTH,
    height: float = DEFAULT_CANVAS_HEIGHT,
    selected_node_id: str | None = None,
) -> GraphScene:
    """Full, synchronous recompute of positions, visible edges and overlays."""
    positioned = compute_positions(journey.nodes, width, height)

    nodes = tuple(
        SceneNode(
            position=item,
            color=node_color(item.node),
            selected=selected_node_id is not None and item.node_id == selected_node_id,
            property_count=len(item.node.properties),
            function_label=function_label(journey, item.node_id),
        )
        for item in positioned
    )

    return GraphScene(
        width=width,
        height=height,
        nodes=nodes,
        edges=tuple(visible_edges(journey, positioned)),
        selected_node_id=selected_node_id,
    )


def scene_to_dict(scene: GraphScene) -> dict:
    """JSON-serializable view of a scene, for the HTTP layer."""
    return {
        "width": scene.width,
        "height": scene.height,
        "selectedNodeId": scene.selected_node_id,
        "nodes": [
            {
                "id": item.position.node_id,
                "index": item.position.index,
                "name": item.position.node.name,
                "type": item.position.node.type.value,
                "x": item.position.x,
                "y": item.position.y,
                "manual": item.position.manual,
                "color": item.color,
                "selected": item.selected,
                "propertyCount": item.property_count,
                "functionLabel": item.function_label,
            }
            for item in scene.nodes
        ],
        "edges": [
            {
                "id": drawn.edge.id,
                "fromNodeId": drawn.edge.from_node_id,
                "toNodeId": drawn.edge.to_node_id,
                "x1": drawn.source.x,
                "y1": drawn.source.y,
                "x2": drawn.target.x,
                "y2": drawn.target.y,
                "label": drawn.label,
                "isDefault": drawn.edge.is_default,
            }
            for drawn in scene.edges
        ],
    }
