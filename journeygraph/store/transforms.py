"""Pure snapshot transforms behind every JourneyStore mutation.

Each function takes the current Journey and returns the next one. When
the target id cannot be located the input object itself is returned, so
callers can detect a no-op with an identity check. Timestamps are left
alone here; the store refreshes `updated_at` after a real change.

Cascades run in a fixed order: remove the entity, then filter its
dependents.
"""

import logging
from typing import Callable, TypeVar

from journeygraph.models.base import JourneyModel, merge_model, settable_changes
from journeygraph.models.edge import Edge, EdgeCreate, EdgeUpdate
from journeygraph.models.function import Function, FunctionCreate, FunctionUpdate
from journeygraph.models.journey import Journey, JourneyUpdate
from journeygraph.models.mapping import MappingCreate, MappingUpdate, NodeFunctionMapping
from journeygraph.models.node import Node, NodeCreate, NodeType, NodeUpdate
from journeygraph.models.property import Property, PropertyCreate, PropertyUpdate
from journeygraph.utils.identifiers import UNASSIGNED_ID, is_unassigned

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=JourneyModel)


# --- collection helpers ---


def _replace_matching(
    items: list[E],
    entity_id: str,
    apply: Callable[[E], E],
) -> list[E] | None:
    """Apply `apply` to every item with `entity_id`; None when nothing matched.

    Unassigned ids are never matched: several entities may share the
    placeholder, so it identifies none of them.
    """
    if is_unassigned(entity_id):
        return None
    matched = False
    result: list[E] = []
    for item in items:
        if item.id == entity_id:
            matched = True
            result.append(apply(item))
        else:
            result.append(item)
    return result if matched else None


def _without(items: list[E], entity_id: str) -> list[E] | None:
    if is_unassigned(entity_id):
        return None
    kept = [item for item in items if item.id != entity_id]
    return kept if len(kept) != len(items) else None


def _with_collections(journey: Journey, **collections) -> Journey:
    return journey.model_copy(update=collections)


# --- journey ---


def create_empty() -> Journey:
    """A journey with empty collections, inactive, id unassigned."""
    return Journey()


def merge_journey(journey: Journey, update: JourneyUpdate) -> Journey:
    """Shallow-merge the explicitly set fields of `update`.

    An explicit None is skipped: every Journey field is required.
    """
    changes = settable_changes(Journey, {
        field: getattr(update, field)
        for field in update.model_fields_set
    })
    if not changes:
        return journey
    return journey.model_copy(update=changes)


def toggle_active(journey: Journey) -> Journey:
    return journey.model_copy(update={"is_active": not journey.is_active})


def seed_start_end(
    journey: Journey,
    start_id: str = UNASSIGNED_ID,
    end_id: str = UNASSIGNED_ID,
    default_edge_id: str = UNASSIGNED_ID,
) -> Journey:
    """Append a Start node, an End node and the default edge between them."""
    start = Node(id=start_id, name="Start", type=NodeType.start)
    end = Node(id=end_id, name="End", type=NodeType.end)
    edge = Edge(
        id=default_edge_id,
        from_node_id=start.id,
        to_node_id=end.id,
        is_default=True,
    )
    return _with_collections(
        journey,
        nodes=[*journey.nodes, start, end],
        edges=[*journey.edges, edge],
    )


# --- properties ---


def add_property(journey: Journey, data: PropertyCreate, entity_id: str = UNASSIGNED_ID) -> Journey:
    prop: Property = data.build(entity_id)
    return _with_collections(journey, properties=[*journey.properties, prop])


def update_property(journey: Journey, property_id: str, update: PropertyUpdate) -> Journey:
    properties = _replace_matching(
        journey.properties, property_id, lambda p: merge_model(p, update)
    )
    if properties is None:
        return journey
    return _with_collections(journey, properties=properties)


def delete_property(journey: Journey, property_id: str) -> Journey:
    """Remove the property and strip its id from every node."""
    properties = _without(journey.properties, property_id)
    if properties is None:
        return journey

    nodes = [
        node.model_copy(update={"properties": [p for p in node.properties if p != property_id]})
        if property_id in node.properties
        else node
        for node in journey.nodes
    ]
    logger.debug("Deleted property %s; stripped from %d node(s)",
                 property_id, sum(a is not b for a, b in zip(nodes, journey.nodes)))
    return _with_collections(journey, properties=properties, nodes=nodes)


# --- nodes ---


def add_node(journey: Journey, data: NodeCreate, entity_id: str = UNASSIGNED_ID) -> Journey:
    node: Node = data.build(entity_id)
    return _with_collections(journey, nodes=[*journey.nodes, node])


def update_node(journey: Journey, node_id: str, update: NodeUpdate) -> Journey:
    """Update a node in place.

    A type change can move the start node; the default edge is then
    retired if the new start already has a custom outgoing edge.
    """
    nodes = _replace_matching(journey.nodes, node_id, lambda n: merge_model(n, update))
    if nodes is None:
        return journey
    updated = _with_collections(journey, nodes=nodes)

    if update.type is not None and _has_custom_start_edge(updated, updated.edges):
        edges = [e for e in updated.edges if not e.is_default]
        if len(edges) != len(updated.edges):
            logger.debug("Node %s type change: removed default edge(s)", node_id)
            updated = _with_collections(updated, edges=edges)
    return updated


def delete_node(journey: Journey, node_id: str) -> Journey:
    """Remove the node, every edge touching it and every mapping on it."""
    nodes = _without(journey.nodes, node_id)
    if nodes is None:
        return journey

    edges = [e for e in journey.edges if e.from_node_id != node_id and e.to_node_id != node_id]
    mappings = [m for m in journey.mappings if m.node_id != node_id]
    logger.debug(
        "Deleted node %s; cascaded %d edge(s), %d mapping(s)",
        node_id,
        len(journey.edges) - len(edges),
        len(journey.mappings) - len(mappings),
    )
    return _with_collections(journey, nodes=nodes, edges=edges, mappings=mappings)


# --- functions ---


def add_function(journey: Journey, data: FunctionCreate, entity_id: str = UNASSIGNED_ID) -> Journey:
    func: Function = data.build(entity_id)
    return _with_collections(journey, functions=[*journey.functions, func])


def update_function(journey: Journey, function_id: str, update: FunctionUpdate) -> Journey:
    functions = _replace_matching(
        journey.functions, function_id, lambda f: merge_model(f, update)
    )
    if functions is None:
        return journey
    return _with_collections(journey, functions=functions)


def delete_function(journey: Journey, function_id: str) -> Journey:
    """Remove the function and every mapping that references it."""
    functions = _without(journey.functions, function_id)
    if functions is None:
        return journey

    mappings = [m for m in journey.mappings if m.function_id != function_id]
    logger.debug(
        "Deleted function %s; cascaded %d mapping(s)",
        function_id,
        len(journey.mappings) - len(mappings),
    )
    return _with_collections(journey, functions=functions, mappings=mappings)


# --- mappings ---


def add_mapping(journey: Journey, data: MappingCreate, entity_id: str = UNASSIGNED_ID) -> Journey:
    mapping: NodeFunctionMapping = data.build(entity_id)
    return _with_collections(journey, mappings=[*journey.mappings, mapping])


def update_mapping(journey: Journey, mapping_id: str, update: MappingUpdate) -> Journey:
    mappings = _replace_matching(
        journey.mappings, mapping_id, lambda m: merge_model(m, update)
    )
    if mappings is None:
        return journey
    return _with_collections(journey, mappings=mappings)


def delete_mapping(journey: Journey, mapping_id: str) -> Journey:
    mappings = _without(journey.mappings, mapping_id)
    if mappings is None:
        return journey
    return _with_collections(journey, mappings=mappings)


# --- edges ---


def _leaves_start(journey: Journey, edge: Edge) -> bool:
    start = journey.start_node()
    return start is not None and edge.from_node_id == start.id


def _has_custom_start_edge(journey: Journey, edges: list[Edge]) -> bool:
    start = journey.start_node()
    if start is None:
        return False
    return any(e.from_node_id == start.id and not e.is_default for e in edges)


def add_edge(journey: Journey, data: EdgeCreate, entity_id: str = UNASSIGNED_ID) -> Journey:
    """Append an edge, keeping at most one default edge.

    A custom edge leaving the start node retires the default edge. A new
    default edge replaces the old one, and is refused once the start node
    already has a custom outgoing edge.
    """
    edge: Edge = data.build(entity_id)
    edges = list(journey.edges)

    if edge.is_default:
        if _has_custom_start_edge(journey, edges):
            logger.debug("Refused default edge: start node already has a custom edge")
            return journey
        edges = [e for e in edges if not e.is_default]
    elif _leaves_start(journey, edge):
        retired = [e for e in edges if e.is_default]
        if retired:
            logger.debug("Custom start edge added; removed %d default edge(s)", len(retired))
        edges = [e for e in edges if not e.is_default]

    return _with_collections(journey, edges=[*edges, edge])


def update_edge(journey: Journey, edge_id: str, update: EdgeUpdate) -> Journey:
    """Update an edge in place under the same default-edge rules as add_edge."""
    edges = _replace_matching(journey.edges, edge_id, lambda e: merge_model(e, update))
    if edges is None:
        return journey

    updated = [e for e in edges if e.id == edge_id]
    if any(e.is_default for e in updated):
        others = [e for e in edges if e.id != edge_id]
        if _has_custom_start_edge(journey, others):
            logger.debug("Refused edge %s becoming default: start has a custom edge", edge_id)
            return journey
        edges = [e for e in edges if e.id == edge_id or not e.is_default]
    elif any(_leaves_start(journey, e) for e in updated):
        edges = [e for e in edges if not e.is_default]

    return _with_collections(journey, edges=edges)


def delete_edge(journey: Journey, edge_id: str) -> Journey:
    edges = _without(journey.edges, edge_id)
    if edges is None:
        return journey
    return _with_collections(journey, edges=edges)


# --- integrity ---


def prune_dangling(journey: Journey) -> Journey:
    """Drop references that no longer resolve.

    Strips unknown property ids from nodes, and removes edges whose
    endpoints and mappings whose node or function are missing.
    """
    property_ids = {p.id for p in journey.properties}
    node_ids = {n.id for n in journey.nodes}
    function_ids = {f.id for f in journey.functions}

    nodes = [
        node.model_copy(update={"properties": [p for p in node.properties if p in property_ids]})
        if any(p not in property_ids for p in node.properties)
        else node
        for node in journey.nodes
    ]
    edges = [
        e for e in journey.edges
        if e.from_node_id in node_ids and e.to_node_id in node_ids
    ]
    mappings = [
        m for m in journey.mappings
        if m.node_id in node_ids and m.function_id in function_ids
    ]

    changed = (
        any(a is not b for a, b in zip(nodes, journey.nodes))
        or len(edges) != len(journey.edges)
        or len(mappings) != len(journey.mappings)
    )
    if not changed:
        return journey
    return _with_collections(journey, nodes=nodes, edges=edges, mappings=mappings)
