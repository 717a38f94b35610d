"""Report references in a journey that no longer resolve.

A snapshot edited out of band (or re-hydrated from an older store) can
carry ids pointing at deleted entities. The store's cascades never leave
such references behind, so anything reported here came from outside.
"""

from dataclasses import dataclass

from journeygraph.models.journey import Journey


@dataclass(frozen=True)
class DanglingReference:
    """One unresolved id."""

    owner_kind: str  # "node", "edge", "mapping", "function"
    owner_id: str
    field: str
    missing_id: str


def find_dangling_references(journey: Journey) -> list[DanglingReference]:
    """All unresolved references, grouped by owner collection in a fixed order."""
    property_ids = {p.id for p in journey.properties}
    node_ids = {n.id for n in journey.nodes}
    function_ids = {f.id for f in journey.functions}

    found: list[DanglingReference] = []

    for node in journey.nodes:
        for property_id in node.properties:
            if property_id not in property_ids:
                found.append(DanglingReference("node", node.id, "properties", property_id))

    for edge in journey.edges:
        if edge.from_node_id not in node_ids:
            found.append(DanglingReference("edge", edge.id, "fromNodeId", edge.from_node_id))
        if edge.to_node_id not in node_ids:
            found.append(DanglingReference("edge", edge.id, "toNodeId", edge.to_node_id))

    for mapping in journey.mappings:
        if mapping.node_id not in node_ids:
            found.append(DanglingReference("mapping", mapping.id, "nodeId", mapping.node_id))
        if mapping.function_id not in function_ids:
            found.append(
                DanglingReference("mapping", mapping.id, "functionId", mapping.function_id)
            )

    # header/body bindings are reported only; the store does not cascade into them
    for func in journey.functions:
        for property_id in func.config.property_references():
            if property_id not in property_ids:
                found.append(DanglingReference("function", func.id, "config", property_id))

    return found
