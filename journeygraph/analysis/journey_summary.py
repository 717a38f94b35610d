"""Per-journey statistics for catalog listings."""

from dataclasses import dataclass
from datetime import datetime

from journeygraph.models.journey import Journey


@dataclass
class JourneySummary:
    """Headline numbers of one journey."""

    journey_id: str
    name: str
    description: str
    is_active: bool
    created_at: datetime
    updated_at: datetime
    property_count: int = 0
    node_count: int = 0
    function_count: int = 0
    mapping_count: int = 0
    edge_count: int = 0


def journey_summary(journey: Journey) -> JourneySummary:
    return JourneySummary(
        journey_id=journey.id,
        name=journey.name,
        description=journey.description,
        is_active=journey.is_active,
        created_at=journey.created_at,
        updated_at=journey.updated_at,
        property_count=len(journey.properties),
        node_count=len(journey.nodes),
        function_count=len(journey.functions),
        mapping_count=len(journey.mappings),
        edge_count=len(journey.edges),
    )


def summary_to_dict(summary: JourneySummary) -> dict:
    """Convert a JourneySummary to a JSON-serializable dict (wire names)."""
    return {
        "id": summary.journey_id,
        "name": summary.name,
        "description": summary.description,
        "isActive": summary.is_active,
        "createdAt": summary.created_at.isoformat(),
        "updatedAt": summary.updated_at.isoformat(),
        "counts": {
            "properties": summary.property_count,
            "nodes": summary.node_count,
            "functions": summary.function_count,
            "mappings": summary.mapping_count,
            "edges": summary.edge_count,
        },
    }
