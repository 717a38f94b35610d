"""Edge models: directed transitions between nodes."""

from pydantic import Field

from journeygraph.models.base import EntityCreate, JourneyInput, JourneyModel
from journeygraph.utils.identifiers import UNASSIGNED_ID


class Edge(JourneyModel):
    """A directed transition, optionally guarded by a condition.

    `is_default` marks the synthetic Start -> End edge a new journey is
    seeded with.
    """

    id: str = UNASSIGNED_ID
    from_node_id: str = Field(alias="fromNodeId")
    to_node_id: str = Field(alias="toNodeId")
    validation_condition: str = Field(default="", alias="validationCondition")
    is_default: bool = Field(default=False, alias="isDefault")


class EdgeCreate(EntityCreate):
    """Request model for adding an edge."""

    entity_type = Edge

    from_node_id: str = Field(alias="fromNodeId")
    to_node_id: str = Field(alias="toNodeId")
    validation_condition: str = Field(default="", alias="validationCondition")
    is_default: bool = Field(default=False, alias="isDefault")


class EdgeUpdate(JourneyInput):
    from_node_id: str | None = Field(default=None, alias="fromNodeId")
    to_node_id: str | None = Field(default=None, alias="toNodeId")
    validation_condition: str | None = Field(default=None, alias="validationCondition")
    is_default: bool | None = Field(default=None, alias="isDefault")
