"""Node models: the steps of a journey."""

from enum import Enum

from pydantic import Field, field_validator

from journeygraph.models.base import EntityCreate, JourneyInput, JourneyModel
from journeygraph.utils.identifiers import UNASSIGNED_ID


class NodeType(str, Enum):
    """Kinds of journey steps."""

    start = "start"
    end = "end"
    dead_end = "dead_end"  # terminal sink, outgoing edges are never drawn
    custom = "custom"
    loader = "loader"


def _dedupe(ids: list[str] | None) -> list[str] | None:
    if ids is None:
        return None
    return list(dict.fromkeys(ids))


class Node(JourneyModel):
    """A step in the journey.

    `properties` is an ordered set of Property ids. `x`/`y` hold a manual
    placement recorded by the editor; when absent the grid layout decides.
    """

    id: str = UNASSIGNED_ID
    name: str
    type: NodeType
    description: str = ""
    properties: list[str] = Field(default_factory=list)
    x: float | None = None
    y: float | None = None

    @field_validator("properties")
    @classmethod
    def dedupe_properties(cls, value: list[str] | None) -> list[str] | None:
        return _dedupe(value)


class NodeCreate(EntityCreate):
    """Request model for adding a node."""

    entity_type = Node

    name: str
    type: NodeType
    description: str = ""
    properties: list[str] = Field(default_factory=list)
    x: float | None = None
    y: float | None = None

    @field_validator("properties")
    @classmethod
    def dedupe_properties(cls, value: list[str] | None) -> list[str] | None:
        return _dedupe(value)


class NodeUpdate(JourneyInput):
    """Request model for updating a node in place."""

    name: str | None = None
    type: NodeType | None = None
    description: str | None = None
    properties: list[str] | None = None
    x: float | None = None
    y: float | None = None

    @field_validator("properties")
    @classmethod
    def dedupe_properties(cls, value: list[str] | None) -> list[str] | None:
        return _dedupe(value)
