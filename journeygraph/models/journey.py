"""Journey model: one complete authored graph plus its metadata."""

from datetime import datetime

from pydantic import Field

from journeygraph.models.base import JourneyInput, JourneyModel
from journeygraph.models.edge import Edge
from journeygraph.models.function import Function
from journeygraph.models.mapping import NodeFunctionMapping
from journeygraph.models.node import Node, NodeType
from journeygraph.models.property import Property
from journeygraph.utils.identifiers import UNASSIGNED_ID, utc_now


class Journey(JourneyModel):
    """The five entity collections of one journey, owned by value."""

    id: str = UNASSIGNED_ID
    name: str = ""
    description: str = ""
    properties: list[Property] = Field(default_factory=list)
    nodes: list[Node] = Field(default_factory=list)
    functions: list[Function] = Field(default_factory=list)
    mappings: list[NodeFunctionMapping] = Field(default_factory=list)
    edges: list[Edge] = Field(default_factory=list)
    is_active: bool = Field(default=False, alias="isActive")
    created_at: datetime = Field(default_factory=utc_now, alias="createdAt")
    updated_at: datetime = Field(default_factory=utc_now, alias="updatedAt")

    def start_node(self) -> Node | None:
        """The first node of type start, in collection order."""
        for node in self.nodes:
            if node.type == NodeType.start:
                return node
        return None

    def find_node(self, node_id: str) -> Node | None:
        return next((n for n in self.nodes if n.id == node_id), None)

    def find_property(self, property_id: str) -> Property | None:
        return next((p for p in self.properties if p.id == property_id), None)

    def find_function(self, function_id: str) -> Function | None:
        return next((f for f in self.functions if f.id == function_id), None)

    def default_edges(self) -> list[Edge]:
        return [e for e in self.edges if e.is_default]


class JourneyUpdate(JourneyInput):
    """Partial journey for shallow merges (metadata edits, re-hydration).

    Has no `updated_at`: every merge refreshes it.
    """

    id: str | None = None
    name: str | None = None
    description: str | None = None
    properties: list[Property] | None = None
    nodes: list[Node] | None = None
    functions: list[Function] | None = None
    mappings: list[NodeFunctionMapping] | None = None
    edges: list[Edge] | None = None
    is_active: bool | None = Field(default=None, alias="isActive")
    created_at: datetime | None = Field(default=None, alias="createdAt")
