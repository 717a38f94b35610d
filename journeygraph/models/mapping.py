"""Node-to-function binding model."""

from pydantic import Field

from journeygraph.models.base import EntityCreate, JourneyInput, JourneyModel
from journeygraph.utils.identifiers import UNASSIGNED_ID


class NodeFunctionMapping(JourneyModel):
    """Binds exactly one node to exactly one function, optionally guarded."""

    id: str = UNASSIGNED_ID
    name: str
    description: str = ""
    node_id: str = Field(alias="nodeId")
    function_id: str = Field(alias="functionId")
    condition: str = ""


class MappingCreate(EntityCreate):
    """Request model for adding a mapping."""

    entity_type = NodeFunctionMapping

    name: str
    description: str = ""
    node_id: str = Field(alias="nodeId")
    function_id: str = Field(alias="functionId")
    condition: str = ""


class MappingUpdate(JourneyInput):
    name: str | None = None
    description: str | None = None
    node_id: str | None = Field(default=None, alias="nodeId")
    function_id: str | None = Field(default=None, alias="functionId")
    condition: str | None = None
