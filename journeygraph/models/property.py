"""Property models: typed data fields that flow through a journey."""

from enum import Enum

from pydantic import Field

from journeygraph.models.base import EntityCreate, JourneyInput, JourneyModel
from journeygraph.utils.identifiers import UNASSIGNED_ID


class PropertyType(str, Enum):
    """Value types a property can hold."""

    STRING = "STRING"
    NUMBER = "NUMBER"
    BOOLEAN = "BOOLEAN"
    DATE = "DATE"
    TIMESTAMP = "TIMESTAMP"
    RANGE = "RANGE"
    LIST = "LIST"
    MAP = "MAP"


class Property(JourneyModel):
    """A typed, named data field available to nodes and functions."""

    id: str = UNASSIGNED_ID
    key: str
    type: PropertyType
    validation_condition: str | None = Field(default=None, alias="validationCondition")


class PropertyCreate(EntityCreate):
    """Request model for adding a property."""

    entity_type = Property

    key: str
    type: PropertyType
    validation_condition: str | None = Field(default=None, alias="validationCondition")


class PropertyUpdate(JourneyInput):
    """Request model for updating a property in place."""

    key: str | None = None
    type: PropertyType | None = None
    validation_condition: str | None = Field(default=None, alias="validationCondition")
