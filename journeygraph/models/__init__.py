"""Core data models for journey graphs."""

from journeygraph.models.base import merge_model, null_required_fields
from journeygraph.models.edge import Edge, EdgeCreate, EdgeUpdate
from journeygraph.models.function import (
    Function,
    FunctionConfig,
    FunctionCreate,
    FunctionHeader,
    FunctionType,
    FunctionUpdate,
    HeaderKind,
    HttpMethod,
)
from journeygraph.models.journey import Journey, JourneyUpdate
from journeygraph.models.mapping import MappingCreate, MappingUpdate, NodeFunctionMapping
from journeygraph.models.node import Node, NodeCreate, NodeType, NodeUpdate
from journeygraph.models.property import (
    Property,
    PropertyCreate,
    PropertyType,
    PropertyUpdate,
)

__all__ = [
    # Properties
    "Property",
    "PropertyCreate",
    "PropertyType",
    "PropertyUpdate",
    # Nodes
    "Node",
    "NodeCreate",
    "NodeType",
    "NodeUpdate",
    # Functions
    "Function",
    "FunctionConfig",
    "FunctionCreate",
    "FunctionHeader",
    "FunctionType",
    "FunctionUpdate",
    "HeaderKind",
    "HttpMethod",
    # Mappings
    "NodeFunctionMapping",
    "MappingCreate",
    "MappingUpdate",
    # Edges
    "Edge",
    "EdgeCreate",
    "EdgeUpdate",
    # Journey
    "Journey",
    "JourneyUpdate",
    "merge_model",
    "null_required_fields",
]
