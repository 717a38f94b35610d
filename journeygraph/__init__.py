"""Journey Graph - authoring-time model, consistency engine and preview layout for journeys."""

from journeygraph.models import (
    Edge,
    EdgeCreate,
    EdgeUpdate,
    Function,
    FunctionConfig,
    FunctionCreate,
    FunctionHeader,
    FunctionType,
    FunctionUpdate,
    HeaderKind,
    Journey,
    JourneyUpdate,
    MappingCreate,
    MappingUpdate,
    Node,
    NodeCreate,
    NodeFunctionMapping,
    NodeType,
    NodeUpdate,
    Property,
    PropertyCreate,
    PropertyType,
    PropertyUpdate,
)
from journeygraph.store import JourneyStore
from journeygraph.layout import PreviewEngine, build_scene, render_svg
from journeygraph.persistence import JourneyRepository

__all__ = [
    # Models
    "Edge",
    "EdgeCreate",
    "EdgeUpdate",
    "Function",
    "FunctionConfig",
    "FunctionCreate",
    "FunctionHeader",
    "FunctionType",
    "FunctionUpdate",
    "HeaderKind",
    "Journey",
    "JourneyUpdate",
    "MappingCreate",
    "MappingUpdate",
    "Node",
    "NodeCreate",
    "NodeFunctionMapping",
    "NodeType",
    "NodeUpdate",
    "Property",
    "PropertyCreate",
    "PropertyType",
    "PropertyUpdate",
    # High-level APIs
    "JourneyStore",
    "PreviewEngine",
    "build_scene",
    "render_svg",
    "JourneyRepository",
]
