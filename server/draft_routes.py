"""API routes editing the open draft's entities, and its preview."""

import os

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from journeygraph.analysis.integrity import find_dangling_references
from journeygraph.layout.scene import build_scene, scene_to_dict
from journeygraph.layout.selection import details_to_dict, resolve_node_details
from journeygraph.layout.svg import render_svg
from journeygraph.models.edge import Edge, EdgeCreate, EdgeUpdate
from journeygraph.models.function import Function, FunctionCreate, FunctionUpdate
from journeygraph.models.journey import Journey
from journeygraph.models.mapping import MappingCreate, MappingUpdate, NodeFunctionMapping
from journeygraph.models.node import Node, NodeCreate, NodeUpdate
from journeygraph.models.property import Property, PropertyCreate, PropertyUpdate
from journeygraph.store.graph_store import JourneyStore
from journeygraph.utils.validation import (
    duplicate_property_keys,
    validate_name,
    validate_no_nulls,
    validate_property,
)
from server.journey_routes import require_store

router = APIRouter(prefix="/draft")

CANVAS_WIDTH = float(os.getenv("CANVAS_WIDTH", "800"))
CANVAS_HEIGHT = float(os.getenv("CANVAS_HEIGHT", "400"))


def _reject(problems: list[str]) -> None:
    if problems:
        raise HTTPException(status_code=422, detail=problems)


# --- properties ---


@router.post("/properties")
def add_property(request: PropertyCreate, store: JourneyStore = Depends(require_store)) -> Journey:
    """add a property; the key must be well-formed and unused."""
    _reject(validate_property(request, store.snapshot))
    return store.add_property(request)


@router.patch("/properties/{property_id}")
def update_property(
    property_id: str,
    request: PropertyUpdate,
    store: JourneyStore = Depends(require_store),
) -> Journey:
    _reject(validate_no_nulls(request, Property, "Property"))
    _reject(validate_property(request, store.snapshot, editing_id=property_id))
    return store.update_property(property_id, request)


@router.delete("/properties/{property_id}")
def delete_property(property_id: str, store: JourneyStore = Depends(require_store)) -> Journey:
    """delete a property; it is also removed from every node."""
    return store.delete_property(property_id)


# --- nodes ---


@router.post("/nodes")
def add_node(request: NodeCreate, store: JourneyStore = Depends(require_store)) -> Journey:
    _reject(validate_name(request.name, "Node"))
    return store.add_node(request)


@router.patch("/nodes/{node_id}")
def update_node(
    node_id: str,
    request: NodeUpdate,
    store: JourneyStore = Depends(require_store),
) -> Journey:
    _reject(validate_no_nulls(request, Node, "Node"))
    _reject(validate_name(request.name, "Node"))
    return store.update_node(node_id, request)


@router.delete("/nodes/{node_id}")
def delete_node(node_id: str, store: JourneyStore = Depends(require_store)) -> Journey:
    """delete a node with every edge touching it and every mapping on it."""
    return store.delete_node(node_id)


# --- functions ---


@router.post("/functions")
def add_function(request: FunctionCreate, store: JourneyStore = Depends(require_store)) -> Journey:
    _reject(validate_name(request.name, "Function"))
    return store.add_function(request)


@router.patch("/functions/{function_id}")
def update_function(
    function_id: str,
    request: FunctionUpdate,
    store: JourneyStore = Depends(require_store),
) -> Journey:
    _reject(validate_no_nulls(request, Function, "Function"))
    _reject(validate_name(request.name, "Function"))
    return store.update_function(function_id, request)


@router.delete("/functions/{function_id}")
def delete_function(function_id: str, store: JourneyStore = Depends(require_store)) -> Journey:
    return store.delete_function(function_id)


# --- mappings ---


@router.post("/mappings")
def add_mapping(request: MappingCreate, store: JourneyStore = Depends(require_store)) -> Journey:
    _reject(validate_name(request.name, "Mapping"))
    return store.add_mapping(request)


@router.patch("/mappings/{mapping_id}")
def update_mapping(
    mapping_id: str,
    request: MappingUpdate,
    store: JourneyStore = Depends(require_store),
) -> Journey:
    _reject(validate_no_nulls(request, NodeFunctionMapping, "Mapping"))
    _reject(validate_name(request.name, "Mapping"))
    return store.update_mapping(mapping_id, request)


@router.delete("/mappings/{mapping_id}")
def delete_mapping(mapping_id: str, store: JourneyStore = Depends(require_store)) -> Journey:
    return store.delete_mapping(mapping_id)


# --- edges ---


@router.post("/edges")
def add_edge(request: EdgeCreate, store: JourneyStore = Depends(require_store)) -> Journey:
    """add an edge; a custom edge out of Start replaces the default edge."""
    return store.add_edge(request)


@router.patch("/edges/{edge_id}")
def update_edge(
    edge_id: str,
    request: EdgeUpdate,
    store: JourneyStore = Depends(require_store),
) -> Journey:
    _reject(validate_no_nulls(request, Edge, "Edge"))
    return store.update_edge(edge_id, request)


@router.delete("/edges/{edge_id}")
def delete_edge(edge_id: str, store: JourneyStore = Depends(require_store)) -> Journey:
    return store.delete_edge(edge_id)


# --- preview ---


@router.get("/preview")
def get_preview(
    width: float = Query(CANVAS_WIDTH, gt=0),
    height: float = Query(CANVAS_HEIGHT, gt=0),
    selected: str | None = None,
    store: JourneyStore = Depends(require_store),
) -> dict:
    """positions, drawn edges and overlays for the draft."""
    scene = build_scene(store.snapshot, width, height, selected_node_id=selected)
    return scene_to_dict(scene)


@router.get("/preview.svg")
def get_preview_svg(
    width: float = Query(CANVAS_WIDTH, gt=0),
    height: float = Query(CANVAS_HEIGHT, gt=0),
    selected: str | None = None,
    store: JourneyStore = Depends(require_store),
) -> Response:
    scene = build_scene(store.snapshot, width, height, selected_node_id=selected)
    return Response(content=render_svg(scene), media_type="image/svg+xml")


@router.get("/nodes/{node_id}/details")
def get_node_details(node_id: str, store: JourneyStore = Depends(require_store)) -> dict:
    """resolved properties, functions and edges of one node."""
    details = resolve_node_details(store.snapshot, node_id)
    if details is None:
        raise HTTPException(status_code=404, detail=f"Node not found: {node_id}")
    return details_to_dict(details)


@router.get("/integrity")
def get_integrity(store: JourneyStore = Depends(require_store)) -> dict:
    """references in the draft that no longer resolve, and reused property keys."""
    dangling = [
        {
            "ownerKind": ref.owner_kind,
            "ownerId": ref.owner_id,
            "field": ref.field,
            "missingId": ref.missing_id,
        }
        for ref in find_dangling_references(store.snapshot)
    ]
    return {
        "danglingReferences": dangling,
        "duplicatePropertyKeys": duplicate_property_keys(store.snapshot),
    }
