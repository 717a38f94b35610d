"""Layout and rendering of journey graphs."""

from journeygraph.layout.grid import (
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_CANVAS_WIDTH,
    GridShape,
    PositionedNode,
    compute_positions,
    grid_shape,
)
from journeygraph.layout.preview import PreviewEngine
from journeygraph.layout.scene import (
    DrawnEdge,
    GraphScene,
    SceneNode,
    build_scene,
    scene_to_dict,
    visible_edges,
)
from journeygraph.layout.selection import (
    ConnectedEdge,
    MappedFunction,
    NodeDetails,
    SelectionState,
    details_to_dict,
    resolve_node_details,
)
from journeygraph.layout.svg import render_svg

__all__ = [
    # grid
    "DEFAULT_CANVAS_HEIGHT",
    "DEFAULT_CANVAS_WIDTH",
    "GridShape",
    "PositionedNode",
    "compute_positions",
    "grid_shape",
    # scene
    "DrawnEdge",
    "GraphScene",
    "SceneNode",
    "build_scene",
    "scene_to_dict",
    "visible_edges",
    # selection
    "ConnectedEdge",
    "MappedFunction",
    "NodeDetails",
    "SelectionState",
    "details_to_dict",
    "resolve_node_details",
    # engine + drawing surface
    "PreviewEngine",
    "render_svg",
]
