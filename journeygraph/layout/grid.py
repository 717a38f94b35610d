"""Deterministic grid placement for journey nodes.

Nodes are laid out row-major on a `cols x rows` grid, where
`cols = ceil(sqrt(n))` and `rows = ceil(n / cols)`. Cell centers are
spread evenly across the canvas, so the layout never overlaps and a
single node lands in the middle.
"""

import math
from dataclasses import dataclass

from journeygraph.models.node import Node

DEFAULT_CANVAS_WIDTH = 800.0
DEFAULT_CANVAS_HEIGHT = 400.0


@dataclass(frozen=True)
class GridShape:
    cols: int
    rows: int


@dataclass(frozen=True)
class PositionedNode:
    """A node with its resolved canvas position."""

    node: Node
    index: int  # position in the journey's node collection
    x: float
    y: float
    manual: bool  # True when both coordinates came from the node itself

    @property
    def node_id(self) -> str:
        return self.node.id


def grid_shape(node_count: int) -> GridShape:
    """Columns and rows for `node_count` nodes (0 nodes -> 0 x 0)."""
    if node_count <= 0:
        return GridShape(cols=0, rows=0)
    cols = math.ceil(math.sqrt(node_count))
    rows = math.ceil(node_count / cols)
    return GridShape(cols=cols, rows=rows)


def grid_cell(index: int, shape: GridShape) -> tuple[int, int]:
    """(row, col) of the node at `index`."""
    return index // shape.cols, index % shape.cols


def compute_positions(
    nodes: list[Node],
    width: float = DEFAULT_CANVAS_WIDTH,
    height: float = DEFAULT_CANVAS_HEIGHT,
) -> list[PositionedNode]:
    """Place every node, in collection order.

    A coordinate recorded on the node wins; each missing axis falls back to
    the grid cell independently.
    """
    shape = grid_shape(len(nodes))
    positioned: list[PositionedNode] = []

    for index, node in enumerate(nodes):
        row, col = grid_cell(index, shape)
        grid_x = (col + 1) * width / (shape.cols + 1)
        grid_y = (row + 1) * height / (shape.rows + 1)
        positioned.append(PositionedNode(
            node=node,
            index=index,
            x=node.x if node.x is not None else grid_x,
            y=node.y if node.y is not None else grid_y,
            manual=node.x is not None and node.y is not None,
        ))

    return positioned


def position_index(positioned: list[PositionedNode]) -> dict[str, PositionedNode]:
    """Map node id -> position; the first node wins when ids repeat."""
    index: dict[str, PositionedNode] = {}
    for item in positioned:
        index.setdefault(item.node_id, item)
    return index
