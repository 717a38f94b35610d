"""Render a GraphScene as a standalone SVG document."""

import xml.etree.ElementTree as ET

from journeygraph.layout.scene import DrawnEdge, GraphScene, SceneNode

SVG_NS = "http://www.w3.org/2000/svg"

NODE_RADIUS = 35
BACKGROUND = "#F9FAFB"
EDGE_COLOR = "#374151"
LABEL_COLOR = "#6B7280"
NODE_TEXT_COLOR = "#1F2937"
SELECTED_STROKE = "#3B82F6"
FUNCTION_BADGE_COLOR = "#8B5CF6"
FONT = "system-ui, sans-serif"


def _fmt(value: float) -> str:
    return f"{value:g}"


def _arrowhead(svg: ET.Element) -> None:
    defs = ET.SubElement(svg, "defs")
    marker = ET.SubElement(defs, "marker", {
        "id": "arrowhead",
        "markerWidth": "10",
        "markerHeight": "7",
        "refX": "9",
        "refY": "3.5",
        "orient": "auto",
        "markerUnits": "strokeWidth",
    })
    ET.SubElement(marker, "polygon", {"points": "0 0, 10 3.5, 0 7", "fill": EDGE_COLOR})


def _draw_edge(svg: ET.Element, drawn: DrawnEdge) -> None:
    ET.SubElement(svg, "line", {
        "x1": _fmt(drawn.source.x),
        "y1": _fmt(drawn.source.y),
        "x2": _fmt(drawn.target.x),
        "y2": _fmt(drawn.target.y),
        "stroke": EDGE_COLOR,
        "stroke-width": "2",
        "marker-end": "url(#arrowhead)",
        "data-edge-id": drawn.edge.id,
    })
    if drawn.label:
        mid_x, mid_y = drawn.midpoint
        text = ET.SubElement(svg, "text", {
            "x": _fmt(mid_x),
            "y": _fmt(mid_y - 4),
            "text-anchor": "middle",
            "font-size": "12",
            "fill": LABEL_COLOR,
            "font-family": FONT,
        })
        text.text = drawn.label


def _draw_node(svg: ET.Element, item: SceneNode) -> None:
    x, y = item.position.x, item.position.y
    group = ET.SubElement(svg, "g", {
        "class": "node",
        "data-node-id": item.position.node_id,
        "cursor": "pointer",
    })
    ET.SubElement(group, "circle", {
        "cx": _fmt(x),
        "cy": _fmt(y),
        "r": str(NODE_RADIUS),
        "fill": item.color,
        "stroke": SELECTED_STROKE if item.selected else EDGE_COLOR,
        "stroke-width": "3" if item.selected else "2",
    })
    name = ET.SubElement(group, "text", {
        "x": _fmt(x),
        "y": _fmt(y + 5),
        "text-anchor": "middle",
        "font-size": "10",
        "font-weight": "bold",
        "fill": NODE_TEXT_COLOR,
        "font-family": FONT,
    })
    name.text = item.position.node.name

    if item.property_count > 0:
        props = ET.SubElement(group, "text", {
            "x": _fmt(x),
            "y": _fmt(y + 45),
            "text-anchor": "middle",
            "font-size": "10",
            "fill": LABEL_COLOR,
            "font-family": FONT,
        })
        props.text = f"{item.property_count} props"

    if item.has_function:
        badge = ET.SubElement(group, "circle", {
            "cx": _fmt(x + 20),
            "cy": _fmt(y - 20),
            "r": "8",
            "fill": FUNCTION_BADGE_COLOR,
            "stroke": "#FFFFFF",
            "stroke-width": "2",
        })
        ET.SubElement(badge, "title").text = item.function_label
        marker = ET.SubElement(group, "text", {
            "x": _fmt(x + 20),
            "y": _fmt(y - 15),
            "text-anchor": "middle",
            "font-size": "10",
            "font-weight": "bold",
            "fill": "#FFFFFF",
            "font-family": FONT,
        })
        marker.text = "f"


def render_svg(scene: GraphScene) -> str:
    """Edges first, then nodes on top, as in the editor preview."""
    svg = ET.Element("svg", {
        "xmlns": SVG_NS,
        "width": _fmt(scene.width),
        "height": _fmt(scene.height),
        "viewBox": f"0 0 {_fmt(scene.width)} {_fmt(scene.height)}",
        "style": f"background: {BACKGROUND}",
    })
    _arrowhead(svg)

    for drawn in scene.edges:
        _draw_edge(svg, drawn)
    for item in scene.nodes:
        _draw_node(svg, item)

    return ET.tostring(svg, encoding="unicode")
