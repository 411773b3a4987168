"""
SVG export for trussdraw.

Draws one line per member and one labeled marker per joint.
"""

import os

import svgwrite

from trussdraw.config import SvgConfig
from trussdraw.io.save_artifacts import save_svg
from trussdraw.tracer import get_tracer, trace


def _fmt(value):
    # coordinates are written with one decimal
    return round(value, 1)


def canvas_box(graph, padding):
    """
    View box (x, y, width, height) covering every node plus padding.

    The origin stays at (0, 0) unless a node lies left of or above it, so
    drawings made on a regular canvas keep their placement.
    """
    if not graph.nodes:
        return 0, 0, 2 * padding, 2 * padding
    min_x, min_y, max_x, max_y = graph.bounds()
    x0 = min(min_x - padding, 0)
    y0 = min(min_y - padding, 0)
    return x0, y0, max(max_x, 0) + padding - x0, max(max_y, 0) + padding - y0


@trace(label="graph_to_svg")
def graph_to_svg(graph, width=None, height=None, config=None):
    """
    Create an SVG drawing of a truss graph.

    Args:
        graph: TrussGraph
        width: canvas width in pixels (inferred from node bounds if None)
        height: canvas height in pixels (inferred from node bounds if None)
        config: SvgConfig

    Returns:
        svgwrite.Drawing object
    """
    tracer = get_tracer()
    config = config or SvgConfig()

    x0, y0 = 0, 0
    if width is None or height is None:
        x0, y0, auto_w, auto_h = canvas_box(graph, config.padding)
        width = auto_w if width is None else width
        height = auto_h if height is None else height
    x0, y0, width, height = _fmt(x0), _fmt(y0), _fmt(width), _fmt(height)

    dwg = svgwrite.Drawing(size=(f"{width}px", f"{height}px"))
    dwg.viewbox(x0, y0, width, height)

    dwg.add(dwg.rect(insert=(x0, y0), size=(width, height), fill=config.background, id="background"))

    edge_group = dwg.g(
        id="edges",
        stroke=config.edge_color,
        stroke_width=config.edge_width,
        stroke_linecap="round",
    )
    for edge in graph.edges:
        a = graph.nodes[edge.n1]
        b = graph.nodes[edge.n2]
        edge_group.add(dwg.line(
            start=(_fmt(a.x), _fmt(a.y)),
            end=(_fmt(b.x), _fmt(b.y)),
            id=f"edge_{edge.id}",
        ))
    dwg.add(edge_group)

    node_group = dwg.g(id="nodes")
    for node in graph.nodes:
        cx, cy = _fmt(node.x), _fmt(node.y)
        marker = dwg.g(id=f"node_{node.id}")
        marker.add(dwg.circle(
            center=(cx, cy),
            r=config.node_radius,
            fill="none",
            stroke=config.node_color,
            stroke_width=config.node_ring_width,
        ))
        marker.add(dwg.circle(center=(cx, cy), r=config.node_dot_radius, fill=config.node_color))
        marker.add(dwg.text(
            str(node.id),
            insert=(cx, _fmt(node.y - config.label_offset)),
            text_anchor="middle",
            fill=config.node_color,
            font_size=config.label_font_size,
            font_family=config.label_font_family,
        ))
        node_group.add(marker)
    dwg.add(node_group)

    tracer.event(f"SVG emitted with {len(graph.nodes)} nodes, {len(graph.edges)} edges")

    return dwg


def save_truss_svg(graph, out_dir, config=None, filename="truss.svg", width=None, height=None):
    """Render the graph and write it to out_dir/filename. Returns the path."""
    path = os.path.join(out_dir, filename)
    save_svg(graph_to_svg(graph, width, height, config), path)
    return path
