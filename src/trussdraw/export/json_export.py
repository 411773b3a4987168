"""
JSON export for trussdraw.

Node coordinates are rounded for readability only; the graph itself is
built from unrounded centroids, so rounding never merges or splits joints.
"""

import os

from trussdraw.io.save_artifacts import save_json


def graph_to_export_dict(graph, precision=1):
    """
    Export form of a truss graph.

    Returns {"nodes": [{id, x, y}], "edges": [{id, from, to}]}.
    """
    return {
        "nodes": [
            {"id": n.id, "x": round(n.x, precision), "y": round(n.y, precision)}
            for n in graph.nodes
        ],
        "edges": [
            {"id": e.id, "from": e.n1, "to": e.n2}
            for e in graph.edges
        ],
    }


def save_truss_json(graph, out_dir, config=None, filename="truss.json"):
    """Write the export dict to out_dir/filename. Returns the path."""
    precision = config.precision if config else 1
    indent = config.indent if config else 2
    path = os.path.join(out_dir, filename)
    save_json(graph_to_export_dict(graph, precision), path, indent=indent)
    return path
