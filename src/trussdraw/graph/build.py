"""
Truss graph construction from clustered segments.
"""

import networkx as nx

from trussdraw.models import Edge, Node, TrussGraph
from trussdraw.tracer import get_tracer, trace


class NodeRegistry:
    """
    Dense node ids keyed by quantized centroid position.

    Centroids produced by averaging carry floating-point noise, so positions
    are compared after rounding to `precision` decimal digits. Ids are handed
    out in first-use order; stored coordinates are the unrounded centroid.
    """

    def __init__(self, precision=2):
        self.scale = 10 ** precision
        self.nodes = []
        self._ids = {}

    def key(self, point):
        return (round(point[0] * self.scale), round(point[1] * self.scale))

    def get_id(self, point):
        key = self.key(point)
        node_id = self._ids.get(key)
        if node_id is None:
            node_id = len(self.nodes)
            self.nodes.append(Node(id=node_id, x=point[0], y=point[1]))
            self._ids[key] = node_id
        return node_id


@trace(label="build_graph")
def build_graph(segments, mapping, precision=2):
    """
    Turn segments into nodes and deduplicated edges.

    Args:
        segments: list of (a, b) segments
        mapping: centroid per endpoint; segment k owns entries 2k and 2k+1
        precision: decimal digits used to identify equal centroids

    Returns:
        TrussGraph
    """
    tracer = get_tracer()

    registry = NodeRegistry(precision)
    edges = []
    seen = set()
    collapsed = 0
    duplicates = 0

    for k in range(len(segments)):
        start, end = mapping[2 * k], mapping[2 * k + 1]

        # both ends in one joint; checked before registering so no node is
        # left without a member
        if registry.key(start) == registry.key(end):
            collapsed += 1
            continue

        n1 = registry.get_id(start)
        n2 = registry.get_id(end)
        pair = (n1, n2) if n1 < n2 else (n2, n1)
        if pair in seen:
            duplicates += 1
            continue

        seen.add(pair)
        edges.append(Edge(id=len(edges), n1=n1, n2=n2))

    tracer.event(
        f"Built {len(registry.nodes)} nodes, {len(edges)} edges "
        f"(dropped {collapsed} collapsed, {duplicates} duplicate)"
    )

    return TrussGraph(nodes=registry.nodes, edges=edges)


def collect_endpoints(segments):
    """Flatten segments into [a0, b0, a1, b1, ...]."""
    points = []
    for a, b in segments:
        points.append(a)
        points.append(b)
    return points


def graph_to_networkx(graph):
    """Undirected networkx view of a truss graph with node positions."""
    g = nx.Graph()
    for node in graph.nodes:
        g.add_node(node.id, pos=(node.x, node.y))
    for edge in graph.edges:
        g.add_edge(edge.n1, edge.n2, id=edge.id)
    return g
