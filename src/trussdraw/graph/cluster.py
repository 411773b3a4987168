"""
Endpoint clustering for trussdraw.

Segment ends that lie closer than the snap radius are one joint. Merging is
transitive: a chain of close points ends up in one cluster even when its
two extremes are farther apart than the radius.
"""

import numpy as np

from trussdraw.tracer import get_tracer, trace


class UnionFind:
    """Disjoint sets over the indices 0..n-1."""

    def __init__(self, n):
        self.parent = list(range(n))

    def find(self, i):
        parent = self.parent
        while parent[i] != i:
            parent[i] = parent[parent[i]]  # path halving
            i = parent[i]
        return i

    def union(self, a, b):
        ra, rb = self.find(a), self.find(b)
        if ra != rb:
            self.parent[rb] = ra

    def groups(self):
        """Map of root -> member indices, roots in first-seen order."""
        groups = {}
        for i in range(len(self.parent)):
            groups.setdefault(self.find(i), []).append(i)
        return groups


def close_pairs(coords, radius):
    """
    Index pairs (i, j), i < j, whose distance is below radius.

    Pairs come out in row-major order, the same order as a nested loop.
    """
    dx = coords[:, None, 0] - coords[None, :, 0]
    dy = coords[:, None, 1] - coords[None, :, 1]
    within = np.triu(np.hypot(dx, dy) < radius, k=1)
    return np.argwhere(within)


@trace(label="cluster_points")
def cluster_points(points, snap_radius):
    """
    Merge points closer than snap_radius and compute cluster centroids.

    Args:
        points: list of (x, y) points, duplicates allowed
        snap_radius: merge distance (strict)

    Returns:
        list where entry i is the (x, y) centroid of the cluster holding
        point i
    """
    tracer = get_tracer()

    if not points:
        return []

    coords = np.asarray(points, dtype=float)
    sets = UnionFind(len(coords))

    for i, j in close_pairs(coords, snap_radius):
        sets.union(int(i), int(j))

    mapping = [None] * len(coords)
    groups = sets.groups()
    for members in groups.values():
        cx, cy = coords[members].mean(axis=0)
        centroid = (float(cx), float(cy))
        for i in members:
            mapping[i] = centroid

    tracer.event(f"Clustered {len(coords)} endpoints into {len(groups)} joints")

    return mapping
