"""
Stroke simplification using the Ramer-Douglas-Peucker algorithm.

Reduces a noisy freehand stroke to its dominant vertices while keeping every
dropped sample within tolerance of the simplified chord.
"""

import numpy as np

from trussdraw.tracer import get_tracer, trace


@trace(label="simplify_strokes")
def simplify_strokes(strokes, epsilon):
    """
    Simplify every stroke with RDP.

    Args:
        strokes: list of strokes, each a list of (x, y) points
        epsilon: maximum distance a dropped point may lie from its chord

    Returns:
        list of simplified strokes, same order as the input
    """
    tracer = get_tracer()

    simplified = [rdp_simplify(stroke, epsilon) for stroke in strokes]

    before = sum(len(s) for s in strokes)
    after = sum(len(s) for s in simplified)
    reduction = 1 - (after / before) if before > 0 else 0
    tracer.event(f"Simplified: {before} -> {after} points ({reduction:.1%} reduction)")

    return simplified


def rdp_simplify(points, epsilon):
    """
    Ramer-Douglas-Peucker simplification of one polyline.

    Works over index ranges with an explicit stack, so long strokes do not
    recurse or copy sub-lists. The result is the same as the textbook
    recursive version: the farthest interior point (lowest index on ties)
    splits the range when its distance exceeds epsilon, otherwise the range
    collapses to its two ends.

    Args:
        points: sequence of (x, y) points
        epsilon: distance tolerance

    Returns:
        list of the retained input points, in order
    """
    if len(points) <= 2:
        return list(points)

    coords = np.asarray(points, dtype=float)
    keep = np.zeros(len(coords), dtype=bool)
    keep[0] = keep[-1] = True

    stack = [(0, len(coords) - 1)]
    while stack:
        lo, hi = stack.pop()
        if hi - lo < 2:
            continue

        distances = chord_distances(coords[lo + 1:hi], coords[lo], coords[hi])
        offset = int(np.argmax(distances))  # first maximum wins

        if distances[offset] > epsilon:
            split = lo + 1 + offset
            keep[split] = True
            stack.append((split, hi))
            stack.append((lo, split))

    return [points[i] for i in np.flatnonzero(keep)]


def chord_distances(points, start, end):
    """
    Distance from each point to the chord between start and end.

    The projection is clamped to the chord. A zero-length chord degrades to
    plain distance from its single point.
    """
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    len_sq = dx * dx + dy * dy

    vx = points[:, 0] - start[0]
    vy = points[:, 1] - start[1]

    if len_sq == 0:
        return np.hypot(vx, vy)

    t = np.clip((vx * dx + vy * dy) / len_sq, 0.0, 1.0)
    return np.hypot(vx - t * dx, vy - t * dy)
