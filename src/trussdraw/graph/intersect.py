"""
Crossing detection and segment splitting.

A member drawn straight across another must be cut where they cross so the
crossing becomes a joint. Only interior crossings are handled here; ends
that merely touch are merged later by endpoint clustering.
"""

from trussdraw.tracer import get_tracer, trace


def segment_intersection(a1, a2, b1, b2, margin=0.02, parallel_epsilon=1e-10):
    """
    Interior crossing of segments a1-a2 and b1-b2.

    Solves for the parameters t (along a) and u (along b) of the crossing of
    the two infinite lines. The crossing counts only when both parameters lie
    strictly inside (margin, 1 - margin).

    Returns:
        (x, y, t, u) or None when the segments are parallel or do not cross
        in their interiors
    """
    dx1 = a2[0] - a1[0]
    dy1 = a2[1] - a1[1]
    dx2 = b2[0] - b1[0]
    dy2 = b2[1] - b1[1]

    denom = dx1 * dy2 - dy1 * dx2
    if abs(denom) < parallel_epsilon:
        return None

    dx3 = b1[0] - a1[0]
    dy3 = b1[1] - a1[1]
    t = (dx3 * dy2 - dy3 * dx2) / denom
    u = (dx3 * dy1 - dy3 * dx1) / denom

    if t <= margin or t >= 1 - margin or u <= margin or u >= 1 - margin:
        return None

    return (a1[0] + t * dx1, a1[1] + t * dy1, t, u)


@trace(label="split_at_crossings")
def split_at_crossings(segments, margin=0.02, parallel_epsilon=1e-10):
    """
    Split every segment at its interior crossings with any other segment.

    All pairs are tested, so crossings between different strokes are found
    too. A split segment is replaced, in place, by the chain running from its
    start through the crossing points (ordered along the segment) to its
    end. Segments without crossings pass through unchanged.

    Args:
        segments: list of (a, b) point pairs pooled from all strokes
        margin: fraction of each segment's length excluded at both ends
        parallel_epsilon: determinant magnitude below which lines are parallel

    Returns:
        new list of segments
    """
    tracer = get_tracer()

    splits = [[] for _ in segments]
    crossings = 0

    for i in range(len(segments)):
        a1, a2 = segments[i]
        for j in range(i + 1, len(segments)):
            b1, b2 = segments[j]
            hit = segment_intersection(a1, a2, b1, b2, margin, parallel_epsilon)
            if hit is None:
                continue
            x, y, t, u = hit
            splits[i].append((t, (x, y)))
            splits[j].append((u, (x, y)))
            crossings += 1

    result = []
    for segment, cuts in zip(segments, splits):
        if not cuts:
            result.append(segment)
            continue

        cuts.sort(key=lambda cut: cut[0])
        prev = segment[0]
        for _, point in cuts:
            result.append((prev, point))
            prev = point
        result.append((prev, segment[1]))

    tracer.event(f"Found {crossings} crossings, {len(segments)} -> {len(result)} segments")

    return result
