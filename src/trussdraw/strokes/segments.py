"""
Conversion of simplified strokes into straight segments.
"""

from trussdraw.strokes.simplify import simplify_strokes
from trussdraw.tracer import get_tracer, trace


def polyline_to_segments(polyline):
    """One (a, b) segment per consecutive vertex pair, in order."""
    return [(polyline[i], polyline[i + 1]) for i in range(len(polyline) - 1)]


@trace(label="strokes_to_segments")
def strokes_to_segments(strokes, epsilon):
    """
    Simplify each usable stroke and pool all of its segments.

    Strokes with fewer than two points are skipped.
    """
    tracer = get_tracer()

    usable = [stroke for stroke in strokes if len(stroke) >= 2]
    if len(usable) < len(strokes):
        tracer.event(f"Skipped {len(strokes) - len(usable)} strokes shorter than 2 points", level="DEBUG")

    segments = []
    for polyline in simplify_strokes(usable, epsilon):
        segments.extend(polyline_to_segments(polyline))

    tracer.event(f"Extracted {len(segments)} segments from {len(usable)} strokes")

    return segments
