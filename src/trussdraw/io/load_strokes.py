"""
Stroke loading for trussdraw.

Strokes arrive as JSON, either a bare list of strokes or an object with a
"strokes" key. Points may be {"x": .., "y": ..} objects or [x, y] pairs.
"""

import json
import os

from pydantic import ValidationError

from trussdraw.models import StrokeSet
from trussdraw.tracer import get_tracer, trace


def parse_strokes(data):
    """
    Validate decoded JSON stroke data.

    Returns a list of strokes, each a list of (x, y) tuples.

    Raises pydantic.ValidationError for malformed or non-finite points.
    """
    if isinstance(data, dict):
        stroke_set = StrokeSet.model_validate(data)
    else:
        stroke_set = StrokeSet.model_validate({"strokes": data})
    return stroke_set.as_tuples()


@trace(label="load_strokes")
def load_strokes(path):
    """
    Load strokes from a JSON file.

    Raises FileNotFoundError if path does not exist.
    Raises ValueError if the file is not valid stroke JSON.
    """
    tracer = get_tracer()

    if not os.path.exists(path):
        raise FileNotFoundError(f"Strokes file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e

    try:
        strokes = parse_strokes(data)
    except ValidationError as e:
        raise ValueError(f"Invalid stroke data in {path}: {e.error_count()} errors") from e

    tracer.event(f"Loaded {len(strokes)} strokes, {sum(len(s) for s in strokes)} points")

    return strokes
