"""Pytest fixtures for trussdraw tests."""

import json
import math
import os
import tempfile

import pytest


@pytest.fixture(autouse=True)
def quiet_tracer():
    """Leave the global tracer disabled between tests."""
    from trussdraw.tracer import configure_tracer

    yield
    configure_tracer(enabled=False)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def x_strokes():
    """Two straight strokes crossing at (50, 50)."""
    return [
        [(0, 0), (100, 100)],
        [(100, 0), (0, 100)],
    ]


@pytest.fixture
def single_line_stroke():
    """One horizontal stroke."""
    return [[(0, 0), (100, 0)]]


@pytest.fixture
def near_start_strokes():
    """Two strokes starting at nearly the same point."""
    return [
        [(0, 0), (50, 0)],
        [(2, 1), (50, 5)],
    ]


@pytest.fixture
def wobbly_triangle_strokes():
    """A hand-drawn triangle: three noisy strokes whose ends nearly meet."""
    def wobble(a, b, n=25, amp=1.5):
        points = []
        for i in range(n):
            t = i / (n - 1)
            x = a[0] + t * (b[0] - a[0])
            y = a[1] + t * (b[1] - a[1])
            points.append((x, y + amp * math.sin(i * 1.7)))
        return points

    return [
        wobble((10, 200), (150, 20)),
        wobble((152, 22), (290, 198)),
        wobble((292, 201), (12, 198)),
    ]


@pytest.fixture
def warren_truss_strokes():
    """Top and bottom chords with diagonals drawn across them."""
    return [
        [(0, 100), (300, 100)],
        [(0, 0), (300, 0)],
        [(0, 100), (75, 0)],
        [(75, 0), (150, 100)],
        [(150, 100), (225, 0)],
        [(225, 0), (300, 100)],
        [(20, -20), (280, 120)],
    ]


@pytest.fixture
def default_config():
    """Create default pipeline configuration."""
    from trussdraw.config import PipelineConfig
    return PipelineConfig()


@pytest.fixture
def strokes_file(temp_dir, x_strokes):
    """Write the crossing strokes to a JSON file in {x, y} form."""
    path = os.path.join(temp_dir, "strokes.json")
    data = {"strokes": [[{"x": x, "y": y} for x, y in stroke] for stroke in x_strokes]}
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f)
    return path
