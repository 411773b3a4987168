"""
Artifact saving utilities for trussdraw.

Handles writing JSON and SVG outputs plus per-stage debug metrics.
"""

import json
import os

from trussdraw.tracer import get_tracer


def ensure_dir(path):
    """Create directory if it does not exist."""
    if path:
        os.makedirs(path, exist_ok=True)


def get_debug_dir(out_dir, stage_name):
    """
    Get the debug directory path for a stage.

    Creates the directory if it does not exist.
    """
    debug_dir = os.path.join(out_dir, "debug", stage_name)
    ensure_dir(debug_dir)
    return debug_dir


def save_json(data, path, indent=2):
    """
    Save a dictionary or Pydantic model to JSON.
    """
    tracer = get_tracer()

    ensure_dir(os.path.dirname(path))

    if hasattr(data, "model_dump"):
        data = data.model_dump(mode="json")

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent, default=str)

    tracer.event(f"Saved JSON: {path}")


def save_svg(svg_content, path):
    """
    Save SVG content (an svgwrite drawing or a string) to file.
    """
    tracer = get_tracer()

    ensure_dir(os.path.dirname(path))

    if hasattr(svg_content, "tostring"):
        content = svg_content.tostring()
    else:
        content = str(svg_content)

    with open(path, "w", encoding="utf-8") as f:
        f.write(content)

    tracer.event(f"Saved SVG: {path}")


class DebugArtifactWriter:
    """
    Writes per-stage debug artifacts under <out_dir>/debug/<stage>/.

    Every method is a no-op when the writer is disabled.
    """

    def __init__(self, out_dir, enabled=True):
        self.out_dir = out_dir
        self.enabled = enabled

    def get_stage_dir(self, stage_name):
        return get_debug_dir(self.out_dir, stage_name)

    def save_json(self, data, stage_name, filename):
        if not self.enabled:
            return
        save_json(data, os.path.join(self.get_stage_dir(stage_name), filename))

    def save_svg(self, svg_content, stage_name, filename):
        if not self.enabled:
            return
        save_svg(svg_content, os.path.join(self.get_stage_dir(stage_name), filename))
