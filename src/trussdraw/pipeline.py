"""
Main pipeline orchestrator for trussdraw.

`vectorize` is the stroke-to-graph conversion itself. `run_pipeline` wraps
it with file input, validation and export.
"""

import os
from dataclasses import dataclass, replace

from trussdraw.config import VectorizeConfig, load_config
from trussdraw.export.json_export import save_truss_json
from trussdraw.export.svg_export import graph_to_svg, save_truss_svg
from trussdraw.graph.build import build_graph, collect_endpoints
from trussdraw.graph.cluster import cluster_points
from trussdraw.graph.intersect import split_at_crossings
from trussdraw.io.load_strokes import load_strokes, parse_strokes
from trussdraw.io.save_artifacts import DebugArtifactWriter, ensure_dir, save_json
from trussdraw.models import TrussGraph, ValidationReport
from trussdraw.strokes.segments import strokes_to_segments
from trussdraw.tracer import get_tracer, trace
from trussdraw.validate.report import generate_report
from trussdraw.validate.rules import run_validation


@dataclass
class PipelineResult:
    """Outputs of one run_pipeline call."""
    graph: TrussGraph
    validation: ValidationReport
    outputs: dict


@trace(label="vectorize")
def vectorize(strokes, snap_radius=None, simplify_epsilon=None, config=None, debug_writer=None):
    """
    Convert freehand strokes into a truss graph.

    Args:
        strokes: list of strokes; each a list of (x, y) pairs or
            {"x": .., "y": ..} mappings
        snap_radius: endpoint merge distance, overrides config
        simplify_epsilon: RDP tolerance, overrides config
            (default snap_radius * 0.5)
        config: VectorizeConfig with the remaining tunables
        debug_writer: optional DebugArtifactWriter for stage metrics

    Returns:
        TrussGraph, freshly built on every call

    Raises:
        ValueError: non-positive snap radius, negative epsilon, or
            malformed / non-finite coordinates
    """
    tracer = get_tracer()

    config = config or VectorizeConfig()
    if snap_radius is not None:
        config = replace(config, snap_radius=snap_radius)
    if simplify_epsilon is not None:
        config = replace(config, simplify_epsilon=simplify_epsilon)
    config.validate()

    strokes = parse_strokes(strokes)
    epsilon = config.effective_epsilon()

    with tracer.span("segment", module="pipeline"):
        segments = strokes_to_segments(strokes, epsilon)

    if not segments:
        tracer.event("No usable strokes, returning empty graph")
        return TrussGraph()

    with tracer.span("split", module="pipeline"):
        split = split_at_crossings(segments, config.crossing_margin, config.parallel_epsilon)

    with tracer.span("cluster", module="pipeline"):
        mapping = cluster_points(collect_endpoints(split), config.snap_radius)

    with tracer.span("build", module="pipeline"):
        graph = build_graph(split, mapping, config.node_precision)

    if debug_writer:
        debug_writer.save_json({
            "num_strokes": len(strokes),
            "num_segments": len(segments),
            "epsilon": epsilon,
        }, "segment", "segment_metrics.json")
        debug_writer.save_json({
            "num_segments_in": len(segments),
            "num_segments_out": len(split),
        }, "split", "split_metrics.json")
        debug_writer.save_json({
            "num_endpoints": len(mapping),
            "num_clusters": len(set(mapping)),
            "snap_radius": config.snap_radius,
        }, "cluster", "cluster_metrics.json")
        debug_writer.save_json({
            "num_nodes": len(graph.nodes),
            "num_edges": len(graph.edges),
        }, "build", "build_metrics.json")
        debug_writer.save_svg(graph_to_svg(graph), "build", "build_graph.svg")

    return graph


@trace(label="run_pipeline")
def run_pipeline(strokes_path, out_dir, config=None, config_path=None, debug=False):
    """
    Run the full pipeline on a strokes file.

    Args:
        strokes_path: JSON file with the strokes
        out_dir: output directory
        config: PipelineConfig object (optional)
        config_path: path to YAML config file (optional)
        debug: enable debug artifact generation

    Returns:
        PipelineResult
    """
    tracer = get_tracer()

    if config is None:
        config = load_config(config_path)
    debug = config.debug.enabled or debug

    strokes = load_strokes(strokes_path)

    ensure_dir(out_dir)
    debug_writer = DebugArtifactWriter(out_dir, enabled=True) if debug else None

    graph = vectorize(strokes, config=config.vectorize, debug_writer=debug_writer)

    with tracer.span("validate", module="pipeline"):
        report = run_validation(graph, config.validation)

    with tracer.span("export", module="pipeline"):
        outputs = {
            "svg": save_truss_svg(graph, out_dir, config.svg),
            "json": save_truss_json(graph, out_dir, config.json_export),
        }
        graph_path = os.path.join(out_dir, "graph.json")
        save_json(graph, graph_path)
        outputs["graph"] = graph_path
        outputs["report"], outputs["summary"] = generate_report(report, out_dir, debug_writer)

    tracer.event(f"Pipeline complete: {len(graph.nodes)} nodes, {len(graph.edges)} edges")

    return PipelineResult(graph=graph, validation=report, outputs=outputs)
