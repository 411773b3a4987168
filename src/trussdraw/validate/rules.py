"""
Validation rules for trussdraw.

Checks the structural invariants every vectorized graph must satisfy, plus
softer drawing-quality warnings (disconnected parts, crossing members).
"""

from collections import Counter

import networkx as nx
from shapely.geometry import LineString

from trussdraw.config import ValidationConfig
from trussdraw.graph.build import graph_to_networkx
from trussdraw.models import CheckResult, Severity, ValidationReport
from trussdraw.tracer import get_tracer, trace


@trace(label="run_validation")
def run_validation(graph, config=None):
    """
    Run all validation checks on a graph.

    Returns ValidationReport with all check results.
    """
    tracer = get_tracer()
    config = config or ValidationConfig()

    references = check_edge_references(graph)
    checks = [
        check_non_empty(graph),
        check_node_ids_dense(graph),
        references,
        check_no_self_loops(graph),
        check_no_duplicate_edges(graph),
        check_no_isolated_nodes(graph),
    ]

    if config.warn_disconnected and references.passed:
        checks.append(check_connected(graph))
    if config.check_planarity and references.passed:
        checks.append(check_planar_members(graph))

    report = ValidationReport(checks=checks)

    tracer.event(f"Validation complete: {report.error_count} errors, {report.warning_count} warnings")

    return report


def check_non_empty(graph):
    """Note when the drawing produced no members at all."""
    if not graph.edges:
        return CheckResult(
            rule_id="non_empty",
            severity=Severity.INFO,
            passed=False,
            message="Graph has no members",
            evidence={"nodes": len(graph.nodes)},
        )

    return CheckResult(
        rule_id="non_empty",
        severity=Severity.INFO,
        passed=True,
        message=f"Graph has {len(graph.nodes)} joints and {len(graph.edges)} members",
        evidence={"nodes": len(graph.nodes), "edges": len(graph.edges)},
    )


def check_node_ids_dense(graph):
    """Node i must carry id i."""
    misplaced = [i for i, node in enumerate(graph.nodes) if node.id != i]

    if misplaced:
        return CheckResult(
            rule_id="node_ids_dense",
            severity=Severity.ERROR,
            passed=False,
            message=f"{len(misplaced)} nodes do not match their position",
            evidence={"positions": misplaced[:20]},
        )

    return CheckResult(
        rule_id="node_ids_dense",
        severity=Severity.ERROR,
        passed=True,
        message="Node ids are contiguous from 0",
        evidence={},
    )


def check_edge_references(graph):
    """Every edge end must name an existing node."""
    count = len(graph.nodes)
    dangling = [e.id for e in graph.edges if not (0 <= e.n1 < count and 0 <= e.n2 < count)]

    if dangling:
        return CheckResult(
            rule_id="edge_references",
            severity=Severity.ERROR,
            passed=False,
            message=f"{len(dangling)} edges reference missing nodes",
            evidence={"edge_ids": dangling[:20]},
        )

    return CheckResult(
        rule_id="edge_references",
        severity=Severity.ERROR,
        passed=True,
        message="All edges reference existing nodes",
        evidence={},
    )


def check_no_self_loops(graph):
    """No member may start and end at the same joint."""
    loops = [e.id for e in graph.edges if e.n1 == e.n2]

    if loops:
        return CheckResult(
            rule_id="no_self_loops",
            severity=Severity.ERROR,
            passed=False,
            message=f"{len(loops)} zero-length members",
            evidence={"edge_ids": loops[:20]},
        )

    return CheckResult(
        rule_id="no_self_loops",
        severity=Severity.ERROR,
        passed=True,
        message="No zero-length members",
        evidence={},
    )


def check_no_duplicate_edges(graph):
    """Each unordered joint pair carries at most one member."""
    counts = Counter(e.key for e in graph.edges)
    repeated = [list(pair) for pair, n in counts.items() if n > 1]

    if repeated:
        return CheckResult(
            rule_id="no_duplicate_edges",
            severity=Severity.ERROR,
            passed=False,
            message=f"{len(repeated)} joint pairs carry more than one member",
            evidence={"pairs": repeated[:20]},
        )

    return CheckResult(
        rule_id="no_duplicate_edges",
        severity=Severity.ERROR,
        passed=True,
        message="No duplicated members",
        evidence={},
    )


def check_no_isolated_nodes(graph):
    """Every joint must be the end of at least one member."""
    used = {e.n1 for e in graph.edges} | {e.n2 for e in graph.edges}
    isolated = [n.id for n in graph.nodes if n.id not in used]

    if isolated:
        return CheckResult(
            rule_id="no_isolated_nodes",
            severity=Severity.ERROR,
            passed=False,
            message=f"{len(isolated)} joints have no members",
            evidence={"node_ids": isolated[:20]},
        )

    return CheckResult(
        rule_id="no_isolated_nodes",
        severity=Severity.ERROR,
        passed=True,
        message="Every joint has a member",
        evidence={},
    )


def check_connected(graph):
    """Warn when the drawing falls apart into several pieces."""
    g = graph_to_networkx(graph)
    if g.number_of_nodes() == 0:
        parts = 0
    else:
        parts = nx.number_connected_components(g)

    if parts > 1:
        sizes = sorted((len(c) for c in nx.connected_components(g)), reverse=True)
        return CheckResult(
            rule_id="connected",
            severity=Severity.WARN,
            passed=False,
            message=f"Graph has {parts} disconnected parts",
            evidence={"component_sizes": sizes[:20]},
        )

    return CheckResult(
        rule_id="connected",
        severity=Severity.WARN,
        passed=True,
        message="Graph is connected",
        evidence={"components": parts},
    )


def check_planar_members(graph):
    """
    Warn when two members cross without a joint.

    Crossings are split into joints during vectorization, so survivors are
    crossings too close to a member end to be split.
    """
    lines = [
        LineString([(graph.nodes[e.n1].x, graph.nodes[e.n1].y), (graph.nodes[e.n2].x, graph.nodes[e.n2].y)])
        for e in graph.edges
    ]

    crossing = []
    for i in range(len(lines)):
        for j in range(i + 1, len(lines)):
            if lines[i].crosses(lines[j]):
                crossing.append([graph.edges[i].id, graph.edges[j].id])

    if crossing:
        return CheckResult(
            rule_id="planar_members",
            severity=Severity.WARN,
            passed=False,
            message=f"{len(crossing)} member pairs cross without a joint",
            evidence={"edge_pairs": crossing[:20]},
        )

    return CheckResult(
        rule_id="planar_members",
        severity=Severity.WARN,
        passed=True,
        message="No members cross between joints",
        evidence={},
    )
