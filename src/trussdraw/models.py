"""
Pydantic data models for trussdraw.

Stroke input is validated here before it reaches the geometry code, and the
resulting truss graph, validation checks and reports flow out through these
models.
"""

import math
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Severity(str, Enum):
    """Severity levels for validation checks."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"


class PointInput(BaseModel):
    """A sampled pen position."""
    x: float
    y: float

    model_config = ConfigDict(extra="ignore")

    @field_validator("x", "y")
    @classmethod
    def _finite(cls, value):
        if not math.isfinite(value):
            raise ValueError("coordinates must be finite numbers")
        return value


class StrokeInput(BaseModel):
    """One continuous pen motion, as an ordered list of points."""
    points: List[PointInput] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @field_validator("points", mode="before")
    @classmethod
    def _coerce_pairs(cls, value):
        # Accept [x, y] pairs as well as {"x": .., "y": ..} mappings
        if not isinstance(value, (list, tuple)):
            return value
        coerced = []
        for item in value:
            if isinstance(item, (list, tuple)):
                if len(item) != 2:
                    raise ValueError(f"point must have exactly 2 coordinates, got {len(item)}")
                coerced.append({"x": item[0], "y": item[1]})
            else:
                coerced.append(item)
        return coerced

    def as_tuples(self):
        """Points as plain (x, y) tuples for the geometry code."""
        return [(p.x, p.y) for p in self.points]


class StrokeSet(BaseModel):
    """All strokes of one drawing."""
    strokes: List[StrokeInput] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @field_validator("strokes", mode="before")
    @classmethod
    def _wrap_bare_lists(cls, value):
        if not isinstance(value, (list, tuple)):
            return value
        return [{"points": s} if isinstance(s, (list, tuple)) else s for s in value]

    def as_tuples(self):
        return [s.as_tuples() for s in self.strokes]


class Node(BaseModel):
    """A structural joint."""
    id: int = Field(..., ge=0)
    x: float
    y: float

    model_config = ConfigDict(extra="forbid", frozen=True)


class Edge(BaseModel):
    """A straight member between two joints (undirected)."""
    id: int = Field(..., ge=0)
    n1: int = Field(..., ge=0)
    n2: int = Field(..., ge=0)

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def key(self):
        """Unordered node pair."""
        return (self.n1, self.n2) if self.n1 < self.n2 else (self.n2, self.n1)


class TrussGraph(BaseModel):
    """Output graph of one vectorization pass."""
    nodes: List[Node] = Field(default_factory=list)
    edges: List[Edge] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @property
    def is_empty(self):
        return not self.nodes and not self.edges

    def bounds(self):
        """[min_x, min_y, max_x, max_y] of all nodes."""
        return compute_bbox([(n.x, n.y) for n in self.nodes])


class CheckResult(BaseModel):
    """Result of a single validation check."""
    rule_id: str
    severity: Severity
    passed: bool
    message: str
    evidence: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")


class ValidationReport(BaseModel):
    """Collection of validation check results."""
    checks: List[CheckResult] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @property
    def has_errors(self):
        """Check if any errors exist."""
        return any(c.severity == Severity.ERROR and not c.passed for c in self.checks)

    @property
    def error_count(self):
        """Count of failed error-level checks."""
        return sum(1 for c in self.checks if c.severity == Severity.ERROR and not c.passed)

    @property
    def warning_count(self):
        """Count of failed warning-level checks."""
        return sum(1 for c in self.checks if c.severity == Severity.WARN and not c.passed)

    def get(self, rule_id):
        """Look up a check by rule id."""
        return next((c for c in self.checks if c.rule_id == rule_id), None)


class VectorizeRequest(BaseModel):
    """Body of the HTTP vectorize and export endpoints."""
    strokes: List[StrokeInput] = Field(default_factory=list)
    snap_radius: float = 30.0
    simplify_epsilon: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("strokes", mode="before")
    @classmethod
    def _wrap_bare_lists(cls, value):
        if not isinstance(value, (list, tuple)):
            return value
        return [{"points": s} if isinstance(s, (list, tuple)) else s for s in value]


def compute_bbox(points):
    """
    Compute bounding box from a list of (x, y) points.

    Returns [min_x, min_y, max_x, max_y].
    """
    if not points:
        return [0.0, 0.0, 0.0, 0.0]

    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    return [min(xs), min(ys), max(xs), max(ys)]
