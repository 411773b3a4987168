"""Tests for the end-to-end stroke vectorization."""

import pytest

from trussdraw.pipeline import vectorize


def node_positions(graph):
    return [(n.x, n.y) for n in graph.nodes]


def edge_pairs(graph):
    return [(e.n1, e.n2) for e in graph.edges]


def assert_well_formed(graph):
    """Structural guarantees every output graph must meet."""
    assert [n.id for n in graph.nodes] == list(range(len(graph.nodes)))
    assert [e.id for e in graph.edges] == list(range(len(graph.edges)))

    keys = [e.key for e in graph.edges]
    assert len(keys) == len(set(keys))

    used = set()
    for e in graph.edges:
        assert e.n1 != e.n2
        assert 0 <= e.n1 < len(graph.nodes)
        assert 0 <= e.n2 < len(graph.nodes)
        used.update((e.n1, e.n2))
    assert used == set(range(len(graph.nodes)))


class TestScenarios:
    """Worked examples with known graphs."""

    def test_x_crossing(self, x_strokes):
        """Two crossing diagonals give four corners plus the crossing."""
        graph = vectorize(x_strokes, snap_radius=10)

        assert len(graph.nodes) == 5
        assert len(graph.edges) == 4
        assert node_positions(graph) == pytest.approx(
            [(0, 0), (50, 50), (100, 100), (100, 0), (0, 100)]
        )
        assert edge_pairs(graph) == [(0, 1), (1, 2), (3, 1), (1, 4)]
        assert_well_formed(graph)

    def test_single_line(self, single_line_stroke):
        graph = vectorize(single_line_stroke, snap_radius=30)

        assert node_positions(graph) == [(0, 0), (100, 0)]
        assert edge_pairs(graph) == [(0, 1)]

    def test_near_start_points_merge(self, near_start_strokes):
        """Start points 2.2 apart merge at their average."""
        graph = vectorize(near_start_strokes, snap_radius=10)

        assert (graph.nodes[0].x, graph.nodes[0].y) == pytest.approx((1.0, 0.5))
        # the far ends are 5 apart and merge too, so both strokes become
        # the same member
        assert len(graph.nodes) == 2
        assert len(graph.edges) == 1
        assert (graph.nodes[1].x, graph.nodes[1].y) == pytest.approx((50.0, 2.5))

    def test_near_start_points_with_distant_ends(self):
        """Only the shared start merges when the far ends stay apart."""
        strokes = [[(0, 0), (100, 0)], [(2, 1), (100, 60)]]
        graph = vectorize(strokes, snap_radius=30)

        assert node_positions(graph) == pytest.approx([(1.0, 0.5), (100, 0), (100, 60)])
        assert edge_pairs(graph) == [(0, 1), (0, 2)]

    def test_no_strokes(self):
        graph = vectorize([])
        assert graph.nodes == []
        assert graph.edges == []

    def test_single_point_stroke(self):
        graph = vectorize([[(5, 5)]])
        assert graph.is_empty

    def test_zero_length_stroke(self):
        """A stroke that never moves yields no members and no orphan joints."""
        graph = vectorize([[(5, 5), (5, 5)]])
        assert graph.is_empty

    def test_wobbly_triangle(self, wobbly_triangle_strokes):
        """Hand tremor is simplified away and near-miss corners meet."""
        graph = vectorize(wobbly_triangle_strokes, snap_radius=30)

        assert len(graph.nodes) == 3
        assert len(graph.edges) == 3
        assert_well_formed(graph)

    def test_corner_kept_or_dropped_by_epsilon(self):
        """The simplification tolerance decides whether a corner survives."""
        strokes = [[(0, 0), (50, 0), (50, 50)]]

        kept = vectorize(strokes, snap_radius=10)
        assert len(kept.nodes) == 3
        assert len(kept.edges) == 2

        dropped = vectorize(strokes, snap_radius=10, simplify_epsilon=100)
        assert len(dropped.nodes) == 2
        assert len(dropped.edges) == 1


class TestProperties:
    """Guarantees that hold for any input."""

    def test_deterministic(self, warren_truss_strokes):
        first = vectorize(warren_truss_strokes, snap_radius=12)
        second = vectorize(warren_truss_strokes, snap_radius=12)
        assert first == second

    def test_no_state_between_calls(self, x_strokes, single_line_stroke):
        """An unrelated call in between does not change the result."""
        before = vectorize(single_line_stroke)
        vectorize(x_strokes)
        assert vectorize(single_line_stroke) == before

    @pytest.mark.parametrize("radius", [1, 5, 12, 30, 60])
    def test_well_formed(self, warren_truss_strokes, radius):
        assert_well_formed(vectorize(warren_truss_strokes, snap_radius=radius))

    def test_crossings_between_strokes_become_joints(self, warren_truss_strokes):
        """The long diagonal is cut wherever it crosses another member."""
        plain = vectorize(warren_truss_strokes[:-1], snap_radius=5, simplify_epsilon=1)
        crossed = vectorize(warren_truss_strokes, snap_radius=5, simplify_epsilon=1)
        assert len(crossed.nodes) > len(plain.nodes) + 2
        assert len(crossed.edges) > len(plain.edges) + 1

    def test_larger_radius_never_adds_nodes(self, warren_truss_strokes):
        counts = [
            len(vectorize(warren_truss_strokes, snap_radius=r, simplify_epsilon=1).nodes)
            for r in (1, 2, 5, 10, 20, 40, 80)
        ]
        assert counts == sorted(counts, reverse=True)


class TestInput:
    """Tests for accepted input forms and rejected options."""

    def test_point_mappings_accepted(self):
        strokes = [[{"x": 0, "y": 0}, {"x": 100, "y": 0}]]
        graph = vectorize(strokes)
        assert node_positions(graph) == [(0, 0), (100, 0)]

    def test_stroke_objects_accepted(self):
        strokes = {"strokes": [{"points": [[0, 0], [100, 0]]}]}
        graph = vectorize(strokes)
        assert len(graph.edges) == 1

    @pytest.mark.parametrize("radius", [0, -1])
    def test_non_positive_radius_rejected(self, x_strokes, radius):
        with pytest.raises(ValueError):
            vectorize(x_strokes, snap_radius=radius)

    def test_negative_epsilon_rejected(self, x_strokes):
        with pytest.raises(ValueError):
            vectorize(x_strokes, simplify_epsilon=-1)

    def test_non_finite_options_rejected(self):
        """A NaN tolerance must not quietly drop every corner."""
        strokes = [[(0, 0), (50, 40), (100, 0)]]
        with pytest.raises(ValueError):
            vectorize(strokes, snap_radius=10, simplify_epsilon=float("nan"))
        with pytest.raises(ValueError):
            vectorize(strokes, snap_radius=float("inf"))

    def test_non_finite_coordinates_rejected(self):
        with pytest.raises(ValueError):
            vectorize([[(0, 0), (float("nan"), 1)]])
        with pytest.raises(ValueError):
            vectorize([[(0, 0), (float("inf"), 1)]])

    def test_malformed_point_rejected(self):
        with pytest.raises(ValueError):
            vectorize([[(0, 0, 0), (1, 1, 1)]])

    def test_config_defaults_used(self, x_strokes):
        from trussdraw.config import VectorizeConfig

        config = VectorizeConfig(snap_radius=10)
        assert vectorize(x_strokes, config=config) == vectorize(x_strokes, snap_radius=10)
