"""Tests for crossing detection and segment splitting."""

import pytest

from trussdraw.graph.intersect import segment_intersection, split_at_crossings


class TestSegmentIntersection:
    """Tests for the pairwise interior crossing test."""

    def test_x_crossing_at_midpoints(self):
        """Diagonals of a square cross halfway along both."""
        hit = segment_intersection((0, 0), (100, 100), (100, 0), (0, 100))
        assert hit is not None
        x, y, t, u = hit
        assert (x, y) == pytest.approx((50, 50))
        assert t == pytest.approx(0.5)
        assert u == pytest.approx(0.5)

    def test_parameters_follow_each_segment(self):
        """t runs along the first segment and u along the second."""
        x, y, t, u = segment_intersection((0, 0), (100, 0), (70, -50), (70, 50))
        assert (x, y) == pytest.approx((70, 0))
        assert t == pytest.approx(0.7)
        assert u == pytest.approx(0.5)

    def test_parallel_segments_ignored(self):
        """Parallel and collinear segments never cross."""
        assert segment_intersection((0, 0), (10, 0), (0, 5), (10, 5)) is None
        assert segment_intersection((0, 0), (10, 0), (5, 0), (15, 0)) is None

    def test_shared_endpoint_is_not_a_crossing(self):
        """Segments meeting at an end are left for clustering."""
        assert segment_intersection((0, 0), (100, 0), (100, 0), (100, 100)) is None

    def test_t_junction_is_not_a_crossing(self):
        """An end landing on another segment's interior is not split."""
        assert segment_intersection((0, 0), (100, 0), (50, 0), (50, 100)) is None

    def test_crossing_inside_margin_ignored(self):
        """Crossings within the end margin are discarded."""
        # crosses the horizontal at t = 0.01
        assert segment_intersection((0, 0), (100, 0), (1, -50), (1, 50)) is None

    def test_margin_is_tunable(self):
        """A zero margin accepts crossings right next to the ends."""
        hit = segment_intersection((0, 0), (100, 0), (1, -50), (1, 50), margin=0.0)
        assert hit is not None
        assert hit[2] == pytest.approx(0.01)

    def test_lines_crossing_outside_segments(self):
        """The infinite lines cross, the segments do not."""
        assert segment_intersection((0, 0), (10, 0), (20, -5), (20, 5)) is None


class TestSplitAtCrossings:
    """Tests for splitting a pool of segments at all crossings."""

    def test_no_crossings_passes_through(self):
        """Segments without crossings come back unchanged and in order."""
        segments = [((0, 0), (10, 0)), ((0, 5), (10, 5))]
        assert split_at_crossings(segments) == segments

    def test_x_splits_into_four(self):
        """Each diagonal of the X becomes two halves."""
        segments = [((0, 0), (100, 100)), ((100, 0), (0, 100))]
        result = split_at_crossings(segments)

        assert len(result) == 4
        assert result[0][0] == (0, 0)
        assert result[0][1] == pytest.approx((50, 50))
        assert result[1][1] == (100, 100)
        assert result[2][0] == (100, 0)
        assert result[3][1] == (0, 100)

    def test_multiple_cuts_sorted_along_segment(self):
        """Cuts found out of order are applied from start to end."""
        segments = [
            ((0, 0), (100, 0)),
            ((70, -50), (70, 50)),
            ((30, -50), (30, 50)),
        ]
        result = split_at_crossings(segments)

        assert len(result) == 7

        chain = result[:3]
        assert chain[0][0] == (0, 0)
        assert chain[0][1] == pytest.approx((30, 0))
        assert chain[1][0] == pytest.approx((30, 0))
        assert chain[1][1] == pytest.approx((70, 0))
        assert chain[2][0] == pytest.approx((70, 0))
        assert chain[2][1] == (100, 0)

        # verticals follow, each cut once at its middle
        assert result[3][0] == (70, -50)
        assert result[3][1] == pytest.approx((70, 0))
        assert result[4][1] == (70, 50)
        assert result[5][0] == (30, -50)
        assert result[6][1] == (30, 50)

    def test_chain_is_continuous(self):
        """Consecutive pieces of a split segment share their joint point."""
        segments = [((0, 0), (200, 0))] + [((x, -10), (x, 10)) for x in (150, 50, 100)]
        result = split_at_crossings(segments)

        chain = result[:4]
        for (_, end), (start, _) in zip(chain, chain[1:]):
            assert end == start
        xs = [a[0] for a, _ in chain]
        assert xs == sorted(xs)

    def test_same_point_shared_by_both_segments(self):
        """Both crossing segments are cut at the identical point object."""
        segments = [((0, 0), (100, 100)), ((100, 0), (0, 100))]
        result = split_at_crossings(segments)
        assert result[0][1] == result[2][1]

    def test_empty_input(self):
        """No segments, no work."""
        assert split_at_crossings([]) == []
