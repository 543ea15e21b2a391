"""Tests for Point and PointSet."""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from morris.core.pointset import Point, PointSet


class TestPoint:
    def test_index(self):
        assert Point(0, 0).index == 0
        assert Point(1, 3).index == 11
        assert Point(2, 7).index == 23

    def test_from_index(self):
        assert Point.from_index(11) == Point(1, 3)

    def test_from_index_out_of_range(self):
        with pytest.raises(AssertionError):
            Point.from_index(24)
        with pytest.raises(AssertionError):
            Point.from_index(-1)

    def test_of_wraps(self):
        assert Point.of(4, 9) == Point(1, 1)
        assert Point.of(0, -1) == Point(0, 7)

    def test_corner(self):
        assert Point(0, 0).is_corner
        assert Point(2, 6).is_corner
        assert not Point(1, 3).is_corner

    def test_str_and_parse(self):
        assert str(Point(1, 3)) == '1:3'
        assert Point.parse('2:5') == Point(2, 5)


class TestPointSetConstruction:
    def test_empty(self):
        s = PointSet.empty()
        assert len(s) == 0
        assert not s
        assert list(s) == []

    def test_singleton(self):
        s = PointSet.from_point(Point(1, 2))
        assert list(s) == [Point(1, 2)]
        assert int(s) == 1 << 10

    def test_singleton_wraps(self):
        assert PointSet.from_point(Point(3, 8)) == PointSet.from_point(Point(0, 0))

    def test_from_points(self):
        s = PointSet.from_points([Point(2, 0), Point(0, 1), Point(0, 1)])
        assert len(s) == 2

    def test_full(self):
        assert len(PointSet.full()) == 24

    def test_rejects_bits_outside_board(self):
        with pytest.raises(AssertionError):
            PointSet(1 << 24)


class TestPointSetOperations:
    a = PointSet.from_points([Point(0, 0), Point(0, 1), Point(1, 1)])
    b = PointSet.from_points([Point(0, 1), Point(2, 1)])

    def test_union(self):
        assert self.a | self.b == PointSet.from_points(
            [Point(0, 0), Point(0, 1), Point(1, 1), Point(2, 1)])
        assert self.a.union(self.b) == self.a | self.b

    def test_intersection(self):
        assert self.a & self.b == PointSet.from_point(Point(0, 1))
        assert self.a.intersection(self.b) == self.a & self.b

    def test_difference(self):
        assert self.a - self.b == PointSet.from_points([Point(0, 0), Point(1, 1)])
        assert self.a.difference(self.b) == self.a - self.b

    def test_complement(self):
        comp = ~self.a
        assert len(comp) == 21
        assert not comp & self.a
        assert comp | self.a == PointSet.full()
        assert self.a.complement() == comp

    def test_complement_of_empty_is_full(self):
        assert ~PointSet.empty() == PointSet.full()

    def test_operations_do_not_mutate(self):
        before = self.a.bits
        _ = self.a | self.b
        _ = self.a - self.b
        _ = ~self.a
        assert self.a.bits == before

    def test_membership(self):
        assert Point(1, 1) in self.a
        assert Point(2, 1) not in self.a
        assert "1:1" not in self.a

    def test_iteration_ascending(self):
        s = PointSet.from_points([Point(2, 7), Point(0, 3), Point(1, 0)])
        assert list(s) == [Point(0, 3), Point(1, 0), Point(2, 7)]

    def test_iteration_restartable(self):
        assert list(self.a) == list(self.a)

    def test_equality(self):
        assert PointSet.from_points([Point(0, 0), Point(0, 1)]) == \
            PointSet.from_points([Point(0, 1), Point(0, 0)])
        assert self.a != self.b

    def test_hashable(self):
        assert len({self.a, PointSet(self.a.bits), self.b}) == 2

    def test_proper_subset_has_smaller_value(self):
        sub = self.a - PointSet.from_point(Point(1, 1))
        assert int(sub) < int(self.a)
        # Holds for any proper subset, not just ones missing the top bit
        sub = self.a - PointSet.from_point(Point(0, 0))
        assert int(sub) < int(self.a)

    def test_repr(self):
        assert repr(self.b) == "PointSet({0:1, 2:1})"
