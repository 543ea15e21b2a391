"""Tests for bitboard utilities and geometry tables."""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from morris.core.bitboard import (
    RINGS, POSITIONS, NUM_POINTS, VALID_MASK,
    point_to_index, index_to_point, point_to_str, str_to_point,
    bit, popcount, lsb, iter_bits, bb_to_points, mill_cover,
    ADJACENT, MILL_MASKS
)


class TestPointConversion:
    def test_index_to_point(self):
        assert index_to_point(0) == (0, 0)
        assert index_to_point(7) == (0, 7)
        assert index_to_point(8) == (1, 0)
        assert index_to_point(23) == (2, 7)

    def test_point_to_index(self):
        assert point_to_index(0, 0) == 0
        assert point_to_index(1, 3) == 11
        assert point_to_index(2, 7) == 23

    def test_point_to_index_wraps(self):
        assert point_to_index(0, 8) == 0
        assert point_to_index(0, -1) == 7
        assert point_to_index(3, 1) == 1

    def test_notation(self):
        assert point_to_str(0) == '0:0'
        assert point_to_str(11) == '1:3'
        assert str_to_point('1:3') == 11
        assert str_to_point(' 2:7 ') == 23

    def test_notation_roundtrip(self):
        for idx in range(NUM_POINTS):
            assert str_to_point(point_to_str(idx)) == idx

    @pytest.mark.parametrize("text", ["", "1", "1:", "3:0", "0:8", "a:b", "1:2:3"])
    def test_bad_notation(self, text):
        with pytest.raises(ValueError):
            str_to_point(text)


class TestBitOperations:
    def test_bit(self):
        assert bit(0) == 1
        assert bit(3) == 8
        assert bit(23) == 1 << 23

    def test_bit_out_of_range(self):
        with pytest.raises(AssertionError):
            bit(24)

    def test_popcount(self):
        assert popcount(0) == 0
        assert popcount(0b1011) == 3
        assert popcount(VALID_MASK) == 24

    def test_lsb(self):
        assert lsb(0) == -1
        assert lsb(0b1000) == 3

    def test_iter_bits(self):
        assert list(iter_bits(0b1010101)) == [0, 2, 4, 6]
        assert bb_to_points(bit(23) | bit(1)) == [1, 23]

    def test_iter_bits_numpy_int(self):
        import numpy as np
        assert list(iter_bits(np.int64(0b110))) == [1, 2]


class TestAdjacency:
    def test_corner_has_two_neighbours(self):
        # 0:0 touches 0:7 and 0:1 only
        assert bb_to_points(ADJACENT[0]) == [1, 7]

    def test_outer_midpoint(self):
        # 0:1 touches its ring neighbours and 1:1
        assert bb_to_points(ADJACENT[1]) == [0, 2, 9]

    def test_middle_midpoint(self):
        # 1:1 touches 1:0, 1:2, 0:1 and 2:1
        assert bb_to_points(ADJACENT[9]) == [1, 8, 10, 17]

    def test_inner_midpoint(self):
        assert bb_to_points(ADJACENT[17]) == [9, 16, 18]

    def test_ring_wraps(self):
        # 2:7 touches 2:6, 2:0 and 1:7
        assert bb_to_points(ADJACENT[23]) == [15, 16, 22]

    def test_symmetric(self):
        for a in range(NUM_POINTS):
            for b in iter_bits(ADJACENT[a]):
                assert ADJACENT[b] & bit(a), f"{a} -> {b} not symmetric"

    def test_degrees(self):
        degrees = [popcount(ADJACENT[i]) for i in range(NUM_POINTS)]
        # 12 corners of degree 2, 8 outer/inner midpoints of 3, 4 middle midpoints of 4
        assert degrees.count(2) == 12
        assert degrees.count(3) == 8
        assert degrees.count(4) == 4

    def test_no_self_loops(self):
        for i in range(NUM_POINTS):
            assert not ADJACENT[i] & bit(i)


class TestMillMasks:
    def test_count(self):
        assert len(MILL_MASKS) == 16
        assert len(set(MILL_MASKS)) == 16

    def test_three_points_each(self):
        for mask in MILL_MASKS:
            assert popcount(mask) == 3
            assert mask & ~VALID_MASK == 0

    def test_ring_mills(self):
        assert (bit(0) | bit(1) | bit(2)) in MILL_MASKS
        # Wraps around from 0:6 to 0:0
        assert (bit(6) | bit(7) | bit(0)) in MILL_MASKS
        assert (bit(20) | bit(21) | bit(22)) in MILL_MASKS

    def test_radial_mills(self):
        for position in range(1, POSITIONS, 2):
            mask = 0
            for ring in range(RINGS):
                mask |= bit(point_to_index(ring, position))
            assert mask in MILL_MASKS

    def test_no_corner_spokes(self):
        assert (bit(0) | bit(8) | bit(16)) not in MILL_MASKS

    def test_every_point_in_two_mills(self):
        for i in range(NUM_POINTS):
            assert sum(1 for m in MILL_MASKS if m & bit(i)) == 2


class TestMillCover:
    def test_empty(self):
        assert mill_cover(0) == 0

    def test_partial_line(self):
        assert mill_cover(bit(0) | bit(1)) == 0

    def test_single_mill(self):
        line = bit(0) | bit(1) | bit(2)
        assert mill_cover(line | bit(12)) == line

    def test_overlapping_mills(self):
        # 0:0-0:1-0:2 and 0:2-0:3-0:4 share 0:2
        points = bit(0) | bit(1) | bit(2) | bit(3) | bit(4)
        assert mill_cover(points) == points

    def test_superset_has_larger_value(self):
        before = bit(0) | bit(1)
        after = before | bit(2)
        assert mill_cover(after) > mill_cover(before)
