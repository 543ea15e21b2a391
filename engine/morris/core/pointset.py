"""
Point and point-set value types.

A PointSet is a thin immutable wrapper around a 24-bit bitboard. Treated as
an unsigned integer, a proper subset always has a smaller value than its
superset, which is what mill detection relies on.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Iterator, NamedTuple

from .bitboard import (
    NUM_POINTS, VALID_MASK,
    bit, popcount, iter_bits, point_to_index, index_to_point,
    point_to_str, str_to_point
)


class Point(NamedTuple):
    """A board point: ring 0 (outer) to 2 (inner), position 0-7 clockwise."""
    ring: int
    position: int

    @classmethod
    def of(cls, ring: int, position: int) -> Point:
        """Build a point, wrapping ring and position into range."""
        return cls.from_index(point_to_index(ring, position))

    @classmethod
    def from_index(cls, idx: int) -> Point:
        assert 0 <= idx < NUM_POINTS, f"point index out of range: {idx}"
        return cls(*index_to_point(idx))

    @classmethod
    def parse(cls, s: str) -> Point:
        """Parse '1:3' notation."""
        return cls.from_index(str_to_point(s))

    @property
    def index(self) -> int:
        return point_to_index(self.ring, self.position)

    @property
    def is_corner(self) -> bool:
        return self.position % 2 == 0

    def __str__(self) -> str:
        return point_to_str(self.index)


@dataclass(frozen=True, slots=True)
class PointSet:
    """Immutable set of board points backed by a bitboard."""

    bits: int = 0

    def __post_init__(self) -> None:
        assert 0 <= self.bits <= VALID_MASK, f"bitboard out of range: {self.bits:#x}"

    @classmethod
    def empty(cls) -> PointSet:
        return cls(0)

    @classmethod
    def full(cls) -> PointSet:
        return cls(VALID_MASK)

    @classmethod
    def from_point(cls, point: Point) -> PointSet:
        return cls(bit(point_to_index(point.ring, point.position)))

    @classmethod
    def from_points(cls, points: Iterable[Point]) -> PointSet:
        bb = 0
        for point in points:
            bb |= bit(point_to_index(point.ring, point.position))
        return cls(bb)

    def __or__(self, other: PointSet) -> PointSet:
        return PointSet(self.bits | other.bits)

    def __and__(self, other: PointSet) -> PointSet:
        return PointSet(self.bits & other.bits)

    def __sub__(self, other: PointSet) -> PointSet:
        return PointSet(self.bits & ~other.bits)

    def __invert__(self) -> PointSet:
        return PointSet(~self.bits & VALID_MASK)

    def union(self, other: PointSet) -> PointSet:
        return self | other

    def intersection(self, other: PointSet) -> PointSet:
        return self & other

    def difference(self, other: PointSet) -> PointSet:
        return self - other

    def complement(self) -> PointSet:
        return ~self

    def __contains__(self, point: object) -> bool:
        if not isinstance(point, Point):
            return False
        return bool(self.bits & bit(point.index))

    def __iter__(self) -> Iterator[Point]:
        """Points in ascending index order. Each call starts a fresh pass."""
        return (Point.from_index(idx) for idx in iter_bits(self.bits))

    def __len__(self) -> int:
        return popcount(self.bits)

    def __bool__(self) -> bool:
        return self.bits != 0

    def __int__(self) -> int:
        return self.bits

    def __repr__(self) -> str:
        return "PointSet({" + ", ".join(str(p) for p in self) + "})"
