"""
Bitboard utilities for Nine Men's Morris.

Board layout (3 rings x 8 positions = 24 points, fits in a 24-bit int):

  0:0 ----------- 0:1 ----------- 0:2
   |               |               |
   |   1:0 ------ 1:1 ------ 1:2   |
   |    |          |          |    |
   |    |   2:0 - 2:1 - 2:2   |    |
   |    |    |           |    |    |
  0:7 - 1:7 - 2:7       2:3 - 1:3 - 0:3
   |    |    |           |    |    |
   |    |   2:6 - 2:5 - 2:4   |    |
   |    |          |          |    |
   |   1:6 ------ 1:5 ------ 1:4   |
   |               |               |
  0:6 ----------- 0:5 ----------- 0:4

Point index = ring * 8 + position (ring 0 = outer, position 0 = top left
corner, positions run clockwise). Even positions are corners, odd positions
are edge midpoints.
"""

from typing import Iterator

# Board dimensions
RINGS = 3
POSITIONS = 8
NUM_POINTS = RINGS * POSITIONS  # 24

# Mask for valid points (bits 0-23)
VALID_MASK = (1 << NUM_POINTS) - 1

# Precomputed tables (initialized at module load)
ADJACENT: list[int] = [0] * NUM_POINTS
MILL_MASKS: list[int] = []


def point_to_index(ring: int, position: int) -> int:
    """Convert (ring, position) to point index, folding out-of-range values."""
    return (ring % RINGS) * POSITIONS + (position % POSITIONS)


def index_to_point(idx: int) -> tuple[int, int]:
    """Convert point index to (ring, position)."""
    return idx // POSITIONS, idx % POSITIONS


def point_to_str(idx: int) -> str:
    """Convert point index to notation (e.g., '1:3')."""
    ring, position = index_to_point(idx)
    return f"{ring}:{position}"


def str_to_point(s: str) -> int:
    """Convert notation to point index. Raises ValueError on bad input."""
    parts = s.strip().split(':')
    if len(parts) != 2:
        raise ValueError(f"Invalid point: {s!r}")
    ring, position = int(parts[0]), int(parts[1])
    if not is_valid_point(ring, position):
        raise ValueError(f"Point out of range: {s!r}")
    return point_to_index(ring, position)


def is_valid_point(ring: int, position: int) -> bool:
    """Check if (ring, position) is on the board without folding."""
    return 0 <= ring < RINGS and 0 <= position < POSITIONS


def bit(idx: int) -> int:
    """Return bitboard with single bit set at point."""
    assert 0 <= idx < NUM_POINTS, f"point index out of range: {idx}"
    return 1 << idx


def popcount(bb: int) -> int:
    """Count number of set bits."""
    return bin(bb).count('1')


def lsb(bb: int) -> int:
    """Return index of least significant bit (or -1 if empty)."""
    bb = int(bb)  # Handle numpy ints
    if bb == 0:
        return -1
    return (bb & -bb).bit_length() - 1


def iter_bits(bb: int) -> Iterator[int]:
    """Iterate over indices of set bits, lowest first."""
    bb = int(bb)  # Handle numpy ints
    while bb:
        idx = lsb(bb)
        yield idx
        bb &= bb - 1  # Clear LSB


def bb_to_points(bb: int) -> list[int]:
    """Convert bitboard to list of point indices."""
    return list(iter_bits(bb))


def _init_adjacency() -> None:
    """Precompute neighbour bitboards for all points."""
    for idx in range(NUM_POINTS):
        ring, position = index_to_point(idx)
        adj = bit(point_to_index(ring, position - 1))
        adj |= bit(point_to_index(ring, position + 1))
        if position % 2 == 1:
            # Edge midpoints carry the spokes between rings
            if ring > 0:
                adj |= bit(point_to_index(ring - 1, position))
            if ring < RINGS - 1:
                adj |= bit(point_to_index(ring + 1, position))
        ADJACENT[idx] = adj


def _init_mill_masks() -> None:
    """Precompute the 16 mill lines: 12 along the rings, 4 across the spokes."""
    for ring in range(RINGS):
        for position in range(0, POSITIONS, 2):
            mask = 0
            for i in range(3):
                mask |= bit(point_to_index(ring, position + i))
            MILL_MASKS.append(mask)
    for position in range(1, POSITIONS, 2):
        mask = 0
        for ring in range(RINGS):
            mask |= bit(point_to_index(ring, position))
        MILL_MASKS.append(mask)


def mill_cover(bb: int) -> int:
    """Union of every mill line fully contained in bb."""
    result = 0
    for mask in MILL_MASKS:
        if (bb & mask) == mask:
            result |= mask
    return result


# Initialize lookup tables at module load
_init_adjacency()
_init_mill_masks()
