"""
Board state for Nine Men's Morris.

Boards are immutable values: applying a move produces a new Board and leaves
the old one untouched, so any Board can be shared freely between callers.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Optional
import numpy as np

from .bitboard import RINGS, POSITIONS, NUM_POINTS, iter_bits, index_to_point
from .config import RulesConfig, DEFAULT_RULES
from .pointset import Point, PointSet

if TYPE_CHECKING:
    from .moves import Move

BLACK = "black"
WHITE = "white"


@dataclass(frozen=True)
class Board:
    """
    Represents the complete state of a game.

    Attributes:
        black: Points occupied by black
        white: Points occupied by white
        placements_made: Placement moves made so far by both sides
        black_count: Black pieces on the board
        white_count: White pieces on the board
        black_to_move: True when black is the side to move
        rules: Rule constants this game is played under
    """
    black: PointSet = field(default_factory=PointSet.empty)
    white: PointSet = field(default_factory=PointSet.empty)
    placements_made: int = 0
    black_count: int = 0
    white_count: int = 0
    black_to_move: bool = True
    rules: RulesConfig = DEFAULT_RULES

    def __post_init__(self) -> None:
        if self.black & self.white:
            raise ValueError(f"Black and white overlap on {self.black & self.white!r}")
        if self.black_count != len(self.black) or self.white_count != len(self.white):
            raise ValueError(
                f"Piece counts ({self.black_count}, {self.white_count}) do not match "
                f"the board ({len(self.black)}, {len(self.white)})"
            )
        if self.placements_made < 0:
            raise ValueError(f"placements_made must be non-negative, got {self.placements_made}")

    @classmethod
    def new_game(cls, rules: RulesConfig = DEFAULT_RULES) -> Board:
        """Create an empty board with black to move."""
        return cls(rules=rules)

    @classmethod
    def from_points(
        cls,
        black: Iterable[Point] = (),
        white: Iterable[Point] = (),
        placements_made: int = 0,
        black_to_move: bool = True,
        rules: RulesConfig = DEFAULT_RULES,
    ) -> Board:
        """Build a position from point lists, deriving the piece counts."""
        black_set = PointSet.from_points(black)
        white_set = PointSet.from_points(white)
        return cls(
            black=black_set,
            white=white_set,
            placements_made=placements_made,
            black_count=len(black_set),
            white_count=len(white_set),
            black_to_move=black_to_move,
            rules=rules,
        )

    @property
    def occupied(self) -> PointSet:
        return self.black | self.white

    @property
    def empty(self) -> PointSet:
        """Points with no piece on them."""
        return ~self.occupied

    @property
    def my_points(self) -> PointSet:
        """Points of the side to move."""
        return self.black if self.black_to_move else self.white

    @property
    def opp_points(self) -> PointSet:
        return self.white if self.black_to_move else self.black

    @property
    def my_count(self) -> int:
        return self.black_count if self.black_to_move else self.white_count

    @property
    def opp_count(self) -> int:
        return self.white_count if self.black_to_move else self.black_count

    @property
    def side_to_move(self) -> str:
        return BLACK if self.black_to_move else WHITE

    # --- Phases ---

    def is_placement_phase(self) -> bool:
        """True until both sides have placed all their pieces."""
        return self.placements_made < self.rules.placement_quota

    def is_movement_phase(self) -> bool:
        return not self.is_placement_phase()

    def is_flying_phase(self) -> bool:
        """Movement phase with the side to move down to its last few pieces."""
        return self.is_movement_phase() and self.my_count == self.rules.min_pieces

    # --- Results ---

    def is_black_winner(self) -> bool:
        return self.is_movement_phase() and self.white_count < self.rules.min_pieces

    def is_white_winner(self) -> bool:
        return self.is_movement_phase() and self.black_count < self.rules.min_pieces

    def is_game_over(self) -> bool:
        return self.is_black_winner() or self.is_white_winner()

    def get_winner(self) -> Optional[str]:
        """Return BLACK, WHITE, or None if no winner yet."""
        if self.is_black_winner():
            return BLACK
        if self.is_white_winner():
            return WHITE
        return None

    # --- Transitions ---

    def legal_moves(self) -> list[Move]:
        from .moves import get_legal_moves
        return get_legal_moves(self)

    def make_move(self, move: Optional[Move]) -> Board:
        """Return the board after move (None passes). Raises IllegalMoveError."""
        from .moves import make_move
        return make_move(self, move)

    def to_tensor(self) -> np.ndarray:
        """
        Convert state to neural network input tensor.

        Returns (4, 3, 8) float32 array indexed [plane, ring, position]:
          - Plane 0: Side to move's pieces
          - Plane 1: Opponent's pieces
          - Plane 2: Empty points
          - Plane 3: Side to move indicator (all 1s if black, all 0s if white)
        """
        planes = np.zeros((4, RINGS, POSITIONS), dtype=np.float32)

        for plane, points in enumerate((self.my_points, self.opp_points, self.empty)):
            for idx in iter_bits(points.bits):
                ring, position = index_to_point(idx)
                planes[plane, ring, position] = 1.0

        if self.black_to_move:
            planes[3, :, :] = 1.0

        return planes

    def symbols(self) -> dict[int, str]:
        """Map every point index to 'B', 'W' or '.'."""
        symbols = {}
        for idx in range(NUM_POINTS):
            if self.black.bits >> idx & 1:
                symbols[idx] = 'B'
            elif self.white.bits >> idx & 1:
                symbols[idx] = 'W'
            else:
                symbols[idx] = '.'
        return symbols

    def status_line(self) -> str:
        phase = "placement" if self.is_placement_phase() else (
            "flying" if self.is_flying_phase() else "movement")
        return (
            f"{self.side_to_move.capitalize()} to move ({phase}, "
            f"placed {self.placements_made}/{self.rules.placement_quota}, "
            f"black {self.black_count}, white {self.white_count})"
        )

    def __repr__(self) -> str:
        """Pretty print the board."""
        return render_diagram(self.symbols()) + "\n\n" + self.status_line()


# Point slots in the classic board drawing, keyed p<index>
BOARD_DIAGRAM = "\n".join([
    "{p0}-----{p1}-----{p2}",
    "|     |     |",
    "| {p8}---{p9}---{p10} |",
    "| |   |   | |",
    "| | {p16}-{p17}-{p18} | |",
    "| | |   | | |",
    "{p7}-{p15}-{p23}   {p19}-{p11}-{p3}",
    "| | |   | | |",
    "| | {p22}-{p21}-{p20} | |",
    "| |   |   | |",
    "| {p14}---{p13}---{p12} |",
    "|     |     |",
    "{p6}-----{p5}-----{p4}",
])


def render_diagram(symbols: dict[int, str]) -> str:
    """Fill the board drawing with one symbol per point index."""
    return BOARD_DIAGRAM.format(**{f"p{idx}": symbols.get(idx, '.') for idx in range(NUM_POINTS)})
