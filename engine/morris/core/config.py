"""Rule configuration for Nine Men's Morris."""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class RulesConfig:
    """
    Rule constants and variant switches.

    Attributes:
        pieces_per_side: Pieces each side places during the opening
        min_pieces: Piece count at which a side flies; below it the side has lost
        capture_from_mill_fallback: Allow taking a piece out of a mill when
            every opponent piece stands in one
        lift_moving_piece: Test mill formation for slides and flights with
            the piece taken off its source first, so that sliding along a
            line it already stands on does not count as a new mill
        plain_move_when_protected: Keep a mill-forming move as a plain move
            when every opponent piece is protected (it is dropped otherwise)
    """
    pieces_per_side: int = 9
    min_pieces: int = 3
    capture_from_mill_fallback: bool = False
    lift_moving_piece: bool = False
    plain_move_when_protected: bool = False

    def __post_init__(self) -> None:
        if self.min_pieces < 1:
            raise ValueError(f"min_pieces must be positive, got {self.min_pieces}")
        if self.pieces_per_side < self.min_pieces:
            raise ValueError(
                f"pieces_per_side ({self.pieces_per_side}) must be at least "
                f"min_pieces ({self.min_pieces})"
            )

    @property
    def placement_quota(self) -> int:
        """Total placements made by both sides before the movement phase."""
        return 2 * self.pieces_per_side


DEFAULT_RULES = RulesConfig()
