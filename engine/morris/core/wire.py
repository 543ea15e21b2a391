"""
JSON wire format for moves.

A move travels as an object with three keys, each null or a [ring, position]
pair:

    {"square": [0, 1], "from_square": [0, 0], "remove_square": null}

"square" is required. A null move stands for a pass.
"""

from __future__ import annotations
from typing import Annotated, Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .bitboard import RINGS, POSITIONS
from .errors import MoveDecodeError
from .moves import Move
from .pointset import Point

Ring = Annotated[int, Field(strict=True, ge=0, le=RINGS - 1)]
Position = Annotated[int, Field(strict=True, ge=0, le=POSITIONS - 1)]
WirePoint = tuple[Ring, Position]


class WireMove(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    square: WirePoint
    from_square: Optional[WirePoint] = None
    remove_square: Optional[WirePoint] = None

    @classmethod
    def from_move(cls, move: Move) -> WireMove:
        return cls(
            square=_pair(move.dst),
            from_square=_pair(move.src),
            remove_square=_pair(move.capture),
        )

    def to_move(self) -> Move:
        return Move(
            dst=Point(*self.square),
            src=Point(*self.from_square) if self.from_square is not None else None,
            capture=Point(*self.remove_square) if self.remove_square is not None else None,
        )


def _pair(point: Optional[Point]) -> Optional[tuple[int, int]]:
    if point is None:
        return None
    return point.ring, point.position


def encode_move(move: Optional[Move]) -> Optional[dict[str, Any]]:
    """Encode a move as a JSON-friendly dict (None for a pass)."""
    if move is None:
        return None
    return WireMove.from_move(move).model_dump(mode="json")


def encode_moves(moves: list[Move]) -> list[dict[str, Any]]:
    return [WireMove.from_move(m).model_dump(mode="json") for m in moves]


def move_to_json(move: Optional[Move]) -> str:
    if move is None:
        return "null"
    return WireMove.from_move(move).model_dump_json()


def decode_move(data: Any) -> Optional[Move]:
    """
    Decode a wire move (None decodes to a pass).

    Raises:
        MoveDecodeError: wrong shape, wrong arity, or out-of-range point
    """
    if data is None:
        return None
    try:
        return WireMove.model_validate(data).to_move()
    except ValidationError as e:
        raise MoveDecodeError(f"Invalid move: {e.error_count()} error(s)", e.errors()) from e


def move_from_json(text: str | bytes) -> Optional[Move]:
    """Decode a move from JSON text."""
    if not isinstance(text, (str, bytes, bytearray)):
        raise MoveDecodeError(f"Invalid move JSON: expected str or bytes, got {type(text).__name__}")
    if text.strip() in ("null", b"null"):
        return None
    try:
        return WireMove.model_validate_json(text).to_move()
    except ValidationError as e:
        raise MoveDecodeError(f"Invalid move JSON: {e.error_count()} error(s)", e.errors()) from e
