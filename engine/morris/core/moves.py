"""
Move generation for Nine Men's Morris.

Handles placements, slides, flights and mill captures with proper rule
enforcement, and applies moves to produce successor boards.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
import logging
from typing import Iterator, Optional

from .bitboard import ADJACENT, bit, iter_bits, mill_cover, str_to_point
from .errors import IllegalMoveError
from .pointset import Point, PointSet
from .state import Board

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Move:
    """
    A single move.

    Attributes:
        dst: Point the piece lands on
        src: Point the piece leaves (None for placements)
        capture: Opponent point removed after completing a mill (None otherwise)
    """
    dst: Point
    src: Optional[Point] = None
    capture: Optional[Point] = None

    @property
    def is_placement(self) -> bool:
        return self.src is None

    @property
    def is_capture(self) -> bool:
        return self.capture is not None

    def __str__(self) -> str:
        """Notation: '1:3' placement, '0:1-0:2' slide, suffix 'x2:5' capture."""
        text = str(self.dst) if self.src is None else f"{self.src}-{self.dst}"
        if self.capture is not None:
            text += f"x{self.capture}"
        return text


def parse_move(s: str) -> Move:
    """Parse move notation (inverse of str(Move))."""
    text = s.strip()
    capture = None
    if 'x' in text:
        text, capture_text = text.split('x', 1)
        capture = Point.from_index(str_to_point(capture_text))
    parts = text.split('-')
    if len(parts) == 1:
        return Move(dst=Point.from_index(str_to_point(parts[0])), capture=capture)
    if len(parts) == 2:
        return Move(
            dst=Point.from_index(str_to_point(parts[1])),
            src=Point.from_index(str_to_point(parts[0])),
            capture=capture,
        )
    raise ValueError(f"Invalid move format: {s}")


class MoveGenerator:
    """Generates legal moves for a board."""

    @staticmethod
    def mill_cover(points: PointSet) -> PointSet:
        """Points protected by completed mills within points."""
        return PointSet(mill_cover(points.bits))

    @staticmethod
    def creates_mill(base: int, dst: int) -> bool:
        """
        Check if adding dst to base completes a new mill.

        The cover after is always a superset of the cover before, and a
        strict superset always has a strictly larger bitboard value.
        """
        return mill_cover(base | bit(dst)) > mill_cover(base)

    @staticmethod
    def capturable_points(board: Board) -> PointSet:
        """
        Opponent points that a completed mill may remove.

        Points standing in a mill are protected. Under the fallback rule
        variant, a fully protected side loses that protection.
        """
        theirs = board.opp_points.bits
        capturable = theirs & ~mill_cover(theirs)
        if not capturable and board.rules.capture_from_mill_fallback:
            capturable = theirs
        return PointSet(capturable)

    @staticmethod
    def get_candidate_steps(board: Board) -> Iterator[tuple[Optional[int], int]]:
        """
        Yield (src, dst) pairs by phase, ordered by dst then src.

        Placement: any empty point, no source.
        Flying: any own piece to any empty point.
        Movement: any own piece to an adjacent empty point.
        """
        empty = board.empty.bits
        mine = board.my_points.bits

        if board.is_placement_phase():
            for dst in iter_bits(empty):
                yield None, dst
            return

        flying = board.is_flying_phase()
        for dst in iter_bits(empty):
            # Points this target can be reached from
            sources = mine if flying else mine & ADJACENT[dst]
            for src in iter_bits(sources):
                yield src, dst

    @staticmethod
    def get_legal_moves(board: Board) -> list[Move]:
        """
        Get all legal moves for the side to move.

        Rules:
        1. No moves once the game is over
        2. A move completing a mill removes one capturable opponent piece,
           one move per choice of capture
        3. A mill completed against an empty opponent side is a plain move
        4. A mill completed while every opponent piece is protected yields
           no move, unless rules.plain_move_when_protected keeps it plain
        """
        if board.is_game_over():
            return []

        rules = board.rules
        mine = board.my_points.bits
        has_opponent = bool(board.opp_points)
        capturable = [Point.from_index(i) for i in iter_bits(MoveGenerator.capturable_points(board).bits)]

        moves = []
        for src, dst in MoveGenerator.get_candidate_steps(board):
            base = mine
            if src is not None and rules.lift_moving_piece:
                base &= ~bit(src)
            dst_point = Point.from_index(dst)
            src_point = None if src is None else Point.from_index(src)

            if not MoveGenerator.creates_mill(base, dst):
                moves.append(Move(dst=dst_point, src=src_point))
            elif capturable:
                for capture in capturable:
                    moves.append(Move(dst=dst_point, src=src_point, capture=capture))
            elif not has_opponent or rules.plain_move_when_protected:
                moves.append(Move(dst=dst_point, src=src_point))

        return moves

    @staticmethod
    def apply(board: Board, move: Move) -> Board:
        """Apply a move already known to be legal."""
        mine = board.my_points
        theirs = board.opp_points
        my_count = board.my_count
        opp_count = board.opp_count
        placements_made = board.placements_made

        mine = mine | PointSet.from_point(move.dst)
        if move.src is not None:
            mine = mine - PointSet.from_point(move.src)
        else:
            my_count += 1
            placements_made += 1

        if move.capture is not None:
            theirs = theirs - PointSet.from_point(move.capture)
            opp_count -= 1

        if board.black_to_move:
            black, white, black_count, white_count = mine, theirs, my_count, opp_count
        else:
            black, white, black_count, white_count = theirs, mine, opp_count, my_count

        return replace(
            board,
            black=black,
            white=white,
            black_count=black_count,
            white_count=white_count,
            placements_made=placements_made,
            black_to_move=not board.black_to_move,
        )


# Convenience functions
def get_legal_moves(board: Board) -> list[Move]:
    """Get all legal moves for the side to move."""
    return MoveGenerator.get_legal_moves(board)


def legal_moves(board: Board) -> list[Move]:
    return MoveGenerator.get_legal_moves(board)


def is_legal_move(board: Board, move: Move) -> bool:
    """Check if a move is legal."""
    return move in MoveGenerator.get_legal_moves(board)


def get_move_count(board: Board) -> int:
    """Get number of legal moves."""
    return len(MoveGenerator.get_legal_moves(board))


def make_move(board: Board, move: Optional[Move]) -> Board:
    """
    Validate and apply a move, returning the successor board.

    Passing a move of None is a pass, accepted only when the side to move
    has no legal move; it just hands the turn over.

    Raises:
        IllegalMoveError: move is not legal here, or a pass was attempted
            while legal moves exist
    """
    moves = MoveGenerator.get_legal_moves(board)

    if move is None:
        if moves:
            raise IllegalMoveError(None, f"Cannot pass with {len(moves)} legal moves")
        logger.debug("%s has no legal moves, passing", board.side_to_move)
        return replace(board, black_to_move=not board.black_to_move)

    if move not in moves:
        logger.debug("Rejected illegal move %s for %s", move, board.side_to_move)
        raise IllegalMoveError(move)

    return MoveGenerator.apply(board, move)


def is_game_over(board: Board) -> bool:
    return board.is_game_over()


def is_black_winner(board: Board) -> bool:
    return board.is_black_winner()


def is_white_winner(board: Board) -> bool:
    return board.is_white_winner()


def move_to_str(move: Optional[Move]) -> str:
    """Notation for a move, 'pass' for None."""
    return "pass" if move is None else str(move)
