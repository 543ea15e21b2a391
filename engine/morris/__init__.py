"""Nine Men's Morris rules engine."""

from .core.config import RulesConfig, DEFAULT_RULES
from .core.errors import IllegalMoveError, MoveDecodeError
from .core.pointset import Point, PointSet
from .core.state import Board, BLACK, WHITE
from .core.moves import (
    Move, MoveGenerator,
    legal_moves, get_legal_moves, make_move, is_legal_move,
    is_game_over, is_black_winner, is_white_winner
)
from .core.wire import encode_move, decode_move, move_to_json, move_from_json

__version__ = "0.1.0"
