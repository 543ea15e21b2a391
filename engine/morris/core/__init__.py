"""Core game logic: bitboards, board state, and move generation."""

from .bitboard import *
from .config import RulesConfig, DEFAULT_RULES
from .errors import IllegalMoveError, MoveDecodeError
from .pointset import Point, PointSet
from .state import Board, BLACK, WHITE
from .moves import Move, MoveGenerator
