#!/usr/bin/env python3
"""
Terminal-based Nine Men's Morris client.

Play against a simple engine or watch two engines play each other.
"""

from __future__ import annotations
import argparse
import logging
import random
import sys
import time
from pathlib import Path
from typing import Callable, Optional, Union

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from morris.core.config import RulesConfig
from morris.core.errors import IllegalMoveError
from morris.core.moves import Move, get_legal_moves, make_move, parse_move, move_to_str
from morris.core.state import Board, BLACK, WHITE, render_diagram

logger = logging.getLogger("morris.cli")

Selector = Callable[[Board], Optional[Move]]


def first_legal_move(board: Board) -> Optional[Move]:
    """Pick the first legal move, or None (pass) if there is none."""
    moves = get_legal_moves(board)
    return moves[0] if moves else None


def random_legal_move(rng: random.Random) -> Selector:
    """Build a selector that picks uniformly among legal moves."""
    def select(board: Board) -> Optional[Move]:
        moves = get_legal_moves(board)
        return rng.choice(moves) if moves else None
    return select


def print_board(board: Board, highlight_moves: list[Move] = None) -> None:
    """Print the board with optional move highlighting.

    Symbols:
        B = Black piece
        W = White piece
        + = Destination of a highlighted move (green)
    """
    GREEN = '\033[92m'
    RESET = '\033[0m'

    symbols = board.symbols()
    if highlight_moves:
        for move in highlight_moves:
            if move is not None:
                symbols[move.dst.index] = f"{GREEN}+{RESET}"

    print()
    print(render_diagram(symbols))
    print(board.status_line())
    print()


def parse_user_move(board: Board, input_str: str) -> Union[Move, str, None]:
    """Parse user input into a move or a command.

    Returns a Move, one of the command strings, or None if the input was
    rejected (the reason has been printed).
    """
    input_str = input_str.strip().lower()

    if input_str in ['q', 'quit', 'exit']:
        return 'quit'
    if input_str in ['h', 'help', '?']:
        return 'help'
    if input_str in ['m', 'moves']:
        return 'show_moves'
    if input_str in ['p', 'pass']:
        return 'pass'

    try:
        move = parse_move(input_str)
    except ValueError:
        print(f"Invalid format: {input_str}. Use notation like '0:1', '0:1-0:2' or '0:1-0:2x2:5'")
        return None

    if move in get_legal_moves(board):
        return move
    print(f"Illegal move: {input_str}")
    return None


def show_legal_moves(board: Board) -> None:
    """Display all legal moves, grouped by kind."""
    moves = get_legal_moves(board)
    if not moves:
        print("No legal moves! Enter 'pass'.")
        return

    print_board(board, moves)
    plain = [m for m in moves if not m.is_capture]
    captures = [m for m in moves if m.is_capture]

    kind = "Placements" if board.is_placement_phase() else (
        "Flights" if board.is_flying_phase() else "Slides")
    if plain:
        print(f"{kind}:", ", ".join(str(m) for m in plain))
    if captures:
        print("Mills:", ", ".join(str(m) for m in captures))


def _announce_result(board: Board, human_side: Optional[str] = None) -> None:
    winner = board.get_winner()
    if winner is None:
        print("Game stopped.")
    elif human_side is None:
        print(f"{winner.capitalize()} wins.")
    elif winner == human_side:
        print("Congratulations! You win!")
    else:
        print("Engine wins. Better luck next time!")


def play_human_vs_engine(
    engine: Selector = first_legal_move,
    human_side: str = BLACK,
    rules: RulesConfig = RulesConfig(),
) -> None:
    """Play a game: human vs engine."""
    board = Board.new_game(rules)

    print("\n=== Nine Men's Morris ===")
    print("You are", "B (black)" if human_side == BLACK else "W (white)")
    print("Commands: move (e.g., '0:1', '0:1-0:2', '0:1-0:2x2:5'), 'm' for moves, 'pass', 'q' quit")
    print("Goal: Reduce your opponent to two pieces!")

    while not board.is_game_over():
        print_board(board)

        if board.side_to_move == human_side:
            print(f"Your turn ({human_side})")

            while True:
                try:
                    user_input = input("> ").strip()
                except EOFError:
                    return

                result = parse_user_move(board, user_input)

                if result == 'quit':
                    print("Thanks for playing!")
                    return
                elif result == 'help':
                    print("Enter a point like '0:1' to place, '0:1-0:2' to move,")
                    print("and add 'x2:5' to capture when you close a mill.")
                    print("'m' to see legal moves, 'pass' when stuck, 'q' to quit")
                elif result == 'show_moves':
                    show_legal_moves(board)
                elif result == 'pass':
                    try:
                        board = make_move(board, None)
                    except IllegalMoveError as e:
                        print(e)
                        continue
                    print("You passed.")
                    break
                elif result is not None:
                    board = make_move(board, result)
                    print(f"You played: {result}")
                    break
        else:
            move = engine(board)
            board = make_move(board, move)
            print(f"Engine plays: {move_to_str(move)}")

    print_board(board)
    _announce_result(board, human_side)


def watch_engine_vs_engine(
    black: Selector = first_legal_move,
    white: Selector = first_legal_move,
    rules: RulesConfig = RulesConfig(),
    delay: float = 0.5,
    max_plies: int = 500,
) -> Board:
    """Watch two engines play each other. Returns the final board."""
    board = Board.new_game(rules)

    print("\n=== Engine vs Engine ===")

    ply = 0
    while not board.is_game_over() and ply < max_plies:
        print_board(board)
        selector = black if board.black_to_move else white
        move = selector(board)
        side = board.side_to_move
        board = make_move(board, move)
        print(f"Ply {ply + 1}, {side} plays: {move_to_str(move)}\n")
        logger.debug("ply %d: %s %s", ply + 1, side, move_to_str(move))

        ply += 1
        time.sleep(delay)

    print_board(board)
    print(f"Game over after {ply} plies.")
    _announce_result(board)
    return board


def main(argv: list[str] = None):
    parser = argparse.ArgumentParser(description="Nine Men's Morris Terminal Client")
    parser.add_argument('--watch', action='store_true', help='Watch engine vs engine')
    parser.add_argument('--play-as', type=str, choices=[BLACK, WHITE], default=BLACK,
                        help='Play as black (moves first) or white')
    parser.add_argument('--random', action='store_true',
                        help='Engine picks random legal moves instead of the first one')
    parser.add_argument('--seed', type=int, default=None, help='Seed for --random')
    parser.add_argument('--delay', type=float, default=0.5, help='Seconds between plies in --watch')
    parser.add_argument('--max-plies', type=int, default=500, help='Stop --watch after this many plies')
    parser.add_argument('--capture-from-mill', action='store_true',
                        help='Allow capturing from a mill when every opposing piece is in one')
    parser.add_argument('--lift-moving-piece', action='store_true',
                        help='Test slides and flights for mills with the piece off its source')
    parser.add_argument('--plain-when-protected', action='store_true',
                        help='Keep a mill-forming move as a plain move when nothing can be captured')
    parser.add_argument('--log-level', type=str, default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'], help='Logging level')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    rules = RulesConfig(
        capture_from_mill_fallback=args.capture_from_mill,
        lift_moving_piece=args.lift_moving_piece,
        plain_move_when_protected=args.plain_when_protected,
    )
    logger.info("Rules: %s", rules)

    if args.random:
        rng = random.Random(args.seed)
        engine = random_legal_move(rng)
    else:
        engine = first_legal_move

    if args.watch:
        watch_engine_vs_engine(engine, engine, rules, args.delay, args.max_plies)
    else:
        play_human_vs_engine(engine, args.play_as, rules)


if __name__ == '__main__':
    main()
