"""Exceptions raised by the rules engine and the wire codec."""

from __future__ import annotations
from typing import Any


class IllegalMoveError(ValueError):
    """A move (or pass) that is not in the current legal move set."""

    def __init__(self, move: Any, reason: str = "Illegal move"):
        self.move = move
        super().__init__(f"{reason}: {move if move is not None else 'pass'}")


class MoveDecodeError(ValueError):
    """A wire-format move that does not decode into valid points."""

    def __init__(self, message: str, errors: list[dict] | None = None):
        self.errors = errors or []
        super().__init__(message)
