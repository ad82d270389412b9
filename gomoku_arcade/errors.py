"""Exceptions raised by the board and the move evaluator."""


class GomokuError(Exception):
    """Base class for engine errors."""


class IllegalMove(GomokuError, ValueError):
    """Raised when a stone is placed out of bounds or on an occupied cell."""

    def __init__(self, row: int, col: int, reason: str):
        super().__init__(f"Illegal move at ({row}, {col}): {reason}")
        self.row = row
        self.col = col
        self.reason = reason


class NoLegalMoves(GomokuError):
    """Raised when a move is requested from a board with no empty cell."""
