"""Board state, move legality, and five-in-a-row detection."""

from __future__ import annotations

from enum import Enum

from gomoku_arcade.errors import IllegalMove

DEFAULT_BOARD_SIZE = 15
WIN_LENGTH = 5

# Four directions: vertical, horizontal, diagonal ↘, diagonal ↗
DIRECTIONS = [
    (1, 0),
    (0, 1),
    (1, 1),
    (1, -1),
]


class Stone(str, Enum):
    BLACK = "black"
    WHITE = "white"

    @property
    def opponent(self) -> Stone:
        return Stone.WHITE if self is Stone.BLACK else Stone.BLACK


class Board:
    def __init__(self, size: int = DEFAULT_BOARD_SIZE):
        if size < WIN_LENGTH:
            raise ValueError(f"Board size must be at least {WIN_LENGTH}, got {size}")
        self.size = size
        self.cells: list[list[Stone | None]] = [[None] * size for _ in range(size)]
        self.move_count: int = 0

    @property
    def center(self) -> tuple[int, int]:
        mid = self.size // 2
        return mid, mid

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def get(self, row: int, col: int) -> Stone | None:
        return self.cells[row][col]

    def is_empty(self, row: int, col: int) -> bool:
        return self.in_bounds(row, col) and self.cells[row][col] is None

    def place(self, row: int, col: int, color: Stone) -> None:
        """Put a stone on an empty cell; raise IllegalMove otherwise."""
        if not self.in_bounds(row, col):
            raise IllegalMove(row, col, "coordinates out of bounds")
        if self.cells[row][col] is not None:
            raise IllegalMove(row, col, "cell is already occupied")
        self.cells[row][col] = color
        self.move_count += 1

    def is_winning_move(self, row: int, col: int, color: Stone) -> bool:
        """Check whether the stone at (row, col) completes five or more in a line."""
        for dr, dc in DIRECTIONS:
            count = 1 + self._count_run(row, col, dr, dc, color)
            count += self._count_run(row, col, -dr, -dc, color)
            if count >= WIN_LENGTH:
                return True
        return False

    def has_legal_moves(self) -> bool:
        return self.move_count < self.size * self.size

    def empty_cells(self):
        """Yield every empty cell in row-major order."""
        for row in range(self.size):
            for col in range(self.size):
                if self.cells[row][col] is None:
                    yield row, col

    def rows(self) -> list[list[str | None]]:
        return [[cell.value if cell else None for cell in row] for row in self.cells]

    def _count_run(self, row: int, col: int, dr: int, dc: int, color: Stone) -> int:
        """Count contiguous `color` stones after (row, col) along (dr, dc)."""
        count = 0
        r, c = row + dr, col + dc
        while self.in_bounds(r, c) and self.cells[r][c] == color:
            count += 1
            r += dr
            c += dc
        return count


def place(board: Board, row: int, col: int, color: Stone) -> None:
    board.place(row, col, color)


def is_winning_move(board: Board, row: int, col: int, color: Stone) -> bool:
    return board.is_winning_move(row, col, color)


def has_legal_moves(board: Board) -> bool:
    return board.has_legal_moves()
