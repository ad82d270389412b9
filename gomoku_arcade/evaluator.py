"""Single-ply heuristic move evaluation for the computer opponent.

Every empty cell is scored as if a stone were dropped on it: a small bias
towards the centre, plus an offense pass (lines the computer would extend)
and a defense pass (lines of the human's the stone would cut). The best
cell wins, ties are broken at random.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from gomoku_arcade.board import DIRECTIONS, WIN_LENGTH, Board, Stone
from gomoku_arcade.errors import NoLegalMoves

logger = logging.getLogger(__name__)

# Cells scanned on each side of the candidate. Four friendly stones already
# make the candidate a five, so looking further never changes the score.
SCAN_DEPTH = WIN_LENGTH - 1

CENTER_BIAS = 10


@dataclass(frozen=True)
class EvaluationWeights:
    four: int
    open_three: int
    half_open_three: int
    open_two: int

    def score(self, run: int, open_ends: int) -> int:
        if run >= SCAN_DEPTH:
            return self.four
        if run == 3 and open_ends == 2:
            return self.open_three
        if run == 3 and open_ends == 1:
            return self.half_open_three
        if run == 2 and open_ends == 2:
            return self.open_two
        return 0


OFFENSE_WEIGHTS = EvaluationWeights(four=10000, open_three=1000, half_open_three=100, open_two=50)
DEFENSE_WEIGHTS = EvaluationWeights(four=9000, open_three=800, half_open_three=80, open_two=40)


def scan_line(board: Board, row: int, col: int, dr: int, dc: int, color: Stone) -> tuple[int, int]:
    """Return (run, open_ends) for `color` through (row, col) along one axis.

    `run` counts the existing stones a stone at (row, col) would join, the
    cell itself excluded. A side is open when its walk stops on an empty cell.
    """
    run = 0
    open_ends = 0
    for sign in (1, -1):
        for step in range(1, SCAN_DEPTH + 1):
            r, c = row + dr * step * sign, col + dc * step * sign
            if not board.in_bounds(r, c):
                break
            cell = board.get(r, c)
            if cell == color:
                run += 1
            elif cell is None:
                open_ends += 1
                break
            else:
                break
    return run, open_ends


def pattern_score(board: Board, row: int, col: int, color: Stone, weights: EvaluationWeights) -> int:
    total = 0
    for dr, dc in DIRECTIONS:
        run, open_ends = scan_line(board, row, col, dr, dc, color)
        total += weights.score(run, open_ends)
    return total


def positional_bias(board: Board, row: int, col: int) -> int:
    center_row, center_col = board.center
    distance = abs(row - center_row) + abs(col - center_col)
    return max(0, CENTER_BIAS - distance)


def evaluate(
    board: Board,
    row: int,
    col: int,
    computer_color: Stone,
    human_color: Stone,
) -> int | None:
    """Score a candidate cell, or None if it is off the board or occupied."""
    if not board.in_bounds(row, col) or board.get(row, col) is not None:
        return None
    score = positional_bias(board, row, col)
    score += pattern_score(board, row, col, computer_color, OFFENSE_WEIGHTS)
    score += pattern_score(board, row, col, human_color, DEFENSE_WEIGHTS)
    return score


def select_move(
    board: Board,
    computer_color: Stone,
    human_color: Stone,
    rng: random.Random | None = None,
) -> tuple[int, int]:
    """Pick one of the highest scoring empty cells uniformly at random."""
    best_score = -1
    best_moves: list[tuple[int, int]] = []

    for row, col in board.empty_cells():
        score = evaluate(board, row, col, computer_color, human_color)
        if score > best_score:
            best_score = score
            best_moves = [(row, col)]
        elif score == best_score:
            best_moves.append((row, col))

    if not best_moves:
        raise NoLegalMoves("Board is full, no move to select")

    move = (rng or random).choice(best_moves)
    logger.debug(
        "Selected %s for %s (score=%d, ties=%d)",
        move, computer_color.value, best_score, len(best_moves),
    )
    return move
