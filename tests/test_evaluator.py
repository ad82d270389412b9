"""Unit tests for the heuristic move evaluator."""

import random

import pytest

from gomoku_arcade.board import Board, Stone
from gomoku_arcade.errors import NoLegalMoves
from gomoku_arcade.evaluator import (
    DEFENSE_WEIGHTS,
    OFFENSE_WEIGHTS,
    evaluate,
    positional_bias,
    scan_line,
    select_move,
)

B, W = Stone.BLACK, Stone.WHITE


class TestScoringTable:
    @pytest.mark.parametrize(
        "run, open_ends, offense, defense",
        [
            (4, 0, 10000, 9000),
            (5, 2, 10000, 9000),
            (3, 2, 1000, 800),
            (3, 1, 100, 80),
            (3, 0, 0, 0),
            (2, 2, 50, 40),
            (2, 1, 0, 0),
            (1, 2, 0, 0),
            (0, 2, 0, 0),
        ],
    )
    def test_weights(self, run, open_ends, offense, defense):
        assert OFFENSE_WEIGHTS.score(run, open_ends) == offense
        assert DEFENSE_WEIGHTS.score(run, open_ends) == defense


class TestScanLine:
    def test_open_two(self):
        board = Board()
        board.place(7, 5, B)
        board.place(7, 6, B)
        assert scan_line(board, 7, 7, 0, 1, B) == (2, 2)

    def test_half_open_two(self):
        board = Board()
        board.place(7, 4, W)
        board.place(7, 5, B)
        board.place(7, 6, B)
        assert scan_line(board, 7, 7, 0, 1, B) == (2, 1)

    def test_edge_blocks(self):
        board = Board()
        board.place(0, 1, B)
        board.place(0, 2, B)
        board.place(0, 3, B)
        # (0, 0) sits on the edge: one side is the wall
        assert scan_line(board, 0, 0, 0, 1, B) == (3, 1)

    def test_run_on_both_sides(self):
        board = Board()
        for col in (5, 6, 8, 9):
            board.place(7, col, B)
        run, _ = scan_line(board, 7, 7, 0, 1, B)
        assert run == 4


class TestEvaluate:
    def test_occupied_cell_is_unscorable(self):
        board = Board()
        board.place(7, 7, B)
        assert evaluate(board, 7, 7, W, B) is None

    def test_empty_board_prefers_center(self):
        board = Board()
        assert evaluate(board, 7, 7, W, B) == 10
        assert evaluate(board, 7, 8, W, B) == 9
        assert evaluate(board, 0, 0, W, B) == 0

    def test_positional_bias_never_negative(self):
        board = Board()
        assert positional_bias(board, 0, 14) == 0

    def test_winning_cell_scores_offense_four(self):
        board = Board()
        for col in range(3, 7):
            board.place(7, col, B)
        assert evaluate(board, 7, 7, B, W) == 10 + 10000

    def test_blocking_cell_scores_defense_four(self):
        board = Board()
        for col in range(3, 7):
            board.place(7, col, W)
        assert evaluate(board, 7, 7, B, W) == 10 + 9000

    def test_open_three_offense(self):
        board = Board()
        for col in (4, 5, 6):
            board.place(7, col, B)
        assert evaluate(board, 7, 7, B, W) == 10 + 1000

    def test_open_three_defense(self):
        board = Board()
        for col in (4, 5, 6):
            board.place(7, col, W)
        assert evaluate(board, 7, 7, B, W) == 10 + 800


class TestSelectMove:
    def test_takes_the_win(self):
        board = Board()
        board.place(7, 2, W)
        for col in range(3, 7):
            board.place(7, col, B)
        assert select_move(board, B, W, random.Random(1)) == (7, 7)

    def test_blocks_the_human_four(self):
        board = Board()
        board.place(3, 2, B)
        for col in range(3, 7):
            board.place(3, col, W)
        assert select_move(board, B, W, random.Random(1)) == (3, 7)

    def test_prefers_win_over_block(self):
        board = Board()
        for col in range(0, 4):
            board.place(0, col, W)
        for col in range(0, 4):
            board.place(14, col, B)
        assert select_move(board, B, W, random.Random(1)) == (14, 4)

    def test_empty_board_opens_at_center(self):
        assert select_move(Board(), B, W) == (7, 7)

    def test_single_empty_cell(self):
        board = Board(5)
        for row in range(5):
            for col in range(5):
                if (row, col) != (2, 3):
                    board.place(row, col, B if (col + 2 * row) % 4 < 2 else W)
        for seed in range(5):
            assert select_move(board, W, B, random.Random(seed)) == (2, 3)

    def test_full_board_raises(self):
        board = Board(5)
        for row in range(5):
            for col in range(5):
                board.place(row, col, B if (col + 2 * row) % 4 < 2 else W)
        with pytest.raises(NoLegalMoves):
            select_move(board, W, B)

    def test_never_returns_occupied_cell(self):
        rng = random.Random(42)
        for _ in range(20):
            board = Board(9)
            cells = [(r, c) for r in range(9) for c in range(9)]
            for i, (row, col) in enumerate(rng.sample(cells, 40)):
                board.place(row, col, B if i % 2 else W)
            row, col = select_move(board, W, B, rng)
            assert board.get(row, col) is None

    def test_ties_are_broken_at_random(self):
        board = Board()
        board.place(7, 7, B)
        rng = random.Random(7)
        picks = {select_move(board, W, B, rng) for _ in range(200)}
        assert picks == {(6, 7), (8, 7), (7, 6), (7, 8)}


class TestEvaluateBounds:
    @pytest.mark.parametrize("row, col", [(-1, 7), (7, -1), (15, 0), (0, 15)])
    def test_off_board_is_unscorable(self, row, col):
        board = Board()
        board.place(14, 7, B)
        assert evaluate(board, row, col, W, B) is None
