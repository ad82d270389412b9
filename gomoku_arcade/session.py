"""Session controller: turn state machine, modes, win tally, computer moves."""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass, field
from typing import Awaitable, Callable

from gomoku_arcade.board import DEFAULT_BOARD_SIZE, Board, Stone
from gomoku_arcade.config import THINK_DELAY
from gomoku_arcade.errors import IllegalMove
from gomoku_arcade.evaluator import select_move
from gomoku_arcade.models import Mode, Phase, SessionSnapshot, WinTally

logger = logging.getLogger(__name__)

Listener = Callable[[SessionSnapshot], Awaitable[None]]


@dataclass
class GameSession:
    board: Board
    current_turn: Stone = Stone.BLACK
    winner: Stone | None = None
    phase: Phase = Phase.AWAITING_HUMAN_MOVE


@dataclass
class SessionController:
    board_size: int = DEFAULT_BOARD_SIZE
    think_delay: float = THINK_DELAY
    rng: random.Random | None = field(default=None, repr=False)
    listener: Listener | None = field(default=None, repr=False)
    mode: Mode = Mode.HUMAN_VS_HUMAN
    human_color: Stone = Stone.BLACK
    win_counts: WinTally = field(default_factory=WinTally)
    generation: int = field(default=0, init=False)
    session: GameSession | None = field(default=None, init=False)
    _computer_task: asyncio.Task | None = field(default=None, init=False, repr=False)

    def __post_init__(self):
        self._reset()

    @property
    def computer_color(self) -> Stone:
        return self.human_color.opponent

    def is_computer_turn(self) -> bool:
        return (
            self.mode is Mode.HUMAN_VS_COMPUTER
            and self.session.current_turn is self.computer_color
        )

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------

    async def on_cell_activated(self, row: int, col: int) -> bool:
        """Apply a human move. Returns False when the click is ignored."""
        if self.session.phase is not Phase.AWAITING_HUMAN_MOVE or self.is_computer_turn():
            logger.debug("Ignoring click at (%d, %d) in phase %s", row, col, self.session.phase.value)
            return False
        try:
            self._apply_move(row, col)
        except IllegalMove as exc:
            logger.debug("Ignoring click: %s", exc)
            return False

        if self.session.phase is Phase.COMPUTER_THINKING:
            self._schedule_computer_move()
        await self._notify()
        return True

    async def on_start_new_game(self):
        self._reset()
        await self._notify()

    async def on_select_mode(self, mode: Mode):
        self.mode = mode
        self._reset()
        await self._notify()

    async def on_select_human_color(self, color: Stone):
        """Choosing a side always means playing the computer."""
        self.human_color = color
        self.mode = Mode.HUMAN_VS_COMPUTER
        self._reset()
        await self._notify()

    # ------------------------------------------------------------------
    # Computer opponent
    # ------------------------------------------------------------------

    def play_computer_move(self) -> tuple[int, int]:
        """Pick and apply the computer's move for the current board."""
        row, col = select_move(self.session.board, self.computer_color, self.human_color, self.rng)
        self._apply_move(row, col)
        return row, col

    def _schedule_computer_move(self):
        self._cancel_computer_move()
        self._computer_task = asyncio.create_task(self._computer_turn(self.generation))

    async def _computer_turn(self, generation: int):
        if self.think_delay > 0:
            await asyncio.sleep(self.think_delay)
        # A reset while sleeping makes this move stale.
        if generation != self.generation or self.session.phase is not Phase.COMPUTER_THINKING:
            return
        row, col = self.play_computer_move()
        logger.debug("Computer (%s) played (%d, %d)", self.computer_color.value, row, col)
        await self._notify()

    def _cancel_computer_move(self):
        if self._computer_task and not self._computer_task.done():
            self._computer_task.cancel()
        self._computer_task = None

    async def wait_for_computer(self):
        """Wait until a pending computer move has been applied or dropped."""
        task = self._computer_task
        if task is None:
            return
        await asyncio.wait({task})
        if not task.cancelled():
            task.result()

    def close(self):
        self.generation += 1
        self._cancel_computer_move()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def snapshot(self) -> SessionSnapshot:
        session = self.session
        return SessionSnapshot(
            board=session.board.rows(),
            board_size=session.board.size,
            current_turn=session.current_turn,
            winner=session.winner,
            phase=session.phase,
            mode=self.mode,
            human_color=self.human_color,
            move_count=session.board.move_count,
            win_counts=self.win_counts.model_copy(),
        )

    def _apply_move(self, row: int, col: int):
        session = self.session
        color = session.current_turn
        session.board.place(row, col, color)

        if session.board.is_winning_move(row, col, color):
            session.winner = color
            session.phase = Phase.GAME_OVER
            self.win_counts.credit(color)
            logger.info("%s wins after %d moves", color.value, session.board.move_count)
            return

        if not session.board.has_legal_moves():
            session.phase = Phase.DRAW
            logger.info("Board full, game drawn")
            return

        session.current_turn = color.opponent
        if self.is_computer_turn():
            session.phase = Phase.COMPUTER_THINKING
        else:
            session.phase = Phase.AWAITING_HUMAN_MOVE

    def _reset(self):
        self.generation += 1
        self._cancel_computer_move()
        self.session = GameSession(board=Board(self.board_size))
        logger.info("New game: mode=%s human=%s", self.mode.value, self.human_color.value)

        if self.is_computer_turn():
            # The computer opens as Black on the centre point.
            self._apply_move(*self.session.board.center)

    async def _notify(self):
        if self.listener is not None:
            await self.listener(self.snapshot())
