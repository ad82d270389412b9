"""Pydantic models for the UI message protocol and session snapshots."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ValidationError

from gomoku_arcade.board import Stone


class Mode(str, Enum):
    HUMAN_VS_HUMAN = "pvp"
    HUMAN_VS_COMPUTER = "pvc"


class Phase(str, Enum):
    AWAITING_HUMAN_MOVE = "awaiting_human_move"
    COMPUTER_THINKING = "computer_thinking"
    GAME_OVER = "game_over"
    DRAW = "draw"


class WinTally(BaseModel):
    black: int = 0
    white: int = 0

    def credit(self, color: Stone) -> None:
        if color is Stone.BLACK:
            self.black += 1
        else:
            self.white += 1


class SessionSnapshot(BaseModel):
    board: list[list[str | None]]
    board_size: int
    current_turn: Stone
    winner: Stone | None
    phase: Phase
    mode: Mode
    human_color: Stone
    move_count: int
    win_counts: WinTally


# ---------------------------------------------------------------------------
# Client → Server
# ---------------------------------------------------------------------------

class CellActivatedMsg(BaseModel):
    type: Literal["cell_activated"] = "cell_activated"
    row: int
    col: int


class StartNewGameMsg(BaseModel):
    type: Literal["start_new_game"] = "start_new_game"


class SelectModeMsg(BaseModel):
    type: Literal["select_mode"] = "select_mode"
    mode: Mode


class SelectColorMsg(BaseModel):
    type: Literal["select_color"] = "select_color"
    color: Stone


class GetStateMsg(BaseModel):
    type: Literal["get_state"] = "get_state"


ClientMessage = CellActivatedMsg | StartNewGameMsg | SelectModeMsg | SelectColorMsg | GetStateMsg


# ---------------------------------------------------------------------------
# Server → Client
# ---------------------------------------------------------------------------

class StateMsg(SessionSnapshot):
    type: Literal["state"] = "state"


class ErrorMsg(BaseModel):
    type: Literal["error"] = "error"
    message: str


def parse_client_message(data: dict) -> ClientMessage | None:
    """Parse a raw dict into a typed client message, or None if invalid."""
    if not isinstance(data, dict):
        return None
    msg_type = data.get("type")
    if not isinstance(msg_type, str):
        return None
    mapping: dict[str, type[BaseModel]] = {
        "cell_activated": CellActivatedMsg,
        "start_new_game": StartNewGameMsg,
        "select_mode": SelectModeMsg,
        "select_color": SelectColorMsg,
        "get_state": GetStateMsg,
    }
    model = mapping.get(msg_type)
    if model is None:
        return None
    try:
        return model.model_validate(data)  # type: ignore[return-value]
    except ValidationError:
        return None
