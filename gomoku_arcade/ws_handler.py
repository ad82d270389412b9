"""WebSocket endpoint and intent routing."""

from __future__ import annotations

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from gomoku_arcade.config import Settings
from gomoku_arcade.models import (
    CellActivatedMsg,
    ErrorMsg,
    GetStateMsg,
    SelectColorMsg,
    SelectModeMsg,
    SessionSnapshot,
    StartNewGameMsg,
    StateMsg,
    parse_client_message,
)
from gomoku_arcade.session import SessionController

logger = logging.getLogger(__name__)

router = APIRouter()


def state_message(snapshot: SessionSnapshot) -> dict:
    return StateMsg(**snapshot.model_dump()).model_dump(mode="json")


async def serve_session(ws: WebSocket, settings: Settings):
    """Drive one controller from one socket until the client goes away."""

    async def push_state(snapshot: SessionSnapshot):
        try:
            await ws.send_json(state_message(snapshot))
        except (WebSocketDisconnect, RuntimeError) as exc:
            logger.debug("Dropping state push to closed socket: %s", exc)

    controller = SessionController(
        board_size=settings.board_size,
        think_delay=settings.think_delay,
        listener=push_state,
    )
    await ws.send_json(state_message(controller.snapshot()))
    try:
        while True:
            data = await ws.receive_json()
            msg = parse_client_message(data)
            if msg is None:
                await ws.send_json(ErrorMsg(message="Unknown or invalid message").model_dump())
                continue

            if isinstance(msg, CellActivatedMsg):
                await controller.on_cell_activated(msg.row, msg.col)

            elif isinstance(msg, StartNewGameMsg):
                await controller.on_start_new_game()

            elif isinstance(msg, SelectModeMsg):
                await controller.on_select_mode(msg.mode)

            elif isinstance(msg, SelectColorMsg):
                await controller.on_select_human_color(msg.color)

            elif isinstance(msg, GetStateMsg):
                await ws.send_json(state_message(controller.snapshot()))
    except WebSocketDisconnect:
        logger.debug("Client disconnected")
    finally:
        controller.close()


@router.websocket("/ws")
async def websocket_endpoint(ws: WebSocket):
    await ws.accept()
    await serve_session(ws, ws.app.state.settings)
