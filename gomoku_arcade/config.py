"""Runtime settings read from the environment (and an optional .env file)."""

from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from gomoku_arcade.board import DEFAULT_BOARD_SIZE, WIN_LENGTH

THINK_DELAY = 0.5  # seconds before the computer's stone lands

DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://localhost:5173"


class Settings(BaseModel):
    board_size: int = Field(default=DEFAULT_BOARD_SIZE, ge=WIN_LENGTH)
    think_delay: float = Field(default=THINK_DELAY, ge=0)
    cors_origins: list[str] = Field(default_factory=lambda: DEFAULT_CORS_ORIGINS.split(","))
    log_level: str = "INFO"


def load_settings() -> Settings:
    load_dotenv()
    cors_origins = os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    return Settings(
        board_size=os.getenv("GOMOKU_BOARD_SIZE", str(DEFAULT_BOARD_SIZE)),
        think_delay=os.getenv("GOMOKU_THINK_DELAY", str(THINK_DELAY)),
        cors_origins=[o.strip() for o in cors_origins.split(",") if o.strip()],
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
