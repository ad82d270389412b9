import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gomoku_arcade.config import load_settings
from gomoku_arcade.ws_handler import router as ws_router

settings = load_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = FastAPI(title="Gomoku Arcade")
app.state.settings = settings

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


app.include_router(ws_router)


@app.get("/health")
async def health():
    return {"status": "ok"}
