"""
Reference move authority.

A small FastAPI app speaking the same HTTP contract the client expects. It is
what the client talks to during local development and in integration tests;
the client itself never imports it.
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from chess_client.game_state import ChessGame, MoveResult
from chess_client.models import GameMode
from chess_client.schemas import (
    Ack,
    ModeRequest,
    MoveRequest,
    PromotionNeeded,
    SnapshotPayload,
)

app = FastAPI(title="chess-authority")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---- Game storage ----
# One game per process, like the frontend expects
game = ChessGame()


def snapshot_payload() -> dict:
    return SnapshotPayload.from_state(game.snapshot()).model_dump(mode="json")


# ---- Routes ----
@app.get("/legal_moves/{square}")
async def legal_moves(square: str) -> list[list[int]]:
    return [[x, y] for x, y in game.legal_targets(square)]


@app.post("/move")
async def move(req: MoveRequest) -> dict:
    src, dst = req.move[:2], req.move[2:]
    promotion = req.promotion.value if req.promotion else None

    result = game.make_move(src, dst, promotion)
    if result is MoveResult.PROMOTION_NEEDED:
        return PromotionNeeded().model_dump()
    if result is MoveResult.ILLEGAL:
        raise HTTPException(400, f"Illegal move: {req.move}")
    return snapshot_payload()


@app.post("/undo")
async def undo() -> dict:
    if not game.undo():
        raise HTTPException(400, "Nothing to undo")
    return snapshot_payload()


@app.post("/reset")
async def reset() -> dict:
    game.reset()
    return Ack().model_dump()


@app.post("/set_game_mode")
async def set_game_mode(req: ModeRequest) -> dict:
    game.mode = req.mode
    return Ack().model_dump()


@app.post("/ai_move")
async def ai_move() -> dict:
    if game.mode is not GameMode.AI:
        raise HTTPException(409, "AI moves are only available in ai mode")
    if game.ai_move() is None:
        raise HTTPException(409, "Game is over")
    return snapshot_payload()
