"""
Pydantic models for the JSON exchanged with the move authority.

Shared by the authority client (to parse responses) and the reference server
(to validate requests and shape responses).
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from chess_client.models import (
    GameMode,
    Piece,
    PieceKind,
    Player,
    PromotionChoice,
    SessionState,
)

BoardIndex = Annotated[int, Field(ge=0, le=7)]

# Body of GET legal_moves/{square}: [[x, y], ...]
LegalTargets = TypeAdapter(list[tuple[BoardIndex, BoardIndex]])


class PiecePayload(BaseModel):
    id: str
    x: BoardIndex
    y: BoardIndex
    type: PieceKind
    player: Player

    def to_piece(self) -> Piece:
        return Piece(id=self.id, x=self.x, y=self.y, kind=self.type, player=self.player)


class SnapshotPayload(BaseModel):
    pieces: list[PiecePayload]
    playerTurn: Player
    isCheckmate: bool = False
    isStalemate: bool = False
    isCheck: bool = False

    def to_state(self) -> SessionState:
        return SessionState(
            pieces=tuple(p.to_piece() for p in self.pieces),
            player_turn=self.playerTurn,
            is_check=self.isCheck,
            is_checkmate=self.isCheckmate,
            is_stalemate=self.isStalemate,
        )

    @classmethod
    def from_state(cls, state: SessionState) -> "SnapshotPayload":
        return cls(
            pieces=[
                PiecePayload(id=p.id, x=p.x, y=p.y, type=p.kind, player=p.player)
                for p in state.pieces
            ],
            playerTurn=state.player_turn,
            isCheckmate=state.is_checkmate,
            isStalemate=state.is_stalemate,
            isCheck=state.is_check,
        )


class PromotionNeeded(BaseModel):
    promotionNeeded: bool = True


class MoveRequest(BaseModel):
    move: str = Field(..., pattern=r"^[a-h][1-8][a-h][1-8]$", description="e.g. e2e4")
    promotion: PromotionChoice | None = None

    model_config = ConfigDict(extra="forbid")


class ModeRequest(BaseModel):
    mode: GameMode

    model_config = ConfigDict(extra="forbid")


class Ack(BaseModel):
    ok: bool = True
