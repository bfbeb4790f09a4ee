"""
Types shared by the client layers: pieces, session snapshots and move log entries.

Everything here is immutable. A new SessionState replaces the old one wholesale
whenever the authority confirms something.
"""

from dataclasses import dataclass, field
from enum import StrEnum

from chess_client.squares import Coordinate


class Player(StrEnum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Player":
        return Player.BLACK if self is Player.WHITE else Player.WHITE


class PieceKind(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"

    @property
    def label(self) -> str:
        """Name used in the move log, e.g. "Knight"."""
        return self.value.capitalize()


class PromotionChoice(StrEnum):
    QUEEN = "q"
    ROOK = "r"
    BISHOP = "b"
    KNIGHT = "n"


class Outcome(StrEnum):
    ONGOING = "ongoing"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"


class GameMode(StrEnum):
    PVP = "pvp"
    AI = "ai"


@dataclass(frozen=True)
class Piece:
    id: str
    x: int
    y: int
    kind: PieceKind
    player: Player

    @property
    def coordinate(self) -> Coordinate:
        return self.x, self.y


@dataclass(frozen=True)
class SessionState:
    """One authority-confirmed snapshot of the board and its flags."""

    pieces: tuple[Piece, ...]
    player_turn: Player = Player.WHITE
    is_check: bool = False
    is_checkmate: bool = False
    is_stalemate: bool = False

    def __post_init__(self) -> None:
        occupied = [p.coordinate for p in self.pieces]
        if len(occupied) != len(set(occupied)):
            raise ValueError("Two pieces cannot share a square.")

    @property
    def outcome(self) -> Outcome:
        if self.is_checkmate:
            return Outcome.CHECKMATE
        if self.is_stalemate:
            return Outcome.STALEMATE
        if self.is_check:
            return Outcome.CHECK
        return Outcome.ONGOING

    @property
    def is_game_over(self) -> bool:
        return self.is_checkmate or self.is_stalemate

    def piece_by_id(self, piece_id: str) -> Piece | None:
        return next((p for p in self.pieces if p.id == piece_id), None)

    def piece_at(self, x: int, y: int) -> Piece | None:
        return next((p for p in self.pieces if p.x == x and p.y == y), None)


@dataclass(frozen=True)
class MoveLogEntry:
    player: Player
    piece_name: str
    source: Coordinate
    target: Coordinate
    captured_piece_name: str | None = field(default=None)


# ---- Initial setup ----
_BACK_RANK = (
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
)


def initial_pieces() -> tuple[Piece, ...]:
    """Standard starting position. Each piece is named after its starting square."""
    files = "abcdefgh"
    pieces = []
    for x, kind in enumerate(_BACK_RANK):
        pieces.append(Piece(f"{files[x]}8", x, 0, kind, Player.BLACK))
        pieces.append(Piece(f"{files[x]}7", x, 1, PieceKind.PAWN, Player.BLACK))
        pieces.append(Piece(f"{files[x]}2", x, 6, PieceKind.PAWN, Player.WHITE))
        pieces.append(Piece(f"{files[x]}1", x, 7, kind, Player.WHITE))
    return tuple(pieces)


def initial_state() -> SessionState:
    return SessionState(pieces=initial_pieces())
