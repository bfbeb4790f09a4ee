import random
from enum import Enum

import chess

from chess_client.models import GameMode, Piece, PieceKind, Player, SessionState
from chess_client.squares import Coordinate, to_coordinate

KINDS = {
    chess.PAWN: PieceKind.PAWN,
    chess.KNIGHT: PieceKind.KNIGHT,
    chess.BISHOP: PieceKind.BISHOP,
    chess.ROOK: PieceKind.ROOK,
    chess.QUEEN: PieceKind.QUEEN,
    chess.KING: PieceKind.KING,
}


class MoveResult(Enum):
    APPLIED = "applied"
    PROMOTION_NEEDED = "promotion_needed"
    ILLEGAL = "illegal"


def coordinate_of(square: chess.Square) -> Coordinate:
    return to_coordinate(chess.square_name(square))


# Simple class that owns all chess game state and rules for the reference authority
class ChessGame:
    def __init__(self) -> None:
        self.mode = GameMode.PVP
        self.reset()

    def reset(self) -> None:
        """Reset the game to the initial position. Mode is left alone."""
        self.board = chess.Board()
        # square -> piece id; every piece is named after its starting square
        self.ids: dict[chess.Square, str] = {
            sq: chess.square_name(sq) for sq in self.board.piece_map()
        }
        self._id_stack: list[dict[chess.Square, str]] = []

    def legal_targets(self, square_name: str) -> list[Coordinate]:
        try:
            src = chess.parse_square(square_name)
        except ValueError:
            return []
        targets = {
            coordinate_of(mv.to_square)
            for mv in self.board.legal_moves
            if mv.from_square == src
        }
        return sorted(targets)

    def make_move(self, src: str, dst: str, promotion: str | None = None) -> MoveResult:
        """
        Try to play a move.
        A pawn move to the last rank without a promotion letter is not played;
        the caller is told a choice is needed instead.
        """
        promo_suffix = (promotion or "").strip()[:1].lower()
        uci = f"{src}{dst}{promo_suffix}"

        try:
            move = chess.Move.from_uci(uci)
        except ValueError:
            return MoveResult.ILLEGAL

        if move in self.board.legal_moves:
            self._push(move)
            return MoveResult.APPLIED

        if not promo_suffix:
            as_queen = chess.Move(move.from_square, move.to_square, promotion=chess.QUEEN)
            if as_queen in self.board.legal_moves:
                return MoveResult.PROMOTION_NEEDED

        return MoveResult.ILLEGAL

    def undo(self) -> bool:
        if not self.board.move_stack:
            return False
        self.board.pop()
        self.ids = self._id_stack.pop()
        return True

    def ai_move(self) -> chess.Move | None:
        """Play a random legal move for the side to move."""
        moves = list(self.board.legal_moves)
        if not moves:
            return None
        move = random.choice(moves)
        self._push(move)
        return move

    def snapshot(self) -> SessionState:
        pieces = [
            Piece(
                id=self.ids[sq],
                x=chess.square_file(sq),
                y=7 - chess.square_rank(sq),
                kind=KINDS[piece.piece_type],
                player=Player.WHITE if piece.color == chess.WHITE else Player.BLACK,
            )
            for sq, piece in self.board.piece_map().items()
        ]
        return SessionState(
            pieces=tuple(sorted(pieces, key=lambda p: p.id)),
            player_turn=Player.WHITE if self.board.turn == chess.WHITE else Player.BLACK,
            is_check=self.board.is_check(),
            is_checkmate=self.board.is_checkmate(),
            is_stalemate=self.board.is_stalemate(),
        )

    def _push(self, move: chess.Move) -> None:
        ids = dict(self.ids)
        moved_id = ids.pop(move.from_square)

        if self.board.is_en_passant(move):
            taken = chess.square(
                chess.square_file(move.to_square), chess.square_rank(move.from_square)
            )
            ids.pop(taken, None)
        elif self.board.is_castling(move):
            rank = chess.square_rank(move.from_square)
            if self.board.is_kingside_castling(move):
                rook_from, rook_to = chess.square(7, rank), chess.square(5, rank)
            else:
                rook_from, rook_to = chess.square(0, rank), chess.square(3, rank)
            ids[rook_to] = ids.pop(rook_from)

        ids.pop(move.to_square, None)
        ids[move.to_square] = moved_id

        self._id_stack.append(self.ids)
        self.ids = ids
        self.board.push(move)
