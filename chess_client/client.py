"""
Move submission state machine.

Turns UI gestures into authority-confirmed state:

    grab(piece_id)   -> ask the authority for legal targets, publish them
    drop(x, y)       -> submit the move, handle promotion, apply the snapshot,
                        log the move, and in AI mode fetch the reply move

The board is never advanced from local prediction. Only snapshots returned by
the authority reach the store; a rejected or failed move leaves it untouched.
"""

import logging
from enum import StrEnum

from chess_client.authority import AuthorityClient, PromotionRequired
from chess_client.config import Settings
from chess_client.errors import AuthorityError, AuthorityProtocolError
from chess_client.models import GameMode, MoveLogEntry, Piece, SessionState
from chess_client.promotion import PromotionCoordinator
from chess_client.squares import move_descriptor, to_name
from chess_client.store import SessionStore

logger = logging.getLogger(__name__)


class MachineState(StrEnum):
    IDLE = "idle"
    AWAITING_LEGAL_MOVES = "awaiting_legal_moves"
    MOVE_IN_FLIGHT = "move_in_flight"
    AWAITING_PROMOTION_CHOICE = "awaiting_promotion_choice"
    APPLYING_RESULT = "applying_result"


# States in which a drop may start a new move attempt
_DROP_READY = (MachineState.IDLE, MachineState.AWAITING_LEGAL_MOVES)


class GameController:
    def __init__(
        self,
        authority: AuthorityClient,
        store: SessionStore | None = None,
        promotion: PromotionCoordinator | None = None,
    ) -> None:
        self.authority = authority
        self.store = store or SessionStore()
        self.promotion = promotion or PromotionCoordinator()
        self.state = MachineState.IDLE
        self._grabbed: Piece | None = None
        # Bumped on every grab and drop so a slow legal-move answer cannot
        # repopulate targets after the piece has already been dropped.
        self._grab_token = 0

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "GameController":
        return cls(AuthorityClient(settings))

    @property
    def awaiting_promotion(self) -> bool:
        return self.promotion.awaiting_choice

    @property
    def busy(self) -> bool:
        """True while a move attempt owns the machine."""
        return self.state not in _DROP_READY

    @property
    def grabbed(self) -> Piece | None:
        return self._grabbed

    # ---- Gestures ----
    async def grab(self, piece_id: str) -> bool:
        """Pick up a piece. Only the side to move can grab; anything else is a no-op."""
        if self.state is not MachineState.IDLE:
            return False

        piece = self.store.state.piece_by_id(piece_id)
        if piece is None or piece.player != self.store.player_turn:
            return False

        self._grabbed = piece
        self._grab_token += 1
        token = self._grab_token
        self.state = MachineState.AWAITING_LEGAL_MOVES

        try:
            targets = await self.authority.query_legal_targets(piece.coordinate)
        finally:
            if token == self._grab_token:
                self.state = MachineState.IDLE

        if token != self._grab_token:
            # Dropped (or re-grabbed) before the answer arrived
            return False
        self.store.set_available_moves(targets)
        return True

    async def drop(self, x: int, y: int) -> bool:
        """Drop the grabbed piece on (x, y). Returns True if the authority confirmed the move."""
        if self.state not in _DROP_READY:
            logger.debug(f"Ignoring drop on {(x, y)} while {self.state}")
            return False

        grabbed, self._grabbed = self._grabbed, None
        self._grab_token += 1
        self.state = MachineState.IDLE
        self.store.clear_available_moves()
        if grabbed is None:
            return False

        before = self.store.state
        piece = before.piece_by_id(grabbed.id)
        if piece is None:
            return False

        source, target = piece.coordinate, (x, y)
        captured = before.piece_at(x, y)

        self.state = MachineState.MOVE_IN_FLIGHT
        try:
            confirmed = await self._submit(to_name(source), to_name(target))
        except AuthorityError as e:
            logger.info(f"Move {move_descriptor(source, target)} did not happen: {e}")
            return False
        else:
            self.state = MachineState.APPLYING_RESULT
            self.store.apply_snapshot(confirmed)
            self.store.append_history(
                MoveLogEntry(
                    player=piece.player,
                    piece_name=piece.kind.label,
                    source=source,
                    target=target,
                    captured_piece_name=captured.kind.label if captured else None,
                )
            )
            if self.store.mode is GameMode.AI:
                await self._apply_ai_move()
            return True
        finally:
            # Cancelled or not, the machine comes to rest
            self.state = MachineState.IDLE

    def resolve_promotion(self, choice: str) -> bool:
        """Called by the UI's promotion chooser with q, r, b or n."""
        return self.promotion.resolve(choice)

    # ---- Administrative actions ----
    async def reset(self) -> None:
        """Restore the starting position locally, then tell the authority."""
        if self.busy:
            return
        self._forget_grab()
        self.store.reset()
        try:
            await self.authority.reset_game()
        except AuthorityError as e:
            logger.warning(f"Error resetting board: {e}")

    async def undo(self) -> None:
        """Drop the last log entry and show whatever board the authority undoes to."""
        if self.busy:
            return
        self._forget_grab()
        self.store.clear_available_moves()
        self.store.pop_history()
        try:
            state = await self.authority.undo_last_move()
        except AuthorityError as e:
            logger.warning(f"Error undoing move: {e}")
            return
        self.store.apply_snapshot(state)

    async def set_mode(self, mode: GameMode | str) -> None:
        """Switch between pvp and ai. Switching always starts a fresh game."""
        if self.busy:
            return
        mode = GameMode(mode)
        self.store.set_mode(mode)
        try:
            await self.authority.set_mode(mode)
        except AuthorityError as e:
            logger.warning(f"Error setting game mode: {e}")
        await self.reset()

    # ---- Internal helpers ----
    async def _submit(self, source: str, target: str) -> SessionState:
        result = await self.authority.submit_move(source, target)
        if not isinstance(result, PromotionRequired):
            return result

        self.state = MachineState.AWAITING_PROMOTION_CHOICE
        pending = self.promotion.request()
        try:
            choice = await pending
        finally:
            self.promotion.release(pending)

        self.state = MachineState.MOVE_IN_FLIGHT
        result = await self.authority.submit_move(source, target, choice)
        if isinstance(result, PromotionRequired):
            raise AuthorityProtocolError(
                f"Promotion to {choice} for {source}{target} was not accepted"
            )
        return result

    async def _apply_ai_move(self) -> None:
        try:
            state = await self.authority.request_ai_move()
        except AuthorityError as e:
            logger.warning(f"Error applying AI move: {e}")
            return
        self.store.apply_snapshot(state)

    def _forget_grab(self) -> None:
        self._grabbed = None
        self._grab_token += 1
        if self.state is MachineState.AWAITING_LEGAL_MOVES:
            self.state = MachineState.IDLE
