"""
Session state store.

Single owner of the current snapshot, game mode, available moves and move
history. The controller writes; everything else reads. Subscribers are called
after every write so a view can re-render.
"""

from typing import Callable

from chess_client.models import (
    GameMode,
    MoveLogEntry,
    Outcome,
    Piece,
    Player,
    SessionState,
    initial_state,
)
from chess_client.squares import Coordinate

Listener = Callable[[], None]


class SessionStore:
    def __init__(self, state: SessionState | None = None, mode: GameMode = GameMode.PVP) -> None:
        self._state = state or initial_state()
        self._mode = mode
        self._history: list[MoveLogEntry] = []
        self._available: tuple[Coordinate, ...] = ()
        self._listeners: list[Listener] = []

    # ---- Read access ----
    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def pieces(self) -> tuple[Piece, ...]:
        return self._state.pieces

    @property
    def player_turn(self) -> Player:
        return self._state.player_turn

    @property
    def outcome(self) -> Outcome:
        return self._state.outcome

    @property
    def is_game_over(self) -> bool:
        return self._state.is_game_over

    @property
    def mode(self) -> GameMode:
        return self._mode

    @property
    def history(self) -> tuple[MoveLogEntry, ...]:
        return tuple(self._history)

    @property
    def available_moves(self) -> tuple[Coordinate, ...]:
        return self._available

    def capture_targets(self) -> list[Coordinate]:
        """Available targets currently holding a piece (shown as captures)."""
        return [c for c in self._available if self._state.piece_at(*c) is not None]

    def quiet_targets(self) -> list[Coordinate]:
        return [c for c in self._available if self._state.piece_at(*c) is None]

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change callback; returns a function that removes it."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    # ---- Writes ----
    def apply_snapshot(self, state: SessionState) -> None:
        """Replace the board with an authority-confirmed snapshot."""
        self._state = state
        self._notify()

    def append_history(self, entry: MoveLogEntry) -> None:
        self._history.append(entry)
        self._notify()

    def pop_history(self) -> MoveLogEntry | None:
        if not self._history:
            return None
        entry = self._history.pop()
        self._notify()
        return entry

    def set_available_moves(self, targets: list[Coordinate]) -> None:
        self._available = tuple(targets)
        self._notify()

    def clear_available_moves(self) -> None:
        self._available = ()
        self._notify()

    def set_mode(self, mode: GameMode) -> None:
        self._mode = GameMode(mode)
        self._notify()

    def reset(self) -> None:
        """Back to the starting position with an empty history. Mode is kept."""
        self._state = initial_state()
        self._history.clear()
        self._available = ()
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()
