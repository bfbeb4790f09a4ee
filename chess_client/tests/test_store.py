from chess_client.models import (
    GameMode,
    MoveLogEntry,
    Piece,
    PieceKind,
    Player,
    SessionState,
    initial_state,
)
from chess_client.store import SessionStore


def entry(source=(4, 6), target=(4, 4)) -> MoveLogEntry:
    return MoveLogEntry(Player.WHITE, "Pawn", source, target)


def test_starts_from_initial_setup():
    store = SessionStore()
    assert store.state == initial_state()
    assert store.history == ()
    assert store.available_moves == ()
    assert store.mode == GameMode.PVP


def test_history_is_append_only_with_pop_from_the_end():
    store = SessionStore()
    first, second = entry(), entry((4, 1), (4, 3))
    store.append_history(first)
    store.append_history(second)
    assert store.history == (first, second)

    assert store.pop_history() == second
    assert store.history == (first,)
    assert store.pop_history() == first
    assert store.pop_history() is None


def test_capture_and_quiet_targets():
    store = SessionStore(
        SessionState(
            pieces=(
                Piece("w", 3, 3, PieceKind.QUEEN, Player.WHITE),
                Piece("b", 3, 0, PieceKind.ROOK, Player.BLACK),
            )
        )
    )
    store.set_available_moves([(3, 0), (3, 1), (3, 2)])
    assert store.capture_targets() == [(3, 0)]
    assert store.quiet_targets() == [(3, 1), (3, 2)]

    store.clear_available_moves()
    assert store.available_moves == ()


def test_reset_keeps_mode_but_clears_everything_else():
    store = SessionStore(mode=GameMode.AI)
    store.apply_snapshot(SessionState(pieces=(), player_turn=Player.BLACK))
    store.append_history(entry())
    store.set_available_moves([(0, 0)])

    store.reset()

    assert store.state == initial_state()
    assert store.history == ()
    assert store.available_moves == ()
    assert store.mode == GameMode.AI


def test_subscribers_are_told_about_writes():
    store = SessionStore()
    seen = []
    unsubscribe = store.subscribe(lambda: seen.append(store.player_turn))

    store.apply_snapshot(SessionState(pieces=(), player_turn=Player.BLACK))
    store.set_mode(GameMode.AI)
    assert seen == [Player.BLACK, Player.BLACK]

    unsubscribe()
    store.reset()
    assert len(seen) == 2
