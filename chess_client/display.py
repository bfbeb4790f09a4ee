"""Text shown next to the board: move log lines and the status headline."""

from chess_client.models import MoveLogEntry, Player, SessionState
from chess_client.squares import to_name

# White is shown as Blue, black as Red
COLOUR_LABELS = {Player.WHITE: "Blue", Player.BLACK: "Red"}


def colour_label(player: Player) -> str:
    return COLOUR_LABELS[player]


def format_entry(index: int, entry: MoveLogEntry) -> str:
    """One history line, numbered from 1: "1. Blue Pawn e2 → e4 (captures Knight)"."""
    line = (
        f"{index}. {colour_label(entry.player)} {entry.piece_name} "
        f"{to_name(entry.source)} → {to_name(entry.target)}"
    )
    if entry.captured_piece_name:
        line += f" (captures {entry.captured_piece_name})"
    return line


def format_history(history: tuple[MoveLogEntry, ...] | list[MoveLogEntry]) -> list[str]:
    if not history:
        return ["No moves yet."]
    return [format_entry(i, entry) for i, entry in enumerate(history, start=1)]


def status_headline(state: SessionState) -> str:
    """Checkmate/stalemate/check banner; empty while nothing notable is happening."""
    if state.is_checkmate:
        # The side to move is the one that got mated
        return f"{colour_label(state.player_turn.opponent)} wins by Checkmate!"
    if state.is_stalemate:
        return "Stalemate!"
    if state.is_check:
        return "Check!"
    return ""


def turn_line(state: SessionState) -> str:
    if state.is_game_over:
        return "Game Over!"
    return f"{colour_label(state.player_turn)}'s Turn"
