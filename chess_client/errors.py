"""
Exception hierarchy for the chess client.

Usage:
    from chess_client.errors import AuthorityError

    try:
        snapshot = await authority.submit_move("e2", "e4")
    except AuthorityError as e:
        logger.info(f"Move did not happen: {e}")
"""

__all__ = [
    "AuthorityError",
    "AuthorityProtocolError",
    "AuthorityUnavailableError",
    "ChessClientError",
    "ConfigurationError",
    "MoveRejectedError",
    "PromotionPendingError",
]


class ChessClientError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(ChessClientError):
    """Settings could not be read from the environment."""


class AuthorityError(ChessClientError):
    """A round trip to the move authority did not produce a usable answer."""


class AuthorityUnavailableError(AuthorityError):
    """Transport failure: connection refused, timeout, or an unreadable body."""


class MoveRejectedError(AuthorityError):
    """The authority answered but declined the request (illegal move, wrong turn, ...)."""

    def __init__(self, status_code: int, detail: str = "") -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"authority returned {status_code}: {detail}".rstrip(": "))


class PromotionPendingError(ChessClientError):
    """A promotion choice was requested while another one is still outstanding."""


class AuthorityProtocolError(AuthorityError):
    """The authority answered with something the move protocol does not allow."""
