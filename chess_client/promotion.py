"""
Pause point for pawn promotion.

When the authority asks for a piece choice, the controller calls `request()`
and awaits the result. The UI shows its chooser and calls `resolve("q")`
(or r/b/n). Only the first resolve for a pending request counts; anything
else is ignored, so a late click can never leak into the next move.
"""

import asyncio
import logging
from typing import Callable

from chess_client.errors import PromotionPendingError
from chess_client.models import PromotionChoice

logger = logging.getLogger(__name__)


class PromotionCoordinator:
    def __init__(self, on_prompt: Callable[[], None] | None = None) -> None:
        self.on_prompt = on_prompt
        self._pending: asyncio.Future[PromotionChoice] | None = None

    @property
    def awaiting_choice(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def request(self) -> "asyncio.Future[PromotionChoice]":
        """Enter awaiting-choice and return the future the choice will arrive on."""
        if self._pending is not None:
            raise PromotionPendingError("A promotion choice is already outstanding.")

        pending = asyncio.get_running_loop().create_future()
        self._pending = pending
        if self.on_prompt is not None:
            try:
                self.on_prompt()
            except Exception:
                self._pending = None
                raise
        return pending

    def release(self, pending: "asyncio.Future[PromotionChoice]") -> None:
        """Called by the waiting flow when it stops waiting, resolved or not."""
        if self._pending is pending:
            self._pending = None
        if not pending.done():
            pending.cancel()

    def resolve(self, choice: PromotionChoice | str) -> bool:
        """Hand over the chosen piece. Returns False when nothing was waiting."""
        if self._pending is None or self._pending.done():
            self._pending = None
            logger.debug(f"Ignoring promotion choice {choice!r}: nothing pending")
            return False

        kind = PromotionChoice(str(choice).lower())
        pending, self._pending = self._pending, None
        pending.set_result(kind)
        return True
