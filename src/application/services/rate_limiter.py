"""
application.services.rate_limiter - Per-user sliding-window turn limiter.

The count is derived from persisted user-role messages, so it survives
process restarts and needs no separate mutable counter.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

from domain.ports import ChatMessageRepository

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RateLimiter:
    """Gate on how many user-authored turns may be submitted per window."""

    def __init__(
        self,
        message_repo: ChatMessageRepository,
        max_turns: int = 20,
        window_seconds: int = 60,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self._message_repo = message_repo
        self._max_turns = max_turns
        self._window = timedelta(seconds=window_seconds)
        self._clock = clock

    @property
    def window_seconds(self) -> int:
        return int(self._window.total_seconds())

    async def check_and_consume(self, user_id: str) -> bool:
        """Return True if the user may submit another turn right now.

        The turn is consumed when the orchestrator persists the user
        message; this call itself writes nothing.
        """
        since = (self._clock() - self._window).isoformat(timespec="microseconds")
        recent = await self._message_repo.count_user_messages_since(user_id, since)
        if recent >= self._max_turns:
            logger.warning(
                "Rate limit hit for user %s: %d turns in the last %ds",
                user_id, recent, self.window_seconds,
            )
            return False
        return True
