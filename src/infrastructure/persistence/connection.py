"""
infrastructure.persistence.connection - Async SQLite connection manager.

Wraps aiosqlite with a context manager: one connection per operation,
commit on success, rollback on failure. Every connection carries a
``casefold()`` SQL function for Unicode case-insensitive search.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, Optional

import aiosqlite

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"


def now_iso() -> str:
    """Current UTC time with fixed microsecond precision and offset.

    A fixed width keeps lexicographic and chronological order identical.
    """
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


def contains_pattern(text: str) -> str:
    """LIKE pattern matching *text* anywhere, with % and _ taken literally.

    Pair with ilike().
    """
    escaped = (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def ilike(column: str) -> str:
    """Case-insensitive LIKE clause on *column* for one contains_pattern() parameter."""
    return f"casefold({column}) LIKE casefold(?) ESCAPE '{LIKE_ESCAPE}'"


def _casefold(value: Optional[str]) -> Optional[str]:
    return value.casefold() if isinstance(value, str) else value


class AsyncSQLiteConnection:
    """Async SQLite connection provider with auto-commit/rollback."""

    def __init__(self, db_path: str):
        self._db_path = db_path

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """Yield an async SQLite connection with FK support.

        Commits on success, rolls back on exception.
        """
        async with aiosqlite.connect(self._db_path) as conn:
            await conn.execute("PRAGMA foreign_keys = ON")
            await conn.create_function("casefold", 1, _casefold, deterministic=True)
            conn.row_factory = aiosqlite.Row
            try:
                yield conn
                await conn.commit()
            except Exception:
                await conn.rollback()
                logger.exception("Database operation failed, transaction rolled back.")
                raise
