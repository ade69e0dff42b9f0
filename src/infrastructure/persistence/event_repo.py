"""
infrastructure.persistence.event_repo - SQLite academic events and attendance.
"""

from __future__ import annotations

import logging
from typing import Optional
from uuid import uuid4

from domain.entities import DEFAULT_MAX_ATTENDEES, Event
from infrastructure.persistence.connection import (
    AsyncSQLiteConnection,
    contains_pattern,
    ilike,
    now_iso,
)

logger = logging.getLogger(__name__)

_SELECT = """SELECT e.*,
                    (SELECT COUNT(*) FROM event_attendances a
                     WHERE a.event_id = e.id) AS attendee_count
             FROM events e"""


class SQLiteEventRepository:
    """Async SQLite implementation of EventRepository."""

    def __init__(self, connection: AsyncSQLiteConnection):
        self._conn = connection

    async def find_upcoming(
        self, query: Optional[str] = None, after_iso: str = "", limit: int = 5,
    ) -> list[Event]:
        clauses = ["e.start_date >= ?"]
        params: list[object] = [after_iso]
        if query:
            clauses.append(f"({ilike('e.title')} OR {ilike('e.description')})")
            params.extend([contains_pattern(query)] * 2)
        params.append(limit)
        async with self._conn.acquire() as conn:
            rows = await conn.execute_fetchall(
                f"""{_SELECT}
                    WHERE {' AND '.join(clauses)}
                    ORDER BY e.start_date ASC
                    LIMIT ?""",
                tuple(params),
            )
            return [self._row_to_event(r) for r in rows]

    async def get_by_id(self, event_id: str) -> Optional[Event]:
        async with self._conn.acquire() as conn:
            rows = await conn.execute_fetchall(f"{_SELECT} WHERE e.id = ?", (event_id,))
            return self._row_to_event(rows[0]) if rows else None

    async def is_registered(self, event_id: str, user_id: str) -> bool:
        async with self._conn.acquire() as conn:
            rows = await conn.execute_fetchall(
                "SELECT 1 FROM event_attendances WHERE event_id = ? AND user_id = ?",
                (event_id, user_id),
            )
            return bool(rows)

    async def register_attendance(self, event_id: str, user_id: str) -> None:
        async with self._conn.acquire() as conn:
            await conn.execute(
                """INSERT OR IGNORE INTO event_attendances
                   (event_id, user_id, confirmed, created_at)
                   VALUES (?, ?, 0, ?)""",
                (event_id, user_id, now_iso()),
            )

    async def save(self, event: Event) -> str:
        event.id = event.id or uuid4().hex
        event.max_attendees = event.max_attendees or DEFAULT_MAX_ATTENDEES
        async with self._conn.acquire() as conn:
            await conn.execute(
                """INSERT INTO events
                   (id, title, description, start_date, location, is_online,
                    max_attendees, created_at)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
                (event.id, event.title, event.description, event.start_date,
                 event.location, int(event.is_online), event.max_attendees, now_iso()),
            )
        return event.id

    @staticmethod
    def _row_to_event(row) -> Event:
        return Event(
            id=row["id"],
            title=row["title"],
            description=row["description"] or "",
            start_date=row["start_date"],
            location=row["location"] or "",
            is_online=bool(row["is_online"]),
            max_attendees=row["max_attendees"] or DEFAULT_MAX_ATTENDEES,
            attendee_count=row["attendee_count"] or 0,
        )
