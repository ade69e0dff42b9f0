"""
infrastructure.persistence.user_repo - SQLite user directory.

Implements the UserDirectory port: lookups by id and case-insensitive
search by name or career over active, verified users.
"""

from __future__ import annotations

import logging
from typing import Optional
from uuid import uuid4

from domain.entities import DirectoryUser
from infrastructure.persistence.connection import (
    AsyncSQLiteConnection,
    contains_pattern,
    ilike,
    now_iso,
)

logger = logging.getLogger(__name__)


class SQLiteUserRepository:
    """Async SQLite implementation of UserDirectory."""

    def __init__(self, connection: AsyncSQLiteConnection):
        self._conn = connection

    async def get_by_id(self, user_id: str) -> Optional[DirectoryUser]:
        async with self._conn.acquire() as conn:
            rows = await conn.execute_fetchall(
                "SELECT * FROM users WHERE id = ?", (user_id,),
            )
            return self._row_to_user(rows[0]) if rows else None

    async def find_users(
        self,
        name_part: Optional[str] = None,
        career_part: Optional[str] = None,
        limit: int = 10,
    ) -> list[DirectoryUser]:
        clauses = ["is_active = 1", "is_verified = 1"]
        params: list[object] = []
        if name_part:
            clauses.append(f"({ilike('first_name')} OR {ilike('last_name')})")
            params.extend([contains_pattern(name_part)] * 2)
        if career_part:
            clauses.append(ilike("career"))
            params.append(contains_pattern(career_part))
        params.append(limit)

        async with self._conn.acquire() as conn:
            rows = await conn.execute_fetchall(
                f"""SELECT * FROM users
                    WHERE {' AND '.join(clauses)}
                    ORDER BY first_name, last_name
                    LIMIT ?""",
                tuple(params),
            )
            return [self._row_to_user(r) for r in rows]

    async def save(self, user: DirectoryUser) -> str:
        user.id = user.id or uuid4().hex
        async with self._conn.acquire() as conn:
            await conn.execute(
                """INSERT INTO users
                   (id, first_name, last_name, career, is_active, is_verified, created_at)
                   VALUES (?, ?, ?, ?, ?, ?, ?)""",
                (user.id, user.first_name, user.last_name, user.career,
                 int(user.is_active), int(user.is_verified), now_iso()),
            )
        return user.id

    @staticmethod
    def _row_to_user(row) -> DirectoryUser:
        return DirectoryUser(
            id=row["id"],
            first_name=row["first_name"] or "",
            last_name=row["last_name"] or "",
            career=row["career"] or "",
            is_active=bool(row["is_active"]),
            is_verified=bool(row["is_verified"]),
        )
