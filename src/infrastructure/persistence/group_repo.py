"""
infrastructure.persistence.group_repo - SQLite study groups and memberships.
"""

from __future__ import annotations

import logging
from typing import Optional
from uuid import uuid4

from domain.entities import Group
from infrastructure.persistence.connection import (
    AsyncSQLiteConnection,
    contains_pattern,
    ilike,
    now_iso,
)

logger = logging.getLogger(__name__)


class SQLiteGroupRepository:
    """Async SQLite implementation of GroupRepository."""

    def __init__(self, connection: AsyncSQLiteConnection):
        self._conn = connection

    async def find_groups(self, query: Optional[str] = None, limit: int = 5) -> list[Group]:
        params: list[object] = []
        where = ""
        if query:
            where = f"WHERE {ilike('name')} OR {ilike('description')}"
            params.extend([contains_pattern(query)] * 2)
        params.append(limit)
        async with self._conn.acquire() as conn:
            rows = await conn.execute_fetchall(
                f"SELECT * FROM groups {where} ORDER BY members_count DESC, name LIMIT ?",
                tuple(params),
            )
            return [self._row_to_group(r) for r in rows]

    async def get_by_id(self, group_id: str) -> Optional[Group]:
        async with self._conn.acquire() as conn:
            rows = await conn.execute_fetchall(
                "SELECT * FROM groups WHERE id = ?", (group_id,),
            )
            return self._row_to_group(rows[0]) if rows else None

    async def is_member(self, group_id: str, user_id: str) -> bool:
        async with self._conn.acquire() as conn:
            rows = await conn.execute_fetchall(
                "SELECT 1 FROM group_members WHERE group_id = ? AND user_id = ?",
                (group_id, user_id),
            )
            return bool(rows)

    async def add_member(self, group_id: str, user_id: str, role: str = "MEMBER") -> None:
        """Insert the membership and bump members_count in one transaction.

        A repeated call is a no-op (primary key on group_id, user_id).
        """
        async with self._conn.acquire() as conn:
            cursor = await conn.execute(
                """INSERT OR IGNORE INTO group_members (group_id, user_id, role, joined_at)
                   VALUES (?, ?, ?, ?)""",
                (group_id, user_id, role, now_iso()),
            )
            if cursor.rowcount:
                await conn.execute(
                    "UPDATE groups SET members_count = members_count + 1 WHERE id = ?",
                    (group_id,),
                )

    async def save(self, group: Group) -> str:
        group.id = group.id or uuid4().hex
        async with self._conn.acquire() as conn:
            await conn.execute(
                """INSERT INTO groups (id, name, description, type, members_count, created_at)
                   VALUES (?, ?, ?, ?, ?, ?)""",
                (group.id, group.name, group.description, group.type,
                 group.members_count, now_iso()),
            )
        return group.id

    @staticmethod
    def _row_to_group(row) -> Group:
        return Group(
            id=row["id"],
            name=row["name"],
            description=row["description"] or "",
            type=row["type"],
            members_count=row["members_count"] or 0,
        )
