"""
infrastructure.persistence.action_log_repo - SQLite tool action audit log.

Append-only. One row per tool invocation attempt, including failed ones.
"""

from __future__ import annotations

import logging

from domain.entities import ActionLogEntry
from infrastructure.persistence.connection import AsyncSQLiteConnection, now_iso

logger = logging.getLogger(__name__)


class SQLiteActionLogRepository:
    """Async SQLite implementation of ActionLogRepository."""

    def __init__(self, connection: AsyncSQLiteConnection):
        self._conn = connection

    async def save(self, entry: ActionLogEntry) -> int:
        async with self._conn.acquire() as conn:
            cursor = await conn.execute(
                """INSERT INTO tutor_action_logs
                   (conversation_id, function_name, parameters, result,
                    success, created_at)
                   VALUES (?, ?, ?, ?, ?, ?)""",
                (entry.conversation_id, entry.tool_name, entry.arguments,
                 entry.result, int(entry.success), now_iso()),
            )
            return cursor.lastrowid

    async def get_by_conversation(
        self, conversation_id: str,
    ) -> list[ActionLogEntry]:
        async with self._conn.acquire() as conn:
            rows = await conn.execute_fetchall(
                """SELECT * FROM tutor_action_logs
                   WHERE conversation_id = ?
                   ORDER BY id ASC""",
                (conversation_id,),
            )
            return [self._row_to_entity(r) for r in rows]

    @staticmethod
    def _row_to_entity(row) -> ActionLogEntry:
        return ActionLogEntry(
            id=row["id"],
            conversation_id=row["conversation_id"],
            tool_name=row["function_name"],
            arguments=row["parameters"] or "{}",
            result=row["result"] or "{}",
            success=bool(row["success"]),
            created_at=row["created_at"] or "",
        )
