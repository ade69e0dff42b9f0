"""
infrastructure.persistence.conversation_repo - SQLite conversation repository.

Stores tutor conversation metadata (owner, title, timestamps). Every read
that takes a conversation id is scoped by owner.
"""

from __future__ import annotations

import logging
from typing import Optional
from uuid import uuid4

from domain.entities import Conversation
from infrastructure.persistence.connection import AsyncSQLiteConnection, now_iso

logger = logging.getLogger(__name__)


class SQLiteConversationRepository:
    """Async SQLite implementation of ConversationRepository."""

    def __init__(self, connection: AsyncSQLiteConnection):
        self._conn = connection

    async def save(self, conversation: Conversation) -> str:
        """Insert a conversation, assigning id and timestamps in place."""
        now = now_iso()
        conversation.id = conversation.id or uuid4().hex
        conversation.created_at = now
        conversation.updated_at = now
        async with self._conn.acquire() as conn:
            await conn.execute(
                """INSERT INTO tutor_conversations
                   (id, user_id, title, created_at, updated_at)
                   VALUES (?, ?, ?, ?, ?)""",
                (conversation.id, conversation.user_id, conversation.title, now, now),
            )
        return conversation.id

    async def get_owned(
        self, user_id: str, conversation_id: str,
    ) -> Optional[Conversation]:
        async with self._conn.acquire() as conn:
            rows = await conn.execute_fetchall(
                """SELECT * FROM tutor_conversations
                   WHERE id = ? AND user_id = ?""",
                (conversation_id, user_id),
            )
            return self._row_to_entity(rows[0]) if rows else None

    async def get_by_user(self, user_id: str) -> list[Conversation]:
        async with self._conn.acquire() as conn:
            rows = await conn.execute_fetchall(
                """SELECT * FROM tutor_conversations
                   WHERE user_id = ?
                   ORDER BY updated_at DESC""",
                (user_id,),
            )
            return [self._row_to_entity(r) for r in rows]

    async def touch(self, conversation_id: str) -> None:
        async with self._conn.acquire() as conn:
            await conn.execute(
                "UPDATE tutor_conversations SET updated_at = ? WHERE id = ?",
                (now_iso(), conversation_id),
            )

    async def delete(self, conversation_id: str) -> None:
        """Hard delete; messages and action logs cascade."""
        async with self._conn.acquire() as conn:
            await conn.execute(
                "DELETE FROM tutor_conversations WHERE id = ?",
                (conversation_id,),
            )

    @staticmethod
    def _row_to_entity(row) -> Conversation:
        return Conversation(
            id=row["id"],
            user_id=row["user_id"],
            title=row["title"] or "",
            created_at=row["created_at"] or "",
            updated_at=row["updated_at"] or "",
        )
