"""
infrastructure.persistence.chat_message_repo - SQLite chat message repository.

Stores individual conversation messages (user and assistant turns).
Messages are append-only; ordering is created_at then id.
"""

from __future__ import annotations

import logging
from typing import Optional

from domain.entities import ChatMessage
from infrastructure.persistence.connection import AsyncSQLiteConnection, now_iso

logger = logging.getLogger(__name__)


class SQLiteChatMessageRepository:
    """Async SQLite implementation of ChatMessageRepository."""

    def __init__(self, connection: AsyncSQLiteConnection):
        self._conn = connection

    async def save(self, message: ChatMessage) -> ChatMessage:
        now = now_iso()
        async with self._conn.acquire() as conn:
            cursor = await conn.execute(
                """INSERT INTO tutor_messages
                   (conversation_id, role, content, created_at)
                   VALUES (?, ?, ?, ?)""",
                (message.conversation_id, message.role, message.content, now),
            )
            message_id = cursor.lastrowid
        return ChatMessage(
            id=message_id,
            conversation_id=message.conversation_id,
            role=message.role,
            content=message.content,
            created_at=now,
        )

    async def get_by_conversation(
        self, conversation_id: str,
    ) -> list[ChatMessage]:
        async with self._conn.acquire() as conn:
            rows = await conn.execute_fetchall(
                """SELECT * FROM tutor_messages
                   WHERE conversation_id = ?
                   ORDER BY created_at ASC, id ASC""",
                (conversation_id,),
            )
            return [self._row_to_entity(r) for r in rows]

    async def get_recent(
        self, conversation_id: str, limit: int,
    ) -> list[ChatMessage]:
        """Return the *limit* most recent messages in chronological order."""
        async with self._conn.acquire() as conn:
            rows = await conn.execute_fetchall(
                """SELECT * FROM tutor_messages
                   WHERE conversation_id = ?
                   ORDER BY created_at DESC, id DESC
                   LIMIT ?""",
                (conversation_id, limit),
            )
            return [self._row_to_entity(r) for r in reversed(list(rows))]

    async def get_last(self, conversation_id: str) -> Optional[ChatMessage]:
        recent = await self.get_recent(conversation_id, 1)
        return recent[0] if recent else None

    async def count_user_messages_since(self, user_id: str, since_iso: str) -> int:
        """Count user-authored messages across all of a user's conversations."""
        async with self._conn.acquire() as conn:
            rows = await conn.execute_fetchall(
                """SELECT COUNT(*) FROM tutor_messages m
                   JOIN tutor_conversations c ON c.id = m.conversation_id
                   WHERE c.user_id = ?
                     AND m.role = 'user'
                     AND m.created_at >= ?""",
                (user_id, since_iso),
            )
            return rows[0][0] if rows else 0

    @staticmethod
    def _row_to_entity(row) -> ChatMessage:
        return ChatMessage(
            id=row["id"],
            conversation_id=row["conversation_id"],
            role=row["role"] or "",
            content=row["content"] or "",
            created_at=row["created_at"] or "",
        )
