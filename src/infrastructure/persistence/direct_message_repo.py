"""
infrastructure.persistence.direct_message_repo - SQLite direct messaging.

Implements the MessagingService port. Rejects unknown or inactive receivers.
"""

from __future__ import annotations

import logging

from domain.entities import DirectMessage
from domain.exceptions import RecipientUnavailableError
from infrastructure.persistence.connection import AsyncSQLiteConnection, now_iso

logger = logging.getLogger(__name__)


class SQLiteDirectMessageRepository:
    """Async SQLite implementation of MessagingService."""

    def __init__(self, connection: AsyncSQLiteConnection):
        self._conn = connection

    async def create_direct_message(
        self, sender_id: str, receiver_id: str, content: str,
    ) -> DirectMessage:
        now = now_iso()
        async with self._conn.acquire() as conn:
            rows = await conn.execute_fetchall(
                "SELECT is_active FROM users WHERE id = ?", (receiver_id,),
            )
            if not rows or not rows[0]["is_active"]:
                raise RecipientUnavailableError(
                    f"User {receiver_id} not found or inactive"
                )
            cursor = await conn.execute(
                """INSERT INTO direct_messages
                   (sender_id, receiver_id, content, is_read, created_at)
                   VALUES (?, ?, ?, 0, ?)""",
                (sender_id, receiver_id, content, now),
            )
            message_id = cursor.lastrowid

        logger.info("Direct message %s sent from %s to %s", message_id, sender_id, receiver_id)
        return DirectMessage(
            id=message_id,
            sender_id=sender_id,
            receiver_id=receiver_id,
            content=content,
            created_at=now,
        )

    async def get_between(self, sender_id: str, receiver_id: str) -> list[DirectMessage]:
        async with self._conn.acquire() as conn:
            rows = await conn.execute_fetchall(
                """SELECT * FROM direct_messages
                   WHERE sender_id = ? AND receiver_id = ?
                   ORDER BY id ASC""",
                (sender_id, receiver_id),
            )
            return [
                DirectMessage(
                    id=r["id"],
                    sender_id=r["sender_id"],
                    receiver_id=r["receiver_id"],
                    content=r["content"],
                    is_read=bool(r["is_read"]),
                    created_at=r["created_at"] or "",
                )
                for r in rows
            ]
