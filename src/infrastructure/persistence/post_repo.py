"""
infrastructure.persistence.post_repo - SQLite discussion posts.
"""

from __future__ import annotations

import logging
from typing import Optional
from uuid import uuid4

from domain.entities import Post
from infrastructure.persistence.connection import (
    AsyncSQLiteConnection,
    contains_pattern,
    ilike,
    now_iso,
)

logger = logging.getLogger(__name__)

_SELECT = """SELECT p.*, u.first_name, u.last_name
             FROM posts p JOIN users u ON u.id = p.author_id"""


class SQLitePostRepository:
    """Async SQLite implementation of PostRepository."""

    def __init__(self, connection: AsyncSQLiteConnection):
        self._conn = connection

    async def find_posts(
        self,
        query: Optional[str] = None,
        author_name: Optional[str] = None,
        limit: int = 5,
    ) -> list[Post]:
        clauses: list[str] = []
        params: list[object] = []
        if query:
            clauses.append(ilike("p.content"))
            params.append(contains_pattern(query))
        if author_name:
            clauses.append(f"({ilike('u.first_name')} OR {ilike('u.last_name')})")
            params.extend([contains_pattern(author_name)] * 2)
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        params.append(limit)

        async with self._conn.acquire() as conn:
            rows = await conn.execute_fetchall(
                f"{_SELECT} {where} ORDER BY p.created_at DESC LIMIT ?",
                tuple(params),
            )
            return [self._row_to_post(r) for r in rows]

    async def create_post(self, author_id: str, content: str) -> Post:
        post = Post(id=uuid4().hex, author_id=author_id, content=content,
                    type="DISCUSSION", created_at=now_iso())
        async with self._conn.acquire() as conn:
            await conn.execute(
                """INSERT INTO posts (id, author_id, content, type, created_at)
                   VALUES (?, ?, ?, ?, ?)""",
                (post.id, post.author_id, post.content, post.type, post.created_at),
            )
        logger.info("Post %s created by %s", post.id, author_id)
        return post

    async def get_by_id(self, post_id: str) -> Optional[Post]:
        async with self._conn.acquire() as conn:
            rows = await conn.execute_fetchall(f"{_SELECT} WHERE p.id = ?", (post_id,))
            return self._row_to_post(rows[0]) if rows else None

    @staticmethod
    def _row_to_post(row) -> Post:
        return Post(
            id=row["id"],
            author_id=row["author_id"],
            author_name=f"{row['first_name']} {row['last_name']}".strip(),
            content=row["content"],
            type=row["type"],
            created_at=row["created_at"] or "",
        )
