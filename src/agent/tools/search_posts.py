"""
agent.tools.search_posts - Read-only search over discussion posts.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from application.context import SessionContext
from domain.ports import PostRepository
from agent.tools.base import BaseTool, ToolResult

MAX_RESULTS = 5
PREVIEW_CHARS = 100


class SearchPostsInput(BaseModel):
    """Input schema for the searchPosts tool."""

    model_config = ConfigDict(populate_by_name=True)

    query: Optional[str] = Field(
        default=None, description="Keywords to look for in post content",
    )
    author_name: Optional[str] = Field(
        default=None, alias="authorName", description="Name of the post author",
    )


class SearchPostsTool(BaseTool):
    """Search posts by keyword or author."""

    name = "searchPosts"
    description = "Search posts on the platform by keywords or by author name."

    def __init__(self, posts: PostRepository):
        self._posts = posts

    def get_schema(self) -> type[BaseModel]:
        return SearchPostsInput

    async def execute(
        self,
        ctx: SessionContext,
        query: Optional[str] = None,
        author_name: Optional[str] = None,
        **kwargs,
    ) -> ToolResult:
        posts = await self._posts.find_posts(
            query=(query or "").strip() or None,
            author_name=(author_name or "").strip() or None,
            limit=MAX_RESULTS,
        )
        return ToolResult.ok(
            posts=[
                {
                    "id": p.id,
                    "content": _preview(p.content),
                    "author": p.author_name,
                    "date": p.created_at,
                }
                for p in posts
            ],
            count=len(posts),
        )


def _preview(text: str) -> str:
    if len(text) > PREVIEW_CHARS:
        return text[:PREVIEW_CHARS] + "..."
    return text
