"""
agent.tools.create_post - Publish a discussion post authored by the caller.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from application.context import SessionContext
from domain.ports import PostRepository
from agent.tools.base import BaseTool, ToolResult

MAX_CONTENT_CHARS = 3000


class CreatePostInput(BaseModel):
    """Input schema for the createPost tool."""

    content: str = Field(description="Text of the post")


class CreatePostTool(BaseTool):
    """Create a new discussion post on the user's behalf."""

    name = "createPost"
    description = (
        "Create a new post on behalf of the user. "
        "Use this when the user wants to publish something."
    )

    def __init__(self, posts: PostRepository):
        self._posts = posts

    def get_schema(self) -> type[BaseModel]:
        return CreatePostInput

    async def execute(
        self,
        ctx: SessionContext,
        content: str = "",
        **kwargs,
    ) -> ToolResult:
        if not content.strip():
            return ToolResult.fail("content is required")

        post = await self._posts.create_post(ctx.user_id, content[:MAX_CONTENT_CHARS])
        return ToolResult.ok(message="Post created successfully", postId=post.id)
