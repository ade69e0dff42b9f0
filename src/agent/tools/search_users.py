"""
agent.tools.search_users - Read-only platform directory search.

An empty result is a successful search, not an error.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from application.context import SessionContext
from domain.ports import UserDirectory
from agent.tools.base import BaseTool, ToolResult

MAX_RESULTS = 10


class SearchUsersInput(BaseModel):
    """Input schema for the searchUsers tool."""

    name: Optional[str] = Field(
        default=None,
        description="Name or part of the name of the user to find",
    )
    career: Optional[str] = Field(
        default=None,
        description="The user's degree programme (e.g. Systems Engineering, Accounting)",
    )


class SearchUsersTool(BaseTool):
    """Find users by name or career."""

    name = "searchUsers"
    description = (
        "Search for users on the platform by name or career. "
        "Use this when the user wants to find someone, or before sending "
        "a message to someone whose ID you do not know yet."
    )

    def __init__(self, directory: UserDirectory):
        self._directory = directory

    def get_schema(self) -> type[BaseModel]:
        return SearchUsersInput

    async def execute(
        self,
        ctx: SessionContext,
        name: Optional[str] = None,
        career: Optional[str] = None,
        **kwargs,
    ) -> ToolResult:
        users = await self._directory.find_users(
            name_part=(name or "").strip() or None,
            career_part=(career or "").strip() or None,
            limit=MAX_RESULTS,
        )
        return ToolResult.ok(
            users=[
                {"id": u.id, "name": u.full_name, "career": u.career}
                for u in users
            ],
            count=len(users),
        )
