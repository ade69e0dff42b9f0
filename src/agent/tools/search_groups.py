"""
agent.tools.search_groups - Read-only study group search.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from application.context import SessionContext
from domain.ports import GroupRepository
from agent.tools.base import BaseTool, ToolResult

MAX_RESULTS = 5
DESCRIPTION_CHARS = 100


class SearchGroupsInput(BaseModel):
    """Input schema for the searchGroups tool."""

    query: Optional[str] = Field(
        default=None, description="Name or topic of the group to find",
    )


class SearchGroupsTool(BaseTool):
    """Search study groups by name or topic."""

    name = "searchGroups"
    description = "Search study groups by name or topic."

    def __init__(self, groups: GroupRepository):
        self._groups = groups

    def get_schema(self) -> type[BaseModel]:
        return SearchGroupsInput

    async def execute(
        self,
        ctx: SessionContext,
        query: Optional[str] = None,
        **kwargs,
    ) -> ToolResult:
        groups = await self._groups.find_groups(
            query=(query or "").strip() or None, limit=MAX_RESULTS,
        )
        return ToolResult.ok(
            groups=[
                {
                    "id": g.id,
                    "name": g.name,
                    "description": g.description[:DESCRIPTION_CHARS],
                    "members": g.members_count,
                    "type": g.type,
                }
                for g in groups
            ],
            count=len(groups),
        )
