"""
agent.tools.join_group - Join the caller to a study group.

"Already a member" and "group not found" are informational, success-shaped
results rather than failures; the model relays them to the user.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from application.context import SessionContext
from domain.ports import GroupRepository
from agent.tools.base import BaseTool, ToolResult


class JoinGroupInput(BaseModel):
    """Input schema for the joinGroup tool."""

    model_config = ConfigDict(populate_by_name=True)

    group_id: str = Field(alias="groupId", description="ID of the group to join")


class JoinGroupTool(BaseTool):
    """Join a study group if not already a member."""

    name = "joinGroup"
    description = (
        "Join a study group. Use this when the user wants to join a group; "
        "call searchGroups first if you do not know the group ID."
    )

    def __init__(self, groups: GroupRepository):
        self._groups = groups

    def get_schema(self) -> type[BaseModel]:
        return JoinGroupInput

    async def execute(
        self,
        ctx: SessionContext,
        group_id: str = "",
        **kwargs,
    ) -> ToolResult:
        if not group_id.strip():
            return ToolResult.fail("groupId is required")

        group = await self._groups.get_by_id(group_id)
        if group is None:
            return ToolResult.ok(joined=False, status="not_found", message="group not found")

        if await self._groups.is_member(group.id, ctx.user_id):
            return ToolResult.ok(
                joined=False, status="already_member", message="already a member",
                group=group.name,
            )

        await self._groups.add_member(group.id, ctx.user_id, role="MEMBER")
        return ToolResult.ok(
            joined=True, status="joined", message=f'Joined the group "{group.name}"',
            group=group.name,
        )
