"""
agent.tools.send_message - Send a direct message on the caller's behalf.

Unknown or inactive recipients come back as a structured error so the
model can explain it; they never abort the turn.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from application.context import SessionContext
from domain.exceptions import RecipientUnavailableError
from domain.ports import MessagingService, UserDirectory
from agent.tools.base import BaseTool, ToolResult

MAX_CONTENT_CHARS = 1000


class SendMessageInput(BaseModel):
    """Input schema for the sendMessage tool."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId", description="ID of the recipient user")
    content: str = Field(description="Text of the message to send")


class SendMessageTool(BaseTool):
    """Send a direct message to a specific user."""

    name = "sendMessage"
    description = (
        "Send a direct message to a specific user. Use this when the user "
        "asks you to message someone. If you only know the person's name, "
        "call searchUsers first to get their ID."
    )

    def __init__(self, directory: UserDirectory, messaging: MessagingService):
        self._directory = directory
        self._messaging = messaging

    def get_schema(self) -> type[BaseModel]:
        return SendMessageInput

    async def execute(
        self,
        ctx: SessionContext,
        user_id: str = "",
        content: str = "",
        **kwargs,
    ) -> ToolResult:
        if not user_id.strip() or not content.strip():
            return ToolResult.fail("missing required parameters: userId and content")

        receiver = await self._directory.get_by_id(user_id)
        if receiver is None or not receiver.is_active:
            return ToolResult.fail("user not found or inactive")

        try:
            await self._messaging.create_direct_message(
                ctx.user_id, receiver.id, content[:MAX_CONTENT_CHARS],
            )
        except RecipientUnavailableError:
            return ToolResult.fail("user not found or inactive")

        return ToolResult.ok(message=f"Message sent to {receiver.full_name}")
