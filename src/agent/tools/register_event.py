"""
agent.tools.register_event - Register the caller as an event attendee.

Outcomes are distinguished by a status code: registered,
already_registered, not_found, at_capacity.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from application.context import SessionContext
from domain.ports import EventRepository
from agent.tools.base import BaseTool, ToolResult


class RegisterToEventInput(BaseModel):
    """Input schema for the registerToEvent tool."""

    model_config = ConfigDict(populate_by_name=True)

    event_id: str = Field(alias="eventId", description="ID of the event to attend")


class RegisterToEventTool(BaseTool):
    """Register for an event if capacity allows."""

    name = "registerToEvent"
    description = (
        "Register the user for an academic event. Use this when the user "
        "wants to attend an event; call searchEvents first if you do not "
        "know the event ID."
    )

    def __init__(self, events: EventRepository):
        self._events = events

    def get_schema(self) -> type[BaseModel]:
        return RegisterToEventInput

    async def execute(
        self,
        ctx: SessionContext,
        event_id: str = "",
        **kwargs,
    ) -> ToolResult:
        if not event_id.strip():
            return ToolResult.fail("eventId is required")

        event = await self._events.get_by_id(event_id)
        if event is None:
            return ToolResult.fail("event not found", status="not_found")

        if await self._events.is_registered(event.id, ctx.user_id):
            return ToolResult.ok(
                status="already_registered", message="already registered",
                event=event.title,
            )

        if event.is_full:
            return ToolResult.fail(
                "at capacity", status="at_capacity", event=event.title,
                maxAttendees=event.max_attendees,
            )

        await self._events.register_attendance(event.id, ctx.user_id)
        return ToolResult.ok(
            status="registered", message=f'Registered for the event "{event.title}"',
            event=event.title,
        )
