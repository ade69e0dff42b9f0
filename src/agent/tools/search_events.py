"""
agent.tools.search_events - Read-only search over upcoming academic events.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field

from application.context import SessionContext
from domain.entities import Event
from domain.ports import EventRepository
from agent.tools.base import BaseTool, ToolResult

MAX_RESULTS = 5
DESCRIPTION_CHARS = 100


class SearchEventsInput(BaseModel):
    """Input schema for the searchEvents tool."""

    query: Optional[str] = Field(
        default=None, description="Name or description of the event",
    )


class SearchEventsTool(BaseTool):
    """Search upcoming events, soonest first."""

    name = "searchEvents"
    description = "Search upcoming academic events by name or description."

    def __init__(self, events: EventRepository):
        self._events = events

    def get_schema(self) -> type[BaseModel]:
        return SearchEventsInput

    async def execute(
        self,
        ctx: SessionContext,
        query: Optional[str] = None,
        **kwargs,
    ) -> ToolResult:
        events = await self._events.find_upcoming(
            query=(query or "").strip() or None,
            after_iso=datetime.now(timezone.utc).isoformat(timespec="microseconds"),
            limit=MAX_RESULTS,
        )
        return ToolResult.ok(
            events=[
                {
                    "id": e.id,
                    "title": e.title,
                    "description": e.description[:DESCRIPTION_CHARS],
                    "date": e.start_date,
                    "location": _location(e),
                }
                for e in events
            ],
            count=len(events),
        )


def _location(event: Event) -> str:
    if event.location:
        return event.location
    return "Online" if event.is_online else "To be announced"
