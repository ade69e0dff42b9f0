"""
application.dto - Data Transfer Objects for service input/output.

These are the structured results that services return to callers
(REST endpoints, CLI adapters).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from domain.entities import ChatMessage, Conversation


@dataclass(frozen=True)
class TurnResult:
    """Outcome of one completed user turn."""
    conversation_id: str
    message: ChatMessage
    actions_executed: int


@dataclass(frozen=True)
class ConversationSummary:
    """Row of the conversation list with a last-message preview."""
    id: str
    title: str
    last_message_preview: Optional[str]
    updated_at: str


@dataclass(frozen=True)
class ConversationDetail:
    """A conversation with its full, chronologically ordered history."""
    conversation: Conversation
    messages: list[ChatMessage] = field(default_factory=list)
