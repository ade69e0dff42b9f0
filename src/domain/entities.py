"""
domain.entities - Persistence-aware types (have IDs, timestamps).

Decoupled from any persistence strategy. No SQL, no DB imports.
Timestamps are set by the repository implementations, not by the entities
themselves.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_MAX_ATTENDEES = 500


# ---------------------------------------------------------------------------
# Tutor conversation data
# ---------------------------------------------------------------------------

@dataclass
class Conversation:
    """A tutor conversation owned by exactly one user."""
    id: str = ""
    user_id: str = ""
    title: str = ""
    created_at: str = ""
    updated_at: str = ""


@dataclass
class ChatMessage:
    """A single immutable message in a conversation."""
    id: Optional[int] = None
    conversation_id: str = ""
    role: str = ""  # "user" or "assistant"
    content: str = ""
    created_at: str = ""


@dataclass
class ActionLogEntry:
    """Audit record of one tool invocation attempt."""
    id: Optional[int] = None
    conversation_id: str = ""
    tool_name: str = ""
    arguments: str = ""  # JSON
    result: str = ""     # JSON
    success: bool = False
    created_at: str = ""


# ---------------------------------------------------------------------------
# Social-graph collaborators (only the fields the tools touch)
# ---------------------------------------------------------------------------

@dataclass
class DirectoryUser:
    """Lightweight user profile from the platform directory."""
    id: str = ""
    first_name: str = ""
    last_name: str = ""
    career: str = ""
    is_active: bool = True
    is_verified: bool = True

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass
class DirectMessage:
    id: Optional[int] = None
    sender_id: str = ""
    receiver_id: str = ""
    content: str = ""
    is_read: bool = False
    created_at: str = ""


@dataclass
class Post:
    id: str = ""
    author_id: str = ""
    author_name: str = ""
    content: str = ""
    type: str = "DISCUSSION"
    created_at: str = ""


@dataclass
class Group:
    id: str = ""
    name: str = ""
    description: str = ""
    type: str = "PUBLIC"
    members_count: int = 0


@dataclass
class Event:
    """An academic event; attendee_count is computed by the repository."""
    id: str = ""
    title: str = ""
    description: str = ""
    start_date: str = ""
    location: str = ""
    is_online: bool = False
    max_attendees: int = DEFAULT_MAX_ATTENDEES
    attendee_count: int = 0

    @property
    def is_full(self) -> bool:
        return self.attendee_count >= self.max_attendees
