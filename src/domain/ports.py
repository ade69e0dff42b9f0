"""
domain.ports - Abstract interfaces (Protocols) for all system boundaries.

These define WHAT the system needs without specifying HOW. Infrastructure
modules provide concrete implementations. Application services and the
agent depend only on these protocols, never on concrete classes.

Using typing.Protocol (structural typing) instead of ABC: any class that
implements the methods satisfies the port without explicit inheritance.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence, runtime_checkable

from domain.entities import (
    ActionLogEntry,
    ChatMessage,
    Conversation,
    DirectMessage,
    DirectoryUser,
    Event,
    Group,
    Post,
)
from domain.models import HistoryTurn, ModelResponse, ToolExecution


# ---------------------------------------------------------------------------
# Language model port
# ---------------------------------------------------------------------------

@runtime_checkable
class LanguageModelClient(Protocol):
    """Swappable model capability; no vendor type crosses this boundary."""

    def is_available(self) -> bool: ...

    async def converse(
        self,
        user_utterance: str,
        history: Sequence[HistoryTurn],
        system_prompt: str,
    ) -> ModelResponse: ...

    async def continue_with_tool_results(
        self,
        user_utterance: str,
        history: Sequence[HistoryTurn],
        tool_results: Sequence[ToolExecution],
        system_prompt: str,
    ) -> ModelResponse: ...


# ---------------------------------------------------------------------------
# Tutor repository ports
# ---------------------------------------------------------------------------

@runtime_checkable
class ConversationRepository(Protocol):
    """CRUD for Conversation metadata."""

    async def save(self, conversation: Conversation) -> str: ...
    async def get_owned(self, user_id: str, conversation_id: str) -> Conversation | None: ...
    async def get_by_user(self, user_id: str) -> list[Conversation]: ...
    async def touch(self, conversation_id: str) -> None: ...
    async def delete(self, conversation_id: str) -> None: ...


@runtime_checkable
class ChatMessageRepository(Protocol):
    """Append-only store of conversation messages."""

    async def save(self, message: ChatMessage) -> ChatMessage: ...
    async def get_by_conversation(self, conversation_id: str) -> list[ChatMessage]: ...
    async def get_recent(self, conversation_id: str, limit: int) -> list[ChatMessage]: ...
    async def get_last(self, conversation_id: str) -> ChatMessage | None: ...
    async def count_user_messages_since(self, user_id: str, since_iso: str) -> int: ...


@runtime_checkable
class ActionLogRepository(Protocol):
    """Append-only audit of tool invocations."""

    async def save(self, entry: ActionLogEntry) -> int: ...
    async def get_by_conversation(self, conversation_id: str) -> list[ActionLogEntry]: ...


# ---------------------------------------------------------------------------
# Social-graph collaborator ports (consumed by the tools)
# ---------------------------------------------------------------------------

@runtime_checkable
class UserDirectory(Protocol):
    async def get_by_id(self, user_id: str) -> DirectoryUser | None: ...
    async def find_users(
        self,
        name_part: Optional[str] = None,
        career_part: Optional[str] = None,
        limit: int = 10,
    ) -> list[DirectoryUser]: ...


@runtime_checkable
class MessagingService(Protocol):
    async def create_direct_message(
        self, sender_id: str, receiver_id: str, content: str,
    ) -> DirectMessage: ...


@runtime_checkable
class PostRepository(Protocol):
    async def find_posts(
        self,
        query: Optional[str] = None,
        author_name: Optional[str] = None,
        limit: int = 5,
    ) -> list[Post]: ...
    async def create_post(self, author_id: str, content: str) -> Post: ...


@runtime_checkable
class GroupRepository(Protocol):
    async def find_groups(self, query: Optional[str] = None, limit: int = 5) -> list[Group]: ...
    async def get_by_id(self, group_id: str) -> Group | None: ...
    async def is_member(self, group_id: str, user_id: str) -> bool: ...
    async def add_member(self, group_id: str, user_id: str, role: str = "MEMBER") -> None: ...


@runtime_checkable
class EventRepository(Protocol):
    async def find_upcoming(
        self, query: Optional[str] = None, after_iso: str = "", limit: int = 5,
    ) -> list[Event]: ...
    async def get_by_id(self, event_id: str) -> Event | None: ...
    async def is_registered(self, event_id: str, user_id: str) -> bool: ...
    async def register_attendance(self, event_id: str, user_id: str) -> None: ...
