"""
application.services.conversation_store - Conversation persistence service.

Owns conversation creation, message append, trimmed-history retrieval and
the ownership-scoped list/get/delete operations. A non-owned or missing
conversation is always a ConversationNotFoundError, never a silent no-op.
"""

from __future__ import annotations

import logging
from typing import Optional

from domain.entities import ChatMessage, Conversation
from domain.exceptions import ConversationNotFoundError
from domain.models import HistoryTurn
from domain.ports import ChatMessageRepository, ConversationRepository
from application.dto import ConversationDetail, ConversationSummary

logger = logging.getLogger(__name__)

TITLE_MAX_CHARS = 50
PREVIEW_MAX_CHARS = 50
DEFAULT_HISTORY_LIMIT = 20


def make_title(text: str, max_chars: int = TITLE_MAX_CHARS) -> str:
    """First *max_chars* characters of the message, '...' when truncated."""
    if len(text) > max_chars:
        return text[:max_chars] + "..."
    return text


class ConversationStore:
    """Persists and retrieves tutor conversations and their messages."""

    def __init__(
        self,
        conversation_repo: ConversationRepository,
        message_repo: ChatMessageRepository,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ):
        self._conversation_repo = conversation_repo
        self._message_repo = message_repo
        self._history_limit = history_limit

    async def get_or_create(
        self,
        user_id: str,
        conversation_id: Optional[str],
        first_message: str,
    ) -> tuple[Conversation, list[HistoryTurn]]:
        """Resolve an owned conversation (with trimmed history) or start one.

        Raises:
            ConversationNotFoundError: conversation_id given but not owned by user_id.
        """
        if conversation_id:
            conversation = await self._require_owned(user_id, conversation_id)
            history = await self.load_history(conversation.id)
            return conversation, history

        conversation = Conversation(user_id=user_id, title=make_title(first_message))
        await self._conversation_repo.save(conversation)
        logger.info("Created conversation %s for user %s", conversation.id, user_id)
        return conversation, []

    async def append_message(
        self, conversation_id: str, role: str, content: str,
    ) -> ChatMessage:
        if role not in ("user", "assistant"):
            raise ValueError(f"Invalid message role: {role!r}")
        return await self._message_repo.save(
            ChatMessage(conversation_id=conversation_id, role=role, content=content),
        )

    async def touch(self, conversation_id: str) -> None:
        """Update last activity. The title is fixed at creation."""
        await self._conversation_repo.touch(conversation_id)

    async def load_history(self, conversation_id: str) -> list[HistoryTurn]:
        """Most recent messages (bounded) in chronological order."""
        messages = await self._message_repo.get_recent(
            conversation_id, self._history_limit,
        )
        return [HistoryTurn(role=m.role, content=m.content) for m in messages]

    async def list_conversations(self, user_id: str) -> list[ConversationSummary]:
        """List a user's conversations, most recently active first."""
        conversations = await self._conversation_repo.get_by_user(user_id)
        summaries = []
        for c in conversations:
            last = await self._message_repo.get_last(c.id)
            summaries.append(ConversationSummary(
                id=c.id,
                title=c.title,
                last_message_preview=last.content[:PREVIEW_MAX_CHARS] if last else None,
                updated_at=c.updated_at,
            ))
        return summaries

    async def get_conversation(
        self, user_id: str, conversation_id: str,
    ) -> ConversationDetail:
        conversation = await self._require_owned(user_id, conversation_id)
        messages = await self._message_repo.get_by_conversation(conversation.id)
        return ConversationDetail(conversation=conversation, messages=messages)

    async def delete_conversation(self, user_id: str, conversation_id: str) -> None:
        """Delete an owned conversation; messages cascade."""
        conversation = await self._require_owned(user_id, conversation_id)
        await self._conversation_repo.delete(conversation.id)
        logger.info("Deleted conversation %s for user %s", conversation.id, user_id)

    async def _require_owned(self, user_id: str, conversation_id: str) -> Conversation:
        conversation = await self._conversation_repo.get_owned(user_id, conversation_id)
        if conversation is None:
            raise ConversationNotFoundError("Conversation not found")
        return conversation
