"""
agent.orchestrator - The bounded tool-use loop for one user turn.

The single class that drives a turn: rate check, conversation context,
model invocation, tool rounds, and the persisted assistant reply.
No component construction and no vendor types: everything arrives through
the constructor, wired by factory.py.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Sequence

from application.context import SessionContext
from application.dto import ConversationDetail, ConversationSummary, TurnResult
from application.services.conversation_store import ConversationStore
from application.services.rate_limiter import RateLimiter
from domain.exceptions import (
    ModelCallError,
    RateLimitExceededError,
    ServiceUnavailableError,
    UserNotFoundError,
)
from domain.models import HistoryTurn, ModelResponse, ToolExecution
from domain.ports import LanguageModelClient, UserDirectory
from agent.dispatcher import ToolDispatcher
from agent.prompt import build_system_prompt

logger = logging.getLogger(__name__)

NO_RESPONSE_PLACEHOLDER = "I could not generate a response."
DEFAULT_MAX_TOOL_CALLS = 5
DEFAULT_TURN_TIMEOUT_SECONDS = 60.0


class AgentOrchestrator:
    """Runs user turns against the language model and the tool dispatcher.

    Stateless per call: all turn state lives in local variables and the
    SessionContext, so concurrent turns for different users never share
    mutable state.
    """

    def __init__(
        self,
        model: LanguageModelClient,
        dispatcher: ToolDispatcher,
        store: ConversationStore,
        rate_limiter: RateLimiter,
        users: UserDirectory,
        max_tool_calls: int = DEFAULT_MAX_TOOL_CALLS,
        turn_timeout_seconds: float = DEFAULT_TURN_TIMEOUT_SECONDS,
        language: str = "Spanish",
    ):
        self._model = model
        self._dispatcher = dispatcher
        self._store = store
        self._rate_limiter = rate_limiter
        self._users = users
        self._max_tool_calls = max_tool_calls
        self._turn_timeout = turn_timeout_seconds
        self._language = language

    async def send_message(
        self,
        user_id: str,
        content: str,
        conversation_id: Optional[str] = None,
    ) -> TurnResult:
        """Process one user message and return the persisted assistant reply.

        Raises:
            ServiceUnavailableError:   The model client is not configured.
            UserNotFoundError:         The caller is not in the user directory.
            RateLimitExceededError:    The caller exceeded the turn budget.
            ConversationNotFoundError: conversation_id is not owned by the caller.
            ModelCallError:            The model failed or the turn timed out.
        """
        if not self._model.is_available():
            raise ServiceUnavailableError("The tutor service is not configured")

        caller = await self._users.get_by_id(user_id)
        if caller is None:
            raise UserNotFoundError("User not found")

        if not await self._rate_limiter.check_and_consume(user_id):
            raise RateLimitExceededError(
                "Too many messages. Please wait a moment before trying again."
            )

        conversation, history = await self._store.get_or_create(
            user_id, conversation_id, content,
        )
        await self._store.append_message(conversation.id, "user", content)

        ctx = SessionContext(
            user_id=user_id,
            conversation_id=conversation.id,
            career=caller.career,
        )
        system_prompt = build_system_prompt(career=ctx.career, language=self._language)

        logger.info(
            "Turn started (user=%s, conversation=%s, request=%s): %s",
            user_id, conversation.id, ctx.request_id, content[:80],
        )

        try:
            response, executions = await asyncio.wait_for(
                self._run_loop(ctx, content, history, system_prompt),
                timeout=self._turn_timeout,
            )
        except asyncio.TimeoutError as exc:
            logger.error(
                "Turn timed out after %.1fs (conversation=%s)",
                self._turn_timeout, conversation.id,
            )
            raise ModelCallError("Could not process your message") from exc
        except Exception as exc:
            logger.exception("Model call failed (conversation=%s)", conversation.id)
            raise ModelCallError("Could not process your message") from exc

        text = (response.text or "").strip() or NO_RESPONSE_PLACEHOLDER
        message = await self._store.append_message(conversation.id, "assistant", text)
        await self._store.touch(conversation.id)

        logger.info(
            "Turn finished (conversation=%s): %d action(s) executed",
            conversation.id, len(executions),
        )
        return TurnResult(
            conversation_id=conversation.id,
            message=message,
            actions_executed=len(executions),
        )

    async def _run_loop(
        self,
        ctx: SessionContext,
        content: str,
        history: Sequence[HistoryTurn],
        system_prompt: str,
    ) -> tuple[ModelResponse, list[ToolExecution]]:
        response = await self._model.converse(content, history, system_prompt)
        executions: list[ToolExecution] = []

        while response.tool_calls and len(executions) < self._max_tool_calls:
            round_results = await self._dispatcher.dispatch_round(response.tool_calls, ctx)
            executions.extend(round_results)
            logger.info(
                "Tool round: %s",
                ", ".join(f"{e.name}={'ok' if e.success else 'failed'}" for e in round_results),
            )
            response = await self._model.continue_with_tool_results(
                content, history, executions, system_prompt,
            )

        if response.tool_calls:
            logger.warning(
                "Tool-call cap (%d) reached for conversation %s; finalizing",
                self._max_tool_calls, ctx.conversation_id,
            )
        return response, executions

    async def list_conversations(self, user_id: str) -> list[ConversationSummary]:
        return await self._store.list_conversations(user_id)

    async def get_conversation(self, user_id: str, conversation_id: str) -> ConversationDetail:
        return await self._store.get_conversation(user_id, conversation_id)

    async def delete_conversation(self, user_id: str, conversation_id: str) -> dict[str, str]:
        await self._store.delete_conversation(user_id, conversation_id)
        return {"message": "Conversation deleted"}
