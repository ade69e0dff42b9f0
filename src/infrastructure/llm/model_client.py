"""
infrastructure.llm.model_client - LanguageModelClient over LangChain chat models.

Translates between the domain value objects (HistoryTurn, ToolCall,
ToolExecution, ModelResponse) and LangChain messages. No LangChain type
leaves this module.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import (
    AIMessage,
    BaseMessage,
    HumanMessage,
    SystemMessage,
    ToolMessage,
)

from domain.models import HistoryTurn, ModelResponse, ToolCall, ToolExecution

logger = logging.getLogger(__name__)


class LangChainModelClient:
    """Tool-calling chat client backed by any LangChain BaseChatModel.

    Args:
        llm:          The chat model, or None when the provider is not configured.
        declarations: Function declarations advertised to the model
                      (ToolRegistry.declarations()).
    """

    def __init__(
        self,
        llm: Optional[BaseChatModel],
        declarations: Sequence[dict[str, Any]] = (),
    ):
        self._llm = llm
        self._bound = None
        if llm is not None:
            self._bound = llm.bind_tools(list(declarations)) if declarations else llm

    def is_available(self) -> bool:
        return self._bound is not None

    async def converse(
        self,
        user_utterance: str,
        history: Sequence[HistoryTurn],
        system_prompt: str,
    ) -> ModelResponse:
        messages = self._base_messages(user_utterance, history, system_prompt)
        return await self._invoke(messages)

    async def continue_with_tool_results(
        self,
        user_utterance: str,
        history: Sequence[HistoryTurn],
        tool_results: Sequence[ToolExecution],
        system_prompt: str,
    ) -> ModelResponse:
        messages = self._base_messages(user_utterance, history, system_prompt)
        for execution in tool_results:
            messages.append(AIMessage(
                content="",
                tool_calls=[{
                    "name": execution.call.name,
                    "args": dict(execution.call.args),
                    "id": execution.call.id,
                }],
            ))
            messages.append(ToolMessage(
                content=execution.result,
                tool_call_id=execution.call.id,
            ))
        return await self._invoke(messages)

    # ------------------------------------------------------------------

    @staticmethod
    def _base_messages(
        user_utterance: str,
        history: Sequence[HistoryTurn],
        system_prompt: str,
    ) -> list[BaseMessage]:
        messages: list[BaseMessage] = [SystemMessage(content=system_prompt)]
        for turn in history:
            if turn.role == "assistant":
                messages.append(AIMessage(content=turn.content))
            else:
                messages.append(HumanMessage(content=turn.content))
        messages.append(HumanMessage(content=user_utterance))
        return messages

    async def _invoke(self, messages: list[BaseMessage]) -> ModelResponse:
        if self._bound is None:
            raise RuntimeError("Language model is not configured")
        reply = await self._bound.ainvoke(messages)
        return to_model_response(reply)


def to_model_response(reply: Any) -> ModelResponse:
    """Convert a provider AIMessage into a ModelResponse."""
    calls = tuple(
        ToolCall(name=tc["name"], args=dict(tc.get("args") or {}), id=tc["id"])
        if tc.get("id") else
        ToolCall(name=tc["name"], args=dict(tc.get("args") or {}))
        for tc in (getattr(reply, "tool_calls", None) or [])
    )
    text = _content_text(getattr(reply, "content", ""))
    if calls:
        logger.debug("Model requested %d tool call(s)", len(calls))
    return ModelResponse(text=text or None, tool_calls=calls)


def _content_text(content: Any) -> str:
    if isinstance(content, str):
        return content
    parts = []
    for part in content or []:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)
