"""
domain.models - Value objects exchanged between the agent and the model.

These never touch the database. Tool results are ephemeral: they are fed
back into the same turn's model context and only the final assistant text
is persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional
from uuid import uuid4


@dataclass(frozen=True)
class HistoryTurn:
    """A role/content pair as consumed by the language model."""
    role: str  # "user" or "assistant"
    content: str


@dataclass(frozen=True)
class ToolCall:
    """A tool invocation requested by the model.

    args are supplied by the model and are NOT trusted; each tool validates
    them against its own schema.
    """
    name: str
    args: dict[str, Any] = field(default_factory=dict)
    id: str = field(default_factory=lambda: f"call_{uuid4().hex[:12]}")


@dataclass(frozen=True)
class ToolExecution:
    """Outcome of dispatching one ToolCall.

    result is the JSON-serialised structured outcome handed back to the model.
    """
    call: ToolCall
    result: str
    success: bool

    @property
    def name(self) -> str:
        return self.call.name


@dataclass(frozen=True)
class ModelResponse:
    """Discriminated model reply: free text (terminal) or tool calls."""
    text: Optional[str] = None
    tool_calls: tuple[ToolCall, ...] = ()

    @property
    def is_terminal(self) -> bool:
        return not self.tool_calls
