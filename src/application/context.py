"""
application.context - Request-scoped caller context.

Every tool receives its context explicitly. Two concurrent users get two
different SessionContext instances, so no mutable state is shared.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional
from uuid import uuid4


@dataclass
class SessionContext:
    """Per-turn context passed through the dispatcher into every tool.

    Attributes:
        user_id:          Authenticated caller (provided by adapter).
        conversation_id:  Conversation the turn belongs to (audit log key).
        career:           Caller's field of study, if known.
        request_id:       Unique per turn, for tracing/logging.
    """
    user_id: str
    conversation_id: str
    career: Optional[str] = None
    request_id: str = field(default_factory=lambda: uuid4().hex)
