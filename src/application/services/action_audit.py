"""
application.services.action_audit - Append-only audit of tool invocations.

Written by the dispatcher for every attempt, success or failure. Never read
back by the orchestrator; entries() exists for debugging and tests.
"""

from __future__ import annotations

import json
import logging

from domain.entities import ActionLogEntry
from domain.models import ToolExecution
from domain.ports import ActionLogRepository

logger = logging.getLogger(__name__)


class ActionAuditLog:
    """Records each ToolExecution against its conversation."""

    def __init__(self, repo: ActionLogRepository):
        self._repo = repo

    async def record(self, conversation_id: str, execution: ToolExecution) -> None:
        """Append one entry. A storage failure is logged, never raised."""
        entry = ActionLogEntry(
            conversation_id=conversation_id,
            tool_name=execution.call.name,
            arguments=json.dumps(execution.call.args, default=str, ensure_ascii=False),
            result=execution.result,
            success=execution.success,
        )
        try:
            await self._repo.save(entry)
        except Exception:
            logger.exception(
                "Failed to audit tool '%s' for conversation %s; continuing",
                execution.call.name, conversation_id,
            )

    async def entries(self, conversation_id: str) -> list[ActionLogEntry]:
        return await self._repo.get_by_conversation(conversation_id)
