"""
agent.dispatcher - Validated, failure-isolated tool execution.

Resolves a model-requested ToolCall against the registry, validates its
arguments with the tool's pydantic schema, runs it, and audits the attempt.
No tool failure escapes as an exception; every outcome becomes a
structured ToolResult the model can read.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Sequence

from pydantic import ValidationError

from application.context import SessionContext
from application.services.action_audit import ActionAuditLog
from domain.models import ToolCall, ToolExecution
from agent.tools.base import ToolResult
from agent.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)


class ToolDispatcher:
    """Executes tool calls on behalf of the orchestrator."""

    def __init__(self, registry: ToolRegistry, audit_log: ActionAuditLog):
        self._registry = registry
        self._audit = audit_log

    async def dispatch(self, call: ToolCall, ctx: SessionContext) -> ToolExecution:
        """Run one tool call and record it in the audit log."""
        result = await self._run(call, ctx)
        execution = ToolExecution(call=call, result=result.to_json(), success=result.success)
        await self._audit.record(ctx.conversation_id, execution)
        return execution

    async def dispatch_round(
        self, calls: Sequence[ToolCall], ctx: SessionContext,
    ) -> list[ToolExecution]:
        """Run one round of calls concurrently; results keep request order."""
        return list(await asyncio.gather(*(self.dispatch(c, ctx) for c in calls)))

    async def _run(self, call: ToolCall, ctx: SessionContext) -> ToolResult:
        if not self._registry.has(call.name):
            logger.warning("Model requested unknown tool %r", call.name)
            return ToolResult.fail("tool not recognized")

        tool = self._registry.get(call.name)
        try:
            params = tool.get_schema().model_validate(call.args or {})
        except ValidationError as exc:
            logger.info("Invalid arguments for %s: %s", call.name, exc.errors())
            return ToolResult.fail(f"invalid arguments: {_describe(exc)}")

        logger.info("Tool call: %s (user=%s)", call.name, ctx.user_id)
        try:
            return await tool.execute(ctx, **params.model_dump())
        except Exception as exc:
            logger.exception("Tool %s failed", call.name)
            return ToolResult.fail(str(exc) or type(exc).__name__)


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg', 'invalid')}" if loc else err.get("msg", "invalid"))
    return "; ".join(parts)
