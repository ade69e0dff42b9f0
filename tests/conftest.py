"""Pytest fixtures: a migrated SQLite database per test, seeded platform
data, and a scripted language model client."""

from __future__ import annotations

import asyncio
from typing import Optional, Sequence

import pytest
from pydantic import BaseModel

from domain.entities import Conversation, DirectoryUser, Event, Group
from domain.models import HistoryTurn, ModelResponse, ToolCall, ToolExecution
from application.context import SessionContext
from application.services.action_audit import ActionAuditLog
from application.services.conversation_store import ConversationStore
from application.services.rate_limiter import RateLimiter
from agent.dispatcher import ToolDispatcher
from agent.tools.base import BaseTool
from agent.orchestrator import AgentOrchestrator
from agent.tools.registry import ToolRegistry
from factory import ServiceFactory
from infrastructure.config import Settings
from infrastructure.persistence.action_log_repo import SQLiteActionLogRepository
from infrastructure.persistence.chat_message_repo import SQLiteChatMessageRepository
from infrastructure.persistence.connection import AsyncSQLiteConnection
from infrastructure.persistence.conversation_repo import SQLiteConversationRepository
from infrastructure.persistence.event_repo import SQLiteEventRepository
from infrastructure.persistence.group_repo import SQLiteGroupRepository
from infrastructure.persistence.migrations import run_migrations
from infrastructure.persistence.post_repo import SQLitePostRepository
from infrastructure.persistence.user_repo import SQLiteUserRepository

FUTURE = "2099-05-01T10:00:00.000000+00:00"
PAST = "2000-01-01T10:00:00.000000+00:00"


class ScriptedModelClient:
    """LanguageModelClient double that replays queued responses.

    When the queue is empty it returns *default* (plain text unless set
    otherwise). Every call is recorded for assertions.
    """

    def __init__(
        self,
        responses: Sequence[ModelResponse] = (),
        default: Optional[ModelResponse] = None,
        available: bool = True,
        error: Optional[Exception] = None,
        delay: float = 0.0,
    ):
        self.responses = list(responses)
        self.default = default or ModelResponse(text="Done.")
        self.available = available
        self.error = error
        self.delay = delay
        self.calls: list[dict] = []

    def is_available(self) -> bool:
        return self.available

    async def converse(
        self,
        user_utterance: str,
        history: Sequence[HistoryTurn],
        system_prompt: str,
    ) -> ModelResponse:
        self.calls.append({
            "method": "converse",
            "utterance": user_utterance,
            "history": list(history),
            "tool_results": [],
            "system_prompt": system_prompt,
        })
        return await self._next()

    async def continue_with_tool_results(
        self,
        user_utterance: str,
        history: Sequence[HistoryTurn],
        tool_results: Sequence[ToolExecution],
        system_prompt: str,
    ) -> ModelResponse:
        self.calls.append({
            "method": "continue",
            "utterance": user_utterance,
            "history": list(history),
            "tool_results": list(tool_results),
            "system_prompt": system_prompt,
        })
        return await self._next()

    async def _next(self) -> ModelResponse:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if self.responses:
            return self.responses.pop(0)
        return self.default


def tool_request(name: str, /, **args) -> ModelResponse:
    """A model response asking for a single tool call."""
    return ModelResponse(tool_calls=(ToolCall(name=name, args=args),))


class _NoArgs(BaseModel):
    pass


class ExplodingTool(BaseTool):
    """A tool whose handler always raises."""

    name = "explode"
    description = "Always raises."

    def get_schema(self):
        return _NoArgs

    async def execute(self, ctx, **kwargs):
        raise RuntimeError("database is on fire")


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------

@pytest.fixture
def db_path(tmp_path) -> str:
    return str(tmp_path / "tutor_test.db")


@pytest.fixture
async def connection(db_path) -> AsyncSQLiteConnection:
    conn = AsyncSQLiteConnection(db_path)
    await run_migrations(conn)
    return conn


@pytest.fixture
async def seeded(connection):
    """Users, groups, events and a post shared by most tests.

    ana    - Systems Engineering, member of g-algo
    luis   - Accounting, registered to e-full (capacity 1)
    marta  - Systems Engineering
    ghost  - inactive
    nora   - not verified
    """
    users = SQLiteUserRepository(connection)
    for user in [
        DirectoryUser(id="ana", first_name="Ana", last_name="Torres", career="Systems Engineering"),
        DirectoryUser(id="luis", first_name="Luis", last_name="Pérez", career="Accounting"),
        DirectoryUser(id="marta", first_name="Marta", last_name="Gómez", career="Systems Engineering"),
        DirectoryUser(id="ghost", first_name="Gaspar", last_name="Torres", career="History", is_active=False),
        DirectoryUser(id="nora", first_name="Nora", last_name="Torres", career="Law", is_verified=False),
    ]:
        await users.save(user)

    groups = SQLiteGroupRepository(connection)
    await groups.save(Group(id="g-algo", name="Algorithms Study Group",
                            description="Weekly practice of algorithm problems"))
    await groups.save(Group(id="g-acc", name="Accounting Club",
                            description="Financial statements and cost accounting"))
    await groups.add_member("g-algo", "ana")

    events = SQLiteEventRepository(connection)
    await events.save(Event(id="e-hack", title="Hackathon 2099", description="24h coding marathon",
                            start_date=FUTURE, location="Main Hall", max_attendees=100))
    await events.save(Event(id="e-full", title="Full Workshop", description="Small hands-on workshop",
                            start_date=FUTURE, is_online=True, max_attendees=1))
    await events.save(Event(id="e-past", title="Past Seminar", description="Already happened",
                            start_date=PAST, max_attendees=50))
    await events.register_attendance("e-full", "luis")

    posts = SQLitePostRepository(connection)
    await posts.create_post("luis", "Tips for the calculus exam: " + "practice integrals every day. " * 10)

    return connection


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------

@pytest.fixture
def conversation_repo(connection) -> SQLiteConversationRepository:
    return SQLiteConversationRepository(connection)


@pytest.fixture
def message_repo(connection) -> SQLiteChatMessageRepository:
    return SQLiteChatMessageRepository(connection)


@pytest.fixture
def action_log_repo(connection) -> SQLiteActionLogRepository:
    return SQLiteActionLogRepository(connection)


@pytest.fixture
def store(conversation_repo, message_repo) -> ConversationStore:
    return ConversationStore(conversation_repo, message_repo, history_limit=20)


@pytest.fixture
def audit_log(action_log_repo) -> ActionAuditLog:
    return ActionAuditLog(action_log_repo)


@pytest.fixture
async def ctx(seeded, conversation_repo) -> SessionContext:
    """Context for ana inside an existing conversation."""
    conversation = Conversation(user_id="ana", title="Test conversation")
    await conversation_repo.save(conversation)
    return SessionContext(user_id="ana", conversation_id=conversation.id,
                          career="Systems Engineering")


@pytest.fixture
def model() -> ScriptedModelClient:
    return ScriptedModelClient()


@pytest.fixture
def settings(db_path) -> Settings:
    return Settings(
        db_path=db_path,
        jwt_secret="test-secret",
        agent_max_tool_calls=5,
        agent_history_limit=20,
        rate_limit_max_turns=20,
        rate_limit_window_seconds=60,
        turn_timeout_seconds=5.0,
        log_level="WARNING",
    )


@pytest.fixture
async def factory(settings, model, seeded) -> ServiceFactory:
    f = ServiceFactory(settings, model_client=model)
    await f.initialize()
    return f


@pytest.fixture
def registry(factory) -> ToolRegistry:
    return factory.create_tool_registry()


def make_orchestrator(
    connection: AsyncSQLiteConnection,
    model: ScriptedModelClient,
    registry: ToolRegistry,
    **kwargs,
) -> AgentOrchestrator:
    """Orchestrator over an arbitrary registry (e.g. with failing tools)."""
    message_repo = SQLiteChatMessageRepository(connection)
    return AgentOrchestrator(
        model=model,
        dispatcher=ToolDispatcher(registry, ActionAuditLog(SQLiteActionLogRepository(connection))),
        store=ConversationStore(SQLiteConversationRepository(connection), message_repo),
        rate_limiter=RateLimiter(message_repo),
        users=SQLiteUserRepository(connection),
        **kwargs,
    )
