"""
factory - Composition root for the academic tutor agent.

ALL dependency wiring happens here. No other module constructs its own
dependencies. Adapters (CLI, REST) call this factory to get fully
configured services and the orchestrator.

Usage:
    from factory import ServiceFactory
    from infrastructure.config import Settings

    config = Settings.from_env()
    factory = ServiceFactory(config)
    await factory.initialize()  # one-time startup

    orchestrator = factory.create_orchestrator()
    result = await orchestrator.send_message(user_id, "Hola tutor")
"""

from __future__ import annotations

import logging
from typing import Optional

from infrastructure.config import Settings
from infrastructure.llm.llm_builder import build_llm_from_settings
from infrastructure.llm.model_client import LangChainModelClient
from infrastructure.persistence.connection import AsyncSQLiteConnection
from infrastructure.persistence.migrations import run_migrations
from infrastructure.persistence.user_repo import SQLiteUserRepository
from infrastructure.persistence.conversation_repo import SQLiteConversationRepository
from infrastructure.persistence.chat_message_repo import SQLiteChatMessageRepository
from infrastructure.persistence.action_log_repo import SQLiteActionLogRepository
from infrastructure.persistence.direct_message_repo import SQLiteDirectMessageRepository
from infrastructure.persistence.post_repo import SQLitePostRepository
from infrastructure.persistence.group_repo import SQLiteGroupRepository
from infrastructure.persistence.event_repo import SQLiteEventRepository
from domain.ports import LanguageModelClient
from application.services.action_audit import ActionAuditLog
from application.services.authentication import TokenService
from application.services.conversation_store import ConversationStore
from application.services.rate_limiter import RateLimiter
from agent.dispatcher import ToolDispatcher
from agent.orchestrator import AgentOrchestrator
from agent.tools.registry import ToolRegistry
from agent.tools.search_users import SearchUsersTool
from agent.tools.send_message import SendMessageTool
from agent.tools.search_posts import SearchPostsTool
from agent.tools.create_post import CreatePostTool
from agent.tools.search_groups import SearchGroupsTool
from agent.tools.join_group import JoinGroupTool
from agent.tools.search_events import SearchEventsTool
from agent.tools.register_event import RegisterToEventTool

logger = logging.getLogger(__name__)


class ServiceFactory:
    """Composition root: wires all dependencies together.

    Call initialize() once at startup, then create services as needed.

    Args:
        config:       Application settings.
        model_client: Optional pre-built LanguageModelClient (tests, custom
                      providers). Built from config on first use otherwise.
    """

    def __init__(
        self,
        config: Settings,
        model_client: Optional[LanguageModelClient] = None,
    ):
        self._config = config
        self._connection = AsyncSQLiteConnection(config.db_path)
        self._model_client = model_client
        self._initialized = False

    @property
    def config(self) -> Settings:
        return self._config

    async def initialize(self) -> None:
        """One-time startup: run migrations.

        Must be called before creating the orchestrator.
        """
        logger.info("Initializing ServiceFactory (db=%s)...", self._config.db_path)
        await run_migrations(self._connection)
        logger.info("Database migrations complete")
        self._initialized = True
        logger.info("ServiceFactory ready")

    # ------------------------------------------------------------------
    # Service creation
    # ------------------------------------------------------------------

    def create_tool_registry(self) -> ToolRegistry:
        """Register the eight platform tools."""
        users = self.create_user_repository()
        posts = SQLitePostRepository(self._connection)
        groups = SQLiteGroupRepository(self._connection)
        events = SQLiteEventRepository(self._connection)

        registry = ToolRegistry()
        registry.register(SearchUsersTool(users))
        registry.register(SendMessageTool(users, SQLiteDirectMessageRepository(self._connection)))
        registry.register(SearchPostsTool(posts))
        registry.register(CreatePostTool(posts))
        registry.register(SearchGroupsTool(groups))
        registry.register(JoinGroupTool(groups))
        registry.register(SearchEventsTool(events))
        registry.register(RegisterToEventTool(events))
        return registry

    def create_conversation_store(self) -> ConversationStore:
        return ConversationStore(
            conversation_repo=SQLiteConversationRepository(self._connection),
            message_repo=SQLiteChatMessageRepository(self._connection),
            history_limit=self._config.agent_history_limit,
        )

    def create_rate_limiter(self) -> RateLimiter:
        return RateLimiter(
            message_repo=SQLiteChatMessageRepository(self._connection),
            max_turns=self._config.rate_limit_max_turns,
            window_seconds=self._config.rate_limit_window_seconds,
        )

    def create_action_audit_log(self) -> ActionAuditLog:
        return ActionAuditLog(SQLiteActionLogRepository(self._connection))

    def create_token_service(self) -> TokenService:
        return TokenService(
            jwt_secret=self._config.jwt_secret,
            jwt_expiry_hours=self._config.jwt_expiry_hours,
        )

    def create_user_repository(self) -> SQLiteUserRepository:
        """Return a user repository for directory lookups and seeding."""
        return SQLiteUserRepository(self._connection)

    def create_model_client(self, registry: ToolRegistry) -> LanguageModelClient:
        """Return the model client, building it from config on first use."""
        if self._model_client is None:
            llm = build_llm_from_settings(self._config)
            self._model_client = LangChainModelClient(llm, registry.declarations())
        return self._model_client

    # ------------------------------------------------------------------
    # Orchestrator creation
    # ------------------------------------------------------------------

    def create_orchestrator(self) -> AgentOrchestrator:
        """Create a fully configured AgentOrchestrator."""
        self._ensure_initialized()

        registry = self.create_tool_registry()
        return AgentOrchestrator(
            model=self.create_model_client(registry),
            dispatcher=ToolDispatcher(registry, self.create_action_audit_log()),
            store=self.create_conversation_store(),
            rate_limiter=self.create_rate_limiter(),
            users=self.create_user_repository(),
            max_tool_calls=self._config.agent_max_tool_calls,
            turn_timeout_seconds=self._config.turn_timeout_seconds,
            language=self._config.tutor_language,
        )

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            raise RuntimeError(
                "ServiceFactory not initialized. Call await factory.initialize() first."
            )
