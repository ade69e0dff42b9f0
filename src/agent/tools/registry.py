"""
agent.tools.registry - Tool registration, discovery, and declaration.

Central name → tool lookup table. Adding a tool never touches the
orchestrator: register it here and the model sees it via declarations().
"""

from __future__ import annotations

import logging
from typing import Any

from langchain_core.utils.function_calling import convert_to_openai_tool

from agent.tools.base import BaseTool

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Manages tool registration and lookup."""

    def __init__(self):
        self._tools: dict[str, BaseTool] = {}

    def register(self, tool: BaseTool) -> None:
        """Register a tool by its name."""
        if tool.name in self._tools:
            raise ValueError(f"Tool '{tool.name}' already registered")
        self._tools[tool.name] = tool
        logger.debug("Registered tool: %s", tool.name)

    def get(self, name: str) -> BaseTool:
        """Get a tool by name."""
        if name not in self._tools:
            raise KeyError(f"Tool '{name}' not registered")
        return self._tools[name]

    def has(self, name: str) -> bool:
        return name in self._tools

    def all(self) -> list[BaseTool]:
        """Return all registered tools."""
        return list(self._tools.values())

    def names(self) -> list[str]:
        """Return all registered tool names."""
        return list(self._tools.keys())

    def declarations(self) -> list[dict[str, Any]]:
        """OpenAI-format tool declarations for bind_tools().

        LangChain converts each pydantic schema (wire names via aliases,
        titles stripped); the name and description come from the tool.
        """
        declarations = []
        for tool in self.all():
            declaration = convert_to_openai_tool(tool.get_schema())
            declaration["function"]["name"] = tool.name
            declaration["function"]["description"] = tool.description
            declarations.append(declaration)
        return declarations
