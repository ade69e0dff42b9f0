"""LangChainModelClient tests with a stub chat model."""

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage, ToolMessage

from domain.models import HistoryTurn, ToolCall, ToolExecution
from infrastructure.llm.model_client import LangChainModelClient, to_model_response


class StubChatModel:
    """Records bound tools and the messages of every call."""

    def __init__(self, replies):
        self.replies = list(replies)
        self.bound_tools = None
        self.received = []

    def bind_tools(self, tools):
        self.bound_tools = tools
        return self

    async def ainvoke(self, messages):
        self.received.append(messages)
        return self.replies.pop(0)


DECLARATIONS = [{
    "type": "function",
    "function": {"name": "searchUsers", "description": "Find users", "parameters": {"type": "object", "properties": {}}},
}]


class TestAvailability:

    def test_unconfigured_client_is_unavailable(self):
        assert LangChainModelClient(None, DECLARATIONS).is_available() is False

    def test_configured_client_binds_tools(self):
        llm = StubChatModel([])
        client = LangChainModelClient(llm, DECLARATIONS)
        assert client.is_available() is True
        assert llm.bound_tools == DECLARATIONS

    async def test_unconfigured_client_raises_on_call(self):
        with pytest.raises(RuntimeError):
            await LangChainModelClient(None).converse("hi", [], "system")


class TestConverse:

    async def test_message_layout(self):
        llm = StubChatModel([AIMessage(content="Hola")])
        client = LangChainModelClient(llm, DECLARATIONS)
        history = [HistoryTurn("user", "q1"), HistoryTurn("assistant", "a1")]

        response = await client.converse("q2", history, "be helpful")

        messages = llm.received[0]
        assert [type(m) for m in messages] == [SystemMessage, HumanMessage, AIMessage, HumanMessage]
        assert [m.content for m in messages] == ["be helpful", "q1", "a1", "q2"]
        assert response.text == "Hola"
        assert response.is_terminal

    async def test_tool_calls_mapped(self):
        reply = AIMessage(content="", tool_calls=[
            {"name": "searchUsers", "args": {"name": "Luis"}, "id": "call_1"},
        ])
        client = LangChainModelClient(StubChatModel([reply]), DECLARATIONS)

        response = await client.converse("find Luis", [], "system")

        assert response.text is None
        assert response.tool_calls == (ToolCall(name="searchUsers", args={"name": "Luis"}, id="call_1"),)
        assert not response.is_terminal


class TestContinueWithToolResults:

    async def test_replays_each_execution(self):
        llm = StubChatModel([AIMessage(content="Sent!")])
        client = LangChainModelClient(llm, DECLARATIONS)
        executions = [
            ToolExecution(ToolCall("searchUsers", {"name": "Luis"}, id="c1"), '{"success": true}', True),
            ToolExecution(ToolCall("sendMessage", {"userId": "luis"}, id="c2"), '{"success": false}', False),
        ]

        response = await client.continue_with_tool_results("message Luis", [], executions, "system")

        messages = llm.received[0]
        assert [type(m) for m in messages] == [
            SystemMessage, HumanMessage, AIMessage, ToolMessage, AIMessage, ToolMessage,
        ]
        assert messages[2].tool_calls[0]["name"] == "searchUsers"
        assert messages[3].tool_call_id == "c1"
        assert messages[3].content == '{"success": true}'
        assert messages[5].tool_call_id == "c2"
        assert response.text == "Sent!"


class TestToModelResponse:

    def test_list_content_parts_joined(self):
        reply = AIMessage(content=[{"type": "text", "text": "Hello "}, {"type": "text", "text": "there"}])
        assert to_model_response(reply).text == "Hello there"

    def test_empty_content_is_none(self):
        assert to_model_response(AIMessage(content="")).text is None
