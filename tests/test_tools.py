"""Platform tool tests against a seeded SQLite database."""

import json

from agent.tools.create_post import CreatePostTool
from agent.tools.join_group import JoinGroupTool
from agent.tools.register_event import RegisterToEventTool
from agent.tools.search_events import SearchEventsTool
from agent.tools.search_groups import SearchGroupsTool
from agent.tools.search_posts import SearchPostsTool
from agent.tools.search_users import SearchUsersTool
from agent.tools.send_message import SendMessageTool
from domain.entities import DirectoryUser, Event, Group
from infrastructure.persistence.direct_message_repo import SQLiteDirectMessageRepository
from infrastructure.persistence.event_repo import SQLiteEventRepository
from infrastructure.persistence.group_repo import SQLiteGroupRepository
from infrastructure.persistence.post_repo import SQLitePostRepository
from infrastructure.persistence.user_repo import SQLiteUserRepository

from conftest import FUTURE


class TestSearchUsers:

    async def test_by_name_excludes_inactive_and_unverified(self, ctx, seeded):
        tool = SearchUsersTool(SQLiteUserRepository(seeded))
        result = await tool.execute(ctx, name="torres")
        assert result.success
        assert result.data["count"] == 1
        assert result.data["users"] == [
            {"id": "ana", "name": "Ana Torres", "career": "Systems Engineering"},
        ]

    async def test_by_career(self, ctx, seeded):
        tool = SearchUsersTool(SQLiteUserRepository(seeded))
        result = await tool.execute(ctx, career="systems")
        assert {u["id"] for u in result.data["users"]} == {"ana", "marta"}

    async def test_no_match_is_success(self, ctx, seeded):
        tool = SearchUsersTool(SQLiteUserRepository(seeded))
        result = await tool.execute(ctx, name="nobody")
        assert result.success
        assert result.data == {"users": [], "count": 0}

    async def test_accented_name_matches_regardless_of_case(self, ctx, seeded):
        users = SQLiteUserRepository(seeded)
        await users.save(DirectoryUser(id="alvaro", first_name="Álvaro", last_name="Núñez", career="Física"))
        tool = SearchUsersTool(users)

        result = await tool.execute(ctx, name="álvaro")
        assert [u["id"] for u in result.data["users"]] == ["alvaro"]

        result = await tool.execute(ctx, name="NÚÑEZ", career="física")
        assert [u["id"] for u in result.data["users"]] == ["alvaro"]

    async def test_wildcards_are_literal(self, ctx, seeded):
        tool = SearchUsersTool(SQLiteUserRepository(seeded))
        for text in ("%", "_", "a%"):
            result = await tool.execute(ctx, name=text)
            assert result.data == {"users": [], "count": 0}, text

    async def test_at_most_ten_results(self, ctx, seeded):
        users = SQLiteUserRepository(seeded)
        for i in range(12):
            await users.save(DirectoryUser(id=f"u{i}", first_name=f"Student{i}", career="Physics"))
        result = await SearchUsersTool(users).execute(ctx, career="Physics")
        assert result.data["count"] == 10


class TestSendMessage:

    def _tool(self, connection):
        return SendMessageTool(
            SQLiteUserRepository(connection), SQLiteDirectMessageRepository(connection),
        )

    async def test_sends_message(self, ctx, seeded):
        result = await self._tool(seeded).execute(ctx, user_id="luis", content="Hi Luis")
        assert result.success
        assert "Luis Pérez" in result.data["message"]
        sent = await SQLiteDirectMessageRepository(seeded).get_between("ana", "luis")
        assert [m.content for m in sent] == ["Hi Luis"]

    async def test_content_truncated_to_1000(self, ctx, seeded):
        await self._tool(seeded).execute(ctx, user_id="luis", content="x" * 1500)
        sent = await SQLiteDirectMessageRepository(seeded).get_between("ana", "luis")
        assert len(sent[0].content) == 1000

    async def test_inactive_recipient_is_structured_error(self, ctx, seeded):
        result = await self._tool(seeded).execute(ctx, user_id="ghost", content="hello")
        assert not result.success
        assert result.error == "user not found or inactive"

    async def test_unknown_recipient_is_structured_error(self, ctx, seeded):
        result = await self._tool(seeded).execute(ctx, user_id="nobody", content="hello")
        assert not result.success

    async def test_missing_content(self, ctx, seeded):
        result = await self._tool(seeded).execute(ctx, user_id="luis", content="  ")
        assert not result.success


class TestPosts:

    async def test_search_preview_is_truncated(self, ctx, seeded):
        result = await SearchPostsTool(SQLitePostRepository(seeded)).execute(ctx, query="calculus")
        assert result.success
        post = result.data["posts"][0]
        assert post["author"] == "Luis Pérez"
        assert post["content"].endswith("...")
        assert len(post["content"]) == 103

    async def test_search_by_author(self, ctx, seeded):
        result = await SearchPostsTool(SQLitePostRepository(seeded)).execute(ctx, author_name="Luis")
        assert result.data["count"] == 1

    async def test_create_post(self, ctx, seeded):
        posts = SQLitePostRepository(seeded)
        result = await CreatePostTool(posts).execute(ctx, content="Anyone studying graphs?")
        assert result.success
        created = await posts.get_by_id(result.data["postId"])
        assert created.author_id == "ana"
        assert created.type == "DISCUSSION"

    async def test_create_post_truncates_to_3000(self, ctx, seeded):
        posts = SQLitePostRepository(seeded)
        result = await CreatePostTool(posts).execute(ctx, content="y" * 3500)
        created = await posts.get_by_id(result.data["postId"])
        assert len(created.content) == 3000

    async def test_create_post_blank_content(self, ctx, seeded):
        result = await CreatePostTool(SQLitePostRepository(seeded)).execute(ctx, content=" ")
        assert not result.success


class TestGroups:

    async def test_search_groups(self, ctx, seeded):
        result = await SearchGroupsTool(SQLiteGroupRepository(seeded)).execute(ctx, query="algorithm")
        assert result.data["count"] == 1
        assert result.data["groups"][0]["id"] == "g-algo"
        assert result.data["groups"][0]["members"] == 1

    async def test_join_group(self, ctx, seeded):
        groups = SQLiteGroupRepository(seeded)
        result = await JoinGroupTool(groups).execute(ctx, group_id="g-acc")
        assert result.success
        assert result.data["joined"] is True
        assert await groups.is_member("g-acc", "ana")
        assert (await groups.get_by_id("g-acc")).members_count == 1

    async def test_join_group_already_member(self, ctx, seeded):
        groups = SQLiteGroupRepository(seeded)
        result = await JoinGroupTool(groups).execute(ctx, group_id="g-algo")
        payload = json.loads(result.to_json())
        assert payload["success"] is True
        assert payload["message"] == "already a member"
        assert (await groups.get_by_id("g-algo")).members_count == 1

    async def test_join_unknown_group_is_informational(self, ctx, seeded):
        result = await JoinGroupTool(SQLiteGroupRepository(seeded)).execute(ctx, group_id="g-none")
        assert result.success
        assert result.data["joined"] is False
        assert result.data["message"] == "group not found"


class TestEvents:

    async def test_search_events_only_upcoming_soonest_first(self, ctx, seeded):
        result = await SearchEventsTool(SQLiteEventRepository(seeded)).execute(ctx)
        ids = [e["id"] for e in result.data["events"]]
        assert "e-past" not in ids
        assert set(ids) == {"e-hack", "e-full"}

    async def test_location_fallback(self, ctx, seeded):
        result = await SearchEventsTool(SQLiteEventRepository(seeded)).execute(ctx, query="Workshop")
        assert result.data["events"][0]["location"] == "Online"

    async def test_register(self, ctx, seeded):
        events = SQLiteEventRepository(seeded)
        result = await RegisterToEventTool(events).execute(ctx, event_id="e-hack")
        assert result.success
        assert result.data["status"] == "registered"
        assert await events.is_registered("e-hack", "ana")

    async def test_register_twice_is_already_registered(self, ctx, seeded):
        events = SQLiteEventRepository(seeded)
        await RegisterToEventTool(events).execute(ctx, event_id="e-hack")
        result = await RegisterToEventTool(events).execute(ctx, event_id="e-hack")
        assert result.success
        assert result.data["status"] == "already_registered"
        assert result.data["message"] == "already registered"

    async def test_register_at_capacity(self, ctx, seeded):
        result = await RegisterToEventTool(SQLiteEventRepository(seeded)).execute(ctx, event_id="e-full")
        payload = result.to_dict()
        assert payload["success"] is False
        assert payload["error"] == "at capacity"
        assert payload["status"] == "at_capacity"

    async def test_register_unknown_event(self, ctx, seeded):
        result = await RegisterToEventTool(SQLiteEventRepository(seeded)).execute(ctx, event_id="e-none")
        assert not result.success
        assert result.error == "event not found"
        assert result.data["status"] == "not_found"

    async def test_register_event_saved_without_capacity(self, ctx, seeded):
        events = SQLiteEventRepository(seeded)
        await events.save(Event(id="e-new", title="Open talk", start_date=FUTURE))

        result = await RegisterToEventTool(events).execute(ctx, event_id="e-new")

        assert result.success
        assert result.data["status"] == "registered"
        assert (await events.get_by_id("e-new")).max_attendees == 500

    async def test_search_events_accented_title(self, ctx, seeded):
        events = SQLiteEventRepository(seeded)
        await events.save(Event(id="e-math", title="Olimpiada de Matemáticas", start_date=FUTURE))
        result = await SearchEventsTool(events).execute(ctx, query="MATEMÁTICAS")
        assert [e["id"] for e in result.data["events"]] == ["e-math"]


class TestAccentInsensitiveSearch:

    async def test_groups(self, ctx, seeded):
        groups = SQLiteGroupRepository(seeded)
        await groups.save(Group(id="g-eco", name="Economía Aplicada", description="Análisis de mercados"))
        result = await SearchGroupsTool(groups).execute(ctx, query="ECONOMÍA")
        assert [g["id"] for g in result.data["groups"]] == ["g-eco"]

    async def test_posts_by_accented_author(self, ctx, seeded):
        result = await SearchPostsTool(SQLitePostRepository(seeded)).execute(ctx, author_name="PÉREZ")
        assert result.data["count"] == 1
