"""Sliding-window rate limiter tests."""

from datetime import datetime, timedelta, timezone

from domain.entities import ChatMessage, Conversation
from application.services.rate_limiter import RateLimiter


async def _conversation_with_messages(conversation_repo, message_repo, user_id, count, role="user"):
    conversation = Conversation(user_id=user_id, title="t")
    await conversation_repo.save(conversation)
    for i in range(count):
        await message_repo.save(ChatMessage(conversation_id=conversation.id, role=role, content=f"m{i}"))
    return conversation


class TestRateLimiter:

    async def test_allows_under_limit(self, conversation_repo, message_repo):
        await _conversation_with_messages(conversation_repo, message_repo, "ana", 19)
        limiter = RateLimiter(message_repo, max_turns=20, window_seconds=60)
        assert await limiter.check_and_consume("ana") is True

    async def test_blocks_at_limit(self, conversation_repo, message_repo):
        await _conversation_with_messages(conversation_repo, message_repo, "ana", 20)
        limiter = RateLimiter(message_repo, max_turns=20, window_seconds=60)
        assert await limiter.check_and_consume("ana") is False

    async def test_counts_across_conversations(self, conversation_repo, message_repo):
        await _conversation_with_messages(conversation_repo, message_repo, "ana", 10)
        await _conversation_with_messages(conversation_repo, message_repo, "ana", 10)
        limiter = RateLimiter(message_repo, max_turns=20, window_seconds=60)
        assert await limiter.check_and_consume("ana") is False

    async def test_assistant_messages_do_not_count(self, conversation_repo, message_repo):
        await _conversation_with_messages(conversation_repo, message_repo, "ana", 30, role="assistant")
        limiter = RateLimiter(message_repo, max_turns=20, window_seconds=60)
        assert await limiter.check_and_consume("ana") is True

    async def test_other_users_do_not_count(self, conversation_repo, message_repo):
        await _conversation_with_messages(conversation_repo, message_repo, "luis", 25)
        limiter = RateLimiter(message_repo, max_turns=20, window_seconds=60)
        assert await limiter.check_and_consume("ana") is True

    async def test_old_messages_fall_out_of_window(self, conversation_repo, message_repo):
        await _conversation_with_messages(conversation_repo, message_repo, "ana", 20)
        later = datetime.now(timezone.utc) + timedelta(minutes=2)
        limiter = RateLimiter(message_repo, max_turns=20, window_seconds=60, clock=lambda: later)
        assert await limiter.check_and_consume("ana") is True

    def test_window_seconds(self, message_repo):
        assert RateLimiter(message_repo, window_seconds=90).window_seconds == 90

    async def test_window_compares_against_utc_timestamps(self, conversation_repo, message_repo):
        await _conversation_with_messages(conversation_repo, message_repo, "ana", 20)
        stored = await message_repo.get_recent((await conversation_repo.get_by_user("ana"))[0].id, 1)
        assert stored[0].created_at.endswith("+00:00")

        just_before = datetime.now(timezone.utc) + timedelta(seconds=30)
        limiter = RateLimiter(message_repo, max_turns=20, window_seconds=60, clock=lambda: just_before)
        assert await limiter.check_and_consume("ana") is False
