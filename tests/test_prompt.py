"""System prompt construction tests."""

from agent.prompt import build_system_prompt


class TestBuildSystemPrompt:

    def test_default_language_is_spanish(self):
        prompt = build_system_prompt()
        assert "Always respond in Spanish." in prompt

    def test_custom_language(self):
        prompt = build_system_prompt(language="English")
        assert "Always respond in English." in prompt
        assert "Spanish" not in prompt

    def test_career_paragraph_added(self):
        prompt = build_system_prompt(career="Systems Engineering")
        assert "USER CONTEXT" in prompt
        assert "The user studies Systems Engineering." in prompt

    def test_no_career_paragraph_without_career(self):
        assert "USER CONTEXT" not in build_system_prompt(career=None)
        assert "USER CONTEXT" not in build_system_prompt(career="   ")

    def test_policy_mentions_searching_before_messaging(self):
        prompt = build_system_prompt()
        assert "search for that user first" in prompt

    def test_is_deterministic(self):
        assert build_system_prompt("Law") == build_system_prompt("Law")
