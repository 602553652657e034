"""Tests for prompt composition and parameter derivation."""

from datetime import datetime, timedelta

import pytest

from scrivener.composer import ComposeContext, PromptComposer, compose, derive_params, select_history
from scrivener.models import ChatTurn, Intent


@pytest.fixture
def composer():
    return PromptComposer()


def turns(*specs):
    start = datetime(2024, 5, 1, 9, 0, 0)
    return [
        ChatTurn(role=role, content=content, persona_id=persona_id, timestamp=start + timedelta(minutes=minute))
        for minute, role, persona_id, content in specs
    ]


class TestSystemPrompt:

    def test_sections_appear_in_fixed_order(self, composer, trained_persona):
        request = composer.compose("hey whats up", trained_persona, Intent.REWRITE)
        prompt = request.system_prompt

        markers = [
            "You are Trained",
            "PERSONALITY: Professional and polished",
            "SPECIAL INSTRUCTIONS: Never use exclamation marks",
            "STYLE PREFERENCES:",
            "WRITING EXAMPLES TO LEARN FROM:",
            "HOW YOU REWRITE:",
            "Your task is to rewrite",
        ]
        positions = [prompt.index(marker) for marker in markers]
        assert positions == sorted(positions)

    def test_preferences_rendered(self, composer, trained_persona):
        prompt = composer.compose("text", trained_persona, Intent.REWRITE).system_prompt
        assert "- Formality: formal" in prompt
        assert "- Tone: warm" in prompt

    @pytest.mark.parametrize("intent,expected", [
        (Intent.REWRITE, 3),
        (Intent.CHAT, 2),
        (Intent.FEEDBACK, 1),
    ])
    def test_sample_caps_keep_most_recent(self, composer, trained_persona, intent, expected):
        prompt = composer.compose("text", trained_persona, intent).system_prompt

        included = [i for i in range(5) if f"Sample number {i}." in prompt]
        assert included == list(range(5 - expected, 5))
        assert prompt.index("Example 1 (S4)") < prompt.index("Sample number 4.")

    def test_untrained_persona_has_no_optional_sections(self, composer, sophia):
        prompt = composer.compose("text", sophia, Intent.FEEDBACK).system_prompt
        assert "STYLE PREFERENCES" not in prompt
        assert "WRITING EXAMPLES" not in prompt
        assert "HOW YOU GIVE FEEDBACK:" in prompt
        assert "Give feedback in a professional, thoughtful manner." in prompt

    def test_unknown_personality_gets_default_voice(self, composer, stranger):
        prompt = composer.compose("text", stranger, Intent.FEEDBACK).system_prompt
        assert "Give natural, conversational feedback" in prompt

    def test_conversation_style_bullets(self, composer, marcus):
        prompt = composer.compose("hello", marcus, Intent.CHAT).system_prompt
        assert "- Be warm, friendly, and encouraging" in prompt


class TestUserPrompt:

    def test_rewrite_user_prompt_quotes_text(self, composer, sophia):
        request = composer.compose("hey whats up", sophia, Intent.REWRITE)
        assert request.user_prompt == 'Please rewrite this text:\n\n"hey whats up"'

    def test_feedback_user_prompt(self, composer, sophia):
        request = composer.compose("The cat sat.", sophia, Intent.FEEDBACK)
        assert request.user_prompt.startswith("I'd like your feedback on this text:")
        assert '"The cat sat."' in request.user_prompt

    def test_chat_quotes_reference_document(self, composer, sophia):
        context = ComposeContext(document_text="Draft paragraph.")
        request = composer.compose("Is the tone right?", sophia, Intent.CHAT, context)
        assert request.user_prompt.startswith("Is the tone right?")
        assert '"Draft paragraph."' in request.user_prompt

    def test_chat_without_document(self, composer, sophia):
        request = composer.compose("Hi", sophia, Intent.CHAT)
        assert request.user_prompt == "Hi"


class TestParams:

    def test_rewrite_floor_and_scaling(self):
        assert derive_params("short", Intent.REWRITE).max_tokens == 500
        assert derive_params("x" * 1000, Intent.REWRITE).max_tokens == 1500

    def test_feedback_params(self):
        params = derive_params("x" * 1000, Intent.FEEDBACK)
        assert params.max_tokens == 1000
        assert params.frequency_penalty == 0.5
        assert derive_params("short", Intent.FEEDBACK).max_tokens == 300

    def test_chat_params(self):
        params = derive_params("x" * 1000, Intent.CHAT)
        assert params.max_tokens == 2000
        assert params.temperature == 0.8
        assert derive_params("hi", Intent.CHAT).max_tokens == 600

    def test_request_carries_params(self, composer, sophia):
        request = composer.compose("short", sophia, Intent.REWRITE)
        assert request.params.temperature == 0.7
        assert request.params.max_tokens == 500


class TestHistory:

    def test_filters_other_personas_and_sorts(self, sophia):
        history = turns(
            (3, "persona", "sophia", "third"),
            (1, "user", None, "first"),
            (2, "persona", "marcus", "not mine"),
            (4, "user", None, "fourth"),
        )
        selected = select_history(history, sophia)
        assert [t.content for t in selected] == ["first", "third", "fourth"]

    def test_keeps_last_six(self, sophia):
        history = turns(*[(i, "user", None, f"m{i}") for i in range(10)])
        selected = select_history(history, sophia)
        assert [t.content for t in selected] == [f"m{i}" for i in range(4, 10)]

    def test_only_chat_requests_carry_history(self, composer, sophia):
        context = ComposeContext(history=turns((1, "user", None, "earlier")))
        assert composer.compose("rewrite this", sophia, Intent.REWRITE, context).history == []

        request = composer.compose("and now?", sophia, Intent.CHAT, context)
        assert [t.content for t in request.history] == ["earlier"]
        assert "Remember the conversation history above" in request.system_prompt

    def test_to_messages_order(self, composer, sophia):
        context = ComposeContext(history=turns(
            (1, "user", None, "hello"),
            (2, "persona", "sophia", "hi there"),
        ))
        messages = composer.compose("next", sophia, Intent.CHAT, context).to_messages()

        assert [m["role"] for m in messages] == ["system", "user", "assistant", "user"]
        assert messages[-1]["content"] == "next"


def test_module_level_compose(sophia):
    request = compose("hey", sophia, Intent.REWRITE)
    assert request.persona.id == "sophia"
    assert request.intent == Intent.REWRITE
    assert request.text == "hey"
