"""Tests for intent classification and target text extraction."""

import pytest

from scrivener.intent import classify, extract_target_text, resolve_intent
from scrivener.models import Intent


class TestClassify:

    @pytest.mark.parametrize("text", [
        "Please rewrite this paragraph",
        "Can you REPHRASE this?",
        "make it more casual",
        "rewrite this to be more professional: hey whats up",
        "please review and rewrite this",
    ])
    def test_rewrite_keywords(self, text):
        assert classify(text) == Intent.REWRITE

    @pytest.mark.parametrize("text", [
        "What do you think of my intro?",
        "Any feedback on this draft?",
        "Please review the following",
        "How is this?",
    ])
    def test_feedback_keywords(self, text):
        assert classify(text) == Intent.FEEDBACK

    @pytest.mark.parametrize("text", [
        "Hello there",
        "How are you today?",
        "hello, how are you?",
        "",
    ])
    def test_everything_else_is_chat(self, text):
        assert classify(text) == Intent.CHAT

    def test_rewrite_takes_precedence_over_feedback(self):
        assert classify("Review this and make it more casual") == Intent.REWRITE

    def test_classification_is_pure(self):
        text = "Thoughts on this opening line?"
        assert {classify(text) for _ in range(10)} == {Intent.FEEDBACK}


class TestResolveIntent:

    def test_explicit_intent_wins(self):
        assert resolve_intent("please rewrite this", Intent.FEEDBACK) == Intent.FEEDBACK

    def test_falls_back_to_classification(self):
        assert resolve_intent("please rewrite this") == Intent.REWRITE

    def test_accepts_string_values(self):
        assert resolve_intent("hello", "chat") == Intent.CHAT


class TestExtractTargetText:

    def test_strips_instruction_before_colon(self):
        text = "rewrite this to be more professional: hey whats up"
        assert extract_target_text(text) == "hey whats up"

    def test_strips_surrounding_quotes(self):
        assert extract_target_text('Please review: "The cat sat."') == "The cat sat."

    def test_blank_line_separates_instruction(self):
        text = "Can you give me feedback?\n\nThe meeting went long."
        assert extract_target_text(text) == "The meeting went long."

    def test_colon_without_instruction_keeps_everything(self):
        text = "Note: the meeting is at noon"
        assert extract_target_text(text) == text

    def test_no_separator_keeps_everything(self):
        assert extract_target_text("  I think it's kind of good  ") == "I think it's kind of good"

    def test_empty_body_keeps_everything(self):
        assert extract_target_text("rewrite this:") == "rewrite this:"
