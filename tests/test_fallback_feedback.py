"""Tests for the templated fallback feedback and conversation engines."""

import random

import pytest

from scrivener.fallback import converse, feedback
from scrivener.fallback.feedback import PROFESSIONAL_CLOSINGS, REPORT_BUILDERS
from scrivener.models import Persona

DRAFT = (
    "I think our new app isn't bad. The customer said the user flow was confusing. "
    "We should leverage the feedback in order to improve things."
)


def persona_with(personality):
    return Persona(id="p", name="Pat", personality=personality, writing_style="Clear prose")


class TestFeedback:

    def test_professional_report_sections(self, sophia, seeded_rng):
        report = feedback(DRAFT, sophia, seeded_rng)

        assert report.startswith("Sophia's review")
        assert "Structure & Clarity" in report
        assert "Tone Assessment" in report
        assert "Recommendations" in report
        assert "Replace contractions with their full forms." in report
        assert report.splitlines()[-1] in PROFESSIONAL_CLOSINGS

    def test_seeded_rng_is_reproducible(self, sophia):
        first = feedback(DRAFT, sophia, random.Random(7))
        second = feedback(DRAFT, sophia, random.Random(7))
        assert first == second

    def test_unknown_personality_gets_generic_report(self, stranger):
        report = feedback("The cat sat. The dog ran. The bird flew.", stranger)

        assert report.startswith("Stranger's feedback (9 words across 3 sentences)")
        lines = report.splitlines()
        assert any(line.startswith("- Strengths: ") for line in lines)
        assert any(line.startswith("- Areas to improve: abrupt transitions") for line in lines)
        assert any(line.startswith("- Suggestions: ") for line in lines)

    def test_generic_report_without_issues(self, stranger):
        report = feedback("", stranger)
        assert "- Areas to improve: no major issues stood out." in report

    @pytest.mark.parametrize("personality", sorted(REPORT_BUILDERS))
    def test_every_builder_produces_text(self, personality, seeded_rng):
        for text in ("", DRAFT):
            assert feedback(text, persona_with(personality), seeded_rng).strip()

    def test_concise_report_names_main_fix(self):
        report = feedback(DRAFT, persona_with("Casual and concise"))
        assert report.startswith("Quick take: ")
        assert "Main fix: Cut it down" in report

    def test_precise_report_lists_metrics(self):
        report = feedback("One two three. Four five.", persona_with("Precise and logical"))
        assert "- Word count: 5" in report
        assert "- Sentence count: 2" in report
        assert "- Average words per sentence: 3" in report


class TestConverse:

    def test_introduces_persona(self, sophia):
        reply = converse("Hello there", sophia)
        assert reply.startswith("Thank you for your message. I'm Sophia.")
        assert "formal business communication" in reply

    def test_question_gets_pointer_to_help(self, marcus):
        reply = converse("How do I start?", marcus)
        assert "good question" in reply

    def test_long_message_is_treated_as_draft(self, luna):
        reply = converse(" ".join(["word"] * 50), luna)
        assert "draft" in reply

    def test_unknown_personality_uses_default_opener(self, stranger):
        assert converse("hi", stranger).startswith("Thanks for reaching out.")
