"""Tests for the deterministic fallback rewrite."""

import pytest

from scrivener.detectors import has_contractions
from scrivener.fallback.rewrite import apply_closing, apply_rules, normalize_spacing, rewrite
from scrivener.models import Persona
from scrivener.personalities import ClosingPhrase, RewriteRule


def persona_with(personality):
    return Persona(id="p", name="P", personality=personality, writing_style="Any style")


class TestRewrite:

    def test_professional_example(self, sophia):
        assert rewrite("I think it's kind of good", sophia) == "I believe it is somewhat good."

    def test_professional_capitalizes_and_terminates(self, sophia):
        assert rewrite("hey whats up", sophia) == "Hey whats up."

    def test_professional_expands_contractions(self, sophia):
        assert rewrite("We can't and won't. They don't.", sophia) == "We cannot and will not. They do not."

    @pytest.mark.parametrize("text,expected", [
        ("I'd say he's ready", "I would say he is ready."),
        ("Let's go, who's in", "Let us go, who is in."),
        ("They'd know where's the file", "They would know where is the file."),
    ])
    def test_professional_output_has_no_contractions(self, sophia, text, expected):
        result = rewrite(text, sophia)
        assert result == expected
        assert not has_contractions(result)

    def test_pretty_becomes_quite(self, sophia):
        assert rewrite("It is pretty clear", sophia) == "It is quite clear."

    def test_is_deterministic(self, luna):
        text = "She walked into the big room and said nothing."
        assert len({rewrite(text, luna) for _ in range(5)}) == 1

    def test_imaginative_uses_trailing_ellipsis(self, luna):
        assert rewrite("She walked home.", luna) == "She wandered home..."

    def test_casual_adds_sign_off(self, marcus):
        assert rewrite("We will utilize the tool.", marcus) == "We will use the tool. Hope this helps!"

    def test_scholarly_frames_the_text(self, registry):
        chen = registry["professor-chen"]
        result = rewrite("The big results show promise", chen)
        assert result == (
            "Based on current research, the significant results demonstrate promise. "
            "Further investigation is warranted."
        )

    def test_confident(self):
        persona = persona_with("Confident and compelling")
        result = rewrite("I think you should go, maybe it is good", persona)
        assert result == "You need to go, definitely it is excellent. Take action today!"

    def test_unknown_personality_returns_text_unchanged(self, stranger):
        assert rewrite("leave  me   alone", stranger) == "leave  me   alone"

    def test_matching_ignores_case(self, sophia):
        assert rewrite("i THINK so", sophia) == "I believe so."


class TestRulePipeline:

    def test_rules_apply_cumulatively_in_order(self):
        rules = [RewriteRule("cat", "dog"), RewriteRule("dog", "wolf")]
        assert apply_rules("cat", rules) == "wolf"

    def test_order_matters(self):
        rules = [RewriteRule("dog", "wolf"), RewriteRule("cat", "dog")]
        assert apply_rules("cat", rules) == "dog"

    def test_whole_word_matching(self):
        assert apply_rules("category", [RewriteRule("cat", "dog")]) == "category"
        assert apply_rules("category", [RewriteRule("cat", "dog", whole_word=False)]) == "dogegory"


class TestClosing:

    def test_blank_text_is_left_alone(self):
        assert apply_closing("   ", ClosingPhrase(suffix="Bye!")) == "   "

    def test_no_closing_is_left_alone(self):
        assert apply_closing("as  is", None) == "as  is"

    def test_prefix_with_comma_lowercases_first_word(self):
        closing = ClosingPhrase(prefix="Indeed,")
        assert apply_closing("The sky is blue", closing) == "Indeed, the sky is blue."

    def test_prefix_keeps_acronyms(self):
        closing = ClosingPhrase(prefix="Indeed,")
        assert apply_closing("NASA launched", closing) == "Indeed, NASA launched."

    @pytest.mark.parametrize("raw,expected", [
        ("a  b", "a b"),
        ("a , b .", "a, b."),
        ("\n a\tb \n", "a b"),
    ])
    def test_normalize_spacing(self, raw, expected):
        assert normalize_spacing(raw) == expected
