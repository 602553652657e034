"""Tests for the heuristic detector bank."""

import pytest

from scrivener import detectors
from scrivener.detectors import DETECTORS, DetectorReport, run_detectors

SAMPLE_TEXTS = [
    "",
    "   ",
    "hey whats up",
    "I think it's kind of good",
    "The report was written by Sam. Therefore, furthermore, we commence!",
    "Her voice was like a bell (Smith 2020) and 42 users agreed.",
]


class TestDetectorBank:

    def test_bank_has_every_detector(self):
        assert len(DETECTORS) == 24
        assert "has_contractions" in DETECTORS
        assert "has_ambiguous_terms" in DETECTORS

    @pytest.mark.parametrize("text", SAMPLE_TEXTS)
    def test_detectors_never_raise_and_return_bools(self, text):
        report = run_detectors(text)
        assert set(report) == set(DETECTORS)
        assert all(isinstance(value, bool) for value in report.values())

    @pytest.mark.parametrize("text", SAMPLE_TEXTS)
    def test_each_detector_is_independent_of_the_others(self, text):
        report = run_detectors(text)
        for name, detector in DETECTORS.items():
            assert detector(text) == report[name]

    def test_report_attribute_access(self):
        report = run_detectors("I can't stop.")
        assert report.has_contractions is True
        with pytest.raises(AttributeError):
            report.no_such_detector

    def test_report_repr_lists_flagged(self):
        report = DetectorReport({"has_jargon": True, "has_rhythm": False})
        assert repr(report) == "DetectorReport(flagged=['has_jargon'])"


class TestIndividualDetectors:

    def test_contractions(self):
        assert detectors.has_contractions("I can't go")
        assert not detectors.has_contractions("I cannot go")

    def test_passive_voice(self):
        assert detectors.has_passive_voice("The report was written by Sam.")
        assert not detectors.has_passive_voice("Sam wrote the report.")

    def test_too_formal(self):
        assert detectors.is_too_formal("Therefore we shall commence. Furthermore, it ends.")
        assert not detectors.is_too_formal("Let's get going.")

    def test_needs_warmth(self):
        assert detectors.needs_warmth("The report is attached.")
        assert not detectors.needs_warmth("Thanks for your help.")

    def test_jargon(self):
        assert detectors.has_jargon("We should leverage our synergies.")
        assert not detectors.has_jargon("We should work together.")

    def test_wordy(self):
        assert detectors.is_too_wordy("In order to win, train.")
        assert not detectors.is_too_wordy("Train to win.")

    def test_flow(self):
        assert detectors.needs_better_flow("The cat sat. The dog ran. The bird flew.")
        assert not detectors.needs_better_flow("The cat sat. Then the dog ran. The bird flew.")
        assert not detectors.needs_better_flow("The cat sat.")

    def test_rhythm(self):
        varied = "Go. The quick brown fox jumped over the lazy sleeping dog near the river bank today."
        assert detectors.has_rhythm(varied)
        assert not detectors.has_rhythm("One two. Three four.")
        assert not detectors.has_rhythm("Just one sentence here.")

    def test_citations(self):
        assert detectors.has_citations("According to Smith (2020), sleep matters.")
        assert detectors.has_citations("Sleep matters [3].")
        assert not detectors.has_citations("Sleep matters.")

    def test_objective_tone(self):
        assert detectors.has_objective_tone("The data indicate a trend.")
        assert not detectors.has_objective_tone("I love this!")

    def test_specific_details(self):
        assert detectors.has_specific_details("Revenue grew 12 percent.")
        assert detectors.has_specific_details("We met with Alice yesterday.")
        assert not detectors.has_specific_details("revenue grew a lot.")

    def test_consistent_terminology(self):
        assert not detectors.has_consistent_terminology("The user called. The customer was upset.")
        assert detectors.has_consistent_terminology("The customer called. The customer was upset.")

    def test_imagery(self):
        assert detectors.has_metaphors("Her voice was like a bell.")
        assert detectors.has_visual_elements("The golden light faded.")
        assert detectors.has_tactile_elements("The rough stone was cold.")
        assert detectors.has_emotional_depth("She felt a quiet grief.")

    def test_persuasion(self):
        assert detectors.has_strong_verbs("Unlock your potential.")
        assert detectors.has_urgency("Order today.")
        assert detectors.has_call_to_action("Sign up now.")
        assert detectors.highlights_benefits("You will save hours.")

    def test_simple_words(self):
        assert detectors.has_simple_words("The cat sat on the mat.")
        assert not detectors.has_simple_words("Institutional considerations necessitate deliberation.")
        assert not detectors.has_simple_words("")

    def test_ambiguous_terms(self):
        assert detectors.has_ambiguous_terms("We did some stuff.")
        assert not detectors.has_ambiguous_terms("We shipped version two.")
