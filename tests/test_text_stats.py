"""Tests for word and sentence statistics."""

from scrivener.text_stats import compute_statistics, round_half_up, split_sentences


class TestComputeStatistics:

    def test_three_short_sentences(self):
        stats = compute_statistics("Hi there. How are you? I'm fine.")

        assert stats.word_count == 7
        assert stats.sentence_count == 3
        assert stats.avg_words_per_sentence == 2
        assert stats.sentence_lengths == (2, 3, 2)

    def test_empty_text(self):
        stats = compute_statistics("")

        assert stats.word_count == 0
        assert stats.sentence_count == 0
        assert stats.avg_words_per_sentence == 0
        assert stats.is_empty

    def test_text_without_terminator_is_one_sentence(self):
        stats = compute_statistics("hey whats up")

        assert stats.sentence_count == 1
        assert stats.avg_words_per_sentence == 3

    def test_repeated_terminators_count_once(self):
        assert split_sentences("Wait!!! Really?! Yes...") == ["Wait", "Really", "Yes"]

    def test_average_rounds_half_up(self):
        # 5 words over 2 sentences
        stats = compute_statistics("One two three. Four five.")
        assert stats.avg_words_per_sentence == 3


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2
    assert round_half_up(0.5) == 1
