"""
Basic counts over raw text.
"""
import math
import re
from dataclasses import dataclass
from typing import List

SENTENCE_TERMINATORS = re.compile(r"[.!?]+")


@dataclass(frozen=True)
class TextStatistics:
    """Word and sentence counts for a piece of text."""
    word_count: int
    sentence_count: int
    avg_words_per_sentence: int
    sentence_lengths: tuple

    @property
    def is_empty(self) -> bool:
        return self.word_count == 0


def split_words(text: str) -> List[str]:
    """Split on whitespace, dropping empty tokens."""
    return text.split()


def split_sentences(text: str) -> List[str]:
    """Split on runs of sentence terminators and drop empty pieces."""
    return [s.strip() for s in SENTENCE_TERMINATORS.split(text) if s.strip()]


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_statistics(text: str) -> TextStatistics:
    """Compute word count, sentence count and rounded average sentence length.

    Example:
        >>> stats = compute_statistics("Hi there. How are you? I'm fine.")
        >>> stats.word_count, stats.sentence_count, stats.avg_words_per_sentence
        (7, 3, 2)
    """
    words = split_words(text)
    sentences = split_sentences(text)
    lengths = tuple(len(split_words(s)) for s in sentences)

    if sentences:
        average = round_half_up(len(words) / len(sentences))
    else:
        average = 0

    return TextStatistics(
        word_count=len(words),
        sentence_count=len(sentences),
        avg_words_per_sentence=average,
        sentence_lengths=lengths,
    )
