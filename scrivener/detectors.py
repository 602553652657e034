"""
Heuristic detectors over raw text.

Each detector is an independent, pure predicate `str -> bool`. The fallback
feedback generator runs the whole bank and interpolates the outcomes into its
reports, so detectors must never raise on empty or odd input.
"""
import re
from types import MappingProxyType
from typing import Callable, Dict, Iterable, Iterator, Mapping

from scrivener.text_stats import compute_statistics, split_words

# Population variance of sentence lengths (in words) above which prose is
# considered to have rhythm.
RHYTHM_VARIANCE_THRESHOLD = 10.0
WORDY_AVERAGE_SENTENCE_LENGTH = 25
SIMPLE_WORD_MAX_LENGTH = 6
SIMPLE_WORD_RATIO = 0.75


def _phrase_pattern(phrases: Iterable[str]) -> re.Pattern:
    alternatives = "|".join(re.escape(p) for p in sorted(phrases, key=len, reverse=True))
    return re.compile(rf"\b(?:{alternatives})\b", re.IGNORECASE)


# =============================================================================
# Word lists
# =============================================================================

CONTRACTION = re.compile(r"\b\w+['’](?:t|s|re|ve|ll|d|m)\b", re.IGNORECASE)

PASSIVE_VOICE = re.compile(
    r"\b(?:am|is|are|was|were|be|been|being)\s+"
    r"(?:\w{2,}ed|written|taken|given|seen|known|done|made|built|sent|found|held|told|"
    r"paid|broken|chosen|driven|eaten|forgotten|hidden|spoken|stolen|thrown|shown|begun)\b",
    re.IGNORECASE,
)

PERSONAL_PRONOUNS = _phrase_pattern(["I", "me", "my", "mine", "we", "us", "our", "you", "your", "yours"])
FIRST_PERSON_SINGULAR = _phrase_pattern(["I", "me", "my", "mine"])

FORMAL_MARKERS = _phrase_pattern([
    "therefore", "furthermore", "moreover", "consequently", "utilize", "commence",
    "terminate", "herein", "thereby", "notwithstanding", "henceforth", "aforementioned",
    "pursuant", "whereas", "hereby",
])

WARM_WORDS = _phrase_pattern([
    "thanks", "thank you", "appreciate", "glad", "happy", "hope", "love", "excited",
    "wonderful", "delighted", "welcome", "enjoy", "grateful",
])

JARGON = _phrase_pattern([
    "synergy", "synergies", "leverage", "paradigm", "utilize", "optimize", "bandwidth",
    "stakeholder", "stakeholders", "deliverable", "deliverables", "actionable", "scalable",
    "ecosystem", "circle back", "best-in-class", "holistic", "value-add", "low-hanging fruit",
    "move the needle", "core competency", "touch base",
])

WORDY_PHRASES = _phrase_pattern([
    "in order to", "due to the fact that", "at this point in time", "in the event that",
    "for the purpose of", "it is important to note", "in spite of the fact that",
    "with regard to", "a large number of", "at the present time", "has the ability to",
])

TRANSITIONS = _phrase_pattern([
    "however", "therefore", "also", "additionally", "because", "so", "then", "first",
    "second", "next", "finally", "meanwhile", "as a result", "for example", "for instance",
    "in addition", "on the other hand", "instead", "still", "yet", "but",
])

STRONG_VERBS = _phrase_pattern([
    "achieve", "drive", "transform", "build", "create", "deliver", "launch", "accelerate",
    "boost", "master", "unlock", "ignite", "discover", "secure", "dominate", "conquer",
    "elevate", "maximize", "crush", "win",
])

URGENCY = _phrase_pattern([
    "now", "today", "immediately", "limited", "hurry", "don't miss", "last chance",
    "before it's too late", "deadline", "urgent", "right away", "act fast", "ends soon",
])

BENEFITS = _phrase_pattern([
    "benefit", "benefits", "you will", "you'll", "save", "gain", "results", "advantage",
    "free", "boost your", "improve your", "helps you",
])

CALL_TO_ACTION = _phrase_pattern([
    "sign up", "click", "buy", "join", "subscribe", "contact us", "get started", "try",
    "call us", "register", "order", "learn more", "book", "download", "reach out",
])

CITATION = re.compile(
    r"\([A-Z][^()]*\d{4}[a-z]?\)|\[\d+(?:[,-]\s*\d+)*\]|\bet al\.|\baccording to\b|"
    r"\b(?:studies|research|evidence|data) (?:shows?|suggests?|indicates?)\b",
    re.IGNORECASE,
)

INTENSIFIERS = _phrase_pattern([
    "amazing", "awesome", "terrible", "love", "hate", "incredible", "horrible",
    "fantastic", "unbelievable", "totally", "absolutely",
])

LOGICAL_CONNECTORS = _phrase_pattern([
    "therefore", "thus", "because", "consequently", "hence", "as a result", "first",
    "second", "third", "finally", "in conclusion", "it follows that", "since",
])

DIGITS = re.compile(r"\d")
MID_SENTENCE_PROPER_NOUN = re.compile(r"(?<=[a-z,;] )[A-Z][a-z]+")

# Pairs of interchangeable terms; using both in one text reads as inconsistent.
TERM_VARIANTS = (
    ("user", "customer"),
    ("client", "customer"),
    ("app", "application"),
    ("email", "e-mail"),
    ("website", "web site"),
    ("login", "log-in"),
    ("online", "on-line"),
)

EMOTIONAL_WORDS = _phrase_pattern([
    "feel", "feels", "felt", "heart", "fear", "joy", "love", "grief", "hope", "longing",
    "ache", "tears", "anger", "lonely", "sorrow", "regret", "yearning", "tender", "afraid",
])

VISUAL_WORDS = _phrase_pattern([
    "saw", "see", "bright", "dark", "light", "color", "colour", "red", "blue", "green",
    "golden", "shimmer", "glow", "glowing", "shadow", "shadows", "gleam", "sparkle",
    "silver", "crimson", "pale",
])

TACTILE_WORDS = _phrase_pattern([
    "rough", "smooth", "soft", "warm", "cold", "texture", "touch", "grip", "sharp",
    "velvet", "silk", "silky", "coarse", "damp", "sticky", "icy", "prickly",
])

FIGURATIVE = re.compile(
    r"\blike an? \w+|\bas if\b|\bas though\b|\bas \w+ as an?\b",
    re.IGNORECASE,
)

AMBIGUOUS_TERMS = _phrase_pattern([
    "thing", "things", "stuff", "something", "somehow", "various", "etc", "kind of",
    "sort of", "a lot", "some", "many", "several", "basically",
])


# =============================================================================
# Detectors
# =============================================================================

def has_contractions(text: str) -> bool:
    return bool(CONTRACTION.search(text))


def has_passive_voice(text: str) -> bool:
    return bool(PASSIVE_VOICE.search(text))


def has_personal_pronouns(text: str) -> bool:
    return bool(PERSONAL_PRONOUNS.search(text))


def is_too_formal(text: str) -> bool:
    """Two or more stiff connectives or latinate verbs."""
    return len(FORMAL_MARKERS.findall(text)) >= 2


def needs_warmth(text: str) -> bool:
    return not has_personal_pronouns(text) and not WARM_WORDS.search(text)


def has_simple_words(text: str) -> bool:
    words = [w.strip(".,;:!?\"'()[]") for w in split_words(text)]
    words = [w for w in words if w]
    if not words:
        return False
    short = sum(1 for w in words if len(w) <= SIMPLE_WORD_MAX_LENGTH)
    return short / len(words) >= SIMPLE_WORD_RATIO


def has_jargon(text: str) -> bool:
    return bool(JARGON.search(text))


def is_too_wordy(text: str) -> bool:
    stats = compute_statistics(text)
    return stats.avg_words_per_sentence > WORDY_AVERAGE_SENTENCE_LENGTH or bool(WORDY_PHRASES.search(text))


def needs_better_flow(text: str) -> bool:
    """Three or more sentences strung together without a single transition."""
    stats = compute_statistics(text)
    return stats.sentence_count >= 3 and not TRANSITIONS.search(text)


def has_strong_verbs(text: str) -> bool:
    return bool(STRONG_VERBS.search(text))


def has_urgency(text: str) -> bool:
    return bool(URGENCY.search(text))


def highlights_benefits(text: str) -> bool:
    return bool(BENEFITS.search(text))


def has_call_to_action(text: str) -> bool:
    return bool(CALL_TO_ACTION.search(text))


def has_citations(text: str) -> bool:
    return bool(CITATION.search(text))


def has_objective_tone(text: str) -> bool:
    return not FIRST_PERSON_SINGULAR.search(text) and "!" not in text and not INTENSIFIERS.search(text)


def has_logical_flow(text: str) -> bool:
    return bool(LOGICAL_CONNECTORS.search(text))


def has_specific_details(text: str) -> bool:
    """Numbers, or capitalised names appearing mid-sentence."""
    return bool(DIGITS.search(text) or MID_SENTENCE_PROPER_NOUN.search(text))


def has_consistent_terminology(text: str) -> bool:
    lowered = text.lower()
    for first, second in TERM_VARIANTS:
        if re.search(rf"\b{re.escape(first)}\b", lowered) and re.search(rf"\b{re.escape(second)}\b", lowered):
            return False
    return True


def has_emotional_depth(text: str) -> bool:
    return bool(EMOTIONAL_WORDS.search(text))


def has_visual_elements(text: str) -> bool:
    return bool(VISUAL_WORDS.search(text))


def has_rhythm(text: str) -> bool:
    """Sentence lengths vary enough to avoid a monotone beat."""
    lengths = compute_statistics(text).sentence_lengths
    if len(lengths) < 2:
        return False
    mean = sum(lengths) / len(lengths)
    variance = sum((n - mean) ** 2 for n in lengths) / len(lengths)
    return variance > RHYTHM_VARIANCE_THRESHOLD


def has_tactile_elements(text: str) -> bool:
    return bool(TACTILE_WORDS.search(text))


def has_metaphors(text: str) -> bool:
    return bool(FIGURATIVE.search(text))


def has_ambiguous_terms(text: str) -> bool:
    return bool(AMBIGUOUS_TERMS.search(text))


DETECTORS: Mapping[str, Callable[[str], bool]] = MappingProxyType({
    fn.__name__: fn for fn in (
        has_contractions,
        has_passive_voice,
        has_personal_pronouns,
        is_too_formal,
        needs_warmth,
        has_simple_words,
        has_jargon,
        is_too_wordy,
        needs_better_flow,
        has_strong_verbs,
        has_urgency,
        highlights_benefits,
        has_call_to_action,
        has_citations,
        has_objective_tone,
        has_logical_flow,
        has_specific_details,
        has_consistent_terminology,
        has_emotional_depth,
        has_visual_elements,
        has_rhythm,
        has_tactile_elements,
        has_metaphors,
        has_ambiguous_terms,
    )
})


class DetectorReport(Mapping):
    """Outcome of every detector for one text, readable as `report.has_jargon`."""

    def __init__(self, results: Dict[str, bool]):
        self._results = dict(results)

    def __getitem__(self, name: str) -> bool:
        return self._results[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._results)

    def __len__(self) -> int:
        return len(self._results)

    def __getattr__(self, name: str) -> bool:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._results[name]
        except KeyError:
            raise AttributeError(name) from None

    def __repr__(self) -> str:
        flagged = [name for name, value in self._results.items() if value]
        return f"DetectorReport(flagged={flagged})"


def run_detectors(text: str) -> DetectorReport:
    """Run the full detector bank over `text`."""
    return DetectorReport({name: detector(text) for name, detector in DETECTORS.items()})
