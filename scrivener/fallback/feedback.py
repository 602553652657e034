"""
Templated critique used when no remote generator answers.

The report for a persona is built from the text statistics and the full
heuristic detector bank. Personality tags select a report builder from
`REPORT_BUILDERS`; unknown tags get the generic strengths / areas to improve /
suggestions report.

Some builders close with one of several fixed phrasings. That choice is the
only randomness in the pipeline, so it always goes through an injectable
`random.Random`.
"""
import random
from types import MappingProxyType
from typing import Callable, List, Mapping, Optional

from scrivener.detectors import DetectorReport, run_detectors
from scrivener.models import Persona
from scrivener.text_stats import TextStatistics, compute_statistics

_default_rng = random.Random()

ReportBuilder = Callable[[Persona, TextStatistics, DetectorReport, random.Random], str]


def _section(title: str, lines: List[str]) -> str:
    body = "\n".join(f"- {line}" for line in lines)
    return f"{title}\n{body}"


def _join(*blocks: str) -> str:
    return "\n\n".join(block for block in blocks if block)


def _length_note(stats: TextStatistics) -> str:
    if stats.sentence_count == 0:
        return "There are no complete sentences yet, so structure is hard to judge."
    if stats.avg_words_per_sentence > 25:
        return f"Sentences average {stats.avg_words_per_sentence} words, which is long for easy reading."
    if stats.avg_words_per_sentence < 8:
        return f"Sentences average {stats.avg_words_per_sentence} words, which reads as clipped."
    return f"Sentences average {stats.avg_words_per_sentence} words, a comfortable reading length."


def _counts_line(stats: TextStatistics) -> str:
    word_label = "word" if stats.word_count == 1 else "words"
    sentence_label = "sentence" if stats.sentence_count == 1 else "sentences"
    return f"{stats.word_count} {word_label} across {stats.sentence_count} {sentence_label}."


# =============================================================================
# Persona reports
# =============================================================================

PROFESSIONAL_CLOSINGS = (
    "Overall, this is a solid foundation that will read well once refined.",
    "With a few targeted revisions, this will be ready for a professional audience.",
    "The message is clear; tightening the tone will make it more polished.",
)


def professional_report(persona, stats, d, rng) -> str:
    structure = [_counts_line(stats), _length_note(stats)]
    structure.append(
        "Transitions connect the ideas well." if not d.needs_better_flow
        else "The sentences would benefit from clearer transitions between ideas."
    )

    tone = [
        "Contractions give the text a conversational feel; expand them for formal correspondence."
        if d.has_contractions else
        "The text avoids contractions, which suits formal business communication.",
        "Passive constructions dilute accountability in places; prefer the active voice."
        if d.has_passive_voice else
        "The active voice keeps responsibility and action clear.",
    ]
    if d.has_jargon:
        tone.append("Some business jargon may obscure the message; plain terms are more persuasive.")

    recommendations = []
    if d.has_contractions:
        recommendations.append("Replace contractions with their full forms.")
    if d.is_too_wordy:
        recommendations.append("Remove filler phrases and shorten long sentences.")
    if d.has_ambiguous_terms:
        recommendations.append("Replace vague terms with precise wording.")
    if not d.has_specific_details:
        recommendations.append("Support key points with specific figures, names or dates.")
    if not recommendations:
        recommendations.append("Proofread once more and it is ready to send.")

    return _join(
        f"{persona.name}'s review",
        _section("Structure & Clarity", structure),
        _section("Tone Assessment", tone),
        _section("Recommendations", recommendations),
        rng.choice(PROFESSIONAL_CLOSINGS),
    )


CASUAL_CLOSINGS = (
    "You've got something good here. Keep going!",
    "Nice work. A couple of small tweaks and it'll really shine!",
    "Honestly, I enjoyed reading this. Can't wait to see the next draft!",
)


def casual_report(persona, stats, d, rng) -> str:
    likes = []
    if d.has_personal_pronouns:
        likes.append("It talks to the reader directly, which feels friendly.")
    if d.has_simple_words:
        likes.append("The words are easy to follow.")
    if d.has_contractions:
        likes.append("The contractions keep it relaxed and natural.")
    if not likes:
        likes.append("The main idea comes across clearly.")

    tweaks = []
    if d.is_too_formal:
        tweaks.append("It reads a bit stiff in places. Try swapping the formal words for everyday ones.")
    if d.needs_warmth:
        tweaks.append("Adding a personal touch or a 'you' here and there would warm it up.")
    if d.has_jargon:
        tweaks.append("A few buzzwords sneak in; plain words would feel friendlier.")
    if d.is_too_wordy:
        tweaks.append("Some sentences run long, so breaking them up would help.")
    if not tweaks:
        tweaks.append("Not much! Maybe read it out loud once to catch anything awkward.")

    return _join(
        f"Hey! Here's what I think about your {stats.word_count}-word piece.",
        _section("What I like", likes),
        _section("What I'd tweak", tweaks),
        rng.choice(CASUAL_CLOSINGS),
    )


def concise_report(persona, stats, d, rng) -> str:
    if d.is_too_wordy:
        fix = "Cut it down; shorter sentences will hit harder."
    elif d.has_ambiguous_terms:
        fix = "Swap vague words for specific ones."
    elif d.needs_better_flow:
        fix = "Link the sentences with a transition or two."
    else:
        fix = "Looks good. Ship it."
    return _join(
        f"Quick take: {_counts_line(stats)}",
        f"Main fix: {fix}",
    )


CONFIDENT_CLOSINGS = (
    "You have the raw material. Now make it unforgettable.",
    "Push harder and this will command attention.",
    "Sharpen the edges and this piece will win readers over.",
)


def confident_report(persona, stats, d, rng) -> str:
    impact = [
        "Strong verbs drive the message forward." if d.has_strong_verbs
        else "The verbs are too soft. Swap them for words that drive action.",
        "The reader knows what they gain." if d.highlights_benefits
        else "Spell out the benefit. Tell readers exactly what they get.",
    ]
    power_moves = []
    if not d.has_call_to_action:
        power_moves.append("Add a clear call to action. Tell them what to do next.")
    if not d.has_urgency:
        power_moves.append("Create urgency. Give them a reason to act now.")
    if d.has_passive_voice:
        power_moves.append("Kill the passive voice. Own every sentence.")
    if d.has_ambiguous_terms:
        power_moves.append("Cut the hedging words. Be specific and bold.")
    if not power_moves:
        power_moves.append("This already hits hard. Keep that energy throughout.")

    return _join(
        _section("Impact Check", impact),
        _section("Power Moves", power_moves),
        rng.choice(CONFIDENT_CLOSINGS),
    )


def scholarly_report(persona, stats, d, rng) -> str:
    structure = [
        f"The text comprises {_counts_line(stats)}",
        _length_note(stats),
        "Logical connectives establish the progression of the argument."
        if d.has_logical_flow else
        "The argument lacks explicit logical connectives (e.g., 'therefore', 'consequently').",
    ]
    evidence = [
        "Claims are supported by citations." if d.has_citations
        else "No citations are present; assertions should be substantiated with sources.",
        "Specific data points strengthen the analysis." if d.has_specific_details
        else "The discussion would benefit from concrete data or examples.",
    ]
    objectivity = [
        "The register remains objective." if d.has_objective_tone
        else "First-person or emotive language compromises objectivity.",
        "Terminology is applied consistently." if d.has_consistent_terminology
        else "Terminology varies for the same concept; select one term and apply it consistently.",
    ]
    return _join(
        _section("Structural Analysis", structure),
        _section("Evidentiary Support", evidence),
        _section("Objectivity & Terminology", objectivity),
        "Further revision along these lines is recommended.",
    )


IMAGINATIVE_CLOSINGS = (
    "Every draft is a seed; this one is ready to bloom.",
    "There's a story breathing under these words. Let it sing.",
    "Keep painting. The canvas is already catching the light.",
)


def imaginative_report(persona, stats, d, rng) -> str:
    imagery = [
        "Your images shimmer on the page." if d.has_visual_elements
        else "I'd love to see more color and light. Show me what the scene looks like.",
        "Texture makes the moment tangible." if d.has_tactile_elements
        else "Invite touch: rough, soft, cold, warm. Let readers feel the world.",
        "Your figurative language gives the piece wings." if d.has_metaphors
        else "A metaphor or simile could open a window in the prose.",
    ]
    resonance = [
        "There's real feeling pulsing through this." if d.has_emotional_depth
        else "Let the emotion surface; what does this moment feel like?",
        "The sentences rise and fall like a melody." if d.has_rhythm
        else "Vary your sentence lengths so the prose can breathe and dance.",
    ]
    return _join(
        _section("Imagery", imagery),
        _section("Emotional Resonance", resonance),
        rng.choice(IMAGINATIVE_CLOSINGS),
    )


def precise_report(persona, stats, d, rng) -> str:
    metrics = [
        f"Word count: {stats.word_count}",
        f"Sentence count: {stats.sentence_count}",
        f"Average words per sentence: {stats.avg_words_per_sentence}",
    ]
    issues = []
    if d.has_ambiguous_terms:
        issues.append("Ambiguous terms detected; replace them with exact quantities or names.")
    if d.is_too_wordy:
        issues.append("Redundant phrasing detected; reduce sentence length.")
    if not d.has_consistent_terminology:
        issues.append("Inconsistent terminology detected; standardize on one term per concept.")
    if d.has_passive_voice:
        issues.append("Passive constructions detected; specify the acting subject.")
    if not issues:
        issues.append("No clarity issues detected.")

    logic = [
        "Logical sequence is explicit." if d.has_logical_flow
        else "Add sequencing markers (first, then, finally) to make the logic explicit.",
        "Transitions are adequate." if not d.needs_better_flow
        else "Sentence-to-sentence transitions are missing.",
    ]
    return _join(
        _section("Metrics", metrics),
        _section("Clarity Issues", issues),
        _section("Logical Structure", logic),
    )


def generic_report(persona, stats, d, rng) -> str:
    """Three independently computed bullets: strengths, weaknesses, suggestions."""
    strengths = []
    if d.has_specific_details:
        strengths.append("concrete details")
    if d.has_logical_flow:
        strengths.append("a logical progression")
    if d.has_rhythm:
        strengths.append("varied sentence rhythm")
    if d.has_simple_words:
        strengths.append("accessible vocabulary")
    if d.has_emotional_depth:
        strengths.append("emotional depth")
    if d.has_strong_verbs:
        strengths.append("strong verbs")

    weaknesses = []
    if d.is_too_wordy:
        weaknesses.append("wordiness")
    if d.has_ambiguous_terms:
        weaknesses.append("vague terms")
    if d.has_jargon:
        weaknesses.append("jargon")
    if d.has_passive_voice:
        weaknesses.append("passive voice")
    if d.needs_better_flow:
        weaknesses.append("abrupt transitions")
    if not d.has_consistent_terminology:
        weaknesses.append("inconsistent terminology")

    suggestions = []
    if d.is_too_wordy or d.has_jargon:
        suggestions.append("simplify the phrasing")
    if d.has_ambiguous_terms or not d.has_specific_details:
        suggestions.append("add specific examples")
    if d.needs_better_flow:
        suggestions.append("connect ideas with transitions")
    if d.has_passive_voice:
        suggestions.append("switch to the active voice")

    lines = [
        "Strengths: " + (", ".join(strengths) if strengths else "the core idea comes through") + ".",
        "Areas to improve: " + (", ".join(weaknesses) if weaknesses else "no major issues stood out") + ".",
        "Suggestions: " + (", ".join(suggestions) if suggestions else "read it aloud to fine-tune the flow") + ".",
    ]
    return _join(
        f"{persona.name}'s feedback ({_counts_line(stats)[:-1]})",
        "\n".join(f"- {line}" for line in lines),
    )


REPORT_BUILDERS: Mapping[str, ReportBuilder] = MappingProxyType({
    "Professional and polished": professional_report,
    "Casual and approachable": casual_report,
    "Casual and concise": concise_report,
    "Confident and compelling": confident_report,
    "Scholarly and methodical": scholarly_report,
    "Imaginative and expressive": imaginative_report,
    "Precise and logical": precise_report,
})


def feedback(text: str, persona: Persona, rng: Optional[random.Random] = None) -> str:
    """Build a persona-flavoured critique of `text` from local heuristics.

    Args:
        text: Text to critique
        persona: Persona whose personality selects the report template
        rng: Random source for closing-line variants; pass a seeded
            `random.Random` for reproducible output

    Returns:
        Non-empty report text. Unknown personalities get the generic report.
    """
    stats = compute_statistics(text)
    detectors = run_detectors(text)
    builder = REPORT_BUILDERS.get(persona.personality, generic_report)
    return builder(persona, stats, detectors, rng or _default_rng)
