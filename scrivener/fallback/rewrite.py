"""
Deterministic rewrite used when no remote generator answers.

Two ordered passes driven by the persona strategy map:
1. Lexical substitution: the persona's rules folded over the text
2. Closing phrase: spacing normalised and persona framing added
"""
import re
from functools import reduce
from typing import Iterable

from scrivener.models import Persona
from scrivener.personalities import ClosingPhrase, RewriteRule, style_for

WHITESPACE = re.compile(r"\s+")
SPACE_BEFORE_PUNCTUATION = re.compile(r"\s+([,.;:!?])")
TERMINAL_PUNCTUATION = ".!?"


def apply_rules(text: str, rules: Iterable[RewriteRule]) -> str:
    """Apply rules in order, each one to the output of the previous."""
    return reduce(lambda acc, rule: rule.apply(acc), rules, text)


def normalize_spacing(text: str) -> str:
    text = WHITESPACE.sub(" ", text).strip()
    return SPACE_BEFORE_PUNCTUATION.sub(r"\1", text)


def ensure_terminal_punctuation(text: str) -> str:
    if text and text[-1] not in TERMINAL_PUNCTUATION:
        return text + "."
    return text


def _lower_first(text: str) -> str:
    # Keep "I", acronyms and names that run into a second capital letter.
    if len(text) > 1 and text[0].isupper() and text[1].islower():
        return text[0].lower() + text[1:]
    return text


def apply_closing(text: str, closing: ClosingPhrase | None) -> str:
    """Normalise spacing and frame the text with the persona's closing phrase."""
    if closing is None or not text.strip():
        return text

    body = normalize_spacing(text)
    if closing.trailing:
        body = body.rstrip(TERMINAL_PUNCTUATION) + closing.trailing
    else:
        body = ensure_terminal_punctuation(body)

    if closing.capitalize:
        body = body[0].upper() + body[1:]

    if closing.prefix.endswith(","):
        body = _lower_first(body)

    return " ".join(part for part in (closing.prefix, body, closing.suffix) if part)


def rewrite(text: str, persona: Persona) -> str:
    """Rewrite `text` in the persona's voice without any remote call.

    Args:
        text: Text to rewrite (the body of the request, not the instruction)
        persona: Persona whose personality selects the rules

    Returns:
        Rewritten text. Identical inputs always give identical output;
        unknown personalities return the text unchanged.

    Example:
        >>> sophia = Persona(id="sophia", name="Sophia",
        ...                  personality="Professional and polished",
        ...                  writing_style="Formal business communication")
        >>> rewrite("I think it's kind of good", sophia)
        'I believe it is somewhat good.'
    """
    style = style_for(persona.personality)
    substituted = apply_rules(text, style.rewrite_rules)
    return apply_closing(substituted, style.closing)
