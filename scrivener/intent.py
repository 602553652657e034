"""
Keyword-based intent classification.

Classification is a pure function of the message text: lower-cased substring
matching against two fixed keyword sets. Rewrite keywords take precedence, so
"review this and make it more casual" is a rewrite request.
"""
import re
from typing import Optional

from scrivener.models import Intent

REWRITE_KEYWORDS = (
    "rewrite",
    "re-write",
    "rephrase",
    "reword",
    "paraphrase",
    "revise",
    "make it",
    "make this",
    "change this",
    "change it",
    "turn this into",
    "convert",
    "transform",
    "edit this",
    "polish",
    "simplify",
    "more casual",
    "more formal",
    "more professional",
    "shorten",
    "can you fix",
)

FEEDBACK_KEYWORDS = (
    "feedback",
    "review",
    "critique",
    "what do you think",
    "thoughts on",
    "how is this",
    "how's this",
    "how does this",
    "is this good",
    "evaluate",
    "assess",
    "suggestions",
    "improve",
    "opinion",
    "analyze",
    "analyse",
    "check this",
    "proofread",
)

# "rewrite this to be more professional: hey whats up" -> instruction, body
INSTRUCTION_SEPARATOR = re.compile(r":\s*|\n\s*\n")
QUOTES = "\"'“”‘’"


def _contains_any(lowered: str, keywords) -> bool:
    return any(keyword in lowered for keyword in keywords)


def classify(text: str) -> Intent:
    """Map a raw message to rewrite, feedback or chat.

    Args:
        text: Message text exactly as the user typed it

    Returns:
        Intent.REWRITE if any rewrite keyword occurs, else Intent.FEEDBACK if
        any feedback keyword occurs, else Intent.CHAT

    Example:
        >>> classify("please review and rewrite this")
        <Intent.REWRITE: 'rewrite'>
    """
    lowered = text.lower()
    if _contains_any(lowered, REWRITE_KEYWORDS):
        return Intent.REWRITE
    if _contains_any(lowered, FEEDBACK_KEYWORDS):
        return Intent.FEEDBACK
    return Intent.CHAT


def resolve_intent(text: str, explicit: Optional[Intent] = None) -> Intent:
    """Explicit intent from the caller wins over classification."""
    if explicit is not None:
        return Intent(explicit)
    return classify(text)


def extract_target_text(text: str) -> str:
    """Strip a leading instruction such as "rewrite this for me:".

    Only a prefix that itself carries a rewrite or feedback keyword counts as
    an instruction. Without one, or when nothing follows it, the whole text is
    returned.
    """
    match = INSTRUCTION_SEPARATOR.search(text)
    if not match:
        return text.strip()

    instruction = text[:match.start()].lower()
    body = text[match.end():].strip().strip(QUOTES).strip()
    if not body:
        return text.strip()
    if _contains_any(instruction, REWRITE_KEYWORDS) or _contains_any(instruction, FEEDBACK_KEYWORDS):
        return body
    return text.strip()
