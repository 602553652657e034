"""
Deterministic conversational reply used when no remote generator answers.
"""
from types import MappingProxyType
from typing import Mapping

from scrivener.models import Persona
from scrivener.text_stats import split_words

OPENERS: Mapping[str, str] = MappingProxyType({
    "Professional and polished": "Thank you for your message.",
    "Casual and approachable": "Hey, great to hear from you!",
    "Casual and concise": "Hi.",
    "Confident and compelling": "Let's get to work.",
    "Scholarly and methodical": "A worthwhile line of inquiry.",
    "Imaginative and expressive": "What a lovely spark of a message!",
    "Precise and logical": "Message received.",
})
DEFAULT_OPENER = "Thanks for reaching out."

# Longer messages are probably drafts rather than small talk.
DRAFT_WORD_COUNT = 40


def converse(text: str, persona: Persona) -> str:
    """Reply in character, steering the user toward rewrite or feedback help."""
    opener = OPENERS.get(persona.personality, DEFAULT_OPENER)
    parts = [opener, f"I'm {persona.name}."]

    stripped = text.strip()
    if stripped.endswith("?"):
        parts.append(
            "That's a good question. I can answer best when I can see your writing, "
            "so paste a passage and ask me for feedback or a rewrite."
        )
    elif len(split_words(stripped)) >= DRAFT_WORD_COUNT:
        parts.append(
            "That looks like a draft. Ask me to rewrite it or to review it and I'll get started."
        )
    else:
        parts.append(
            f"My specialty is {persona.writing_style[0].lower() + persona.writing_style[1:]}. "
            "Share some text and I can rewrite it in my style or give you feedback on it."
        )
    return " ".join(parts)
