"""
Persona strategy map.

Every personality tag maps to one immutable `PersonaStyle` record holding the
tables the pipeline consults for that persona: fallback rewrite rules, the
closing phrase of fallback rewrites, and the voice directives injected into
feedback and conversation prompts. Tags without an entry resolve to
`DEFAULT_STYLE`, so lookups never fail.

Rule order inside `rewrite_rules` is significant: rules are applied one after
another to the cumulative text, and later rules see earlier replacements.
"""
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple


@dataclass(frozen=True)
class RewriteRule:
    """One (match, replace) step of the fallback rewrite pass."""
    pattern: str
    replacement: str
    whole_word: bool = True

    def compile(self) -> re.Pattern:
        if self.whole_word:
            return re.compile(rf"\b{self.pattern}\b", re.IGNORECASE)
        return re.compile(self.pattern, re.IGNORECASE)

    def apply(self, text: str) -> str:
        return self.compile().sub(self.replacement, text)


@dataclass(frozen=True)
class ClosingPhrase:
    """Fixed persona-flavoured framing added around a fallback rewrite.

    `trailing` replaces the final punctuation instead of following it
    (an ellipsis, for instance).
    """
    prefix: str = ""
    suffix: str = ""
    trailing: str = ""
    capitalize: bool = False


@dataclass(frozen=True)
class PersonaStyle:
    personality: str
    rewrite_rules: Tuple[RewriteRule, ...] = ()
    closing: ClosingPhrase | None = None
    rewrite_voice: str = ""
    feedback_voice: str = ""
    conversation_voice: Tuple[str, ...] = ()


def _rules(*pairs) -> Tuple[RewriteRule, ...]:
    return tuple(RewriteRule(pattern, replacement) for pattern, replacement in pairs)


# Generic contraction expansion, applied after the persona's specific rules.
EXPANDED_CONTRACTIONS = (
    RewriteRule(r"(\w+)n['’]t", r"\1 not"),
    RewriteRule(r"(\w+)['’]re", r"\1 are"),
    RewriteRule(r"I['’]m", "I am"),
    RewriteRule(r"(\w+)['’]ve", r"\1 have"),
    RewriteRule(r"(\w+)['’]ll", r"\1 will"),
    RewriteRule(r"(it|that|there|what|here|he|she|who|where|how|when|why)['’]s", r"\1 is"),
    RewriteRule(r"let['’]s", "let us"),
    RewriteRule(r"(I|you|he|she|it|we|they|who|that|there)['’]d", r"\1 would"),
)


DEFAULT_FEEDBACK_VOICE = (
    "Give natural, conversational feedback that reflects your personality. Share what you "
    "notice about the writing, both strengths and areas for improvement. Be genuine in your "
    "response and helpful in your suggestions. Write as if you're having a real conversation "
    "about the text."
)

DEFAULT_REWRITE_VOICE = (
    "Adapt vocabulary, sentence structure and tone to your writing style while keeping "
    "every point of the original."
)

DEFAULT_CONVERSATION_VOICE = (
    "Be helpful and supportive",
    "Adapt your tone to match the user's needs",
    "Provide balanced, thoughtful advice",
    "Encourage continued improvement",
)

DEFAULT_STYLE = PersonaStyle(
    personality="default",
    rewrite_voice=DEFAULT_REWRITE_VOICE,
    feedback_voice=DEFAULT_FEEDBACK_VOICE,
    conversation_voice=DEFAULT_CONVERSATION_VOICE,
)


PROFESSIONAL = PersonaStyle(
    personality="Professional and polished",
    rewrite_rules=_rules(
        (r"I think", "I believe"),
        (r"I guess", "I estimate"),
        (r"kind of", "somewhat"),
        (r"sort of", "rather"),
        (r"pretty", "quite"),
        (r"gonna", "going to"),
        (r"wanna", "want to"),
        (r"can['’]t", "cannot"),
        (r"won['’]t", "will not"),
    ) + EXPANDED_CONTRACTIONS,
    closing=ClosingPhrase(capitalize=True),
    rewrite_voice="Use formal vocabulary and complete sentences. Never use contractions or slang.",
    feedback_voice=(
        "Give feedback in a professional, thoughtful manner. Write naturally as if you're "
        "having a conversation with a colleague. Share your observations about what's working "
        "well and what could be improved. Be specific about why certain elements are effective "
        "or need attention. Maintain your professional demeanor while being genuinely helpful "
        "and encouraging."
    ),
    conversation_voice=(
        "Maintain professional demeanor while being helpful",
        "Provide structured, well-organized responses",
        "Use formal language but remain approachable",
        "Offer specific, actionable advice",
        "Reference best practices when relevant",
    ),
)

CASUAL = PersonaStyle(
    personality="Casual and approachable",
    rewrite_rules=_rules(
        (r"therefore", "so"),
        (r"consequently", "so"),
        (r"furthermore", "also"),
        (r"moreover", "plus"),
        (r"utilize", "use"),
        (r"assist", "help"),
        (r"commence", "start"),
        (r"terminate", "end"),
    ),
    closing=ClosingPhrase(suffix="Hope this helps!"),
    rewrite_voice="Sound like a friend talking: plain words, contractions, short warm sentences.",
    feedback_voice=(
        "Give feedback in a warm, friendly way as if you're chatting with a friend about their "
        "writing. Point out what you like and gently suggest improvements. Use conversational "
        "language and be encouraging. Share your thoughts naturally without being overly "
        "structured. Make the person feel supported while helping them improve."
    ),
    conversation_voice=(
        "Be warm, friendly, and encouraging",
        "Use conversational language with contractions",
        "Share enthusiasm for good writing",
        "Make suggestions feel like friendly advice",
        "Use examples and analogies to explain concepts",
    ),
)

CONCISE = PersonaStyle(
    personality="Casual and concise",
    rewrite_voice="Cut every unnecessary word. Keep it short, plain and direct.",
    feedback_voice=(
        "Give brief, direct feedback that gets to the point quickly. Focus on the most important "
        "things that will make the biggest difference. Be honest but supportive. Use simple "
        "language and avoid long explanations. Give practical advice they can act on right away."
    ),
    conversation_voice=(
        "Keep responses brief and to the point",
        "Use simple, direct language",
        "Focus on the most important points",
        "Avoid lengthy explanations",
        "Give practical, actionable advice",
    ),
)

CONFIDENT = PersonaStyle(
    personality="Confident and compelling",
    rewrite_rules=_rules(
        (r"I think you should", "You need to"),
        (r"maybe", "definitely"),
        (r"might want to", "should"),
        (r"could help", "will transform"),
        (r"good", "excellent"),
        (r"nice", "outstanding"),
        (r"okay", "perfect"),
    ),
    closing=ClosingPhrase(suffix="Take action today!"),
    rewrite_voice="Replace hedges with decisive statements and end with a clear push to act.",
    feedback_voice=(
        "Give bold, decisive feedback that challenges the writer to reach their potential. Point "
        "out what's working powerfully and what needs to be stronger. Be direct about areas for "
        "improvement while inspiring them to push further. Focus on impact and results. Use "
        "confident language that motivates action."
    ),
    conversation_voice=(
        "Be assertive and decisive in your advice",
        "Use strong, action-oriented language",
        "Focus on impact and results",
        "Challenge the user to improve",
        "Provide bold, transformative suggestions",
    ),
)

SCHOLARLY = PersonaStyle(
    personality="Scholarly and methodical",
    rewrite_rules=_rules(
        (r"I think", "It is postulated that"),
        (r"show", "demonstrate"),
        (r"prove", "substantiate"),
        (r"use", "utilize"),
        (r"help", "facilitate"),
        (r"big", "significant"),
        (r"small", "minimal"),
    ),
    closing=ClosingPhrase(
        prefix="Based on current research,",
        suffix="Further investigation is warranted.",
    ),
    rewrite_voice="Use precise academic register, objective phrasing and evidence-based claims.",
    feedback_voice=(
        "Provide thoughtful, well-reasoned feedback that draws on writing principles and best "
        "practices. Analyze the text systematically while maintaining a conversational tone. "
        "Reference specific techniques and explain why certain approaches work or don't work. "
        "Be thorough but accessible in your analysis."
    ),
    conversation_voice=(
        "Provide thoughtful, well-reasoned responses",
        "Reference writing principles and theory",
        "Use precise, academic language",
        "Offer systematic approaches to problems",
        "Include evidence-based recommendations",
    ),
)

IMAGINATIVE = PersonaStyle(
    personality="Imaginative and expressive",
    rewrite_rules=_rules(
        (r"said", "whispered"),
        (r"walked", "wandered"),
        (r"looked", "gazed"),
        (r"big", "enormous"),
        (r"small", "tiny"),
        (r"good", "wonderful"),
        (r"bad", "terrible"),
    ),
    closing=ClosingPhrase(trailing="..."),
    rewrite_voice="Bring the text alive with sensory detail, vivid verbs and fresh metaphors.",
    feedback_voice=(
        "Give creative, colorful feedback that celebrates the artistic aspects of writing. Use "
        "vivid language and metaphors to describe what you observe. Encourage creative "
        "risk-taking and experimentation. Focus on the emotional impact and artistic expression. "
        "Make your feedback itself engaging and inspiring."
    ),
    conversation_voice=(
        "Use creative, colorful language",
        "Include metaphors and vivid descriptions",
        "Be enthusiastic about creative possibilities",
        "Encourage experimentation and risk-taking",
        "Make writing feel like an art form",
    ),
)

PRECISE = PersonaStyle(
    personality="Precise and logical",
    rewrite_rules=_rules(
        (r"I think", "Analysis indicates"),
        (r"help", "optimize"),
        (r"use", "implement"),
        (r"make", "generate"),
        (r"check", "validate"),
        (r"fix", "resolve"),
        (r"break", "malfunction"),
    ),
    closing=ClosingPhrase(suffix="Implementation details follow standard protocols."),
    rewrite_voice="State each point exactly, in logical order, with unambiguous terms.",
    feedback_voice=(
        "Provide clear, systematic feedback that focuses on structure, clarity, and logical "
        "flow. Point out specific areas where precision can be improved. Be methodical in your "
        "observations while keeping the tone conversational. Focus on how to make the writing "
        "more effective and easier to understand."
    ),
    conversation_voice=(
        "Provide clear, systematic responses",
        "Use logical structure and organization",
        "Focus on accuracy and precision",
        "Offer step-by-step guidance",
        "Include specific metrics when helpful",
    ),
)

AUTHENTIC = PersonaStyle(
    personality="Authentic and introspective",
    feedback_voice=(
        "Give honest, thoughtful feedback that connects with the authentic voice in the writing. "
        "Look for genuine moments and help strengthen them. Point out where the writing feels "
        "real versus where it might feel forced. Encourage the writer to dig deeper into their "
        "authentic perspective and voice."
    ),
)

DARKLY_HUMOROUS = PersonaStyle(
    personality="Darkly humorous and philosophical",
    feedback_voice=(
        "Provide feedback with your characteristic wit and philosophical insight. Point out the "
        "absurdities and deeper truths in the writing. Use humor to make your points while being "
        "genuinely helpful. Look for opportunities to add depth and meaning. Be honest about what "
        "works and what doesn't, but with compassionate cynicism."
    ),
)

OBSERVATIONAL = PersonaStyle(
    personality="Self-deprecating and observational",
    feedback_voice=(
        "Give feedback with humor and keen social observation. Point out what's working well and "
        "what could be funnier or more insightful. Look for opportunities to add personality and "
        "observational details. Be encouraging while helping them find their unique voice and "
        "perspective."
    ),
)


STYLES: Mapping[str, PersonaStyle] = MappingProxyType({
    style.personality: style for style in (
        PROFESSIONAL,
        CASUAL,
        CONCISE,
        CONFIDENT,
        SCHOLARLY,
        IMAGINATIVE,
        PRECISE,
        AUTHENTIC,
        DARKLY_HUMOROUS,
        OBSERVATIONAL,
    )
})


def style_for(personality: str) -> PersonaStyle:
    """Look up the strategy record for a personality tag.

    Entries that leave a voice directive empty inherit the default one.
    Unknown tags get `DEFAULT_STYLE` (no rewrite rules, no closing phrase).
    """
    style = STYLES.get(personality)
    if style is None:
        return DEFAULT_STYLE
    return style


def feedback_voice_for(personality: str) -> str:
    return style_for(personality).feedback_voice or DEFAULT_FEEDBACK_VOICE


def conversation_voice_for(personality: str) -> Tuple[str, ...]:
    return style_for(personality).conversation_voice or DEFAULT_CONVERSATION_VOICE


def rewrite_voice_for(personality: str) -> str:
    return style_for(personality).rewrite_voice or DEFAULT_REWRITE_VOICE
