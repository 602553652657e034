"""
Composition of generation requests from a persona, its training data and the
user's text.

The system prompt is assembled in a fixed order (identity, custom
instructions, style preferences, recent training samples, persona voice
directive, task instruction) by the intent's Jinja template. Sampling
parameters are derived from the input length and the intent.
"""
import logging
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import List, Mapping, Optional, Sequence

from scrivener.models import (
    ChatTurn,
    GenerationParams,
    GenerationRequest,
    Intent,
    Persona,
)
from scrivener.personalities import (
    conversation_voice_for,
    feedback_voice_for,
    rewrite_voice_for,
)
from scrivener.prompt_maker import PromptMaker
from scrivener.prompts import (
    ConversationSystemConfig,
    ConversationUserConfig,
    FeedbackSystemConfig,
    FeedbackUserConfig,
    RewriteSystemConfig,
    RewriteUserConfig,
)

logger = logging.getLogger(__name__)

# Most recent training samples included per intent; keeps prompts within budget.
SAMPLE_LIMITS: Mapping[Intent, int] = MappingProxyType({
    Intent.REWRITE: 3,
    Intent.CHAT: 2,
    Intent.FEEDBACK: 1,
})

HISTORY_LIMIT = 6


@dataclass(frozen=True)
class ParamProfile:
    """Per-intent inputs for deriving sampling parameters.

    max_tokens = max(floor, ceil(len(text) * factor))
    """
    floor: int
    factor: float
    temperature: float
    presence_penalty: float
    frequency_penalty: float

    def derive(self, text: str) -> GenerationParams:
        return GenerationParams(
            max_tokens=max(self.floor, math.ceil(len(text) * self.factor)),
            temperature=self.temperature,
            presence_penalty=self.presence_penalty,
            frequency_penalty=self.frequency_penalty,
        )


# Feedback gets the smallest budget and the strongest repetition penalty.
PARAM_PROFILES: Mapping[Intent, ParamProfile] = MappingProxyType({
    Intent.REWRITE: ParamProfile(floor=500, factor=1.5, temperature=0.7,
                                 presence_penalty=0.1, frequency_penalty=0.1),
    Intent.FEEDBACK: ParamProfile(floor=300, factor=1.0, temperature=0.7,
                                  presence_penalty=0.2, frequency_penalty=0.5),
    Intent.CHAT: ParamProfile(floor=600, factor=2.0, temperature=0.8,
                              presence_penalty=0.2, frequency_penalty=0.1),
})


@dataclass
class ComposeContext:
    """Optional inputs beyond the text itself.

    Attributes:
        history: Prior conversation turns, any order, any persona
        document_text: The text a chat message is about, quoted as reference
    """
    history: Sequence[ChatTurn] = field(default_factory=list)
    document_text: Optional[str] = None


def derive_params(text: str, intent: Intent) -> GenerationParams:
    return PARAM_PROFILES[Intent(intent)].derive(text)


def select_history(history: Sequence[ChatTurn], persona: Persona, limit: int = HISTORY_LIMIT) -> List[ChatTurn]:
    """Keep user turns and this persona's turns, oldest first, last `limit` only."""
    relevant = [
        turn for turn in history
        if turn.role == "user" or turn.persona_id == persona.id
    ]
    relevant.sort(key=lambda turn: turn.timestamp)
    if limit <= 0:
        return []
    return relevant[-limit:]


class PromptComposer:
    """Builds `GenerationRequest`s with a shared `PromptMaker`."""

    def __init__(self, prompt_maker: Optional[PromptMaker] = None):
        self.prompt_maker = prompt_maker or PromptMaker()

    def _persona_fields(self, persona: Persona, intent: Intent) -> dict:
        training = persona.training_data
        samples = training.recent_samples(SAMPLE_LIMITS[intent]) if training else []
        return {
            "persona_name": persona.name,
            "personality": persona.personality,
            "writing_style": persona.writing_style,
            "custom_instructions": persona.custom_instructions,
            "preferences": training.preferences if training else None,
            "samples": samples,
        }

    def compose(
            self,
            text: str,
            persona: Persona,
            intent: Intent,
            context: Optional[ComposeContext] = None
    ) -> GenerationRequest:
        """
        Compose the request for one persona.

        Args:
            text: Raw user text
            persona: Persona to speak as
            intent: Classified (or explicit) intent
            context: Optional history and reference document

        Returns:
            GenerationRequest with system prompt, user prompt, filtered
            history (chat only) and derived parameters
        """
        intent = Intent(intent)
        context = context or ComposeContext()
        persona_fields = self._persona_fields(persona, intent)
        history: List[ChatTurn] = []

        if intent == Intent.REWRITE:
            system_config = RewriteSystemConfig(
                **persona_fields,
                voice_directive=rewrite_voice_for(persona.personality),
            )
            user_config = RewriteUserConfig(text=text)
        elif intent == Intent.FEEDBACK:
            system_config = FeedbackSystemConfig(
                **persona_fields,
                voice_directive=feedback_voice_for(persona.personality),
            )
            user_config = FeedbackUserConfig(text=text)
        else:
            history = select_history(context.history, persona)
            system_config = ConversationSystemConfig(
                **persona_fields,
                conversation_style=list(conversation_voice_for(persona.personality)),
                has_history=bool(history),
            )
            user_config = ConversationUserConfig(
                message=text,
                context_text=context.document_text or None,
            )

        params = derive_params(text, intent)
        logger.debug(
            "Composed %s request for %s: max_tokens=%d temperature=%.2f history=%d",
            intent.value, persona.id, params.max_tokens, params.temperature, len(history)
        )

        return GenerationRequest(
            system_prompt=self.prompt_maker.render(system_config),
            user_prompt=self.prompt_maker.render(user_config),
            persona=persona,
            intent=intent,
            text=text,
            history=history,
            params=params,
        )


_default_composer: Optional[PromptComposer] = None


def compose(
        text: str,
        persona: Persona,
        intent: Intent,
        context: Optional[ComposeContext] = None
) -> GenerationRequest:
    """Module-level convenience around a lazily created `PromptComposer`."""
    global _default_composer
    if _default_composer is None:
        _default_composer = PromptComposer()
    return _default_composer.compose(text, persona, intent, context)
