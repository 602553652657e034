"""
Pydantic models for prompt templates.

Each model corresponds to a Jinja template in the prompts/templates
directory, providing type-safe validation and clear documentation of
required variables.
"""
from typing import List, Optional
from abc import ABC, abstractmethod
from pydantic import BaseModel, Field

from scrivener.models import StylePreferences, TrainingSample


# =============================================================================
# Base Models
# =============================================================================

class BasePromptConfig(BaseModel, ABC):
    """Abstract base class for all prompt configurations."""

    model_config = {"extra": "forbid"}  # Prevent accidental extra fields

    @classmethod
    @abstractmethod
    def template_name(cls) -> str:
        """Return the name of the Jinja template file (without .jinja extension)."""
        pass


class PersonaPromptConfig(BasePromptConfig, ABC):
    """Persona sections shared by every system prompt.

    Rendered in fixed order: identity, custom instructions, style
    preferences, training samples. Templates add the voice directive and
    the task instruction after these.
    """

    persona_name: str = Field(..., min_length=1)
    personality: str = Field(..., min_length=1)
    writing_style: str = Field(..., min_length=1)
    custom_instructions: Optional[str] = Field(
        default=None,
        description="Free-form instructions attached to the persona"
    )
    preferences: Optional[StylePreferences] = Field(
        default=None,
        description="Trained style preferences, if the persona has been trained"
    )
    samples: List[TrainingSample] = Field(
        default_factory=list,
        description="Training samples, most recent first, already capped"
    )


# =============================================================================
# System Prompt Models
# =============================================================================

class RewriteSystemConfig(PersonaPromptConfig):
    """Configuration for rewrite_system.jinja.

    Instructs the persona to return only the rewritten text, with no
    explanation or meta-commentary.
    """

    voice_directive: str = Field(
        ...,
        min_length=1,
        description="Persona-keyed rewriting directive"
    )

    @classmethod
    def template_name(cls) -> str:
        return "rewrite_system"


class FeedbackSystemConfig(PersonaPromptConfig):
    """Configuration for feedback_system.jinja.

    Asks for a focused critique of two to four sentences delivered in the
    persona's voice.
    """

    voice_directive: str = Field(
        ...,
        min_length=1,
        description="Persona-keyed feedback approach"
    )

    @classmethod
    def template_name(cls) -> str:
        return "feedback_system"


class ConversationSystemConfig(PersonaPromptConfig):
    """Configuration for conversation_system.jinja.

    Conversation style bullets plus the instruction to remember and build on
    earlier turns. Prior turns travel as separate chat messages, not in
    this prompt.
    """

    conversation_style: List[str] = Field(
        ...,
        min_length=1,
        description="Persona-keyed conversation style bullets"
    )
    has_history: bool = Field(
        default=False,
        description="Whether prior turns accompany the prompt"
    )

    @classmethod
    def template_name(cls) -> str:
        return "conversation_system"


# =============================================================================
# User Prompt Models
# =============================================================================

class RewriteUserConfig(BasePromptConfig):
    """Configuration for rewrite_user.jinja."""

    text: str = Field(..., min_length=1, description="Text to rewrite")

    @classmethod
    def template_name(cls) -> str:
        return "rewrite_user"


class FeedbackUserConfig(BasePromptConfig):
    """Configuration for feedback_user.jinja."""

    text: str = Field(..., min_length=1, description="Text to critique")

    @classmethod
    def template_name(cls) -> str:
        return "feedback_user"


class ConversationUserConfig(BasePromptConfig):
    """Configuration for conversation_user.jinja.

    The user's message, followed by the document under discussion quoted as
    reference when the caller supplies one.
    """

    message: str = Field(..., min_length=1)
    context_text: Optional[str] = Field(
        default=None,
        description="Optional: the text the conversation is about"
    )

    @classmethod
    def template_name(cls) -> str:
        return "conversation_user"
