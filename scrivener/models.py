"""
Pydantic models for personas, messages and generation artifacts.

These are the value objects passed between the classifier, the prompt
composer, the remote generator and the fallback engines. None of them is
persisted here; storage of personas and chat history belongs to the caller.
"""
from datetime import datetime
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# Enumerations
# =============================================================================

class Intent(str, Enum):
    """Classified purpose of a user message."""
    REWRITE = "rewrite"
    FEEDBACK = "feedback"
    CHAT = "chat"


class ResponseType(str, Enum):
    """Kind of response delivered for one persona."""
    REWRITE = "rewrite"
    FEEDBACK = "feedback"
    CONVERSATION = "conversation"
    ERROR = "error"


class Origin(str, Enum):
    """Where the text of a result came from."""
    REMOTE = "remote"
    FALLBACK = "fallback"


class PipelineState(str, Enum):
    """Stages a (message, persona) pair moves through in the orchestrator."""
    PENDING = "pending"
    CLASSIFIED = "classified"
    COMPOSED = "composed"
    GENERATING = "generating"
    REMOTE_OK = "remote_ok"
    FALLBACK = "fallback"
    DELIVERED = "delivered"


INTENT_RESPONSE_TYPES = {
    Intent.REWRITE: ResponseType.REWRITE,
    Intent.FEEDBACK: ResponseType.FEEDBACK,
    Intent.CHAT: ResponseType.CONVERSATION,
}


# =============================================================================
# Persona Models
# =============================================================================

class TrainingSample(BaseModel):
    """A user-supplied example text used to bias a persona's prompts."""
    model_config = ConfigDict(frozen=True)

    text: str = Field(..., min_length=1, description="The sample text itself")
    title: Optional[str] = Field(default=None, description="Optional label shown with the sample")
    notes: Optional[str] = Field(default=None, description="What makes this sample effective")
    added_at: datetime = Field(default_factory=datetime.now)


class StylePreferences(BaseModel):
    """Stylistic preferences gathered while training a persona."""
    model_config = ConfigDict(frozen=True)

    tone: Optional[str] = None
    formality: Literal["formal", "casual", "mixed"] = "mixed"
    length: Literal["concise", "detailed", "balanced"] = "balanced"
    voice: Literal["active", "passive", "mixed"] = "mixed"


class TrainingData(BaseModel):
    """Samples and preferences attached to a single persona."""
    model_config = ConfigDict(frozen=True)

    samples: List[TrainingSample] = Field(default_factory=list)
    preferences: Optional[StylePreferences] = None
    last_updated: Optional[datetime] = None

    def recent_samples(self, limit: int) -> List[TrainingSample]:
        """Return up to `limit` samples, most recently added first."""
        if limit <= 0:
            return []
        ordered = sorted(self.samples, key=lambda s: s.added_at, reverse=True)
        return ordered[:limit]


class Persona(BaseModel):
    """A configured writing identity.

    `personality` is the tag that drives every persona-keyed table
    (rewrite rules, voice directives, feedback reports). Tags without a
    table entry are valid and fall back to the generic defaults.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    personality: str = Field(..., min_length=1, description="Personality tag, e.g. 'Professional and polished'")
    writing_style: str = Field(..., min_length=1, description="Free-text description of the writing style")
    description: Optional[str] = None
    custom_instructions: Optional[str] = None
    training_data: Optional[TrainingData] = None

    @field_validator('personality', 'writing_style')
    @classmethod
    def strip_required_text(cls, v: str) -> str:
        """Reject values that are only whitespace."""
        cleaned = v.strip()
        if not cleaned:
            raise ValueError("must not be blank")
        return cleaned


# =============================================================================
# Conversation Models
# =============================================================================

class UserMessage(BaseModel):
    """A single user submission addressed to one or more personas.

    The order of `target_persona_ids` is the order responses are delivered in.
    """
    text: str
    target_persona_ids: List[str] = Field(default_factory=list)
    explicit_intent: Optional[Intent] = Field(
        default=None,
        description="Intent requested by the caller (e.g. a 'get feedback' action); overrides classification"
    )


class ChatTurn(BaseModel):
    """One entry of prior conversation history."""
    model_config = ConfigDict(frozen=True)

    role: Literal["user", "persona"]
    content: str
    timestamp: datetime = Field(default_factory=datetime.now)
    persona_id: Optional[str] = Field(default=None, description="Set for persona turns")


# =============================================================================
# Generation Models
# =============================================================================

class GenerationParams(BaseModel):
    """Numeric sampling parameters derived for one request."""
    model_config = ConfigDict(frozen=True)

    max_tokens: int = Field(..., gt=0)
    temperature: float = Field(..., ge=0, le=2)
    presence_penalty: float = Field(default=0.0, ge=-2.0, le=2.0)
    frequency_penalty: float = Field(default=0.0, ge=-2.0, le=2.0)


class GenerationRequest(BaseModel):
    """Composed request handed to the remote generator."""
    model_config = ConfigDict(frozen=True)

    system_prompt: str
    user_prompt: str
    persona: Persona
    intent: Intent
    text: str = Field(..., description="The raw user text the prompts were built from")
    history: List[ChatTurn] = Field(default_factory=list)
    params: GenerationParams

    def to_messages(self) -> List[dict]:
        """Build the chat message list: system, prior turns, then the user prompt."""
        messages = [{"role": "system", "content": self.system_prompt}]
        for turn in self.history:
            role = "user" if turn.role == "user" else "assistant"
            messages.append({"role": role, "content": turn.content})
        messages.append({"role": "user", "content": self.user_prompt})
        return messages


class GenerationResult(BaseModel):
    """Outcome of generating a response for one persona."""
    persona_id: str
    text: str
    origin: Optional[Origin] = Field(
        default=None,
        description="None only for error results, which are not generated"
    )
    response_type: ResponseType
    states: List[PipelineState] = Field(default_factory=list, description="Pipeline states passed through")

    @property
    def is_error(self) -> bool:
        return self.response_type == ResponseType.ERROR
