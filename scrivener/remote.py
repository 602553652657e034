"""
Remote generator adapters.

A remote generator turns a `GenerationRequest` into a `RemoteResult`. The
result is an explicit success/failure value: adapters convert transport
errors and malformed payloads into failures at this boundary, so the
orchestrator decides on fallback with a single branch instead of catching
exceptions.

Wire contract (one endpoint per intent):

    rewrite       {text, persona}                 -> {success, rewrittenText?, error?}
    feedback      {text, persona}                 -> {success, feedback?, error?}
    conversation  {message, persona, chatHistory} -> {success, response?, error?}

Anything other than `success is True` plus a non-empty named field counts as
unavailable or malformed, whatever the transport status was.
"""
import logging
from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Literal, Mapping, Optional

from pydantic import BaseModel

from scrivener.llm import LLM
from scrivener.models import ChatTurn, GenerationRequest, Intent, Persona

logger = logging.getLogger(__name__)

ENDPOINTS: Mapping[Intent, str] = MappingProxyType({
    Intent.REWRITE: "openai-rewrite",
    Intent.FEEDBACK: "openai-feedback",
    Intent.CHAT: "openai-conversation",
})

RESULT_FIELDS: Mapping[Intent, str] = MappingProxyType({
    Intent.REWRITE: "rewrittenText",
    Intent.FEEDBACK: "feedback",
    Intent.CHAT: "response",
})

PAYLOAD_HISTORY_LIMIT = 6


class RemoteResult(BaseModel):
    """Outcome of one remote generation attempt."""
    model_config = {"frozen": True}

    success: bool
    text: str | None = None
    error: str | None = None
    failure: Literal["unavailable", "malformed"] | None = None

    @classmethod
    def ok(cls, text: str) -> "RemoteResult":
        return cls(success=True, text=text)

    @classmethod
    def unavailable(cls, error: str) -> "RemoteResult":
        return cls(success=False, error=error, failure="unavailable")

    @classmethod
    def malformed(cls, error: str) -> "RemoteResult":
        return cls(success=False, error=error, failure="malformed")

    @classmethod
    def from_payload(cls, payload: Any, intent: Intent) -> "RemoteResult":
        """Interpret a wire response for the given intent.

        Args:
            payload: Decoded JSON response body
            intent: Intent the request was made for; selects the result field

        Returns:
            ok with the stripped field value, unavailable when the service
            reports failure, malformed when the shape is wrong
        """
        field_name = RESULT_FIELDS[Intent(intent)]
        if not isinstance(payload, dict):
            return cls.malformed(f"Expected a JSON object, got {type(payload).__name__}")
        if payload.get("success") is not True:
            return cls.unavailable(str(payload.get("error") or "Remote service reported failure"))

        value = payload.get(field_name)
        if not isinstance(value, str) or not value.strip():
            return cls.malformed(f"Response is missing '{field_name}'")
        return cls.ok(value.strip())


class ConnectionStatus(BaseModel):
    """Result of probing the remote generator."""
    success: bool
    message: str
    model: str | None = None


def persona_payload(persona: Persona) -> dict:
    """Persona in the camelCase shape the remote functions expect."""
    data = {
        "id": persona.id,
        "name": persona.name,
        "personality": persona.personality,
        "writingStyle": persona.writing_style,
    }
    if persona.custom_instructions:
        data["customInstructions"] = persona.custom_instructions
    if persona.training_data:
        training = persona.training_data
        data["trainingData"] = {
            "samples": [
                {
                    "text": s.text,
                    "title": s.title,
                    "notes": s.notes,
                    "addedAt": s.added_at.isoformat(),
                }
                for s in training.samples
            ],
        }
        if training.preferences:
            data["trainingData"]["preferences"] = training.preferences.model_dump()
    return data


def history_payload(turns: list[ChatTurn]) -> list[dict]:
    return [
        {
            "type": "user" if turn.role == "user" else "agent",
            "content": turn.content,
            "timestamp": turn.timestamp.isoformat(),
            "agentId": turn.persona_id,
        }
        for turn in turns[-PAYLOAD_HISTORY_LIMIT:]
    ]


def build_payload(request: GenerationRequest) -> dict:
    """Request body for the intent's endpoint."""
    persona = persona_payload(request.persona)
    if request.intent == Intent.CHAT:
        return {
            "message": request.text,
            "persona": persona,
            "chatHistory": history_payload(list(request.history)),
        }
    return {"text": request.text, "persona": persona}


class RemoteGenerator(ABC):
    """Abstract base for remote generation backends."""

    @abstractmethod
    async def generate(self, request: GenerationRequest) -> RemoteResult:
        """Generate text for the request. Must not raise."""
        pass


class LLMRemoteGenerator(RemoteGenerator):
    """Calls a LiteLLM-supported model directly with the composed prompts."""

    def __init__(self, llm: LLM):
        self.llm = llm

    async def generate(self, request: GenerationRequest) -> RemoteResult:
        if not self.llm.is_configured:
            return RemoteResult.unavailable("Remote generator is not configured")

        try:
            response = await self.llm.acomplete(request.to_messages(), request.params)
        except Exception as e:
            # litellm raises provider-specific exception types; all of them mean "unavailable"
            logger.warning("Remote generation failed for %s: %s", request.persona.id, e)
            return RemoteResult.unavailable(str(e))

        content = (response.content or "").strip()
        if not content:
            return RemoteResult.malformed("Model returned no content")
        return RemoteResult.ok(content)

    def check_connection(self) -> ConnectionStatus:
        """Send a minimal completion to verify credentials and model name."""
        if not self.llm.is_configured:
            return ConnectionStatus(
                success=False,
                message="API key not configured. Set OPENAI_API_KEY or api_key in the settings file."
            )
        try:
            response = self.llm.complete("Test connection", max_tokens=5)
        except Exception as e:
            return ConnectionStatus(success=False, message=f"Connection failed: {e}")
        return ConnectionStatus(success=True, message="Connection successful!", model=response.model)


Transport = Callable[[str, dict], Awaitable[Any]]


class PayloadRemoteGenerator(RemoteGenerator):
    """Speaks the JSON wire contract through an injected async transport.

    The transport receives the endpoint name and the request body and returns
    the decoded response body. How it reaches the service is up to the caller.
    """

    def __init__(self, transport: Transport):
        self.transport = transport

    async def generate(self, request: GenerationRequest) -> RemoteResult:
        endpoint = ENDPOINTS[request.intent]
        try:
            payload = await self.transport(endpoint, build_payload(request))
        except Exception as e:
            logger.warning("Transport error calling %s for %s: %s", endpoint, request.persona.id, e)
            return RemoteResult.unavailable(str(e))
        return RemoteResult.from_payload(payload, request.intent)


async def attempt(generator: Optional[RemoteGenerator], request: GenerationRequest) -> RemoteResult:
    """Run a generator that may be absent or raise; both are reported as unavailable."""
    if generator is None:
        return RemoteResult.unavailable("No remote generator configured")
    try:
        return await generator.generate(request)
    except Exception as e:
        logger.warning("Remote generator %s raised for %s: %s", type(generator).__name__, request.persona.id, e)
        return RemoteResult.unavailable(str(e))
