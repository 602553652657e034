"""
LiteLLM client used by the remote generator.

The client only knows the model and its credentials. Sampling parameters
belong to each request (they are derived per intent and input length), so
one configured client serves every persona.
"""
from typing import Any, Optional, Union

import litellm
from pydantic import BaseModel, Field

from scrivener.models import GenerationParams


class LLMResponse(BaseModel):
    """Text and bookkeeping returned by one completion."""
    model_config = {"arbitrary_types_allowed": True}

    content: str | None = None
    finish_reason: str | None = None
    model: str | None = None
    usage: dict | None = None
    raw_response: Any = None


class LLMConfig(BaseModel):
    """Model name and connection settings."""
    model: str
    api_key: str | None = Field(default=None, description="Unset means the remote generator is unconfigured")
    api_base: str | None = Field(default=None, description="Custom endpoint, e.g. a LiteLLM proxy")
    timeout: int | None = Field(default=None, gt=0)


ChatMessages = list[dict]


class LLM:
    """
    Chat-completion client for any LiteLLM-supported model.

    Example:
        llm = LLM(LLMConfig(model="gpt-4o-mini", api_key=key))

        # Shorthand
        llm = LLM("gpt-4o-mini", api_key=key)
    """

    def __init__(self, config: Union[str, LLMConfig], **kwargs):
        self.config = LLMConfig(model=config, **kwargs) if isinstance(config, str) else config

    @property
    def is_configured(self) -> bool:
        return bool(self.config.api_key)

    def complete(self, prompt: Union[str, ChatMessages], **overrides) -> LLMResponse:
        """Blocking completion, used for connection probes.

        Args:
            prompt: A user message string or a list of role/content dicts
            **overrides: Extra litellm arguments (max_tokens, ...)
        """
        raw = litellm.completion(**self._request(prompt, None, overrides))
        return self._parse_response(raw)

    async def acomplete(
            self,
            messages: Union[str, ChatMessages],
            params: Optional[GenerationParams] = None,
            **overrides
    ) -> LLMResponse:
        """
        Completion that does not block the event loop.

        Args:
            messages: Role/content dicts (system first) or a bare user string
            params: Sampling parameters for this request
            **overrides: Extra litellm arguments, applied last

        Example:
            response = await llm.acomplete(request.to_messages(), request.params)
            print(response.content)
        """
        raw = await litellm.acompletion(**self._request(messages, params, overrides))
        return self._parse_response(raw)

    def _request(self, prompt, params: Optional[GenerationParams], overrides: dict) -> dict:
        if isinstance(prompt, str):
            messages = [{"role": "user", "content": prompt}]
        else:
            messages = [dict(m) for m in prompt]

        request = {"model": self.config.model, "messages": messages}
        if params is not None:
            request.update(params.model_dump())
        for key in ("api_key", "api_base", "timeout"):
            value = getattr(self.config, key)
            if value:
                request[key] = value
        request.update(overrides)
        return request

    @staticmethod
    def _parse_response(raw) -> LLMResponse:
        choice = raw.choices[0]
        usage = getattr(raw, 'usage', None)
        return LLMResponse(
            content=getattr(choice.message, 'content', None),
            finish_reason=getattr(choice, 'finish_reason', None),
            model=getattr(raw, 'model', None),
            usage=dict(
                prompt_tokens=usage.prompt_tokens,
                completion_tokens=usage.completion_tokens,
                total_tokens=usage.total_tokens,
            ) if usage is not None else None,
            raw_response=raw,
        )
