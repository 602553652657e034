"""
Response orchestration across target personas.

For every message the orchestrator classifies intent once, then walks the
target personas strictly in order:

    PENDING -> CLASSIFIED -> COMPOSED -> GENERATING -> {REMOTE_OK | FALLBACK} -> DELIVERED

A failed, malformed, timed-out or absent remote generation falls back to the
local engines for that persona only. A fixed pacing delay separates
consecutive personas, so results arrive one at a time in target order.
Unknown persona ids yield an error result for that target and the batch
carries on.
"""
import asyncio
import logging
import random
from typing import Awaitable, Callable, List, Optional, Sequence

from scrivener.composer import ComposeContext, PromptComposer
from scrivener.exceptions import PersonaNotFoundError
from scrivener.fallback import converse, feedback, rewrite
from scrivener.intent import extract_target_text, resolve_intent
from scrivener.models import (
    INTENT_RESPONSE_TYPES,
    ChatTurn,
    GenerationResult,
    Intent,
    Origin,
    Persona,
    PipelineState,
    ResponseType,
    UserMessage,
)
from scrivener.registry import PersonaRegistry, resolve_targets
from scrivener.remote import RemoteGenerator, RemoteResult, attempt

logger = logging.getLogger(__name__)

DEFAULT_PACING_DELAY = 0.3  # seconds between personas

Sleep = Callable[[float], Awaitable[None]]


class ResponseOrchestrator:
    """Sequences classification, composition, remote generation and fallback."""

    def __init__(
        self,
        registry: PersonaRegistry,
        generator: Optional[RemoteGenerator] = None,
        *,
        composer: Optional[PromptComposer] = None,
        pacing_delay: float = DEFAULT_PACING_DELAY,
        remote_timeout: Optional[float] = None,
        rng: Optional[random.Random] = None,
        sleep: Sleep = asyncio.sleep,
    ):
        """
        Args:
            registry: Personas that targets are resolved against (read only)
            generator: Remote generator; None means unconfigured
            composer: Prompt composer; a default one is created if omitted
            pacing_delay: Seconds awaited between consecutive personas
            remote_timeout: Optional per-call limit in seconds; a timeout
                counts as the remote being unavailable
            rng: Random source for fallback feedback closings
            sleep: Awaitable used for pacing (injected in tests)
        """
        self.registry = registry
        self.generator = generator
        self.composer = composer or PromptComposer()
        self.pacing_delay = pacing_delay
        self.remote_timeout = remote_timeout
        self.rng = rng or random.Random()
        self.sleep = sleep

    async def respond(
        self,
        message: UserMessage,
        history: Sequence[ChatTurn] = (),
        document_text: Optional[str] = None,
    ) -> List[GenerationResult]:
        """
        Produce one result per target persona, in target order.

        Args:
            message: The user's submission
            history: Prior conversation turns (used for chat intent)
            document_text: Text under discussion, quoted in chat prompts

        Returns:
            List of GenerationResult, one per target id. Empty for a blank
            message.
        """
        if not message.text.strip():
            return []

        intent = resolve_intent(message.text, message.explicit_intent)
        context = ComposeContext(history=list(history), document_text=document_text)
        targets = list(message.target_persona_ids)
        logger.info("Responding to %s message for %d persona(s)", intent.value, len(targets))

        results = []
        for index, persona_id in enumerate(targets):
            try:
                persona = self.registry.require(persona_id)
            except PersonaNotFoundError as e:
                logger.warning("Skipping target: %s", e)
                results.append(self._unresolved(persona_id))
                continue

            results.append(await self.respond_as(persona, message.text, intent, context))

            if self.pacing_delay > 0 and any(t in self.registry for t in targets[index + 1:]):
                await self.sleep(self.pacing_delay)

        return results

    async def respond_to(
        self,
        text: str,
        selected_ids: Sequence[str],
        history: Sequence[ChatTurn] = (),
        document_text: Optional[str] = None,
        explicit_intent: Optional[Intent] = None,
    ) -> List[GenerationResult]:
        """Resolve targets from @mentions (falling back to the selection) and respond."""
        message = UserMessage(
            text=text,
            target_persona_ids=resolve_targets(text, self.registry, selected_ids),
            explicit_intent=explicit_intent,
        )
        return await self.respond(message, history=history, document_text=document_text)

    async def respond_as(
        self,
        persona: Persona,
        text: str,
        intent: Intent,
        context: Optional[ComposeContext] = None,
    ) -> GenerationResult:
        """Run the pipeline for a single resolved persona. Never raises on remote failure."""
        states = [PipelineState.PENDING, PipelineState.CLASSIFIED]

        request = self.composer.compose(text, persona, intent, context)
        states.append(PipelineState.COMPOSED)

        states.append(PipelineState.GENERATING)
        remote = await self._generate(request)

        if remote.success:
            states.append(PipelineState.REMOTE_OK)
            output, origin = remote.text, Origin.REMOTE
        else:
            logger.warning(
                "Remote %s for %s (%s); using local fallback",
                remote.failure, persona.id, remote.error
            )
            states.append(PipelineState.FALLBACK)
            output, origin = self._fallback(text, persona, intent), Origin.FALLBACK

        states.append(PipelineState.DELIVERED)
        logger.debug("%s: %s", persona.id, " -> ".join(s.value for s in states))
        logger.info("Delivered %s from %s for %s", intent.value, origin.value, persona.id)

        return GenerationResult(
            persona_id=persona.id,
            text=output,
            origin=origin,
            response_type=INTENT_RESPONSE_TYPES[intent],
            states=states,
        )

    async def _generate(self, request) -> RemoteResult:
        if self.remote_timeout is None:
            return await attempt(self.generator, request)
        try:
            return await asyncio.wait_for(attempt(self.generator, request), self.remote_timeout)
        except asyncio.TimeoutError:
            return RemoteResult.unavailable(f"Timed out after {self.remote_timeout}s")

    def _fallback(self, text: str, persona: Persona, intent: Intent) -> str:
        if intent == Intent.REWRITE:
            return rewrite(extract_target_text(text), persona)
        if intent == Intent.FEEDBACK:
            return feedback(extract_target_text(text), persona, self.rng)
        return converse(text, persona)

    @staticmethod
    def _unresolved(persona_id: str) -> GenerationResult:
        return GenerationResult(
            persona_id=persona_id,
            text=f"Sorry, I couldn't find a persona called '{persona_id}'.",
            origin=None,
            response_type=ResponseType.ERROR,
            states=[PipelineState.PENDING],
        )
