"""
Scrivener: persona-driven writing assistance.

Public API exports for core components.
"""

from scrivener.models import (
    Intent, ResponseType, Origin, PipelineState, Persona, TrainingData, TrainingSample,
    StylePreferences, UserMessage, ChatTurn, GenerationParams, GenerationRequest,
    GenerationResult,
)
from scrivener.exceptions import ScrivenerError, PersonaNotFoundError, ConfigError
from scrivener.intent import classify, resolve_intent, extract_target_text
from scrivener.text_stats import TextStatistics, compute_statistics
from scrivener.detectors import DetectorReport, run_detectors
from scrivener.fallback import rewrite, feedback, converse
from scrivener.composer import ComposeContext, PromptComposer, compose
from scrivener.prompt_maker import PromptMaker
from scrivener.llm import LLM, LLMConfig, LLMResponse
from scrivener.remote import (
    RemoteGenerator, RemoteResult, LLMRemoteGenerator, PayloadRemoteGenerator,
)
from scrivener.registry import PersonaRegistry, resolve_targets
from scrivener.orchestrator import ResponseOrchestrator
from scrivener.config import ScrivenerConfig, load_config, setup_logging, build_orchestrator

__all__ = [
    'Intent',
    'ResponseType',
    'Origin',
    'PipelineState',
    'Persona',
    'TrainingData',
    'TrainingSample',
    'StylePreferences',
    'UserMessage',
    'ChatTurn',
    'GenerationParams',
    'GenerationRequest',
    'GenerationResult',
    'ScrivenerError',
    'PersonaNotFoundError',
    'ConfigError',
    'classify',
    'resolve_intent',
    'extract_target_text',
    'TextStatistics',
    'compute_statistics',
    'DetectorReport',
    'run_detectors',
    'rewrite',
    'feedback',
    'converse',
    'ComposeContext',
    'PromptComposer',
    'compose',
    'PromptMaker',
    'LLM',
    'LLMConfig',
    'LLMResponse',
    'RemoteGenerator',
    'RemoteResult',
    'LLMRemoteGenerator',
    'PayloadRemoteGenerator',
    'PersonaRegistry',
    'resolve_targets',
    'ResponseOrchestrator',
    'ScrivenerConfig',
    'load_config',
    'setup_logging',
    'build_orchestrator',
]
