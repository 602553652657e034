"""
Settings, logging setup and orchestrator wiring.

Settings come from an optional YAML file and are then overridden by
environment variables:

    SCRIVENER_MODEL          model name passed to LiteLLM
    OPENAI_API_KEY           API key; unset means the remote generator is off
    SCRIVENER_API_BASE       custom API base URL
    SCRIVENER_PACING_DELAY   seconds between personas
    SCRIVENER_LOG_LEVEL      DEBUG, INFO, WARNING, ...
    SCRIVENER_PERSONAS_FILE  YAML file with a top-level `personas` list
"""
import logging
import os
from pathlib import Path
from typing import Mapping, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError

from scrivener.exceptions import ConfigError
from scrivener.llm import LLM, LLMConfig
from scrivener.orchestrator import DEFAULT_PACING_DELAY, ResponseOrchestrator
from scrivener.registry import PersonaRegistry
from scrivener.remote import LLMRemoteGenerator

ENV_OVERRIDES = {
    'SCRIVENER_MODEL': 'model',
    'OPENAI_API_KEY': 'api_key',
    'SCRIVENER_API_BASE': 'api_base',
    'SCRIVENER_PACING_DELAY': 'pacing_delay',
    'SCRIVENER_LOG_LEVEL': 'log_level',
    'SCRIVENER_PERSONAS_FILE': 'personas_file',
}

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class ScrivenerConfig(BaseModel):
    """Runtime settings for the response pipeline."""
    model_config = {"extra": "forbid"}

    model: str = "gpt-4o-mini"
    api_key: str | None = None
    api_base: str | None = None
    timeout: int | None = Field(default=None, gt=0)
    pacing_delay: float = Field(default=DEFAULT_PACING_DELAY, ge=0)
    remote_timeout: float | None = Field(default=None, gt=0)
    remote_enabled: bool = True
    personas_file: Path | None = None
    log_level: str = "INFO"

    def llm_config(self) -> LLMConfig:
        return LLMConfig(
            model=self.model,
            api_key=self.api_key,
            api_base=self.api_base,
            timeout=self.timeout,
        )


def load_config(
        path: Optional[Union[str, Path]] = None,
        environ: Optional[Mapping[str, str]] = None
) -> ScrivenerConfig:
    """
    Load settings from YAML, then apply environment overrides.

    Args:
        path: Optional YAML settings file
        environ: Environment mapping; defaults to os.environ

    Returns:
        Validated ScrivenerConfig

    Raises:
        ConfigError: If the file is missing or malformed, or a value is invalid
    """
    environ = os.environ if environ is None else environ
    data = {}

    if path is not None:
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"Settings file not found: {path}")
        with open(path, 'r', encoding='utf-8') as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"{path} must contain a mapping of settings")

    for variable, field_name in ENV_OVERRIDES.items():
        value = environ.get(variable)
        if value:
            data[field_name] = value

    try:
        return ScrivenerConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings: {e}") from e


def setup_logging(level: Union[str, int] = "INFO") -> logging.Logger:
    """Attach a stream handler to the `scrivener` logger. Safe to call repeatedly."""
    logger = logging.getLogger("scrivener")
    if isinstance(level, str):
        level = level.upper()
    try:
        logger.setLevel(level)
    except ValueError as e:
        raise ConfigError(f"Unknown log level: {level}") from e

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger


def build_orchestrator(config: ScrivenerConfig, **kwargs) -> ResponseOrchestrator:
    """
    Wire registry, LLM and remote generator from settings.

    The remote generator is left out when no API key is set or the remote is
    disabled; every response then comes from the local fallback engines.
    Extra keyword arguments go to ResponseOrchestrator (e.g. rng, sleep).
    """
    if config.personas_file:
        registry = PersonaRegistry.from_yaml(config.personas_file)
    else:
        registry = PersonaRegistry.default()

    generator = None
    if config.remote_enabled and config.api_key:
        generator = LLMRemoteGenerator(LLM(config.llm_config()))
    else:
        logging.getLogger(__name__).info("Remote generation disabled; using local fallback only")

    return ResponseOrchestrator(
        registry,
        generator,
        pacing_delay=config.pacing_delay,
        remote_timeout=config.remote_timeout,
        **kwargs,
    )
