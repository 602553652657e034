"""
Read-only persona registry and target resolution.

Persona management (creating, training, deleting) happens outside this
package; the pipeline only looks personas up.
"""
import re
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Iterator, List, Mapping, Optional, Sequence, Union

import yaml
from pydantic import ValidationError

from scrivener.exceptions import ConfigError, PersonaNotFoundError
from scrivener.models import Persona

MENTION = re.compile(r"@(\w+)")


DEFAULT_PERSONAS = (
    Persona(
        id="sophia",
        name="Sophia",
        description="Executive assistant with impeccable business writing",
        personality="Professional and polished",
        writing_style="Formal business communication with clear structure",
        custom_instructions="Always use formal language, avoid contractions, and maintain professional tone",
    ),
    Persona(
        id="marcus",
        name="Marcus",
        description="Your friendly neighborhood wordsmith",
        personality="Casual and approachable",
        writing_style="Conversational and warm with personal touches",
        custom_instructions="Keep it friendly and conversational, use contractions naturally",
    ),
    Persona(
        id="professor-chen",
        name="Professor Chen",
        description="Academic researcher with scholarly precision",
        personality="Scholarly and methodical",
        writing_style="Academic with proper citations and formal structure",
        custom_instructions="Use academic language, include evidence-based statements, maintain objectivity",
    ),
    Persona(
        id="luna",
        name="Luna",
        description="Creative storyteller with vivid imagination",
        personality="Imaginative and expressive",
        writing_style="Creative with rich descriptions and metaphors",
        custom_instructions="Use vivid imagery, creative metaphors, and engaging storytelling techniques",
    ),
)


class PersonaRegistry(Mapping[str, Persona]):
    """Immutable mapping of persona id to Persona, in insertion order."""

    def __init__(self, personas: Iterable[Persona] = ()):
        by_id = {}
        for persona in personas:
            if persona.id in by_id:
                raise ValueError(f"Duplicate persona id: {persona.id!r}")
            by_id[persona.id] = persona
        self._personas = MappingProxyType(by_id)

    def __getitem__(self, persona_id: str) -> Persona:
        return self._personas[persona_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._personas)

    def __len__(self) -> int:
        return len(self._personas)

    def require(self, persona_id: str) -> Persona:
        """Look up a persona, raising PersonaNotFoundError if absent."""
        try:
            return self._personas[persona_id]
        except KeyError:
            raise PersonaNotFoundError(persona_id) from None

    def find_by_handle(self, handle: str) -> Optional[Persona]:
        """Match an @mention handle against ids and names (spaces ignored)."""
        wanted = handle.lower()
        for persona in self._personas.values():
            if wanted in (persona.id.lower(), persona.name.lower().replace(" ", "")):
                return persona
        return None

    @classmethod
    def default(cls) -> "PersonaRegistry":
        """Registry holding the four built-in personas."""
        return cls(DEFAULT_PERSONAS)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "PersonaRegistry":
        """Load personas from a YAML file with a top-level `personas` list.

        Raises:
            ConfigError: If the file is missing, unreadable or invalid
        """
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"Persona file not found: {path}")

        with open(path, 'r', encoding='utf-8') as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        entries = data.get('personas') if isinstance(data, dict) else None
        if not isinstance(entries, list):
            raise ConfigError(f"{path} must contain a top-level 'personas' list")

        try:
            return cls(Persona(**entry) for entry in entries)
        except (ValidationError, TypeError, ValueError) as e:
            raise ConfigError(f"Invalid persona definition in {path}: {e}") from e


def extract_mentions(text: str, registry: PersonaRegistry) -> List[str]:
    """Persona ids mentioned as @Name in `text`, in order, without repeats."""
    mentioned = []
    for handle in MENTION.findall(text):
        persona = registry.find_by_handle(handle)
        if persona is not None and persona.id not in mentioned:
            mentioned.append(persona.id)
    return mentioned


def resolve_targets(text: str, registry: PersonaRegistry, selected_ids: Sequence[str]) -> List[str]:
    """Mentioned personas answer if any are mentioned, otherwise the selection does."""
    mentioned = extract_mentions(text, registry)
    return mentioned if mentioned else list(selected_ids)
