"""
Exceptions raised by scrivener.

Remote generation failures are deliberately absent: they are reported as
`RemoteResult` values, never raised to callers.
"""


class ScrivenerError(Exception):
    """Base class for all scrivener errors."""
    pass


class PersonaNotFoundError(ScrivenerError, KeyError):
    """Raised when a target persona id is not in the registry."""

    def __init__(self, persona_id: str):
        self.persona_id = persona_id
        super().__init__(f"Unknown persona: {persona_id!r}")

    def __str__(self) -> str:
        return f"Unknown persona: {self.persona_id!r}"


class ConfigError(ScrivenerError):
    """Raised when a settings or persona file cannot be used."""
    pass
