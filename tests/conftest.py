"""Shared fixtures for scrivener tests."""

import random
from datetime import datetime, timedelta

import pytest

from scrivener.models import Persona, StylePreferences, TrainingData, TrainingSample
from scrivener.registry import PersonaRegistry
from scrivener.remote import RemoteGenerator, RemoteResult


class RecordingSleep:
    """Stands in for asyncio.sleep and records each requested delay."""

    def __init__(self):
        self.calls = []

    async def __call__(self, delay):
        self.calls.append(delay)


class ScriptedGenerator(RemoteGenerator):
    """Returns queued RemoteResults in order and records every request."""

    def __init__(self, *results):
        self.results = list(results)
        self.requests = []

    async def generate(self, request):
        self.requests.append(request)
        if not self.results:
            return RemoteResult.unavailable("script exhausted")
        return self.results.pop(0)


@pytest.fixture
def registry():
    return PersonaRegistry.default()


@pytest.fixture
def sophia(registry):
    return registry["sophia"]


@pytest.fixture
def marcus(registry):
    return registry["marcus"]


@pytest.fixture
def luna(registry):
    return registry["luna"]


@pytest.fixture
def stranger():
    """Persona whose personality tag has no table entries."""
    return Persona(
        id="stranger",
        name="Stranger",
        personality="Mysterious and aloof",
        writing_style="Terse and cryptic",
    )


@pytest.fixture
def trained_persona():
    start = datetime(2024, 1, 1, 12, 0, 0)
    samples = [
        TrainingSample(text=f"Sample number {i}.", title=f"S{i}", added_at=start + timedelta(days=i))
        for i in range(5)
    ]
    return Persona(
        id="trained",
        name="Trained",
        personality="Professional and polished",
        writing_style="Formal business communication",
        custom_instructions="Never use exclamation marks",
        training_data=TrainingData(
            samples=samples,
            preferences=StylePreferences(tone="warm", formality="formal", length="concise", voice="active"),
        ),
    )


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def seeded_rng():
    return random.Random(1234)


@pytest.fixture
def make_generator():
    """Factory for a generator that replays the given RemoteResults."""
    return ScriptedGenerator
