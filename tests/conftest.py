"""
Shared test fixtures for the Smart School API.
Every test gets its own EntityStore; the AI oracles run against a fake
OpenAI client, so there are zero network calls.
"""
import asyncio
import json
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from smartschool.config import Settings
from smartschool.main import create_app
from smartschool.seed import seed_store
from smartschool.services.grading_service import GradingService
from smartschool.services.proctoring_service import ProctoringService
from smartschool.storage import EntityStore


class FakeCompletions:
    """Stands in for `AsyncOpenAI().chat.completions`."""

    def __init__(self, content="", error=None, delay=0.0):
        self.content = content
        self.error = error
        self.delay = delay
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeClient:
    def __init__(self, content="", error=None, delay=0.0):
        self.chat = SimpleNamespace(completions=FakeCompletions(content, error, delay))

    @classmethod
    def replying(cls, payload, **kwargs):
        return cls(content=json.dumps(payload), **kwargs)

    @property
    def calls(self):
        return self.chat.completions.calls


@pytest.fixture
def store():
    """Empty store."""
    return EntityStore()


@pytest.fixture
def seeded_store():
    """Store populated with the demo data set (20 students, fixed seed)."""
    s = EntityStore()
    seed_store(s, student_count=20, seed=7)
    return s


@pytest.fixture
def fake_grading():
    """Grading oracle that awards 7 points with fixed feedback."""
    client = FakeClient.replying({"score": 7, "feedback": "Clear argument, thin evidence."})
    return GradingService(client=client, timeout=1)


@pytest.fixture
def fake_proctoring(seeded_store):
    """Proctoring oracle that always reports an anomaly."""
    client = FakeClient.replying({"anomaly": True, "description": "Second face in frame"})
    return ProctoringService(seeded_store, client=client, timeout=1)


@pytest.fixture
def test_settings():
    return Settings(
        openai_api_key="",
        seed_on_startup=True,
        mock_student_count=20,
        mock_seed=7,
    )


@pytest.fixture
def client(test_settings, seeded_store, fake_grading, fake_proctoring):
    """TestClient over a fresh app sharing `seeded_store`."""
    app = create_app(
        settings=test_settings,
        store=seeded_store,
        grading=fake_grading,
        proctoring=fake_proctoring,
    )
    return TestClient(app)
