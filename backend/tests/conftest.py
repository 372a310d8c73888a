"""
Shared pytest fixtures for backend tests.
The completion provider is replaced by a stub, so no test talks to Anthropic.
"""
import pytest
import sys
import os
from datetime import datetime
from zoneinfo import ZoneInfo

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from classifier import Classifier
from policies import get_policy

# Monday morning, Eastern daylight time
FIXED_NOW = datetime(2026, 10, 19, 9, 30, tzinfo=ZoneInfo("America/Toronto"))


def fixed_clock(_tz_name: str) -> datetime:
    return FIXED_NOW


class StubCompletion:
    """Stands in for CompletionClient: returns canned text and records calls."""

    def __init__(self, response: str = "{}", error: Exception = None):
        self.response = response
        self.error = error
        self.calls = []

    async def complete(self, system_prompt: str, text: str) -> str:
        self.calls.append({"system_prompt": system_prompt, "text": text})
        if self.error:
            raise self.error
        return self.response


@pytest.fixture
def stub_completion():
    return StubCompletion()


@pytest.fixture
def make_classifier(stub_completion):
    """Build a Classifier around the stub with a fixed clock."""
    def _make(profile: str = "standard") -> Classifier:
        return Classifier(stub_completion, get_policy(profile), "America/Toronto", clock=fixed_clock)
    return _make


@pytest.fixture
def clean_env(monkeypatch):
    """Environment with only a dummy API key set."""
    for name in list(os.environ):
        if name.startswith("CLARH_"):
            monkeypatch.delenv(name)
    monkeypatch.setenv("ANTHROPIC_API_KEY", "test-key")
    return monkeypatch


@pytest.fixture
def app_client(clean_env, make_classifier):
    """
    Test client for the FastAPI app.
    The lifespan still runs (with the dummy key); the classifier dependency is
    overridden so requests go to the stub.
    """
    from fastapi.testclient import TestClient
    import main

    classifier = make_classifier()
    main.app.dependency_overrides[main.get_classifier] = lambda: classifier
    with TestClient(main.app) as client:
        yield client
    main.app.dependency_overrides.clear()
