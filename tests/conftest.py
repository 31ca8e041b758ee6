"""Pytest configuration and fixtures."""
import os
import pytest
from hypothesis import settings, Verbosity

from dohjson.api.app import create_app
from dohjson.config import Config
from dohjson.models import Answer, Question, Record

# Hypothesis profiles
settings.register_profile("ci", max_examples=100)
settings.register_profile("dev", max_examples=10)
settings.register_profile("debug", max_examples=10, verbosity=Verbosity.verbose)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


@pytest.fixture
def clean_env(monkeypatch):
    """Remove dohjson environment variables for testing."""
    for key in ("DOH_UPSTREAM", "DOH_TIMEOUT", "DOH_ALLOW_HTTP", "DOH_PATH", "HOST", "PORT", "DEBUG"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def example_answer():
    """Answer for example.org. A as returned by a resolver."""
    return Answer(
        status=0,
        question=[Question(name="example.org.", type=1)],
        answer=[Record(name="example.org.", type=1, ttl=300, data="127.0.0.1")],
    )


@pytest.fixture
def make_app():
    """Factory for Flask apps wired to a given handler."""
    def factory(handler=None, allow_http=False):
        return create_app(config=Config(allow_http=allow_http), handler=handler)
    return factory
