# tests/conftest.py - Shared fixtures for DocChat AI tests
import os
import sys

import pytest
from fastapi.testclient import TestClient

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from server import create_app


class FakeClock:
    """Manually advanced clock in epoch seconds."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubCompletionClient:
    """Records every upstream call and returns a canned reply or raises."""

    def __init__(self, reply: str = "Stub answer", error: Exception = None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        self.calls.append((system_prompt, user_prompt))
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def stub_upstream():
    return StubCompletionClient()


@pytest.fixture
def make_client():
    """Build a TestClient around a fresh app with its own limiters."""
    def _make(upstream=None, api_key="test-key", ai_limiter=None, upload_limiter=None):
        app = create_app(
            completion_client=upstream if upstream is not None else StubCompletionClient(),
            api_key_loader=lambda: api_key,
            ai_limiter=ai_limiter,
            upload_limiter=upload_limiter,
        )
        return TestClient(app)
    return _make


@pytest.fixture
def client(make_client, stub_upstream):
    return make_client(upstream=stub_upstream)

