import asyncio
from types import SimpleNamespace

import httpx
import pytest

import sources.base as base_module


class FakeClock:
    """Virtual clock advanced only by pacing sleeps."""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    async def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds
        await asyncio.sleep(0)


@pytest.fixture
def fake_clock(monkeypatch):
    clock = FakeClock()
    monkeypatch.setattr(base_module, "asyncio", SimpleNamespace(sleep=clock.sleep))
    return clock


@pytest.fixture
def mock_client():
    def factory(handler):
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return factory
