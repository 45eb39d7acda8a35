"""Shared fixtures for the Smart Greenhouse test suite.

Provides:
- an in-memory state store
- fake fallback service and messaging gateway that record their calls
- a dispatcher and server wired to those fakes
"""

from __future__ import annotations

from typing import Optional

import pytest

from smartgreenhouse.core.server import GreenhouseServer
from smartgreenhouse.services.command_dispatcher import CommandDispatcher
from smartgreenhouse.services.state_store import MemoryStateStore


@pytest.fixture(scope="session")
def anyio_backend():
    """Configure anyio backend for async tests."""
    return "asyncio"


class FakeFallback:
    """Stands in for FallbackService; returns ``reply`` or raises ``error``."""

    def __init__(self, reply: Optional[str] = None, error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.calls: list[str] = []

    async def complete(self, text: str) -> Optional[str]:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.reply

    async def close(self):
        pass


class FakeGateway:
    """Stands in for TwilioGateway; records every outbound message."""

    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.sent: list[tuple[str, str]] = []

    async def send(self, to: str, body: str) -> str:
        if self.error is not None:
            raise self.error
        self.sent.append((to, body))
        return "SM00000000000000000000000000000000"

    async def close(self):
        pass


@pytest.fixture
def store():
    return MemoryStateStore()


@pytest.fixture
def fallback():
    return FakeFallback(reply="Tomat butuh sinar matahari penuh.")


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def dispatcher(store, fallback):
    return CommandDispatcher(store, fallback)


@pytest.fixture
def server(store, gateway, fallback):
    return GreenhouseServer(
        store=store,
        gateway=gateway,
        fallback=fallback,
        run_scheduler=False,
    )
