"""Tests for the Firebase-backed state store (SDK replaced by a fake reference)."""

from __future__ import annotations

import pytest

from smartgreenhouse.core.server import create_server
from smartgreenhouse.services.firebase_service import FirebaseStateStore
from smartgreenhouse.services.state_store import MemoryStateStore

pytestmark = pytest.mark.anyio


class FakeReference:
    """Mimics firebase_admin.db.Reference for a flat path -> value map."""

    def __init__(self, data=None, path=""):
        self.data = data if data is not None else {}
        self.path = path

    def child(self, path):
        return FakeReference(self.data, path)

    def get(self):
        return self.data.get(self.path)

    def set(self, value):
        self.data[self.path] = value


@pytest.fixture
def firebase_store():
    store = FirebaseStateStore(credentials_path="/nonexistent/key.json", database_url="https://test.firebaseio.com")
    store.root = FakeReference()
    store.connected = True
    return store


async def test_set_and_get_use_child_paths(firebase_store):
    await firebase_store.set("/status/devices/water/", True)

    assert firebase_store.root.data == {"status/devices/water": True}
    assert await firebase_store.get("status/devices/water") is True
    assert await firebase_store.get("sensor/data") is None


async def test_calls_before_connect_fail():
    store = FirebaseStateStore(credentials_path="/nonexistent/key.json", database_url="https://test.firebaseio.com")
    with pytest.raises(RuntimeError):
        await store.get("schedules")


async def test_close_marks_disconnected(firebase_store):
    await firebase_store.close()
    assert firebase_store.connected is False


async def test_missing_credentials_fail_connect(monkeypatch):
    monkeypatch.setattr("firebase_admin._apps", {})
    store = FirebaseStateStore(credentials_path="/nonexistent/key.json", database_url="https://test.firebaseio.com")
    with pytest.raises(FileNotFoundError):
        await store.connect()


def test_simulation_mode_uses_memory_store(monkeypatch):
    monkeypatch.setattr("smartgreenhouse.config.SIMULATE_STATE_STORE", True)
    server = create_server(run_scheduler=False)
    assert isinstance(server.store, MemoryStateStore)
    assert server.run_scheduler is False
