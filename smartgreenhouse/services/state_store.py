"""State store abstraction - key-path get/set over the shared database.

Paths are slash-separated (``status/devices/water``). Every write is a whole
value ``set``: no merges, no transactions, last writer wins.
"""

import copy
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List

logger = logging.getLogger(__name__)

DEVICE_STATUS_PATH = "status/devices"
MANUAL_MODE_PATH = "status/mode_manual"
SCHEDULES_PATH = "schedules"
SENSOR_DATA_PATH = "sensor/data"


def child_path(*parts) -> str:
    """Join path segments, ignoring stray slashes"""
    segments = []
    for part in parts:
        segments.extend(s for s in str(part).split("/") if s)
    return "/".join(segments)


class StateStore(ABC):
    """Async key-path store shared by the webhook and the scheduler"""

    async def connect(self):
        """Open the underlying connection (no-op by default)"""

    async def close(self):
        """Release the underlying connection (no-op by default)"""

    @abstractmethod
    async def get(self, path: str) -> Any:
        """Read the value at ``path``, or None when nothing is stored there"""

    @abstractmethod
    async def set(self, path: str, value: Any) -> None:
        """Replace the value at ``path``; returns once the write is acknowledged"""


class MemoryStateStore(StateStore):
    """In-process store with Realtime Database path semantics.

    Used for simulation mode and tests. Reads return copies so callers can
    never mutate stored state without a ``set``.
    """

    def __init__(self, initial: Dict[str, Any] = None):
        self._root: Dict[str, Any] = {}
        self.writes: List[tuple] = []
        for path, value in (initial or {}).items():
            self._put(path, value)
        logger.info("In-memory state store initialized")

    async def get(self, path: str) -> Any:
        node = self._root
        for segment in self._segments(path):
            if not isinstance(node, dict) or segment not in node:
                return None
            node = node[segment]
        return copy.deepcopy(node)

    async def set(self, path: str, value: Any) -> None:
        self._put(path, value)
        self.writes.append((child_path(path), copy.deepcopy(value)))
        logger.debug(f"Set {path} = {value}")

    def _put(self, path: str, value: Any):
        segments = self._segments(path)
        if not segments:
            self._root = copy.deepcopy(value) if isinstance(value, dict) else {}
            return
        node = self._root
        for segment in segments[:-1]:
            if not isinstance(node.get(segment), dict):
                node[segment] = {}
            node = node[segment]
        if value is None:
            node.pop(segments[-1], None)
        else:
            node[segments[-1]] = copy.deepcopy(value)

    @staticmethod
    def _segments(path: str) -> List[str]:
        return child_path(path).split("/") if child_path(path) else []
