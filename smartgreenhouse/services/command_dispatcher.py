"""Command dispatcher - applies a parsed command to the state store.

Each command performs at most one store mutation, awaited before the reply is
composed, so a confirmation is never sent for a write that did not land.
"""

import logging
from typing import Optional

from pydantic import ValidationError

from ..models import (
    AutoModeToggle,
    Command,
    DeviceToggle,
    Greeting,
    MenuRequest,
    ScheduleDefinition,
    SensorQuery,
    SensorSnapshot,
    Unrecognized,
)
from .fallback_service import FallbackQuotaExceeded, FallbackService, FallbackServiceError
from .reply_composer import FallbackFailure, FallbackOutcome, ReplyComposer
from .state_store import (
    DEVICE_STATUS_PATH,
    MANUAL_MODE_PATH,
    SCHEDULES_PATH,
    SENSOR_DATA_PATH,
    StateStore,
    child_path,
)

logger = logging.getLogger(__name__)


class CommandDispatcher:
    """Execute commands against the shared state and compose replies"""
    
    def __init__(
        self,
        store: StateStore,
        fallback: FallbackService,
        composer: ReplyComposer = None,
    ):
        self.store = store
        self.fallback = fallback
        self.composer = composer or ReplyComposer()
    
    async def dispatch(self, command: Command) -> str:
        """Apply ``command`` and return the reply text"""
        if isinstance(command, (Greeting, MenuRequest)):
            return self.composer.compose(command)
        
        if isinstance(command, DeviceToggle):
            path = child_path(DEVICE_STATUS_PATH, command.device.value)
            await self.store.set(path, command.on)
            logger.info(f"Device {command.device.value} -> {'ON' if command.on else 'OFF'}")
            return self.composer.compose(command)
        
        if isinstance(command, AutoModeToggle):
            # The store keeps the inverse: a manual-override flag
            path = child_path(MANUAL_MODE_PATH, command.device.value)
            await self.store.set(path, not command.on)
            logger.info(f"Auto mode for {command.device.value} -> {'ON' if command.on else 'OFF'}")
            return self.composer.compose(command)
        
        if isinstance(command, ScheduleDefinition):
            path = child_path(SCHEDULES_PATH, command.kind.value)
            await self.store.set(path, command.to_record())
            logger.info(
                f"Schedule {command.kind.value} saved: times={list(command.times)}, "
                f"duration={command.duration}m"
            )
            return self.composer.compose(command)
        
        if isinstance(command, SensorQuery):
            snapshot = await self._read_sensor_snapshot()
            return self.composer.compose(command, snapshot)
        
        if isinstance(command, Unrecognized):
            if command.format_error:
                return self.composer.compose(command)
            outcome = await self._ask_fallback(command.raw_text)
            return self.composer.compose(command, outcome)
        
        raise TypeError(f"Unhandled command type: {type(command).__name__}")
    
    async def _read_sensor_snapshot(self) -> Optional[SensorSnapshot]:
        data = await self.store.get(SENSOR_DATA_PATH)
        if not data or not isinstance(data, dict):
            return None
        try:
            return SensorSnapshot.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Unreadable sensor data {data!r}: {e}")
            return None
    
    async def _ask_fallback(self, text: str) -> FallbackOutcome:
        try:
            completion = await self.fallback.complete(text)
        except FallbackQuotaExceeded as e:
            logger.warning(f"Fallback quota exhausted: {e}")
            return FallbackOutcome(failure=FallbackFailure.QUOTA)
        except FallbackServiceError as e:
            logger.error(f"❌ Fallback service failed: {e}")
            return FallbackOutcome(failure=FallbackFailure.ERROR)
        
        logger.info(f"Fallback reply: {completion!r}")
        return FallbackOutcome(text=completion)
