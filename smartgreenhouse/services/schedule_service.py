"""Schedule service - minute ticks that actuate devices from stored schedules.

Every tick reads both schedules once, turns on each device whose schedule
lists the current HH:MM, and hands the matching shutoff to the ShutoffTimer.
A minute that is never observed (downtime, drift) is simply skipped; there is
no catch-up.

Shutoffs live only in memory. A restart before a shutoff fires leaves the
device on until a later schedule or a manual command turns it off. A shutoff
also fires regardless of later manual toggles, so a manual "on" issued during
a scheduled window is cut short when the window ends.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Awaitable, Callable, Dict, List, Optional

from pydantic import ValidationError

from .. import config
from ..models import Device, Schedule, ScheduleKind
from .state_store import DEVICE_STATUS_PATH, SCHEDULES_PATH, StateStore, child_path

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class PendingShutoff:
    device: Device
    fire_at: datetime
    duration: int  # minutes


class ShutoffTimer:
    """Delayed device-off writes, one asyncio task per pending shutoff"""
    
    def __init__(self, store: StateStore, sleep: Sleep = asyncio.sleep):
        self.store = store
        self._sleep = sleep
        self._tasks: Dict[PendingShutoff, asyncio.Task] = {}
    
    @property
    def pending(self) -> List[PendingShutoff]:
        return sorted(self._tasks, key=lambda entry: entry.fire_at)
    
    def schedule(self, device: Device, duration: int, now: datetime) -> PendingShutoff:
        """Turn ``device`` off ``duration`` minutes after ``now``"""
        entry = PendingShutoff(device=device, fire_at=now + timedelta(minutes=duration), duration=duration)
        if entry in self._tasks:
            return entry
        self._tasks[entry] = asyncio.create_task(self._run(entry))
        logger.info(f"⏲ {device.value} shutoff scheduled for {entry.fire_at:%H:%M} ({duration}m)")
        return entry
    
    async def fire_due(self, now: datetime) -> List[PendingShutoff]:
        """Fire every shutoff whose time has come without waiting for its task"""
        due = [entry for entry in self.pending if entry.fire_at <= now]
        for entry in due:
            task = self._tasks.pop(entry, None)
            if task is not None:
                task.cancel()
            await self._turn_off(entry)
        return due
    
    def cancel_all(self) -> int:
        """Drop every pending shutoff; returns how many were dropped"""
        count = len(self._tasks)
        for task in self._tasks.values():
            task.cancel()
        self._tasks.clear()
        return count
    
    async def _run(self, entry: PendingShutoff):
        await self._sleep(entry.duration * 60)
        if self._tasks.pop(entry, None) is None:
            return
        await self._turn_off(entry)
    
    async def _turn_off(self, entry: PendingShutoff):
        try:
            await self.store.set(child_path(DEVICE_STATUS_PATH, entry.device.value), False)
            logger.info(f"✓ {entry.device.value} auto-OFF after {entry.duration}m")
        except Exception as e:
            logger.error(f"Failed to turn off {entry.device.value} after schedule: {e}", exc_info=True)


class ScheduleService:
    """Match stored schedules against the clock once per minute"""
    
    def __init__(
        self,
        store: StateStore,
        shutoffs: ShutoffTimer = None,
        clock: Clock = datetime.now,
        interval: int = None,
        sleep: Sleep = asyncio.sleep,
    ):
        self.store = store
        self.shutoffs = shutoffs or ShutoffTimer(store)
        self.clock = clock
        self.interval = interval or config.SCHEDULER_INTERVAL_SECONDS
        self.running = False
        self._sleep = sleep
        # Date and HH:MM of the last minute that was matched
        self._last_minute: Optional[str] = None
        logger.info("Schedule service initialized")
    
    async def run_schedule_loop(self):
        """Tick at the start of every interval until stopped"""
        logger.info("Starting schedule loop")
        self.running = True
        
        while self.running:
            await self._sleep(self._seconds_until_next_tick())
            if not self.running:
                break
            try:
                await self.tick()
            except Exception as e:
                logger.error(f"Error in schedule loop: {e}", exc_info=True)
    
    def stop(self):
        self.running = False
        dropped = self.shutoffs.cancel_all()
        if dropped:
            logger.warning(f"Dropped {dropped} pending shutoff(s); those devices stay on")
        logger.info("Schedule loop stopped")
    
    async def tick(self, now: Optional[datetime] = None) -> List[Device]:
        """Run one match pass; returns the devices switched on.

        A minute already matched is skipped, so a wall clock that lags the
        loop timer cannot fire the same schedule entry twice.
        """
        now = now or self.clock()
        current_time = now.strftime("%H:%M")
        minute = now.strftime("%Y-%m-%d %H:%M")
        if minute == self._last_minute:
            logger.debug(f"Minute {current_time} already handled, skipping tick")
            return []
        
        schedules = await self.store.get(SCHEDULES_PATH) or {}
        if not isinstance(schedules, dict):
            logger.warning(f"Ignoring malformed schedules node: {schedules!r}")
            return []
        
        self._last_minute = minute
        
        actuated = []
        for kind in ScheduleKind:
            try:
                if await self._check_schedule(kind, schedules.get(kind.value), now, current_time):
                    actuated.append(kind.device)
            except Exception as e:
                logger.error(f"Error running {kind.value} schedule: {e}", exc_info=True)
        return actuated
    
    async def _check_schedule(self, kind: ScheduleKind, raw, now: datetime, current_time: str) -> bool:
        if not raw:
            return False
        try:
            schedule = Schedule.model_validate(raw)
        except ValidationError as e:
            logger.warning(f"Skipping invalid {kind.value} schedule {raw!r}: {e}")
            return False
        
        if not schedule.fires_at(current_time):
            return False
        
        device = kind.device
        logger.info(f"Starting scheduled {kind.value} at {current_time} for {schedule.duration}m")
        await self.store.set(child_path(DEVICE_STATUS_PATH, device.value), True)
        self.shutoffs.schedule(device, schedule.duration, now)
        return True
    
    def _seconds_until_next_tick(self) -> float:
        now = self.clock()
        offset = now.second + now.microsecond / 1_000_000
        return self.interval - offset % self.interval
