"""Core server - webhook application plus the schedule loop"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .. import config
from ..services import (
    CommandDispatcher,
    FallbackService,
    FirebaseStateStore,
    MemoryStateStore,
    ScheduleService,
    StateStore,
    TwilioGateway,
    parse_command,
)
from . import routes

logger = logging.getLogger(__name__)


class GreenhouseServer:
    """Main server orchestrating the inbound message path and the scheduler"""
    
    def __init__(
        self,
        store: StateStore,
        gateway: TwilioGateway,
        fallback: FallbackService,
        schedules: ScheduleService = None,
        dispatcher: CommandDispatcher = None,
        run_scheduler: bool = True,
    ):
        logger.info("Initializing Smart Greenhouse server...")
        
        self.store = store
        self.gateway = gateway
        self.fallback = fallback
        self.dispatcher = dispatcher or CommandDispatcher(store, fallback)
        self.schedules = schedules or ScheduleService(store)
        self.run_scheduler = run_scheduler
        self._schedule_task: Optional[asyncio.Task] = None
        
        self._app = self._create_app()
        logger.info("Server initialized successfully")
    
    @property
    def app(self) -> FastAPI:
        return self._app
    
    @property
    def scheduler_running(self) -> bool:
        return self._schedule_task is not None and not self._schedule_task.done()
    
    async def handle_message(self, sender: str, text: str) -> Optional[str]:
        """Parse, dispatch and answer one inbound message.

        Returns the reply that was sent, or None when there was nothing to send.
        Store and gateway failures propagate to the caller.
        """
        logger.info(f"📩 Message from: {sender} -> {text}")
        
        command = parse_command(text)
        reply = await self.dispatcher.dispatch(command)
        
        if not reply or not reply.strip():
            logger.info("⚠ Nothing to send")
            return None
        
        await self.gateway.send(to=sender, body=reply)
        return reply
    
    async def start(self):
        """Connect the store and start the schedule loop"""
        logger.info("Starting Smart Greenhouse server...")
        await self.store.connect()
        if self.run_scheduler:
            self._schedule_task = asyncio.create_task(self.schedules.run_schedule_loop())
        logger.info("Server started successfully")
    
    async def stop(self):
        """Stop the schedule loop and release connections"""
        logger.info("Stopping Smart Greenhouse server...")
        
        self.schedules.stop()
        if self._schedule_task is not None:
            self._schedule_task.cancel()
            try:
                await self._schedule_task
            except asyncio.CancelledError:
                pass
            self._schedule_task = None
        
        for name, resource in (("fallback", self.fallback), ("gateway", self.gateway), ("store", self.store)):
            try:
                await resource.close()
            except Exception as e:
                logger.error(f"Error closing {name} during shutdown: {e}")
        
        logger.info("Server stopped")
    
    def _create_app(self) -> FastAPI:
        
        @asynccontextmanager
        async def lifespan(app: FastAPI):
            await self.start()
            yield
            await self.stop()
        
        app = FastAPI(
            title="Smart Greenhouse",
            description="WhatsApp command bot for greenhouse actuators",
            version="0.1.0",
            lifespan=lifespan,
        )
        app.state.server = self
        app.include_router(routes.router)
        return app


def create_server(run_scheduler: bool = True) -> GreenhouseServer:
    """Build the server with collaborators from configuration"""
    if config.SIMULATE_STATE_STORE:
        logger.info("[SIMULATION] Using in-memory state store")
        store = MemoryStateStore()
    else:
        store = FirebaseStateStore()
    
    return GreenhouseServer(
        store=store,
        gateway=TwilioGateway(),
        fallback=FallbackService(),
        run_scheduler=run_scheduler,
    )
