"""Services package"""

from .state_store import StateStore, MemoryStateStore
from .firebase_service import FirebaseStateStore
from .command_parser import parse_command
from .command_dispatcher import CommandDispatcher
from .reply_composer import ReplyComposer
from .fallback_service import FallbackService, FallbackServiceError, FallbackQuotaExceeded
from .messaging_gateway import TwilioGateway, MessagingGatewayError
from .schedule_service import ScheduleService, ShutoffTimer, PendingShutoff

__all__ = [
    'StateStore',
    'MemoryStateStore',
    'FirebaseStateStore',
    'parse_command',
    'CommandDispatcher',
    'ReplyComposer',
    'FallbackService',
    'FallbackServiceError',
    'FallbackQuotaExceeded',
    'TwilioGateway',
    'MessagingGatewayError',
    'ScheduleService',
    'ShutoffTimer',
    'PendingShutoff',
]
