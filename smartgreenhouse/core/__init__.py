"""Core package"""

from .server import GreenhouseServer, create_server

__all__ = ['GreenhouseServer', 'create_server']
