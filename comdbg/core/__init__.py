"""Core types shared by the serial session and the UI."""

from .errors import ComDbgError, ConfigurationError
from .results import CloseResult, ErrorKind, OpenResult, ReceivedDataEvent
from .listener import ListenerRegistry, SessionListener
from .hexutil import format_hex, parse_hex
from .logger import setup_logging

__all__ = [
    'ComDbgError',
    'ConfigurationError',
    'CloseResult',
    'ErrorKind',
    'OpenResult',
    'ReceivedDataEvent',
    'ListenerRegistry',
    'SessionListener',
    'format_hex',
    'parse_hex',
    'setup_logging',
]
