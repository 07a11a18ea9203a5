"""COMDBG serial port debugging package."""

from .version import __version__, __version_info__, APP_NAME
from .core import (
    CloseResult,
    ConfigurationError,
    ErrorKind,
    OpenResult,
    ReceivedDataEvent,
    SessionListener,
)
from .serial import PortSession, PortSettings, SerialConfig, PortDiscovery

__all__ = [
    "__version__",
    "__version_info__",
    "APP_NAME",
    "CloseResult",
    "ConfigurationError",
    "ErrorKind",
    "OpenResult",
    "ReceivedDataEvent",
    "SessionListener",
    "PortSession",
    "PortSettings",
    "SerialConfig",
    "PortDiscovery",
]
