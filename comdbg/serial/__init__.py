"""Serial port session package for COMDBG."""

from .config import SerialConfig
from .settings import PortSettings
from .session import PortSession, default_serial_factory
from .watcher import ReceiveWatcher
from .discovery import PortDiscovery

__all__ = [
    "SerialConfig",
    "PortSettings",
    "PortSession",
    "default_serial_factory",
    "ReceiveWatcher",
    "PortDiscovery",
]
