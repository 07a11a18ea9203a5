"""Observer interface for port session notifications.

A listener is any object implementing some of ``port_opened``,
``port_closed`` and ``data_received``. Notifications are delivered
synchronously on the thread that produced them; listeners that touch
GUI state must hand the work over to their own thread.
"""

from __future__ import annotations

import logging
import threading
from typing import List, Protocol, runtime_checkable

from .results import CloseResult, OpenResult, ReceivedDataEvent

logger = logging.getLogger(__name__)


@runtime_checkable
class SessionListener(Protocol):
    """Receives notifications from a :class:`PortSession`."""

    def port_opened(self, result: OpenResult) -> None: ...

    def port_closed(self, result: CloseResult) -> None: ...

    def data_received(self, event: ReceivedDataEvent) -> None: ...


class ListenerRegistry:
    """Thread-safe list of listeners with per-listener error isolation."""

    def __init__(self) -> None:
        self._listeners: List[object] = []
        self._lock = threading.Lock()

    def add(self, listener: object) -> None:
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def remove(self, listener: object) -> None:
        with self._lock:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

    def __len__(self) -> int:
        with self._lock:
            return len(self._listeners)

    def notify(self, method: str, payload: object) -> None:
        """Call ``method`` on every listener that implements it.

        Args:
            method: Listener method name.
            payload: Single argument passed to the method.
        """
        with self._lock:
            listeners = list(self._listeners)

        for listener in listeners:
            callback = getattr(listener, method, None)
            if callback is None:
                continue
            try:
                callback(payload)
            except Exception:
                logger.exception(f"Listener {listener!r} failed in {method}")
