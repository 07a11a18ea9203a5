"""Background thread that stands in for a data-arrived driver callback."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Optional

from .config import SerialConfig

if TYPE_CHECKING:
    from .session import PortSession

logger = logging.getLogger(__name__)


class ReceiveWatcher(threading.Thread):
    """Waits for unread bytes and drains them on its own thread.

    pyserial has no data-arrived event, so one watcher is started per open
    handle. Every data-received notification of a session is delivered on
    this thread, never on the caller's.
    """

    def __init__(self, session: PortSession, poll_interval: float = SerialConfig.POLL_INTERVAL):
        super().__init__(name=f"port-watch-{session.port_name}", daemon=True)
        self._session = session
        self._poll_interval = poll_interval
        self._stopped = threading.Event()

    def run(self) -> None:
        while not self._stopped.is_set() and self._session.is_open:
            try:
                pending = self._session.bytes_available()
            except Exception as e:
                if self._session.is_open:
                    logger.warning(f"Watcher for {self._session.port_name} stopped: {e}")
                break

            if pending > 0:
                self._session.drain_and_dispatch()
            else:
                self._stopped.wait(self._poll_interval)

        logger.debug(f"Watcher for {self._session.port_name} exited")

    def stop(self, timeout: Optional[float] = SerialConfig.WATCHER_JOIN_TIMEOUT) -> None:
        """Ask the thread to exit and wait for any in-flight callback.

        Does not join when called from the watcher itself, e.g. when a
        data-received listener reopens the port.
        """
        self._stopped.set()
        if self.is_alive() and threading.current_thread() is not self:
            self.join(timeout)
