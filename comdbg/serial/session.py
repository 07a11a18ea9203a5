"""Serial port session: open, close, send and received-data notifications.

Notifications are delivered synchronously on the thread that produced them:

- ``port_opened`` on the thread calling :meth:`PortSession.configure_and_open`
- ``port_closed`` on the dedicated close worker
- ``data_received`` on the session's :class:`ReceiveWatcher`

Closing runs on its own worker so a GUI thread never blocks inside the OS
close call. That call waits for in-flight data-received callbacks, and a
callback that synchronously re-enters the GUI thread would otherwise
deadlock against it.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, NamedTuple, Optional, Union

import serial

from ..core import (
    CloseResult,
    ConfigurationError,
    ErrorKind,
    ListenerRegistry,
    OpenResult,
    ReceivedDataEvent,
)
from .config import SerialConfig
from .settings import PortSettings
from .watcher import ReceiveWatcher

logger = logging.getLogger(__name__)

SerialFactory = Callable[[str], serial.SerialBase]


def default_serial_factory(port: str) -> serial.SerialBase:
    """Create an unopened handle; pyserial URLs such as ``loop://`` are accepted."""
    return serial.serial_for_url(port, do_not_open=True)


class _Detached(NamedTuple):
    port: str
    handle: Optional[serial.SerialBase]
    watcher: Optional[ReceiveWatcher]


class PortSession:
    """Owns at most one serial handle and notifies listeners of its life cycle.

    Invariant: a handle is held if and only if :attr:`is_open` is True.
    """

    def __init__(self, serial_factory: Optional[SerialFactory] = None,
                 poll_interval: float = SerialConfig.POLL_INTERVAL):
        self._serial_factory = serial_factory or default_serial_factory
        self._poll_interval = poll_interval
        self._listeners = ListenerRegistry()

        self._lock = threading.RLock()  # guards handle transitions
        self._open = threading.Event()  # "still open" flag read without the lock
        self._handle: Optional[serial.SerialBase] = None
        self._watcher: Optional[ReceiveWatcher] = None
        self._settings: Optional[PortSettings] = None

        self._closer = ThreadPoolExecutor(
            max_workers=1,
            thread_name_prefix=SerialConfig.CLOSE_WORKER_NAME,
        )
        self._shut_down = False

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self._open.is_set()

    @property
    def settings(self) -> Optional[PortSettings]:
        """Settings of the last successful open."""
        return self._settings

    @property
    def port_name(self) -> str:
        return self._settings.port if self._settings else ""

    @property
    def baud_rate(self) -> Optional[int]:
        return self._settings.baudrate if self._settings else None

    @property
    def data_bits(self) -> Optional[int]:
        return self._settings.bytesize if self._settings else None

    @property
    def stop_bits(self) -> Optional[Union[int, float]]:
        return self._settings.stopbits if self._settings else None

    @property
    def parity(self) -> Optional[str]:
        return self._settings.parity if self._settings else None

    # -------------------------------------------------------------------------
    # Listeners
    # -------------------------------------------------------------------------

    def add_listener(self, listener: object) -> None:
        """Register an object implementing any of the SessionListener methods."""
        self._listeners.add(listener)

    def remove_listener(self, listener: object) -> None:
        self._listeners.remove(listener)

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def configure_and_open(self, port_name: str, baud_rate: str, data_bits: str,
                           stop_bits: str, parity: str) -> OpenResult:
        """Apply the five settings and open the port.

        An already open port is closed first, synchronously on this thread.
        Failures are not raised: they are reported through the returned
        result and the ``port_opened`` notification. A session that has
        been shut down refuses to open.
        """
        if self._shut_down:
            logger.warning(f"Cannot open {port_name}: session shut down")
            result = OpenResult(False, port_name, ErrorKind.DEVICE_OPEN, "Session shut down")
            self._listeners.notify("port_opened", result)
            return result

        with self._lock:
            previous = self._detach()
        if previous.handle is not None:
            self._release(previous)

        try:
            settings = PortSettings.from_strings(port_name, baud_rate, data_bits, stop_bits, parity)
        except ConfigurationError as e:
            logger.warning(f"Cannot open {port_name}: {e}")
            result = OpenResult(False, port_name, ErrorKind.CONFIGURATION, str(e))
        else:
            with self._lock:
                result = self._open_handle(settings)

        self._listeners.notify("port_opened", result)
        return result

    def send(self, data: bytes) -> None:
        """Write the whole buffer to the port.

        Does nothing while the port is closed. Write errors are logged and
        propagate to the caller.
        """
        handle = self._handle
        if handle is None or not self._open.is_set():
            return

        try:
            handle.write(bytes(data))
        except Exception as e:
            logger.error(f"Write to {self.port_name} failed: {e}")
            raise
        logger.debug(f"TX {self.port_name}: {len(data)} bytes")

    def close(self) -> Future:
        """Close the port on the close worker and return immediately.

        Returns:
            Future resolving to the :class:`CloseResult` that is also sent
            to ``port_closed`` listeners.
        """
        if self._shut_down:
            future: Future = Future()
            future.set_result(CloseResult(True, self.port_name, message="Session shut down"))
            return future
        return self._closer.submit(self._close_worker)

    def shutdown(self) -> None:
        """Close the port synchronously and stop the close worker."""
        if self._shut_down:
            return
        self._shut_down = True
        self._closer.shutdown(wait=True)

        with self._lock:
            detached = self._detach()
        if detached.handle is not None:
            self._listeners.notify("port_closed", self._release(detached))

    def __enter__(self) -> 'PortSession':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()

    # -------------------------------------------------------------------------
    # Receive path
    # -------------------------------------------------------------------------

    def bytes_available(self) -> int:
        """Number of unread bytes buffered by the driver (0 when closed)."""
        handle = self._handle
        if handle is None:
            return 0
        return handle.in_waiting

    def drain_and_dispatch(self) -> int:
        """Read everything currently buffered and notify ``data_received``.

        Each read becomes one notification, in stream order. Read errors are
        treated as an empty read.

        Returns:
            Number of notifications sent.
        """
        handle = self._handle
        port = self.port_name
        sent = 0

        while handle is not None and self._open.is_set() and self._pending(handle) > 0:
            data = b""
            try:
                data = handle.read(handle.in_waiting)
            except Exception as e:
                logger.debug(f"Read from {port} failed: {e}")

            if data:
                logger.debug(f"RX {port}: {len(data)} bytes")
                self._listeners.notify("data_received", ReceivedDataEvent(bytes(data), port))
                sent += 1

        return sent

    @staticmethod
    def _pending(handle: serial.SerialBase) -> int:
        try:
            return handle.in_waiting
        except Exception:
            return 0

    # -------------------------------------------------------------------------
    # Handle transitions
    # -------------------------------------------------------------------------

    def _open_handle(self, settings: PortSettings) -> OpenResult:
        handle = None
        try:
            handle = self._serial_factory(settings.port)
            settings.apply(handle)
            handle.timeout = SerialConfig.DEFAULT_TIMEOUT
            handle.open()
        except Exception as e:
            logger.warning(f"Cannot open {settings.port}: {e}")
            if handle is not None and handle.is_open:
                handle.close()
            return OpenResult(False, settings.port, ErrorKind.DEVICE_OPEN, str(e))

        self._handle = handle
        self._settings = settings
        self._open.set()
        self._watcher = ReceiveWatcher(self, self._poll_interval)
        self._watcher.start()

        logger.info(
            f"Opened {settings.port} at {settings.baudrate} baud "
            f"({settings.bytesize}{settings.parity}{settings.stopbits})"
        )
        return OpenResult(True, settings.port)

    def _detach(self) -> _Detached:
        """Take the handle and watcher out of the session. Call with the lock held."""
        detached = _Detached(self.port_name, self._handle, self._watcher)
        self._open.clear()
        self._handle = None
        self._watcher = None
        return detached

    def _release(self, detached: _Detached) -> CloseResult:
        """Wait for the watcher, then close the detached handle."""
        if detached.watcher is not None:
            detached.watcher.stop(SerialConfig.WATCHER_JOIN_TIMEOUT)

        if detached.handle is None:
            return CloseResult(True, detached.port, message="Port already closed")

        try:
            detached.handle.close()
        except Exception as e:
            logger.warning(f"Error closing {detached.port}: {e}")
            return CloseResult(False, detached.port, ErrorKind.DEVICE_CLOSE, str(e))

        logger.info(f"Closed {detached.port}")
        return CloseResult(True, detached.port)

    def _close_worker(self) -> CloseResult:
        with self._lock:
            detached = self._detach()
        result = self._release(detached)
        self._listeners.notify("port_closed", result)
        return result
