import threading
import time
from typing import List

import pytest
import serial

from comdbg.core import CloseResult, OpenResult, ReceivedDataEvent


class FakeSerial:
    """In-memory stand-in for an unopened pyserial handle."""

    def __init__(self, port: str):
        self.port = port
        self.is_open = False
        self.baudrate = None
        self.bytesize = None
        self.stopbits = None
        self.parity = None
        self.timeout = None

        self.open_error = None
        self.close_error = None
        self.write_error = None
        self.read_errors: List[Exception] = []
        self.close_gate = None

        self.written = bytearray()
        self.close_calls = 0
        self._rx = bytearray()
        self._lock = threading.Lock()

    def open(self):
        if self.open_error:
            raise self.open_error
        self.is_open = True

    def close(self):
        self.close_calls += 1
        if self.close_gate is not None:
            self.close_gate.wait(5)
        if self.close_error:
            raise self.close_error
        self.is_open = False

    def feed(self, data: bytes) -> None:
        """Simulate one driver-level chunk arriving."""
        with self._lock:
            self._rx += data

    @property
    def in_waiting(self) -> int:
        if not self.is_open:
            raise serial.PortNotOpenError()
        with self._lock:
            return len(self._rx)

    def read(self, size: int = 1) -> bytes:
        if self.read_errors:
            raise self.read_errors.pop(0)
        with self._lock:
            data = bytes(self._rx[:size])
            del self._rx[:size]
        return data

    def write(self, data: bytes) -> int:
        if self.write_error:
            raise self.write_error
        self.written += data
        return len(data)


class FakeFactory:
    """Serial factory handing out FakeSerial objects configured per test."""

    def __init__(self):
        self.handles: List[FakeSerial] = []
        self.open_error = None
        self.close_error = None
        self.write_error = None
        self.close_gate = None

    def __call__(self, port: str) -> FakeSerial:
        handle = FakeSerial(port)
        handle.open_error = self.open_error
        handle.close_error = self.close_error
        handle.write_error = self.write_error
        handle.close_gate = self.close_gate
        self.handles.append(handle)
        return handle

    @property
    def last(self) -> FakeSerial:
        return self.handles[-1]


class Collector:
    """Session listener recording every notification and its thread."""

    def __init__(self):
        self.opened: List[OpenResult] = []
        self.closed: List[CloseResult] = []
        self.received: List[ReceivedDataEvent] = []
        self.threads = {}
        self.closed_event = threading.Event()
        self.data_event = threading.Event()
        self._lock = threading.Lock()

    def port_opened(self, result):
        self.threads["opened"] = threading.current_thread().name
        self.opened.append(result)

    def port_closed(self, result):
        self.threads["closed"] = threading.current_thread().name
        self.closed.append(result)
        self.closed_event.set()

    def data_received(self, event):
        with self._lock:
            self.threads["data"] = threading.current_thread().name
            self.received.append(event)
        self.data_event.set()

    @property
    def payload(self) -> bytes:
        with self._lock:
            return b"".join(e.data for e in self.received)

    def wait_for_payload(self, size: int, timeout: float = 5.0) -> bytes:
        deadline = time.monotonic() + timeout
        while len(self.payload) < size and time.monotonic() < deadline:
            time.sleep(0.01)
        return self.payload


class _IdleWatcher:
    """Watcher replacement that never drains, for manual drain tests."""

    def __init__(self, session, poll_interval=None):
        self.started = False

    def start(self):
        self.started = True

    def stop(self, timeout=None):
        self.started = False


@pytest.fixture
def factory():
    return FakeFactory()


@pytest.fixture
def collector():
    return Collector()


@pytest.fixture
def session(factory, collector):
    from comdbg.serial import PortSession

    s = PortSession(serial_factory=factory, poll_interval=0.005)
    s.add_listener(collector)
    yield s
    s.shutdown()


@pytest.fixture
def idle_watcher(monkeypatch):
    monkeypatch.setattr("comdbg.serial.session.ReceiveWatcher", _IdleWatcher)


@pytest.fixture(scope="session")
def qt_app():
    from PySide6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    return app
