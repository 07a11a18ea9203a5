from comdbg.core import CloseResult, ErrorKind, OpenResult, ReceivedDataEvent
from comdbg.serial import PortSession
from comdbg.ui.bridge import SessionSignals


def record(signal):
    values = []
    signal.connect(lambda value: values.append(value))
    return values


def test_failed_open_emits_flag_and_message(qt_app):
    bridge = SessionSignals()
    opened = record(bridge.opened)
    messages = record(bridge.message)

    bridge.port_opened(OpenResult(False, "COM9", ErrorKind.DEVICE_OPEN, "access denied"))

    assert opened == [False]
    assert messages == ["Cannot open COM9: access denied"]


def test_closed_signal_carries_legacy_flag(qt_app):
    bridge = SessionSignals()
    closed = record(bridge.closed)

    bridge.port_closed(CloseResult(True, "COM9"))
    bridge.port_closed(CloseResult(False, "COM9", ErrorKind.DEVICE_CLOSE, "gone"))

    assert closed == [False, True]


def test_received_signal_carries_bytes(qt_app):
    bridge = SessionSignals()
    received = record(bridge.received)

    bridge.data_received(ReceivedDataEvent(b"\x00abc", "COM9"))

    assert received == [b"\x00abc"]


def test_bridge_as_session_listener(qt_app, factory):
    bridge = SessionSignals()
    opened = record(bridge.opened)

    with PortSession(serial_factory=factory) as session:
        session.add_listener(bridge)
        session.configure_and_open("COM5", "9600", "8", "One", "None")

    assert opened == [True]
