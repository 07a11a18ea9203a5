"""Qt adapter that turns session notifications into signals.

Session notifications arrive on the watcher and close-worker threads. This
object lives on the GUI thread, so widgets connected to its signals are
called through Qt's queued connections instead of from those threads.
"""

from __future__ import annotations

from PySide6 import QtCore

from ..core import CloseResult, OpenResult, ReceivedDataEvent


class SessionSignals(QtCore.QObject):
    """Session listener re-emitting notifications as Qt signals.

    Signals:
        opened: True when the port opened.
        closed: Legacy "still open" flag; False after a clean close.
        received: Raw bytes of one drained chunk.
        message: Human readable failure description.
    """

    opened = QtCore.Signal(bool)
    closed = QtCore.Signal(bool)
    received = QtCore.Signal(object)
    message = QtCore.Signal(str)

    def port_opened(self, result: OpenResult) -> None:
        if not result.success:
            self.message.emit(f"Cannot open {result.port}: {result.message}")
        self.opened.emit(result.success)

    def port_closed(self, result: CloseResult) -> None:
        if not result.success:
            self.message.emit(f"Error closing {result.port}: {result.message}")
        self.closed.emit(result.is_opened)

    def data_received(self, event: ReceivedDataEvent) -> None:
        self.received.emit(event.data)
