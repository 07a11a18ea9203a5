"""Main window for COMDBG.

Port settings bar, receive view and send bar around a single
:class:`PortSession`.
"""

from __future__ import annotations

import logging
from typing import Optional

from PySide6 import QtCore, QtGui, QtWidgets

from ..core import format_hex, parse_hex
from ..serial import PortDiscovery, PortSession, SerialConfig
from ..version import __version__, APP_NAME
from .bridge import SessionSignals

logger = logging.getLogger(__name__)


class MainWindow(QtWidgets.QMainWindow):
    """Main application window."""

    LINE_ENDINGS = {
        "None": b"",
        "LF": b"\n",
        "CR": b"\r",
        "CRLF": b"\r\n",
    }

    def __init__(self, session: Optional[PortSession] = None):
        super().__init__()
        self._init_state(session)
        self._setup_ui()
        self._connect_signals()
        self._refresh_ports()
        self._set_connected(False)

    def _init_state(self, session: Optional[PortSession]) -> None:
        self.session = session or PortSession()
        self.signals = SessionSignals(self)
        self.session.add_listener(self.signals)

        self._rx_count = 0
        self._tx_count = 0
        self._busy = False  # open or close request in flight

    def _setup_ui(self) -> None:
        self.setWindowTitle(f"{APP_NAME} v{__version__}")
        self.setMinimumSize(800, 560)

        central = QtWidgets.QWidget()
        self.setCentralWidget(central)

        main_layout = QtWidgets.QVBoxLayout(central)
        main_layout.setContentsMargins(12, 12, 12, 12)
        main_layout.setSpacing(8)

        self._create_connection_bar(main_layout)
        self._create_receive_view(main_layout)
        self._create_send_bar(main_layout)
        self._create_status_bar()

    def _create_connection_bar(self, parent: QtWidgets.QVBoxLayout) -> None:
        frame = QtWidgets.QFrame()
        layout = QtWidgets.QHBoxLayout(frame)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(6)

        layout.addWidget(QtWidgets.QLabel("Port:"))
        self.port_combo = QtWidgets.QComboBox()
        self.port_combo.setEditable(True)
        self.port_combo.setMinimumWidth(220)
        layout.addWidget(self.port_combo)

        self.refresh_btn = QtWidgets.QPushButton("Refresh")
        layout.addWidget(self.refresh_btn)

        self.show_all_cb = QtWidgets.QCheckBox("Show all")
        layout.addWidget(self.show_all_cb)

        self.baud_combo = self._add_choice(layout, "Baud:", SerialConfig.BAUD_RATES,
                                           str(SerialConfig.DEFAULT_BAUD), editable=True)
        self.data_bits_combo = self._add_choice(layout, "Data:", SerialConfig.DATA_BITS,
                                                str(SerialConfig.DEFAULT_DATA_BITS))
        self.stop_bits_combo = self._add_choice(layout, "Stop:", SerialConfig.STOP_BITS,
                                                SerialConfig.DEFAULT_STOP_BITS)
        self.parity_combo = self._add_choice(layout, "Parity:", SerialConfig.PARITIES,
                                             SerialConfig.DEFAULT_PARITY)

        layout.addStretch()

        self.open_btn = QtWidgets.QPushButton("Open")
        self.open_btn.setMinimumWidth(90)
        layout.addWidget(self.open_btn)

        parent.addWidget(frame)

    @staticmethod
    def _add_choice(layout: QtWidgets.QHBoxLayout, label: str, items, current: str,
                    editable: bool = False) -> QtWidgets.QComboBox:
        layout.addWidget(QtWidgets.QLabel(label))
        combo = QtWidgets.QComboBox()
        combo.addItems(items)
        combo.setEditable(editable)
        combo.setCurrentText(current)
        layout.addWidget(combo)
        return combo

    def _create_receive_view(self, parent: QtWidgets.QVBoxLayout) -> None:
        self.receive_view = QtWidgets.QPlainTextEdit()
        self.receive_view.setReadOnly(True)
        self.receive_view.setFont(QtGui.QFontDatabase.systemFont(QtGui.QFontDatabase.FixedFont))
        parent.addWidget(self.receive_view, stretch=1)

        options = QtWidgets.QHBoxLayout()
        self.rx_hex_cb = QtWidgets.QCheckBox("Show hex")
        options.addWidget(self.rx_hex_cb)
        options.addStretch()
        self.clear_btn = QtWidgets.QPushButton("Clear")
        options.addWidget(self.clear_btn)
        parent.addLayout(options)

    def _create_send_bar(self, parent: QtWidgets.QVBoxLayout) -> None:
        layout = QtWidgets.QHBoxLayout()

        self.send_edit = QtWidgets.QLineEdit()
        self.send_edit.setPlaceholderText("Text to send")
        layout.addWidget(self.send_edit, stretch=1)

        self.tx_hex_cb = QtWidgets.QCheckBox("Hex")
        layout.addWidget(self.tx_hex_cb)

        layout.addWidget(QtWidgets.QLabel("Line end:"))
        self.line_end_combo = QtWidgets.QComboBox()
        self.line_end_combo.addItems(list(self.LINE_ENDINGS))
        layout.addWidget(self.line_end_combo)

        self.send_btn = QtWidgets.QPushButton("Send")
        self.send_btn.setMinimumWidth(90)
        layout.addWidget(self.send_btn)

        parent.addLayout(layout)

    def _create_status_bar(self) -> None:
        self.status_label = QtWidgets.QLabel("Closed")
        self.counter_label = QtWidgets.QLabel()
        self.statusBar().addWidget(self.status_label, 1)
        self.statusBar().addPermanentWidget(self.counter_label)
        self._update_counters()

    def _connect_signals(self) -> None:
        self.refresh_btn.clicked.connect(self._refresh_ports)
        self.show_all_cb.stateChanged.connect(self._refresh_ports)
        self.port_combo.currentIndexChanged.connect(self._update_port_tooltip)
        self.open_btn.clicked.connect(self._toggle_connection)
        self.send_btn.clicked.connect(self._send)
        self.send_edit.returnPressed.connect(self._send)
        self.clear_btn.clicked.connect(self._clear)

        self.signals.opened.connect(self._on_opened, QtCore.Qt.QueuedConnection)
        self.signals.closed.connect(self._on_closed, QtCore.Qt.QueuedConnection)
        self.signals.received.connect(self._on_received, QtCore.Qt.QueuedConnection)
        self.signals.message.connect(self._show_message, QtCore.Qt.QueuedConnection)

    # -------------------------------------------------------------------------
    # Connection
    # -------------------------------------------------------------------------

    def _refresh_ports(self) -> None:
        current = self._selected_port() if self.port_combo.count() else self.port_combo.currentText()
        self.port_combo.clear()
        for device, label in PortDiscovery.get_ports(self.show_all_cb.isChecked()):
            self.port_combo.addItem(label, device)
        if current:
            index = self.port_combo.findData(current)
            if index >= 0:
                self.port_combo.setCurrentIndex(index)
            else:
                self.port_combo.setEditText(current)

    def _update_port_tooltip(self) -> None:
        port = self._selected_port()
        self.port_combo.setToolTip(PortDiscovery.describe(port) if port else "")

    def _selected_port(self) -> str:
        index = self.port_combo.currentIndex()
        if index >= 0 and self.port_combo.itemText(index) == self.port_combo.currentText():
            return self.port_combo.itemData(index)
        # Typed by hand, e.g. loop:// or a port the OS does not list
        return self.port_combo.currentText().strip()

    def _toggle_connection(self) -> None:
        if self._busy:
            return
        if self.session.is_open:
            self._busy = True
            self.open_btn.setEnabled(False)
            self.status_label.setText(f"Closing {self.session.port_name}...")
            self.session.close()
        else:
            port = self._selected_port()
            if not port:
                QtWidgets.QMessageBox.warning(self, "Error", "Select a serial port first.")
                return
            self.session.configure_and_open(
                port,
                self.baud_combo.currentText(),
                self.data_bits_combo.currentText(),
                self.stop_bits_combo.currentText(),
                self.parity_combo.currentText(),
            )

    def _on_opened(self, is_opened: bool) -> None:
        self._busy = False
        self._set_connected(is_opened)

    def _on_closed(self, still_open: bool) -> None:
        self._busy = False
        self._set_connected(self.session.is_open)
        if still_open:
            logger.warning("Close reported failure")

    def _set_connected(self, connected: bool) -> None:
        self.open_btn.setEnabled(True)
        self.open_btn.setText("Close" if connected else "Open")
        for widget in (self.port_combo, self.refresh_btn, self.show_all_cb, self.baud_combo,
                       self.data_bits_combo, self.stop_bits_combo, self.parity_combo):
            widget.setEnabled(not connected)
        self.send_btn.setEnabled(connected)

        if connected:
            s = self.session.settings
            self.status_label.setText(
                f"Open: {s.port} {s.baudrate} {s.bytesize}{s.parity}{s.stopbits}"
            )
        else:
            self.status_label.setText("Closed")

    # -------------------------------------------------------------------------
    # Data
    # -------------------------------------------------------------------------

    def _send(self) -> None:
        if not self.session.is_open:
            return

        text = self.send_edit.text()
        try:
            if self.tx_hex_cb.isChecked():
                payload = parse_hex(text)
            else:
                payload = text.encode("utf-8")
        except ValueError as e:
            self._show_message(str(e))
            return

        payload += self.LINE_ENDINGS[self.line_end_combo.currentText()]
        if not payload:
            return

        try:
            self.session.send(payload)
        except Exception as e:
            self._show_message(f"Send failed: {e}")
            return

        self._tx_count += len(payload)
        self._update_counters()

    def _on_received(self, data: bytes) -> None:
        self._rx_count += len(data)
        self._update_counters()

        if self.rx_hex_cb.isChecked():
            text = format_hex(data) + " "
        else:
            text = data.decode("utf-8", errors="replace")

        cursor = self.receive_view.textCursor()
        cursor.movePosition(QtGui.QTextCursor.End)
        cursor.insertText(text)
        self.receive_view.setTextCursor(cursor)
        self.receive_view.ensureCursorVisible()

    def _clear(self) -> None:
        self.receive_view.clear()
        self._rx_count = 0
        self._tx_count = 0
        self._update_counters()

    def _update_counters(self) -> None:
        self.counter_label.setText(f"RX: {self._rx_count}  TX: {self._tx_count}")

    def _show_message(self, text: str) -> None:
        self.statusBar().showMessage(text, 5000)

    # -------------------------------------------------------------------------
    # Cleanup
    # -------------------------------------------------------------------------

    def closeEvent(self, event: QtGui.QCloseEvent) -> None:
        self.session.remove_listener(self.signals)
        self.session.shutdown()
        event.accept()
