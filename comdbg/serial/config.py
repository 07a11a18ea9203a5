"""Serial port configuration for COMDBG."""

from __future__ import annotations


class SerialConfig:
    """Defaults and choice lists for serial port connections."""
    DEFAULT_BAUD = 9600
    DEFAULT_DATA_BITS = 8
    DEFAULT_STOP_BITS = "One"
    DEFAULT_PARITY = "None"
    DEFAULT_TIMEOUT = 1.0  # Read timeout (seconds); writes never time out

    BAUD_RATES = [
        "1200", "2400", "4800", "9600", "14400", "19200", "38400",
        "57600", "115200", "230400", "460800", "921600",
    ]
    DATA_BITS = ["5", "6", "7", "8"]
    STOP_BITS = ["One", "OnePointFive", "Two"]
    PARITIES = ["None", "Odd", "Even", "Mark", "Space"]

    POLL_INTERVAL = 0.01  # Watcher sleep between in_waiting checks (seconds)
    WATCHER_JOIN_TIMEOUT = None  # Wait for in-flight callbacks without limit
    CLOSE_WORKER_NAME = "port-close"
