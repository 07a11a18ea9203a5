"""Serial port discovery for the port picker."""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

from serial.tools import list_ports
from serial.tools.list_ports_common import ListPortInfo

logger = logging.getLogger(__name__)


class PortDiscovery:
    """Lists serial ports known to the OS.

    By default only USB-to-serial adapters and on-board UARTs are shown,
    since those are what a debugging session usually targets.
    """

    USB_MARKERS = ['USB', 'ACM', 'FTDI', 'CP210', 'CH340', 'PL2303']
    DEVICE_PATTERN = re.compile(r'ttyUSB|ttyACM|ttyAMA|cu\.usb|COM\d+', re.I)

    @classmethod
    def get_ports(cls, show_all: bool = False) -> List[Tuple[str, str]]:
        """Get available serial ports.

        Args:
            show_all: If True, returns all ports. If False, only USB-like devices.

        Returns:
            List of tuples (device_name, display_label)
        """
        result = []
        try:
            ports = list_ports.comports()
        except (TypeError, ValueError, OSError) as e:
            logger.warning(f"Error listing serial ports: {e}")
            return result

        for port in sorted(ports, key=lambda p: p.device):
            try:
                if show_all or cls._is_usb_device(port):
                    desc = port.description or port.hwid or 'Unknown'
                    result.append((port.device, f"{port.device} - {desc}"))
            except (TypeError, ValueError, AttributeError) as e:
                logger.warning(f"Skipping port {getattr(port, 'device', 'unknown')}: {e}")
        return result

    @classmethod
    def _is_usb_device(cls, port: ListPortInfo) -> bool:
        if getattr(port, 'vid', None) is not None:
            return True
        text = f"{port.description or ''} {port.hwid or ''}".upper()
        return any(m in text for m in cls.USB_MARKERS) or bool(cls.DEVICE_PATTERN.search(port.device))

    @staticmethod
    def list_ports() -> List[str]:
        """Get port device names (e.g. ['/dev/ttyUSB0', 'COM3'])."""
        try:
            return sorted(p.device for p in list_ports.comports())
        except (TypeError, ValueError, OSError) as e:
            logger.warning(f"Error listing serial ports: {e}")
            return []

    @staticmethod
    def get_port_info(port_name: str) -> Optional[ListPortInfo]:
        try:
            ports = list_ports.comports()
        except (TypeError, ValueError, OSError) as e:
            logger.warning(f"Error listing serial ports: {e}")
            return None
        for p in ports:
            if p.device == port_name:
                return p
        return None

    @classmethod
    def describe(cls, port_name: str) -> str:
        """Multi-line description of a port for tooltips.

        Falls back to the bare name for ports the OS does not list, such as
        pyserial URLs like loop://.
        """
        info = cls.get_port_info(port_name)
        if info is None:
            return port_name
        details = [
            getattr(info, "description", None),
            getattr(info, "manufacturer", None),
            getattr(info, "hwid", None),
        ]
        lines = [port_name] + [d for d in details if d and d != "n/a" and d != port_name]
        return "\n".join(lines)
