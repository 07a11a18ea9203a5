"""Result and event values passed to session listeners."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional


class ErrorKind(enum.Enum):
    """Where an operation on the port failed."""
    CONFIGURATION = "configuration"
    DEVICE_OPEN = "device_open"
    DEVICE_CLOSE = "device_close"


@dataclass(frozen=True)
class OpenResult:
    """Outcome of one open attempt."""
    success: bool
    port: str = ""
    error: Optional[ErrorKind] = None
    message: str = ""

    @property
    def is_opened(self) -> bool:
        return self.success


@dataclass(frozen=True)
class CloseResult:
    """Outcome of one close request."""
    success: bool
    port: str = ""
    error: Optional[ErrorKind] = None
    message: str = ""

    @property
    def is_opened(self) -> bool:
        """Legacy flag: True when the close failed and the port may still be open."""
        return not self.success


@dataclass(frozen=True)
class ReceivedDataEvent:
    """One chunk of bytes drained from the port."""
    data: bytes
    port: str = ""

    def __len__(self) -> int:
        return len(self.data)
