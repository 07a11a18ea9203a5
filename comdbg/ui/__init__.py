"""UI package for COMDBG."""

from .bridge import SessionSignals
from .main_window import MainWindow

__all__ = [
    "SessionSignals",
    "MainWindow",
]
