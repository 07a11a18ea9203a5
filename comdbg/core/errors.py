"""Exception types raised by COMDBG."""

from __future__ import annotations


class ComDbgError(Exception):
    """Base class for COMDBG errors."""


class ConfigurationError(ComDbgError, ValueError):
    """Raised when a port setting string cannot be parsed."""
