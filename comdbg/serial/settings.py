"""Parsing of the string-typed port parameters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Union

import serial

from ..core import ConfigurationError

# Classic names (case-insensitive) and pyserial values both map to pyserial constants
_STOP_BITS: Dict[str, float] = {
    "one": serial.STOPBITS_ONE,
    "onepointfive": serial.STOPBITS_ONE_POINT_FIVE,
    "two": serial.STOPBITS_TWO,
    "1": serial.STOPBITS_ONE,
    "1.5": serial.STOPBITS_ONE_POINT_FIVE,
    "2": serial.STOPBITS_TWO,
}

_PARITIES: Dict[str, str] = {
    "none": serial.PARITY_NONE,
    "odd": serial.PARITY_ODD,
    "even": serial.PARITY_EVEN,
    "mark": serial.PARITY_MARK,
    "space": serial.PARITY_SPACE,
    "n": serial.PARITY_NONE,
    "o": serial.PARITY_ODD,
    "e": serial.PARITY_EVEN,
    "m": serial.PARITY_MARK,
    "s": serial.PARITY_SPACE,
}


@dataclass(frozen=True)
class PortSettings:
    """Port parameters converted to pyserial values."""
    port: str
    baudrate: int
    bytesize: int
    stopbits: Union[int, float]
    parity: str

    @staticmethod
    def parse_int(value: str, name: str) -> int:
        try:
            return int(str(value).strip())
        except (TypeError, ValueError):
            raise ConfigurationError(f"Invalid {name}: {value!r}") from None

    @staticmethod
    def parse_stop_bits(value: str) -> Union[int, float]:
        """Look up stop bits by name ('One', 'Two', ...) or value ('1', '1.5', '2')."""
        try:
            return _STOP_BITS[str(value).strip().lower()]
        except KeyError:
            raise ConfigurationError(f"Invalid stop bits: {value!r}") from None

    @staticmethod
    def parse_parity(value: str) -> str:
        """Look up parity by name ('None', 'Even', ...) or pyserial letter ('N', 'E', ...)."""
        try:
            return _PARITIES[str(value).strip().lower()]
        except KeyError:
            raise ConfigurationError(f"Invalid parity: {value!r}") from None

    @classmethod
    def from_strings(cls, port: str, baud_rate: str, data_bits: str,
                     stop_bits: str, parity: str) -> 'PortSettings':
        """Build settings from the five string parameters of an open request.

        Raises:
            ConfigurationError: If any value cannot be parsed or is out of range.
        """
        if not port:
            raise ConfigurationError("Port name is empty")

        baudrate = cls.parse_int(baud_rate, "baud rate")
        if baudrate <= 0:
            raise ConfigurationError(f"Invalid baud rate: {baud_rate!r}")

        bytesize = cls.parse_int(data_bits, "data bits")
        if bytesize not in serial.Serial.BYTESIZES:
            raise ConfigurationError(f"Invalid data bits: {data_bits!r}")

        return cls(
            port=port,
            baudrate=baudrate,
            bytesize=bytesize,
            stopbits=cls.parse_stop_bits(stop_bits),
            parity=cls.parse_parity(parity),
        )

    def apply(self, handle: serial.SerialBase) -> None:
        """Copy these settings onto an unopened pyserial handle."""
        handle.baudrate = self.baudrate
        handle.bytesize = self.bytesize
        handle.stopbits = self.stopbits
        handle.parity = self.parity
