"""Hex text helpers for the send and receive views."""

from __future__ import annotations

import re

_SEPARATORS = re.compile(r"[\s,;|]+")


def _to_bytes(tok: str) -> bytes:
    tok = tok.strip()
    if tok.lower().startswith("0x"):
        tok = tok[2:]
    if not tok:
        raise ValueError("Empty hex token")
    if len(tok) % 2:
        if len(tok) == 1:
            tok = "0" + tok
        else:
            raise ValueError(f"Odd number of hex digits: {tok!r}")
    try:
        return bytes.fromhex(tok)
    except ValueError:
        raise ValueError(f"Invalid hex token: {tok!r}") from None


def parse_hex(text: str) -> bytes:
    """Parse hex text into bytes.

    Accepts tokens separated by whitespace, commas, semicolons or pipes,
    with an optional ``0x`` prefix. A token may hold several bytes run
    together (``0A1B``) or a single digit (``A`` -> ``0x0A``).

    Examples:
        '0A 1B ff' -> b'\\x0a\\x1b\\xff'
        '0x01,0x02' -> b'\\x01\\x02'
    """
    out = bytearray()
    for tok in _SEPARATORS.split(text.strip()):
        if tok:
            out += _to_bytes(tok)
    return bytes(out)


def format_hex(data: bytes) -> str:
    return " ".join(f"{b:02X}" for b in data)
