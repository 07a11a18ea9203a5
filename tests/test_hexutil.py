import pytest

from comdbg.core import format_hex, parse_hex


def test_format_hex():
    assert format_hex(b"\x0a\x1b\xff") == "0A 1B FF"
    assert format_hex(b"") == ""


def test_parse_hex_separators():
    assert parse_hex("0a 1b ff") == b"\x0a\x1b\xff"
    assert parse_hex("0x01,0x02; 03 | 04") == b"\x01\x02\x03\x04"
    assert parse_hex("  \n") == b""


def test_parse_hex_run_together_and_single_digit():
    assert parse_hex("0A1B2C") == b"\x0a\x1b\x2c"
    assert parse_hex("A 5") == b"\x0a\x05"


@pytest.mark.parametrize("text", ["zz", "123", "0x", "0a 1g"])
def test_parse_hex_invalid(text):
    with pytest.raises(ValueError):
        parse_hex(text)
