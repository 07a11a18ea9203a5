import logging

import pytest

from comdbg.core import setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


def test_setup_logging_writes_rotating_file(tmp_path, restore_root_logger):
    log_dir = tmp_path / "logs"
    logger = setup_logging("COMDBG", log_dir, "DEBUG")
    logging.getLogger("comdbg.serial.session").debug("RX COM1: 3 bytes")

    for handler in logging.getLogger().handlers:
        handler.flush()

    text = (log_dir / "comdbg.log").read_text(encoding="utf-8")
    assert logger.name == "COMDBG"
    assert "Logging to" in text
    assert "[MainThread]" in text
    assert "RX COM1: 3 bytes" in text


def test_console_level_is_independent_of_file_level(tmp_path, restore_root_logger):
    setup_logging("COMDBG", tmp_path, "DEBUG", console_level="warning")

    root = logging.getLogger()
    levels = {type(h).__name__: h.level for h in root.handlers}
    assert root.level == logging.DEBUG
    assert levels["RotatingFileHandler"] == logging.DEBUG
    assert levels["StreamHandler"] == logging.WARNING


def test_root_level_follows_most_verbose_handler(tmp_path, restore_root_logger):
    setup_logging("COMDBG", tmp_path, "ERROR", console_level="INFO")
    assert logging.getLogger().level == logging.INFO


def test_unknown_level_is_rejected(tmp_path, restore_root_logger):
    with pytest.raises(ValueError):
        setup_logging("COMDBG", tmp_path, "CHATTY")
