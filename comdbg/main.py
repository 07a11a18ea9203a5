import argparse
import sys
from pathlib import Path
from typing import List, Optional

from PySide6 import QtWidgets

from comdbg.core import setup_logging
from comdbg.ui.main_window import MainWindow
from comdbg.version import APP_NAME


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="comdbg", description="Serial port debugging tool")
    parser.add_argument("--log-level", default="INFO",
                        choices=("DEBUG", "INFO", "WARNING", "ERROR"))
    parser.add_argument("--console-level", default=None,
                        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
                        help="console log level, defaults to --log-level")
    parser.add_argument("--log-dir", type=Path, default=Path.home() / ".comdbg" / "logs")
    # Qt consumes its own arguments (-style, -platform, ...)
    args, _ = parser.parse_known_args(argv)
    return args


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logger = setup_logging(APP_NAME, args.log_dir, args.log_level, args.console_level)

    app = QtWidgets.QApplication(sys.argv)
    app.setApplicationName(APP_NAME)

    win = MainWindow()
    win.show()

    try:
        return app.exec()
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        raise


if __name__ == '__main__':
    sys.exit(main())
