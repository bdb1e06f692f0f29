"""
Logging setup shared by every textmask module and the replay CLI.

All loggers are children of the "textmask" logger, which owns two handlers:
- logs/textmask.log receives every record from DEBUG up
- stdout receives INFO and up until set_console_level lowers it
"""
import logging
import os
import sys

ROOT_NAME = "textmask"

LOG_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "logs")
LOG_FILE = os.path.join(LOG_DIR, "textmask.log")

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(funcName)s() | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_console_handler = None


def _root_logger() -> logging.Logger:
    """Returns the "textmask" logger, attaching its handlers on first use."""
    global _console_handler
    root = logging.getLogger(ROOT_NAME)
    if _console_handler is not None:
        return root

    os.makedirs(LOG_DIR, exist_ok=True)
    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    file_handler = logging.FileHandler(LOG_FILE, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)

    _console_handler = logging.StreamHandler(sys.stdout)
    _console_handler.setLevel(logging.INFO)
    _console_handler.setFormatter(formatter)

    root.setLevel(logging.DEBUG)
    # Records stop here; a configured root logger would print them again
    root.propagate = False
    root.addHandler(file_handler)
    root.addHandler(_console_handler)
    return root


def get_logger(name: str) -> logging.Logger:
    """
    Returns the logger for `name` nested under "textmask".

    Module names inside the package are used as is; anything else is
    prefixed, so `main` logs as `textmask.main`.
    """
    _root_logger()
    if name != ROOT_NAME and not name.startswith(ROOT_NAME + "."):
        name = f"{ROOT_NAME}.{name}"
    return logging.getLogger(name)


def get_console_level() -> int:
    _root_logger()
    return _console_handler.level


def set_console_level(level: int) -> None:
    """Changes how much reaches stdout; the log file keeps everything."""
    _root_logger()
    _console_handler.setLevel(level)


def setup_exception_hook():
    """
    Routes uncaught exceptions through the log before the interpreter
    prints them. Ctrl+C is passed straight through.
    """
    crash_logger = get_logger("crash")

    def exception_hook(exc_type, exc_value, exc_tb):
        if not issubclass(exc_type, KeyboardInterrupt):
            crash_logger.critical("Uncaught exception", exc_info=(exc_type, exc_value, exc_tb))
        sys.__excepthook__(exc_type, exc_value, exc_tb)

    sys.excepthook = exception_hook
