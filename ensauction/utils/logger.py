"""
Logging for ensauction.

All loggers live under the "ensauction" namespace and write coloured lines
to stderr, keeping stdout free for command output. Submitted transactions
are logged at INFO by the ledger client; salts never are.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import colorlog

NAMESPACE = "ensauction"
LOG_FILE = "ensauction.log"

_FORMAT = "%(asctime)s [%(name)s] %(levelname)-8s %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"
_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}


def _console_handler() -> logging.Handler:
    handler = colorlog.StreamHandler(sys.stderr)
    handler.setFormatter(colorlog.ColoredFormatter(
        "%(log_color)s" + _FORMAT.replace("%(message)s", "%(reset)s%(message)s"),
        datefmt=_DATEFMT,
        log_colors=_COLORS,
    ))
    return handler


def _file_handler(log_dir: Optional[str]) -> logging.Handler:
    directory = Path(log_dir) if log_dir else Path.cwd()
    directory.mkdir(exist_ok=True, parents=True)
    handler = logging.FileHandler(directory / LOG_FILE)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATEFMT))
    return handler


class AuctionLogger:
    """Configures the ensauction logger tree once per process, unless forced."""

    _initialized = False

    @classmethod
    def setup(
        cls,
        level: int = logging.INFO,
        log_dir: Optional[str] = None,
        log_to_file: bool = False,
        force: bool = False,
    ):
        """
        Attach handlers to the ensauction logger.

        Args:
            level: Logging level for the tree and its handlers
            log_dir: Directory of ensauction.log (working directory if None)
            log_to_file: Also write plain lines to ensauction.log
            force: Replace an earlier configuration
        """
        if cls._initialized and not force:
            return

        root = logging.getLogger(NAMESPACE)
        root.setLevel(level)
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()

        handlers = [_console_handler()]
        if log_to_file:
            handlers.append(_file_handler(log_dir))
        for handler in handlers:
            handler.setLevel(level)
            root.addHandler(handler)

        cls._initialized = True

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Logger for a subsystem, e.g. 'state' or 'auction.sealer'."""
        if not cls._initialized:
            cls.setup()
        return logging.getLogger(f"{NAMESPACE}.{name}")


def get_logger(name: str) -> logging.Logger:
    return AuctionLogger.get_logger(name)


def setup_logging(
    level: int = logging.INFO,
    log_dir: Optional[str] = None,
    log_to_file: bool = False,
):
    """(Re)configure logging, e.g. from CLI flags and RegistrarConfig."""
    AuctionLogger.setup(level=level, log_dir=log_dir, log_to_file=log_to_file, force=True)
