"""
Logger Configuration
Modules log through ``logging.getLogger(__name__)``; entrypoints attach Rich handlers here.
"""
import logging
from pathlib import Path
from typing import Iterable, Optional

from rich.console import Console
from rich.logging import RichHandler


PACKAGE_LOGGERS = ("civicfeed", "config", "intelligence", "posts", "ranking", "webapp")

FILE_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"

LOG_DIR = Path(__file__).resolve().parent.parent / "logs"

_console = Console(stderr=True)


def setup_logger(name: str, level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach a Rich console handler (and optionally a file under ``logs/``) to ``name``.

    Calling it again only updates the level, so handlers are never duplicated.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    console = RichHandler(console=_console, show_path=False, rich_tracebacks=True)
    console.setFormatter(logging.Formatter("%(message)s"))
    console.setLevel(level)
    logger.addHandler(console)

    if log_file:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(LOG_DIR / log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        file_handler.setLevel(level)
        logger.addHandler(file_handler)

    return logger


def configure_logging(
    verbose: bool = False,
    log_file: Optional[str] = None,
    names: Iterable[str] = PACKAGE_LOGGERS,
) -> None:
    """Configure every package logger at DEBUG (``verbose``) or INFO."""
    level = logging.DEBUG if verbose else logging.INFO
    for name in names:
        setup_logger(name, level=level, log_file=log_file)
