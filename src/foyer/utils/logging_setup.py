"""
Foyer Planner Logging Infrastructure
====================================
Console and rotating-file logging for the `foyer` logger tree.

Levels:
    TRACE (5): Engine entry points, slot matches
    DEBUG (10): Pass details, per-day misses
    INFO (20): Grid size, placement totals
    WARNING (30): Failed placements, suspicious input
    ERROR (40): Exceptions escaping an engine entry point

Library modules only call `get_logger`; handlers are attached by the CLI
through `setup_logging`.
"""
import functools
import logging
import sys
import time
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Callable, Optional

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

ROOT_LOGGER = "foyer"


class ColoredFormatter(logging.Formatter):
    """Colors the level name only, so messages stay greppable."""

    LEVEL_COLORS = {
        TRACE: "90",
        logging.DEBUG: "36",
        logging.INFO: "32",
        logging.WARNING: "33",
        logging.ERROR: "31",
        logging.CRITICAL: "35",
    }

    def __init__(self, fmt: str, datefmt: Optional[str] = None, use_color: bool = True):
        super().__init__(fmt, datefmt)
        self.use_color = use_color

    def format(self, record):
        if not self.use_color or record.levelno not in self.LEVEL_COLORS:
            return super().format(record)
        plain = record.levelname
        record.levelname = f"\033[{self.LEVEL_COLORS[record.levelno]}m{plain:<7}\033[0m"
        try:
            return super().format(record)
        finally:
            record.levelname = plain


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    max_bytes: int = 2 * 1024 * 1024,
    backup_count: int = 3,
) -> logging.Logger:
    """
    Attach a stderr handler, and optionally a rotating file handler, to the
    `foyer` logger. Calling it again replaces the previous handlers.

    Args:
        level: Level name for both handlers ("TRACE" accepted)
        log_file: Log file path, parent directories are created (None = console only)
        max_bytes: Rotation size of the log file
        backup_count: Rotated files kept

    Returns:
        The `foyer` logger
    """
    threshold = logging.getLevelName(level.upper())
    if not isinstance(threshold, int):
        threshold = logging.INFO

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(TRACE)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(threshold)
    console.setFormatter(ColoredFormatter(
        "%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        use_color=sys.stderr.isatty(),
    ))
    logger.addHandler(console)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
        file_handler.setLevel(threshold)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s [%(name)s.%(funcName)s] %(message)s"
        ))
        logger.addHandler(file_handler)

    logger.debug(f"Logging at {logging.getLevelName(threshold)}, file={log_file or '-'}")
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, e.g. "foyer.engine.matcher"."""
    return logging.getLogger(name)


def log_function_call(func: Callable) -> Callable:
    """
    Trace an engine entry point: TRACE on entry and on return with the
    elapsed time, ERROR when it raises (the exception propagates).
    """
    logger = logging.getLogger(func.__module__)

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger.log(TRACE, f"→ {func.__name__} ({len(args)} args, {sorted(kwargs)})")
        started = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.error(f"{func.__name__} failed: {type(e).__name__}: {e}")
            raise
        logger.log(TRACE, f"← {func.__name__} in {(time.perf_counter() - started) * 1000:.1f} ms: {result!r:.80}")
        return result

    return wrapper


class PlacementLogger:
    """Indented phase/step logging for the placement passes."""

    def __init__(self, name: str = "foyer.engine"):
        self.logger = logging.getLogger(name)
        self.indent = 0

    def _prefix(self) -> str:
        return "  " * self.indent

    def phase(self, name: str):
        self.logger.info(f"{'=' * 20} {name} {'=' * 20}")

    def step(self, description: str):
        self.logger.info(f"{self._prefix()}▸ {description}")

    def detail(self, key: str, value: Any):
        self.logger.debug(f"{self._prefix()}  {key}: {value}")

    def enter(self, context: str):
        self.logger.debug(f"{self._prefix()}┌─ {context}")
        self.indent += 1

    def exit(self, context: str = ""):
        self.indent = max(0, self.indent - 1)
        if context:
            self.logger.debug(f"{self._prefix()}└─ {context}")
