"""
Logging configuration for the datalog Log Assistant.

Console output is colored text or JSON lines; daily files are optional.
Analysis runs are timed with ``log_performance`` and carry their context
(file name, sizes, operation) as structured extras.
"""

import logging
import sys
import json
import time
from pathlib import Path
from datetime import datetime, timezone
from typing import Optional, List
from contextlib import contextmanager

ROOT_LOGGER = "log_assistant"

_TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"
_FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s"


class StructuredFormatter(logging.Formatter):
    """One JSON object per record, with context extras and exception text."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        context = getattr(record, "extra_data", None)
        if context is not None:
            entry["extra"] = context
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class ColoredFormatter(logging.Formatter):
    """Text formatter that colors the level name on terminals."""

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def __init__(self, fmt: str = None, datefmt: str = None, use_colors: bool = True):
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        original = record.levelname
        color = self.COLORS.get(original) if self.use_colors else None
        if color:
            record.levelname = f"{color}{original}{self.RESET}"
        try:
            return super().format(record)
        finally:
            # Other handlers share the record
            record.levelname = original


def _console_handler(stream, structured: bool, colored: bool) -> logging.Handler:
    handler = logging.StreamHandler(stream or sys.stderr)
    if structured:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(ColoredFormatter(_TEXT_FORMAT, "%H:%M:%S", use_colors=colored))
    return handler


def _file_handlers(log_dir: Path, structured: bool) -> List[logging.Handler]:
    """Daily log file plus an errors-only file."""
    log_dir.mkdir(parents=True, exist_ok=True)
    day = datetime.now().strftime('%Y%m%d')
    text = logging.Formatter(_FILE_FORMAT, "%Y-%m-%d %H:%M:%S")

    main_file = logging.FileHandler(log_dir / f"log_assistant_{day}.log", encoding="utf-8")
    main_file.setFormatter(StructuredFormatter() if structured else text)

    error_file = logging.FileHandler(log_dir / f"log_assistant_errors_{day}.log", encoding="utf-8")
    error_file.setLevel(logging.ERROR)
    error_file.setFormatter(text)
    return [main_file, error_file]


def setup_logging(
    log_level: str = "INFO",
    log_to_file: bool = False,
    log_to_console: bool = True,
    structured: bool = False,
    colored: bool = True,
    log_dir: Optional[Path] = None,
    stream=None
) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        log_level: Logging level name
        log_to_file: Also write daily files under ``log_dir``
        log_to_console: Write to ``stream``
        structured: JSON lines instead of text
        colored: Color level names in text console output
        log_dir: Directory for log files (default: ./logs)
        stream: Console stream (default: stderr, so stdout stays clean for JSON output)

    Returns:
        The configured ``log_assistant`` logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    logger.handlers.clear()

    if log_to_console:
        logger.addHandler(_console_handler(stream, structured, colored))

    if log_to_file:
        directory = log_dir or Path(__file__).parent.parent.parent / "logs"
        for handler in _file_handlers(directory, structured):
            logger.addHandler(handler)

    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Logger under the ``log_assistant`` hierarchy (foreign names keep their last part)."""
    if name and name != ROOT_LOGGER and not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name.split('.')[-1]}"
    return logging.getLogger(name)


class LogContext:
    """Logger wrapper that attaches fixed context to every record as ``extra_data``."""

    def __init__(self, logger: logging.Logger, **context):
        self.logger = logger
        self.context = context

    def _log(self, level: int, msg: str, *args, **kwargs):
        extra = kwargs.pop('extra', {})
        extra['extra_data'] = {**self.context, **extra.get('extra_data', {})}
        self.logger.log(level, msg, *args, extra=extra, **kwargs)

    def debug(self, msg: str, *args, **kwargs):
        self._log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        self._log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        self._log(logging.WARNING, msg, *args, **kwargs)


def log_with_context(logger: logging.Logger, **context) -> LogContext:
    """
    Example:
        ctx = log_with_context(logger, filename="pull.csv")
        ctx.warning("Upload rejected")
    """
    return LogContext(logger, **context)


@contextmanager
def log_performance(logger: logging.Logger, operation: str, **context):
    """
    Time an operation; failures are logged with their type and re-raised.

    Example:
        with log_performance(logger, "analyze_datalog", size=len(data)) as ctx:
            result = analyzer.analyze(data)
    """
    ctx = log_with_context(logger, operation=operation, **context)
    started = time.perf_counter()
    ctx.debug(f"Starting {operation}")
    try:
        yield ctx
    except Exception as e:
        ctx.warning(f"Failed {operation} after {time.perf_counter() - started:.3f}s: {type(e).__name__}")
        raise
    ctx.info(f"Completed {operation} in {time.perf_counter() - started:.3f}s")
