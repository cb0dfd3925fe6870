"""Logging for the API and scripts: rich console output plus optional daily files.

Records pass through a ``QueueHandler`` so request threads never block on the
console or disk; a ``QueueListener`` fans them out to the real handlers.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import date, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path
from queue import SimpleQueue
from threading import RLock
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.traceback import install as install_rich_traceback

from .context import ContextFilter, log_context
from .timing import timeit

__all__ = [
    "LoggingConfig",
    "get_logger",
    "init_logging",
    "log_context",
    "shutdown_logging",
    "timeit",
]

ROOT_LOGGER = "freightdesk"

# Third-party loggers that are chatty at INFO (one line per HTTP request).
_NOISY_LOGGERS = ("httpx", "httpcore", "multipart")


def _optional_path(value: str) -> Optional[Path]:
    return Path(value) if value else None


@dataclass
class LoggingConfig:
    """Logging options, read from ``LOG_LEVEL``, ``LOG_DIR`` and ``LOG_QUEUE``."""

    level: str | int = "INFO"
    log_dir: Optional[Path] = None
    console: bool = True
    rich_tracebacks: bool = True
    queue: bool = True

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        return cls(
            level=os.getenv("LOG_LEVEL", "INFO"),
            log_dir=_optional_path(os.getenv("LOG_DIR", "")),
            queue=os.getenv("LOG_QUEUE", "1") not in {"0", "false", "no"},
        )


_lock = RLock()
_active: LoggingConfig | None = None
_listener: QueueListener | None = None
_installed: list[logging.Handler] = []
_context_filter = ContextFilter()


def _parse_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), logging.INFO)


class DailyFileHandler(logging.FileHandler):
    """Append to ``<prefix>_<YYYY-MM-DD>.log``, switching files at midnight."""

    def __init__(self, directory: Path, *, prefix: str = ROOT_LOGGER) -> None:
        directory.mkdir(parents=True, exist_ok=True)
        self.directory = directory
        self.prefix = prefix
        self.day: date = datetime.now().date()
        super().__init__(self._path(self.day), mode="a", encoding="utf-8")

    def _path(self, day: date) -> Path:
        return self.directory / f"{self.prefix}_{day.isoformat()}.log"

    def emit(self, record: logging.LogRecord) -> None:
        day = datetime.fromtimestamp(record.created).date()
        if day != self.day:
            self.day = day
            self.close()
            self.baseFilename = os.fspath(self._path(day))
        super().emit(record)


def _build_handlers(cfg: LoggingConfig, level: int) -> list[logging.Handler]:
    handlers: list[logging.Handler] = []

    if cfg.console:
        if cfg.rich_tracebacks:
            install_rich_traceback(show_locals=False)
        console = RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=cfg.rich_tracebacks,
            show_path=False,
            markup=False,
            log_time_format="%H:%M:%S",
        )
        console.setFormatter(logging.Formatter("%(context)s%(message)s"))
        handlers.append(console)

    if cfg.log_dir:
        to_file = DailyFileHandler(Path(cfg.log_dir))
        to_file.setFormatter(
            logging.Formatter(
                "%(asctime)s %(levelname)-7s %(name)s %(context)s%(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S",
            )
        )
        handlers.append(to_file)

    for handler in handlers:
        handler.setLevel(level)
        handler.addFilter(_context_filter)
    return handlers


def init_logging(**overrides: object) -> None:
    """Install the handlers once; calling again with different options reconfigures."""

    global _active, _listener
    with _lock:
        cfg = LoggingConfig.from_env()
        for key, value in overrides.items():
            if hasattr(cfg, key):
                setattr(cfg, key, value)
        if _active == cfg:
            return
        _teardown_locked()

        level = _parse_level(cfg.level)
        root = logging.getLogger()
        root.setLevel(logging.NOTSET)
        handlers = _build_handlers(cfg, level)

        if cfg.queue and handlers:
            records: SimpleQueue = SimpleQueue()
            queue_handler = QueueHandler(records)
            queue_handler.setLevel(level)
            # The filter must run on the producing thread to see its context.
            queue_handler.addFilter(_context_filter)
            root.addHandler(queue_handler)
            _installed.append(queue_handler)
            _listener = QueueListener(records, *handlers, respect_handler_level=True)
            _listener.start()
        else:
            for handler in handlers:
                root.addHandler(handler)
            _installed.extend(handlers)

        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(max(level, logging.WARNING))
        _active = cfg


def _teardown_locked() -> None:
    global _active, _listener
    if _listener is not None:
        _listener.stop()
        for handler in _listener.handlers:
            handler.close()
        _listener = None
    root = logging.getLogger()
    # Handlers added by others (pytest, an embedding server) are left in place.
    while _installed:
        handler = _installed.pop()
        root.removeHandler(handler)
        handler.close()
    _active = None


def shutdown_logging() -> None:
    """Flush queued records and detach the handlers."""

    with _lock:
        _teardown_locked()


def get_logger(name: str | None = None) -> logging.Logger:
    with _lock:
        if _active is None:
            init_logging()
    return logging.getLogger(name or ROOT_LOGGER)
