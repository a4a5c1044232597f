"""Structured logging: JSON lines to a rotating file, console lines on stderr.

Stdout belongs to command output (``intervals --json``, ``show``), so log
records never go there.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TextIO

import structlog

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

# Applied to structlog events and to plain stdlib records alike
_PRE_CHAIN: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
]


def _console_handler(stream: TextIO, level: int) -> logging.Handler:
    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(colors=stream.isatty()),
            foreign_pre_chain=_PRE_CHAIN,
        )
    )
    return handler


def _file_handler(log_dir: Path, log_name: str) -> logging.Handler:
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / f"{log_name}.log",
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(),
            foreign_pre_chain=_PRE_CHAIN,
        )
    )
    return handler


def setup_logging(
    log_dir: str, log_name: str = "feedcrawl", console_level: int = logging.INFO
) -> structlog.stdlib.BoundLogger:
    """Route structlog through stdlib logging. An empty log_dir disables the file log."""
    handlers = [_console_handler(sys.stderr, console_level)]
    if log_dir:
        handlers.append(_file_handler(Path(log_dir), log_name))

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    # Replace, not append: the CLI group runs once per invocation
    root_logger.handlers[:] = handlers

    structlog.configure(
        processors=[
            *_PRE_CHAIN,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    return structlog.get_logger(log_name)
