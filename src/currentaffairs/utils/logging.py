"""Structured logging for the ingestion pipeline."""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import List, Literal, Optional

import structlog

# Third-party loggers that are chatty at INFO
_NOISY_LOGGERS = ("httpx", "httpcore", "google_genai", "openai")


def _shared_processors() -> List:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def setup_logging(
    log_level: str = "INFO",
    log_format: Literal["json", "console"] = "json",
    log_dir: Optional[Path] = None,
) -> None:
    """Configure structlog on top of the standard library root logger.

    Calling this more than once replaces the handlers installed by the
    previous call, so the CLI and tests can reconfigure freely.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Console output format ("json" or "console")
        log_dir: Directory for a daily-rotated log file (30 days kept)
    """
    shared_processors = _shared_processors()

    if log_format == "json":
        console_renderer = structlog.processors.JSONRenderer()
    else:
        console_renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if getattr(handler, "_currentaffairs", False):
            root_logger.removeHandler(handler)
            handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=console_renderer,
            foreign_pre_chain=shared_processors,
        )
    )
    console_handler._currentaffairs = True  # type: ignore[attr-defined]
    root_logger.addHandler(console_handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    if log_dir:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        file_handler = TimedRotatingFileHandler(
            filename=log_dir / "currentaffairs.log",
            when="midnight",
            interval=1,
            backupCount=30,
            encoding="utf-8",
        )
        # Plain text in files, no ANSI colours
        file_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processor=structlog.dev.ConsoleRenderer(colors=False),
                foreign_pre_chain=shared_processors,
            )
        )
        file_handler._currentaffairs = True  # type: ignore[attr-defined]
        root_logger.addHandler(file_handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Structured logger instance
    """
    return structlog.get_logger(name)
