"""
Structured logging for pagewarden.

Events go through structlog into stdlib logging: stderr always, plus a dated
JSON log file under general.logs_dir. Page sessions bind their fields
(session id, url) with LogContext, so every event logged while a page is in
use carries them.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from pagewarden.utils.config import Settings, get_project_root, get_settings

MAX_URL_LENGTH = 200


def _truncate_url(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Shorten the url field; data: URLs and long query strings swamp log lines."""
    url = event_dict.get("url")
    if isinstance(url, str) and len(url) > MAX_URL_LENGTH:
        event_dict["url"] = url[:MAX_URL_LENGTH] + "..."
    return event_dict


def _default_log_file(settings: Settings) -> Path | None:
    if not settings.general.logs_dir:
        return None
    log_dir = get_project_root() / settings.general.logs_dir
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / f"pagewarden_{datetime.now():%Y%m%d}.log"


def configure_logging(
    settings: Settings | None = None,
    *,
    log_level: str | None = None,
    log_file: str | Path | None = None,
    json_format: bool = True,
) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        settings: Source of general.log_level and general.logs_dir.
            Defaults to get_settings().
        log_level: Overrides general.log_level.
        log_file: Overrides the dated file under general.logs_dir. An empty
            logs_dir and no log_file means stderr only.
        json_format: JSON lines (True) or console rendering (False).
    """
    settings = settings or get_settings()
    level_name = (log_level or settings.general.log_level).upper()

    if log_file is None:
        log_file = _default_log_file(settings)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    # Replaces handlers from any earlier call.
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level_name, logging.INFO),
        handlers=handlers,
        force=True,
    )

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _truncate_url,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if json_format:
        processors.append(structlog.processors.JSONRenderer(ensure_ascii=False))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a logger instance (usually get_logger(__name__))."""
    return structlog.get_logger(name)


class LogContext:
    """Bind log fields for the duration of a block.

    On exit each field goes back to what the enclosing block bound, so a
    nested LogContext(url=...) does not drop the outer url.

    Example:
        with LogContext(session=3, url="https://example.com/"):
            logger.info("Navigating")
    """

    def __init__(self, **fields: Any):
        self.fields = fields
        self._tokens: dict[str, Any] = {}

    def __enter__(self) -> "LogContext":
        self._tokens = dict(structlog.contextvars.bind_contextvars(**self.fields))
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        structlog.contextvars.reset_contextvars(**self._tokens)
        self._tokens = {}
