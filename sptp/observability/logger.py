"""structlog setup for the engine, the services and the CLI."""

import logging
import sys
from pathlib import Path
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from .. import __version__


def add_app_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Stamp every event with the package name and version."""
    event_dict.setdefault("app", "sptp")
    event_dict.setdefault("version", __version__)
    return event_dict


def _renderers(log_format: str) -> list[Processor]:
    if log_format == "console":
        return [structlog.processors.ExceptionPrettyPrinter(), structlog.dev.ConsoleRenderer(colors=True)]
    return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    log_file: str | Path | None = None,
) -> None:
    """Configure structlog over stdlib logging.

    ``log_format`` is ``"json"`` (default) or ``"console"``; ``log_file``
    adds a second handler writing the same rendered lines.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            add_app_context,
            *_renderers(log_format),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # force: the CLI reconfigures after the import-time defaults
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level, force=True)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logging.getLogger().addHandler(handler)


def setup_logging_from_config(config: dict[str, Any]) -> None:
    """Apply the ``logging`` section of a loaded configuration."""
    section = config.get("logging", {})
    setup_logging(
        log_level=section.get("level", "INFO"),
        log_format=section.get("format", "json"),
        log_file=section.get("file"),
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    return structlog.get_logger(name)


setup_logging()
