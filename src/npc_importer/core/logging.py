"""Structured logging for the NPC importer.

Logging is driven by :class:`~npc_importer.core.config.Settings`: ``log_level``
filters events, ``json_logs`` picks JSON lines over the console renderer and
``app_name`` is stamped on every event. The importer binds the NPC being
processed with :func:`bind_context`, so item lookups logged underneath carry
its name.

Example:
    >>> from npc_importer.core.logging import get_logger, setup_logging
    >>> setup_logging()
    >>> get_logger(__name__).info("NPC imported", npc="Aburame Genin", items=7)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import Processor

from npc_importer.core.config import Settings, get_settings


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger


def app_context(app_name: str) -> Processor:
    """Build a processor that stamps ``app`` on every event."""

    def add_app_name(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("app", app_name)
        return event_dict

    return add_app_name


def configure_logging(
    *,
    level: str = "INFO",
    json_format: bool = False,
    app_name: str = "NPC Importer",
) -> None:
    """Configure structlog for the importer.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: Render JSON lines instead of console output.
        app_name: Value of the ``app`` key on every event.
    """
    renderer: Processor = (
        structlog.processors.JSONRenderer()
        if json_format
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            app_context(app_name),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.INFO)
        ),
        logger_factory=structlog.PrintLoggerFactory(),
    )


def setup_logging(settings: Settings | None = None) -> None:
    """Configure logging from settings.

    Args:
        settings: Settings to read; the cached singleton if None.
    """
    settings = settings or get_settings()
    configure_logging(
        level=settings.log_level,
        json_format=settings.json_logs,
        app_name=settings.app_name,
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a logger, optionally named after its module."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind values included in every later event of the current context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()


__all__ = [
    "app_context",
    "configure_logging",
    "setup_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
