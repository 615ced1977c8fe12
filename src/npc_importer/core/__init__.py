"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        NpcImporterError: Base exception for all importer errors.
        ConfigurationError: Configuration-related errors.
        SourceRecordError / MissingFieldError: Unusable source records.
        ContentLookupError: External library failures.
        AttachError: Batched item attach failures.

    Configuration:
        Settings: Main settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        setup_logging: Configure logging from settings.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from npc_importer.core.config import (
    IconSettings,
    ImportSettings,
    IndexSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from npc_importer.core.exceptions import (
    AttachError,
    ConfigurationError,
    ContentLookupError,
    MissingFieldError,
    NpcImporterError,
    SourceRecordError,
)
from npc_importer.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    setup_logging,
)


__all__ = [
    # Exceptions
    "NpcImporterError",
    "ConfigurationError",
    "SourceRecordError",
    "MissingFieldError",
    "ContentLookupError",
    "AttachError",
    # Configuration
    "Settings",
    "ImportSettings",
    "IndexSettings",
    "IconSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "setup_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
