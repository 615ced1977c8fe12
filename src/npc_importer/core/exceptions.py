"""Custom exception hierarchy for the NPC importer.

All exceptions inherit from NpcImporterError so callers can catch the whole
family at the batch boundary while keeping per-domain context in ``details``.

Text extraction has no exception type: every extractor falls back to a
documented default instead of raising.

Example:
    >>> from npc_importer.core.exceptions import MissingFieldError
    >>> raise MissingFieldError("NPC has no stats block", record_name="Aburame Genin", field_name="stats")
"""

from __future__ import annotations

from typing import Any


class NpcImporterError(Exception):
    """Base exception for all NPC importer errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationError(NpcImporterError):
    """Raised when importer configuration is invalid.

    This includes unreadable icon table files and out-of-range settings.
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


# =============================================================================
# Source Record Exceptions
# =============================================================================


class SourceRecordError(NpcImporterError):
    """Raised when a source NPC record cannot be used for conversion.

    Validation failures of the loosely-typed input end up here, so a single
    bad record fails only its own NPC.
    """

    def __init__(
        self,
        message: str,
        *,
        record_name: str | None = None,
        field_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize source record error with record context.

        Args:
            message: Human-readable error description.
            record_name: Name of the NPC record, when known.
            field_name: Name of the offending field.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if record_name:
            combined_details["record_name"] = record_name
        if field_name:
            combined_details["field_name"] = field_name
        super().__init__(message, details=combined_details)


class MissingFieldError(SourceRecordError):
    """Raised when a field required for actor creation is absent."""


# =============================================================================
# Content Lookup Exceptions
# =============================================================================


class ContentLookupError(NpcImporterError):
    """Raised when an external content library cannot be listed or read.

    The content index treats this as a miss: the library is skipped and the
    importer falls through to synthesis.
    """

    def __init__(
        self,
        message: str,
        *,
        library: str | None = None,
        entry_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize lookup error with library context.

        Args:
            message: Human-readable error description.
            library: Name of the library that failed.
            entry_id: Identifier of the entry being fetched, if any.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if library:
            combined_details["library"] = library
        if entry_id:
            combined_details["entry_id"] = entry_id
        super().__init__(message, details=combined_details)


# =============================================================================
# Persistence Exceptions
# =============================================================================


class AttachError(NpcImporterError):
    """Raised when the batched item attach to a created actor fails.

    The actor is left in place; already resolved items are not retried.
    """

    def __init__(
        self,
        message: str,
        *,
        actor_handle: str | None = None,
        item_count: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize attach error with actor context.

        Args:
            message: Human-readable error description.
            actor_handle: Handle of the actor the items were meant for.
            item_count: Number of items in the failed attach.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if actor_handle:
            combined_details["actor_handle"] = actor_handle
        if item_count is not None:
            combined_details["item_count"] = item_count
        super().__init__(message, details=combined_details)


__all__ = [
    "NpcImporterError",
    "ConfigurationError",
    "SourceRecordError",
    "MissingFieldError",
    "ContentLookupError",
    "AttachError",
]
