"""Tests for the exception hierarchy."""

from __future__ import annotations

import pytest

from npc_importer.core.exceptions import (
    AttachError,
    ConfigurationError,
    ContentLookupError,
    MissingFieldError,
    NpcImporterError,
    SourceRecordError,
)


class TestNpcImporterError:
    """Tests for the base NpcImporterError exception."""

    def test_basic_message(self) -> None:
        """Test exception with basic message."""
        exc = NpcImporterError("Test error message")
        assert exc.message == "Test error message"
        assert exc.details == {}
        assert str(exc) == "Test error message"

    def test_with_details(self) -> None:
        """Test exception with additional details."""
        exc = NpcImporterError("Test error", details={"npc": "Aburame Genin", "items": 3})
        assert "npc='Aburame Genin'" in str(exc)
        assert "items=3" in str(exc)

    def test_repr(self) -> None:
        """Test exception repr output."""
        repr_str = repr(NpcImporterError("Test", details={"x": 1}))
        assert "NpcImporterError" in repr_str
        assert "x" in repr_str


class TestSourceRecordErrors:
    """Tests for source record exceptions."""

    def test_record_and_field_context(self) -> None:
        """Test SourceRecordError keeps record and field names."""
        exc = SourceRecordError("Bad record", record_name="Nara Chunin", field_name="hp")
        assert exc.details == {"record_name": "Nara Chunin", "field_name": "hp"}

    def test_missing_field_is_source_record_error(self) -> None:
        """Test MissingFieldError can be caught as SourceRecordError."""
        with pytest.raises(SourceRecordError) as exc_info:
            raise MissingFieldError("No stats", record_name="Nara Chunin", field_name="stats")
        assert exc_info.value.details["field_name"] == "stats"


class TestLookupAndAttachErrors:
    """Tests for content lookup and attach exceptions."""

    def test_content_lookup_context(self) -> None:
        """Test ContentLookupError records library and entry."""
        exc = ContentLookupError("Fetch failed", library="jutsu-pack", entry_id="abc")
        assert exc.details == {"library": "jutsu-pack", "entry_id": "abc"}

    def test_attach_error_zero_items_recorded(self) -> None:
        """Test AttachError keeps an item count of zero."""
        exc = AttachError("Attach failed", actor_handle="a1", item_count=0)
        assert exc.details["item_count"] == 0

    def test_configuration_error_key(self) -> None:
        """Test ConfigurationError records the offending key."""
        exc = ConfigurationError("Bad value", config_key="folder_name")
        assert "config_key='folder_name'" in str(exc)


class TestExceptionHierarchy:
    """Tests for exception inheritance."""

    @pytest.mark.parametrize(
        "exc_class",
        [ConfigurationError, SourceRecordError, MissingFieldError, ContentLookupError, AttachError],
    )
    def test_all_inherit_from_base(self, exc_class: type[NpcImporterError]) -> None:
        """Test every exception can be caught at the batch boundary."""
        assert issubclass(exc_class, NpcImporterError)
