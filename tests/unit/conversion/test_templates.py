"""Tests for the HTML description templates."""

from __future__ import annotations

from npc_importer.conversion.templates import (
    biography_html,
    jutsu_description_html,
    paragraph_html,
)
from npc_importer.models.source import SourceAbilityRecord, SourceNPCRecord


class TestTemplates:
    """Tests for biography and description fragments."""

    def test_text_is_escaped(self) -> None:
        """Test markup in source text is escaped."""
        assert paragraph_html("<b>Kunai</b> & tag") == "<p>&lt;b&gt;Kunai&lt;/b&gt; &amp; tag</p>"

    def test_empty_paragraph(self) -> None:
        """Test empty text renders nothing."""
        assert paragraph_html("") == ""

    def test_jutsu_heading_only(self) -> None:
        """Test a jutsu with just a name and rank."""
        html = jutsu_description_html(SourceAbilityRecord(name="Shadow Clone", rank="B"))
        assert html == "<p><strong>Shadow Clone</strong> - Rank B</p>"

    def test_jutsu_lists(self) -> None:
        """Test list fields are joined and effects bulleted."""
        html = jutsu_description_html(
            SourceAbilityRecord(
                name="Earth Wall",
                keywords=["Ninjutsu", "Earth"],
                effects=["A wall rises", "Blocks projectiles"],
            )
        )
        assert "<strong>Keywords:</strong> Ninjutsu, Earth" in html
        assert "<ul><li>A wall rises</li><li>Blocks projectiles</li></ul>" in html
        assert "Nature" not in html

    def test_biography_without_optional_lines(self) -> None:
        """Test a bare NPC gets only its heading."""
        assert biography_html(SourceNPCRecord(name="Villager")) == "<h2>Villager</h2>"
