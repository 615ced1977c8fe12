"""HTML fragments written into biography and description fields.

All interpolated text is escaped; the store renders these fields as HTML.
Labelled lines are left out when the source field is empty.
"""

from __future__ import annotations

from collections.abc import Iterable
from html import escape

from npc_importer.models.source import SourceAbilityRecord, SourceNPCRecord


def _labelled(label: str, value: object) -> str:
    if value is None or value == "":
        return ""
    return f"<p><strong>{label}:</strong> {escape(str(value))}</p>"


def _bullets(items: Iterable[str]) -> str:
    return "<ul>" + "".join(f"<li>{escape(item)}</li>" for item in items) + "</ul>"


def _joined(values: list[str]) -> str:
    return ", ".join(values)


def biography_html(npc: SourceNPCRecord) -> str:
    """Actor biography: identity lines, chakra natures and special abilities."""
    html = f"<h2>{escape(npc.name)}</h2>"
    html += _labelled("Clan", npc.clan)
    html += _labelled("Rank", npc.rank)
    html += _labelled("Specialty", npc.specialty)
    if npc.chakra_natures:
        html += _labelled("Chakra Natures", _joined(npc.chakra_natures))
    if npc.abilities:
        html += "<h3>Special Abilities</h3>" + _bullets(npc.abilities)
    return html


def jutsu_description_html(jutsu: SourceAbilityRecord) -> str:
    """Spell description listing every source field of a jutsu.

    Example:
        >>> jutsu_description_html(SourceAbilityRecord(name="Shadow Clone", rank="B"))
        '<p><strong>Shadow Clone</strong> - Rank B</p>'
    """
    heading = f"<strong>{escape(jutsu.name)}</strong>"
    if jutsu.rank:
        heading += f" - Rank {escape(jutsu.rank)}"
    html = f"<p>{heading}</p>"
    if jutsu.description:
        html += f"<p>{escape(jutsu.description)}</p>"
    html += _labelled("Chakra Cost", jutsu.chakra_cost)
    html += _labelled("Casting Time", jutsu.casting_time)
    html += _labelled("Range", jutsu.range)
    html += _labelled("Duration", jutsu.duration)
    if jutsu.components:
        html += _labelled("Components", _joined(jutsu.components))
    if jutsu.keywords:
        html += _labelled("Keywords", _joined(jutsu.keywords))
    html += _labelled("Nature", jutsu.nature)
    html += _labelled("Clan", jutsu.clan)
    if jutsu.effects:
        html += "<p><strong>Effects:</strong></p>" + _bullets(jutsu.effects)
    return html


def paragraph_html(text: str) -> str:
    return f"<p>{escape(text)}</p>" if text else ""


__all__ = [
    "biography_html",
    "jutsu_description_html",
    "paragraph_html",
]
