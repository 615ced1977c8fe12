"""Conversion of source records into actor and item documents."""

from __future__ import annotations

from npc_importer.conversion.converter import ConvertedItem, NPCConverter, SourceItemRecord
from npc_importer.conversion.templates import biography_html, jutsu_description_html


__all__ = [
    "ConvertedItem",
    "NPCConverter",
    "SourceItemRecord",
    "biography_html",
    "jutsu_description_html",
]
