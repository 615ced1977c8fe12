"""Icon tables and the icon resolution chains."""

from __future__ import annotations

from npc_importer.assets.resolver import IconResolver, IconTables


__all__ = [
    "IconResolver",
    "IconTables",
]
