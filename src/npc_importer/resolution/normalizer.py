"""Name normalization for item matching.

Two names denote the same item iff their normalized keys are equal. There is
no partial or similarity matching: "Fire Release: Fireball Jutsu" and
"fire release fireball jutsu" match, "Fireball" does not.
"""

from __future__ import annotations

import re


_NON_KEY_CHARS = re.compile(r"[^a-z0-9]")


def normalize(name: str | None) -> str:
    """Reduce a display name to its comparison key.

    Args:
        name: Display name; None or empty yields the empty key.

    Returns:
        The lowercased name with everything but ``a-z`` and ``0-9`` removed.
    """
    if not name:
        return ""
    return _NON_KEY_CHARS.sub("", name.lower())


__all__ = ["normalize"]
