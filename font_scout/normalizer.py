# File: font_scout/normalizer.py
"""font_scout.normalizer: Canonical comparison tokens for font-family strings.

The token is only used to compare names; the reported names are never
rewritten with it.
"""

from __future__ import annotations

import re
from typing import Final, FrozenSet

__all__ = ["STYLE_QUALIFIERS", "normalize_font_name"]

STYLE_QUALIFIERS: Final[FrozenSet[str]] = frozenset(
    {
        "regular",
        "bold",
        "italic",
        "semibold",
        "thin",
        "light",
        "medium",
        "extra",
        "black",
        "heavy",
    }
)

_QUOTES_RE = re.compile(r"[\"']")
_SEPARATORS_RE = re.compile(r"[-_]")


def normalize_font_name(raw: object) -> str:
    """Map a raw ``font-family`` value to a lowercase comparison token.

    ``'"Recoleta-Bold", serif'`` becomes ``"recoleta, serif"``: quotes go,
    hyphens and underscores become spaces, whitespace collapses and the
    style qualifiers are dropped as whole words. Each item of a fallback
    list is handled separately; items left empty are dropped.
    Non-string input yields ``""``.
    """
    if not isinstance(raw, str):
        return ""
    text = _SEPARATORS_RE.sub(" ", _QUOTES_RE.sub("", raw.lower()))
    items = []
    for item in text.split(","):
        words = [word for word in item.split() if word not in STYLE_QUALIFIERS]
        if words:
            items.append(" ".join(words))
    return ", ".join(items)
