# File: font_scout/matcher.py
"""font_scout.matcher: Match detected font names against the catalog."""

from __future__ import annotations

import re
from typing import Iterable, List, Sequence

from font_scout.normalizer import normalize_font_name

__all__ = ["match_catalog", "render_matches"]


def _contains_word_run(haystack: str, needle: str) -> bool:
    return re.search(rf"(?<!\w){re.escape(needle)}(?!\w)", haystack) is not None


def match_catalog(
    detected: Sequence[str], catalog: Iterable[str], *, whole_words: bool = False
) -> List[str]:
    """Return the catalog entries found in *detected*, in catalog order.

    An entry matches when its normalized token is a substring of any
    normalized detected name. With *whole_words* the token must also start
    and end on a word boundary, so ``"Ruta"`` no longer matches ``"Rutaba"``.
    Entries that normalize to an empty token never match.
    """
    tokens = [normalize_font_name(name) for name in detected]
    tokens = [token for token in tokens if token]
    matched: List[str] = []
    for entry in catalog:
        needle = normalize_font_name(entry)
        if not needle or entry in matched:
            continue
        if whole_words:
            found = any(_contains_word_run(token, needle) for token in tokens)
        else:
            found = any(needle in token for token in tokens)
        if found:
            matched.append(entry)
    return matched


def render_matches(matched: Sequence[str], none_label: str = "Ninguna") -> str:
    """Join matches with ``", "`` or return *none_label* when there are none."""
    return ", ".join(matched) if matched else none_label
