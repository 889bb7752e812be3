# File: font_scout/extractor.py
"""
Font extractor: reads font-family declarations from a rendered page.

Two sources are combined:

* the computed ``font-family`` of the DOM elements (bounded by
  ``max_elements``);
* the ``font-family`` of every style rule of every attached stylesheet.

Stylesheets are read one by one. Reading the rules of a stylesheet served
from another origin raises a ``SecurityError`` inside the page; such a
stylesheet is skipped and the others are still read.
"""
from __future__ import annotations

import re
from typing import Any, Iterable, List

from playwright.async_api import Error as PlaywrightError

from font_scout.logger import logger
from font_scout.utils import remove_duplicates

__all__ = ["GENERIC_KEYWORDS", "clean_font_names", "extract_fonts"]

#: cascade keywords that are not font names
GENERIC_KEYWORDS = frozenset({"inherit", "initial", "unset", "revert", "revert-layer"})

DOM_FONTS_JS = """
(limit) => {
  const fonts = [];
  const elements = document.querySelectorAll("*");
  const count = Math.min(elements.length, limit);
  for (let i = 0; i < count; i++) {
    const family = window.getComputedStyle(elements[i]).fontFamily;
    if (family) fonts.push(family);
  }
  return fonts;
}
"""

STYLESHEET_COUNT_JS = "() => document.styleSheets.length"

STYLESHEET_FONTS_JS = """
(index) => {
  const fonts = [];
  const walk = (rules) => {
    for (const rule of rules) {
      if (rule.style && rule.style.fontFamily) fonts.push(rule.style.fontFamily);
      if (rule.cssRules) walk(rule.cssRules);
    }
  };
  walk(document.styleSheets[index].cssRules);
  return fonts;
}
"""

_QUOTES_RE = re.compile(r"[\"']")


def clean_font_names(raw_names: Iterable[Any]) -> List[str]:
    """Turn raw font-family strings into the detected font set.

    Exact duplicates are dropped first, then quotes are stripped and each
    value is trimmed. Empty values and cascade keywords are dropped, and
    values that only differed by quoting collapse to one entry.
    """
    cleaned: List[str] = []
    for raw in remove_duplicates(name for name in raw_names if isinstance(name, str)):
        name = _QUOTES_RE.sub("", raw).strip()
        if not name or name.lower() in GENERIC_KEYWORDS:
            continue
        cleaned.append(name)
    return remove_duplicates(cleaned)


async def extract_fonts(page: Any, max_elements: int = 200) -> List[str]:
    """Collect the detected font set of a loaded Playwright *page*.

    Errors of the DOM walk propagate; errors of a single stylesheet are
    logged and that stylesheet is skipped.
    """
    raw: List[str] = list(await page.evaluate(DOM_FONTS_JS, max_elements))
    sheet_count = int(await page.evaluate(STYLESHEET_COUNT_JS))

    skipped = 0
    for index in range(sheet_count):
        try:
            raw.extend(await page.evaluate(STYLESHEET_FONTS_JS, index))
        except PlaywrightError as exc:
            skipped += 1
            logger.debug("Skipping stylesheet #%d: %s", index, exc)

    fonts = clean_font_names(raw)
    logger.debug(
        "Extracted %d fonts (%d stylesheets, %d skipped)", len(fonts), sheet_count, skipped
    )
    return fonts
