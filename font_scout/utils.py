# File: font_scout/utils.py
"""font_scout.utils: Small helpers for reading name lists and de-duplicating sequences."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Sequence, TypeVar, Union

from font_scout.logger import logger

__all__: Sequence[str] = (
    "read_name_list",
    "remove_duplicates",
)

T = TypeVar("T")


def read_name_list(path: Union[str, Path]) -> List[str]:
    """Читает список имён: непустые строки без пробелов по краям, `#` — комментарий."""
    p = Path(path).expanduser()
    if not p.exists():
        logger.error("Name list not found: %s", p)
        raise FileNotFoundError(f"Name list file not found: {p}")
    names = []
    for line in p.read_text(encoding="utf-8").splitlines():
        line = line.split("#", 1)[0].strip()
        if line:
            names.append(line)
    logger.debug("Loaded %d entries from %s", len(names), p)
    return names


def remove_duplicates(items: Iterable[T]) -> List[T]:
    """Удаляет дубликаты, сохраняя порядок первого появления."""
    items = list(items)
    unique = list(dict.fromkeys(items))
    removed = len(items) - len(unique)
    if removed:
        logger.debug("Removed %d duplicate entries", removed)
    return unique
