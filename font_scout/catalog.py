# File: font_scout/catalog.py
"""font_scout.catalog: The read-only list of foundry font names detected fonts are checked against."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Optional, Tuple, Union

import yaml

from font_scout.logger import logger
from font_scout.utils import read_name_list, remove_duplicates

__all__ = ["DEFAULT_CATALOG_PATH", "Catalog", "load_catalog"]

DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "latinotype.txt"


@dataclass(frozen=True, slots=True)
class Catalog:
    """Ordered, immutable sequence of catalog font names."""

    names: Tuple[str, ...]

    @classmethod
    def from_names(cls, names: Iterable[str]) -> Catalog:
        cleaned = (name.strip() for name in names if isinstance(name, str))
        return cls(tuple(remove_duplicates(name for name in cleaned if name)))

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)

    def __len__(self) -> int:
        return len(self.names)

    def __contains__(self, name: object) -> bool:
        return name in self.names


def _read_structured(path: Path) -> list:
    text = path.read_text(encoding="utf-8")
    try:
        data = json.loads(text) if path.suffix.lower() == ".json" else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ValueError(f"Invalid catalog file {path}: {exc}") from exc
    if isinstance(data, dict):
        data = data.get("fonts")
    if not isinstance(data, list):
        raise TypeError(f"Catalog {path} must be a list of names or a mapping with 'fonts'")
    return data


def load_catalog(path: Union[str, Path, None] = None) -> Catalog:
    """Load the catalog from *path* (text, YAML or JSON) or the bundled default.

    Text files hold one name per line; YAML/JSON hold a list of names or a
    mapping with a ``fonts`` list.
    """
    source = DEFAULT_CATALOG_PATH if path is None else Path(path).expanduser()
    if source.suffix.lower() in (".yaml", ".yml", ".json"):
        if not source.is_file():
            raise FileNotFoundError(f"Catalog file not found: {source}")
        names = _read_structured(source)
    else:
        names = read_name_list(source)
    catalog = Catalog.from_names(names)
    logger.info("Loaded catalog of %d fonts from %s", len(catalog), source)
    return catalog
