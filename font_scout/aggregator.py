# File: font_scout/aggregator.py
"""font_scout.aggregator: Модуль агрегатора результатов пакетного сканирования."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, TypedDict

from font_scout.models import ScanResult


class CatalogHit(TypedDict):
    """Шрифт каталога и URL, на которых он найден."""

    font: str
    urls: List[str]


@dataclass(slots=True)
class ScanReport:
    """Результаты пакета: записи по URL и сводка совпадений с каталогом."""

    results: List[ScanResult] = field(default_factory=list)
    catalog_hits: List[CatalogHit] = field(default_factory=list)

    @property
    def scanned(self) -> int:
        return len(self.results)

    @property
    def failed(self) -> int:
        return sum(1 for result in self.results if not result.ok)

    def payload(self) -> Dict[str, Any]:
        """Тело ответа ``POST /scan``."""
        return {"results": [result.to_payload() for result in self.results]}

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление в формате ответа API."""
        return json.dumps(self.payload(), ensure_ascii=False, indent=2 if pretty else None)


def _collect_hits(results: Sequence[ScanResult], catalog: Sequence[str]) -> List[CatalogHit]:
    """Группирует URL по шрифтам каталога в порядке каталога."""
    by_font: Dict[str, List[str]] = {name: [] for name in catalog}
    for result in results:
        if not result.ok:
            continue
        for name in result.matched:
            if name in by_font:
                by_font[name].append(result.url)
    return [{"font": name, "urls": urls} for name, urls in by_font.items() if urls]


def aggregate_results(results: Sequence[ScanResult], catalog: Sequence[str] = ()) -> ScanReport:
    """Собирает результаты в ScanReport."""
    return ScanReport(results=list(results), catalog_hits=_collect_hits(results, catalog))
