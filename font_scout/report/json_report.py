# font_scout/report/json_report.py

"""
Генерация JSON-отчёта для проекта FontScout.

Сериализация объекта ScanReport в файл в формате ответа ``POST /scan``.
"""
import json
from pathlib import Path

from font_scout.aggregator import ScanReport


def render_json(report: ScanReport, output_path: Path | str) -> Path:
    """
    Сохраняет отчёт report в формате JSON по указанному пути.

    :param report: объект ScanReport с результатами сканирования
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(report.payload(), f, ensure_ascii=False, indent=2)

    return output
