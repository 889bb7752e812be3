# File: font_scout/report/__init__.py
"""font_scout.report: Генерация отчётов (JSON и HTML), используемая CLI."""

from font_scout.report.html_report import DEFAULT_TEMPLATE_DIR, render_html
from font_scout.report.json_report import render_json

__all__ = ["DEFAULT_TEMPLATE_DIR", "render_json", "render_html"]
