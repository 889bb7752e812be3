# === FILE: font_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа FontScout через командную строку.

Команды:
  serve     Запустить HTTP-сервер (GET /health, POST /scan)
  scan      Просканировать URL и вывести/сохранить отчёты
  config    Показать текущую конфигурацию
  catalog   Показать каталог шрифтов

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Команда scan опции:
  --json PATH         Сохранить JSON-отчёт в файл
  --html PATH         Сохранить HTML-отчёт в файл
  --template DIR      Папка с Jinja2-шаблоном report.html.j2
  --pretty            Преформатировать JSON-вывод (отступ 2)
  --batch-timeout SEC Таймаут всего пакета (секунд); дедлайн одного URL — scan_timeout в конфиге

Пример:
  font_scout scan https://example.com https://example.org --pretty
"""
import asyncio
import json
import sys
from pathlib import Path
from typing import List

import click

from font_scout import __version__
from font_scout.aggregator import aggregate_results
from font_scout.catalog import Catalog, load_catalog
from font_scout.config import ScannerConfig, load_config
from font_scout.engine import BatchScanner
from font_scout.logger import init_logging
from font_scout.models import ScanResult
from font_scout.report.html_report import render_html
from font_scout.report.json_report import render_json
from font_scout.server import run_server
from font_scout.webhook import WebhookNotifier

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


async def run_batch(cfg: ScannerConfig, catalog: Catalog, urls: List[str]) -> List[ScanResult]:
    """Сканирует пакет URL и дожидается отправки webhook, если он настроен."""
    notifier = None
    if cfg.webhook_url is not None:
        notifier = WebhookNotifier(str(cfg.webhook_url), timeout=cfg.webhook_timeout)
    try:
        return await BatchScanner(cfg, catalog, notifier=notifier).scan(urls)
    finally:
        if notifier is not None:
            await notifier.aclose()


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='FontScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stdout, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд FontScout CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format,
        stream=sys.stderr,
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


def _load_catalog(cfg: ScannerConfig) -> Catalog:
    try:
        return load_catalog(cfg.catalog_path)
    except Exception as e:
        print_error(f'Ошибка загрузки каталога: {e}')


@cli.command('serve', context_settings=CONTEXT_SETTINGS)
@click.option('--host', default=None, help='Адрес (override host из конфига)')
@click.option('--port', type=int, default=None, envvar='PORT', help='Порт (override port, env PORT)')
@click.pass_context
def serve(ctx, host, port):
    """Запустить HTTP-сервер."""
    cfg = ctx.obj['config']
    catalog = _load_catalog(cfg)
    run_server(cfg, catalog, host or cfg.host, port or cfg.port)


@cli.command('scan', context_settings=CONTEXT_SETTINGS)
@click.argument('urls', nargs=-1, required=True)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-отчёт в файл'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Папка с Jinja2-шаблоном (встроенный шаблон, если не указана)'
)
@click.option(
    '--pretty', is_flag=True,
    help='Преформатировать JSON-вывод (отступ 2)'
)
@click.option(
    '--batch-timeout', 'batch_timeout',
    type=float,
    default=None,
    help='Таймаут всего пакета (секунд)'
)
@click.pass_context
def scan(ctx, urls, json_output, html_output, template_dir, pretty, batch_timeout):
    """Просканировать URLS и сгенерировать отчёты."""
    cfg = ctx.obj['config']
    catalog = _load_catalog(cfg)
    try:
        if batch_timeout:
            results = asyncio.run(
                asyncio.wait_for(run_batch(cfg, catalog, list(urls)), timeout=batch_timeout)
            )
        else:
            results = asyncio.run(run_batch(cfg, catalog, list(urls)))
    except asyncio.TimeoutError:
        print_error(f'Сканирование не завершено за {batch_timeout} секунд')
    except Exception as e:
        print_error(f'Ошибка при сканировании: {e}')

    report = aggregate_results(results, catalog.names)

    # Если не сохраняем в файл — печатаем в stdout
    if not json_output and not html_output:
        click.echo(report.json(pretty=pretty))
        return

    if json_output:
        try:
            saved_json = render_json(report, json_output)
            click.echo(f'JSON report: {saved_json}')
        except Exception as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(report, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Ошибка при сохранении HTML: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(json.dumps(cfg.model_dump(mode='json'), ensure_ascii=False, indent=2))


@cli.command('catalog', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_catalog(ctx):
    """Показать каталог шрифтов, по одному имени в строке."""
    for name in _load_catalog(ctx.obj['config']):
        click.echo(name)


if __name__ == "__main__":
    cli()
