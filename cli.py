# cli.py

"""
Запуск FontScout из корня репозитория без установки пакета.

Пример:
    python cli.py --config configs/default.yaml scan https://example.com --pretty
    python cli.py serve --port 10000
"""
from font_scout.cli import cli


if __name__ == '__main__':
    cli(prog_name='font_scout')
