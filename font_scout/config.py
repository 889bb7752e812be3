# === FILE: font_scout/config.py ===
"""
Модуль для загрузки и валидации конфигурации сканера FontScout.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, List, Literal, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    field_validator,
    model_validator,
)

WaitUntil = Literal["domcontentloaded", "load", "networkidle", "commit"]


class ScannerConfig(BaseModel):
    """Конфигурация сервиса и одного пакетного сканирования."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    catalog_path: Optional[Path] = Field(
        None, description="Файл каталога шрифтов (None → встроенный каталог Latinotype)."
    )
    navigation_timeout: float = Field(60.0, gt=0, description="Таймаут навигации страницы (секунд).")
    scan_timeout: float = Field(90.0, gt=0, description="Жесткий дедлайн на один URL (секунд).")
    wait_until: WaitUntil = Field("domcontentloaded", description="Условие ожидания загрузки.")
    max_elements: int = Field(200, ge=1, description="Лимит DOM-элементов для чтения стилей.")
    concurrency: int = Field(1, ge=1, description="Число одновременных экземпляров браузера.")
    headless: bool = Field(True, description="Запуск Chromium без окна.")
    browser_args: List[str] = Field(default_factory=list, description="Доп. аргументы Chromium.")
    executable_path: Optional[str] = Field(None, description="Явный путь к бинарнику Chromium.")
    no_match_label: str = Field("Ninguna", min_length=1, description="Значение при отсутствии совпадений.")
    match_whole_words: bool = Field(False, description="Совпадение каталога только по границам слов.")
    webhook_url: Optional[HttpUrl] = Field(None, description="Webhook для успешных результатов.")
    webhook_timeout: float = Field(10.0, gt=0, description="Таймаут доставки в webhook (секунд).")
    host: str = Field("0.0.0.0", min_length=1, description="Адрес HTTP-сервера.")
    port: int = Field(10000, ge=1, le=65535, description="Порт HTTP-сервера.")

    @field_validator("catalog_path", mode="before")
    def _expand_catalog_path(cls, v: Any) -> Any:
        if isinstance(v, str):
            return Path(v).expanduser()
        return v

    @model_validator(mode="after")
    def _check_catalog_exists(self) -> ScannerConfig:
        if self.catalog_path is not None and not self.catalog_path.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(self.catalog_path))
        return self


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> ScannerConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект ScannerConfig.

    Без пути используется configs/default.yaml, а если его нет —
    значения по умолчанию. Явно указанный, но отсутствующий файл
    приводит к FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            return ScannerConfig()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return ScannerConfig(**data)


__all__ = ["ScannerConfig", "WaitUntil", "load_config"]
