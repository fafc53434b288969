# === FILE: micrawl/config.py ===
"""
Загрузка и валидация конфигурации краулера Micrawl.

Схема описана моделью Pydantic; значения приходят из CLI и, опционально,
из YAML/JSON-файла.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator

MIN_THREADS = 1
MAX_THREADS = 30


class ConfigError(ValueError):
    """Конфигурация не прошла предварительную проверку (хост, файл отчёта)."""


class CrawlConfig(BaseModel):
    """Параметры одного запуска обхода. Неизменяемы на время запуска."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    seed: HttpUrl = Field(..., description="Стартовый URL (со схемой).")
    output: Optional[Path] = Field(None, description="Файл текстового отчёта.")
    json_output: Optional[Path] = Field(None, description="Файл JSON-отчёта.")
    list_external: bool = Field(False, description="Включать внешние ссылки в отчёт.")
    extract_robots: bool = Field(False, description="Скачать и сохранить robots.txt.")
    threads: int = Field(
        10, ge=MIN_THREADS, le=MAX_THREADS, description="Число одновременных запросов."
    )
    timeout: float = Field(15.0, gt=0, description="Таймаут на загрузку страницы (секунд).")
    robots_timeout: float = Field(30.0, gt=0, description="Таймаут на robots.txt (секунд).")

    @field_validator("output", "json_output", mode="after")
    def _resolve_path(cls, v: Optional[Path]) -> Optional[Path]:
        # relative paths land in the working directory
        if v is None:
            return v
        return v.expanduser().resolve()

    @property
    def seed_url(self) -> str:
        return str(self.seed)

    def describe(self) -> List[str]:
        """Строки эха конфигурации для консоли и отчёта."""
        lines = [
            f"[~] Crawling URL: {self.seed_url}",
            f"[~] Running with {self.threads} threads",
        ]
        if self.output is not None:
            lines.append(f"[~] Writing output to file: {self.output}")
        if self.list_external:
            lines.append("[~] Listing external links")
        if self.extract_robots:
            lines.append("[~] Extracting robots.txt content")
        return lines


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


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> CrawlConfig:
    """
    Собирает CrawlConfig из файла (YAML или JSON, если указан) и аргументов CLI.

    Значения ``None`` в ``overrides`` не перекрывают значения из файла.
    Ошибки схемы пробрасываются как ``pydantic.ValidationError``.
    """
    data: dict[str, Any] = {}
    if path is not None:
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

    data.update({k: v for k, v in overrides.items() if v is not None})
    return CrawlConfig(**data)


def prepare_output(path: Union[str, Path, None]) -> None:
    """Создаёт (или очищает) файл отчёта заранее, чтобы не узнать о проблеме после обхода."""
    if path is None:
        return
    try:
        Path(path).write_text("", encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to create output file {path}: {exc}") from exc


__all__ = [
    "ConfigError",
    "CrawlConfig",
    "MAX_THREADS",
    "MIN_THREADS",
    "load_config",
    "prepare_output",
]
