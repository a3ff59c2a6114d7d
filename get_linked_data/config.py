# === FILE: get_linked_data/config.py ===
"""
Модуль для загрузки и валидации конфигурации краулера get-linked-data.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Dict, Literal, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from get_linked_data.parser import validate_selector
from get_linked_data.parser.jq_query import compile_query
from get_linked_data.utils import validate_delimiter

DEFAULT_USER_AGENT = "Mozilla/5.0 (X11; Linux x86_64; rv:109.0) Gecko/20100101 Firefox/120.0"


class CrawlPolicy(BaseModel):
    """Конфигурация одного запуска: селектор, jq-запрос, параллелизм, задержки и таймауты."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    selector: str = Field(..., min_length=1, description="CSS-селектор (html) или XPath (xml).")
    query: str = Field("", description="jq-запрос к JSON-тексту элемента; пусто = без изменений.")
    parallelism: int = Field(100, ge=1, description="Максимум одновременных запросов.")
    wait_time: int = Field(2000, ge=0, description="Верхняя граница случайной задержки, мс.")
    timeout: float = Field(120.0, gt=0, description="Таймаут на один запрос (секунд).")
    mode: Literal["html", "xml"] = Field("html", description="Дерево разметки или XML-дерево.")
    disable_keep_alive: bool = Field(True, description="Закрывать соединение после каждого запроса.")
    delimiter: str = Field(",", description="Разделитель полей во входном и выходных CSV.")
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="Заголовок User-Agent.")
    max_redirects: int = Field(10, ge=0, description="Максимум переходов по редиректам.")

    @field_validator("delimiter")
    def _check_delimiter(cls, v: str) -> str:
        validate_delimiter(v)
        return v

    @field_validator("query")
    def _check_query(cls, v: str) -> str:
        v = v.strip()
        if v:
            compile_query(v)
        return v

    @model_validator(mode="after")
    def _check_selector(self) -> CrawlPolicy:
        validate_selector(self.selector, self.mode)
        return self

    @property
    def wait_seconds(self) -> float:
        return self.wait_time / 1000.0


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


def read_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Читает YAML или JSON и возвращает сырой словарь настроек без валидации."""
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> CrawlPolicy:
    """
    Собирает CrawlPolicy из файла конфигурации (если задан) и явных переопределений.
    Значения None в overrides игнорируются, поэтому опции CLI можно передавать как есть.
    При ошибке валидации бросает pydantic.ValidationError.
    """
    data: Dict[str, Any] = {} if path is None else read_config_file(path)
    data.update({k: v for k, v in overrides.items() if v is not None})
    return CrawlPolicy(**data)


__all__ = ["CrawlPolicy", "DEFAULT_USER_AGENT", "load_config", "read_config_file", "ValidationError"]
