# File: get_linked_data/logger.py
"""Логгер get-linked-data: консоль (stderr) и, по желанию, файл с ротацией.

Модули берут дочерний логгер через ``get_logger("crawler")``; CLI один раз
вызывает :func:`init_logging` до начала обхода.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "GetLinkedData"

# ротация лог-файла: 5 МБ, три архива
_MAX_BYTES: Final[int] = 5 * 1024 * 1024
_BACKUPS: Final[int] = 3


def init_logging(
    level: Union[int, str] = "INFO",
    log_file: Union[str, Path, None] = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Заменяет обработчики логгера проекта. stdout остаётся за выводом click."""
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)
    for handler in list(lg.handlers):
        lg.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(log_format)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(str(log_file), maxBytes=_MAX_BYTES, backupCount=_BACKUPS, encoding="utf-8")
        )
    for handler in handlers:
        handler.setFormatter(formatter)
        lg.addHandler(handler)

    lg.propagate = False
    return lg


def get_logger(name: str | None = None) -> logging.Logger:
    """Логгер проекта или его потомок ``GetLinkedData.<name>``."""
    return logging.getLogger(LOGGER_NAME if name is None else f"{LOGGER_NAME}.{name}")


logger: logging.Logger = get_logger()

__all__ = ["logger", "init_logging", "get_logger", "LOGGER_NAME", "DEFAULT_FORMAT"]
