# File: get_linked_data/utils.py
"""get_linked_data.utils: Загрузка списка URL из CSV, дедупликация и проверка разделителя."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Collection, List, Sequence, Union

from get_linked_data.errors import FileError, FormatError
from get_linked_data.logger import get_logger

__all__: Sequence[str] = (
    "load_url_file",
    "remove_duplicates",
    "validate_delimiter",
)

logger = get_logger("utils")


def validate_delimiter(delimiter: str) -> str:
    """Проверяет, что разделитель полей состоит ровно из одного символа."""
    if not isinstance(delimiter, str) or len(delimiter) != 1:
        raise FormatError(f"Field delimiter must be exactly one character, got {delimiter!r}")
    if delimiter in ('"', "\r", "\n"):
        raise FormatError(f"Field delimiter {delimiter!r} clashes with CSV quoting or line breaks")
    return delimiter


def load_url_file(path: Union[str, Path], delimiter: str = ",") -> List[str]:
    """Читает URL из первого столбца CSV, сохраняя порядок первого появления.

    Пустые строки пропускаются, заголовок не предполагается: каждая строка считается данными.
    Все непустые строки должны иметь одинаковое число полей, иначе FormatError.
    Сравнение точное, без нормализации URL.
    """
    validate_delimiter(delimiter)
    p = Path(path).expanduser()
    if not p.is_file():
        logger.error("URL file not found: %s", p)
        raise FileError(f"File does not exist: {p}")

    urls: List[str] = []
    seen: set[str] = set()
    width = None
    try:
        with p.open(newline="", encoding="utf-8") as handle:
            reader = csv.reader(handle, delimiter=delimiter, strict=True)
            for row in reader:
                if not row:
                    continue
                # число полей задаёт первая непустая строка
                if width is None:
                    width = len(row)
                elif len(row) != width:
                    raise FormatError(
                        f"Malformed CSV in {p}: line {reader.line_num} has {len(row)} fields, expected {width}"
                    )
                url = row[0]
                if url not in seen:
                    seen.add(url)
                    urls.append(url)
    except csv.Error as exc:
        raise FormatError(f"Malformed CSV in {p}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise FormatError(f"{p} is not valid UTF-8 text: {exc}") from exc
    except OSError as exc:
        raise FileError(f"Open file failed: {p}: {exc}") from exc

    logger.debug("Loaded %d unique URLs from %s", len(urls), p)
    return urls


def remove_duplicates(urls: Collection[str]) -> List[str]:
    """Удаляет дубликаты из списка URL, сохраняя порядок."""
    unique = list(dict.fromkeys(urls))
    removed = len(urls) - len(unique)
    if removed:
        logger.debug("Removed %d duplicate URLs", removed)
    return unique
