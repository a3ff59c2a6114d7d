# get_linked_data/report/csv_report.py

"""
Запись CSV-файлов с результатами обхода.

Один файл с извлечёнными данными (одно поле на строку, переводы строк удалены)
и один файл с исходными URL неудачных запросов. Оба файла создаются всегда,
даже если пусты.
"""
import csv
from pathlib import Path
from typing import Iterable, List

from get_linked_data.aggregator import ResultSink
from get_linked_data.utils import validate_delimiter


def _strip_newlines(value: str) -> str:
    return value.replace("\r", "").replace("\n", "")


def _write_rows(rows: Iterable[List[str]], output_path: Path | str, delimiter: str) -> Path:
    validate_delimiter(delimiter)
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    with output.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f, delimiter=delimiter, lineterminator="\n")
        writer.writerows(rows)
    return output


def render_data(
    sink: ResultSink, output_path: Path | str, delimiter: str = ",", *, with_source: bool = False
) -> Path:
    """
    Сохраняет извлечённые записи в CSV по указанному пути.

    :param sink: накопитель результатов обхода
    :param output_path: путь к CSV-файлу
    :param delimiter: разделитель полей (один символ)
    :param with_source: добавить вторым полем исходный URL записи
    :return: Path сохранённого файла
    """
    rows = (
        [_strip_newlines(r.data), r.url] if with_source else [_strip_newlines(r.data)]
        for r in sink.scraped()
    )
    return _write_rows(rows, output_path, delimiter)


def render_failed(sink: ResultSink, output_path: Path | str, delimiter: str = ",") -> Path:
    """Сохраняет исходные (до редиректа) URL неудачных запросов, по одному в строке."""
    rows = ([_strip_newlines(url)] for url in sink.failed_urls())
    return _write_rows(rows, output_path, delimiter)


def default_failed_path(output_path: Path | str) -> Path:
    """``data.csv`` -> ``data_failed.csv`` рядом с основным файлом."""
    output = Path(output_path)
    return output.with_name(f"{output.stem}_failed{output.suffix or '.csv'}")
