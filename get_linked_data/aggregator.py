# File: get_linked_data/aggregator.py
"""get_linked_data.aggregator: Потокобезопасный накопитель результатов обхода."""

from __future__ import annotations

import threading
from typing import Dict, Iterable, List

from get_linked_data.crawler.models import ExtractionRecord, FailedRequest

__all__ = ["ResultSink"]


class ResultSink:
    """Две коллекции только для добавления: извлечённые записи и неудачные URL.

    Каждое добавление выполняется под одной блокировкой; чтение возвращает снимок.
    Операции удаления нет.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: List[ExtractionRecord] = []
        self._failed: List[FailedRequest] = []

    def add_records(self, records: Iterable[ExtractionRecord]) -> int:
        """Добавляет записи одной страницы одним блоком; возвращает их число."""
        batch = list(records)
        with self._lock:
            self._records.extend(batch)
        return len(batch)

    def add_failure(self, failure: FailedRequest) -> None:
        with self._lock:
            self._failed.append(failure)

    def scraped(self) -> List[ExtractionRecord]:
        with self._lock:
            return list(self._records)

    def failed(self) -> List[FailedRequest]:
        with self._lock:
            return list(self._failed)

    def scraped_data(self) -> List[str]:
        """Снимок извлечённых строк в порядке добавления."""
        return [r.data for r in self.scraped()]

    def failed_urls(self) -> List[str]:
        """Снимок исходных (до редиректа) URL неудачных запросов."""
        return [f.url for f in self.failed()]

    def summary(self) -> Dict[str, int]:
        with self._lock:
            pages = len({r.url for r in self._records})
            return {"records": len(self._records), "pages_with_records": pages, "failed": len(self._failed)}
