# File: get_linked_data/engine.py
"""get_linked_data.engine: Orchestration layer: загрузка URL, скоупинг, обход и запись CSV."""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Union

from get_linked_data.aggregator import ResultSink
from get_linked_data.config import CrawlPolicy
from get_linked_data.crawler.crawler import AsyncCrawler
from get_linked_data.crawler.events import CrawlEvents
from get_linked_data.crawler.scope import derive_allowed_domains
from get_linked_data.logger import logger
from get_linked_data.report.csv_report import default_failed_path, render_data, render_failed
from get_linked_data.utils import load_url_file, remove_duplicates

__all__ = ["Engine", "RunResult", "start_scan"]


async def start_scan(
    policy: CrawlPolicy,
    urls: Iterable[str],
    *,
    events: Optional[CrawlEvents] = None,
    scan_timeout: Optional[float] = None,
) -> ResultSink:
    """
    Строит список разрешённых доменов и обходит все URL.

    ScopeError из скоупинга пробрасывается до старта обхода. По истечении
    scan_timeout обход отменяется, незавершённые URL попадают в неудачные.
    """
    seeds = remove_duplicates(list(urls))
    allowed = derive_allowed_domains(seeds)
    async with AsyncCrawler(policy, allowed, events=events) as crawler:
        timer = None
        if scan_timeout:
            timer = asyncio.get_running_loop().call_later(scan_timeout, crawler.cancel)
        try:
            return await crawler.crawl(seeds)
        finally:
            if timer is not None:
                timer.cancel()


@dataclass(slots=True)
class RunResult:
    """Итог запуска: накопитель и пути к записанным файлам."""

    sink: ResultSink
    output_path: Path
    failed_path: Path


class Engine:
    """Фасад для CLI и тестов: загрузка URL, запуск обхода и запись обоих CSV."""

    def __init__(self, policy: CrawlPolicy, events: Optional[CrawlEvents] = None) -> None:
        self.policy = policy
        self.events = events

    def load_urls(self, path: Union[str, Path]) -> List[str]:
        """Загружает и дедуплицирует seed-URL из CSV."""
        urls = load_url_file(path, self.policy.delimiter)
        logger.info("Loaded %d URLs from %s", len(urls), path)
        return remove_duplicates(urls)

    def run(
        self,
        input_path: Union[str, Path],
        output_path: Union[str, Path],
        failed_path: Union[str, Path, None] = None,
        *,
        with_source: bool = False,
        scan_timeout: Optional[float] = None,
    ) -> RunResult:
        """Полный цикл. Фатальные ошибки до начала обхода пробрасываются, файлы не создаются."""
        started = time.monotonic()
        urls = self.load_urls(input_path)

        try:
            sink = asyncio.run(start_scan(self.policy, urls, events=self.events, scan_timeout=scan_timeout))
        except Exception as exc:
            logger.error("Crawl failed: %s", exc)
            raise

        failed = Path(failed_path) if failed_path else default_failed_path(output_path)
        logger.info("... Writing scraped data output file: %s", output_path)
        saved_data = render_data(sink, output_path, self.policy.delimiter, with_source=with_source)
        logger.info("... Writing failed request URLs output file: %s", failed)
        saved_failed = render_failed(sink, failed, self.policy.delimiter)

        logger.info("... Run took %.2f s", time.monotonic() - started)
        return RunResult(sink=sink, output_path=saved_data, failed_path=saved_failed)
