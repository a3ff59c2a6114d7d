# === FILE: get_linked_data/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import random
import time
from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from aiohttp import ClientSession, ClientTimeout, TCPConnector

from get_linked_data.aggregator import ResultSink
from get_linked_data.config import CrawlPolicy
from get_linked_data.crawler.events import CrawlEvents
from get_linked_data.crawler.fetcher import Fetcher
from get_linked_data.crawler.models import ExtractionRecord, FailedRequest, FetchRequest
from get_linked_data.crawler.scope import AllowedDomains
from get_linked_data.errors import FetchError
from get_linked_data.logger import get_logger
from get_linked_data.parser import select_elements
from get_linked_data.utils import remove_duplicates

__all__ = ("AsyncCrawler",)


class AsyncCrawler:
    """Обходит только seed-URL пулом воркеров с лимитом параллелизма и случайной задержкой."""

    def __init__(
        self,
        policy: CrawlPolicy,
        allowed: AllowedDomains,
        events: Optional[CrawlEvents] = None,
        sink: Optional[ResultSink] = None,
    ) -> None:
        self.policy = policy
        self.allowed = allowed
        self.logger = get_logger("crawler")
        self.events = events or CrawlEvents(policy.query, self.logger)
        self.sink = sink if sink is not None else ResultSink()
        self.session: Optional[ClientSession] = None
        self._domain_slots: Dict[str, asyncio.Semaphore] = defaultdict(
            lambda: asyncio.Semaphore(self.policy.parallelism)
        )
        self._pending: Dict[str, None] = {}
        self._stop = asyncio.Event()

    async def __aenter__(self) -> AsyncCrawler:
        self.session = ClientSession(
            timeout=ClientTimeout(total=self.policy.timeout),
            headers={"User-Agent": self.policy.user_agent},
            connector=TCPConnector(
                limit=self.policy.parallelism,
                force_close=self.policy.disable_keep_alive,
            ),
            raise_for_status=False,
        )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    def cancel(self) -> None:
        """Stop dispatching; URLs that have not completed are recorded as failed."""
        self._stop.set()

    async def crawl(self, urls: Iterable[str]) -> ResultSink:
        if not self.session:
            raise RuntimeError("Session not initialized")
        seeds = remove_duplicates(list(urls))
        self.logger.info("... Collection started: %d URLs", len(seeds))
        start = time.monotonic()

        self._pending = dict.fromkeys(seeds)
        queue: asyncio.Queue[str] = asyncio.Queue()
        for url in seeds:
            queue.put_nowait(url)

        fetcher = Fetcher(self.session, self.policy, self.allowed)
        n_workers = min(self.policy.parallelism, len(seeds))
        workers = [asyncio.create_task(self._worker(queue, fetcher)) for _ in range(n_workers)]
        drained = asyncio.create_task(queue.join())
        stopped = asyncio.create_task(self._stop.wait())
        try:
            await asyncio.wait({drained, stopped}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            tasks: List[asyncio.Task] = [*workers, drained, stopped]
            for t in tasks:
                t.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            for url in list(self._pending):
                self._fail(FetchRequest(url), FetchError(url, "cancelled"))

        duration = time.monotonic() - start
        summary = self.sink.summary()
        self.logger.info(
            "... Collection finished: %d records, %d failed URLs in %.2f s",
            summary["records"],
            summary["failed"],
            duration,
        )
        return self.sink

    async def _worker(self, queue: asyncio.Queue[str], fetcher: Fetcher) -> None:
        while True:
            url = await queue.get()
            try:
                if not self._stop.is_set():
                    await self._visit(url, fetcher)
            except Exception as exc:
                self.logger.exception("Unexpected error while processing %s", url)
                self._fail(FetchRequest(url), FetchError(url, f"internal error: {exc}"))
            finally:
                queue.task_done()

    async def _visit(self, url: str, fetcher: Fetcher) -> None:
        request = FetchRequest(url)
        self.events.on_dispatch(request)

        key = self.allowed.domain_key(url)
        if key is None:
            self._fail(request, FetchError(url, "forbidden domain"))
            return

        async with self._domain_slots[key]:
            if self.policy.wait_time:
                await asyncio.sleep(random.uniform(0, self.policy.wait_seconds))
            try:
                page = await fetcher.fetch(request)
            except FetchError as exc:
                self._fail(request, exc)
                return

        self.events.on_response(request, page)
        try:
            texts = select_elements(page.content, self.policy.selector, self.policy.mode, is_html=page.is_html)
        except ValueError as exc:
            self._fail(request, FetchError(url, f"unparseable document: {exc}", page.status))
            return

        records: List[ExtractionRecord] = []
        for text in texts:
            value = self.events.on_match(request, text)
            if value is not None:
                records.append(ExtractionRecord(request.original_url, value))
        self.sink.add_records(records)
        self._pending.pop(url, None)

    def _fail(self, request: FetchRequest, error: FetchError) -> None:
        if request.original_url not in self._pending:
            return
        self._pending.pop(request.original_url)
        self.sink.add_failure(FailedRequest(request.original_url, error.status, error.reason))
        self.events.on_failure(request, error)
