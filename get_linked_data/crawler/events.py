# get_linked_data/crawler/events.py
"""
Per-request event hooks invoked by the crawl workers.

Every hook runs synchronously inside the worker that owns the request, so a
subclass sees the events of one URL in order: dispatch, then either response
followed by zero or more matches, or failure.
"""
from __future__ import annotations

import logging
from typing import Optional

from get_linked_data.crawler.models import FetchRequest, PageData
from get_linked_data.errors import FetchError, QueryError
from get_linked_data.logger import get_logger
from get_linked_data.parser.jq_query import extract


class CrawlEvents:
    """Default hooks: log progress and run the jq sub-query on every match."""

    def __init__(self, query: str = "", logger: Optional[logging.Logger] = None) -> None:
        self.query = query
        self.logger = logger or get_logger("crawler")

    def on_dispatch(self, request: FetchRequest) -> None:
        self.logger.debug("Dispatch %s", request.original_url)

    def on_response(self, request: FetchRequest, page: PageData) -> None:
        self.logger.info("... Status Code=%d Visited=%s", page.status, request.original_url)
        if request.current_url != request.original_url:
            self.logger.debug("... %s redirected to %s", request.original_url, request.current_url)

    def on_match(self, request: FetchRequest, text: str) -> Optional[str]:
        """Return the value to record for one matched element, or None to skip it."""
        try:
            return extract(text, self.query)
        except QueryError as exc:
            self.logger.error("... jq selector failed for %s: %s", request.original_url, exc)
            return None

    def on_failure(self, request: FetchRequest, error: FetchError) -> None:
        self.logger.error(
            "... Status Code=%s Error=%s Visited=%s",
            error.status if error.status is not None else 0,
            error.reason,
            request.original_url,
        )
        self.logger.debug("... Failed request detail: %r (last address %s)", error, request.current_url)
