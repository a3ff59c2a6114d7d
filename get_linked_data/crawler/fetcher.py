# get_linked_data/crawler/fetcher.py
"""
Fetcher module: one GET per seed URL with scope-checked redirects and a fixed timeout.
"""
from __future__ import annotations

import asyncio
from typing import Mapping
from urllib.parse import urljoin

from aiohttp import ClientError, ClientSession

from get_linked_data.config import CrawlPolicy
from get_linked_data.crawler.models import FetchRequest, PageData
from get_linked_data.crawler.scope import AllowedDomains
from get_linked_data.errors import FetchError

REDIRECT_STATUS = frozenset({301, 302, 303, 307, 308})
REQUEST_HEADERS: Mapping[str, str] = {"Accept-Encoding": "gzip"}


class Fetcher:
    """Fetches pages within the allowed domains. No retries: every error is final."""

    def __init__(self, session: ClientSession, policy: CrawlPolicy, allowed: AllowedDomains) -> None:
        self.session = session
        self.policy = policy
        self.allowed = allowed

    async def fetch(self, request: FetchRequest) -> PageData:
        """
        Fetch ``request.current_url``, following redirects by hand.

        Each hop is checked against the allowed domains and recorded in
        ``request.current_url``. Raises FetchError on transport errors,
        timeouts, HTTP status >= 400, redirect loops and out-of-scope hosts.
        """
        while True:
            url = request.current_url
            if not self.allowed.allows(url):
                raise FetchError(request.original_url, f"forbidden domain {url}")
            try:
                async with self.session.get(
                    url, headers=REQUEST_HEADERS, allow_redirects=False
                ) as resp:
                    status = resp.status
                    location = resp.headers.get("Location")
                    if status in REDIRECT_STATUS and location:
                        if request.redirects >= self.policy.max_redirects:
                            raise FetchError(request.original_url, "too many redirects", status)
                        request.redirects += 1
                        request.current_url = urljoin(url, location)
                        continue
                    if status >= 400:
                        raise FetchError(request.original_url, resp.reason or "HTTP error", status)
                    body = await resp.read()
                    ctype = resp.headers.get("Content-Type", "").lower()
                    return PageData(url, status, ctype, body)
            except asyncio.TimeoutError as exc:
                raise FetchError(request.original_url, "request timed out") from exc
            except ClientError as exc:
                raise FetchError(request.original_url, f"{type(exc).__name__}: {exc}") from exc
