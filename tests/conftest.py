# File: tests/conftest.py
from pathlib import Path
from typing import Awaitable, Callable, List

import pytest
import pytest_asyncio
from aiohttp import web

from get_linked_data.config import CrawlPolicy

JSONLD_SELECTOR = 'script[type="application/ld+json"]'


def jsonld_page(*blocks: str) -> str:
    """Build an HTML page with one JSON-LD script per block."""
    scripts = "".join(f'<script type="application/ld+json">{b}</script>' for b in blocks)
    return f"<html><head><title>t</title>{scripts}</head><body><p>body</p></body></html>"


@pytest.fixture()
def make_policy() -> Callable[..., CrawlPolicy]:
    """
    Return a factory for CrawlPolicy with test-friendly defaults:
    no random delay, short timeout.
    """

    def _make(**overrides) -> CrawlPolicy:
        data = dict(selector=JSONLD_SELECTOR, wait_time=0, timeout=2.0, parallelism=4)
        data.update(overrides)
        return CrawlPolicy(**data)

    return _make


@pytest.fixture()
def seed_file(tmp_path) -> Callable[..., Path]:
    """Write rows to a temporary seed CSV and return its path."""

    def _write(rows: List[List[str]], delimiter: str = ",", name: str = "urls.csv") -> Path:
        path = tmp_path / name
        path.write_text(
            "".join(delimiter.join(row) + "\n" for row in rows), encoding="utf-8"
        )
        return path

    return _write


@pytest_asyncio.fixture
async def serve(unused_tcp_port_factory) -> Callable[[web.Application], Awaitable[str]]:
    """Start aiohttp apps on free ports, yield base URLs, clean up afterwards."""
    runners: List[web.AppRunner] = []

    async def _serve(app: web.Application) -> str:
        runner = web.AppRunner(app, handler_cancellation=True)
        await runner.setup()
        port = unused_tcp_port_factory()
        site = web.TCPSite(runner, "localhost", port)
        await site.start()
        runners.append(runner)
        return f"http://localhost:{port}"

    yield _serve
    for runner in runners:
        await runner.cleanup()
