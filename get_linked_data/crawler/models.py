# get_linked_data/crawler/models.py
"""
Data models for the crawl engine.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class FetchRequest:
    """A seed URL together with the address currently being requested.

    ``current_url`` moves along redirect hops; reporting always uses
    ``original_url``.
    """

    original_url: str
    current_url: str = ""
    redirects: int = 0

    def __post_init__(self) -> None:
        if not self.current_url:
            self.current_url = self.original_url


@dataclass(slots=True)
class PageData:
    """Raw response of a successful fetch."""

    url: str
    status: int
    content_type: str
    content: bytes

    @property
    def is_html(self) -> bool:
        return "html" in self.content_type


@dataclass(frozen=True, slots=True)
class ExtractionRecord:
    """One extracted value and the seed URL it came from."""

    url: str
    data: str


@dataclass(frozen=True, slots=True)
class FailedRequest:
    """A seed URL whose fetch ended in an error."""

    url: str
    status: Optional[int] = None
    error: str = ""
