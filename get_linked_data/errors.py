# File: get_linked_data/errors.py
"""get_linked_data.errors: Иерархия исключений загрузки, скоупинга, запросов и извлечения."""

from __future__ import annotations

from typing import Optional

__all__ = (
    "GetLinkedDataError",
    "FileError",
    "FormatError",
    "ScopeError",
    "FetchError",
    "QueryError",
)


class GetLinkedDataError(Exception):
    """Base class for every error raised by the package."""


class FileError(GetLinkedDataError, OSError):
    """Seed file is missing or unreadable. Fatal, raised before crawling starts."""


class FormatError(GetLinkedDataError, ValueError):
    """Bad field delimiter or malformed seed table. Fatal at load time."""


class ScopeError(GetLinkedDataError, ValueError):
    """A seed URL could not be parsed or resolved to a registrable domain."""


class FetchError(GetLinkedDataError):
    """A single URL could not be fetched; the crawl carries on without it."""

    def __init__(self, url: str, reason: str, status: Optional[int] = None) -> None:
        super().__init__(f"{reason} ({url})" if status is None else f"{reason}: HTTP {status} ({url})")
        self.url = url
        self.reason = reason
        self.status = status


class QueryError(GetLinkedDataError, ValueError):
    """The jq sub-query could not be applied to one matched element."""
