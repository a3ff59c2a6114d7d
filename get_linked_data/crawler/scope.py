# get_linked_data/crawler/scope.py
"""
Allowed-domain scoping: which hosts the crawler may send requests to.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Dict, Iterable, Iterator, Optional
from urllib.parse import urlsplit

import tldextract

from get_linked_data.errors import ScopeError
from get_linked_data.logger import get_logger

__all__ = ("AllowedDomains", "derive_allowed_domains", "hostname_of", "registered_domain")

logger = get_logger("scope")

# bundled public suffix snapshot only: no network fetch, no disk cache
_EXTRACT = tldextract.TLDExtract(cache_dir=None, suffix_list_urls=())


def hostname_of(url: str) -> str:
    """Return the lower-cased hostname of *url*, raising ScopeError if there is none."""
    try:
        parts = urlsplit(url)
        # .port validates the port component
        parts.port
    except ValueError as exc:
        raise ScopeError(f"URL parse failed for {url!r}: {exc}") from exc
    if not parts.hostname:
        raise ScopeError(f"URL parse failed for {url!r}: no hostname")
    return parts.hostname


@lru_cache(maxsize=4096)
def registered_domain(hostname: str) -> str:
    """
    Return the registrable domain of *hostname*, e.g. ``example.co.uk`` for
    ``www.example.co.uk``.

    Hosts without a public suffix (IP literals, ``localhost``, intranet names)
    are their own registrable domain. A hostname that is itself a public
    suffix has no registrable domain and raises ScopeError.
    """
    ext = _EXTRACT(hostname)
    if not ext.domain:
        raise ScopeError(f"Domain parse failed for {hostname!r}: no registrable domain")
    if not ext.suffix:
        return hostname
    return f"{ext.domain}.{ext.suffix}"


class AllowedDomains:
    """Ordered, read-only set of allowed hostnames and registrable domains."""

    def __init__(self, entries: Dict[str, str]) -> None:
        # hostname or domain -> registrable domain used for per-domain limits
        self._entries = dict(entries)

    def __contains__(self, host: object) -> bool:
        return host in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"AllowedDomains({list(self._entries)!r})"

    def allows(self, url: str) -> bool:
        """True if the hostname of *url* is one of the allowed entries."""
        try:
            return hostname_of(url) in self._entries
        except ScopeError:
            return False

    def domain_key(self, url: str) -> Optional[str]:
        """Registrable domain of an allowed *url*, or None if it is out of scope."""
        try:
            return self._entries.get(hostname_of(url))
        except ScopeError:
            return None


def derive_allowed_domains(urls: Iterable[str]) -> AllowedDomains:
    """
    Build the allow-list from the seed URLs.

    Every URL adds its registrable domain and its full hostname, each once.
    The first URL that cannot be parsed stops the whole derivation.
    """
    entries: Dict[str, str] = {}
    logger.info("Allowed domain list")
    for url in urls:
        hostname = hostname_of(url)
        domain = registered_domain(hostname)
        for name in (domain, hostname):
            if name not in entries:
                entries[name] = domain
                logger.info("... allowed: %s", name)
    return AllowedDomains(entries)
