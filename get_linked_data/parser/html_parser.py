# === FILE: get_linked_data/parser/html_parser.py ===
"""Markup-tree element selection.

Documents are parsed with BeautifulSoup and matched with CSS selectors
(soupsieve). Each match contributes its full text content, in document
order, which is what the extraction stage consumes. For JSON-LD this is
typically ``script[type="application/ld+json"]``.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Union

import soupsieve
from bs4 import BeautifulSoup

__all__: Sequence[str] = ("select_html", "validate_css")


def validate_css(selector: str) -> None:
    """Raise :class:`ValueError` if *selector* is not a valid CSS selector."""
    try:
        soupsieve.compile(selector)
    except soupsieve.SelectorSyntaxError as exc:
        raise ValueError(f"Invalid CSS selector {selector!r}: {exc}") from exc


def select_html(content: Union[str, bytes], selector: str) -> list[str]:
    """Return the text of every element matching *selector*.

    Parameters
    ----------
    content
        Raw markup. Bytes are decoded by BeautifulSoup using the document's
        own charset declaration.
    selector
        CSS selector, e.g. ``script[type="application/ld+json"]``.
    """
    if not content:
        return []
    soup = BeautifulSoup(content, "html.parser")
    return [tag.get_text() for tag in soup.select(selector)]
