# File: get_linked_data/parser/__init__.py
"""get_linked_data.parser: Выбор элементов по селектору (HTML/XML) и jq-преобразование их текста."""

from __future__ import annotations

from typing import List, Union

from .html_parser import select_html, validate_css
from .jq_query import compile_query, extract
from .xml_parser import select_xml, validate_xpath


def validate_selector(selector: str, mode: str) -> None:
    """Проверяет селектор для выбранного режима: CSS для ``html``, XPath для ``xml``."""
    if mode == "xml":
        validate_xpath(selector)
    else:
        validate_css(selector)


def select_elements(
    content: Union[str, bytes], selector: str, mode: str, *, is_html: bool = True
) -> List[str]:
    """Возвращает тексты элементов, найденных селектором, в порядке документа."""
    if mode == "xml":
        return select_xml(content, selector, is_html=is_html)
    return select_html(content, selector)


__all__ = [
    "compile_query",
    "extract",
    "select_elements",
    "select_html",
    "select_xml",
    "validate_selector",
]
