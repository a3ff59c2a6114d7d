# File: get_linked_data/parser/xml_parser.py
"""get_linked_data.parser.xml_parser: XPath-выборка элементов из XML- или HTML-дерева (lxml)."""

from __future__ import annotations

from typing import List, Union

from lxml import etree
from lxml import html as lxml_html


def validate_xpath(expression: str) -> None:
    """Бросает ValueError, если XPath-выражение не компилируется."""
    try:
        etree.XPath(expression)
    except etree.XPathSyntaxError as exc:
        raise ValueError(f"Invalid XPath expression {expression!r}: {exc}") from exc


def _to_text(item: object) -> str:
    # элементы отдают весь вложенный текст, атрибуты и text() приходят строками
    if isinstance(item, etree._Element):
        return "".join(item.itertext())
    return str(item)


def select_xml(content: Union[str, bytes], expression: str, *, is_html: bool = False) -> List[str]:
    """Разбирает документ и возвращает текст каждого узла, найденного XPath-выражением.

    Args:
        content: тело ответа (bytes или str).
        expression: XPath, например ``//script[@type="application/ld+json"]``.
        is_html: разбирать как HTML (для ответов text/html), иначе как XML.

    Returns:
        Список строк в порядке документа.

    Raises:
        ValueError: документ не удалось разобрать.
    """
    if isinstance(content, str):
        content = content.encode("utf-8")
    if not content.strip():
        return []

    try:
        if is_html:
            root = lxml_html.document_fromstring(content)
        else:
            parser = etree.XMLParser(ns_clean=True, recover=True, resolve_entities=False)
            root = etree.fromstring(content, parser=parser)
    except etree.ParserError:
        # lxml.html отказывается строить дерево без элементов: совпадений нет
        return []
    except etree.LxmlError as exc:
        raise ValueError(f"Document could not be parsed: {exc}") from exc
    if root is None:
        return []

    try:
        result = root.xpath(expression)
    except etree.XPathEvalError as exc:
        raise ValueError(f"XPath evaluation failed: {exc}") from exc
    if isinstance(result, list):
        return [_to_text(item) for item in result]
    # скалярные выражения (count(), string(), boolean())
    return [str(result)]
