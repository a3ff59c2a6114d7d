# get_linked_data/parser/jq_query.py
"""
jq sub-query stage: projects a value out of the JSON text of a matched element.

The stage is pure and synchronous. It knows nothing about URLs, sessions or
workers and is called once per matched element.
"""
from __future__ import annotations

import json
from functools import lru_cache
from typing import Any

import jq

from get_linked_data.errors import QueryError

__all__ = ("compile_query", "extract")


@lru_cache(maxsize=64)
def compile_query(query: str) -> Any:
    """Compile a jq filter expression, raising QueryError on a malformed one."""
    try:
        return jq.compile(query)
    except ValueError as exc:
        raise QueryError(f"jq selector parse failed: {exc}") from exc


def extract(element_text: str, query: str) -> str:
    """
    Apply *query* to the JSON object in *element_text* and return the first result.

    An empty query returns the text unchanged. Only the first value produced
    by the filter is used; any further values are discarded. The value is
    returned as compact JSON with object keys sorted.
    """
    if not query:
        return element_text

    try:
        data = json.loads(element_text)
    except json.JSONDecodeError as exc:
        raise QueryError(f"selected element text is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise QueryError(
            f"selected element text is not valid JSON object: got {type(data).__name__}"
        )

    program = compile_query(query)
    results = iter(program.input_value(data))
    try:
        value = next(results)
    except StopIteration:
        raise QueryError("jq selector failed: no value produced") from None
    except ValueError as exc:
        raise QueryError(f"jq selector failed: query runtime error: {exc}") from exc

    return json.dumps(value, ensure_ascii=False, separators=(",", ":"), sort_keys=True)
