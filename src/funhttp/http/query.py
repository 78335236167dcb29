"""
=============================================================================
QUERY-STRING DECODER
=============================================================================

Turns the part of a path after a route marker into a dict of parameters.

    path:    "weather?city=New+York&unit=f"
    marker:  "weather?"
    query:   "city=New+York&unit=f"
    params:  {"city": "New York", "unit": "f"}

=============================================================================
DECODING RULES
=============================================================================

    1. Split on "&"                       "a=1&b=2"   → ["a=1", "b=2"]
    2. Skip empty segments                "a=1&&b=2&" → ["a=1", "b=2"]
    3. Split each pair on its FIRST "="   "q=x=y"     → ("q", "x=y")
    4. Form-decode both sides as UTF-8    "%C3%A9+x"  → "é x"
    5. Keep insertion order, last duplicate wins

A non-empty pair with no "=" at all ("a=1&oops") fails the whole decode
with QueryDecodeError. Handlers answer that with 400 Bad Request.

=============================================================================
"""

from typing import Dict, Mapping
from urllib.parse import quote_plus, unquote_plus


class QueryDecodeError(ValueError):
    """A query string could not be decoded (client error)."""


def decode_query(query: str) -> Dict[str, str]:
    """
    Decode a raw "key=value&key=value" string.

    Raises:
        QueryDecodeError: A pair has no "=".
    """
    params: Dict[str, str] = {}

    for pair in query.split("&"):
        if not pair:
            continue

        name, sep, value = pair.partition("=")
        if not sep:
            raise QueryDecodeError(f"parameter '{pair}' has no value")

        params[unquote_plus(name, encoding="utf-8")] = unquote_plus(value, encoding="utf-8")

    return params


def encode_query(params: Mapping[str, str]) -> str:
    """Inverse of decode_query: form-encode names and values as UTF-8."""
    return "&".join(
        f"{quote_plus(name, encoding='utf-8')}={quote_plus(value, encoding='utf-8')}"
        for name, value in params.items()
    )


def query_after(path: str, marker: str) -> str:
    """
    Text following the first occurrence of marker in path.

    Returns "" if the marker does not occur.
    """
    _, found, rest = path.partition(marker)
    return rest if found else ""


def params_after(path: str, marker: str) -> Dict[str, str]:
    """decode_query(query_after(path, marker))."""
    return decode_query(query_after(path, marker))
