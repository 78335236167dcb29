"""
=============================================================================
HTTP MODULE
=============================================================================

The protocol-facing half of funhttp:

    request.py       raw bytes → ParsedRequest (or None)
    query.py         "a=1&b=2" → {"a": "1", "b": "2"}
    router.py        path → handler → HTTPResponse
    response.py      HTTPResponse / ResponseBuilder → bytes
    status_codes.py  HTTPStatus enum

=============================================================================
"""

from .request import ParsedRequest, RequestParser, parse_request
from .query import QueryDecodeError, decode_query, encode_query, query_after, params_after
from .response import (
    HTTPResponse,
    ResponseBuilder,
    ok_text,
    ok_html,
    bad_request,
    not_found,
    internal_error,
)
from .router import Router, Route, is_empty, equals_ignore_case, contains
from .status_codes import HTTPStatus

__all__ = [
    # Request parsing
    "ParsedRequest",
    "RequestParser",
    "parse_request",

    # Query strings
    "QueryDecodeError",
    "decode_query",
    "encode_query",
    "query_after",
    "params_after",

    # Responses
    "HTTPResponse",
    "ResponseBuilder",
    "ok_text",
    "ok_html",
    "bad_request",
    "not_found",
    "internal_error",

    # Routing
    "Router",
    "Route",
    "is_empty",
    "equals_ignore_case",
    "contains",

    # Status codes
    "HTTPStatus",
]
