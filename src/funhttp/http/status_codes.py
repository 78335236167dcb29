"""
=============================================================================
HTTP STATUS CODES
=============================================================================

The status codes funhttp can put on a response line, with their reason
phrases.

    HTTP/1.1 404 Not Found
             ─┬─ ────┬────
              │      └── Reason phrase (HTTPStatus.phrase)
              └───────── Status code   (int(HTTPStatus))

Only the handful of codes the handlers actually produce are listed:

    ┌──────────┬──────────────────────────────────────────────────────────┐
    │ 200      │ Every successful route                                    │
    │ 400      │ Missing/invalid parameters, malformed query, no route     │
    │ 404      │ file/ route when the file does not exist                  │
    │ 500      │ Upstream fetch failures, bad JSON, unexpected exceptions  │
    └──────────┴──────────────────────────────────────────────────────────┘

=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """
    HTTP status codes and reason phrases.

    Extends IntEnum, so a status compares equal to its integer code:

        >>> HTTPStatus.OK == 200
        True
        >>> HTTPStatus.NOT_FOUND.phrase
        'Not Found'
    """

    OK = 200

    BAD_REQUEST = 400
    NOT_FOUND = 404

    INTERNAL_SERVER_ERROR = 500

    @property
    def phrase(self) -> str:
        """Reason phrase used on the status line."""
        return _STATUS_PHRASES.get(self, "Unknown")


_STATUS_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.BAD_REQUEST: "Bad Request",
    HTTPStatus.NOT_FOUND: "Not Found",
    HTTPStatus.INTERNAL_SERVER_ERROR: "Internal Server Error",
}
