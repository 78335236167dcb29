"""
=============================================================================
HTTP RESPONSE BUILDER
=============================================================================

Every handler produces exactly one HTTPResponse (the "route result"): a
status, an ordered list of headers and a body. The server serialises it
with to_bytes() and writes it straight to the socket.

=============================================================================
WIRE FORMAT
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │  HTTP/1.1 200 OK\r\n                         ← status line          │
    │  Content-Type: text/plain; charset=utf-8\r\n ← set by the handler   │
    │  Content-Length: 14\r\n                      ← added by to_bytes()  │
    │  Connection: close\r\n                       ← added by to_bytes()  │
    │  \r\n                                        ← end of headers       │
    │  Result is: 42                               ← body bytes           │
    └─────────────────────────────────────────────────────────────────────┘

The server never keeps a connection open, so every response advertises
Connection: close and the client reads the body until Content-Length.

=============================================================================
BUILDING RESPONSES
=============================================================================

    # Fluent builder
    response = (ResponseBuilder()
        .status(HTTPStatus.OK)
        .json({"header": "bread", "image": "https://..."})
        .build())

    # Shortcuts for the common cases
    ok_text("Hola, Ana!")
    bad_request("Missing 'query' parameter.")
    not_found("File not found: notes.txt", html=True)
    internal_error("Unexpected error: timed out")

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple, Union
import json

from .status_codes import HTTPStatus


TEXT_PLAIN = "text/plain; charset=utf-8"
TEXT_HTML = "text/html; charset=utf-8"
APPLICATION_JSON = "application/json; charset=utf-8"


@dataclass
class HTTPResponse:
    """
    A fully populated handler result.

    Headers are an ordered list of (name, value) pairs; order is preserved
    on the wire exactly as the handler added them.
    """

    status: HTTPStatus = HTTPStatus.OK
    headers: List[Tuple[str, str]] = field(default_factory=list)
    body: bytes = b""
    version: str = "HTTP/1.1"

    @property
    def status_code(self) -> int:
        return int(self.status)

    @property
    def status_text(self) -> str:
        return self.status.phrase

    @property
    def status_line(self) -> str:
        """
        The first line of the response.

        Format: HTTP-VERSION SP STATUS-CODE SP REASON-PHRASE
        Example: "HTTP/1.1 200 OK"
        """
        return f"{self.version} {self.status_code} {self.status_text}"

    @property
    def text(self) -> str:
        """Body decoded as UTF-8 (handy in logs and tests)."""
        return self.body.decode("utf-8", errors="replace")

    def get_header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Return the first header value matching name (case-insensitive)."""
        wanted = name.lower()
        for header_name, value in self.headers:
            if header_name.lower() == wanted:
                return value
        return default

    def set_header(self, name: str, value: str) -> "HTTPResponse":
        """
        Set a header, replacing any existing header with the same name.

        Returns self for method chaining.
        """
        wanted = name.lower()
        self.headers = [(n, v) for n, v in self.headers if n.lower() != wanted]
        self.headers.append((name, value))
        return self

    def to_bytes(self) -> bytes:
        """
        Serialise the response for socket.sendall().

        Content-Length and Connection are filled in unless the handler
        already set them.
        """
        headers = list(self.headers)
        present = {name.lower() for name, _ in headers}

        if "content-length" not in present:
            headers.append(("Content-Length", str(len(self.body))))
        if "connection" not in present:
            headers.append(("Connection", "close"))

        lines = [self.status_line]
        lines.extend(f"{name}: {value}" for name, value in headers)
        lines.append("")

        head = "\r\n".join(lines).encode("utf-8") + b"\r\n"
        return head + self.body


class ResponseBuilder:
    """
    Fluent builder for HTTPResponse.

    Each method returns self except build():

        ResponseBuilder().status(HTTPStatus.BAD_REQUEST).text("nope").build()
    """

    def __init__(self):
        self._status = HTTPStatus.OK
        self._headers: List[Tuple[str, str]] = []
        self._body: bytes = b""

    def status(self, status: HTTPStatus) -> "ResponseBuilder":
        self._status = HTTPStatus(status)
        return self

    def header(self, name: str, value: str) -> "ResponseBuilder":
        """Add a header, replacing an earlier one with the same name."""
        wanted = name.lower()
        self._headers = [(n, v) for n, v in self._headers if n.lower() != wanted]
        self._headers.append((name, value))
        return self

    def content_type(self, content_type: str) -> "ResponseBuilder":
        return self.header("Content-Type", content_type)

    def body(self, body: Union[str, bytes]) -> "ResponseBuilder":
        """Set a raw body. Strings are encoded as UTF-8."""
        if isinstance(body, str):
            self._body = body.encode("utf-8")
        else:
            self._body = body
        return self

    def text(self, text: str, content_type: str = TEXT_PLAIN) -> "ResponseBuilder":
        self._body = text.encode("utf-8")
        return self.content_type(content_type)

    def html(self, html: str) -> "ResponseBuilder":
        self._body = html.encode("utf-8")
        return self.content_type(TEXT_HTML)

    def json(self, data: Any) -> "ResponseBuilder":
        """
        Serialise data with json.dumps and set the JSON content type.

        ensure_ascii=False keeps non-ASCII labels readable on the wire.
        """
        self._body = json.dumps(data, ensure_ascii=False).encode("utf-8")
        return self.content_type(APPLICATION_JSON)

    def build(self) -> HTTPResponse:
        return HTTPResponse(
            status=self._status,
            headers=list(self._headers),
            body=self._body,
        )


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================
# The handlers only ever answer with plain text or HTML, so these take the
# message and an html flag rather than arbitrary payloads.
# =============================================================================

def _message(status: HTTPStatus, message: str, html: bool) -> HTTPResponse:
    builder = ResponseBuilder().status(status)
    if html:
        builder.html(message)
    else:
        builder.text(message)
    return builder.build()


def ok_text(text: str) -> HTTPResponse:
    """200 OK with a plain text body."""
    return _message(HTTPStatus.OK, text, html=False)


def ok_html(html: str) -> HTTPResponse:
    """200 OK with an HTML body."""
    return _message(HTTPStatus.OK, html, html=True)


def bad_request(message: str = "Bad Request", html: bool = False) -> HTTPResponse:
    """400 Bad Request: missing or invalid client input."""
    return _message(HTTPStatus.BAD_REQUEST, message, html)


def not_found(message: str = "Not Found", html: bool = False) -> HTTPResponse:
    """404 Not Found."""
    return _message(HTTPStatus.NOT_FOUND, message, html)


def internal_error(message: str = "Internal Server Error", html: bool = False) -> HTTPResponse:
    """
    500 Internal Server Error.

    The message is shown to the client as-is; callers pass the exception
    message, never a traceback.
    """
    return _message(HTTPStatus.INTERNAL_SERVER_ERROR, message, html)
