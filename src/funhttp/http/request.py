"""
=============================================================================
HTTP REQUEST PARSER
=============================================================================

Reads the head of an HTTP request one line at a time and pulls the path
out of the request line. Nothing else in the head is interpreted: header
lines are read and thrown away.

=============================================================================
WHAT THE PARSER LOOKS AT
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │    GET /multiply?num1=3&num2=4 HTTP/1.1\r\n     ← request line       │
    │    ─┬─ ───────────┬─────────── ───┬────                              │
    │     │             │               │                                  │
    │   method    between the 1st   ignored                                │
    │   token     and 2nd space                                            │
    │                   │                                                  │
    │                   ▼                                                  │
    │         path = "multiply?num1=3&num2=4"   (leading "/" dropped)      │
    │                                                                      │
    │    Host: localhost:9000\r\n                     ← read, discarded    │
    │    User-Agent: curl/8.0\r\n                     ← read, discarded    │
    │    \r\n                                         ← STOP               │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Only lines that START WITH the method token count as request lines. The
parser stops at the first blank line or at end of stream, whichever comes
first, and never reads past it (no body handling).

=============================================================================
"NO REQUEST"
=============================================================================

The parser never raises on bad input. Every malformed case degrades to
None, which the application turns into the fixed illegal-request body:

    - blank line before any request line      → None
    - stream closed before any request line   → None
    - request line with no second space       → None (nothing captured)
    - only a POST line when parsing for GET   → None

=============================================================================
"""

from dataclasses import dataclass
from typing import BinaryIO, Optional
import io
import logging


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParsedRequest:
    """
    The only thing the router needs from a request: its path.

    path is everything between the method token and the protocol token,
    minus the leading slash, so "GET / HTTP/1.1" gives path == "".
    """

    method: str
    path: str


class RequestParser:
    """
    Single-pass, line-at-a-time request head parser.

    Usage:
        parser = RequestParser()
        request = parser.parse(sock.makefile("rb"))
        if request is None:
            ...  # illegal request
    """

    def __init__(self, method: str = "GET", max_line_length: int = 64 * 1024):
        """
        Args:
            method: The method token a request line must start with.
            max_line_length: Longest line read in one go. Longer lines are
                             split by readline(), which only ever makes
                             them look like header noise.
        """
        self.method = method
        self.max_line_length = max_line_length

    def parse(self, stream: BinaryIO) -> Optional[ParsedRequest]:
        """
        Read the request head from stream and return the parsed request.

        Args:
            stream: Binary stream with readline(), positioned at the start
                    of the connection.

        Returns:
            ParsedRequest, or None if no usable request line was seen
            before the blank line (or end of stream).
        """
        path: Optional[str] = None

        while True:
            raw = stream.readline(self.max_line_length)
            if not raw:
                # Stream closed before the header terminator
                break

            line = raw.decode("utf-8", errors="replace").rstrip("\r\n")
            logger.debug(f"Received: {line}")

            if line == "":
                # End of headers
                break

            if line.startswith(self.method):
                captured = self._extract_path(line)
                if captured is not None:
                    path = captured

        if path is None:
            return None
        return ParsedRequest(method=self.method, path=path)

    @staticmethod
    def _extract_path(line: str) -> Optional[str]:
        """
        Substring between the first and second space, leading "/" removed.

        "GET /json HTTP/1.1" → "json"
        "GET /json"          → None   (no second space)
        """
        first_space = line.find(" ")
        if first_space == -1:
            return None

        second_space = line.find(" ", first_space + 1)
        if second_space == -1:
            return None

        target = line[first_space + 1:second_space]
        if target.startswith("/"):
            target = target[1:]
        return target


# =============================================================================
# CONVENIENCE FUNCTION
# =============================================================================

def parse_request(data: bytes, method: str = "GET") -> Optional[ParsedRequest]:
    """
    Parse a complete request head held in memory.

    Wraps the bytes in a BytesIO and runs a RequestParser over it.
    """
    return RequestParser(method=method).parse(io.BytesIO(data))
