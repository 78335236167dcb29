"""
=============================================================================
OUTBOUND HTTP
=============================================================================

The fetch capability used by the GitHub and live-weather routes:

    fetch(url, timeout) → bytes            on a 2xx response
                        → raises FetchError otherwise

It is a thin wrapper around a requests.Session. A failure is reported
once and never retried. Every call is blocking and bounded by a timeout
(20 seconds by default), so a slow upstream only ever stalls the request
that issued it.

Query strings are stripped from URLs before they reach a log line or an
error message: the weather URL carries the API key as ?appid=...

=============================================================================
"""

from typing import Optional
import logging

import requests


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 20.0


class FetchError(Exception):
    """An outbound request failed (network error, timeout or non-2xx)."""

    def __init__(self, message: str, url: str = "", status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


def redact(url: str) -> str:
    """url without its query string."""
    return url.split("?", 1)[0]


class HTTPFetcher:
    """
    Blocking GET client.

    Args:
        timeout: Default timeout in seconds for each call.
        session: Optional requests.Session to reuse (tests inject one).
        user_agent: Sent as User-Agent; api.github.com rejects requests
                    without one.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
        user_agent: str = "funhttp/1.0",
    ):
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.setdefault("User-Agent", user_agent)

    def fetch(self, url: str, timeout: Optional[float] = None) -> bytes:
        """
        GET url and return the response body.

        Raises:
            FetchError: The request could not be completed or returned a
                        non-2xx status.
        """
        timeout = self.timeout if timeout is None else timeout
        safe_url = redact(url)
        logger.debug(f"Fetching {safe_url} (timeout={timeout}s)")

        try:
            response = self._session.get(url, timeout=timeout)
        except requests.Timeout as e:
            logger.warning(f"Timed out fetching {safe_url}")
            raise FetchError(f"timed out after {timeout:g}s fetching {safe_url}", url=safe_url) from e
        except requests.RequestException as e:
            logger.warning(f"Failed to fetch {safe_url}: {type(e).__name__}")
            raise FetchError(f"could not fetch {safe_url} ({type(e).__name__})", url=safe_url) from e

        if not response.ok:
            logger.warning(f"{safe_url} returned {response.status_code}")
            raise FetchError(
                f"{response.status_code} {response.reason} for {safe_url}",
                url=safe_url,
                status_code=response.status_code,
            )

        return response.content

    def close(self) -> None:
        self._session.close()
