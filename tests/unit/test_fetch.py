"""
Unit tests for the outbound HTTP fetcher.

A fake session stands in for requests.Session so nothing leaves the
machine.
"""

import pytest
import requests

from funhttp.fetch import HTTPFetcher, FetchError, DEFAULT_TIMEOUT, redact


def make_response(status_code: int, content: bytes = b"", reason: str = "OK") -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    response._content = content
    return response


class FakeSession:
    """Records get() calls and replays a response or raises an error."""

    def __init__(self, response=None, error=None):
        self.headers = {}
        self.response = response
        self.error = error
        self.calls = []
        self.closed = False

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        self.closed = True


class TestRedact:

    def test_strips_query(self):
        url = "http://api.example.test/weather?q=Paris&appid=SECRET"
        assert redact(url) == "http://api.example.test/weather"

    def test_no_query(self):
        assert redact("https://api.github.com/users/x/repos") == "https://api.github.com/users/x/repos"


class TestHTTPFetcher:
    """Tests for HTTPFetcher."""

    def test_returns_body_on_success(self):
        session = FakeSession(make_response(200, b"[]"))
        fetcher = HTTPFetcher(session=session)

        assert fetcher.fetch("https://api.github.com/users/x/repos") == b"[]"
        assert session.calls == [("https://api.github.com/users/x/repos", DEFAULT_TIMEOUT)]

    def test_default_timeout_is_twenty_seconds(self):
        assert DEFAULT_TIMEOUT == 20.0

    def test_timeout_override(self):
        session = FakeSession(make_response(200, b"{}"))
        fetcher = HTTPFetcher(timeout=5.0, session=session)

        fetcher.fetch("http://x.test/")
        fetcher.fetch("http://x.test/", timeout=1.5)

        assert [timeout for _, timeout in session.calls] == [5.0, 1.5]

    def test_user_agent_set(self):
        session = FakeSession()
        HTTPFetcher(session=session, user_agent="funhttp/test")
        assert session.headers["User-Agent"] == "funhttp/test"

    def test_existing_user_agent_kept(self):
        session = FakeSession()
        session.headers["User-Agent"] = "custom"
        HTTPFetcher(session=session)
        assert session.headers["User-Agent"] == "custom"

    def test_non_2xx_raises(self):
        session = FakeSession(make_response(404, b"{}", reason="Not Found"))
        fetcher = HTTPFetcher(session=session)

        with pytest.raises(FetchError) as exc_info:
            fetcher.fetch("https://api.github.com/users/nobody/repos")

        assert exc_info.value.status_code == 404
        assert "404 Not Found" in str(exc_info.value)

    def test_timeout_raises(self):
        fetcher = HTTPFetcher(session=FakeSession(error=requests.Timeout("slow")))

        with pytest.raises(FetchError) as exc_info:
            fetcher.fetch("http://x.test/weather", timeout=20)

        assert "timed out after 20s" in str(exc_info.value)
        assert exc_info.value.status_code is None

    def test_connection_error_raises(self):
        fetcher = HTTPFetcher(session=FakeSession(error=requests.ConnectionError("refused")))

        with pytest.raises(FetchError) as exc_info:
            fetcher.fetch("http://x.test/")

        assert "ConnectionError" in str(exc_info.value)

    def test_errors_never_contain_query(self):
        url = "http://api.example.test/weather?q=Paris&appid=SECRET"

        for session in (
            FakeSession(make_response(401, b"", reason="Unauthorized")),
            FakeSession(error=requests.Timeout("slow")),
            FakeSession(error=requests.ConnectionError(url)),
        ):
            with pytest.raises(FetchError) as exc_info:
                HTTPFetcher(session=session).fetch(url)

            assert "SECRET" not in str(exc_info.value)
            assert exc_info.value.url == "http://api.example.test/weather"

    def test_close(self):
        session = FakeSession()
        HTTPFetcher(session=session).close()
        assert session.closed
