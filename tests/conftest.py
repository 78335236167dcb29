"""
pytest configuration and fixtures.
"""

import random
import socket
import threading
from pathlib import Path
from typing import Generator, List, Optional
import pytest

# Add src to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from funhttp import HTTPServer, ServerConfig, create_app
from funhttp.cache import ResponseCache
from funhttp.fetch import FetchError


ROOT_TEMPLATE = "<html><body>${links}</body></html>"
INDEX_PAGE = "<html><body>random image</body></html>"


@pytest.fixture
def sample_get_request() -> bytes:
    """Sample HTTP GET request."""
    return (
        b"GET /multiply?num1=6&num2=7 HTTP/1.1\r\n"
        b"Host: localhost:9000\r\n"
        b"User-Agent: pytest\r\n"
        b"Accept: */*\r\n"
        b"\r\n"
    )


class FakeClock:
    """Manually advanced clock for cache tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class FakeFetcher:
    """
    Stands in for HTTPFetcher. Returns a canned body (or raises a canned
    error) and remembers every URL it was asked for.
    """

    def __init__(self, body: bytes = b"", error: Optional[Exception] = None):
        self.body = body
        self.error = error
        self.calls: List[str] = []
        self.timeouts: List[Optional[float]] = []

    def fetch(self, url: str, timeout: Optional[float] = None) -> bytes:
        self.calls.append(url)
        self.timeouts.append(timeout)
        if self.error is not None:
            raise self.error
        return self.body


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def failing_fetcher() -> FakeFetcher:
    return FakeFetcher(error=FetchError("could not fetch https://example.test/ (ConnectionError)"))


@pytest.fixture
def www_dir(tmp_path: Path) -> Path:
    """A page directory with the two pages the server needs."""
    www = tmp_path / "www"
    www.mkdir()
    (www / "root.html").write_text(ROOT_TEMPLATE, encoding="utf-8")
    (www / "index.html").write_text(INDEX_PAGE, encoding="utf-8")
    return www


@pytest.fixture
def config(www_dir: Path) -> ServerConfig:
    """Default test server configuration."""
    return ServerConfig(
        host="127.0.0.1",
        port=0,  # Let OS pick a free port
        timeout=5.0,
        www_dir=str(www_dir),
        file_root=str(www_dir),
        log_level="WARNING",
    )


@pytest.fixture
def app(config: ServerConfig, fetcher: FakeFetcher, clock: FakeClock):
    """Application with a fake fetcher, a fake clock and a seeded RNG."""
    return create_app(
        config,
        fetcher=fetcher,
        cache=ResponseCache(ttl=config.cache_ttl, clock=clock),
        rng=random.Random(7),
    )


@pytest.fixture
def free_port() -> int:
    """Get a free port for testing."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


class TestServer:
    """Test server helper that runs in a background thread."""

    __test__ = False

    def __init__(self, server: HTTPServer):
        self.server = server
        self._thread: Optional[threading.Thread] = None

    @property
    def port(self) -> int:
        return self.server.address[1]

    def start(self):
        """Start server in background thread."""
        self._thread = threading.Thread(
            target=self.server.run,
            kwargs={"setup_logging": False, "banner": False},
            daemon=True,
        )
        self._thread.start()

        if not self.server.wait_until_ready(timeout=5.0):
            raise RuntimeError("Server failed to start")

    def stop(self):
        """Stop the server."""
        self.server.shutdown()

        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)

    def request(self, raw: bytes) -> bytes:
        """Send raw bytes and read until the server closes the connection."""
        with socket.create_connection(("127.0.0.1", self.port), timeout=5.0) as s:
            s.sendall(raw)
            chunks = []
            while True:
                chunk = s.recv(4096)
                if not chunk:
                    break
                chunks.append(chunk)
        return b"".join(chunks)

    def get(self, path: str) -> bytes:
        return self.request(f"GET {path} HTTP/1.1\r\nHost: localhost\r\n\r\n".encode("utf-8"))


def _start(config: ServerConfig, fetcher: FakeFetcher) -> TestServer:
    app = create_app(config, fetcher=fetcher, rng=random.Random(7))
    test_srv = TestServer(HTTPServer(config, app=app))
    test_srv.start()
    return test_srv


@pytest.fixture
def test_server(config: ServerConfig, fetcher: FakeFetcher) -> Generator[TestServer, None, None]:
    """A live sequential server on an OS-assigned port."""
    test_srv = _start(config, fetcher)
    yield test_srv
    test_srv.stop()


@pytest.fixture
def concurrent_server(config: ServerConfig, fetcher: FakeFetcher) -> Generator[TestServer, None, None]:
    """A live server with one thread per connection."""
    config.concurrent = True
    test_srv = _start(config, fetcher)
    yield test_srv
    test_srv.stop()
