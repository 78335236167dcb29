"""
=============================================================================
APPLICATION
=============================================================================

The request pipeline, independent of sockets:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   byte stream                                                        │
    │        │                                                             │
    │        ▼                                                             │
    │   RequestParser ── None ──► b"<html>Illegal request: no GET</html>" │
    │        │                                                             │
    │        │ ParsedRequest(path)                                         │
    │        ▼                                                             │
    │   Router.dispatch(path) ──► handler(path) ──► HTTPResponse          │
    │        │                                                             │
    │        │ (unexpected exception → 500)                                │
    │        ▼                                                             │
    │   HTTPResponse.to_bytes()                                            │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

create_app() assembles the routing table from a ServerConfig. The server
(funhttp.server) only moves bytes between the socket and handle_stream().

=============================================================================
"""

from typing import BinaryIO, Callable, Optional, Sequence
import io
import logging
import random
import time

from .cache import ResponseCache
from .config import ServerConfig
from .fetch import HTTPFetcher
from .files import FileSystem
from .handlers import (
    multiply,
    greet,
    DirectoryPage,
    RandomImageHandler,
    FileHandler,
    GitHubHandler,
    WeatherHandler,
)
from .http.request import RequestParser
from .http.response import HTTPResponse, internal_error
from .http.router import Router, is_empty, equals_ignore_case, contains


logger = logging.getLogger(__name__)

# One line per request, like an access log:
#   "GET multiply?num1=6&num2=7" 200 14 0.41ms
access_logger = logging.getLogger("funhttp.access")

ILLEGAL_REQUEST = b"<html>Illegal request: no GET</html>"


class Application:
    """
    Parses a request, routes it and serialises the response.

    Never raises for anything a client sends or an upstream returns; every
    failure comes back as a response.
    """

    def __init__(self, router: Router, parser: Optional[RequestParser] = None, resources: Sequence = ()):
        """
        Args:
            router: Routing table.
            parser: Request parser (defaults to a GET parser).
            resources: Objects with close() owned by this application,
                       released by close().
        """
        self.router = router
        self.parser = parser or RequestParser()
        self._resources = list(resources)

    def handle_path(self, path: str) -> HTTPResponse:
        """Dispatch an already-parsed path."""
        try:
            return self.router.dispatch(path)
        except Exception as e:
            logger.exception(f"Handler error for {path!r}: {e}")
            return internal_error(f"Internal server error: {e}")

    def handle_stream(self, stream: BinaryIO) -> bytes:
        """Read one request from stream and return the response bytes."""
        request = self.parser.parse(stream)
        if request is None:
            access_logger.info("Illegal request: no request line")
            return ILLEGAL_REQUEST

        start = time.perf_counter()
        response = self.handle_path(request.path)
        data = response.to_bytes()
        duration_ms = (time.perf_counter() - start) * 1000

        access_logger.info(
            f'"{request.method} {request.path}" {response.status_code} '
            f"{len(response.body)} {duration_ms:.2f}ms"
        )
        return data

    def handle_bytes(self, data: bytes) -> bytes:
        """handle_stream() over an in-memory request."""
        return self.handle_stream(io.BytesIO(data))

    def close(self) -> None:
        """Release owned resources (the outbound HTTP session). Idempotent."""
        while self._resources:
            self._resources.pop().close()


def create_app(
    config: Optional[ServerConfig] = None,
    fetcher=None,
    cache: Optional[ResponseCache] = None,
    clock: Callable[[], float] = time.monotonic,
    rng: Optional[random.Random] = None,
) -> Application:
    """
    Build the application and its routing table.

    Args:
        config: Server configuration (defaults to ServerConfig()).
        fetcher: Outbound HTTP client; defaults to an HTTPFetcher, which the
                 application then owns and closes.
        cache: Shared response cache; defaults to one with config.cache_ttl.
        clock: Clock for the default cache.
        rng: Random source for the image routes.
    """
    config = config or ServerConfig()

    resources = []
    if fetcher is None:
        fetcher = HTTPFetcher(timeout=config.fetch_timeout, user_agent=config.server_name)
        resources.append(fetcher)
    if cache is None:
        cache = ResponseCache(ttl=config.cache_ttl, clock=clock)

    if config.uses_mock_weather:
        logger.warning(
            "OPENWEATHER_API_KEY is not set; the weather route will serve mock data"
        )

    www = FileSystem(config.www_dir)
    images = RandomImageHandler(www, rng=rng)
    github = GitHubHandler(fetcher, base_url=config.github_url, timeout=config.fetch_timeout)
    weather = WeatherHandler(
        cache,
        fetcher,
        api_key=config.weather_api_key,
        base_url=config.weather_url,
        timeout=config.fetch_timeout,
    )

    # Order is significant: first match wins
    router = Router()
    router.add_route("root", is_empty, DirectoryPage(www).handle)
    router.add_route("json", equals_ignore_case("json"), images.json)
    router.add_route("random", equals_ignore_case("random"), images.page)
    router.add_route("file", contains("file/"), FileHandler(FileSystem(config.file_root)).handle)
    router.add_route("multiply", contains("multiply?"), multiply)
    router.add_route("github", contains("github?"), github.handle)
    router.add_route("greet", contains("greet?"), greet)
    router.add_route("weather", contains("weather?"), weather.handle)

    return Application(router, resources=resources)
