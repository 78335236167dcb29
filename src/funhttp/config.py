"""
=============================================================================
SERVER CONFIGURATION
=============================================================================

Every setting funhttp understands, in one dataclass.

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │   Priority (highest to lowest):                                     │
    │                                                                      │
    │   1. Command-line arguments                                         │
    │      └── python -m funhttp --port 3000                             │
    │                                                                      │
    │   2. Environment variables                                          │
    │      └── HTTP_PORT=3000 OPENWEATHER_API_KEY=... python -m funhttp  │
    │                                                                      │
    │   3. Default values (in this dataclass)                            │
    └─────────────────────────────────────────────────────────────────────┘

The weather API credential is the one setting that changes behaviour:
without it the weather route serves mock data. It is read from the
environment once, here, and passed explicitly to the weather handler.

=============================================================================
"""

import os
from dataclasses import dataclass
from typing import Optional


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class ServerConfig:
    """
    Configuration for the funhttp server.

    Development:
        ServerConfig(port=9000, log_level="DEBUG")

    Serving several clients at once:
        ServerConfig(host="0.0.0.0", concurrent=True)
    """

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK SETTINGS
    # ─────────────────────────────────────────────────────────────────────

    host: str = "127.0.0.1"
    """
    The IP address to bind to.
    - "127.0.0.1" - Localhost only
    - "0.0.0.0" - All network interfaces (containers)
    """

    port: int = 9000
    """The port number to listen on."""

    backlog: int = 128
    """Maximum number of queued, not yet accepted connections."""

    timeout: Optional[float] = 30.0
    """
    Read timeout for an accepted connection, in seconds.
    A client that never sends its blank line is dropped after this long.
    """

    concurrent: bool = False
    """
    False: handle one connection at a time, in the accept loop.
    True: one worker thread per connection.
    """

    # ─────────────────────────────────────────────────────────────────────
    # CONTENT
    # ─────────────────────────────────────────────────────────────────────

    www_dir: str = "www"
    """Directory holding root.html, index.html and the listed files."""

    file_root: str = "."
    """Directory the file/<name> route checks names against."""

    # ─────────────────────────────────────────────────────────────────────
    # UPSTREAM APIS
    # ─────────────────────────────────────────────────────────────────────

    fetch_timeout: float = 20.0
    """Timeout for each outbound request, in seconds. No retries."""

    cache_ttl: float = 600.0
    """How long a weather payload stays fresh, in seconds (10 minutes)."""

    weather_api_key: Optional[str] = None
    """OpenWeatherMap key. None means the weather route uses mock data."""

    weather_url: str = "http://api.openweathermap.org/data/2.5/weather"

    github_url: str = "https://api.github.com/"

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING / IDENTITY
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"
    """Logging level (DEBUG, INFO, WARNING, ERROR)."""

    server_name: str = "funhttp/1.0"
    """Shown in the startup banner and sent as the outbound User-Agent."""

    def __post_init__(self):
        # An empty credential counts as no credential
        if not self.weather_api_key:
            self.weather_api_key = None

    @property
    def uses_mock_weather(self) -> bool:
        return self.weather_api_key is None

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """
        Create configuration from environment variables.

        =====================================================================
        ENVIRONMENT VARIABLES
        =====================================================================

        HTTP_HOST            Server host (default: 127.0.0.1)
        HTTP_PORT            Server port (default: 9000)
        HTTP_TIMEOUT         Connection read timeout (default: 30)
        HTTP_CONCURRENT      1/true/yes for a thread per connection
        HTTP_WWW_DIR         Page directory (default: www)
        HTTP_FETCH_TIMEOUT   Outbound request timeout (default: 20)
        HTTP_LOG_LEVEL       Logging level (default: INFO)
        OPENWEATHER_API_KEY  Weather credential (default: mock data)

        =====================================================================
        """
        return cls(
            host=os.getenv("HTTP_HOST", "127.0.0.1"),
            port=int(os.getenv("HTTP_PORT", "9000")),
            timeout=float(os.getenv("HTTP_TIMEOUT", "30")),
            concurrent=_env_flag("HTTP_CONCURRENT"),
            www_dir=os.getenv("HTTP_WWW_DIR", "www"),
            fetch_timeout=float(os.getenv("HTTP_FETCH_TIMEOUT", "20")),
            weather_api_key=os.getenv("OPENWEATHER_API_KEY"),
            log_level=os.getenv("HTTP_LOG_LEVEL", "INFO"),
        )

    def validate(self) -> None:
        """
        Validate configuration values at startup (fail fast).

        Port 0 is allowed: the OS picks a free port.
        """
        if not 0 <= self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}. Must be 0-65535.")

        if self.backlog < 1:
            raise ValueError("backlog must be >= 1")

        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be > 0")

        if self.fetch_timeout <= 0:
            raise ValueError("fetch_timeout must be > 0")

        if self.cache_ttl < 0:
            raise ValueError("cache_ttl must be >= 0")
