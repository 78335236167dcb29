"""
=============================================================================
HTTP SERVER
=============================================================================

Ties the accept loop to the application:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   SocketServer ──accept──► Connection                                │
    │                                 │                                    │
    │              concurrent=False   │   concurrent=True                  │
    │              handled inline ◄───┴───► new daemon thread              │
    │                                 │                                    │
    │                                 ▼                                    │
    │          app.handle_stream(conn.reader()) ──► conn.send_response()   │
    │                                 │                                    │
    │                                 ▼                                    │
    │                            conn.close()                              │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

One request per connection: no keep-alive. The only state shared between
connection threads is the application's ResponseCache, which does its
own locking.

=============================================================================
"""

import logging
import threading
from typing import Optional

from .app import Application, create_app
from .config import ServerConfig
from .core import SocketServer, Connection


logger = logging.getLogger(__name__)


class HTTPServer:
    """
    The funhttp server.

    Usage:
        server = HTTPServer(ServerConfig(port=9000))
        server.run()  # Blocks until Ctrl+C / SIGTERM
    """

    def __init__(self, config: Optional[ServerConfig] = None, app: Optional[Application] = None):
        """
        Args:
            config: Server configuration. Uses defaults if not provided.
            app: Application to serve. Built with create_app(config) if
                 not provided.
        """
        self.config = config or ServerConfig()
        self.config.validate()  # Fail fast on invalid config

        self.app = app or create_app(self.config)
        self._socket_server = SocketServer(self.config)
    @property
    def address(self):
        return self._socket_server.address

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        return self._socket_server.wait_until_ready(timeout)

    # =========================================================================
    # SERVER LIFECYCLE
    # =========================================================================

    def run(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
        setup_logging: bool = True,
        banner: bool = True,
    ):
        """
        Start the server (blocking).

        Args:
            host: Override config host.
            port: Override config port.
            setup_logging: Configure the root logger from config.log_level.
            banner: Print the startup banner and routing table.
        """
        if host:
            self.config.host = host
        if port is not None:
            self.config.port = port

        if setup_logging:
            self._setup_logging()

        if banner:
            self._print_startup_banner()

        mode = "concurrent" if self.config.concurrent else "sequential"
        logger.info(f"Starting {self.config.server_name} on {self.config.host}:{self.config.port} ({mode})")

        try:
            self._socket_server.start(self._handle_connection)
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt")
        finally:
            self.app.close()
            logger.info("Server stopped")

    def shutdown(self):
        """Stop accepting connections. In-flight requests finish on their own."""
        self._socket_server.shutdown()

    def _print_startup_banner(self):
        mode = "thread per connection" if self.config.concurrent else "one connection at a time"
        weather = "mock data" if self.config.uses_mock_weather else "OpenWeatherMap"
        print()
        print(f"  {self.config.server_name} running on http://{self.config.host}:{self.config.port}")
        print(f"  Mode:    {mode}")
        print(f"  Weather: {weather}")
        print("  Press Ctrl+C to stop")

        self.app.router.print_routes()

    def _setup_logging(self):
        level = getattr(logging, self.config.log_level.upper(), logging.INFO)

        logging.basicConfig(
            level=level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        logging.getLogger("funhttp").setLevel(level)

    # =========================================================================
    # REQUEST HANDLING
    # =========================================================================

    def _handle_connection(self, conn: Connection):
        """Called by the accept loop for every new connection."""
        if not self.config.concurrent:
            self._process_connection(conn)
            return

        worker = threading.Thread(
            target=self._process_connection,
            args=(conn,),
            name=f"funhttp-{conn.id}",
            daemon=True,
        )
        worker.start()

    def _process_connection(self, conn: Connection):
        """
        Read one request, write one response, close.

        Socket errors only affect this connection; they are logged and the
        accept loop carries on.
        """
        with conn:
            try:
                response = self.app.handle_stream(conn.reader())
                conn.send_response(response)
            except TimeoutError:
                logger.warning(f"[{conn.id}] Timed out waiting for request from {conn.client_ip}")
            except OSError as e:
                logger.warning(f"[{conn.id}] Connection error: {e}")
