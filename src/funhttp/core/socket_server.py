"""
=============================================================================
TCP SOCKET SERVER
=============================================================================

The accept loop. It knows nothing about HTTP: it binds, listens and hands
every accepted socket, wrapped in a Connection, to a callback.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │    start(handler)                                                    │
    │        ├──► _create_socket()   socket + SO_REUSEADDR + TCP_NODELAY   │
    │        ├──► bind() / listen()                                        │
    │        ├──► _setup_signals()   SIGTERM/SIGINT → shutdown()           │
    │        └──► _accept_loop()     while running: accept → handler(conn) │
    │                                                                      │
    │    shutdown()                  running = False (idempotent)          │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

The listening socket has a 1 second timeout so the loop wakes up
regularly to notice shutdown(), even when no client is connecting.

=============================================================================
"""

import socket
import signal
import logging
import threading
from typing import Callable, Optional, Tuple

from ..config import ServerConfig
from .connection import Connection


logger = logging.getLogger(__name__)


class SocketServer:
    """
    Blocking TCP accept loop.

    Usage:
        def handle_connection(conn: Connection):
            ...

        server = SocketServer(config)
        server.start(handle_connection)  # Blocks until shutdown
    """

    def __init__(self, config: ServerConfig):
        self.config = config
        self._socket: Optional[socket.socket] = None
        self._running = False
        self._ready = threading.Event()
        self._original_handlers: dict = {}

    @property
    def address(self) -> Tuple[str, int]:
        """
        The bound (host, port). After start() this is the real port, even
        when the config asked for port 0.
        """
        if self._socket is not None:
            return self._socket.getsockname()[:2]
        return (self.config.host, self.config.port)

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        """Block until the socket is listening. Returns False on timeout."""
        return self._ready.wait(timeout)

    def _create_socket(self) -> socket.socket:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)

        # Avoid "Address already in use" while the old socket is in TIME_WAIT
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)

        # Responses are written in one sendall(); no point batching them
        sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)

        # accept() wakes up every second to check the running flag
        sock.settimeout(1.0)
        return sock

    def _setup_signals(self):
        """
        Turn SIGTERM/SIGINT into a graceful shutdown.

        Signal handlers can only be installed from the main thread, so
        this is skipped when the server runs in a background thread
        (as it does in the tests).
        """
        if threading.current_thread() is not threading.main_thread():
            return

        def shutdown_handler(signum, frame):
            signal_name = signal.Signals(signum).name
            logger.info(f"Received {signal_name}, initiating shutdown...")
            self.shutdown()

        self._original_handlers[signal.SIGTERM] = signal.signal(signal.SIGTERM, shutdown_handler)
        self._original_handlers[signal.SIGINT] = signal.signal(signal.SIGINT, shutdown_handler)

    def _restore_signals(self):
        for sig, handler in self._original_handlers.items():
            signal.signal(sig, handler)
        self._original_handlers.clear()

    def start(self, connection_handler: Callable[[Connection], None]):
        """
        Bind, listen and accept connections until shutdown().

        Raises:
            OSError: The address could not be bound.
        """
        self._socket = self._create_socket()

        try:
            self._socket.bind((self.config.host, self.config.port))
        except OSError as e:
            logger.error(f"Failed to bind to {self.config.host}:{self.config.port}: {e}")
            self._socket.close()
            self._socket = None
            raise

        self._socket.listen(self.config.backlog)

        self._running = True
        self._setup_signals()

        host, port = self.address
        logger.info(f"Server listening on {host}:{port}")
        self._ready.set()

        try:
            self._accept_loop(connection_handler)
        finally:
            self._cleanup()

    def _accept_loop(self, connection_handler: Callable[[Connection], None]):
        while self._running:
            try:
                client_socket, client_address = self._socket.accept()
            except socket.timeout:
                continue
            except OSError as e:
                if self._running:
                    logger.error(f"Accept error: {e}")
                break

            logger.debug(f"Accepted connection from {client_address[0]}:{client_address[1]}")

            conn = Connection(
                socket=client_socket,
                address=client_address,
                timeout=self.config.timeout,
            )
            connection_handler(conn)

    def shutdown(self):
        """Stop the accept loop. Safe to call from any thread, repeatedly."""
        logger.info("Shutting down socket server...")
        self._running = False

    def _cleanup(self):
        self._restore_signals()

        if self._socket:
            try:
                self._socket.close()
            except OSError:
                pass
            self._socket = None

        self._running = False
        self._ready.clear()
        logger.info("Socket server stopped")
