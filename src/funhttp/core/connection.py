"""
=============================================================================
CONNECTION MANAGEMENT
=============================================================================

Wraps one accepted client socket for exactly one request/response:

    accept ─► Connection ─► reader() ─► app.handle_stream() ─► send_response()
                                                                 │
                                                              close()

=============================================================================
READING LINE BY LINE
=============================================================================

TCP is a byte stream, not a message protocol: the request head can
arrive in any number of chunks. Instead of buffering by hand we let
socket.makefile("rb") do it. Its readline() keeps calling recv() until
it has a full line, which is exactly what the request parser wants:

    recv() → "GET /json HT"
    recv() → "TP/1.1\\r\\nHost: lo"         readline() → b"GET /json HTTP/1.1\\r\\n"
    recv() → "calhost\\r\\n\\r\\n"          readline() → b"Host: localhost\\r\\n"
                                           readline() → b"\\r\\n"   (stop)

The socket's read timeout applies to each underlying recv(), so a client
that goes quiet raises socket.timeout instead of hanging the server.

=============================================================================
"""

import socket
import time
import logging
from enum import Enum
from dataclasses import dataclass, field
from typing import BinaryIO, Optional
import uuid


logger = logging.getLogger(__name__)


class ConnectionState(Enum):
    """Where a connection is in its (single) request cycle."""

    NEW = "new"
    READING = "reading"
    PROCESSING = "processing"
    WRITING = "writing"
    CLOSED = "closed"


@dataclass
class Connection:
    """
    A client connection.

    Attributes:
        socket: The accepted client socket.
        address: Client's (ip, port) tuple.
        id: Short identifier used in log lines.
        state: Current connection state.
        created_at: When the connection was accepted.
    """

    socket: socket.socket
    address: tuple

    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    state: ConnectionState = ConnectionState.NEW
    created_at: float = field(default_factory=time.time)

    timeout: Optional[float] = 30.0

    _reader: Optional[BinaryIO] = field(default=None, repr=False)

    def __post_init__(self):
        self.socket.setblocking(True)
        if self.timeout:
            self.socket.settimeout(self.timeout)

    @property
    def client_ip(self) -> str:
        return self.address[0]

    @property
    def age(self) -> float:
        """Seconds since the connection was accepted."""
        return time.time() - self.created_at

    def reader(self) -> BinaryIO:
        """
        Buffered binary stream over the socket (created once).
        """
        if self._reader is None:
            self.state = ConnectionState.READING
            self._reader = self.socket.makefile("rb")
        return self._reader

    def send_response(self, data: bytes) -> bool:
        """
        Send all of data to the client.

        Returns:
            True if sent, False if the client had already gone away.
        """
        self.state = ConnectionState.WRITING
        try:
            # sendall() loops until every byte is written
            self.socket.sendall(data)
            return True
        except OSError as e:
            logger.warning(f"[{self.id}] Send failed: {e}")
            return False

    def close(self):
        """
        Close the connection: FIN to the client, then release the socket.

        Safe to call more than once.
        """
        if self.state == ConnectionState.CLOSED:
            return

        if self._reader is not None:
            try:
                self._reader.close()
            except OSError:
                pass

        try:
            # Tell the client we are done sending
            self.socket.shutdown(socket.SHUT_WR)
        except OSError:
            pass  # Already disconnected

        try:
            self.socket.close()
        except OSError:
            pass

        self.state = ConnectionState.CLOSED
        logger.debug(f"[{self.id}] Connection closed after {self.age:.3f}s")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False  # Don't suppress exceptions
