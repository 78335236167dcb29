"""
Low-level networking: the TCP accept loop and the per-client connection
wrapper. Nothing in here knows about HTTP.
"""

from .connection import Connection, ConnectionState
from .socket_server import SocketServer

__all__ = ["Connection", "ConnectionState", "SocketServer"]
