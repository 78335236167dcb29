"""
=============================================================================
FUNHTTP - A Tiny HTTP Origin Server Built on Raw Sockets
=============================================================================

funhttp accepts TCP connections, hand-parses the request line and routes
the path to one of a fixed set of handlers:

    ┌─────────────────────────────────────────────────────────────────────┐
    │  GET /                          directory page (www/root.html)       │
    │  GET /json                      random demo image as JSON            │
    │  GET /random                    random image page (www/index.html)   │
    │  GET /file/<name>               does <name> exist?                   │
    │  GET /multiply?num1=3&num2=4    Result is: 12                        │
    │  GET /github?query=users/x/repos  repositories of x, as HTML         │
    │  GET /greet?name=Ana&lang=es    Hola, Ana!                           │
    │  GET /weather?city=Paris&unit=c temperature (cached for 10 minutes)  │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    funhttp/
    ├── __init__.py          # This file - package exports
    ├── __main__.py          # CLI entry point (python -m funhttp)
    ├── server.py            # HTTPServer: accept loop + application
    ├── app.py               # Application: parse → route → respond
    ├── config.py            # ServerConfig dataclass
    ├── cache.py             # ResponseCache (TTL, thread-safe)
    ├── fetch.py             # HTTPFetcher (requests) for upstream APIs
    ├── files.py             # FileSystem rooted at a directory
    ├── core/
    │   ├── socket_server.py # TCP accept loop
    │   └── connection.py    # Per-client socket wrapper
    ├── http/
    │   ├── request.py       # Request line parser
    │   ├── query.py         # Query-string decoder
    │   ├── router.py        # Ordered predicate router
    │   ├── response.py      # HTTPResponse / ResponseBuilder
    │   └── status_codes.py  # HTTPStatus enum
    └── handlers/
        ├── pages.py         # root, json, random, file
        ├── compute.py       # multiply, greet
        ├── github.py        # GitHub proxy
        └── weather.py       # Weather with response cache

=============================================================================
QUICK START
=============================================================================

    from funhttp import HTTPServer, ServerConfig

    HTTPServer(ServerConfig.from_env()).run()

Or without sockets at all:

    from funhttp import create_app

    app = create_app()
    app.handle_bytes(b"GET /greet?name=Ana&lang=es HTTP/1.1\\r\\n\\r\\n")

=============================================================================
"""

__version__ = "1.0.0"

from .app import Application, create_app
from .config import ServerConfig
from .server import HTTPServer

__all__ = ["Application", "HTTPServer", "ServerConfig", "create_app", "__version__"]
