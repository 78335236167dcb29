"""
=============================================================================
ROUTE DISPATCHER
=============================================================================

Maps a request path to a handler by testing an ORDERED list of predicates
from top to bottom. The first predicate that matches wins.

=============================================================================
ROUTING TABLE
=============================================================================

    ┌────┬──────────────────────────────┬───────────────────────────────┐
    │ #  │ predicate                    │ handler                       │
    ├────┼──────────────────────────────┼───────────────────────────────┤
    │ 1  │ path == ""                   │ root directory page           │
    │ 2  │ path equals "json" (any case)│ random image as JSON          │
    │ 3  │ path equals "random" (any…)  │ random image HTML page        │
    │ 4  │ "file/" in path              │ file existence check          │
    │ 5  │ "multiply?" in path          │ multiplication                │
    │ 6  │ "github?" in path            │ GitHub proxy                  │
    │ 7  │ "greet?" in path             │ greeting                      │
    │ 8  │ "weather?" in path           │ weather (cached)              │
    │ -  │ nothing matched              │ 400 "I am not sure what ..."  │
    └────┴──────────────────────────────┴───────────────────────────────┘

=============================================================================
WHY SUBSTRING MATCHING?
=============================================================================

Routes 4-8 match if the marker appears ANYWHERE in the path, not just at
the start of a segment. That is observable behaviour and is kept as is:

    "greet?name=multiply?"   → route 5 (multiply), because 5 is tested first
    "x/file/y"               → route 4 (file)

Order therefore matters just as much as the predicates themselves. The
table is built once at startup by funhttp.app.create_app().

=============================================================================
"""

from dataclasses import dataclass
from typing import Callable, List, Optional
import logging

from .response import HTTPResponse, bad_request


logger = logging.getLogger(__name__)


# A handler receives the decoded path and returns a complete response
Handler = Callable[[str], HTTPResponse]
Predicate = Callable[[str], bool]

UNRECOGNIZED_MESSAGE = "I am not sure what you want me to do..."


# =============================================================================
# PREDICATES
# =============================================================================

def is_empty(path: str) -> bool:
    """Matches only the root path ("")."""
    return path == ""


def equals_ignore_case(name: str) -> Predicate:
    """Matches path == name, ignoring case."""
    folded = name.casefold()

    def predicate(path: str) -> bool:
        return path.casefold() == folded

    return predicate


def contains(marker: str) -> Predicate:
    """Matches when marker occurs anywhere in the path."""

    def predicate(path: str) -> bool:
        return marker in path

    return predicate


@dataclass
class Route:
    """One row of the routing table."""

    name: str
    predicate: Predicate
    handler: Handler


class Router:
    """
    First-match router over an ordered list of (predicate, handler) pairs.

    Usage:
        router = Router()
        router.add_route("root", is_empty, root_page.handle)

        @router.route("multiply", contains("multiply?"))
        def multiply(path):
            ...

        response = router.dispatch("multiply?num1=6&num2=7")
    """

    def __init__(self):
        self._routes: List[Route] = []

    def add_route(self, name: str, predicate: Predicate, handler: Handler) -> Route:
        """
        Append a route. Routes are tested in the order they were added.
        """
        route = Route(name=name, predicate=predicate, handler=handler)
        self._routes.append(route)
        return route

    def route(self, name: str, predicate: Predicate) -> Callable[[Handler], Handler]:
        """Decorator form of add_route()."""
        def decorator(handler: Handler) -> Handler:
            self.add_route(name, predicate, handler)
            return handler
        return decorator

    def match(self, path: str) -> Optional[Route]:
        """Return the first route whose predicate accepts path."""
        for route in self._routes:
            if route.predicate(path):
                return route
        return None

    def dispatch(self, path: str) -> HTTPResponse:
        """
        Run the handler of the first matching route.

        Falls back to 400 with the "not sure" message when nothing matches.
        """
        route = self.match(path)
        if route is None:
            logger.debug(f"No route for {path!r}")
            return bad_request(UNRECOGNIZED_MESSAGE, html=True)

        logger.debug(f"Routing {path!r} to {route.name}")
        return route.handler(path)

    def routes(self) -> List[Route]:
        """Registered routes, in priority order."""
        return list(self._routes)

    def print_routes(self) -> None:
        """Print the routing table (shown at startup)."""
        print("\nRegistered Routes:")
        print("-" * 60)
        for position, route in enumerate(self._routes, start=1):
            print(f"  {position:2}. {route.name}")
        print("-" * 60)
