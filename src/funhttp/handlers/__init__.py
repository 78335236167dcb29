"""
=============================================================================
HANDLERS MODULE
=============================================================================

One handler per route. Every handler takes the decoded request path and
returns a complete HTTPResponse; no handler raises for bad input or
upstream failures, they answer with 400/404/500 instead.

    ┌──────────────────────────┬────────────────────────────────────────┐
    │ Type                     │ Handlers                               │
    ├──────────────────────────┼────────────────────────────────────────┤
    │ Function handler         │ multiply, greet                        │
    │ (no dependencies)        │                                        │
    ├──────────────────────────┼────────────────────────────────────────┤
    │ Class handler            │ DirectoryPage, RandomImageHandler,     │
    │ (holds collaborators)    │ FileHandler, GitHubHandler,            │
    │                          │ WeatherHandler                         │
    └──────────────────────────┴────────────────────────────────────────┘

Class handlers receive their collaborators (file system, fetcher, cache,
API key) in the constructor, so tests can swap in doubles.

=============================================================================
"""

from .compute import multiply, greet
from .pages import DirectoryPage, RandomImageHandler, FileHandler, IMAGES
from .github import GitHubHandler
from .weather import WeatherHandler

__all__ = [
    "multiply",
    "greet",
    "DirectoryPage",
    "RandomImageHandler",
    "FileHandler",
    "IMAGES",
    "GitHubHandler",
    "WeatherHandler",
]
