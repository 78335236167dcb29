"""
=============================================================================
PAGE HANDLERS
=============================================================================

The routes that serve pages rather than computed answers:

    ""          DirectoryPage.handle        root.html with a file list
    json        RandomImageHandler.json     {"header": ..., "image": ...}
    random      RandomImageHandler.page     index.html, as-is
    file/<name> FileHandler.handle          existence check only

Pages and templates come from the www directory through a FileSystem.

=============================================================================
"""

from typing import Optional, Sequence, Tuple
import logging
import random

from ..files import FileSystem
from ..http.response import (
    HTTPResponse,
    ResponseBuilder,
    ok_html,
    not_found,
    internal_error,
)


logger = logging.getLogger(__name__)


# (label, url) pairs served by the json and random routes
IMAGES: Tuple[Tuple[str, str], ...] = (
    ("streets", "https://iili.io/JV1pSV.jpg"),
    ("bread", "https://iili.io/Jj9MWG.jpg"),
)

FILE_PLACEHOLDER_BODY = (
    "Would theoretically be a file but removed this part, "
    "you do not have to do anything with it for the assignment"
)


class DirectoryPage:
    """
    Root page: loads a template and swaps a placeholder for a list of the
    files in the www directory.

        <body>${links}</body>
              ────┬───
                  └── "<ul>\\n<li>index.html</li><li>root.html</li></ul>\\n"
    """

    def __init__(self, www: FileSystem, template: str = "root.html", placeholder: str = "${links}"):
        self.www = www
        self.template = template
        self.placeholder = placeholder

    def build_file_list(self) -> str:
        names = self.www.list_directory()
        if not names:
            return "No files in directory"

        items = "".join(f"<li>{name}</li>" for name in names)
        return f"<ul>\n{items}</ul>\n"

    def handle(self, path: str) -> HTTPResponse:
        try:
            page = self.www.read_file(self.template).decode("utf-8", errors="replace")
        except OSError as e:
            logger.warning(f"Cannot read template {self.template}: {e}")
            return internal_error(f"Error reading page: {e}")

        return ok_html(page.replace(self.placeholder, self.build_file_list()))


class RandomImageHandler:
    """
    The json and random routes.

    json draws one (label, url) pair uniformly and returns it as JSON.
    random also draws a pair but always serves the static index.html page;
    the draw is only logged.
    """

    def __init__(
        self,
        www: FileSystem,
        images: Sequence[Tuple[str, str]] = IMAGES,
        page: str = "index.html",
        rng: Optional[random.Random] = None,
    ):
        if not images:
            raise ValueError("RandomImageHandler needs at least one image")
        self.www = www
        self.images = tuple(images)
        self.page_name = page
        self._rng = rng or random.Random()

    def pick(self) -> Tuple[str, str]:
        return self._rng.choice(self.images)

    def json(self, path: str) -> HTTPResponse:
        header, url = self.pick()
        return ResponseBuilder().json({"header": header, "image": url}).build()

    def page(self, path: str) -> HTTPResponse:
        # The selection does not influence the page.
        header, _ = self.pick()
        logger.debug(f"Random image drawn: {header}")

        try:
            content = self.www.read_file(self.page_name).decode("utf-8", errors="replace")
        except OSError as e:
            logger.warning(f"Cannot read {self.page_name}: {e}")
            return internal_error(f"Error reading page: {e}")

        return ok_html(content)


class FileHandler:
    """
    file/<name>: reports whether <name> exists. The contents are never sent.

    Every occurrence of the marker is removed from the path to get the name,
    so "file/notes.txt" checks "notes.txt".
    """

    def __init__(self, files: FileSystem, marker: str = "file/"):
        self.files = files
        self.marker = marker

    def handle(self, path: str) -> HTTPResponse:
        name = path.replace(self.marker, "")

        if name and self.files.exists(name):
            return ok_html(FILE_PLACEHOLDER_BODY)

        return not_found(f"File not found: {name}", html=True)
