"""
=============================================================================
GITHUB PROXY HANDLER
=============================================================================

    github?query=users/octocat/repos

    1. GET https://api.github.com/users/octocat/repos
    2. Expect a JSON array of repository objects
    3. Render full_name, id and owner.login of each as an HTML list

    ┌─────────────────────────────────────────────────────────────────────┐
    │  [{"full_name": "octocat/Hello-World",     <h2>GitHub Repositories:│
    │    "id": 1296269,                    ───►  </h2><ul>               │
    │    "owner": {"login": "octocat"}},         <li>Full Name: ...<br>  │
    │   ...]                                     ID: ...<br>Owner: ...   │
    │                                            </li><br>...</ul>       │
    └─────────────────────────────────────────────────────────────────────┘

Any failure along the way (network, non-2xx, invalid JSON, not an array,
missing or mistyped field) becomes a 500 whose body carries the message.

=============================================================================
"""

from typing import Any, List, Tuple
import html
import json
import logging

from ..fetch import DEFAULT_TIMEOUT
from ..http.query import QueryDecodeError, params_after
from ..http.response import HTTPResponse, ok_html, bad_request, internal_error


logger = logging.getLogger(__name__)

GITHUB_API = "https://api.github.com/"


class GitHubResponseError(ValueError):
    """The GitHub payload did not have the expected shape."""


def parse_repositories(body: bytes) -> List[Tuple[str, int, str]]:
    """
    Extract (full_name, id, owner.login) from a GitHub repository list.

    Raises:
        GitHubResponseError: The payload is not an array of repository
                             objects with those fields.
        ValueError: The payload is not valid JSON.
    """
    data = json.loads(body.decode("utf-8"))
    if not isinstance(data, list):
        raise GitHubResponseError(f"expected a JSON array, got {type(data).__name__}")

    repos = []
    for index, repo in enumerate(data):
        if not isinstance(repo, dict):
            raise GitHubResponseError(f"item {index} is not an object")

        full_name = _field(repo, "full_name", str, index)
        repo_id = _field(repo, "id", int, index)
        owner = _field(repo, "owner", dict, index)
        login = _field(owner, "login", str, index)

        repos.append((full_name, repo_id, login))
    return repos


def _field(obj: dict, name: str, expected: type, index: int) -> Any:
    if name not in obj:
        raise GitHubResponseError(f"item {index} has no '{name}'")

    value = obj[name]
    # bool is an int subclass, but true/false is not a valid id
    if not isinstance(value, expected) or isinstance(value, bool):
        raise GitHubResponseError(f"item {index} has a non-{expected.__name__} '{name}'")
    return value


def render_repositories(repos: List[Tuple[str, int, str]]) -> str:
    parts = ["<html><body>", "<h2>GitHub Repositories:</h2><ul>"]
    for full_name, repo_id, login in repos:
        parts.append(
            "<li>"
            f"Full Name: {html.escape(full_name)}<br>"
            f"ID: {repo_id}<br>"
            f"Owner: {html.escape(login)}"
            "</li><br>"
        )
    parts.append("</ul></body></html>")
    return "".join(parts)


class GitHubHandler:
    """
    Args:
        fetcher: Anything with fetch(url, timeout) -> bytes.
        base_url: Prefix the query is appended to.
        timeout: Per-request timeout in seconds.
    """

    def __init__(self, fetcher, base_url: str = GITHUB_API, timeout: float = DEFAULT_TIMEOUT):
        self.fetcher = fetcher
        self.base_url = base_url
        self.timeout = timeout

    def handle(self, path: str) -> HTTPResponse:
        try:
            params = params_after(path, "github?")
        except QueryDecodeError as e:
            return bad_request(f"Malformed query string: {e}")

        if "query" not in params:
            return bad_request("Missing 'query' parameter.")

        url = self.base_url + params["query"]
        try:
            body = self.fetcher.fetch(url, self.timeout)
            repos = parse_repositories(body)
        except Exception as e:
            logger.warning(f"GitHub proxy failed for {params['query']!r}: {e}")
            return internal_error(f"Error fetching or parsing GitHub response: {e}")

        return ok_html(render_repositories(repos))
