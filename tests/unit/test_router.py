"""
Unit tests for the ordered predicate router.
"""

from funhttp.http.router import (
    Router,
    UNRECOGNIZED_MESSAGE,
    contains,
    equals_ignore_case,
    is_empty,
)
from funhttp.http.response import ok_text
from funhttp.http.status_codes import HTTPStatus


def named(name):
    """Handler that answers with its own name."""
    def handler(path):
        return ok_text(name)
    return handler


def make_router() -> Router:
    router = Router()
    router.add_route("root", is_empty, named("root"))
    router.add_route("json", equals_ignore_case("json"), named("json"))
    router.add_route("file", contains("file/"), named("file"))
    router.add_route("multiply", contains("multiply?"), named("multiply"))
    router.add_route("greet", contains("greet?"), named("greet"))
    return router


class TestPredicates:
    """Tests for the predicate helpers."""

    def test_is_empty(self):
        assert is_empty("")
        assert not is_empty("json")

    def test_equals_ignore_case(self):
        predicate = equals_ignore_case("json")
        assert predicate("json")
        assert predicate("JSON")
        assert predicate("Json")
        assert not predicate("json?x=1")
        assert not predicate("myjson")

    def test_contains(self):
        predicate = contains("greet?")
        assert predicate("greet?name=x")
        assert predicate("abc/greet?name=x")
        assert not predicate("greet")


class TestRouter:
    """Tests for Router class."""

    def test_add_route(self):
        router = make_router()
        names = [route.name for route in router.routes()]
        assert names == ["root", "json", "file", "multiply", "greet"]

    def test_match(self):
        router = make_router()
        assert router.match("").name == "root"
        assert router.match("JSON").name == "json"
        assert router.match("multiply?num1=1&num2=2").name == "multiply"

    def test_substring_match_anywhere(self):
        router = make_router()
        assert router.match("foo/multiply?num1=1").name == "multiply"

    def test_first_match_wins(self):
        # Contains both "file/" and "multiply?"; file is registered first
        router = make_router()
        assert router.match("file/multiply?num1=2").name == "file"

    def test_dispatch_calls_handler(self):
        response = make_router().dispatch("greet?name=A&lang=en")
        assert response.status == HTTPStatus.OK
        assert response.text == "greet"

    def test_dispatch_unrecognized(self):
        response = make_router().dispatch("nothing-here")

        assert response.status == HTTPStatus.BAD_REQUEST
        assert response.text == UNRECOGNIZED_MESSAGE
        assert response.get_header("Content-Type").startswith("text/html")

    def test_decorator(self):
        router = Router()

        @router.route("ping", equals_ignore_case("ping"))
        def ping(path):
            return ok_text("pong")

        assert router.dispatch("PING").text == "pong"
        assert ping("x").text == "pong"

    def test_print_routes(self, capsys):
        make_router().print_routes()
        out = capsys.readouterr().out
        assert "1. root" in out
        assert "5. greet" in out
