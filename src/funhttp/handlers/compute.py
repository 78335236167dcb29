"""
Query-driven handlers with no dependencies: multiply and greet.

    multiply?num1=6&num2=7    → "Result is: 42"
    greet?name=Ana&lang=es    → "Hola, Ana!"
"""

from typing import Dict
import re

from ..http.query import QueryDecodeError, params_after
from ..http.response import HTTPResponse, ok_text, bad_request


# Optional sign followed by ASCII digits; no whitespace or underscores.
_INTEGER = re.compile(r"[+-]?[0-9]+")

GREETINGS: Dict[str, str] = {
    "fr": "Bonjour",
    "es": "Hola",
    "de": "Hallo",
    "en": "Hello",
}
DEFAULT_GREETING = "Hello"


def parse_int(text: str) -> int:
    """
    Strict integer parsing.

    Raises:
        ValueError: text is not an optionally signed run of ASCII digits.
    """
    if not _INTEGER.fullmatch(text):
        raise ValueError(f"not an integer: {text!r}")
    return int(text)


def multiply(path: str) -> HTTPResponse:
    """
    multiply?num1=<int>&num2=<int>

    Python ints do not overflow, so the product is always exact.
    """
    try:
        params = params_after(path, "multiply?")
    except QueryDecodeError as e:
        return bad_request(f"Malformed query string: {e}")

    if "num1" not in params or "num2" not in params:
        return bad_request("Missing parameters. Please provide both num1 and num2.")

    try:
        num1 = parse_int(params["num1"])
        num2 = parse_int(params["num2"])
    except ValueError:
        return bad_request("Invalid input. Both num1 and num2 must be valid integers.")

    return ok_text(f"Result is: {num1 * num2}")


def greet(path: str) -> HTTPResponse:
    """greet?name=<name>&lang=<fr|es|de|en>; unknown languages get English."""
    try:
        params = params_after(path, "greet?")
    except QueryDecodeError as e:
        return bad_request(f"Malformed query string: {e}")

    if "name" not in params or "lang" not in params:
        return bad_request("Missing parameters. Usage: /greet?name=Alice&lang=en")

    greeting = GREETINGS.get(params["lang"].lower(), DEFAULT_GREETING)
    return ok_text(f"{greeting}, {params['name']}!")
