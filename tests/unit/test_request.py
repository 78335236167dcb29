"""
Unit tests for the request line parser.
"""

import io

import pytest

from funhttp.http.request import RequestParser, ParsedRequest, parse_request


class TestRequestParser:
    """Tests for RequestParser."""

    def test_parse_get_request(self, sample_get_request):
        request = parse_request(sample_get_request)

        assert request == ParsedRequest(method="GET", path="multiply?num1=6&num2=7")

    def test_lf_only_request(self):
        request = parse_request(b"GET /multiply?num1=3&num2=4 HTTP/1.1\n\n")
        assert request.path == "multiply?num1=3&num2=4"

    def test_leading_slash_removed(self):
        assert parse_request(b"GET /json HTTP/1.1\r\n\r\n").path == "json"

    def test_root_path_is_empty(self):
        assert parse_request(b"GET / HTTP/1.1\r\n\r\n").path == ""

    def test_bare_lf_line_endings(self):
        request = parse_request(b"GET /random HTTP/1.1\nHost: x\n\n")
        assert request.path == "random"

    def test_headers_are_ignored(self):
        data = (
            b"GET /greet?name=Ana&lang=es HTTP/1.1\r\n"
            b"X-Whatever: GET /json HTTP/1.1\r\n"
            b"\r\n"
        )
        assert parse_request(data).path == "greet?name=Ana&lang=es"

    def test_later_request_line_wins(self):
        data = b"GET /json HTTP/1.1\r\nGET /random HTTP/1.1\r\n\r\n"
        assert parse_request(data).path == "random"

    def test_stops_at_blank_line(self):
        stream = io.BytesIO(b"GET /json HTTP/1.1\r\n\r\nGET /random HTTP/1.1\r\n\r\n")
        request = RequestParser().parse(stream)

        assert request.path == "json"
        # The second request is still unread
        assert stream.readline() == b"GET /random HTTP/1.1\r\n"

    def test_stream_closed_without_blank_line(self):
        assert parse_request(b"GET /json HTTP/1.1\r\n").path == "json"

    @pytest.mark.parametrize("data", [
        b"",
        b"\r\n",
        b"\n",
        b"POST /json HTTP/1.1\r\n\r\n",
        b"Host: localhost\r\n\r\n",
        b"GET /json\r\n\r\n",
    ])
    def test_no_usable_request_line(self, data):
        assert parse_request(data) is None

    def test_no_second_space_keeps_earlier_capture(self):
        data = b"GET /json HTTP/1.1\r\nGET /broken\r\n\r\n"
        assert parse_request(data).path == "json"

    def test_undecodable_bytes_replaced(self):
        request = parse_request(b"GET /file/\xff HTTP/1.1\r\n\r\n")
        assert request.path == "file/\ufffd"

    def test_custom_method(self):
        request = RequestParser(method="HEAD").parse(io.BytesIO(b"HEAD /json HTTP/1.1\r\n\r\n"))
        assert request == ParsedRequest(method="HEAD", path="json")
