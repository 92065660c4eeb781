"""
Pytest configuration and shared fixtures for httpensure tests.
"""

import json

import pytest

from httpensure import Request, Response


def make_response(
    status_line: str = "HTTP/1.1 200 OK",
    headers: list[str] | None = None,
    body: str = "",
    request: Request | None = None,
) -> Response:
    """Build a Response the way an engine would."""
    return Response(
        body=body,
        headers=[status_line, *(headers or [])],
        metadata={"engine": "test"},
        request=request or Request.get("https://example.test/resource"),
    )


def make_json_response(data, status_line: str = "HTTP/1.1 200 OK", extra_headers=None) -> Response:
    """Build a JSON response with Content-Type: application/json."""
    return make_response(
        status_line,
        ["Content-Type: application/json", *(extra_headers or [])],
        json.dumps(data),
    )


@pytest.fixture
def json_response():
    return make_json_response({"a": 1, "b": 2})


@pytest.fixture
def html_response():
    return make_response(
        headers=["Content-Type: text/html"],
        body="<html><body><h1>Hello <em>world</em></h1><!-- secret --></body></html>",
    )
