"""
Tests for status, header, content type and body text assertions.
"""

import logging

import pytest
from conftest import make_response

from httpensure import (
    ContentException,
    ContentTypeException,
    HeaderException,
    Request,
    ResponseException,
    StatusCodeException,
)


def status(code: int):
    return make_response(f"HTTP/1.1 {code} Whatever")


# ─────────────────────────────────────────────────────────────────────────────
# Status codes
# ─────────────────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("code", [200, 201, 250, 299])
def test_status_in_range_accepts_inclusive_bounds(code):
    response = status(code)

    assert response.ensure_status_in_range(200, 299) is response


@pytest.mark.parametrize("code", [199, 300, 404, 500])
def test_status_in_range_rejects_outside(code):
    with pytest.raises(StatusCodeException) as exc_info:
        status(code).ensure_status_in_range(200, 299)

    assert str(exc_info.value) == (
        f"Bad response: Expected status code to be in range [200...299], but {code} was returned"
    )


def test_ensure_status():
    ok = make_response("HTTP/1.1 200 OK")
    not_found = make_response("HTTP/1.1 404 Not Found")

    assert ok.ensure_status(200) is ok
    with pytest.raises(StatusCodeException, match="Expected status code to be 200, but it was 404"):
        not_found.ensure_status(200)


def test_ensure_status_in():
    response = status(302)

    assert response.ensure_status_in([301, 302]) is response
    with pytest.raises(StatusCodeException, match=r"one of \[200, 204\], but 302 was returned"):
        response.ensure_status_in([200, 204])


@pytest.mark.parametrize(
    "method, code",
    [
        ("ensure_200", 200),
        ("ensure_201", 201),
        ("ensure_204", 204),
        ("ensure_301", 301),
        ("ensure_302", 302),
    ],
)
def test_named_status_shortcuts(method, code):
    response = status(code)

    assert getattr(response, method)() is response
    with pytest.raises(StatusCodeException):
        getattr(status(code + 1), method)()


def test_ensure_2xx_and_success():
    response = status(204)

    assert response.ensure_2xx() is response
    assert response.ensure_success() is response
    with pytest.raises(StatusCodeException):
        status(301).ensure_success()


# ─────────────────────────────────────────────────────────────────────────────
# Redirects & headers
# ─────────────────────────────────────────────────────────────────────────────

def test_ensure_redirect_to_url():
    response = make_response("HTTP/1.1 302 Found", ["Location: https://x/y"])

    assert response.ensure_redirect("https://x/y") is response
    assert response.ensure_redirect() is response


def test_ensure_redirect_fails_on_non_redirect_status():
    response = make_response("HTTP/1.1 200 OK", ["Location: https://x/y"])

    with pytest.raises(StatusCodeException):
        response.ensure_redirect("https://x/y")


def test_ensure_redirect_fails_on_other_location():
    response = make_response("HTTP/1.1 301 Moved Permanently", ["Location: https://x/z"])

    with pytest.raises(HeaderException, match="Header Location was expected to have the value https://x/y"):
        response.ensure_redirect("https://x/y")


def test_ensure_redirect_requires_location():
    with pytest.raises(HeaderException, match="Header Location is missing"):
        make_response("HTTP/1.1 302 Found").ensure_redirect()


def test_ensure_header():
    response = make_response(headers=["X-Id: 7"])

    assert response.ensure_header("X-Id") is response
    assert response.ensure_header("X-Id", "7") is response

    with pytest.raises(HeaderException, match="Header X-Other is missing"):
        response.ensure_header("X-Other")
    with pytest.raises(HeaderException, match="has the value 7"):
        response.ensure_header("X-Id", "8")


def test_ensure_header_value_is_exact():
    response = make_response(headers=["X-Mode: Fast"])

    with pytest.raises(HeaderException):
        response.ensure_header("X-Mode", "fast")


# ─────────────────────────────────────────────────────────────────────────────
# Content type
# ─────────────────────────────────────────────────────────────────────────────

def test_ensure_content_type_single_and_many():
    response = make_response(headers=["Content-Type: text/html"])

    assert response.ensure_content_type("text/html") is response
    assert response.ensure_content_type(["text/plain", "text/html"]) is response

    with pytest.raises(ContentTypeException, match=r"\[application/json\|text/plain\], but it was text/html"):
        response.ensure_content_type(["application/json", "text/plain"])


def test_ensure_content_type_reports_missing_header():
    with pytest.raises(ContentTypeException, match="but it was missing"):
        make_response().ensure_content_type("text/html")


def test_ensure_xml():
    for content_type in ("application/xml", "text/xml"):
        response = make_response(headers=[f"Content-Type: {content_type}"])
        assert response.ensure_xml() is response

    with pytest.raises(ContentTypeException):
        make_response(headers=["Content-Type: application/json"]).ensure_xml()


# ─────────────────────────────────────────────────────────────────────────────
# Body text
# ─────────────────────────────────────────────────────────────────────────────

def test_ensure_contains_and_dont_see(html_response):
    assert html_response.ensure_contains("<em>world</em>") is html_response
    assert html_response.ensure_dont_see("goodbye") is html_response

    with pytest.raises(ContentException, match="expected to contain goodbye"):
        html_response.ensure_contains("goodbye")
    with pytest.raises(ContentException, match="not expected to contain <h1>"):
        html_response.ensure_dont_see("<h1>")


def test_ensure_see_text_strips_markup(html_response):
    assert html_response.ensure_see_text("Hello world") is html_response
    assert html_response.ensure_dont_see_text("secret") is html_response
    assert html_response.ensure_dont_see_text("<h1>") is html_response

    with pytest.raises(ContentException):
        html_response.ensure_see_text("<em>")
    with pytest.raises(ContentException):
        html_response.ensure_dont_see_text("Hello")


# ─────────────────────────────────────────────────────────────────────────────
# Chaining & errors
# ─────────────────────────────────────────────────────────────────────────────

def test_chain_returns_same_response():
    response = make_response(
        headers=["Content-Type: application/json", "X-Id: 7"],
        body='{"ok": true}',
    )

    assert response.ensure_200().ensure_json().ensure_header("X-Id") is response


def test_chain_stops_at_first_failure():
    response = make_response("HTTP/1.1 500 Internal Server Error")

    with pytest.raises(StatusCodeException):
        response.ensure_200().ensure_header("X-Never-Checked")


def test_failure_exposes_response_and_request():
    request = Request.get("https://example.test/broken")
    response = make_response("HTTP/1.1 500 Internal Server Error", request=request)

    with pytest.raises(ResponseException) as exc_info:
        response.ensure_200()

    error = exc_info.value
    assert error.response is response
    assert error.request is request
    assert error.reason == "Expected status code to be 200, but it was 500"
    assert str(error).startswith("Bad response: ")


def test_failures_are_logged_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="httpensure.assertions.engine"):
        with pytest.raises(StatusCodeException):
            status(404).ensure_200()

    assert "StatusCodeException" in caplog.text
