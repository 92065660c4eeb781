import pytest
from conftest import make_response

from httpensure import EmptyResponseError, MalformedResponseError, Request, Response, ResponseStateError


HEADERS = ["Content-Type: application/json", "X-Id: 7"]


def test_status_line_parts():
    response = make_response("HTTP/1.1 404 Not Found")

    assert response.status_line() == ("HTTP/1.1", "404", "Not Found")
    assert response.protocol() == "HTTP/1.1"
    assert response.status_code() == "404"
    assert response.reason_phrase() == "Not Found"


def test_status_line_without_reason():
    assert make_response("HTTP/2 204").status_line() == ("HTTP/2", "204", "")


def test_header_lookup_trims_value():
    response = make_response(headers=HEADERS)

    assert response.header("Content-Type") == "application/json"
    assert response.header("X-Id") == "7"
    assert response.content_type() == "application/json"


def test_header_lookup_scans_past_non_matching_lines():
    response = make_response(headers=["Date: today", "Server: test", "X-Id: 7"])

    assert response.header("X-Id") == "7"


def test_header_lookup_returns_none_when_missing():
    response = make_response(headers=HEADERS)

    assert response.header("X-Missing") is None


def test_header_lookup_is_case_sensitive_and_prefix_delimited():
    response = make_response(headers=["X-Identity: 1", "x-id: 2"])

    assert response.header("X-Id") is None


def test_header_value_keeps_colons():
    response = make_response(headers=["Location: https://example.test:8443/next"])

    assert response.header("Location") == "https://example.test:8443/next"


def test_empty_headers_is_a_programming_error():
    response = Response(body="", headers=[], request=Request.get("/"))

    with pytest.raises(EmptyResponseError):
        response.status_code()
    with pytest.raises(ResponseStateError):
        response.header("Content-Type")


def test_malformed_status_line():
    response = make_response("garbage")

    with pytest.raises(MalformedResponseError):
        response.status_code()


def test_is_json_and_is_xml():
    assert make_response(headers=["Content-Type: application/json"]).is_json()
    assert not make_response(headers=["Content-Type: text/html"]).is_json()
    assert make_response(headers=["Content-Type: text/xml"]).is_xml()
    assert make_response(headers=["Content-Type: application/xml"]).is_xml()
    assert not make_response().is_xml()


def test_decoded_json():
    assert make_response(body='{"a": [1, 2]}').decoded_json() == {"a": [1, 2]}

    with pytest.raises(ValueError, match="Could not decode json"):
        make_response(body="{not json").decoded_json()


def test_decoded_xml():
    root = make_response(body="<users><user id='5'/></users>").decoded_xml()

    assert root.tag == "users"
    assert root.find("user").get("id") == "5"


def test_render():
    response = make_response(headers=["X-Id: 7"], body="hello")

    assert response.render() == "HTTP/1.1 200 OK\r\nX-Id: 7\r\n\r\nhello"
    assert str(response) == response.render()


def test_response_is_immutable():
    response = make_response(headers=HEADERS)

    with pytest.raises(AttributeError):
        response.body = "changed"
    with pytest.raises(TypeError):
        response.metadata["engine"] = "changed"
    assert isinstance(response.headers, tuple)


def test_response_keeps_request_reference():
    request = Request.get("https://example.test/x")

    response = make_response(request=request)

    assert response.request is request
