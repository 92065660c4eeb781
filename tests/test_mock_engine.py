import pytest

from httpensure import ContentException, EngineConfig, EngineType, MockEngine, Request, StatusCodeException


@pytest.mark.asyncio
async def test_mock_engine_answers_registered_route():
    engine = MockEngine().add_json_route(
        "GET", "https://api.example.com/users/5", {"id": 5, "name": "Ada"}, headers={"X-Id": "5"}
    )

    async with engine:
        response = await engine.send(Request.get("https://api.example.com/users/5"))

    assert response.headers[0] == "HTTP/1.1 200 OK"
    assert response.ensure_200().ensure_json({"id": 5}).ensure_header("X-Id", "5") is response
    assert response.metadata["engine"] == "mock"


@pytest.mark.asyncio
async def test_mock_engine_unknown_route_is_404():
    engine = MockEngine()

    response = await engine.send(Request.get("https://api.example.com/nothing"))

    assert response.status_code() == "404"
    assert response.reason_phrase() == "Not Found"
    with pytest.raises(StatusCodeException):
        response.ensure_success()


@pytest.mark.asyncio
async def test_mock_engine_matches_method():
    engine = MockEngine().add_route("POST", "https://api.example.com/users", status=201)

    created = await engine.send(Request.post("https://api.example.com/users").with_json({"name": "Ada"}))
    missing = await engine.send(Request.get("https://api.example.com/users"))

    assert created.ensure_201() is created
    assert missing.status_code() == "404"
    assert [r.method for r in engine.sent] == ["POST", "GET"]


@pytest.mark.asyncio
async def test_mock_engine_resolves_against_base_url():
    engine = MockEngine(EngineConfig(engine=EngineType.MOCK, base_url="https://api.example.com/v1"))
    engine.add_route("GET", "/status", body="up")

    response = await engine.send(Request.get("status"))

    assert response.body == "up"
    assert response.metadata["url"] == "https://api.example.com/v1/status"


@pytest.mark.asyncio
async def test_mock_engine_redirect_and_custom_reason():
    engine = MockEngine().add_route(
        "GET", "https://x/old", status=302, headers=[("Location", "https://x/y")], reason="Moved Along"
    )

    response = await engine.send(Request.get("https://x/old"))

    assert response.headers[0] == "HTTP/1.1 302 Moved Along"
    assert response.ensure_redirect("https://x/y") is response


@pytest.mark.asyncio
async def test_failure_carries_request_sent_through_engine():
    engine = MockEngine().add_json_route("GET", "https://x/items", [{"id": 1}])
    request = Request.get("https://x/items")

    response = await engine.send(request)

    with pytest.raises(ContentException) as exc_info:
        response.ensure_json_fragment({"id": 2})

    assert exc_info.value.request is request
