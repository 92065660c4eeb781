"""
In-memory engine.

MockEngine answers requests from registered routes instead of the
network, which makes it the engine of choice for fixtures and tests.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, Iterable, Mapping

from ..config.models import EngineConfig, EngineType
from ..message.request import Request
from ..message.response import Response
from .base import BaseEngine, resolve_url

logger = logging.getLogger(__name__)

HeaderInput = Mapping[str, str] | Iterable[tuple[str, str]] | None


@dataclass
class MockRoute:
    """A canned answer for one method + URL."""
    status: int = 200
    headers: list[tuple[str, str]] = field(default_factory=list)
    body: str = ""
    reason: str | None = None

    def status_line(self) -> str:
        reason = self.reason
        if reason is None:
            try:
                reason = HTTPStatus(self.status).phrase
            except ValueError:
                reason = ""
        return f"HTTP/1.1 {self.status} {reason}".rstrip()


class MockEngine(BaseEngine):
    """
    Engine that replays registered routes.

    Unknown routes are answered with 404 Not Found. Every request sent is
    recorded in `sent`.

    Example:
        engine = MockEngine()
        engine.add_json_route("GET", "https://api.example.com/users/5", {"id": 5})

        response = await engine.send(Request.get("https://api.example.com/users/5"))
        response.ensure_200().ensure_json({"id": 5})
    """

    def __init__(self, config: EngineConfig | None = None):
        self.config = config or EngineConfig(engine=EngineType.MOCK)
        self.sent: list[Request] = []
        self._routes: dict[tuple[str, str], MockRoute] = {}
        self._connected = False

    @property
    def is_connected(self) -> bool:
        return self._connected

    async def connect(self) -> None:
        self._connected = True

    async def disconnect(self) -> None:
        self._connected = False

    def add_route(
        self,
        method: str,
        url: str,
        status: int = 200,
        headers: HeaderInput = None,
        body: str = "",
        reason: str | None = None,
    ) -> MockEngine:
        """Register the answer for a method + URL. Returns the engine for chaining."""
        if headers is None:
            pairs = []
        elif isinstance(headers, Mapping):
            pairs = list(headers.items())
        else:
            pairs = list(headers)

        key = (method.upper(), resolve_url(self.config.base_url, url))
        self._routes[key] = MockRoute(status=status, headers=pairs, body=body, reason=reason)
        return self

    def add_json_route(
        self,
        method: str,
        url: str,
        data: Any,
        status: int = 200,
        headers: HeaderInput = None,
    ) -> MockEngine:
        """Register a JSON answer; Content-Type is set to application/json."""
        pairs = [("Content-Type", "application/json")]
        if isinstance(headers, Mapping):
            pairs.extend(headers.items())
        elif headers is not None:
            pairs.extend(headers)
        return self.add_route(method, url, status=status, headers=pairs, body=json.dumps(data))

    async def send(self, request: Request) -> Response:
        url = resolve_url(self.config.base_url, request.url)
        self.sent.append(request)

        route = self._routes.get((request.method, url))
        if route is None:
            logger.debug(f"No mock route for {request.method} {url}")
            route = MockRoute(status=404, headers=[("Content-Type", "text/plain")], body="Not Found")

        headers = [route.status_line()]
        headers.extend(f"{name}: {value}" for name, value in route.headers)

        return Response(
            body=route.body,
            headers=headers,
            metadata={"engine": "mock", "method": request.method, "url": url},
            request=request,
        )

    def __repr__(self) -> str:
        return f"MockEngine(routes={len(self._routes)}, sent={len(self.sent)})"
