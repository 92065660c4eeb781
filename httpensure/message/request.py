"""
Immutable HTTP request value object.

Every builder method returns a new Request, so a request can be shared
between engines and tasks without copying.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Iterable, Mapping

from .payloads import JsonPayload, Payload, RawPayload

if TYPE_CHECKING:
    from ..transport.base import BaseEngine
    from .response import Response

CONTENT_TYPE = "Content-Type"
AUTHORIZATION = "Authorization"


@dataclass(frozen=True)
class Request:
    """
    An outgoing HTTP request.

    Attributes:
        method: HTTP method, always upper case
        url: Absolute URL, or a path resolved by the engine's base_url
        headers: Ordered (name, value) pairs
        payload: Optional request body
        timeout_ms: Total timeout in milliseconds (None uses the engine default)
    """
    method: str = "GET"
    url: str = ""
    headers: tuple[tuple[str, str], ...] = ()
    payload: Payload | None = None
    timeout_ms: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", self.method.upper())
        object.__setattr__(
            self, "headers", tuple((str(name), str(value)) for name, value in self.headers)
        )

    # ─────────────────────────────────────────────────────────────────────
    # Shortcuts
    # ─────────────────────────────────────────────────────────────────────

    @classmethod
    def get(cls, url: str) -> Request:
        return cls(method="GET", url=url)

    @classmethod
    def post(cls, url: str) -> Request:
        return cls(method="POST", url=url)

    @classmethod
    def put(cls, url: str) -> Request:
        return cls(method="PUT", url=url)

    @classmethod
    def patch(cls, url: str) -> Request:
        return cls(method="PATCH", url=url)

    @classmethod
    def delete(cls, url: str) -> Request:
        return cls(method="DELETE", url=url)

    @classmethod
    def head(cls, url: str) -> Request:
        return cls(method="HEAD", url=url)

    @classmethod
    def options(cls, url: str) -> Request:
        return cls(method="OPTIONS", url=url)

    # ─────────────────────────────────────────────────────────────────────
    # Builder
    # ─────────────────────────────────────────────────────────────────────

    def with_method(self, method: str) -> Request:
        return replace(self, method=method)

    def with_url(self, url: str) -> Request:
        return replace(self, url=url)

    def with_header(self, name: str, value: str) -> Request:
        """Return a copy with the header appended (existing values are kept)."""
        return replace(self, headers=self.headers + ((name, value),))

    def with_headers(self, headers: Mapping[str, str] | Iterable[tuple[str, str]]) -> Request:
        """Return a copy with several headers appended in order."""
        pairs = headers.items() if isinstance(headers, Mapping) else headers
        return replace(self, headers=self.headers + tuple(pairs))

    def without_header(self, name: str) -> Request:
        """Return a copy with every header of that name removed."""
        return replace(
            self, headers=tuple(pair for pair in self.headers if pair[0] != name)
        )

    def with_payload(self, payload: Payload | None) -> Request:
        return replace(self, payload=payload)

    def with_json(self, data: Any) -> Request:
        return self.with_payload(JsonPayload(data))

    def with_raw(self, contents: str, content_type: str = "text/plain") -> Request:
        return self.with_payload(RawPayload(contents, content_type))

    def with_timeout(self, timeout_ms: int) -> Request:
        return replace(self, timeout_ms=timeout_ms)

    def with_basic_auth(self, username: str, password: str) -> Request:
        credentials = base64.b64encode(
            f"{username}:{password}".encode()
        ).decode("ascii")
        return self.without_header(AUTHORIZATION).with_header(
            AUTHORIZATION, f"Basic {credentials}"
        )

    def with_bearer_token(self, token: str) -> Request:
        return self.without_header(AUTHORIZATION).with_header(
            AUTHORIZATION, f"Bearer {token}"
        )

    # ─────────────────────────────────────────────────────────────────────
    # Accessors
    # ─────────────────────────────────────────────────────────────────────

    def header(self, name: str) -> str | None:
        """Get the first value set for a header, or None."""
        for header_name, value in self.headers:
            if header_name == name:
                return value
        return None

    def effective_headers(self) -> list[tuple[str, str]]:
        """
        Headers as they are sent.

        When a payload is attached and no Content-Type was set explicitly,
        the payload's content type is added.
        """
        headers = list(self.headers)
        if self.payload is not None and self.header(CONTENT_TYPE) is None:
            headers.append((CONTENT_TYPE, self.payload.content_type()))
        return headers

    def body(self) -> str:
        return self.payload.render() if self.payload is not None else ""

    def render(self) -> str:
        """Render a wire-like representation for debugging."""
        crlf = "\r\n"
        lines = [f"{self.method} {self.url} HTTP/1.1"]
        lines.extend(f"{name}: {value}" for name, value in self.effective_headers())
        return crlf.join(lines) + crlf + crlf + self.body()

    async def send(self, engine: BaseEngine) -> Response:
        """Send this request through an engine."""
        return await engine.send(self)

    def __str__(self) -> str:
        return self.render()
