"""
Immutable HTTP response value object.

Responses are built by engines once an exchange completes. They carry
the raw header lines (status line first), the decoded body, engine
metadata and the request that produced them, and they mix in the
fluent ensure_* validators.
"""

from __future__ import annotations

import json
import xml.etree.ElementTree as ElementTree
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from ..assertions.engine import ResponseAssertions
from ..assertions.errors import EmptyResponseError, MalformedResponseError
from .request import Request

JSON_CONTENT_TYPE = "application/json"
XML_CONTENT_TYPES = ("application/xml", "text/xml")


@dataclass(frozen=True, eq=False)
class Response(ResponseAssertions):
    """
    The result of sending a Request through an engine.

    Attributes:
        body: Response body as text
        headers: Raw header lines, the first one being the status line
        metadata: Engine-specific diagnostics (timing, final URL, ...)
        request: The request that yielded this response
    """
    body: str
    headers: tuple[str, ...]
    metadata: Mapping[str, Any] = field(default_factory=dict)
    request: Request = field(default_factory=Request)

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", tuple(self.headers))
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def status_line(self) -> tuple[str, str, str]:
        """
        Split the status line into (protocol, code, reason).

        Raises:
            EmptyResponseError: If the response has no headers at all
            MalformedResponseError: If the first line has no status code
        """
        if not self.headers:
            raise EmptyResponseError("This response has no headers")

        parts = self.headers[0].split(None, 2)
        if len(parts) < 2 or not parts[1].isdigit():
            raise MalformedResponseError(
                f"Invalid status line: {self.headers[0]!r}"
            )

        reason = parts[2] if len(parts) > 2 else ""
        return parts[0], parts[1], reason

    def protocol(self) -> str:
        return self.status_line()[0]

    def status_code(self) -> str:
        """The HTTP status code, as a numeric string."""
        return self.status_line()[1]

    def reason_phrase(self) -> str:
        return self.status_line()[2]

    def header(self, name: str) -> str | None:
        """
        Get the value of a header.

        The match is case-sensitive on "<name>:" and the first matching
        line wins. Returns None if no header line matches.
        """
        if not self.headers:
            raise EmptyResponseError("This response has no headers")

        prefix = f"{name}:"
        for line in self.headers[1:]:
            if line.startswith(prefix):
                return line.split(":", 1)[1].strip()
        return None

    def content_type(self) -> str | None:
        return self.header("Content-Type")

    def is_json(self) -> bool:
        return self.content_type() == JSON_CONTENT_TYPE

    def is_xml(self) -> bool:
        return self.content_type() in XML_CONTENT_TYPES

    def decoded_json(self) -> Any:
        """
        Parse the body as JSON.

        Raises:
            ValueError: If the body is not valid JSON
        """
        try:
            return json.loads(self.body)
        except json.JSONDecodeError as e:
            raise ValueError(f"Could not decode json: {e}") from e

    def decoded_xml(self) -> ElementTree.Element:
        """Parse the body as XML and return the root element."""
        return ElementTree.fromstring(self.body)

    def render(self) -> str:
        """The entire response, including headers, as a string."""
        crlf = "\r\n"
        return crlf.join(self.headers) + crlf + crlf + self.body

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        status = self.headers[0] if self.headers else "<no headers>"
        return f"Response({status!r}, request={self.request.method} {self.request.url})"
