"""
Request body payloads.

A payload knows how to render itself into a request body and which
Content-Type header should accompany it.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any

JSON_CONTENT_TYPE = "application/json"


class Payload(ABC):
    """Abstract base class for request bodies."""

    @abstractmethod
    def content_type(self) -> str:
        """The Content-Type header to send with this payload."""
        pass

    @abstractmethod
    def render(self) -> str:
        """Render into an HTTP request body."""
        pass

    def __str__(self) -> str:
        return self.render()


class RawPayload(Payload):
    """A pre-rendered string body with an explicit content type."""

    def __init__(self, contents: str, content_type: str):
        self._contents = contents
        self._content_type = content_type

    def content_type(self) -> str:
        return self._content_type

    def render(self) -> str:
        return self._contents

    def __repr__(self) -> str:
        return f"RawPayload(content_type={self._content_type!r}, length={len(self._contents)})"


class JsonPayload(Payload):
    """A JSON-serializable value sent as application/json."""

    def __init__(self, data: Any):
        self.data = data

    def content_type(self) -> str:
        return JSON_CONTENT_TYPE

    def render(self) -> str:
        return json.dumps(self.data, ensure_ascii=False)

    def __repr__(self) -> str:
        return f"JsonPayload(data={self.data!r})"
