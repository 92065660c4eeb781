"""
Request and response value objects.

Usage:
    from httpensure.message import Request

    request = (
        Request.post("https://api.example.com/users")
        .with_header("Accept", "application/json")
        .with_json({"name": "Ada"})
    )
"""

from .payloads import JsonPayload, Payload, RawPayload
from .request import Request
from .response import Response

__all__ = [
    "Payload",
    "RawPayload",
    "JsonPayload",
    "Request",
    "Response",
]
