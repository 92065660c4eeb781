"""
Response assertions.

This package provides the fluent ensure_* validators that Response mixes
in, and the exceptions they raise.

Failures:
    - StatusCodeException: status code not as expected
    - ContentTypeException: Content-Type header not as expected
    - HeaderException: header missing or with another value
    - ContentException: body / JSON content not as expected

Usage:
    from httpensure import Request, MockEngine
    from httpensure.assertions import ContentException

    response = await engine.send(Request.get("/users/5"))

    try:
        response.ensure_200().ensure_json({"id": 5})
    except ContentException as e:
        print(e)           # Bad response: Could not find data subset ...
        print(e.request)   # the request that produced the response
"""

# Engine
from .engine import ResponseAssertions

# Errors
from .errors import (
    ConnectionException,
    ContentException,
    ContentTypeException,
    EmptyResponseError,
    HeaderException,
    MalformedResponseError,
    ResponseException,
    ResponseStateError,
    StatusCodeException,
)

__all__ = [
    # Engine
    "ResponseAssertions",
    # Validation failures
    "ResponseException",
    "StatusCodeException",
    "ContentTypeException",
    "HeaderException",
    "ContentException",
    # Invariant violations
    "ResponseStateError",
    "EmptyResponseError",
    "MalformedResponseError",
    # Transport failures
    "ConnectionException",
]
