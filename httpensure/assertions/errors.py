"""
Exceptions raised by response validation and by engines.

Validation failures (ResponseException and subclasses) mean an
expectation was not met. ResponseStateError marks a response that
should never have been built, which is a bug in the engine or caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..message.request import Request
    from ..message.response import Response


class ResponseException(Exception):
    """
    Thrown when a response does not adhere to our expectations.

    Attributes:
        response: The offending response
        reason: The message without the "Bad response" prefix
    """

    def __init__(self, response: Response, message: str):
        self.response = response
        self.reason = message
        super().__init__(f"Bad response: {message}")

    @property
    def request(self) -> Request:
        """The request that caused the bad response."""
        return self.response.request


class StatusCodeException(ResponseException):
    """The status code was not the expected one."""


class ContentTypeException(ResponseException):
    """The Content-Type header did not match."""


class HeaderException(ResponseException):
    """A header was missing or had the wrong value."""


class ContentException(ResponseException):
    """The body did not contain (or did contain) the expected content."""


class ResponseStateError(RuntimeError):
    """A response is structurally unusable (programming error, not a failed expectation)."""


class EmptyResponseError(ResponseStateError):
    """Status or headers were inspected on a response without headers."""


class MalformedResponseError(ResponseStateError):
    """The first header line is not a parseable status line."""


class ConnectionException(Exception):
    """
    Thrown when an engine could not complete an exchange.

    Attributes:
        request: The request that could not be sent
        reason: The message without the "Could not connect" prefix
    """

    def __init__(self, request: Request, message: str):
        self.request = request
        self.reason = message
        super().__init__(f"Could not connect: {message}")
