"""
Base engine interface.

This module defines the abstract base class that every engine
implementation must follow: send a Request, get a Response.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING
from urllib.parse import urljoin, urlparse

if TYPE_CHECKING:
    from ..message.request import Request
    from ..message.response import Response


class BaseEngine(ABC):
    """
    Abstract base class for engines.

    Engines perform the actual exchange, whether over the network or
    from in-memory fixtures, and build the resulting Response.
    """

    @abstractmethod
    async def connect(self) -> None:
        """Prepare the engine for sending (e.g. open a client session)."""
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """Release any resources held by the engine."""
        pass

    @abstractmethod
    async def send(self, request: Request) -> Response:
        """
        Execute a request.

        Args:
            request: The request to send

        Returns:
            The Response; its first header line is the status line

        Raises:
            ConnectionException: If the exchange could not be completed
        """
        pass

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """Return True if the engine is ready to send."""
        pass

    async def __aenter__(self) -> BaseEngine:
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.disconnect()


def resolve_url(base_url: str | None, url: str) -> str:
    """
    Resolve a request URL against an engine base URL.

    Absolute URLs are returned unchanged.

    Example:
        resolve_url("https://api.example.com/v1", "users/5")
        # -> "https://api.example.com/v1/users/5"
    """
    if not base_url or urlparse(url).scheme:
        return url
    return urljoin(base_url.rstrip("/") + "/", url.lstrip("/"))
