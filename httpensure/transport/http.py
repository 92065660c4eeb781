"""
aiohttp engine.

This module implements an engine that performs real HTTP exchanges with
aiohttp and turns the result into a Response whose header lines mirror
the wire format (status line first).
"""

from __future__ import annotations

import asyncio
import base64
import logging
import time
from typing import Any

import aiohttp

from ..assertions.errors import ConnectionException
from ..config.models import AuthType, EngineConfig
from ..message.request import Request
from ..message.response import Response
from .base import BaseEngine, resolve_url

logger = logging.getLogger(__name__)

AUTHORIZATION = "Authorization"


class AiohttpEngine(BaseEngine):
    """
    Engine backed by an aiohttp.ClientSession.

    The session lives between connect() and disconnect(); use the engine
    as an async context manager:

        async with AiohttpEngine(EngineConfig(base_url="https://api.example.com")) as engine:
            response = await engine.send(Request.get("/status"))
            response.ensure_200()
    """

    def __init__(self, config: EngineConfig | None = None):
        """
        Initialize the engine.

        Args:
            config: Base URL, default headers, auth and timeouts
        """
        self.config = config or EngineConfig()
        self._session: aiohttp.ClientSession | None = None
        self._connected = False

    @property
    def is_connected(self) -> bool:
        return self._connected and self._session is not None

    async def connect(self) -> None:
        """Create the HTTP session."""
        if self._session is None:
            self._session = aiohttp.ClientSession()
            logger.info("Opened aiohttp client session")
        self._connected = True

    async def disconnect(self) -> None:
        """Close the HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None
            logger.info("Closed aiohttp client session")
        self._connected = False

    def _build_headers(self, request: Request) -> list[tuple[str, str]]:
        """Merge configured default headers with the request's own headers."""
        request_headers = request.effective_headers()
        overridden = {name.lower() for name, _ in request_headers}

        headers = [
            (name, value)
            for name, value in self.config.headers.items()
            if name.lower() not in overridden
        ]
        headers.extend(request_headers)
        self._apply_auth_headers(headers)
        return headers

    def _apply_auth_headers(self, headers: list[tuple[str, str]]) -> None:
        """Apply authentication headers based on auth config."""
        auth = self.config.auth
        if auth is None:
            return

        present = {name.lower() for name, _ in headers}

        if auth.type == AuthType.BEARER:
            if auth.token and AUTHORIZATION.lower() not in present:
                headers.append((AUTHORIZATION, f"Bearer {auth.token}"))
                logger.debug("Applied bearer auth header")

        elif auth.type == AuthType.API_KEY:
            header_name = auth.header or "X-API-Key"
            if auth.key and header_name.lower() not in present:
                headers.append((header_name, auth.key))
                logger.debug(f"Applied API key auth header: {header_name}")

        elif auth.type == AuthType.BASIC:
            if auth.username and auth.password and AUTHORIZATION.lower() not in present:
                credentials = base64.b64encode(
                    f"{auth.username}:{auth.password}".encode()
                ).decode("ascii")
                headers.append((AUTHORIZATION, f"Basic {credentials}"))
                logger.debug("Applied basic auth header")

    @staticmethod
    def _header_lines(resp: aiohttp.ClientResponse) -> list[str]:
        """Rebuild the raw header lines, status line first."""
        version = resp.version
        protocol = f"HTTP/{version.major}.{version.minor}" if version else "HTTP/1.1"
        lines = [f"{protocol} {resp.status} {resp.reason or ''}".rstrip()]
        for name, value in resp.raw_headers:
            lines.append(
                f"{name.decode('utf-8', 'replace')}: {value.decode('utf-8', 'replace')}"
            )
        return lines

    async def send(self, request: Request) -> Response:
        """
        Send a request over HTTP.

        Args:
            request: The request to send

        Returns:
            Response built from the status line, raw headers and body text

        Raises:
            ConnectionException: If the engine is not connected, the request
                timed out or the server could not be reached
        """
        if not self.is_connected:
            raise ConnectionException(request, "Engine not connected. Call connect() first.")

        url = resolve_url(self.config.base_url, request.url)
        timeout_ms = request.timeout_ms or self.config.timeout_ms
        options: dict[str, Any] = {
            "headers": self._build_headers(request),
            "timeout": aiohttp.ClientTimeout(total=timeout_ms / 1000),
            "allow_redirects": self.config.follow_redirects,
        }
        if request.payload is not None:
            options["data"] = request.body().encode("utf-8")
        if not self.config.verify_ssl:
            options["ssl"] = False

        logger.debug(f"Sending {request.method} {url}")
        started = time.monotonic()

        try:
            async with self._session.request(request.method, url, **options) as resp:
                body = await resp.text(errors="replace")
                headers = self._header_lines(resp)
                metadata = {
                    "engine": "aiohttp",
                    "method": request.method,
                    "url": str(resp.url),
                    "elapsed_ms": round((time.monotonic() - started) * 1000, 3),
                    "redirects": [str(r.url) for r in resp.history],
                }
        except asyncio.TimeoutError as e:
            raise ConnectionException(
                request, f"Request timed out after {timeout_ms}ms ({request.method} {url})"
            ) from e
        except aiohttp.ClientConnectorError as e:
            raise ConnectionException(request, f"Connection failed: {e}") from e
        except aiohttp.ClientError as e:
            raise ConnectionException(request, f"HTTP error: {e}") from e

        logger.debug(f"Received {headers[0]!r} from {url} in {metadata['elapsed_ms']}ms")
        return Response(body=body, headers=headers, metadata=metadata, request=request)

    def __repr__(self) -> str:
        status = "connected" if self.is_connected else "disconnected"
        return f"AiohttpEngine(base_url={self.config.base_url!r}, status={status})"
