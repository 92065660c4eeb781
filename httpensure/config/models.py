"""
Typed engine configuration.

This module contains the enums and dataclasses that represent a parsed
engine configuration file.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


# ─────────────────────────────────────────────────────────────────────────────
# Enums
# ─────────────────────────────────────────────────────────────────────────────

class EngineType(str, Enum):
    """Available engines."""
    AIOHTTP = "aiohttp"
    MOCK = "mock"


class AuthType(str, Enum):
    """Supported authentication types."""
    BEARER = "bearer"
    API_KEY = "api_key"
    BASIC = "basic"


# ─────────────────────────────────────────────────────────────────────────────
# Auth Configuration
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class AuthConfig:
    """
    Authentication applied by the engine to every request.

    Supports three auth types:
    - bearer: Uses Authorization: Bearer <token> header
    - api_key: Uses a custom header with the API key
    - basic: Uses Authorization: Basic <base64(user:pass)> header
    """
    type: AuthType
    # For bearer auth
    token: str | None = None
    # For api_key auth
    header: str = "X-API-Key"
    key: str | None = None
    # For basic auth
    username: str | None = None
    password: str | None = None


# ─────────────────────────────────────────────────────────────────────────────
# Engine
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class EngineConfig:
    """Settings shared by every request sent through an engine."""
    engine: EngineType = EngineType.AIOHTTP
    base_url: str | None = None  # Relative request URLs are resolved against this
    timeout_ms: int = 30000
    follow_redirects: bool = True
    verify_ssl: bool = True
    headers: dict[str, str] = field(default_factory=dict)  # Request headers take precedence
    auth: AuthConfig | None = None
