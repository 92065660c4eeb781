"""
Validation for engine configuration files.

This module checks raw parsed YAML against the configuration schema and
reports every problem with a helpful message instead of stopping at the
first one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlparse

from .models import AuthType, EngineType


# ─────────────────────────────────────────────────────────────────────────────
# Validation Result Types
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class ValidationError:
    """One problem found in a configuration document, keyed by its dotted path."""
    path: str
    message: str
    value: Any = None
    suggestion: str | None = None

    def __str__(self) -> str:
        text = f"{self.path}: {self.message}"
        if self.value is not None:
            text += f" (got {self.value!r})"
        if self.suggestion:
            text += f"\n    hint: {self.suggestion}"
        return text


@dataclass
class ValidationResult:
    """Every problem found while loading one configuration document."""
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def paths(self) -> list[str]:
        return [error.path for error in self.errors]

    def add_error(
        self,
        path: str,
        message: str,
        value: Any = None,
        suggestion: str | None = None,
    ) -> None:
        self.errors.append(ValidationError(path, message, value, suggestion))

    def __str__(self) -> str:
        if self.is_valid:
            return "Engine configuration OK"
        header = f"Invalid engine configuration ({len(self.errors)} problem(s)):"
        return "\n".join([header, *(f"  - {error}" for error in self.errors)])


# ─────────────────────────────────────────────────────────────────────────────
# Config Validator
# ─────────────────────────────────────────────────────────────────────────────

class ConfigValidator:
    """Validates raw parsed YAML against the engine configuration schema."""

    KNOWN_KEYS = {
        "engine", "base_url", "timeout_ms", "follow_redirects",
        "verify_ssl", "headers", "auth",
    }
    AUTH_KEYS = {"type", "token", "header", "key", "username", "password"}
    VALID_ENGINES = {e.value for e in EngineType}
    VALID_AUTH_TYPES = {t.value for t in AuthType}

    def __init__(self, data: dict[str, Any]):
        self.data = data
        self.result = ValidationResult()

    def validate(self) -> ValidationResult:
        """Run all validation checks and return result."""
        self._validate_keys()
        self._validate_engine()
        self._validate_base_url()
        self._validate_timeout()
        self._validate_flags()
        self._validate_headers()
        self._validate_auth()
        return self.result

    def _validate_keys(self) -> None:
        for key in set(self.data) - self.KNOWN_KEYS:
            self.result.add_error(
                str(key),
                f"Unknown field '{key}'",
                suggestion=f"Valid fields are: {', '.join(sorted(self.KNOWN_KEYS))}"
            )

    def _validate_engine(self) -> None:
        engine = self.data.get("engine", EngineType.AIOHTTP.value)
        if engine not in self.VALID_ENGINES:
            self.result.add_error(
                "engine",
                "Unknown engine",
                value=engine,
                suggestion=f"Use one of: {', '.join(sorted(self.VALID_ENGINES))}"
            )

    def _validate_base_url(self) -> None:
        if "base_url" not in self.data:
            return
        base_url = self.data["base_url"]
        if not isinstance(base_url, str):
            self.result.add_error("base_url", "Must be a string", value=base_url)
            return
        parsed = urlparse(base_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            self.result.add_error(
                "base_url",
                "Must be an absolute http(s) URL",
                value=base_url,
                suggestion="Use e.g. 'https://api.example.com'"
            )

    def _validate_timeout(self) -> None:
        if "timeout_ms" not in self.data:
            return
        timeout = self.data["timeout_ms"]
        if not isinstance(timeout, int) or isinstance(timeout, bool):
            self.result.add_error("timeout_ms", "Must be an integer", value=timeout)
        elif timeout <= 0:
            self.result.add_error("timeout_ms", "Must be > 0", value=timeout)

    def _validate_flags(self) -> None:
        for key in ("follow_redirects", "verify_ssl"):
            if key in self.data and not isinstance(self.data[key], bool):
                self.result.add_error(
                    key,
                    "Must be a boolean",
                    value=self.data[key],
                    suggestion=f"Use '{key}: true' or '{key}: false'"
                )

    def _validate_headers(self) -> None:
        if "headers" not in self.data:
            return
        headers = self.data["headers"]
        if not isinstance(headers, dict):
            self.result.add_error("headers", "Must be a mapping of header names to values", value=headers)
            return
        for name, value in headers.items():
            if not isinstance(name, str) or ":" in name or not name.strip():
                self.result.add_error(f"headers.{name}", "Invalid header name", value=name)
            if not isinstance(value, (str, int, float)) or isinstance(value, bool):
                self.result.add_error(f"headers.{name}", "Header value must be a string", value=value)

    def _validate_auth(self) -> None:
        if "auth" not in self.data:
            return
        auth = self.data["auth"]
        if not isinstance(auth, dict):
            self.result.add_error("auth", "Must be an object", value=auth)
            return

        for key in set(auth) - self.AUTH_KEYS:
            self.result.add_error(
                f"auth.{key}",
                f"Unknown auth field '{key}'",
                suggestion=f"Valid fields are: {', '.join(sorted(self.AUTH_KEYS))}"
            )

        auth_type = auth.get("type")
        if auth_type not in self.VALID_AUTH_TYPES:
            self.result.add_error(
                "auth.type",
                "Missing or unknown auth type",
                value=auth_type,
                suggestion=f"Use one of: {', '.join(sorted(self.VALID_AUTH_TYPES))}"
            )
            return

        required = {
            AuthType.BEARER.value: ["token"],
            AuthType.API_KEY.value: ["key"],
            AuthType.BASIC.value: ["username", "password"],
        }[auth_type]

        for key in required:
            if not isinstance(auth.get(key), str) or not auth[key]:
                self.result.add_error(
                    f"auth.{key}",
                    f"'{key}' is required for {auth_type} auth",
                    value=auth.get(key),
                    suggestion="Use '{{env.NAME}}' to read secrets from the environment"
                )
