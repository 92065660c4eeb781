"""
Parser for engine configuration files.

This module converts validated YAML data into an EngineConfig and holds
the {{env.NAME}} placeholder interpolation the loader applies beforehand.
"""

from __future__ import annotations

import re
from typing import Any, Mapping

from .models import AuthConfig, AuthType, EngineConfig, EngineType

# Template interpolation: {{env.KEY}}
ENV_PATTERN = re.compile(r"\{\{env\.(\w+)\}\}")


def interpolate_value(value: Any, env: Mapping[str, str]) -> Any:
    """
    Interpolate {{env.NAME}} placeholders in a value.

    Unknown names are left as they are. Dicts and lists are handled
    recursively; other values are returned unchanged.
    """
    if isinstance(value, str):
        def replace_env(match: re.Match) -> str:
            var_name = match.group(1)
            return str(env.get(var_name, match.group(0)))
        return ENV_PATTERN.sub(replace_env, value)
    elif isinstance(value, dict):
        return {k: interpolate_value(v, env) for k, v in value.items()}
    elif isinstance(value, list):
        return [interpolate_value(v, env) for v in value]
    return value


class ConfigParser:
    """Converts validated configuration data to a typed EngineConfig."""

    def __init__(self, data: dict[str, Any]):
        self.data = data

    def parse(self) -> EngineConfig:
        defaults = EngineConfig()
        return EngineConfig(
            engine=EngineType(self.data.get("engine", defaults.engine.value)),
            base_url=self.data.get("base_url"),
            timeout_ms=self.data.get("timeout_ms", defaults.timeout_ms),
            follow_redirects=self.data.get("follow_redirects", defaults.follow_redirects),
            verify_ssl=self.data.get("verify_ssl", defaults.verify_ssl),
            headers={str(k): str(v) for k, v in self.data.get("headers", {}).items()},
            auth=self._parse_auth(self.data.get("auth")),
        )

    def _parse_auth(self, auth_data: dict | None) -> AuthConfig | None:
        """Parse auth configuration if present."""
        if auth_data is None:
            return None

        return AuthConfig(
            type=AuthType(auth_data["type"]),
            token=auth_data.get("token"),
            header=auth_data.get("header", "X-API-Key"),
            key=auth_data.get("key"),
            username=auth_data.get("username"),
            password=auth_data.get("password"),
        )
