"""
Engine factory for creating engines from configuration.
"""

from __future__ import annotations

from ..config.models import EngineConfig, EngineType
from .base import BaseEngine
from .http import AiohttpEngine
from .mock import MockEngine


def create_engine(config: EngineConfig) -> BaseEngine:
    """
    Create an engine instance from an EngineConfig.

    Args:
        config: Engine configuration, e.g. from load_config()

    Returns:
        Appropriate engine instance (AiohttpEngine or MockEngine)

    Raises:
        ValueError: If the engine type is unsupported or the config is invalid

    Example:
        config, _ = load_config("httpensure.yaml")
        engine = create_engine(config)

        async with engine:
            response = await engine.send(Request.get("/health"))
    """
    if config.timeout_ms <= 0:
        raise ValueError(f"timeout_ms must be > 0, got {config.timeout_ms}")

    if config.engine == EngineType.AIOHTTP:
        return AiohttpEngine(config)

    elif config.engine == EngineType.MOCK:
        return MockEngine(config)

    else:
        raise ValueError(f"Unsupported engine type: {config.engine}")
