"""
Engines

This package provides the engines that execute requests: a real HTTP
engine on aiohttp and an in-memory engine answering from fixtures.

Usage:
    from httpensure.transport import create_engine, AiohttpEngine, MockEngine
    from httpensure.config import load_config

    # Create from config
    config, _ = load_config("httpensure.yaml")
    engine = create_engine(config)

    # Use as async context manager
    async with engine:
        response = await engine.send(Request.get("/users/5"))
        response.ensure_200().ensure_json({"id": 5})
"""

# Factory
from .factory import create_engine

# Engine implementations
from .base import BaseEngine, resolve_url
from .http import AiohttpEngine
from .mock import MockEngine, MockRoute

__all__ = [
    # Factory
    "create_engine",
    # Base
    "BaseEngine",
    "resolve_url",
    # Implementations
    "AiohttpEngine",
    "MockEngine",
    "MockRoute",
]
