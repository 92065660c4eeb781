"""
httpensure - HTTP client with fluent response assertions

This package separates building requests, executing them through an
interchangeable engine, and validating the responses.

Subpackages:
    - message: Request / Response value objects and payloads
    - transport: Engines (aiohttp, in-memory mock)
    - assertions: ensure_* validators and the exceptions they raise
    - config: Load and validate engine configuration files

Usage:
    from httpensure import Request, AiohttpEngine, EngineConfig

    engine = AiohttpEngine(EngineConfig(base_url="https://api.example.com"))

    async with engine:
        response = await engine.send(
            Request.post("/users").with_json({"name": "Ada"})
        )

    response.ensure_201().ensure_json({"name": "Ada"}).ensure_header("Location")
"""

__version__ = "0.1.0"

# Re-export message for convenience
from .message import (
    JsonPayload,
    Payload,
    RawPayload,
    Request,
    Response,
)

# Re-export assertions for convenience
from .assertions import (
    ConnectionException,
    ContentException,
    ContentTypeException,
    EmptyResponseError,
    HeaderException,
    MalformedResponseError,
    ResponseAssertions,
    ResponseException,
    ResponseStateError,
    StatusCodeException,
)

# Re-export config for convenience
from .config import (
    AuthConfig,
    AuthType,
    EngineConfig,
    EngineType,
    ValidationError,
    ValidationResult,
    load_config,
    load_config_yaml,
)

# Re-export transport for convenience
from .transport import (
    AiohttpEngine,
    BaseEngine,
    MockEngine,
    create_engine,
)

# Re-export util for convenience
from .util import make_expectation_message, recursive_sort

__all__ = [
    # Package info
    "__version__",
    # Message
    "Payload",
    "RawPayload",
    "JsonPayload",
    "Request",
    "Response",
    # Assertions
    "ResponseAssertions",
    "ResponseException",
    "StatusCodeException",
    "ContentTypeException",
    "HeaderException",
    "ContentException",
    "ResponseStateError",
    "EmptyResponseError",
    "MalformedResponseError",
    "ConnectionException",
    # Config
    "AuthConfig",
    "AuthType",
    "EngineConfig",
    "EngineType",
    "ValidationError",
    "ValidationResult",
    "load_config",
    "load_config_yaml",
    # Transport
    "BaseEngine",
    "AiohttpEngine",
    "MockEngine",
    "create_engine",
    # Util
    "recursive_sort",
    "make_expectation_message",
]
