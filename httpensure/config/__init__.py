"""
Engine Configuration

This package handles parsing, validating and loading engine configuration.

Usage:
    from httpensure.config import load_config

    config, result = load_config("httpensure.yaml")

    if not result.is_valid:
        print(result)  # Shows all validation errors
        sys.exit(1)

    print(config.base_url)
    print(config.timeout_ms)
"""

# Models
from .models import (
    AuthConfig,
    AuthType,
    EngineConfig,
    EngineType,
)

# Validation
from .validation import (
    ConfigValidator,
    ValidationError,
    ValidationResult,
)

# Parser
from .parser import ConfigParser, interpolate_value

# Loader (main public API)
from .loader import load_config, load_config_yaml

__all__ = [
    # Models
    "AuthConfig",
    "AuthType",
    "EngineConfig",
    "EngineType",
    # Validation
    "ConfigValidator",
    "ValidationError",
    "ValidationResult",
    # Parser
    "ConfigParser",
    "interpolate_value",
    # Loader
    "load_config",
    "load_config_yaml",
]
