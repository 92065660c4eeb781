"""
Engine configuration loader.

This module provides the public API for loading and validating engine
configuration from YAML files or strings.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .models import EngineConfig
from .parser import ConfigParser, interpolate_value
from .validation import ConfigValidator, ValidationResult


def load_config(
    path: str | Path,
    env: Mapping[str, str] | None = None,
) -> tuple[EngineConfig | None, ValidationResult]:
    """
    Load and validate an engine configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file
        env: Values for {{env.NAME}} placeholders (defaults to os.environ)

    Returns:
        Tuple of (EngineConfig or None, ValidationResult)
        If validation fails, EngineConfig will be None.

    Example:
        config, result = load_config("httpensure.yaml")
        if not result.is_valid:
            print(result)
            sys.exit(1)
        engine = create_engine(config)
    """
    path = Path(path)

    if not path.exists():
        result = ValidationResult()
        result.add_error(
            str(path),
            "File not found",
            suggestion="Check the file path is correct"
        )
        return None, result

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        result = ValidationResult()
        result.add_error(
            str(path),
            f"Invalid YAML syntax: {e}",
            suggestion="Check YAML formatting (indentation, colons, etc.)"
        )
        return None, result

    return _build(str(path), data, env)


def load_config_yaml(
    yaml_string: str,
    env: Mapping[str, str] | None = None,
) -> tuple[EngineConfig | None, ValidationResult]:
    """
    Load and validate an engine configuration from a YAML string.

    Args:
        yaml_string: YAML content as a string
        env: Values for {{env.NAME}} placeholders (defaults to os.environ)

    Returns:
        Tuple of (EngineConfig or None, ValidationResult)
    """
    try:
        data = yaml.safe_load(yaml_string)
    except yaml.YAMLError as e:
        result = ValidationResult()
        result.add_error("yaml", f"Invalid YAML syntax: {e}")
        return None, result

    return _build("yaml", data, env)


def _build(
    source: str,
    data: Any,
    env: Mapping[str, str] | None,
) -> tuple[EngineConfig | None, ValidationResult]:
    # An empty file means "all defaults"
    if data is None:
        data = {}

    if not isinstance(data, dict):
        result = ValidationResult()
        result.add_error(
            source,
            "Content must be a YAML object (not a list or scalar)",
            value=type(data).__name__
        )
        return None, result

    # Placeholders are filled in first so validation sees the final values
    data = interpolate_value(data, os.environ if env is None else env)

    result = ConfigValidator(data).validate()
    if not result.is_valid:
        return None, result

    return ConfigParser(data).parse(), result
