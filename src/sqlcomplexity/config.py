"""
Configuration system for SQLComplexity.

Environment variables are the primary config source, with an optional
JSON or YAML file for local development.

Usage:
    from sqlcomplexity.config import get_config

    config = get_config()
    analyzer = ComplexityAnalyzer(max_depth=config.max_subquery_depth)

Environment variables:
- SQLCOMPLEXITY_MAX_SUBQUERY_DEPTH=16
- SQLCOMPLEXITY_DETECT_CYCLES=false
- SQLCOMPLEXITY_LOG_LEVEL=DEBUG
- SQLCOMPLEXITY_CONFIG_FILE=./sqlcomplexity.yaml
"""

from __future__ import annotations

import json
import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from sqlcomplexity.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_MAX_SUBQUERY_DEPTH = 32

# Each nesting level costs several interpreter frames; stay well under
# the default recursion limit of 1000.
MAX_SUBQUERY_DEPTH_LIMIT = 100


class Config(BaseModel):
    """SQLComplexity configuration."""

    model_config = ConfigDict(frozen=True)

    max_subquery_depth: int = Field(
        default=DEFAULT_MAX_SUBQUERY_DEPTH,
        ge=1,
        le=MAX_SUBQUERY_DEPTH_LIMIT,
        description="Maximum nesting depth when resolving subquery plans",
    )
    detect_cycles: bool = Field(
        default=True,
        description="Fail fast when a subquery resolves back to a query on the current path",
    )
    log_level: str = Field(
        default="WARNING",
        description="Log level used by the CLI",
    )


def _parse_env_bool(value: str | None, default: bool = False) -> bool:
    """Parse boolean from environment variable."""
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


def _parse_env_int(value: str | None, default: int) -> int:
    """Parse integer from environment variable."""
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning("Could not parse integer setting %r, using %d", value, default)
        return default


def load_config_from_env() -> Config:
    """Load configuration from SQLCOMPLEXITY_* environment variables."""
    max_depth = _parse_env_int(
        os.environ.get("SQLCOMPLEXITY_MAX_SUBQUERY_DEPTH"), DEFAULT_MAX_SUBQUERY_DEPTH
    )
    if not 1 <= max_depth <= MAX_SUBQUERY_DEPTH_LIMIT:
        logger.warning(
            "SQLCOMPLEXITY_MAX_SUBQUERY_DEPTH must be between 1 and %d, got %d; using %d",
            MAX_SUBQUERY_DEPTH_LIMIT,
            max_depth,
            DEFAULT_MAX_SUBQUERY_DEPTH,
        )
        max_depth = DEFAULT_MAX_SUBQUERY_DEPTH

    return Config(
        max_subquery_depth=max_depth,
        detect_cycles=_parse_env_bool(os.environ.get("SQLCOMPLEXITY_DETECT_CYCLES"), True),
        log_level=os.environ.get("SQLCOMPLEXITY_LOG_LEVEL", "WARNING").upper(),
    )


def load_config_from_file(path: Path) -> Config:
    """
    Load configuration from a JSON or YAML file.

    Falls back to environment variables when the file does not exist.

    Raises:
        ConfigurationError: If the file exists but cannot be read or validated.
    """
    if not path.exists():
        logger.warning("Config file not found: %s, using environment", path)
        return load_config_from_env()

    try:
        with open(path) as f:
            if path.suffix in (".yaml", ".yml"):
                data: Any = yaml.safe_load(f)
            else:
                data = json.load(f)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Failed to read config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")

    try:
        return Config(**data)
    except ValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(part) for part in first["loc"])
        raise ConfigurationError(
            f"Invalid configuration in {path}: {first['msg']}", config_key=key
        ) from e


@lru_cache(maxsize=1)
def get_config() -> Config:
    """
    Get the global configuration instance.

    Loads from SQLCOMPLEXITY_CONFIG_FILE if set, else environment variables.
    Result is cached for the lifetime of the process.
    """
    config_file = os.environ.get("SQLCOMPLEXITY_CONFIG_FILE")

    if config_file:
        return load_config_from_file(Path(config_file))

    return load_config_from_env()


def reset_config() -> None:
    """Reset the cached configuration (mainly for testing)."""
    get_config.cache_clear()
