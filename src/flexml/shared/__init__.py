"""Shared utilities for flexml.

This module provides the configuration objects and logging helpers used
across the mapping, node and adapter layers.
"""

from .config import (
    DEFAULT_CONFIG,
    CollisionPolicy,
    ConfigError,
    ConfigValidationError,
    NodeConfig,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)

__all__ = [
    "DEFAULT_CONFIG",
    "CollisionPolicy",
    "ConfigError",
    "ConfigValidationError",
    "NodeConfig",
    "CorrelationLogger",
    "get_logger",
]
