"""Configuration classes for flexml nodes.

This module provides the immutable configuration object shared by the
markup converter and :class:`~flexml.node.xml.XMLNode`, together with
presets and dictionary/JSON serialization.
"""

import json
from dataclasses import dataclass, fields, replace
from enum import Enum, auto
from typing import Any, Dict, List, Optional


class CollisionPolicy(Enum):
    """How to treat an attribute and a child element sharing a name."""

    RAISE = auto()       # Reject the write with NameCollisionError
    OVERWRITE = auto()   # Replace the existing entry (legacy behaviour)


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class NodeConfig:
    """Configuration for parsing, mutating and emitting XML nodes.

    Thread-safe due to frozen dataclass implementation; use :meth:`override`
    to derive a modified copy.
    """

    collision_policy: CollisionPolicy = CollisionPolicy.RAISE
    preserve_whitespace: bool = False
    self_closing_empty: bool = False
    xml_declaration: bool = False
    max_depth: int = 256
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate node configuration."""
        if not isinstance(self.collision_policy, CollisionPolicy):
            raise ConfigValidationError(
                "collision_policy must be a CollisionPolicy",
                field_name="collision_policy",
                suggestions=[policy.name for policy in CollisionPolicy],
            )
        for flag in ("preserve_whitespace", "self_closing_empty", "xml_declaration"):
            if not isinstance(getattr(self, flag), bool):
                raise ConfigValidationError(f"{flag} must be a bool", field_name=flag)
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
            raise ConfigValidationError("max_depth must be an int", field_name="max_depth")
        if self.max_depth <= 0:
            raise ConfigValidationError("max_depth must be > 0", field_name="max_depth")

    @classmethod
    def strict(cls) -> "NodeConfig":
        """Create configuration that rejects attribute/child name collisions."""
        return cls()

    @classmethod
    def legacy(cls) -> "NodeConfig":
        """Create configuration that mirrors the legacy object model.

        Name collisions silently overwrite the existing entry, as the
        original runtime did.
        """
        return cls(collision_policy=CollisionPolicy.OVERWRITE)

    def override(self, **kwargs: Any) -> "NodeConfig":
        """Create a new configuration with specific overrides.

        Example:
            >>> NodeConfig().override(self_closing_empty=True).self_closing_empty
            True
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(kwargs) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration fields: {', '.join(unknown)}",
                field_name=unknown[0],
                suggestions=sorted(known),
            )
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        result: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            result[f.name] = value.name if isinstance(value, Enum) else value
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NodeConfig":
        """Create configuration from dictionary.

        Enum fields are accepted either as members or by member name.
        """
        values = dict(data)
        policy = values.get("collision_policy")
        if isinstance(policy, str):
            try:
                values["collision_policy"] = CollisionPolicy[policy.upper()]
            except KeyError:
                raise ConfigValidationError(
                    f"Unknown collision_policy: {policy}",
                    field_name="collision_policy",
                    suggestions=[p.name for p in CollisionPolicy],
                ) from None
        try:
            return cls(**values)
        except TypeError as e:
            raise ConfigValidationError(f"Invalid configuration data: {e}") from e

    @classmethod
    def from_json(cls, json_str: str) -> "NodeConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid JSON configuration: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("JSON configuration must be an object")
        return cls.from_dict(data)


DEFAULT_CONFIG = NodeConfig()
