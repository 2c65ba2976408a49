"""Configuration classes for tag context resolution.

This module provides configuration objects for the reference tokenizer and the
context resolver, with validation on construction and JSON round-tripping for
the command-line tool.
"""

import json
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

VALID_DIAGNOSTIC_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


class MarkupDialect(Enum):
    """Markup dialects understood by the reference tokenizer."""

    XML = "xml"     # Plain markup, lexer state carries the tag name directly
    HTML = "html"   # Mixed mode, markup state nested under an outer state


@dataclass(frozen=True)
class TokenizerConfig:
    """Configuration for the reference markup tokenizer."""

    dialect: MarkupDialect = MarkupDialect.HTML
    raw_text_tags: Tuple[str, ...] = ("script", "style")
    lowercase_tag_names: bool = False

    def __post_init__(self) -> None:
        """Validate tokenizer configuration."""
        if isinstance(self.dialect, str):
            try:
                object.__setattr__(self, "dialect", MarkupDialect(self.dialect.lower()))
            except ValueError as e:
                raise ValueError(
                    f"dialect must be one of {[d.value for d in MarkupDialect]}"
                ) from e
        names = tuple(name.lower() for name in self.raw_text_tags)
        if any(not name for name in names):
            raise ValueError("raw_text_tags cannot contain empty names")
        object.__setattr__(self, "raw_text_tags", names)


@dataclass(frozen=True)
class ResolverConfig:
    """Configuration for the context resolver."""

    enable_diagnostics: bool = True
    log_navigation: bool = False
    diagnostic_level: str = "WARNING"

    def __post_init__(self) -> None:
        """Validate resolver configuration."""
        if self.diagnostic_level not in VALID_DIAGNOSTIC_LEVELS:
            raise ValueError(
                f"diagnostic_level must be one of {VALID_DIAGNOSTIC_LEVELS}"
            )


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
class ContextConfig:
    """Complete configuration for tokenizing documents and resolving contexts.

    Immutable along with its component configurations, so one instance can
    serve every query an editor issues.
    """

    tokenizer: TokenizerConfig = field(default_factory=TokenizerConfig)
    resolver: ResolverConfig = field(default_factory=ResolverConfig)
    correlation_id: Optional[str] = None

    def override(self, **kwargs: Any) -> "ContextConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Field overrides; nested fields use ``component__field``

        Returns:
            New ContextConfig instance with overrides applied

        Example:
            >>> config = ContextConfig().override(tokenizer__dialect="xml")
        """
        nested: Dict[str, Dict[str, Any]] = {}
        top_level: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                component, field_name = key.split("__", 1)
                if component not in ("tokenizer", "resolver"):
                    raise ConfigValidationError(
                        f"Unknown configuration component: {component}",
                        field_name=key,
                        suggestions=["tokenizer", "resolver"],
                    )
                nested.setdefault(component, {})[field_name] = value
            else:
                top_level[key] = value

        for component, overrides in nested.items():
            try:
                top_level[component] = replace(getattr(self, component), **overrides)
            except (TypeError, ValueError) as e:
                raise ConfigValidationError(str(e), field_name=component) from e

        return replace(self, **top_level)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        def _dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, "__dataclass_fields__"):
                return {
                    name: _dataclass_to_dict(getattr(obj, name))
                    for name in obj.__dataclass_fields__
                }
            if isinstance(obj, Enum):
                return obj.value
            if isinstance(obj, (list, tuple, set)):
                return [_dataclass_to_dict(item) for item in obj]
            return obj

        result = _dataclass_to_dict(self)
        if not isinstance(result, dict):
            raise ConfigValidationError("Configuration serialization failed")
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ContextConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected so typos in config files surface early.
        """
        known = {"tokenizer", "resolver", "correlation_id"}
        unknown = set(data) - known
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration keys: {sorted(unknown)}",
                suggestions=sorted(known),
            )
        try:
            tokenizer_data = dict(data.get("tokenizer", {}))
            if "raw_text_tags" in tokenizer_data:
                tokenizer_data["raw_text_tags"] = tuple(tokenizer_data["raw_text_tags"])
            return cls(
                tokenizer=TokenizerConfig(**tokenizer_data),
                resolver=ResolverConfig(**data.get("resolver", {})),
                correlation_id=data.get("correlation_id"),
            )
        except TypeError as e:
            raise ConfigValidationError(f"Invalid configuration: {e}") from e
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

    @classmethod
    def from_json(cls, json_str: str) -> "ContextConfig":
        """Create configuration from JSON string."""
        return cls.from_dict(json.loads(json_str))

    @classmethod
    def html(cls) -> "ContextConfig":
        """Preset for HTML documents with embedded script and style blocks."""
        return cls(tokenizer=TokenizerConfig(dialect=MarkupDialect.HTML))

    @classmethod
    def xml(cls) -> "ContextConfig":
        """Preset for plain XML documents."""
        return cls(tokenizer=TokenizerConfig(dialect=MarkupDialect.XML, raw_text_tags=()))

    @classmethod
    def debugging(cls) -> "ContextConfig":
        """Preset that traces every navigation step."""
        return cls(resolver=ResolverConfig(log_navigation=True, diagnostic_level="DEBUG"))
