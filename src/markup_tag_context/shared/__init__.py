"""Shared utilities for tag context resolution.

This module provides the configuration objects, diagnostic types and logging
helpers used by the tokenization, context and API layers.
"""

from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    NavigationMetrics,
    filter_diagnostics,
)
from .config import (
    ConfigError,
    ConfigValidationError,
    ContextConfig,
    MarkupDialect,
    ResolverConfig,
    TokenizerConfig,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)

__all__ = [
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "NavigationMetrics",
    "filter_diagnostics",
    "ConfigError",
    "ConfigValidationError",
    "ContextConfig",
    "MarkupDialect",
    "ResolverConfig",
    "TokenizerConfig",
    "CorrelationLogger",
    "get_logger",
]
