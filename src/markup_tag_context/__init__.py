"""Markup Tag Context.

Works out which tag, attribute name and attribute value surround a cursor in
an HTML or XML document, for autocomplete and hinting. Only a few tokens
around the cursor are ever inspected, and malformed or half-typed markup
degrades to a less specific, still well-formed result.

Progressive API Disclosure:
- Level 1: Simple functions - resolve_context(), resolve_text(), make_tag_context()
- Level 2: Configured resolver - ContextResolver class with diagnostic reports
"""

__version__ = "0.1.0"
__author__ = "Markup Tag Context Team"

# Progressive API disclosure - Level 1: Simple functions
# Progressive API disclosure - Level 2: Configured resolver
from .api import ContextResolver, ResolutionResult, resolve_context, resolve_text
from .context import AttributeContext, TagContext, make_tag_context

# Configuration classes for advanced usage
from .shared.config import ContextConfig, MarkupDialect, ResolverConfig, TokenizerConfig

# Host-side document model
from .tokenization import MarkupDocument, Position, Token, TokenCategory, TokenSource

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple functions
    "resolve_context",
    "resolve_text",
    "make_tag_context",

    # Level 2: Configured resolver
    "ContextResolver",
    "ResolutionResult",

    # Result objects
    "AttributeContext",
    "TagContext",

    # Configuration classes
    "ContextConfig",
    "MarkupDialect",
    "ResolverConfig",
    "TokenizerConfig",

    # Document model
    "MarkupDocument",
    "Position",
    "Token",
    "TokenCategory",
    "TokenSource",
]
