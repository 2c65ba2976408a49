"""Context resolution core.

Key Components:
    NavigationContext: Position/token pair stepping through the token stream
    classify / resolve_context: The decision procedure producing a TagContext
    extract_attribute_value / extract_tag_name: Token decoding helpers
    TagContext / make_tag_context: The always fully populated result
"""

from .classifier import classify, resolve_context
from .cursor import NavigationContext
from .extractors import decode_attribute_value, extract_attribute_value, extract_tag_name
from .tag_context import AttributeContext, TagContext, make_tag_context

__all__ = [
    "AttributeContext",
    "NavigationContext",
    "TagContext",
    "classify",
    "decode_attribute_value",
    "extract_attribute_value",
    "extract_tag_name",
    "make_tag_context",
    "resolve_context",
]
