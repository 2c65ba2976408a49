"""Decide where the cursor sits inside markup.

Starting from the token under the cursor, the classifier recognizes one of a
handful of situations and walks a few tokens backward or forward to fill in
the rest of the context:

- whitespace: look at the token before it; after a value only the tag counts
- tag token: the cursor is on the tag name itself (``>`` means past the tag)
- ``=``: step back to the attribute name and continue from there
- attribute name: step forward over ``=`` to pick up the value
- anything else: assume an attribute value and step back over ``=`` to the name

Whenever a step fails or lands on an unexpected token the walk stops and the
context gathered so far is returned. Nothing here raises for odd input.
"""

from typing import Optional

from markup_tag_context.shared.logging import get_logger
from markup_tag_context.tokenization import Position, TokenCategory, TokenSource

from .cursor import NavigationContext
from .extractors import extract_attribute_value, extract_tag_name
from .tag_context import TagContext, make_tag_context


def _from_attribute_value(ctx: NavigationContext) -> TagContext:
    attr_value = extract_attribute_value(ctx)

    if not ctx.move_to_previous_token() or ctx.token.text != "=":
        return make_tag_context()
    tag_name = extract_tag_name(ctx)

    if not ctx.move_to_previous_token() or ctx.token.category is not TokenCategory.ATTRIBUTE:
        return make_tag_context(tag_name)

    return make_tag_context(extract_tag_name(ctx), ctx.token.text, attr_value)


def _from_attribute_name(ctx: NavigationContext) -> TagContext:
    tag_name = extract_tag_name(ctx)
    attr_name = ctx.token.text

    # The user may still be typing, so "=" and the value can be missing
    if not ctx.move_to_next_token() or ctx.token.text != "=":
        return make_tag_context(tag_name, attr_name)

    if not ctx.move_to_next_token():
        return make_tag_context(tag_name, attr_name)

    return make_tag_context(tag_name, attr_name, extract_attribute_value(ctx))


def classify(ctx: NavigationContext) -> TagContext:
    """Classify the cursor position held by ``ctx``.

    Moves ``ctx`` while classifying; it should not be reused afterwards.
    """
    if ctx.token.is_blank:
        if not ctx.move_to_previous_token():
            return make_tag_context()

        if ctx.token.category is not TokenCategory.TAG:
            # Whitespace after a value: no attribute is being edited
            previous = _from_attribute_value(ctx)
            return make_tag_context(previous.tag_name)

    if ctx.token.category is TokenCategory.TAG:
        if ctx.token.text == ">":
            return make_tag_context()
        return make_tag_context(extract_tag_name(ctx))

    if ctx.token.text == "=":
        if not ctx.move_to_previous_token() or ctx.token.category is not TokenCategory.ATTRIBUTE:
            return make_tag_context()

    if ctx.token.category is TokenCategory.ATTRIBUTE:
        return _from_attribute_name(ctx)

    return _from_attribute_value(ctx)


def resolve_context(
    source: TokenSource,
    position: Position,
    correlation_id: Optional[str] = None
) -> TagContext:
    """Resolve the tag context at ``position`` in ``source``.

    Args:
        source: Tokenized document, e.g. a MarkupDocument
        position: Cursor position
        correlation_id: Optional correlation ID for log records

    Returns:
        TagContext, empty when the cursor is not inside a tag
    """
    logger = get_logger(__name__, correlation_id, "context_classifier")
    return classify(NavigationContext(source, position, logger))
