"""Pull the attribute value and tag name out of the token under the cursor."""

from markup_tag_context.shared.result import DiagnosticSeverity
from markup_tag_context.tokenization import MarkupState, NestedMarkupState

from .cursor import NavigationContext

QUOTE_CHARS = ("'", '"')


def decode_attribute_value(text: str, relative_offset: int) -> str:
    """Best-effort attribute value from a value token's text.

    A fully quoted value is returned whole, without its quotes, wherever the
    cursor is inside it. Otherwise the value is still being typed: only the
    part before the cursor counts, minus its opening quote. A negative
    ``relative_offset`` leaves the text untruncated.

    Args:
        text: Text of the token believed to hold the value
        relative_offset: Cursor column relative to the token start

    Returns:
        The decoded value, possibly empty
    """
    if len(text) > 1 and text[0] in QUOTE_CHARS and text[-1] == text[0]:
        return text[1:-1]

    value = text
    if relative_offset >= 0:
        value = value[:relative_offset]

    if value[:1] in QUOTE_CHARS:
        value = value[1:]
    return value


def extract_attribute_value(ctx: NavigationContext) -> str:
    """Decode the value of the current token at the current cursor column.

    An unclosed quote can make the tokenizer fold trailing markup into the
    value token, which is why the cursor column bounds the result.
    """
    token = ctx.token
    relative_offset = ctx.position.column - token.start
    if relative_offset < 0:
        ctx.logger.warning(
            "Cursor position is not inside the current token",
            extra={
                "token": token.text,
                "token_start": token.start,
                "column": ctx.position.column,
            }
        )
        ctx.add_diagnostic(
            DiagnosticSeverity.WARNING,
            "Cursor position is not inside the current token",
            "attribute_value_extractor",
            details={"token": token.text, "token_start": token.start},
        )
    return decode_attribute_value(token.text, relative_offset)


def extract_tag_name(ctx: NavigationContext) -> str:
    """Name of the tag enclosing the current token, or ``""``.

    Plain markup states carry the name directly; the html dialect keeps it on
    the nested markup state.
    """
    state = ctx.token.state
    if isinstance(state, MarkupState) and state.tag_name:
        return state.tag_name
    if isinstance(state, NestedMarkupState) and state.html_state.tag_name:
        return state.html_state.tag_name

    ctx.logger.debug(
        "No tag name in lexer state",
        extra={"state_type": type(state).__name__, "token": ctx.token.text}
    )
    return ""
