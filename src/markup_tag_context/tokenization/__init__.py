"""Reference tokenization layer for tag context resolution.

Context resolution treats the tokenizer as a black box reached through the
``TokenSource`` protocol. This package provides the default implementation.

Key Components:
    MarkupTokenizer: Line-oriented state machine producing editor-style tokens
    MarkupDocument: Text buffer implementing TokenSource over a tokenized snapshot
    Token: Classified span of a line with the lexer state reached after it
    TokenCategory: Enumeration of token classes
    MarkupState / NestedMarkupState: Lexer state shapes of the two dialects
"""

from .document import CURSOR_MARKER, MarkupDocument, TokenSource
from .tokenizer import (
    LOCAL_MODES,
    LexerState,
    LexMode,
    MarkupState,
    MarkupTokenizer,
    NestedMarkupState,
    Position,
    Token,
    TokenCategory,
)

__all__ = [
    "CURSOR_MARKER",
    "LOCAL_MODES",
    "LexMode",
    "LexerState",
    "MarkupDocument",
    "MarkupState",
    "MarkupTokenizer",
    "NestedMarkupState",
    "Position",
    "Token",
    "TokenCategory",
    "TokenSource",
]
