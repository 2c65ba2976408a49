"""In-memory text buffer exposing the token-source interface.

``MarkupDocument`` plays the role of the editor: it holds the document lines,
a cursor, and answers ``get_token_at`` the way editor syntax modes do. Context
resolution only ever talks to it through the ``TokenSource`` protocol, so any
host editor can be plugged in instead.
"""

from typing import List, Optional, Protocol, runtime_checkable

from markup_tag_context.shared.config import TokenizerConfig
from markup_tag_context.shared.logging import get_logger

from .tokenizer import LexerState, MarkupTokenizer, Position, Token, TokenCategory

CURSOR_MARKER = "|"


@runtime_checkable
class TokenSource(Protocol):
    """What context resolution needs from a host editor."""

    def get_token_at(self, position: Position) -> Token:
        """Return the token covering ``position``; must not modify the document."""
        ...

    def get_line_text(self, line: int) -> str:
        """Return the full text of a line."""
        ...

    def get_line_count(self) -> int:
        """Return the number of lines in the document."""
        ...


class MarkupDocument:
    """A tokenized snapshot of a markup document.

    Line endings are normalized to ``\\n``; offsets refer to the normalized text.
    """

    def __init__(
        self,
        text: str,
        config: Optional[TokenizerConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or TokenizerConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "markup_document")

        self._text = text.replace("\r\n", "\n").replace("\r", "\n")
        self._lines = self._text.split("\n")
        self._tokenizer = MarkupTokenizer(self.config, correlation_id)

        self._line_states: List[LexerState] = []
        self._line_tokens: List[List[Token]] = []
        state = self._tokenizer.initial_state()
        for line in self._lines:
            self._line_states.append(state)
            tokens, state = self._tokenizer.tokenize_line(line, state)
            self._line_tokens.append(tokens)
        self._end_state = state

        self._cursor = Position(0, 0)

        self.logger.debug(
            "Document tokenized",
            extra={
                "line_count": len(self._lines),
                "token_count": sum(len(tokens) for tokens in self._line_tokens),
                "dialect": self.config.dialect.value,
            }
        )

    @classmethod
    def from_marked_text(
        cls,
        marked_text: str,
        config: Optional[TokenizerConfig] = None,
        marker: str = CURSOR_MARKER,
        correlation_id: Optional[str] = None
    ) -> "MarkupDocument":
        """Build a document whose cursor sits where ``marker`` appears.

        The first occurrence of the marker is removed from the text.

        Example:
            >>> doc = MarkupDocument.from_marked_text('<div class="bo|')
            >>> doc.cursor
            Position(line=0, column=14)
        """
        offset = marked_text.find(marker)
        if offset == -1:
            raise ValueError(f"Cursor marker {marker!r} not found in text")
        text = marked_text[:offset] + marked_text[offset + len(marker):]
        document = cls(text, config, correlation_id)
        prefix = text[:offset].replace("\r\n", "\n").replace("\r", "\n")
        document.set_cursor(document.offset_to_position(len(prefix)))
        return document

    @property
    def text(self) -> str:
        return self._text

    @property
    def lines(self) -> List[str]:
        return list(self._lines)

    @property
    def cursor(self) -> Position:
        return self._cursor

    def set_cursor(self, position: Position) -> None:
        self._cursor = self.clip_position(position)

    def get_line_count(self) -> int:
        return len(self._lines)

    def get_line_text(self, line: int) -> str:
        """Return a line's text; lines past the end of the document are empty."""
        if line >= len(self._lines):
            return ""
        return self._lines[line]

    def line_tokens(self, line: int) -> List[Token]:
        """All tokens of a line, in order."""
        if not 0 <= line < len(self._lines):
            raise IndexError(f"Line {line} out of range (0-{len(self._lines) - 1})")
        return list(self._line_tokens[line])

    def clip_position(self, position: Position) -> Position:
        """Clamp a position into the document.

        A line past the end clips to the end of the last line; a column past
        the end of its line clips to the line length.
        """
        last = len(self._lines) - 1
        if position.line > last:
            return Position(last, len(self._lines[last]))
        return Position(position.line, min(position.column, len(self._lines[position.line])))

    def get_token_at(self, position: Position) -> Token:
        """Return the token ending at or after ``position.column``.

        At column 0 there is nothing before the cursor, so an empty token
        carrying the line-start state is returned. Lines past the end of the
        document also yield an empty token, carrying the end-of-document state.
        """
        if position.line >= len(self._lines):
            return Token("", 0, 0, TokenCategory.TEXT, self._end_state)
        pos = self.clip_position(position)
        tokens = self._line_tokens[pos.line]
        if pos.column > 0:
            for token in tokens:
                if token.end >= pos.column:
                    return token
        return Token("", 0, 0, TokenCategory.TEXT, self._line_states[pos.line])

    def offset_to_position(self, offset: int) -> Position:
        """Convert a character offset into a line/column position."""
        if offset < 0:
            raise ValueError("Offset must be >= 0")
        remaining = min(offset, len(self._text))
        for index, line in enumerate(self._lines):
            if remaining <= len(line):
                return Position(index, remaining)
            remaining -= len(line) + 1
        last = len(self._lines) - 1
        return Position(last, len(self._lines[last]))

    def position_to_offset(self, position: Position) -> int:
        """Convert a line/column position into a character offset."""
        pos = self.clip_position(position)
        return sum(len(line) + 1 for line in self._lines[:pos.line]) + pos.column

