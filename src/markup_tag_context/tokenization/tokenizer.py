"""Line-oriented markup tokenizer with editor-style token shapes.

This module implements the reference tokenizer behind ``MarkupDocument``. It
works one line at a time, carrying a lexer state from the end of each line into
the next, and produces the coarse token stream that editor syntax modes emit
for HTML and XML. An example stream for ``<span id="arrow"></span>``::

    TAG        "<span"
    TEXT       " "
    ATTRIBUTE  "id"
    TEXT       "="
    STRING     "\"arrow\""
    TAG        ">"
    TAG        "</span"
    TAG        ">"

Each token carries the lexer state reached after it, from which the enclosing
tag name can be read back.
"""

import re
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Dict, List, Optional, Tuple, Union

from markup_tag_context.shared.config import MarkupDialect, TokenizerConfig
from markup_tag_context.shared.logging import get_logger

# Embedded languages reported for raw-text elements in the html dialect
LOCAL_MODES: Dict[str, str] = {"script": "javascript", "style": "css"}

_NAME_RE = re.compile(r"[^\s/>\"'=<]*")
_ATTR_NAME_RE = re.compile(r"[^\s/>\"'=<]+")
_UNQUOTED_VALUE_RE = re.compile(r"[^\s>\"'<=]+")
_WHITESPACE_RE = re.compile(r"\s+")
_TEXT_RE = re.compile(r"[^<&]+")
_ENTITY_RE = re.compile(r"&#?\w+;?")


class TokenCategory(Enum):
    """Token classes emitted by the tokenizer."""

    TAG = "tag"                 # <name, </name, > and />
    ATTRIBUTE = "attribute"     # Attribute name inside a tag
    STRING = "string"           # Attribute value, quotes included
    COMMENT = "comment"         # <!-- ... -->
    META = "meta"               # <!DOCTYPE ...> and <?pi ?>
    ENTITY = "entity"           # &amp; and friends
    TEXT = "text"               # Everything else, including whitespace and "="


class LexMode(Enum):
    """Where the tokenizer is at the end of a token."""

    TEXT = auto()           # Between tags
    TAG = auto()            # Inside a tag, after its name
    AFTER_EQUALS = auto()   # Inside a tag, an attribute value is expected
    STRING = auto()         # Inside a quoted value that is not closed yet
    COMMENT = auto()        # Inside a comment that is not closed yet
    RAW_TEXT = auto()       # Inside <script>/<style> content


@dataclass(frozen=True)
class MarkupState:
    """Lexer state of the plain markup dialect."""

    mode: LexMode = LexMode.TEXT
    tag_name: Optional[str] = None
    quote: Optional[str] = None
    closing: bool = False
    raw_text_tag: Optional[str] = None


@dataclass(frozen=True)
class NestedMarkupState:
    """Lexer state of the html dialect.

    The markup state is one level down; ``local_mode`` names the embedded
    language while inside a raw-text element.
    """

    html_state: MarkupState = field(default_factory=MarkupState)
    local_mode: Optional[str] = None


LexerState = Union[MarkupState, NestedMarkupState]


@dataclass(frozen=True)
class Position:
    """Zero-based cursor location in a document."""

    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate position values."""
        if self.line < 0:
            raise ValueError("Line number must be >= 0")
        if self.column < 0:
            raise ValueError("Column number must be >= 0")

    def to_dict(self) -> Dict[str, int]:
        return {"line": self.line, "column": self.column}


@dataclass(frozen=True)
class Token:
    """A classified span of a single line."""

    text: str
    start: int
    end: int
    category: TokenCategory
    state: LexerState

    @property
    def is_blank(self) -> bool:
        """Non-empty and made of whitespace only."""
        return len(self.text) > 0 and not self.text.strip()

    def to_dict(self) -> Dict[str, object]:
        return {
            "text": self.text,
            "start": self.start,
            "end": self.end,
            "category": self.category.value,
        }


class MarkupTokenizer:
    """Tokenizes markup line by line with a resumable lexer state."""

    def __init__(
        self,
        config: Optional[TokenizerConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or TokenizerConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "markup_tokenizer")
        self.nested = self.config.dialect is MarkupDialect.HTML

    def initial_state(self) -> LexerState:
        """State at the very start of a document."""
        return self._wrap(MarkupState())

    def tokenize(self, text: str) -> List[List[Token]]:
        """Tokenize a whole document, returning one token list per line."""
        state = self.initial_state()
        lines: List[List[Token]] = []
        for line in text.split("\n"):
            tokens, state = self.tokenize_line(line, state)
            lines.append(tokens)
        return lines

    def tokenize_line(
        self, text: str, state: LexerState
    ) -> Tuple[List[Token], LexerState]:
        """Tokenize one line starting from ``state``.

        Returns:
            The tokens covering the line without gaps, and the state at its end
        """
        tokens: List[Token] = []
        inner = self._unwrap(state)
        i = 0
        while i < len(text):
            end, category, inner = self._scan(text, i, inner)
            if category is None:
                # Mode switch without consuming input
                continue
            tokens.append(Token(text[i:end], i, end, category, self._wrap(inner)))
            i = end
        return tokens, self._wrap(inner)

    def _wrap(self, inner: MarkupState) -> LexerState:
        if not self.nested:
            return inner
        local_mode = None
        if inner.mode is LexMode.RAW_TEXT and inner.raw_text_tag:
            local_mode = LOCAL_MODES.get(inner.raw_text_tag, inner.raw_text_tag)
        return NestedMarkupState(html_state=inner, local_mode=local_mode)

    @staticmethod
    def _unwrap(state: LexerState) -> MarkupState:
        if isinstance(state, NestedMarkupState):
            return state.html_state
        return state

    def _normalize_name(self, name: str) -> str:
        return name.lower() if self.config.lowercase_tag_names else name

    def _scan(
        self, text: str, i: int, state: MarkupState
    ) -> Tuple[int, Optional[TokenCategory], MarkupState]:
        if state.mode is LexMode.TEXT:
            return self._scan_text(text, i, state)
        if state.mode is LexMode.COMMENT:
            return self._scan_comment(text, i)
        if state.mode is LexMode.STRING:
            return self._scan_string(text, i, state, state.quote or '"', i)
        if state.mode is LexMode.RAW_TEXT:
            return self._scan_raw_text(text, i, state)
        return self._scan_tag(text, i, state)

    def _scan_text(
        self, text: str, i: int, state: MarkupState
    ) -> Tuple[int, Optional[TokenCategory], MarkupState]:
        if text.startswith("<!--", i):
            return self._scan_comment(text, i + 4)
        if text.startswith("<!", i) or text.startswith("<?", i):
            close = text.find(">", i)
            return (len(text) if close == -1 else close + 1), TokenCategory.META, state
        if text.startswith("</", i):
            name = _NAME_RE.match(text, i + 2).group()
            new_state = MarkupState(
                mode=LexMode.TAG, tag_name=self._normalize_name(name), closing=True
            )
            return i + 2 + len(name), TokenCategory.TAG, new_state
        char = text[i]
        if char == "<":
            name = _NAME_RE.match(text, i + 1).group()
            new_state = MarkupState(mode=LexMode.TAG, tag_name=self._normalize_name(name))
            return i + 1 + len(name), TokenCategory.TAG, new_state
        if char == "&":
            match = _ENTITY_RE.match(text, i)
            if match:
                return match.end(), TokenCategory.ENTITY, state
            return i + 1, TokenCategory.TEXT, state
        return _TEXT_RE.match(text, i).end(), TokenCategory.TEXT, state

    @staticmethod
    def _scan_comment(
        text: str, i: int
    ) -> Tuple[int, Optional[TokenCategory], MarkupState]:
        close = text.find("-->", i)
        if close == -1:
            return len(text), TokenCategory.COMMENT, MarkupState(mode=LexMode.COMMENT)
        return close + 3, TokenCategory.COMMENT, MarkupState()

    @staticmethod
    def _scan_string(
        text: str, i: int, state: MarkupState, quote: str, search_from: int
    ) -> Tuple[int, Optional[TokenCategory], MarkupState]:
        close = text.find(quote, search_from)
        if close == -1:
            # Unterminated; the value continues on the next line
            return len(text), TokenCategory.STRING, replace(
                state, mode=LexMode.STRING, quote=quote
            )
        return close + 1, TokenCategory.STRING, replace(state, mode=LexMode.TAG, quote=None)

    def _scan_raw_text(
        self, text: str, i: int, state: MarkupState
    ) -> Tuple[int, Optional[TokenCategory], MarkupState]:
        close = text.lower().find("</" + (state.raw_text_tag or ""), i)
        if close == i:
            return i, None, MarkupState()
        if close == -1:
            return len(text), TokenCategory.TEXT, state
        return close, TokenCategory.TEXT, state

    def _scan_tag(
        self, text: str, i: int, state: MarkupState
    ) -> Tuple[int, Optional[TokenCategory], MarkupState]:
        char = text[i]
        if char.isspace():
            return _WHITESPACE_RE.match(text, i).end(), TokenCategory.TEXT, state
        if text.startswith("/>", i):
            return i + 2, TokenCategory.TAG, MarkupState()
        if char == ">":
            return i + 1, TokenCategory.TAG, self._close_tag(state)
        if char == "<":
            # A new tag starts before this one was closed
            self.logger.debug(
                "Unclosed tag abandoned",
                extra={
                    "tag_name": state.tag_name,
                    "column": i,
                }
            )
            return i, None, MarkupState()
        if char in "\"'":
            return self._scan_string(text, i, state, char, i + 1)
        if char == "=":
            return i + 1, TokenCategory.TEXT, replace(state, mode=LexMode.AFTER_EQUALS)
        if state.mode is LexMode.AFTER_EQUALS:
            end = _UNQUOTED_VALUE_RE.match(text, i).end()
            return end, TokenCategory.STRING, replace(state, mode=LexMode.TAG)
        match = _ATTR_NAME_RE.match(text, i)
        if match:
            return match.end(), TokenCategory.ATTRIBUTE, state
        # Stray "/" inside a tag
        return i + 1, TokenCategory.TEXT, state

    def _close_tag(self, state: MarkupState) -> MarkupState:
        tag_name = (state.tag_name or "").lower()
        if self.nested and not state.closing and tag_name in self.config.raw_text_tags:
            return MarkupState(mode=LexMode.RAW_TEXT, raw_text_tag=tag_name)
        return MarkupState()
