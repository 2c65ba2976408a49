"""Tests for the MarkupDocument text buffer."""

import pytest

from markup_tag_context.shared.config import MarkupDialect, TokenizerConfig
from markup_tag_context.tokenization import (
    MarkupDocument,
    MarkupState,
    NestedMarkupState,
    Position,
    TokenCategory,
    TokenSource,
)


@pytest.fixture
def document():
    """Two-line html document."""
    return MarkupDocument('<div class="box">\n  <p>text</p>')


class TestDocumentBasics:
    """Tests for line access."""

    def test_implements_token_source(self, document):
        """Test the document satisfies the TokenSource protocol."""
        assert isinstance(document, TokenSource)

    def test_lines(self, document):
        """Test line count and line text."""
        assert document.get_line_count() == 2
        assert document.get_line_text(0) == '<div class="box">'
        assert document.get_line_text(1) == "  <p>text</p>"
        assert document.lines == ['<div class="box">', "  <p>text</p>"]

    def test_line_text_past_end_is_empty(self, document):
        """Test line indexes past the end have no text."""
        assert document.get_line_text(2) == ""
        assert document.get_line_text(10) == ""

    def test_line_endings_normalized(self):
        """Test CRLF and CR line endings."""
        doc = MarkupDocument("<a>\r\n<b>\r<c>")
        assert doc.lines == ["<a>", "<b>", "<c>"]
        assert doc.text == "<a>\n<b>\n<c>"

    def test_empty_document(self):
        """Test an empty document has one empty line."""
        doc = MarkupDocument("")
        assert doc.get_line_count() == 1
        assert doc.line_tokens(0) == []
        assert doc.get_token_at(Position(0, 0)).text == ""

    def test_line_tokens_out_of_range(self, document):
        """Test line_tokens rejects unknown lines."""
        with pytest.raises(IndexError):
            document.line_tokens(2)

    def test_dialect_controls_state_shape(self):
        """Test the configured dialect reaches the tokens."""
        xml = MarkupDocument("<a>", TokenizerConfig(dialect=MarkupDialect.XML))
        html = MarkupDocument("<a>", TokenizerConfig(dialect=MarkupDialect.HTML))

        assert isinstance(xml.line_tokens(0)[0].state, MarkupState)
        assert isinstance(html.line_tokens(0)[0].state, NestedMarkupState)


class TestGetTokenAt:
    """Tests for the editor-style token lookup."""

    def test_column_inside_token(self, document):
        """Test a column strictly inside a token."""
        token = document.get_token_at(Position(0, 13))
        assert token.text == '"box"'
        assert (token.start, token.end) == (11, 16)

    def test_column_at_token_boundary_returns_token_before(self, document):
        """Test that a boundary column belongs to the token ending there."""
        assert document.get_token_at(Position(0, 4)).text == "<div"
        assert document.get_token_at(Position(0, 5)).text == " "
        assert document.get_token_at(Position(0, 11)).text == "="

    def test_column_zero_returns_empty_token(self, document):
        """Test column 0 yields an empty token with the line start state."""
        token = document.get_token_at(Position(1, 0))
        assert token.text == ""
        assert (token.start, token.end) == (0, 0)
        assert token.category is TokenCategory.TEXT
        assert token.state == NestedMarkupState(html_state=MarkupState())

    def test_column_past_line_end_clips(self, document):
        """Test a column past the end reads the last token of the line."""
        assert document.get_token_at(Position(0, 99)).text == ">"

    def test_line_past_end_returns_empty_token(self, document):
        """Test a line past the end yields an empty token, not the last one."""
        for position in (Position(2, 0), Position(5, 3)):
            token = document.get_token_at(position)
            assert token.text == ""
            assert (token.start, token.end) == (0, 0)
            assert token.state == NestedMarkupState(html_state=MarkupState())

    def test_line_past_end_carries_end_state(self):
        """Test the empty token past the end keeps an unclosed tag's state."""
        token = MarkupDocument("<div class=").get_token_at(Position(1, 0))

        assert token.text == ""
        assert token.state.html_state.tag_name == "div"

    def test_lookup_does_not_modify_document(self, document):
        """Test that lookups are pure queries."""
        before = [document.line_tokens(i) for i in range(2)]
        document.get_token_at(Position(0, 7))
        document.get_token_at(Position(9, 9))
        assert [document.line_tokens(i) for i in range(2)] == before
        assert document.cursor == Position(0, 0)


class TestPositions:
    """Tests for cursor handling and offset conversion."""

    def test_offset_to_position(self, document):
        """Test converting character offsets."""
        assert document.offset_to_position(0) == Position(0, 0)
        assert document.offset_to_position(17) == Position(0, 17)
        assert document.offset_to_position(18) == Position(1, 0)
        assert document.offset_to_position(22) == Position(1, 4)
        assert document.offset_to_position(999) == Position(1, 13)

    def test_negative_offset_rejected(self, document):
        """Test negative offsets raise."""
        with pytest.raises(ValueError, match="Offset must be >= 0"):
            document.offset_to_position(-1)

    def test_position_to_offset(self, document):
        """Test converting positions back to offsets."""
        assert document.position_to_offset(Position(0, 0)) == 0
        assert document.position_to_offset(Position(1, 4)) == 22
        assert document.position_to_offset(Position(0, 99)) == 17

    def test_set_cursor_clips(self, document):
        """Test the cursor is kept inside the document."""
        document.set_cursor(Position(0, 50))
        assert document.cursor == Position(0, 17)

    def test_from_marked_text(self):
        """Test building a document from text with a cursor marker."""
        doc = MarkupDocument.from_marked_text('<div class="bo|')
        assert doc.text == '<div class="bo'
        assert doc.cursor == Position(0, 14)

    def test_from_marked_text_multiline(self):
        """Test the marker on a later line."""
        doc = MarkupDocument.from_marked_text("<ul>\r\n  <li cl#ass>", marker="#")
        assert doc.lines == ["<ul>", "  <li class>"]
        assert doc.cursor == Position(1, 8)

    def test_from_marked_text_requires_marker(self):
        """Test a missing marker is an error."""
        with pytest.raises(ValueError, match="not found"):
            MarkupDocument.from_marked_text("<div>")
