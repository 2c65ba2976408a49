"""Token cursor used while resolving a single context query.

A ``NavigationContext`` pairs a position with the token covering it and walks
the token stream one token at a time, crossing line boundaries when needed.
It lives for exactly one query and is never shared.
"""

from typing import Any, Dict, List, Optional

from markup_tag_context.shared.logging import CorrelationLogger, get_logger
from markup_tag_context.shared.result import DiagnosticEntry, DiagnosticSeverity
from markup_tag_context.tokenization import Position, Token, TokenSource


class NavigationContext:
    """Current position and token of a context query.

    ``position`` only changes through ``move_to``, which re-fetches ``token``
    from the source, so the two always agree.
    """

    def __init__(
        self,
        source: TokenSource,
        position: Position,
        logger: Optional[CorrelationLogger] = None,
        log_navigation: bool = False
    ) -> None:
        self.source = source
        self.logger = logger or get_logger(__name__, component="token_cursor")
        self.log_navigation = log_navigation
        self.hops = 0
        self.lines_crossed = 0
        self.diagnostics: List[DiagnosticEntry] = []
        self._position = position
        self._token = source.get_token_at(position)

    @property
    def position(self) -> Position:
        return self._position

    @property
    def token(self) -> Token:
        return self._token

    def move_to(self, position: Position) -> None:
        """Reposition the cursor and fetch the token covering the new position."""
        self._position = position
        self._token = self.source.get_token_at(position)

    def move_to_previous_token(self) -> bool:
        """Step back by one token.

        Within a line the cursor jumps to the start of the current token, which
        makes the token before it current. From the start of a line it moves to
        the end of the previous line.

        Returns:
            False if already on the first line with nothing before the cursor
        """
        position = self._position
        if position.column <= 0 or self._token.start <= 0:
            if position.line <= 0:
                return False
            line = position.line - 1
            target = Position(line, len(self.source.get_line_text(line)))
            self.lines_crossed += 1
        else:
            target = Position(position.line, self._token.start)

        self.move_to(target)
        self.hops += 1
        self._trace("previous")
        return True

    def move_to_next_token(self) -> bool:
        """Step forward by one token.

        Within a line the cursor jumps one past the end of the current token.
        From the end of a line it moves to the start of the next one.

        Returns:
            False once the line index has reached the line count
        """
        position = self._position
        eol = len(self.source.get_line_text(position.line))
        if position.column >= eol or self._token.end >= eol:
            # Compared against the line count, not the last line index
            if position.line == self.source.get_line_count():
                return False
            target = Position(position.line + 1, 0)
            self.lines_crossed += 1
        else:
            target = Position(position.line, self._token.end + 1)

        self.move_to(target)
        self.hops += 1
        self._trace("next")
        return True

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Record a diagnostic about this query at the current position."""
        self.diagnostics.append(DiagnosticEntry(
            severity=severity,
            message=message,
            component=component,
            position=self._position.to_dict(),
            details=details,
            correlation_id=self.logger.correlation_id,
        ))

    def _trace(self, direction: str) -> None:
        if not (self.log_navigation and self.logger.is_debug_enabled()):
            return
        self.logger.debug(
            f"Moved to {direction} token",
            extra={
                "line": self._position.line,
                "column": self._position.column,
                "token": self._token.text,
                "category": self._token.category.value,
                "hops": self.hops,
            }
        )
