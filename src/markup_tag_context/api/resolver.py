"""Resolver API with progressive disclosure for tag context queries.

Level 1 is a set of module functions taking a document (or plain text) and a
cursor position. Level 2 is ``ContextResolver``, which carries a configuration
and can report diagnostics and navigation metrics alongside each result.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from markup_tag_context.context import NavigationContext, TagContext, classify, make_tag_context
from markup_tag_context.shared import (
    ContextConfig,
    DiagnosticEntry,
    DiagnosticSeverity,
    MarkupDialect,
    NavigationMetrics,
    TokenizerConfig,
    filter_diagnostics,
    get_logger,
)
from markup_tag_context.tokenization import MarkupDocument, Position, TokenSource

MS_PER_SECOND = 1000


@dataclass
class ResolutionResult:
    """A resolved context together with what it cost and what was noticed."""

    context: TagContext
    position: Position
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    metrics: NavigationMetrics = field(default_factory=NavigationMetrics)
    correlation_id: Optional[str] = None

    @property
    def success(self) -> bool:
        """False only if the token source itself failed during the query."""
        return not any(d.severity is DiagnosticSeverity.ERROR for d in self.diagnostics)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "context": self.context.to_dict(),
            "position": self.position.to_dict(),
            "success": self.success,
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "metrics": self.metrics.to_dict(),
            "correlation_id": self.correlation_id,
        }


class ContextResolver:
    """Configured entry point for tag context queries.

    Holds no per-query state; one instance can serve every query of an editor
    session, including overlapping ones.

    Examples:
        >>> resolver = ContextResolver()
        >>> resolver.resolve_text('<div class="box">', 0, 13).attribute.value
        'box'
    """

    def __init__(
        self,
        config: Optional[ContextConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or ContextConfig()
        self.correlation_id = correlation_id or self.config.correlation_id
        self.logger = get_logger(__name__, self.correlation_id, "context_resolver")

    def document(self, text: str) -> MarkupDocument:
        """Tokenize ``text`` with this resolver's tokenizer configuration."""
        return MarkupDocument(text, self.config.tokenizer, self.correlation_id)

    def resolve(
        self, source: TokenSource, position: Optional[Position] = None
    ) -> TagContext:
        """Resolve the context at ``position``, or at the document cursor."""
        return self.resolve_with_report(source, position).context

    def resolve_text(self, text: str, line: int, column: int) -> TagContext:
        """Tokenize ``text`` and resolve the context at ``line``/``column``."""
        return self.resolve(self.document(text), Position(line, column))

    def resolve_offset(self, text: str, offset: int) -> TagContext:
        """Tokenize ``text`` and resolve the context at a character offset."""
        document = self.document(text)
        return self.resolve(document, document.offset_to_position(offset))

    def resolve_with_report(
        self, source: TokenSource, position: Optional[Position] = None
    ) -> ResolutionResult:
        """Resolve the context and report diagnostics and navigation metrics.

        Args:
            source: Tokenized document
            position: Cursor position; defaults to the source's ``cursor``

        Returns:
            ResolutionResult whose context is empty if the source failed
        """
        if position is None:
            position = getattr(source, "cursor", None)
            if position is None:
                raise ValueError("position is required for sources without a cursor")

        start_time = time.time()
        ctx: Optional[NavigationContext] = None
        diagnostics: List[DiagnosticEntry] = []
        try:
            ctx = NavigationContext(
                source,
                position,
                self.logger.for_component("token_cursor"),
                log_navigation=self.config.resolver.log_navigation,
            )
            context = classify(ctx)
            diagnostics.extend(ctx.diagnostics)
        except Exception as e:
            self.logger.exception(
                "Token source failed during context resolution",
                extra={"line": position.line, "column": position.column}
            )
            context = make_tag_context()
            diagnostics.append(DiagnosticEntry(
                severity=DiagnosticSeverity.ERROR,
                message=f"Token source failed: {e}",
                component="context_resolver",
                position=position.to_dict(),
                correlation_id=self.correlation_id,
            ))

        processing_time = (time.time() - start_time) * MS_PER_SECOND
        metrics = NavigationMetrics(
            token_hops=ctx.hops if ctx is not None else 0,
            lines_crossed=ctx.lines_crossed if ctx is not None else 0,
            processing_time_ms=processing_time,
        )

        resolver_config = self.config.resolver
        if resolver_config.enable_diagnostics:
            diagnostics = filter_diagnostics(
                diagnostics, DiagnosticSeverity[resolver_config.diagnostic_level]
            )
        else:
            diagnostics = [d for d in diagnostics if d.severity is DiagnosticSeverity.ERROR]

        self.logger.debug(
            "Context resolved",
            extra={
                "line": position.line,
                "column": position.column,
                "tag_name": context.tag_name,
                "attribute_name": context.attribute.name,
                "specificity": context.specificity,
                "token_hops": metrics.token_hops,
                "processing_time_ms": processing_time,
            }
        )

        return ResolutionResult(
            context=context,
            position=position,
            diagnostics=diagnostics,
            metrics=metrics,
            correlation_id=self.correlation_id,
        )


def resolve_text(
    text: str,
    line: int,
    column: int,
    dialect: Union[MarkupDialect, str] = MarkupDialect.HTML,
    correlation_id: Optional[str] = None
) -> TagContext:
    """Resolve the tag context in a markup string.

    Examples:
        >>> resolve_text('<div class="bo', 0, 14).attribute.value
        'bo'
        >>> resolve_text('<span id="x">', 0, 3).tag_name
        'span'
    """
    config = ContextConfig(tokenizer=TokenizerConfig(dialect=dialect))
    return ContextResolver(config, correlation_id).resolve_text(text, line, column)
