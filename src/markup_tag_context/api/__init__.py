"""Public API for tag context resolution with progressive disclosure.

Level 1: ``resolve_context``, ``resolve_text`` and ``make_tag_context``.
Level 2: ``ContextResolver`` with configuration and diagnostic reports.
"""

from markup_tag_context.context import make_tag_context, resolve_context

from .resolver import ContextResolver, ResolutionResult, resolve_text

__all__ = [
    "ContextResolver",
    "ResolutionResult",
    "make_tag_context",
    "resolve_context",
    "resolve_text",
]
