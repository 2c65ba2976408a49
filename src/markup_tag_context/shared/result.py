"""Diagnostic and metric types shared by the resolver layers.

Context resolution never fails towards its caller; anything worth reporting
about a query (a cursor that disagrees with its token, an unrecognized lexer
state) is recorded as a ``DiagnosticEntry`` next to the result instead.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()      # Navigation trace information
    INFO = auto()       # Informational messages
    WARNING = auto()    # Internal inconsistencies that were tolerated
    ERROR = auto()      # Conditions that forced a less specific result


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    position: Optional[Dict[str, int]] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "severity": self.severity.name,
            "message": self.message,
            "component": self.component,
            "position": self.position,
            "details": self.details,
            "correlation_id": self.correlation_id,
        }


@dataclass
class NavigationMetrics:
    """Cost of a single context query."""

    token_hops: int = 0
    lines_crossed: int = 0
    processing_time_ms: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "token_hops": self.token_hops,
            "lines_crossed": self.lines_crossed,
            "processing_time_ms": self.processing_time_ms,
        }


def filter_diagnostics(
    diagnostics: List[DiagnosticEntry],
    minimum: DiagnosticSeverity
) -> List[DiagnosticEntry]:
    """Keep only diagnostics at or above ``minimum`` severity."""
    return [d for d in diagnostics if d.severity.value >= minimum.value]
