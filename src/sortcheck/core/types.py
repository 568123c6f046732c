"""Core value types shared by the checkers.

All values are immutable and scoped to a single checker invocation.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Location:
    """Source location handle for diagnostics.

    Attributes:
        line: 1-based line number.
        column: 0-based column offset.

    """

    line: int
    column: int

    def __str__(self) -> str:
        """Return 'line:column' as printed in reports."""
        return f"{self.line}:{self.column}"


@dataclass(frozen=True, slots=True)
class NamedCase:
    """A single comparison unit: the sort key plus where it came from.

    Attributes:
        name: The comparison key.
        location: Where the key appears in the source.
        qualifier: Dotted prefix of a qualified path pattern, used only to
            phrase diagnostics (e.g. "Shape" for ``Shape.Circle()``).

    """

    name: str
    location: Location
    qualifier: str | None = None

    def display(self, name: str | None = None) -> str:
        """Render a key the way diagnostics show it.

        Args:
            name: Key to render with this case's qualifier. Defaults to
                this case's own name.

        Returns:
            ``qualifier.name`` when qualified, otherwise the bare name.

        """
        key = self.name if name is None else name
        if self.qualifier:
            return f"{self.qualifier}.{key}"
        return key


class DiagnosticKind(str, Enum):
    """Kinds of diagnostics a check can produce."""

    ORDERING = "ordering"
    UNSUPPORTED_PATTERN = "unsupported_pattern"
    INAPPLICABLE_CONSTRUCT = "inapplicable_construct"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured check failure anchored at a source location.

    Attributes:
        kind: What went wrong.
        message: Rendered, human-readable message.
        location: Where the diagnostic should be reported.
        case: The offending case for ordering violations.
        neighbor: The accepted case the offending one should precede.

    """

    kind: DiagnosticKind
    message: str
    location: Location
    case: NamedCase | None = None
    neighbor: NamedCase | None = None

    def __str__(self) -> str:
        """Return 'line:column: message'."""
        return f"{self.location}: {self.message}"


@dataclass(frozen=True, slots=True)
class CheckResult(Generic[T]):
    """Outcome of one checker invocation.

    Attributes:
        tree: The construct to emit (rewritten for the match checker).
        diagnostic: The single diagnostic, or None when the check passed.

    """

    tree: T
    diagnostic: Diagnostic | None = None

    @property
    def ok(self) -> bool:
        """True when no diagnostic was produced."""
        return self.diagnostic is None


def serialize_diagnostic(diagnostic: Diagnostic) -> dict[str, Any]:
    """Serialize Diagnostic to a dictionary."""
    return {
        "kind": diagnostic.kind.value,
        "message": diagnostic.message,
        "line": diagnostic.location.line,
        "column": diagnostic.location.column,
        "case": diagnostic.case.name if diagnostic.case else None,
        "neighbor": diagnostic.neighbor.name if diagnostic.neighbor else None,
    }
