"""Ordering validator shared by the declaration and match checkers.

Keys are compared with plain ``str`` ordering (codepoint order, case
sensitive). A sequence is valid when it is non-decreasing; equal keys are
accepted. On the first key that is less than its predecessor the validator
locates, by binary search over the keys accepted so far, the key the new one
should have been placed before, and phrases the diagnostic around it.
For keys ``Bar, Foo, Baz`` that is "Baz should sort before Foo".

Checking stops at the first violation.
"""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Iterable, Sequence

from sortcheck.core.types import Diagnostic, DiagnosticKind, NamedCase


def insertion_point(keys: Sequence[str], key: str) -> int:
    """Find where ``key`` belongs in the sorted ``keys``.

    Returns the index of the first key strictly greater than ``key``. For a
    key that is not already present this is also the first key not less
    than it; for a duplicate it skips past the equal keys so the neighbor
    named in the diagnostic is never the key itself.

    Args:
        keys: Keys accepted so far, in non-decreasing order.
        key: The key that failed the ordering check.

    Returns:
        Index into ``keys``.

    Examples:
        >>> insertion_point(["A", "C", "D"], "B")
        1
        >>> insertion_point(["A", "B", "C"], "A")
        1

    """
    return bisect_right(keys, key)


def render_violation(case: NamedCase, neighbor: NamedCase) -> str:
    """Render the "X should sort before Y" message.

    Qualified cases name the offending case's qualifier on both sides.
    """
    return f"{case.display()} should sort before {case.display(neighbor.name)}"


class OrderingValidator:
    """Incremental non-decreasing order check over a case sequence.

    Attributes:
        diagnostic: The violation found so far, if any.

    Example:
        >>> validator = OrderingValidator()
        >>> validator.push(NamedCase("Foo", Location(1, 0))) is None
        True
        >>> validator.push(NamedCase("Bar", Location(2, 0))).message
        'Bar should sort before Foo'

    """

    def __init__(self) -> None:
        """Initialize an empty validator."""
        self._keys: list[str] = []
        self._cases: list[NamedCase] = []
        self.diagnostic: Diagnostic | None = None

    def __repr__(self) -> str:
        """Return string representation."""
        state = "failed" if self.diagnostic else "ok"
        return f"OrderingValidator(accepted={len(self._keys)}, {state})"

    @property
    def accepted(self) -> list[str]:
        """Keys accepted so far, in order."""
        return list(self._keys)

    def push(self, case: NamedCase) -> Diagnostic | None:
        """Append a case and check it against the last accepted key.

        Once a violation is found the validator stays failed and keeps
        returning the same diagnostic without looking at further cases.

        Args:
            case: Next case in source order.

        Returns:
            The violation, or None if the case was accepted.

        """
        if self.diagnostic is not None:
            return self.diagnostic

        if self._keys and case.name < self._keys[-1]:
            neighbor = self._cases[insertion_point(self._keys, case.name)]
            self.diagnostic = Diagnostic(
                kind=DiagnosticKind.ORDERING,
                message=render_violation(case, neighbor),
                location=case.location,
                case=case,
                neighbor=neighbor,
            )
            return self.diagnostic

        self._keys.append(case.name)
        self._cases.append(case)
        return None

    def validate(self, cases: Iterable[NamedCase]) -> Diagnostic | None:
        """Push every case in order, stopping at the first violation.

        Args:
            cases: Case sequence in source order.

        Returns:
            The first violation, or None if the sequence is non-decreasing.

        """
        for case in cases:
            diagnostic = self.push(case)
            if diagnostic is not None:
                return diagnostic
        return None
