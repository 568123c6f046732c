"""Match checker: flagged match statements must list their arms in sorted order.

Only direct statements of the function body are considered, and only the
first flagged one is checked. Whatever the outcome, the returned function
has the flag cleared on every match statement so the caller can emit it
unchanged otherwise.
"""

from __future__ import annotations

from collections.abc import Sequence

from sortcheck.checkers.declaration import ensure_no_args
from sortcheck.core.ordering import OrderingValidator
from sortcheck.core.tree import (
    FunctionDecl,
    Item,
    MatchStmt,
    UnsupportedPattern,
    find_flagged_match,
)
from sortcheck.core.types import CheckResult, Diagnostic, DiagnosticKind

UNSUPPORTED_MESSAGE = "unsupported by @sorted"
FUNCTION_EXPECTED_MESSAGE = "expected function definition"


def check_arms(stmt: MatchStmt) -> Diagnostic | None:
    """Validate the arm order of one match statement.

    Args:
        stmt: The match statement to check.

    Returns:
        The first ordering or unsupported-pattern diagnostic, or None.

    """
    validator = OrderingValidator()
    for key in stmt.extract_keys():
        if isinstance(key, UnsupportedPattern):
            return Diagnostic(
                kind=DiagnosticKind.UNSUPPORTED_PATTERN,
                message=UNSUPPORTED_MESSAGE,
                location=key.location,
            )
        diagnostic = validator.push(key)
        if diagnostic is not None:
            return diagnostic
    return None


def check_function(fn: Item, args: Sequence[str] | str | None = ()) -> CheckResult[Item]:
    """Check the first flagged match statement in a function body.

    Args:
        fn: Function whose direct body statements are scanned. Any other
            item is rejected with an inapplicable-construct diagnostic.
        args: Checker arguments; must be empty.

    Returns:
        CheckResult whose tree is ``fn`` with every marker flag stripped,
        plus the diagnostic if the flagged match is out of order.

    Raises:
        UsageError: If ``args`` is not empty.

    """
    ensure_no_args(args)

    if not isinstance(fn, FunctionDecl):
        return CheckResult(
            tree=fn,
            diagnostic=Diagnostic(
                kind=DiagnosticKind.INAPPLICABLE_CONSTRUCT,
                message=FUNCTION_EXPECTED_MESSAGE,
                location=fn.location,
            ),
        )

    flagged = find_flagged_match(fn)
    diagnostic = check_arms(flagged) if flagged is not None else None
    return CheckResult(tree=fn.strip_markers(), diagnostic=diagnostic)
