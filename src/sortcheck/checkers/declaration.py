"""Declaration checker: enum members must be declared in sorted order."""

from __future__ import annotations

from collections.abc import Sequence

from sortcheck.core.exceptions import UsageError
from sortcheck.core.ordering import OrderingValidator
from sortcheck.core.tree import EnumDecl, Item
from sortcheck.core.types import CheckResult, Diagnostic, DiagnosticKind

INAPPLICABLE_MESSAGE = "expected enum or match expression"


def ensure_no_args(args: Sequence[str] | str | None) -> None:
    """Reject a non-empty checker argument list.

    Args:
        args: Arguments given to the checker. None, "" and () are empty.

    Raises:
        UsageError: If any argument was supplied.

    """
    if not args:
        return
    text = args if isinstance(args, str) else ", ".join(args)
    raise UsageError(f"@sorted takes no arguments, got: {text}", args_text=text)


def check_declaration(item: Item, args: Sequence[str] | str | None = ()) -> CheckResult[Item]:
    """Check that an enum declares its members in sorted order.

    The declaration is never rewritten; it is returned as given.

    Args:
        item: The marked item. Anything but an EnumDecl is rejected.
        args: Checker arguments; must be empty.

    Returns:
        CheckResult with the unchanged item and at most one diagnostic.

    Raises:
        UsageError: If ``args`` is not empty.

    """
    ensure_no_args(args)

    if not isinstance(item, EnumDecl):
        return CheckResult(
            tree=item,
            diagnostic=Diagnostic(
                kind=DiagnosticKind.INAPPLICABLE_CONSTRUCT,
                message=INAPPLICABLE_MESSAGE,
                location=item.location,
            ),
        )

    diagnostic = OrderingValidator().validate(item.extract_keys())
    return CheckResult(tree=item, diagnostic=diagnostic)
