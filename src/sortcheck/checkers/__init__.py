"""Entry points: the declaration checker and the match checker.

Example usage:
    >>> from sortcheck.checkers import check_declaration, check_function
    >>> result = check_declaration(enum_decl)
    >>> if not result.ok:
    ...     print(result.diagnostic)

"""

from .declaration import INAPPLICABLE_MESSAGE, check_declaration, ensure_no_args
from .match import FUNCTION_EXPECTED_MESSAGE, UNSUPPORTED_MESSAGE, check_arms, check_function

__all__ = [
    # declaration
    "INAPPLICABLE_MESSAGE",
    "check_declaration",
    "ensure_no_args",
    # match
    "FUNCTION_EXPECTED_MESSAGE",
    "UNSUPPORTED_MESSAGE",
    "check_arms",
    "check_function",
]
