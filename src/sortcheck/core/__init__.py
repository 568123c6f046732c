"""Core types, abstract tree and ordering validator.

Nothing in this subpackage reads files, prints, or logs.
"""

from sortcheck.core.exceptions import (
    ConfigError,
    SortCheckError,
    SourceParseError,
    UsageError,
)
from sortcheck.core.ordering import OrderingValidator, insertion_point
from sortcheck.core.types import (
    CheckResult,
    Diagnostic,
    DiagnosticKind,
    Location,
    NamedCase,
)

__all__ = [
    # exceptions
    "ConfigError",
    "SortCheckError",
    "SourceParseError",
    "UsageError",
    # ordering
    "OrderingValidator",
    "insertion_point",
    # types
    "CheckResult",
    "Diagnostic",
    "DiagnosticKind",
    "Location",
    "NamedCase",
]
