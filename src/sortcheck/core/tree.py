"""Abstract tree consumed by the checkers.

The source adapter (``sortcheck.source``) builds these values from Python
source; tests build them by hand. Checkers only ever see this module's
types, never ``ast`` nodes or raw text.

Pattern kinds form a closed union:

- ``IdentPattern``: capture name, ``case Foo:``
- ``PathPattern``: dotted value or class pattern, ``case Shape.Circle(...)``
- ``WildcardPattern``: ``case _:``
- ``UnsupportedPattern``: everything else, kept for the diagnostic
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field, replace
from typing import Protocol, TypeAlias

from sortcheck.core.types import Location, NamedCase

WILDCARD_KEY = "_"


class CheckableSequence(Protocol):
    """Anything that can be projected down to an ordered run of sort keys."""

    def extract_keys(self) -> Iterator[NamedCase | UnsupportedPattern]:
        """Yield comparison keys in source order."""
        ...


# =============================================================================
# Enum declarations
# =============================================================================


@dataclass(frozen=True, slots=True)
class Variant:
    """A declared enum member. Its value is irrelevant to ordering."""

    name: str
    location: Location


@dataclass(frozen=True, slots=True)
class EnumDecl:
    """An enumerated type declaration.

    Attributes:
        name: Class name.
        variants: Members in declaration order.
        location: Location of the class statement.

    """

    name: str
    variants: tuple[Variant, ...]
    location: Location

    def extract_keys(self) -> Iterator[NamedCase]:
        """Yield one case per variant, keyed by its identifier."""
        for variant in self.variants:
            yield NamedCase(variant.name, variant.location)


# =============================================================================
# Match patterns
# =============================================================================


@dataclass(frozen=True, slots=True)
class IdentPattern:
    """Plain identifier pattern (unit case or simple binding)."""

    name: str
    location: Location


@dataclass(frozen=True, slots=True)
class PathPattern:
    """Qualified path pattern such as ``Color.RED`` or ``Shape.Circle(r)``.

    Attributes:
        segments: Dotted name split into identifiers, at least one.
        location: Location of the whole pattern.
        key_location: Location of the final segment.

    """

    segments: tuple[str, ...]
    location: Location
    key_location: Location

    @property
    def qualifier(self) -> str | None:
        """Dotted prefix before the final segment, or None for one segment."""
        if len(self.segments) < 2:
            return None
        return ".".join(self.segments[:-1])


@dataclass(frozen=True, slots=True)
class WildcardPattern:
    """Catch-all ``_`` pattern, located at the underscore."""

    location: Location


@dataclass(frozen=True, slots=True)
class UnsupportedPattern:
    """Any pattern kind the checker does not order.

    Attributes:
        kind: Short description, e.g. "literal" or "guard".
        text: Source text of the pattern when available.
        location: Location of the pattern.

    """

    kind: str
    text: str
    location: Location


Pattern: TypeAlias = IdentPattern | PathPattern | WildcardPattern | UnsupportedPattern


def arm_key(pattern: Pattern) -> NamedCase | UnsupportedPattern:
    """Project a match arm's pattern down to its comparison key.

    Args:
        pattern: Classified pattern of one arm.

    Returns:
        The NamedCase to order, or the pattern itself when unsupported.

    Examples:
        >>> arm_key(WildcardPattern(Location(3, 9))).name
        '_'

    """
    if isinstance(pattern, PathPattern):
        return NamedCase(pattern.segments[-1], pattern.key_location, pattern.qualifier)
    if isinstance(pattern, IdentPattern):
        return NamedCase(pattern.name, pattern.location)
    if isinstance(pattern, WildcardPattern):
        # "_" sorts after uppercase letters and before lowercase ones
        return NamedCase(WILDCARD_KEY, pattern.location)
    return pattern


# =============================================================================
# Functions and match statements
# =============================================================================


@dataclass(frozen=True, slots=True)
class MatchArm:
    """One ``case`` clause."""

    pattern: Pattern
    location: Location


@dataclass(frozen=True, slots=True)
class MatchStmt:
    """A match statement.

    Attributes:
        arms: Case clauses in source order.
        location: Location of the ``match`` keyword.
        sorted: Marker flag; True when the author asked for an order check.

    """

    arms: tuple[MatchArm, ...]
    location: Location
    sorted: bool = False

    def extract_keys(self) -> Iterator[NamedCase | UnsupportedPattern]:
        """Lazily yield arm keys in source order.

        Callers stop at the first UnsupportedPattern, so later arms are
        never projected.
        """
        for arm in self.arms:
            yield arm_key(arm.pattern)

    def without_marker(self) -> MatchStmt:
        """Return this statement with the marker flag cleared."""
        if not self.sorted:
            return self
        return replace(self, sorted=False)


@dataclass(frozen=True, slots=True)
class OtherStmt:
    """Any direct body statement that is not a match statement."""

    location: Location


Statement: TypeAlias = MatchStmt | OtherStmt


@dataclass(frozen=True, slots=True)
class FunctionDecl:
    """A function whose direct body statements may be match statements.

    Attributes:
        name: Function name.
        body: Direct statements only; nested blocks are not represented.
        location: Location of the ``def`` statement.

    """

    name: str
    body: tuple[Statement, ...] = field(default_factory=tuple)
    location: Location = field(default_factory=lambda: Location(1, 0))

    def strip_markers(self) -> FunctionDecl:
        """Return a copy with the marker flag cleared on every match statement."""
        body = tuple(
            stmt.without_marker() if isinstance(stmt, MatchStmt) else stmt for stmt in self.body
        )
        return replace(self, body=body)


@dataclass(frozen=True, slots=True)
class OtherItem:
    """A marked statement that is neither an enum nor a function.

    Attributes:
        kind: What the statement is, e.g. "class" or "assignment".
        name: Its name when it has one.
        location: Location of the statement.

    """

    kind: str
    name: str | None
    location: Location


Item: TypeAlias = EnumDecl | FunctionDecl | OtherItem


def find_flagged_match(fn: FunctionDecl) -> MatchStmt | None:
    """Return the first direct match statement carrying the marker flag.

    Only ``fn.body`` is scanned; matches nested in other statements are
    not represented and so never found.
    """
    for stmt in fn.body:
        if isinstance(stmt, MatchStmt) and stmt.sorted:
            return stmt
    return None
