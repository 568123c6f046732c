"""Pytest configuration and fixtures for sortcheck tests."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from sortcheck.core.tree import (
    FunctionDecl,
    IdentPattern,
    MatchArm,
    MatchStmt,
    OtherStmt,
    PathPattern,
    Pattern,
    WildcardPattern,
)
from sortcheck.core.types import Location


def _pattern_from_spelling(spelling: str, line: int) -> Pattern:
    """Turn "A", "B.C" or "_" into the matching pattern value."""
    if spelling == "_":
        return WildcardPattern(Location(line, 9))
    if "." in spelling:
        segments = tuple(spelling.split("."))
        key_column = 9 + len(spelling) - len(segments[-1])
        return PathPattern(segments, Location(line, 9), Location(line, key_column))
    return IdentPattern(spelling, Location(line, 9))


@pytest.fixture
def make_match() -> Callable[..., MatchStmt]:
    """Factory for a match statement from pattern spellings or values.

    Usage:
        def test_something(make_match):
            stmt = make_match("A", "B.C", "_", sorted=True)
    """

    def _make(*patterns: str | Pattern, sorted: bool = False, line: int = 2) -> MatchStmt:
        arms = []
        for offset, pattern in enumerate(patterns, start=1):
            arm_line = line + offset
            if isinstance(pattern, str):
                pattern = _pattern_from_spelling(pattern, arm_line)
            arms.append(MatchArm(pattern, Location(arm_line, 9)))
        return MatchStmt(tuple(arms), Location(line, 4), sorted=sorted)

    return _make


@pytest.fixture
def make_function() -> Callable[..., FunctionDecl]:
    """Factory for a function whose body holds the given statements."""

    def _make(*body: MatchStmt | OtherStmt, name: str = "handle") -> FunctionDecl:
        return FunctionDecl(name, tuple(body), Location(1, 0))

    return _make
